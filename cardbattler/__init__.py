"""CardBattler: prompt-generated cards and a turn-based battle engine."""
