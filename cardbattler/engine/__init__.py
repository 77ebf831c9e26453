"""
Battle resolution engine.

Combat math, exchange resolution, battle deck setup, enemy behavior and
the turn controller.
"""

from cardbattler.engine.battle_deck import find_card, initialize_battle_deck, living
from cardbattler.engine.combat import (
    ELEMENT_ADVANTAGE,
    CombatResult,
    DamageResult,
    calculate_damage,
    has_advantage,
    resolve_combat,
)
from cardbattler.engine.enemy_policy import EnemyAction, choose_enemy_action
from cardbattler.engine.session import BattleSession

__all__ = [
    "BattleSession",
    "CombatResult",
    "DamageResult",
    "ELEMENT_ADVANTAGE",
    "EnemyAction",
    "calculate_damage",
    "choose_enemy_action",
    "find_card",
    "has_advantage",
    "initialize_battle_deck",
    "living",
    "resolve_combat",
]
