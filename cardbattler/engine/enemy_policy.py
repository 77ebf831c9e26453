"""
Enemy behavior for the enemy phase.

One random eligible enemy attacks one random living player card. If there
is no eligible attacker or no living target, the enemy does nothing.
"""

import random
from dataclasses import dataclass

from cardbattler.models.battle import BattleCard


@dataclass(frozen=True)
class EnemyAction:
    """The single exchange the enemy performs this phase."""

    attacker: BattleCard
    target: BattleCard


def choose_enemy_action(
    enemy_deck: list[BattleCard],
    player_deck: list[BattleCard],
    rng: random.Random,
) -> EnemyAction | None:
    """
    Pick the enemy's attacker and target for this phase.

    Returns None when the enemy cannot attack.
    """
    attackers = [c for c in enemy_deck if not c.is_dead and c.can_attack]
    if not attackers:
        return None

    targets = [c for c in player_deck if not c.is_dead]
    if not targets:
        return None

    attacker = rng.choice(attackers)
    target = rng.choice(targets)
    return EnemyAction(attacker=attacker, target=target)
