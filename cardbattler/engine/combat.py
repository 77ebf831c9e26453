"""
Combat math and exchange resolution.

Every exchange is mutual: the attacker and the defender damage each other
at the same time. resolve_combat is the only place health changes.
"""

from dataclasses import dataclass

from cardbattler.config import ELEMENT_BONUS
from cardbattler.models.battle import BattleCard, BattleLogEntry, LogType
from cardbattler.models.card import Element

# Each element beats exactly one other. Light and Dark beat each other.
ELEMENT_ADVANTAGE: dict[Element, Element] = {
    Element.FIRE: Element.NATURE,
    Element.NATURE: Element.WATER,
    Element.WATER: Element.FIRE,
    Element.LIGHT: Element.DARK,
    Element.DARK: Element.LIGHT,
}


def has_advantage(element: Element, against: Element) -> bool:
    """True if `element` beats `against`."""
    return ELEMENT_ADVANTAGE[element] == against


@dataclass(frozen=True)
class DamageResult:
    """Damage each side deals in one exchange."""

    attacker_damage: int
    defender_damage: int
    messages: tuple[str, ...] = ()


@dataclass
class CombatResult:
    """Outcome of one exchange. Log entries carry turn 0."""

    attacker: BattleCard
    defender: BattleCard
    logs: list[BattleLogEntry]


def calculate_damage(attacker: BattleCard, defender: BattleCard) -> DamageResult:
    """
    Compute the damage both sides deal.

    Each side deals its current attack, plus ELEMENT_BONUS if its element
    beats the opponent's.
    """
    messages: list[str] = []
    attacker_damage = attacker.stats.attack
    defender_damage = defender.stats.attack

    if has_advantage(attacker.element, defender.element):
        attacker_damage += ELEMENT_BONUS
        messages.append(f"> {attacker.name} has elemental advantage! (+{ELEMENT_BONUS} attack)")
    if has_advantage(defender.element, attacker.element):
        defender_damage += ELEMENT_BONUS
        messages.append(f"> {defender.name} has elemental advantage! (+{ELEMENT_BONUS} attack)")

    return DamageResult(
        attacker_damage=attacker_damage,
        defender_damage=defender_damage,
        messages=tuple(messages),
    )


def resolve_combat(attacker: BattleCard, defender: BattleCard) -> CombatResult:
    """
    Resolve one exchange between two battle cards.

    Mutates the health and death state of both cards in place and returns
    them together with the ordered log. Does not check whether either card
    is already dead; callers enforce that.
    """
    damage = calculate_damage(attacker, defender)
    logs = [BattleLogEntry(turn=0, message=m, type=LogType.INFO) for m in damage.messages]

    attacker.take_damage(damage.defender_damage)
    defender.take_damage(damage.attacker_damage)

    logs.append(
        BattleLogEntry(
            turn=0,
            message=f"{attacker.name} deals {damage.attacker_damage} damage to {defender.name}!",
            type=LogType.ATTACK,
        )
    )
    logs.append(
        BattleLogEntry(
            turn=0,
            message=f"{defender.name} deals {damage.defender_damage} damage to {attacker.name}!",
            type=LogType.ATTACK,
        )
    )

    if attacker.is_dead:
        logs.append(
            BattleLogEntry(turn=0, message=f"{attacker.name} was defeated!", type=LogType.DEFEAT)
        )
    if defender.is_dead:
        logs.append(
            BattleLogEntry(turn=0, message=f"{defender.name} was defeated!", type=LogType.DEFEAT)
        )

    return CombatResult(attacker=attacker, defender=defender, logs=logs)
