"""
Battle session: the turn controller.

A BattleSession owns both battle decks, the log, the turn counter and the
phase. All changes go through its commands:

    NOT_STARTED -> PLAYER <-> ENEMY -> FINISHED

Commands return True when accepted. An illegal command (wrong phase, dead
or exhausted card, battle already finished) returns False and leaves the
session untouched: no state change and no log entry. Only reset() is
accepted after the battle is finished.
"""

import logging
import random
from collections.abc import Sequence

from cardbattler.config import MAX_DECK_SIZE, MIN_DECK_SIZE
from cardbattler.engine.battle_deck import find_card, initialize_battle_deck, living
from cardbattler.engine.combat import resolve_combat
from cardbattler.engine.enemy_policy import choose_enemy_action
from cardbattler.models.battle import BattleCard, BattleLogEntry, LogType, Outcome, Phase
from cardbattler.models.card import Card
from cardbattler.models.dungeon import DungeonArea, DungeonLevel
from cardbattler.services.dungeons import build_enemy_deck, get_area

logger = logging.getLogger(__name__)


class BattleSession:
    """
    One player's battle against a dungeon enemy deck.

    Args:
        rng: Random source for enemy deck draws and enemy behavior
        auto_end_phase: Run the enemy phase right after each player attack
    """

    def __init__(self, rng: random.Random | None = None, auto_end_phase: bool = True) -> None:
        self.rng = rng or random.Random()
        self.auto_end_phase = auto_end_phase
        self._reset_state()

    def _reset_state(self) -> None:
        self.phase = Phase.NOT_STARTED
        self.turn = 1
        self.outcome: Outcome | None = None
        self.player_deck: list[BattleCard] = []
        self.enemy_deck: list[BattleCard] = []
        self.log: list[BattleLogEntry] = []
        self.selected_attacker_id: str | None = None
        self.area: DungeonArea | None = None
        self.level: DungeonLevel | None = None

    # --- Queries ---

    @property
    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED

    @property
    def in_progress(self) -> bool:
        return self.phase in (Phase.PLAYER, Phase.ENEMY)

    def _can_player_act(self) -> bool:
        return self.phase == Phase.PLAYER and self.outcome is None

    # --- Commands ---

    def start(self, player_cards: Sequence[Card], area_id: str, level_id: str) -> bool:
        """
        Start a battle with the player's deck against the chosen area and level.

        Rejected unless the session is NOT_STARTED, and when the deck size
        is outside the playable range or the area/level does not exist.
        """
        if self.phase != Phase.NOT_STARTED:
            return self._reject("start", f"phase {self.phase.value}")
        if not MIN_DECK_SIZE <= len(player_cards) <= MAX_DECK_SIZE:
            return self._reject("start", f"deck size {len(player_cards)}")

        area = get_area(area_id)
        level = area.get_level(level_id) if area else None
        if area is None or level is None:
            return self._reject("start", f"unknown dungeon {area_id}/{level_id}")

        enemy_cards = build_enemy_deck(area, level, self.rng)

        self._reset_state()
        self.area = area
        self.level = level
        self.player_deck = initialize_battle_deck(player_cards)
        self.enemy_deck = initialize_battle_deck(enemy_cards)
        self.phase = Phase.PLAYER
        self._append(f"Battle start! {area.name} - {level.name}", LogType.INFO)

        logger.info(
            "battle_started",
            extra={
                "area_id": area.id,
                "level_id": level.id,
                "player_cards": len(self.player_deck),
                "enemy_cards": len(self.enemy_deck),
            },
        )
        return True

    def select_attacker(self, card_id: str) -> bool:
        """
        Select one of the player's cards as the attacker.

        Selecting the currently selected card clears the selection.
        """
        if not self._can_player_act():
            return self._reject("select_attacker", f"phase {self.phase.value}")

        card = find_card(self.player_deck, card_id)
        if card is None or card.is_dead or not card.can_attack:
            return self._reject("select_attacker", f"card {card_id} not eligible")

        if self.selected_attacker_id == card_id:
            self.selected_attacker_id = None
        else:
            self.selected_attacker_id = card_id
        return True

    def select_defender(self, card_id: str) -> bool:
        """Attack the given enemy card with the selected attacker."""
        if self.selected_attacker_id is None:
            return self._reject("select_defender", "no attacker selected")
        return self.attack(self.selected_attacker_id, card_id)

    def attack(self, attacker_id: str, defender_id: str) -> bool:
        """
        Resolve one exchange between a player card and an enemy card.

        The attacker cannot attack again until the next player phase.
        """
        if not self._can_player_act():
            return self._reject("attack", f"phase {self.phase.value}")

        attacker = find_card(self.player_deck, attacker_id)
        defender = find_card(self.enemy_deck, defender_id)
        if attacker is None or attacker.is_dead or not attacker.can_attack:
            return self._reject("attack", f"attacker {attacker_id} not eligible")
        if defender is None or defender.is_dead:
            return self._reject("attack", f"defender {defender_id} not a living enemy")

        result = resolve_combat(attacker, defender)
        self._extend(result.logs)
        attacker.can_attack = False
        self.selected_attacker_id = None
        self._check_winner()

        if self.auto_end_phase and not self.is_finished:
            self.end_phase()
        return True

    def end_phase(self) -> bool:
        """
        End the player's phase and play out the enemy phase.

        Runs the enemy phase and completes the turn unless the battle
        finishes along the way.
        """
        if not self._can_player_act():
            return self._reject("end_phase", f"phase {self.phase.value}")

        self.begin_enemy_phase()
        self.run_enemy_turn()
        if not self.is_finished:
            self.complete_turn()
        return True

    def begin_enemy_phase(self) -> bool:
        """Hand control to the enemy and refresh enemy attack eligibility."""
        if not self._can_player_act():
            return self._reject("begin_enemy_phase", f"phase {self.phase.value}")

        self.phase = Phase.ENEMY
        self.selected_attacker_id = None
        for card in living(self.enemy_deck):
            card.can_attack = True
        self._append("Turn over. Enemy's turn.", LogType.INFO)
        return True

    def run_enemy_turn(self) -> bool:
        """Perform the enemy's exchange for this phase, if it has one."""
        if self.phase != Phase.ENEMY or self.outcome is not None:
            return self._reject("run_enemy_turn", f"phase {self.phase.value}")

        action = choose_enemy_action(self.enemy_deck, self.player_deck, self.rng)
        if action is None:
            logger.debug("enemy_phase_no_attack", extra={"turn": self.turn})
            return True

        result = resolve_combat(action.attacker, action.target)
        self._extend(result.logs)
        action.attacker.can_attack = False
        self._check_winner()
        return True

    def complete_turn(self) -> bool:
        """Advance the turn counter and give control back to the player."""
        if self.phase != Phase.ENEMY or self.outcome is not None:
            return self._reject("complete_turn", f"phase {self.phase.value}")

        self.turn += 1
        self.phase = Phase.PLAYER
        for card in living(self.player_deck):
            card.can_attack = True
        self._append(f"Turn {self.turn}: your turn.", LogType.INFO)
        return True

    def reset(self) -> bool:
        """Discard all battle state. Accepted from any state."""
        was = self.phase
        self._reset_state()
        logger.info("battle_reset", extra={"previous_phase": was.value})
        return True

    # --- Internals ---

    def _check_winner(self) -> None:
        """Finish the battle if either side has no living cards left."""
        player_alive = bool(living(self.player_deck))
        enemy_alive = bool(living(self.enemy_deck))

        if player_alive and enemy_alive:
            return

        if not player_alive and not enemy_alive:
            self.outcome = Outcome.DRAW
            self._append("Draw! Both sides were wiped out.", LogType.INFO)
        elif not player_alive:
            self.outcome = Outcome.ENEMY
            self._append("Defeat... You lost.", LogType.DEFEAT)
        else:
            self.outcome = Outcome.PLAYER
            self._append("Victory! You win!", LogType.VICTORY)

        self.phase = Phase.FINISHED
        self.selected_attacker_id = None
        logger.info(
            "battle_finished",
            extra={"outcome": self.outcome.value, "turn": self.turn},
        )

    def _append(self, message: str, log_type: LogType) -> None:
        self.log.append(BattleLogEntry(turn=self.turn, message=message, type=log_type))

    def _extend(self, entries: list[BattleLogEntry]) -> None:
        # Resolver entries come unstamped
        for entry in entries:
            self._append(entry.message, entry.type)

    def _reject(self, command: str, reason: str) -> bool:
        logger.debug("battle_command_rejected", extra={"command": command, "reason": reason})
        return False
