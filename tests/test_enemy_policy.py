import random

from conftest import make_card

from cardbattler.engine.battle_deck import initialize_battle_deck
from cardbattler.engine.enemy_policy import choose_enemy_action


def decks(enemies: int = 3, players: int = 3):
    enemy_deck = initialize_battle_deck([make_card(f"e{i}") for i in range(enemies)])
    player_deck = initialize_battle_deck([make_card(f"p{i}") for i in range(players)])
    return enemy_deck, player_deck


class TestChooseEnemyAction:
    def test_picks_eligible_attacker_and_living_target(self) -> None:
        enemy_deck, player_deck = decks()
        enemy_deck[0].take_damage(100)
        enemy_deck[1].can_attack = False
        player_deck[2].take_damage(100)

        for seed in range(20):
            action = choose_enemy_action(enemy_deck, player_deck, random.Random(seed))

            assert action is not None
            assert action.attacker.id == "e2"
            assert action.target.id in {"p0", "p1"}

    def test_no_eligible_attacker(self) -> None:
        enemy_deck, player_deck = decks()
        for card in enemy_deck:
            card.can_attack = False

        assert choose_enemy_action(enemy_deck, player_deck, random.Random(0)) is None

    def test_all_enemies_dead(self) -> None:
        enemy_deck, player_deck = decks()
        for card in enemy_deck:
            card.take_damage(100)

        assert choose_enemy_action(enemy_deck, player_deck, random.Random(0)) is None

    def test_no_living_target(self) -> None:
        enemy_deck, player_deck = decks()
        for card in player_deck:
            card.take_damage(100)

        assert choose_enemy_action(enemy_deck, player_deck, random.Random(0)) is None

    def test_deterministic_for_seed(self) -> None:
        enemy_deck, player_deck = decks(enemies=5, players=5)

        first = choose_enemy_action(enemy_deck, player_deck, random.Random(7))
        second = choose_enemy_action(enemy_deck, player_deck, random.Random(7))

        assert first is not None and second is not None
        assert (first.attacker.id, first.target.id) == (second.attacker.id, second.target.id)

    def test_spreads_choices(self) -> None:
        enemy_deck, player_deck = decks(enemies=3, players=3)
        rng = random.Random(1)

        attackers = set()
        targets = set()
        for _ in range(200):
            action = choose_enemy_action(enemy_deck, player_deck, rng)
            assert action is not None
            attackers.add(action.attacker.id)
            targets.add(action.target.id)

        assert attackers == {"e0", "e1", "e2"}
        assert targets == {"p0", "p1", "p2"}
