import pytest
from conftest import make_card

from cardbattler.config import MAX_DECK_SIZE, MIN_DECK_SIZE
from cardbattler.models.battle import BattleCard
from cardbattler.models.card import FALLBACK_ELEMENT, Element, Keyword
from cardbattler.models.deck import Deck, DeckValidationError, build_deck
from cardbattler.models.failure import FailureKind, OutcomeType


class TestCard:
    def test_card_creation(self) -> None:
        card = make_card("c1", attack=4, health=5, element=Element.DARK)
        assert card.id == "c1"
        assert card.stats.attack == 4
        assert card.stats.health == 5
        assert card.element is Element.DARK

    def test_card_immutable(self) -> None:
        card = make_card("c1")
        with pytest.raises(AttributeError):
            card.name = "Other"  # type: ignore[misc]

    def test_stats_immutable(self) -> None:
        card = make_card("c1")
        with pytest.raises(AttributeError):
            card.stats.health = 99  # type: ignore[misc]


class TestElement:
    def test_parse_known(self) -> None:
        assert Element.parse("Water") is Element.WATER

    def test_parse_is_case_insensitive(self) -> None:
        assert Element.parse(" nature ") is Element.NATURE

    def test_parse_unknown_falls_back(self) -> None:
        assert Element.parse("Lightning") is FALLBACK_ELEMENT
        assert FALLBACK_ELEMENT is Element.FIRE

    def test_parse_non_string_falls_back(self) -> None:
        assert Element.parse(None) is Element.FIRE
        assert Element.parse(3) is Element.FIRE


class TestKeyword:
    def test_parse_known(self) -> None:
        assert Keyword.parse("guard") is Keyword.GUARD

    def test_parse_unknown(self) -> None:
        assert Keyword.parse("Flying") is None
        assert Keyword.parse(42) is None


class TestDeck:
    def test_add_card(self) -> None:
        deck = Deck()
        deck.add_card(make_card("c1"))
        assert len(deck) == 1
        assert "c1" in deck

    def test_rejects_duplicate(self) -> None:
        deck = Deck()
        deck.add_card(make_card("c1"))

        with pytest.raises(DeckValidationError) as exc_info:
            deck.add_card(make_card("c1"))

        assert exc_info.value.kind == FailureKind.INVALID_INPUT
        assert len(deck) == 1

    def test_rejects_ninth_card(self) -> None:
        deck = build_deck([make_card(f"c{i}") for i in range(MAX_DECK_SIZE)])

        with pytest.raises(DeckValidationError) as exc_info:
            deck.add_card(make_card("extra"))

        assert exc_info.value.kind == FailureKind.DECK_SIZE_VIOLATION
        assert len(deck) == MAX_DECK_SIZE

    def test_playable_range(self) -> None:
        assert not build_deck([make_card(f"c{i}") for i in range(MIN_DECK_SIZE - 1)]).is_playable()
        assert build_deck([make_card(f"c{i}") for i in range(MIN_DECK_SIZE)]).is_playable()
        assert build_deck([make_card(f"c{i}") for i in range(MAX_DECK_SIZE)]).is_playable()

    def test_validate_for_save_too_small(self) -> None:
        deck = build_deck([make_card(f"c{i}") for i in range(MIN_DECK_SIZE - 1)])

        with pytest.raises(DeckValidationError) as exc_info:
            deck.validate_for_save()

        assert exc_info.value.status_code == 400
        response = exc_info.value.to_response()
        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.DECK_SIZE_VIOLATION

    def test_keeps_order(self) -> None:
        deck = build_deck([make_card("b"), make_card("a"), make_card("c")])
        assert deck.card_ids() == ["b", "a", "c"]


class TestBattleCard:
    def test_from_card(self) -> None:
        card = make_card("c1", attack=2, health=5, keywords=(Keyword.RUSH,))

        battle_card = BattleCard.from_card(card)

        assert battle_card.stats.attack == 2
        assert battle_card.stats.health == 5
        assert battle_card.original_stats == card.stats
        assert battle_card.keywords == (Keyword.RUSH,)
        assert battle_card.can_attack is True
        assert battle_card.is_dead is False

    def test_take_damage(self) -> None:
        battle_card = BattleCard.from_card(make_card("c1", health=5))

        battle_card.take_damage(2)

        assert battle_card.stats.health == 3
        assert battle_card.is_alive

    def test_take_lethal_damage(self) -> None:
        battle_card = BattleCard.from_card(make_card("c1", health=5))

        battle_card.take_damage(9)

        assert battle_card.stats.health == 0
        assert battle_card.is_dead

    def test_health_ratio(self) -> None:
        battle_card = BattleCard.from_card(make_card("c1", health=4))
        battle_card.take_damage(1)
        assert battle_card.health_ratio == 0.75
