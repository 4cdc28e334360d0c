"""
Shared fixtures for decksim tests.
"""

from typing import Iterable, Optional

import pytest

from decksim.core.cards import Card, FreeCard, FreeCardDetails
from decksim.core.deck import Deck
from decksim.core.game_state import GameState


def _build_state(hand: Iterable[Card], deck: Optional[Iterable[Card]] = None) -> GameState:
    return GameState(deck=Deck(cards=list(deck or [])), hand=list(hand))


def _free(name: str, **details) -> FreeCard:
    return FreeCard(name=name, free=FreeCardDetails(**details))


@pytest.fixture
def make_state():
    """Build a GameState from explicit hand and deck card lists."""
    return _build_state


@pytest.fixture
def free_card():
    """Build a FreeCard: free_card("Pot of Greed", draw=2)."""
    return _free


@pytest.fixture
def filler():
    """Build ``n`` distinct filler cards."""

    def _filler(n: int, name: str = "Filler"):
        return [Card(name=name) for _ in range(n)]

    return _filler
