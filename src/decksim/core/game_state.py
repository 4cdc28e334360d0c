"""
Game state for a single turn.

The state is a mutable aggregate of a deck, a hand, the cards played this
turn and a graveyard. Branches of a simulation each take their own
``deep_copy()`` so that no mutable sub-object is ever shared between them.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from decksim.errors import DecodeError

from .cards import AnyCard, Card, FreeCard
from .deck import Deck


class GameState(BaseModel):
    """Deck, hand and per-turn bookkeeping."""

    model_config = ConfigDict(extra="forbid")

    deck: Deck = Field(default_factory=Deck)
    hand: List[AnyCard] = Field(default_factory=list)
    played_this_turn: List[AnyCard] = Field(default_factory=list)
    graveyard: List[AnyCard] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_instances(self) -> "GameState":
        # play_card and the search match cards by uid, so a uid may live in one zone slot only
        seen = set()
        for card in [*self.deck.cards, *self.hand, *self.played_this_turn, *self.graveyard]:
            if card.uid in seen:
                raise ValueError(f"Card instance '{card.uid}' ({card.name}) appears more than once")
            seen.add(card.uid)
        return self

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def draw_opening_hand(
        cls,
        deck: Deck,
        hand_size: int,
        rng: Optional[random.Random] = None,
    ) -> "GameState":
        """Shuffle a copy of ``deck`` and draw ``hand_size`` cards from it."""
        shuffled = deck.model_copy(deep=True)
        shuffled.shuffle(rng)
        hand = shuffled.draw(hand_size)
        return cls(deck=shuffled, hand=hand)

    def deep_copy(self) -> "GameState":
        return self.model_copy(deep=True)

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def free_cards_in_hand(self) -> List[FreeCard]:
        return [card for card in self.hand if isinstance(card, FreeCard)]

    @property
    def cards_played_this_turn(self) -> List[Card]:
        return self.played_this_turn

    @property
    def free_cards_played_this_turn(self) -> List[FreeCard]:
        return [card for card in self.played_this_turn if isinstance(card, FreeCard)]

    def has_in_hand(self, card: Card) -> bool:
        return any(held.same_instance(card) for held in self.hand)

    # =========================================================================
    # Mutation
    # =========================================================================

    def play_card(self, card: Card) -> None:
        """Move ``card`` (matched by instance) from the hand to the played-this-turn record."""
        for index, held in enumerate(self.hand):
            if held.same_instance(card):
                self.played_this_turn.append(self.hand.pop(index))
                return
        raise ValueError(f"Card not in hand: {card.name}")

    def draw(self, count: int = 1) -> List[Card]:
        drawn = self.deck.draw(count)
        self.hand.extend(drawn)
        return drawn

    def mill(self, count: int = 1) -> List[Card]:
        milled = self.deck.mill(count)
        self.graveyard.extend(milled)
        return milled

    # =========================================================================
    # Serialisation
    # =========================================================================

    def serialise(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def deserialise(cls, data: Any) -> "GameState":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise DecodeError("Invalid game state", cause=exc) from exc

    def describe_hand(self) -> str:
        if not self.hand:
            return "<empty>"
        return ", ".join(card.name for card in self.hand)


__all__ = ["GameState"]
