from __future__ import annotations

import random
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .cards import AnyCard, Card, FreeCardDetails, create_card


class Deck(BaseModel):
    """Ordered deck of cards. Index 0 is the top of the deck."""

    model_config = ConfigDict(extra="forbid")

    cards: List[AnyCard] = Field(default_factory=list)

    @classmethod
    def from_counts(
        cls,
        counts: Mapping[str, int],
        free_cards: Optional[Mapping[str, FreeCardDetails]] = None,
    ) -> "Deck":
        """Build a deck from ``name -> copies``; names in ``free_cards`` become free cards."""
        free_cards = free_cards or {}
        cards: List[Card] = []
        for name, copies in counts.items():
            if copies < 0:
                raise ValueError(f"Negative copy count for '{name}': {copies}")
            details = {"free": free_cards[name]} if name in free_cards else None
            cards.extend(create_card(name, details) for _ in range(copies))
        return cls(cards=cards)

    @property
    def deck_list(self) -> List[Card]:
        return self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def draw(self, count: int = 1) -> List[Card]:
        """Remove and return ``count`` cards from the top of the deck."""
        if count < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {count}")
        if count > len(self.cards):
            raise ValueError(f"Cannot draw {count} card(s) from a deck of {len(self.cards)}")
        drawn = self.cards[:count]
        del self.cards[:count]
        return drawn

    def mill(self, count: int = 1) -> List[Card]:
        # Same mechanics as draw; the caller decides where the cards go.
        return self.draw(count)

    def remove(self, name: str) -> Card:
        """Remove and return the first card with ``name``."""
        for index, card in enumerate(self.cards):
            if card.name == name:
                return self.cards.pop(index)
        raise ValueError(f"Card not in deck: {name}")

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        (rng or random).shuffle(self.cards)

    def count(self, name: str) -> int:
        return sum(1 for card in self.cards if card.name == name)

    def card_names(self) -> Dict[str, int]:
        """Return ``name -> copies`` in first-seen order."""
        counts: Dict[str, int] = {}
        for card in self.cards:
            counts[card.name] = counts.get(card.name, 0) + 1
        return counts


__all__ = ["Deck"]
