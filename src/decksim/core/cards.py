"""
Card models.

A card's ``uid`` is its instance identity. It survives deep copies and
serialisation, so the same physical card can be recognised in every branch
copy of a game state, while two copies of the same named card stay distinct.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _new_uid() -> str:
    return uuid4().hex


class Card(BaseModel):
    """A regular card."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["card"] = "card"
    name: str
    uid: str = Field(default_factory=_new_uid)

    @property
    def is_free(self) -> bool:
        return False

    def same_instance(self, other: "Card") -> bool:
        return self.uid == other.uid

    def describe(self) -> str:
        return self.name


class FreeCardDetails(BaseModel):
    """What using a free card does, and how often it may be used."""

    model_config = ConfigDict(extra="forbid")

    once_per_turn: bool = False
    draw: int = Field(default=0, ge=0)
    mill: int = Field(default=0, ge=0)

    @property
    def deck_cost(self) -> int:
        """Number of deck cards consumed when the card is used."""
        return self.draw + self.mill


class FreeCard(Card):
    """A card that can be used without cost, optionally once per turn."""

    kind: Literal["free"] = "free"  # type: ignore[assignment]
    free: FreeCardDetails = Field(default_factory=FreeCardDetails)

    @property
    def is_free(self) -> bool:
        return True

    @property
    def once_per_turn(self) -> bool:
        return self.free.once_per_turn

    def describe(self) -> str:
        parts = []
        if self.free.draw:
            parts.append(f"draw {self.free.draw}")
        if self.free.mill:
            parts.append(f"mill {self.free.mill}")
        if self.free.once_per_turn:
            parts.append("once per turn")
        if not parts:
            return f"{self.name} (free)"
        return f"{self.name} (free: {', '.join(parts)})"


AnyCard = Annotated[Union[FreeCard, Card], Field(discriminator="kind")]


def create_card(name: str, details: Optional[Dict[str, Any]] = None) -> Card:
    """Build a card from its name and optional details.

    A ``free`` entry in ``details`` makes the result a :class:`FreeCard`:

        create_card("Pot of Greed", {"free": {"draw": 2, "once_per_turn": True}})
    """
    details = details or {}
    free = details.get("free")
    if free is not None:
        if isinstance(free, FreeCardDetails):
            return FreeCard(name=name, free=free)
        if free is True:
            return FreeCard(name=name)
        return FreeCard(name=name, free=FreeCardDetails.model_validate(free))
    return Card(name=name)


def same_instance(a: Card, b: Card) -> bool:
    """Compare two cards by instance identity rather than by name."""
    return a.uid == b.uid


__all__ = [
    "AnyCard",
    "Card",
    "FreeCard",
    "FreeCardDetails",
    "create_card",
    "same_instance",
]
