from __future__ import annotations

from typing import Literal, Sequence

from pydantic import Field

from decksim.core.cards import Card

from .base import Condition

QuantityOperator = Literal[">=", "=", "<="]
CardLocation = Literal["hand", "deck"]


class CardCondition(Condition):
    """Check how many copies of a named card sit in the hand or the deck.

    Example YAML:
        type: card
        card_name: Dark Magician
        quantity: 1
        operator: ">="
        location: hand
    """

    type: Literal["card"] = "card"
    card_name: str
    quantity: int = Field(default=1, ge=0)
    operator: QuantityOperator = ">="
    location: CardLocation = "hand"

    def evaluate(self, hand: Sequence[Card], deck_list: Sequence[Card]) -> bool:
        cards = hand if self.location == "hand" else deck_list
        count = sum(1 for card in cards if card.name == self.card_name)

        if self.operator == ">=":
            return count >= self.quantity
        elif self.operator == "=":
            return count == self.quantity
        elif self.operator == "<=":
            return count <= self.quantity
        else:
            raise ValueError(f"Unknown operator: {self.operator}")

    def describe(self) -> str:
        where = "" if self.location == "hand" else " in deck"
        return f"{self.card_name} {self.operator} {self.quantity}{where}"


__all__ = ["CardCondition", "CardLocation", "QuantityOperator"]
