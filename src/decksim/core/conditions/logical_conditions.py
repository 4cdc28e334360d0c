"""
Logical conditions module.

Provides compound logical conditions (AND/OR) for combining card checks, e.g.
"one starter AND one extender" or "any of these three combo pieces".
"""

from __future__ import annotations

from typing import Any, List, Literal, Sequence

from pydantic import SerializeAsAny, field_validator

from decksim.core.cards import Card

from .base import Condition


def _parse_sub_conditions(value: Any) -> List[Condition]:
    from decksim.core.condition_registry import get_condition_registry

    if not isinstance(value, list):
        raise ValueError("Logical condition 'conditions' must be a list")
    registry = get_condition_registry()
    return [item if isinstance(item, Condition) else registry.parse(item) for item in value]


class AndCondition(Condition):
    """Logical AND of multiple conditions.

    All sub-conditions must evaluate to True for the AND to be True.

    Example YAML:
        type: and
        conditions:
          - type: card
            card_name: Ash Blossom
          - type: card
            card_name: Dark Magician
    """

    type: Literal["and"] = "and"
    conditions: List[SerializeAsAny[Condition]]

    @field_validator("conditions", mode="before")
    @classmethod
    def _parse_conditions(cls, value: Any) -> List[Condition]:
        return _parse_sub_conditions(value)

    def evaluate(self, hand: Sequence[Card], deck_list: Sequence[Card]) -> bool:
        return all(c.evaluate(hand, deck_list) for c in self.conditions)

    def describe(self) -> str:
        if not self.conditions:
            return "AND()"
        return "(" + " AND ".join(c.describe() for c in self.conditions) + ")"


class OrCondition(Condition):
    """Logical OR of multiple conditions.

    At least one sub-condition must evaluate to True for the OR to be True.
    """

    type: Literal["or"] = "or"
    conditions: List[SerializeAsAny[Condition]]

    @field_validator("conditions", mode="before")
    @classmethod
    def _parse_conditions(cls, value: Any) -> List[Condition]:
        return _parse_sub_conditions(value)

    def evaluate(self, hand: Sequence[Card], deck_list: Sequence[Card]) -> bool:
        return any(c.evaluate(hand, deck_list) for c in self.conditions)

    def describe(self) -> str:
        if not self.conditions:
            return "OR()"
        return "(" + " OR ".join(c.describe() for c in self.conditions) + ")"


__all__ = ["AndCondition", "OrCondition"]
