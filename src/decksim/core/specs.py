"""Translation between runtime conditions and their serialised form, plus evaluation."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from .cards import Card
from .condition_registry import get_condition_registry
from .conditions.base import Condition


def serialise_condition(condition: Condition) -> Dict[str, Any]:
    return condition.model_dump(mode="json")


def deserialise_condition(data: Any) -> Condition:
    """Build a runtime condition; raises ``DecodeError`` on malformed input."""
    return get_condition_registry().parse(data)


def evaluate_condition(condition: Condition, hand: Sequence[Card], deck_list: Sequence[Card]) -> bool:
    """Evaluate ``condition`` against a hand and deck list without touching either."""
    return bool(condition.evaluate(hand, deck_list))


__all__ = ["deserialise_condition", "evaluate_condition", "serialise_condition"]
