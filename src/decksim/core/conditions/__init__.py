from .base import Condition
from .card_conditions import CardCondition
from .logical_conditions import AndCondition, OrCondition

__all__ = [
    "Condition",
    "CardCondition",
    "AndCondition",
    "OrCondition",
]
