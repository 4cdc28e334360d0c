from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from decksim.core.cards import Card


class Condition(BaseModel, ABC):
    """Base class for all win conditions.

    Inside a simulation conditions are told apart by object identity, never
    by ``==``: two structurally equal conditions are tracked separately.
    """

    model_config = ConfigDict(extra="forbid")

    type: str

    @abstractmethod
    def evaluate(self, hand: Sequence[Card], deck_list: Sequence[Card]) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        return self.__class__.__name__
