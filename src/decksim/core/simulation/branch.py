from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from pydantic import ValidationError

from decksim.core.cards import Card
from decksim.core.conditions.base import Condition
from decksim.core.game_state import GameState
from decksim.core.specs import deserialise_condition, evaluate_condition, serialise_condition
from decksim.errors import DecodeError

from .models import SerialisedBranch

Evaluator = Callable[[Condition, Sequence[Card], Sequence[Card]], bool]


class SimulationBranch:
    """
    One explored timeline: a private game state copy, the condition under
    test and the verdict once ``run()`` has evaluated it.

    The state is deep-copied at construction, so the branch never observes
    later mutation of the caller's state. The condition is shared, not
    copied: its identity is what groups branches inside a Simulation.
    """

    def __init__(
        self,
        game_state: GameState,
        condition: Condition,
        *,
        parent: Optional[int] = None,
        depth: int = 0,
        evaluator: Evaluator = evaluate_condition,
    ):
        self._game_state = game_state.deep_copy()
        self._condition = condition
        self._result = False
        self._evaluator = evaluator
        self.parent = parent
        self.depth = depth

    def run(self) -> None:
        """Evaluate the condition against this branch's hand and deck list."""
        self._result = bool(self._evaluator(self._condition, self._game_state.hand, self._game_state.deck.deck_list))

    @property
    def result(self) -> bool:
        return self._result

    @property
    def condition(self) -> Condition:
        return self._condition

    @property
    def game_state(self) -> GameState:
        return self._game_state

    def describe(self) -> str:
        verdict = "success" if self._result else "fail"
        played = ", ".join(card.name for card in self._game_state.cards_played_this_turn) or "-"
        return f"[{verdict}] {self._condition.describe()} | played: {played} | hand: {self._game_state.describe_hand()}"

    # =========================================================================
    # Serialisation
    # =========================================================================

    def serialise(self, condition_index: Optional[int] = None) -> Dict[str, Any]:
        payload = SerialisedBranch(
            result=self._result,
            game_state=self._game_state.serialise(),
            condition=serialise_condition(self._condition),
            condition_index=condition_index,
            parent=self.parent,
            depth=self.depth,
        )
        return payload.model_dump(mode="json")

    @classmethod
    def deserialise(cls, data: Any, *, evaluator: Evaluator = evaluate_condition) -> "SimulationBranch":
        """Rebuild a branch carrying its persisted result; the condition is not re-evaluated."""
        if isinstance(data, SerialisedBranch):
            payload = data
        else:
            try:
                payload = SerialisedBranch.model_validate(data)
            except ValidationError as exc:
                raise DecodeError("Invalid simulation branch", cause=exc) from exc

        game_state = GameState.deserialise(payload.game_state)
        condition = deserialise_condition(payload.condition)
        branch = cls(game_state, condition, parent=payload.parent, depth=payload.depth, evaluator=evaluator)
        branch._result = payload.result
        return branch

    def _rebind_condition(self, condition: Condition) -> None:
        self._condition = condition

    def __repr__(self) -> str:
        return f"SimulationBranch(result={self._result}, depth={self.depth}, condition={self._condition.describe()!r})"


__all__ = ["Evaluator", "SimulationBranch"]
