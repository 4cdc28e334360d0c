"""
Simulation engine.

For each condition a Simulation first checks the unmodified hand, then
explores, depth first, every order in which the free cards in hand can be
used. Every explored branch is recorded under its condition, and the whole
search stops as soon as any branch of any condition succeeds: the engine
answers "is a winning line reachable", leaving probability estimates to
callers that run many independent simulations.

Search order for a hand [F1, F2] where neither card helps:

    baseline
    ├── F1
    │   └── F1, F2
    └── F2
        └── F2, F1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from decksim.core.cards import FreeCard
from decksim.core.conditions.base import Condition
from decksim.core.free_cards import free_card_is_usable, process_free_card
from decksim.core.game_state import GameState
from decksim.core.specs import deserialise_condition, evaluate_condition, serialise_condition
from decksim.errors import DecodeError, SimulationError

from .branch import Evaluator, SimulationBranch
from .models import SerialisedBranch, SerialisedSimulation

logger = logging.getLogger(__name__)

UsabilityCheck = Callable[[GameState, FreeCard], bool]
FreeCardProcessor = Callable[[SimulationBranch, FreeCard], None]


@dataclass
class _SearchFrame:
    """One level of the depth-first search: a state and the candidates left to try from it."""

    state: GameState
    used_cards: List[FreeCard]
    candidates: List[FreeCard]
    parent: Optional[int]
    cursor: int = 0

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.candidates)


@dataclass
class _ConditionEntry:
    condition: Condition
    branches: List[SimulationBranch] = field(default_factory=list)


class Simulation:
    """Represents a single simulation run over one starting hand."""

    def __init__(
        self,
        game_state: GameState,
        conditions: Sequence[Condition],
        *,
        evaluator: Evaluator = evaluate_condition,
        is_usable: UsabilityCheck = free_card_is_usable,
        processor: FreeCardProcessor = process_free_card,
    ):
        """
        Args:
            game_state: The initial game state (copied; the caller's object is never mutated)
            conditions: Conditions to evaluate independently, in order
            evaluator: Condition evaluator used by every branch
            is_usable: Free-card usability predicate
            processor: Applies a free card to a branch's own state
        """
        self._game_state = game_state.deep_copy()
        self._conditions: List[Condition] = list(conditions)
        # Keyed by id(condition): distinct-but-equal conditions stay separate
        self._branches: Dict[int, _ConditionEntry] = {}
        self._evaluator = evaluator
        self._is_usable = is_usable
        self._processor = processor
        self._max_depth = 0

    # =========================================================================
    # Search
    # =========================================================================

    def iterate(self) -> None:
        """Run every condition until one branch succeeds or all are exhausted."""
        for condition in self._conditions:
            branch = self._new_branch(self._game_state, condition)
            index = self._run_branch(branch)
            if self.result:
                logger.debug("Baseline hand satisfies %s", condition.describe())
                return

            if self.generate_free_card_permutations(self._game_state, condition, parent=index):
                return

    def generate_free_card_permutations(
        self,
        game_state: GameState,
        condition: Condition,
        used_cards: Sequence[FreeCard] = (),
        *,
        parent: Optional[int] = None,
    ) -> bool:
        """
        Explore free-card usage orders from ``game_state``, depth first.

        A free card instance is never used twice along one path; a second
        copy of the same named card is a different instance and stays
        available. Returns True when the search stopped on a success.
        """
        depth_limit = len(game_state.hand) + len(game_state.deck.deck_list) + len(used_cards)
        stack = [self._frame(game_state, list(used_cards), parent)]

        while stack:
            frame = stack[-1]
            if frame.exhausted:
                stack.pop()
                continue

            card = frame.candidates[frame.cursor]
            frame.cursor += 1

            # An earlier sibling may have changed what is usable
            if not self._is_usable(frame.state, card):
                continue

            depth = len(frame.used_cards) + 1
            if depth > depth_limit:
                raise SimulationError(f"Search depth {depth} exceeds the {depth_limit} cards available")

            branch = self._new_branch(frame.state, condition, parent=frame.parent, depth=depth)
            self._processor(branch, card)
            index = self._run_branch(branch)
            self._max_depth = max(self._max_depth, depth)

            if self.result:
                logger.debug("Found a winning line at depth %d for %s", depth, condition.describe())
                return True

            stack.append(self._frame(branch.game_state, frame.used_cards + [card], index))

        return False

    def _frame(self, state: GameState, used_cards: List[FreeCard], parent: Optional[int]) -> _SearchFrame:
        candidates = [
            card
            for card in state.free_cards_in_hand
            if self._is_usable(state, card) and not any(card.same_instance(used) for used in used_cards)
        ]
        return _SearchFrame(state=state, used_cards=used_cards, candidates=candidates, parent=parent)

    def _new_branch(
        self,
        state: GameState,
        condition: Condition,
        *,
        parent: Optional[int] = None,
        depth: int = 0,
    ) -> SimulationBranch:
        return SimulationBranch(state, condition, parent=parent, depth=depth, evaluator=self._evaluator)

    def _run_branch(self, branch: SimulationBranch) -> int:
        """Run ``branch``, record it under its condition and return its index there."""
        branch.run()
        return self._record(branch)

    def _record(self, branch: SimulationBranch) -> int:
        entry = self._branches.get(id(branch.condition))
        if entry is None:
            entry = _ConditionEntry(condition=branch.condition)
            self._branches[id(branch.condition)] = entry
        entry.branches.append(branch)
        logger.debug("Recorded branch %d: %s", len(entry.branches) - 1, branch.describe())
        return len(entry.branches) - 1

    # =========================================================================
    # Results
    # =========================================================================

    @property
    def result(self) -> bool:
        """True if any recorded branch of any condition succeeded."""
        return any(branch.result for entry in self._branches.values() for branch in entry.branches)

    @property
    def conditions(self) -> List[Condition]:
        return self._conditions

    @property
    def game_state(self) -> GameState:
        return self._game_state

    @property
    def max_depth(self) -> int:
        """Deepest number of free cards used along any explored path."""
        return self._max_depth

    @property
    def branches(self) -> List[Tuple[Condition, List[SimulationBranch]]]:
        """Recorded branches per condition, in discovery order."""
        return [(entry.condition, list(entry.branches)) for entry in self._branches.values()]

    def branches_for(self, condition: Condition) -> List[SimulationBranch]:
        entry = self._branches.get(id(condition))
        return list(entry.branches) if entry else []

    @property
    def successful_branches(self) -> List[Tuple[Condition, Optional[SimulationBranch]]]:
        """The first successful branch for each condition, or None."""
        return [
            (entry.condition, next((b for b in entry.branches if b.result), None)) for entry in self._branches.values()
        ]

    @property
    def failed_branches(self) -> List[Tuple[Condition, Optional[SimulationBranch]]]:
        """The first failed branch for each condition, or None.

        Only the first failure is reported, not every failing branch.
        """
        return [
            (entry.condition, next((b for b in entry.branches if not b.result), None))
            for entry in self._branches.values()
        ]

    def branch_count(self) -> int:
        return sum(len(entry.branches) for entry in self._branches.values())

    def log_summary(self, log: Optional[logging.Logger] = None) -> None:
        """Log the outcome and the first winning branch of each condition."""
        log = log or logger
        log.info("Simulation result: %s (%d branch(es) explored)", self.result, self.branch_count())
        for condition, branch in self.successful_branches:
            if branch is not None:
                log.info("%s satisfied: %s", condition.describe(), branch.describe())

    # =========================================================================
    # Serialisation
    # =========================================================================

    def serialise(self) -> Dict[str, Any]:
        positions: Dict[int, int] = {}
        for position, condition in enumerate(self._conditions):
            positions.setdefault(id(condition), position)

        branches = [
            branch.serialise(condition_index=positions.get(id(entry.condition)))
            for entry in self._branches.values()
            for branch in entry.branches
        ]
        return {
            "game_state": self._game_state.serialise(),
            "conditions": [serialise_condition(c) for c in self._conditions],
            "branches": branches,
        }

    @classmethod
    def deserialise(cls, data: Any, **kwargs: Any) -> "Simulation":
        """Rebuild a simulation and regroup its persisted branches under their conditions."""
        try:
            payload = SerialisedSimulation.model_validate(data)
        except ValidationError as exc:
            raise DecodeError("Invalid simulation", cause=exc) from exc

        game_state = GameState.deserialise(payload.game_state)
        conditions = [deserialise_condition(c) for c in payload.conditions]
        simulation = cls(game_state, conditions, **kwargs)

        for position, entry in enumerate(payload.branches):
            branch = SimulationBranch.deserialise(entry, evaluator=simulation._evaluator)
            branch._rebind_condition(simulation._match_condition(entry, branch.condition, position))
            simulation._check_lineage(branch, position)
            simulation._record(branch)
            simulation._max_depth = max(simulation._max_depth, branch.depth)

        return simulation

    def _match_condition(self, entry: SerialisedBranch, decoded: Condition, position: int) -> Condition:
        if entry.condition_index is not None:
            if entry.condition_index >= len(self._conditions):
                raise DecodeError(
                    f"Branch {position} refers to condition {entry.condition_index}, "
                    f"but only {len(self._conditions)} condition(s) exist"
                )
            owner = self._conditions[entry.condition_index]
            if owner != decoded:
                raise DecodeError(f"Branch {position} condition does not match condition {entry.condition_index}")
            return owner

        for condition in self._conditions:
            if condition == decoded:
                return condition
        raise DecodeError(f"Branch {position} condition {decoded.describe()!r} is not in the condition list")

    def _check_lineage(self, branch: SimulationBranch, position: int) -> None:
        """Parents must already be recorded under the same condition, one level up."""
        if branch.parent is None:
            if branch.depth != 0:
                raise DecodeError(f"Branch {position} has depth {branch.depth} but no parent")
            return

        siblings = self.branches_for(branch.condition)
        if branch.parent >= len(siblings):
            raise DecodeError(
                f"Branch {position} refers to parent {branch.parent}, "
                f"but only {len(siblings)} branch(es) precede it for its condition"
            )
        expected = siblings[branch.parent].depth + 1
        if branch.depth != expected:
            raise DecodeError(f"Branch {position} has depth {branch.depth}, expected {expected} below its parent")


def run_simulation(game_state: GameState, conditions: Sequence[Condition], **kwargs: Any) -> Simulation:
    """Create a Simulation, iterate it and return it."""
    simulation = Simulation(game_state, conditions, **kwargs)
    simulation.iterate()
    return simulation


__all__ = ["FreeCardProcessor", "Simulation", "UsabilityCheck", "run_simulation"]
