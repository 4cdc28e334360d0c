"""
Tests for the Simulation search.

Tests cover:
- Baseline check and single-branch success
- Depth-first permutation order and parent/depth bookkeeping
- Global short-circuit on the first success
- Identity-keyed condition grouping
- successful_branches / failed_branches contracts
"""

import pytest

from decksim.core.cards import Card, FreeCard
from decksim.core.conditions import CardCondition
from decksim.core.simulation import Simulation, run_simulation
from decksim.errors import SimulationError


def _played(branch):
    return [card.name for card in branch.game_state.cards_played_this_turn]


class TestSimulationBasics:
    """Construction and the unmodified-hand check."""

    def test_constructor_initializes_correctly(self, make_state):
        state = make_state([Card(name="A")])
        condition = CardCondition(card_name="A")

        simulation = Simulation(state, [condition])

        assert simulation.game_state == state
        assert simulation.game_state is not state
        assert condition in simulation.conditions
        assert simulation.branches == []
        assert simulation.result is False

    def test_satisfied_hand_records_one_branch(self, make_state):
        condition = CardCondition(card_name="CardA")
        simulation = Simulation(make_state([Card(name="CardA")]), [condition])

        simulation.iterate()

        assert simulation.result is True
        assert len(simulation.branches_for(condition)) == 1
        assert simulation.successful_branches[0][1] is not None

    def test_unsatisfied_hand_without_free_cards(self, make_state):
        condition = CardCondition(card_name="A")
        simulation = run_simulation(make_state([Card(name="B")]), [condition])

        assert simulation.result is False
        assert len(simulation.branches_for(condition)) == 1
        assert simulation.successful_branches == [(condition, None)]

    def test_caller_state_not_mutated(self, make_state, free_card, filler):
        pot = free_card("Pot", draw=1)
        state = make_state([pot], filler(3))
        before = state.deep_copy()

        run_simulation(state, [CardCondition(card_name="Missing")])

        assert state == before

    def test_run_simulation_returns_iterated_simulation(self, make_state):
        condition = CardCondition(card_name="A")

        simulation = run_simulation(make_state([Card(name="A")]), [condition])

        assert isinstance(simulation, Simulation)
        assert simulation.result is True
        assert len(simulation.branches_for(condition)) == 1


class TestPermutationSearch:
    """Depth-first exploration of free-card usage orders."""

    def test_one_free_card_fixes_hand(self, make_state, free_card):
        pot = free_card("Pot", draw=1)
        condition = CardCondition(card_name="A")
        simulation = Simulation(make_state([pot], [Card(name="A"), Card(name="B")]), [condition])

        simulation.iterate()

        branches = simulation.branches_for(condition)
        assert simulation.result is True
        assert len(branches) >= 2
        assert branches[0].result is False
        winner = simulation.successful_branches[0][1]
        assert winner.result is True
        assert _played(winner) == ["Pot"]

    def test_explores_every_order_when_unsatisfiable(self, make_state, free_card):
        condition = CardCondition(card_name="Never")
        simulation = Simulation(make_state([free_card("F1"), free_card("F2")]), [condition])

        simulation.iterate()

        branches = simulation.branches_for(condition)
        assert simulation.result is False
        assert [_played(b) for b in branches] == [[], ["F1"], ["F1", "F2"], ["F2"], ["F2", "F1"]]
        assert [b.parent for b in branches] == [None, 0, 1, 0, 3]
        assert [b.depth for b in branches] == [0, 1, 2, 1, 2]
        assert simulation.max_depth == 2

    def test_depth_bounded_by_free_cards(self, make_state, free_card, filler):
        hand = [free_card(f"F{i}") for i in range(4)] + filler(2)
        simulation = run_simulation(make_state(hand), [CardCondition(card_name="Never")])

        assert simulation.max_depth == 4
        assert all(b.depth <= 4 for _, branches in simulation.branches for b in branches)
        # 4 + 4*3 + 4*3*2 + 4*3*2*1 orders plus the baseline
        assert simulation.branch_count() == 65

    def test_no_instance_used_twice_on_a_path(self, make_state, free_card):
        hand = [free_card("Pot"), free_card("Pot"), free_card("Jar")]
        simulation = run_simulation(make_state(hand), [CardCondition(card_name="Never")])

        for _, branches in simulation.branches:
            for branch in branches:
                uids = [card.uid for card in branch.game_state.cards_played_this_turn]
                assert len(uids) == len(set(uids))

    def test_copies_of_same_card_are_distinct(self, make_state, free_card):
        simulation = run_simulation(
            make_state([free_card("Pot"), free_card("Pot")]),
            [CardCondition(card_name="Never")],
        )

        assert simulation.branch_count() == 5

    def test_once_per_turn_limits_copies(self, make_state, free_card):
        simulation = run_simulation(
            make_state([free_card("Pot", once_per_turn=True), free_card("Pot", once_per_turn=True)]),
            [CardCondition(card_name="Never")],
        )

        branches = simulation.branches[0][1]
        assert [_played(b) for b in branches] == [[], ["Pot"], ["Pot"]]

    def test_drawn_free_cards_join_the_search(self, make_state, free_card):
        first = free_card("Upstart", draw=1)
        drawn = free_card("Pot", draw=1)
        condition = CardCondition(card_name="A")
        simulation = run_simulation(make_state([first], [drawn, Card(name="A")]), [condition])

        winner = simulation.successful_branches[0][1]
        assert _played(winner) == ["Upstart", "Pot"]
        assert winner.depth == 2

    def test_parent_branch_state_untouched_by_children(self, make_state, free_card, filler):
        pot = free_card("Pot", draw=1)
        condition = CardCondition(card_name="Never")
        simulation = run_simulation(make_state([pot], filler(2)), [condition])

        baseline = simulation.branches_for(condition)[0]
        assert [c.name for c in baseline.game_state.hand] == ["Pot"]
        assert len(baseline.game_state.deck.deck_list) == 2

    def test_usability_rechecked_before_each_use(self, make_state, free_card):
        budget = {"uses": 1}

        def is_usable(state, card):
            return budget["uses"] > 0 and state.has_in_hand(card)

        def processor(branch, card):
            budget["uses"] -= 1
            branch.game_state.play_card(card)

        simulation = run_simulation(
            make_state([free_card("F1"), free_card("F2")]),
            [CardCondition(card_name="Never")],
            is_usable=is_usable,
            processor=processor,
        )

        assert [_played(b) for b in simulation.branches[0][1]] == [[], ["F1"]]

    def test_evaluator_false_then_true(self, make_state, free_card):
        answers = iter([False, True])
        simulation = Simulation(
            make_state([free_card("FreeCard")]),
            [CardCondition(card_name="Anything")],
            evaluator=lambda condition, hand, deck_list: next(answers),
        )

        simulation.iterate()

        assert simulation.successful_branches[0][1] is not None
        assert simulation.successful_branches[0][1].result is True
        assert simulation.branch_count() == 2

    def test_success_stops_sibling_exploration(self, make_state, free_card):
        simulation = Simulation(
            make_state([free_card("F1"), free_card("F2")]),
            [CardCondition(card_name="F1", location="hand", operator="=", quantity=0)],
        )

        simulation.iterate()

        # Using F1 removes it from hand, which satisfies the condition immediately
        assert simulation.result is True
        assert [_played(b) for b in simulation.branches[0][1]] == [[], ["F1"]]

    def test_depth_guard(self, make_state, free_card):
        def processor(branch, card):
            branch.game_state.hand.append(FreeCard(name="Echo"))

        with pytest.raises(SimulationError):
            run_simulation(
                make_state([free_card("Seed")]),
                [CardCondition(card_name="Never")],
                processor=processor,
            )


class TestMultipleConditions:
    """Conditions are evaluated in order and grouped by identity."""

    def test_global_short_circuit(self, make_state, free_card):
        first = CardCondition(card_name="A")
        second = CardCondition(card_name="B")
        simulation = run_simulation(make_state([Card(name="A"), free_card("Pot")]), [first, second])

        assert simulation.result is True
        assert len(simulation.branches) == 1
        assert simulation.branches_for(second) == []

    def test_success_in_later_condition(self, make_state):
        first = CardCondition(card_name="Missing")
        second = CardCondition(card_name="A")
        simulation = run_simulation(make_state([Card(name="A")]), [first, second])

        assert simulation.result is True
        assert simulation.successful_branches == [
            (first, None),
            (second, simulation.branches_for(second)[0]),
        ]

    def test_equal_conditions_tracked_separately(self, make_state):
        first = CardCondition(card_name="Missing")
        second = CardCondition(card_name="Missing")
        simulation = run_simulation(make_state([Card(name="A")]), [first, second])

        assert first == second
        assert len(simulation.branches) == 2
        assert simulation.branches[0][0] is first
        assert simulation.branches[1][0] is second
        assert len(simulation.branches_for(first)) == 1
        assert simulation.branches_for(first)[0] is not simulation.branches_for(second)[0]

    def test_result_is_global(self, make_state):
        first = CardCondition(card_name="Missing")
        second = CardCondition(card_name="A")
        simulation = run_simulation(make_state([Card(name="A")]), [first, second])

        assert simulation.successful_branches[0][1] is None
        assert simulation.result is True


class TestFailedBranches:
    """failed_branches reports only the first failure per condition."""

    def test_first_failure_only(self, make_state, free_card):
        condition = CardCondition(card_name="Never")
        simulation = run_simulation(make_state([free_card("F1"), free_card("F2")]), [condition])

        assert simulation.branch_count() == 5
        assert len(simulation.failed_branches) == 1
        failed_condition, failed = simulation.failed_branches[0]
        assert failed_condition is condition
        assert failed is simulation.branches_for(condition)[0]
        assert not isinstance(failed, list)

    def test_none_when_nothing_failed(self, make_state):
        condition = CardCondition(card_name="A")
        simulation = run_simulation(make_state([Card(name="A")]), [condition])

        assert simulation.failed_branches == [(condition, None)]


class TestLogSummary:
    """The explicit diagnostics hook."""

    def test_log_summary(self, make_state, caplog):
        simulation = run_simulation(make_state([Card(name="A")]), [CardCondition(card_name="A")])

        with caplog.at_level("INFO"):
            simulation.log_summary()

        assert "Simulation result: True" in caplog.text
        assert "A >= 1 satisfied" in caplog.text

    def test_result_accessor_does_not_log(self, make_state, caplog):
        simulation = run_simulation(make_state([Card(name="A")]), [CardCondition(card_name="A")])

        with caplog.at_level("DEBUG"):
            caplog.clear()
            assert simulation.result is True

        assert caplog.records == []
