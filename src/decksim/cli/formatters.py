"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import List

from rich.table import Table

from decksim.core.conditions.base import Condition
from decksim.core.game_state import GameState
from decksim.core.simulation import Simulation, SimulationBranch


def format_cards(cards: List) -> str:
    if not cards:
        return "[dim]-[/dim]"
    return ", ".join(card.name for card in cards)


def format_result(result: bool) -> str:
    return "[green]success[/green]" if result else "[red]fail[/red]"


def build_state_table(state: GameState, title: str = "Starting state") -> Table:
    table = Table(title=title)
    table.add_column("Zone")
    table.add_column("Cards")

    table.add_row("Hand", format_cards(state.hand))
    table.add_row("Free cards in hand", "\n".join(card.describe() for card in state.free_cards_in_hand) or "-")
    table.add_row("Deck", f"{len(state.deck.deck_list)} card(s)")
    if state.played_this_turn:
        table.add_row("Played this turn", format_cards(state.played_this_turn))
    if state.graveyard:
        table.add_row("Graveyard", format_cards(state.graveyard))
    return table


def build_summary_table(simulation: Simulation) -> Table:
    """One row per condition: branch count and the first success, if any."""
    table = Table(title="Conditions")
    table.add_column("#")
    table.add_column("Condition")
    table.add_column("Branches")
    table.add_column("Result")
    table.add_column("Winning line")

    recorded = {id(condition): branches for condition, branches in simulation.branches}
    successes = {id(condition): branch for condition, branch in simulation.successful_branches}

    for idx, condition in enumerate(simulation.conditions, start=1):
        branches = recorded.get(id(condition))
        if branches is None:
            table.add_row(str(idx), condition.describe(), "0", "[dim]skipped[/dim]", "")
            continue
        winner = successes.get(id(condition))
        if winner is None:
            line = ""
        elif winner.game_state.cards_played_this_turn:
            line = format_cards(winner.game_state.cards_played_this_turn)
        else:
            line = "starting hand"
        table.add_row(str(idx), condition.describe(), str(len(branches)), format_result(winner is not None), line)
    return table


def build_branches_table(condition: Condition, branches: List[SimulationBranch]) -> Table:
    table = Table(title=f"Branches: {condition.describe()}")
    table.add_column("#")
    table.add_column("Parent")
    table.add_column("Depth")
    table.add_column("Played")
    table.add_column("Hand")
    table.add_column("Result")

    for idx, branch in enumerate(branches):
        table.add_row(
            str(idx),
            "-" if branch.parent is None else str(branch.parent),
            str(branch.depth),
            format_cards(branch.game_state.cards_played_this_turn),
            format_cards(branch.game_state.hand),
            format_result(branch.result),
        )
    return table


__all__ = [
    "build_branches_table",
    "build_state_table",
    "build_summary_table",
    "format_cards",
    "format_result",
]
