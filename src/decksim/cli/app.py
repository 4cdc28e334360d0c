"""
Deck simulator CLI: validate scenarios, run simulations and inspect saved histories.

- No interactive prompts
- Uses Simulation for the free-card permutation search
- Outputs the serialised simulation to YAML under outputs/histories
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import typer
from rich.console import Console

from decksim.cli.formatters import build_branches_table, build_state_table, build_summary_table
from decksim.cli.load_helpers import load_or_exit
from decksim.cli.paths import find_history_file, find_scenario_file, resolve_history_path
from decksim.core.simulation import run_simulation
from decksim.errors import SimulationError
from decksim.io.loaders import load_scenario, load_simulation, parse_scenario, save_simulation
from decksim.utils.logging import configure_logging

app = typer.Typer(help="Deck simulator CLI: validate scenarios, run simulations and inspect histories.")
console = Console()
logger = logging.getLogger(__name__)


def _resolve_or_exit(finder, name_or_path: str) -> str:
    try:
        return finder(name_or_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)


@app.command()
def validate(
    scenario: str = typer.Argument(..., help="Scenario name or path (bare names resolve to scenarios/<name>.yaml)"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Validate a scenario file."""
    path = _resolve_or_exit(find_scenario_file, scenario)
    spec = load_or_exit(parse_scenario, path, console=console, verbose_errors=verbose)
    load_or_exit(load_scenario, path, console=console, verbose_errors=verbose)

    console.print(f"[green]OK[/green] Deck: {sum(spec.deck.values())} card(s), {len(spec.free_cards)} free card type(s)")
    console.print(f"[green]OK[/green] Conditions: {len(spec.conditions)}")
    console.print("[green]Scenario is valid[/green]")


@app.command()
def run(
    scenario: str = typer.Argument(..., help="Scenario name or path (bare names resolve to scenarios/<name>.yaml)"),
    run_name: Optional[str] = typer.Option(None, "--name", help="Name for the history file (auto-generated if not provided)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Shuffle seed, overrides the scenario's seed"),
    no_save: bool = typer.Option(False, "--no-save", help="Do not write the history file"),
    show_branches: bool = typer.Option(False, "--branches", help="Show every explored branch"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Deal a hand from a scenario and search for a winning line."""
    configure_logging(verbose)
    path = _resolve_or_exit(find_scenario_file, scenario)
    loaded = load_or_exit(load_scenario, path, seed=seed, console=console, verbose_errors=verbose_load)

    console.print(build_state_table(loaded.game_state))

    try:
        simulation = run_simulation(loaded.game_state, loaded.conditions)
    except SimulationError as exc:
        console.print(f"[red]Simulation aborted:[/red] {exc}")
        raise typer.Exit(code=1)

    if verbose:
        simulation.log_summary(logger)

    console.print(build_summary_table(simulation))
    if show_branches:
        for condition, branches in simulation.branches:
            console.print(build_branches_table(condition, branches))

    console.print("\n[bold]Simulation Complete[/bold]")
    console.print(f"Scenario: {loaded.name}")
    console.print(f"Branches: {simulation.branch_count()}")
    console.print(f"Max depth: {simulation.max_depth}")
    if simulation.result:
        console.print("[green]Result: success[/green]")
    else:
        console.print("[red]Result: fail[/red]")

    if not no_save:
        name = run_name or f"{loaded.name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        history_path = resolve_history_path(name)
        save_simulation(simulation, history_path, name=name)
        console.print(f"Saved: {history_path}")


@app.command()
def history(
    file_path: str = typer.Argument(
        ...,
        help="History name or path (bare names resolve to outputs/histories/<name>.yaml automatically)",
    ),
    show_branches: bool = typer.Option(True, "--branches/--summary", help="Show every branch or only the summary"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """View a saved simulation."""
    path = _resolve_or_exit(find_history_file, file_path)
    simulation = load_or_exit(load_simulation, path, console=console, verbose_errors=verbose)

    console.print(f"[bold]History:[/bold] {path}")
    console.print(build_state_table(simulation.game_state))
    console.print(build_summary_table(simulation))
    if show_branches:
        for condition, branches in simulation.branches:
            console.print(build_branches_table(condition, branches))


def main() -> None:
    app()


__all__ = ["app", "main"]
