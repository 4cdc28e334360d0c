from __future__ import annotations

"""Utilities for resolving scenario and output paths."""

from pathlib import Path


def scenarios_dir() -> Path:
    return Path.cwd() / "scenarios"


def outputs_dir() -> Path:
    return Path.cwd() / "outputs"


def histories_dir() -> Path:
    return outputs_dir() / "histories"


def ensure_output_dirs() -> None:
    histories_dir().mkdir(parents=True, exist_ok=True)


def resolve_history_path(name: str) -> str:
    """Resolve a history filename under outputs/histories.

    If name has no .yaml extension, it will be added.
    """
    ensure_output_dirs()
    base = Path(name).name
    if not base.endswith(".yaml"):
        base = f"{base}.yaml"
    return str(histories_dir() / base)


def _find_yaml(name_or_path: str, folder: Path, kind: str) -> str:
    p = Path(name_or_path)
    if p.exists():
        return str(p)

    if not str(name_or_path).endswith(".yaml"):
        p_with_yaml = Path(f"{name_or_path}.yaml")
        if p_with_yaml.exists():
            return str(p_with_yaml)

    base_name = p.name
    if not base_name.endswith(".yaml"):
        base_name = f"{base_name}.yaml"

    candidate = folder / base_name
    if candidate.exists():
        return str(candidate)

    raise FileNotFoundError(
        f"{kind} file not found: '{name_or_path}'\nLooked in:\n  - {name_or_path}\n  - {candidate}"
    )


def find_scenario_file(name_or_path: str) -> str:
    """
    Find a scenario file.

    1. If path exists as-is, use it
    2. If path exists with .yaml extension, use it
    3. Otherwise, look in the scenarios/ folder

    Raises:
        FileNotFoundError: If file cannot be found
    """
    return _find_yaml(name_or_path, scenarios_dir(), "Scenario")


def find_history_file(name_or_path: str) -> str:
    """Find a history file, falling back to outputs/histories/."""
    return _find_yaml(name_or_path, histories_dir(), "History")


__all__ = [
    "ensure_output_dirs",
    "find_history_file",
    "find_scenario_file",
    "histories_dir",
    "outputs_dir",
    "resolve_history_path",
    "scenarios_dir",
]
