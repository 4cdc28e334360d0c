from __future__ import annotations

"""Persist simulations as YAML histories and read them back."""

import os
from pathlib import Path
from typing import Any, Dict

import yaml

from decksim.core.simulation import Simulation
from decksim.errors import DecodeError
from decksim.io.loaders.errors import LoaderError
from decksim.utils.logging import log_calls


def save_simulation(simulation: Simulation, file_path: str, *, name: str | None = None) -> None:
    """
    Save a serialised simulation to a YAML file.

    Args:
        simulation: Simulation to save
        file_path: Output file path
        name: Optional run name stored alongside the snapshot
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    data: Dict[str, Any] = {}
    if name:
        data["name"] = name
    data.update(simulation.serialise())

    with open(file_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, indent=2, sort_keys=False)


@log_calls()
def load_simulation(file_path: str) -> Simulation:
    """Load a simulation saved by :func:`save_simulation`."""
    if not os.path.exists(file_path):
        raise LoaderError(file_path, "History file not found")
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise LoaderError(file_path, "History file is not valid YAML", cause=exc) from exc

    if not isinstance(data, dict):
        raise LoaderError(file_path, "History file must contain a mapping")
    data.pop("name", None)

    try:
        return Simulation.deserialise(data)
    except DecodeError as exc:
        raise LoaderError(file_path, "Invalid simulation history", cause=exc) from exc


__all__ = ["load_simulation", "save_simulation"]
