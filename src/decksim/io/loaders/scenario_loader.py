from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from decksim.core.file_spec import Scenario, ScenarioFileSpec
from decksim.errors import DecodeError
from decksim.io.loaders.errors import LoaderError
from decksim.utils.logging import log_calls

logger = logging.getLogger(__name__)


def _read_yaml_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_scenario(path: str) -> ScenarioFileSpec:
    """Read and validate a scenario file without building its game state."""
    if not os.path.exists(path):
        raise LoaderError(path, "Scenario file not found")
    try:
        data = _read_yaml_file(path)
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise LoaderError(path, "Scenario file is not valid YAML", cause=exc) from exc
    try:
        return ScenarioFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid scenario definition", cause=exc) from exc


@log_calls()
def load_scenario(path: str, *, seed: Optional[int] = None) -> Scenario:
    """Load a scenario file and deal its starting hand.

    Expected format:
    deck:
      Pot of Greed: 1
      Dark Magician: 1
      Filler: 38
    free_cards:
      Pot of Greed: {draw: 2}
    hand_size: 5
    conditions:
      - type: card
        card_name: Dark Magician
    """
    spec = parse_scenario(path)
    try:
        scenario = spec.build(seed=seed, default_name=Path(path).stem)
    except DecodeError as exc:
        raise LoaderError(path, "Invalid scenario condition", cause=exc) from exc
    except ValueError as exc:
        raise LoaderError(path, "Failed to build scenario", cause=exc) from exc

    logger.debug("Scenario %s: hand=%s", scenario.name, scenario.game_state.describe_hand())
    return scenario


__all__ = ["load_scenario", "parse_scenario"]
