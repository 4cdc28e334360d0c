"""
Serialised simulation models.

These describe the persisted snapshot of a simulation:
- SerialisedBranch: one explored timeline with its already-computed result
- SerialisedSimulation: baseline state, condition list and the flattened branches

Snapshot layout:
    game_state: {...}
    conditions: [{type: card, ...}, ...]
    branches:
      - result: false          # baseline for conditions[0]
        condition_index: 0
        parent: null
        depth: 0
      - result: true           # after using one free card
        condition_index: 0
        parent: 0
        depth: 1
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class SerialisedBranch(BaseModel):
    """Persisted form of a SimulationBranch."""

    model_config = ConfigDict(extra="forbid")

    result: StrictBool
    game_state: Dict[str, Any]
    condition: Dict[str, Any]

    # Position of the owning condition in SerialisedSimulation.conditions.
    # Optional so that bare {result, game_state, condition} payloads still load.
    condition_index: Optional[int] = Field(default=None, ge=0)

    # Index of the parent branch within the same condition (None for a baseline)
    parent: Optional[int] = Field(default=None, ge=0)
    depth: int = Field(default=0, ge=0)


class SerialisedSimulation(BaseModel):
    """Persisted form of a Simulation."""

    model_config = ConfigDict(extra="forbid")

    game_state: Dict[str, Any]
    conditions: List[Dict[str, Any]] = Field(default_factory=list)
    branches: List[SerialisedBranch] = Field(default_factory=list)


__all__ = ["SerialisedBranch", "SerialisedSimulation"]
