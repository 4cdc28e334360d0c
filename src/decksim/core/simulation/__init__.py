"""
Free-card permutation search.

Components:
- SimulationBranch: one explored timeline (state copy, condition, verdict)
- Simulation: baseline check plus depth-first search over free-card usage orders
- SerialisedBranch / SerialisedSimulation: persisted snapshot models

Example:
    from decksim.core.simulation import run_simulation

    simulation = run_simulation(game_state, [CardCondition(card_name="Dark Magician")])
    if simulation.result:
        simulation.log_summary()
"""

from decksim.core.simulation.branch import SimulationBranch
from decksim.core.simulation.models import SerialisedBranch, SerialisedSimulation
from decksim.core.simulation.simulation import Simulation, run_simulation

__all__ = [
    "SerialisedBranch",
    "SerialisedSimulation",
    "Simulation",
    "SimulationBranch",
    "run_simulation",
]
