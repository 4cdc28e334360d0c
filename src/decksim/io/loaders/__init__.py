from .errors import LoaderError
from .history_loader import load_simulation, save_simulation
from .scenario_loader import load_scenario, parse_scenario

__all__ = ["LoaderError", "load_scenario", "load_simulation", "parse_scenario", "save_simulation"]
