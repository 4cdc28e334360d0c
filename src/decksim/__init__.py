"""decksim: deck probability simulation engine."""

__version__ = "0.1.0"
