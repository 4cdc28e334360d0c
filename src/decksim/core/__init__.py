"""Simulation engine and its game-state collaborators."""
