"""
Tests for the free-card permutation search.

Test organization:
- test_branch.py: SimulationBranch construction, run and serialisation
- test_simulation.py: search order, short-circuiting and result accessors
- test_serialization.py: Simulation round trips and decode failures
"""
