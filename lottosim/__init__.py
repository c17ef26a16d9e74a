"""
Lottery draw Monte Carlo simulator.

Counts randomly generated 5+2 draws, keeps the most frequent ones and
checkpoints them so a restarted run can pick up roughly where it stopped.
"""

__version__ = "1.0.0"
