"""
Random Draw Generator

Produces one EuroMillions-style draw per call: 5 distinct main numbers from
1-50 (sorted ascending) followed by 2 distinct bonus numbers from 1-10
(kept in generation order).
"""

from typing import Tuple

import numpy as np

MAIN_COUNT = 5
MAIN_RANGE = (1, 50)
BONUS_COUNT = 2
BONUS_RANGE = (1, 10)
DRAW_LENGTH = MAIN_COUNT + BONUS_COUNT

# 5 main numbers, then 2 bonus numbers
Draw = Tuple[int, ...]

MAIN_NUMBERS = np.arange(MAIN_RANGE[0], MAIN_RANGE[1] + 1)
BONUS_NUMBERS = np.arange(BONUS_RANGE[0], BONUS_RANGE[1] + 1)


def validate_draw(draw: Draw) -> Draw:
    """
    Check a draw against the draw invariants.

    Raises
    ------
    ValueError if the draw does not hold 5 distinct sorted main numbers in
    1-50 followed by 2 distinct bonus numbers in 1-10.
    """
    if len(draw) != DRAW_LENGTH:
        raise ValueError(f"Draw must have {DRAW_LENGTH} numbers, got {len(draw)}")

    main, bonus = list(draw[:MAIN_COUNT]), list(draw[MAIN_COUNT:])
    if any(n < MAIN_RANGE[0] or n > MAIN_RANGE[1] for n in main):
        raise ValueError(f"Main numbers must be in {MAIN_RANGE[0]}-{MAIN_RANGE[1]}: {main}")
    if len(set(main)) != MAIN_COUNT:
        raise ValueError(f"Main numbers must be distinct: {main}")
    if main != sorted(main):
        raise ValueError(f"Main numbers must be sorted ascending: {main}")
    if any(n < BONUS_RANGE[0] or n > BONUS_RANGE[1] for n in bonus):
        raise ValueError(f"Bonus numbers must be in {BONUS_RANGE[0]}-{BONUS_RANGE[1]}: {bonus}")
    if len(set(bonus)) != BONUS_COUNT:
        raise ValueError(f"Bonus numbers must be distinct: {bonus}")
    return draw


class DrawGenerator:
    """Uniform draw generator backed by a numpy RandomState."""

    def __init__(self, seed=None):
        self.rng = np.random.RandomState(seed)

    def generate(self) -> Draw:
        """Return one draw as a 7-tuple of ints (hashable, usable as a dict key)."""
        main = self.rng.choice(MAIN_NUMBERS, size=MAIN_COUNT, replace=False)
        bonus = self.rng.choice(BONUS_NUMBERS, size=BONUS_COUNT, replace=False)
        return tuple(int(n) for n in sorted(main)) + tuple(int(n) for n in bonus)

    def generate_many(self, n):
        return [self.generate() for _ in range(n)]
