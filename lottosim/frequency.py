"""
Frequency Model for the Lottery Simulation

Tracks how many times each distinct draw has been generated and how many
times each single number has appeared (main and bonus numbers share one
table, with no disambiguation by position).

The draw table grows without bound: almost every generated draw is new, and
no eviction is done.
"""

from collections import Counter
from typing import NamedTuple

import numpy as np
import pandas as pd
from scipy import stats

from lottosim.generator import Draw, MAIN_COUNT, MAIN_RANGE, BONUS_COUNT, BONUS_RANGE

TOP_K = 5
ALL_NUMBERS = list(range(1, MAIN_RANGE[1] + 1))


class TopKEntry(NamedTuple):
    """A (draw, count) pair of a top-K list."""
    draw: Draw
    count: int


def _expected_rate(number):
    """Expected appearances of `number` per draw under uniform sampling."""
    rate = MAIN_COUNT / (MAIN_RANGE[1] - MAIN_RANGE[0] + 1)
    if BONUS_RANGE[0] <= number <= BONUS_RANGE[1]:
        rate += BONUS_COUNT / (BONUS_RANGE[1] - BONUS_RANGE[0] + 1)
    return rate


class FrequencyModel:
    """
    Draw -> count and number -> count tables.

    Single writer: `record` is only ever called from the simulation thread,
    and selectors read the tables only between two `record` calls.
    """

    def __init__(self):
        self.draw_counts = {}
        self.number_counts = Counter()

    def __len__(self):
        return len(self.draw_counts)

    def record(self, draw: Draw):
        self.draw_counts[draw] = self.draw_counts.get(draw, 0) + 1
        for n in draw:
            self.number_counts[n] += 1

    def count(self, draw):
        return self.draw_counts.get(draw, 0)

    @property
    def total_draws(self):
        return sum(self.draw_counts.values())

    @property
    def distinct_draws(self):
        return len(self.draw_counts)

    def snapshot(self):
        """Return the (draw, count) items as a list, safe to shard across workers."""
        return list(self.draw_counts.items())

    # ------------------------------------------------------------------
    # Number frequency analysis
    # ------------------------------------------------------------------

    def number_frequency(self) -> pd.DataFrame:
        """
        Per-number appearance table for numbers 1-50.

        Returns
        -------
        pd.DataFrame indexed by number with columns:
            count         : observed appearances (main + bonus)
            expected      : appearances expected under uniform draws
            deviation_pct : (count - expected) / expected * 100
        """
        total = self.total_draws
        counts = np.array([self.number_counts.get(n, 0) for n in ALL_NUMBERS], dtype=np.int64)
        expected = np.array([total * _expected_rate(n) for n in ALL_NUMBERS], dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore"):
            deviation = np.where(expected > 0, (counts - expected) / expected * 100, 0.0)

        return pd.DataFrame(
            {"count": counts, "expected": expected, "deviation_pct": deviation.round(4)},
            index=pd.Index(ALL_NUMBERS, name="number"),
        )

    def uniformity_test(self) -> dict:
        """Chi-square goodness-of-fit of the number counts against uniform draws."""
        total = self.total_draws
        if total == 0:
            return {"chi2": None, "p_value": None, "total_draws": 0}

        table = self.number_frequency()
        observed = table["count"].to_numpy(dtype=np.float64)
        expected = table["expected"].to_numpy()
        # chisquare requires matching sums; both equal 7 * total
        expected = expected * (observed.sum() / expected.sum())
        chi2, p_value = stats.chisquare(observed, f_exp=expected)
        return {"chi2": float(chi2), "p_value": float(p_value), "total_draws": total}

    def hot_cold_numbers(self, n=5):
        """Numbers with the largest and smallest deviation from expectation."""
        table = self.number_frequency().sort_values("deviation_pct", ascending=False)
        return {
            "hot": [(int(num), int(row["count"])) for num, row in table.head(n).iterrows()],
            "cold": [(int(num), int(row["count"])) for num, row in table.tail(n).iterrows()],
        }
