"""
Top-K Draw Selectors

Available selectors:
- sequential: single pass over the frequency table with a bounded min-heap
- parallel: sharded fold over a worker pool, pairwise merge of local lists

Both return a list of at most K TopKEntry values sorted by count descending.
Which entry wins an exact tie at the K-th position is not guaranteed, and the
two selectors may disagree there.
"""

from . import sequential
from . import parallel

__all__ = [
    "sequential",
    "parallel",
]
