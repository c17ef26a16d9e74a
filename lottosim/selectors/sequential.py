"""
Sequential Top-K Selection

Keeps a min-heap of at most K entries keyed on count. An incoming entry only
evicts the heap minimum when its count is strictly greater, so on a tie the
incumbent stays. O(n log K) over the whole table, recomputed from scratch on
every call.
"""

import heapq

from lottosim.frequency import TOP_K, TopKEntry


def top_k(items, k=TOP_K):
    """
    Select the `k` highest-count draws.

    Parameters
    ----------
    items : iterable of (draw, count)
        Usually `FrequencyModel.draw_counts.items()`.
    k : int
        List size bound.

    Returns
    -------
    list of TopKEntry sorted by count descending; ties keep table order.
    """
    if k <= 0:
        return []

    # (count, seq, draw): seq keeps heap comparisons off the draw tuples
    heap = []
    for seq, (draw, count) in enumerate(items):
        if len(heap) < k:
            heapq.heappush(heap, (count, seq, draw))
        elif count > heap[0][0]:
            heapq.heapreplace(heap, (count, seq, draw))

    ranked = sorted(heap, key=lambda e: (-e[0], e[1]))
    return [TopKEntry(draw, count) for count, _, draw in ranked]


def select(model, k=TOP_K):
    """Top-K of a FrequencyModel."""
    return top_k(model.draw_counts.items(), k)
