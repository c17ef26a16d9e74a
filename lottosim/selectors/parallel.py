"""
Parallel Top-K Selection

Map-reduce over the frequency table:
1. split the (draw, count) items into shards, one batch of work per worker
2. each shard folds into a local list of at most K entries, evicting the
   local minimum (found by linear scan) only on a strictly greater count
3. local lists are merged pairwise: concatenate, and when longer than K,
   sort by count descending and truncate

The pool fully joins before the result is returned, so the caller never
records a draw while a shard is still reading the table.
"""

import multiprocessing as mp
from functools import partial, reduce
from multiprocessing.pool import ThreadPool

from lottosim.frequency import TOP_K, TopKEntry

NUM_WORKERS = mp.cpu_count()
# Shards per worker; more shards smooths out uneven chunks
SHARDS_PER_WORKER = 4


def _split(items, n_shards):
    """Split a list into at most `n_shards` contiguous, non-empty chunks."""
    if not items:
        return []
    size = (len(items) + n_shards - 1) // n_shards
    return [items[i:i + size] for i in range(0, len(items), size)]


def local_top_k(shard, k=TOP_K):
    """Fold one shard into an unordered list of at most `k` entries."""
    acc = []
    for draw, count in shard:
        if len(acc) < k:
            acc.append(TopKEntry(draw, count))
            continue
        min_idx = min(range(len(acc)), key=lambda i: acc[i].count)
        if count > acc[min_idx].count:
            acc[min_idx] = TopKEntry(draw, count)
    return acc


def merge(left, right, k=TOP_K):
    """Combine two local lists, keeping the `k` highest counts."""
    combined = list(left) + list(right)
    if len(combined) > k:
        combined.sort(key=lambda e: e.count, reverse=True)
        del combined[k:]
    return combined


def _make_pool(processes, use_processes):
    if use_processes:
        return mp.Pool(processes)
    return ThreadPool(processes)


class ParallelSelector:
    """
    Holds a worker pool across calls so the simulation loop does not pay
    pool start-up on every iteration.

    Usage:
        with ParallelSelector() as selector:
            entries = selector.select(model)
    """

    def __init__(self, k=TOP_K, workers=NUM_WORKERS, use_processes=False):
        self.k = k
        self.workers = max(1, workers)
        self.use_processes = use_processes
        self._pool = None

    @property
    def pool(self):
        if self._pool is None:
            self._pool = _make_pool(self.workers, self.use_processes)
        return self._pool

    def top_k(self, items):
        """Top-K of a list of (draw, count) items, sorted by count descending."""
        if self.k <= 0:
            return []
        shards = _split(list(items), self.workers * SHARDS_PER_WORKER)
        if not shards:
            return []

        local_lists = self.pool.map(partial(local_top_k, k=self.k), shards)
        result = reduce(partial(merge, k=self.k), local_lists, [])
        return sorted(result, key=lambda e: e.count, reverse=True)

    def select(self, model):
        return self.top_k(model.snapshot())

    def close(self):
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
            self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def top_k(items, k=TOP_K, workers=NUM_WORKERS, use_processes=False):
    """One-shot parallel selection with a short-lived pool."""
    with ParallelSelector(k=k, workers=workers, use_processes=use_processes) as selector:
        return selector.top_k(items)


def select(model, k=TOP_K, workers=NUM_WORKERS):
    """Top-K of a FrequencyModel."""
    return top_k(model.snapshot(), k=k, workers=workers)
