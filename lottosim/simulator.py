"""
Lottery Monte Carlo Simulator

Generates random draws forever, counts every distinct draw, and keeps the
top 5 most frequent draws. The top-K list is checkpointed every
SAVE_FREQUENCY iterations and printed every REPORT_INTERVAL_SECONDS.

Resume is approximate: the checkpoint only holds draws, so each persisted
line is replayed as one occurrence and the iteration counter restarts at
len(top_k) * SAVE_FREQUENCY.
"""

import sys
import time

import pandas as pd

from lottosim.checkpoint import CheckpointStore, CheckpointError, CHECKPOINT_PATH, format_line
from lottosim.frequency import FrequencyModel, TOP_K
from lottosim.generator import DrawGenerator
from lottosim.selectors import sequential
from lottosim.selectors.parallel import ParallelSelector, NUM_WORKERS

SAVE_FREQUENCY = 10_000_000
REPORT_INTERVAL_SECONDS = 10


class SimulationContext:
    """All mutable simulation state: frequency tables, current top-K, iteration counter."""

    def __init__(self, model=None):
        self.model = model if model is not None else FrequencyModel()
        self.top_k = []
        self.iteration_count = 0


def top_k_table(entries) -> pd.DataFrame:
    """Render a top-K list as a rank / draw / count table."""
    records = []
    for rank, entry in enumerate(entries, 1):
        records.append({
            "rank": rank,
            "draw": format_line(entry.draw),
            "count": entry.count,
        })
    return pd.DataFrame(records, columns=["rank", "draw", "count"])


class Simulator:
    """
    Drives the generate -> record -> save -> recompute -> report loop.

    Parameters
    ----------
    store : CheckpointStore
    generator : DrawGenerator
    k : int
        Top-K list size.
    save_frequency : int
        Iterations between checkpoints.
    report_interval : float
        Seconds between console reports.
    clock : callable
        Monotonic time source, injectable for tests.
    """

    def __init__(self, store=None, generator=None, context=None, k=TOP_K,
                 save_frequency=SAVE_FREQUENCY, report_interval=REPORT_INTERVAL_SECONDS,
                 workers=NUM_WORKERS, use_processes=False, clock=time.monotonic,
                 verbose=True):
        self.store = store if store is not None else CheckpointStore(CHECKPOINT_PATH)
        self.generator = generator if generator is not None else DrawGenerator()
        self.context = context if context is not None else SimulationContext()
        self.k = k
        self.save_frequency = save_frequency
        self.report_interval = report_interval
        self.selector = ParallelSelector(k=k, workers=workers, use_processes=use_processes)
        self.clock = clock
        self.verbose = verbose
        self._last_report = None

    # ------------------------------------------------------------------
    # Resume phase
    # ------------------------------------------------------------------

    def resume(self):
        """
        Seed the frequency model from a prior checkpoint, if there is one.

        Returns True when a checkpoint was found.
        """
        if not self.store.exists():
            if self.verbose:
                print("[Simulator] No checkpoint found, starting from empty")
            return False

        ctx = self.context
        replayed = 0
        for draw in self.store.scan_lines():
            ctx.model.record(draw)
            replayed += 1

        ctx.top_k = sequential.select(ctx.model, self.k)
        ctx.iteration_count = len(ctx.top_k) * self.save_frequency
        loaded = self.store.restore()

        if self.verbose:
            print(f"[Simulator] Replayed {replayed} draws from {self.store.path}")
            print(f"[Simulator] Loaded combinations: {[list(d) for d in loaded]}")
            print(f"[Simulator] Resuming at iteration {ctx.iteration_count:,}")
        return True

    # ------------------------------------------------------------------
    # Simulate phase
    # ------------------------------------------------------------------

    def step(self):
        """Run one simulation iteration."""
        ctx = self.context
        draw = self.generator.generate()
        ctx.model.record(draw)

        # Saves the list computed on the previous iteration
        if ctx.iteration_count % self.save_frequency == 0:
            self.save()

        ctx.top_k = self.selector.select(ctx.model)
        ctx.iteration_count += 1

        now = self.clock()
        if self._last_report is None:
            self._last_report = now
        elif now - self._last_report >= self.report_interval:
            self.report()
            self._last_report = now
        return draw

    def run(self, max_iterations=None):
        """
        Loop forever, or for `max_iterations` steps when given.

        CheckpointError propagates: a failed save stops the simulation.
        """
        self._last_report = self.clock()
        done = 0
        try:
            while max_iterations is None or done < max_iterations:
                self.step()
                done += 1
        finally:
            self.close()
        return self.context

    def close(self):
        self.selector.close()

    def save(self):
        entries = self.context.top_k
        self.store.save(entries)
        if self.verbose:
            print("[Simulator] Saved top combinations:")
            for index, entry in enumerate(entries, 1):
                print(f"  {index}: {list(entry.draw)}")

    def report(self):
        if not self.verbose:
            return
        ctx = self.context
        print("\n" + "=" * 60)
        print(f"Top {self.k} combinations:")
        table = top_k_table(ctx.top_k)
        if table.empty:
            print("  (none yet)")
        else:
            print(table.to_string(index=False))
        print(f"Current iteration count: {ctx.iteration_count:,}")
        print(f"Distinct draws seen: {ctx.model.distinct_draws:,}")

        hot_cold = ctx.model.hot_cold_numbers()
        print(f"Hot numbers: {hot_cold['hot']}")
        print(f"Cold numbers: {hot_cold['cold']}")
        uniformity = ctx.model.uniformity_test()
        if uniformity["p_value"] is not None:
            print(f"Number uniformity chi2={uniformity['chi2']:.2f} (p={uniformity['p_value']:.4f})")
        print("=" * 60)


def main():
    """Resume if possible, then simulate until interrupted. A failed checkpoint exits with status 1."""
    simulator = Simulator()
    try:
        simulator.resume()
        print("[Simulator] Running until interrupted (Ctrl+C to stop)...")
        simulator.run()
    except CheckpointError as e:
        print(f"[Simulator] FATAL: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print(f"\n[Simulator] Stopped at iteration {simulator.context.iteration_count:,}")


if __name__ == "__main__":
    main()
