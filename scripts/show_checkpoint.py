#!/usr/bin/env python3
"""
Print the persisted top combinations as a table.
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd

from lottosim.checkpoint import CheckpointStore, CHECKPOINT_PATH
from lottosim.generator import MAIN_COUNT, validate_draw


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else CHECKPOINT_PATH
    store = CheckpointStore(path)
    if not store.exists():
        print(f"[Checkpoint] No checkpoint at {path}")
        return

    draws = store.load()
    print(f"[Checkpoint] {len(draws)} draws in {path}")
    if not draws:
        return

    records = []
    for rank, draw in enumerate(draws, 1):
        try:
            validate_draw(draw)
            valid = True
        except ValueError:
            valid = False
        records.append({
            "rank": rank,
            "main": " ".join(str(n) for n in draw[:MAIN_COUNT]),
            "bonus": " ".join(str(n) for n in draw[MAIN_COUNT:]),
            "valid": valid,
        })
    print(pd.DataFrame(records).to_string(index=False))


if __name__ == "__main__":
    main()
