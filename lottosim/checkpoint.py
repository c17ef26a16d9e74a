"""
Checkpoint Store

Persists the current top-K list as plain text, one draw per line:

    <n1> <n2> <n3> <n4> <n5> <b1> <b2>

Counts are not written. Every save overwrites the whole file. A missing file
on the first run means "start from empty".
"""

import os
from contextlib import suppress
from typing import Optional

from lottosim.generator import Draw, DRAW_LENGTH

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")
CHECKPOINT_PATH = os.path.join(DATA_DIR, "top_combinations.txt")

# Storage width of a single number
MAX_TOKEN_VALUE = 255


class CheckpointError(RuntimeError):
    """Checkpoint could not be written, or could not be opened for a restore."""


def format_line(draw):
    return " ".join(str(int(n)) for n in draw)


def parse_line(line: str) -> Optional[Draw]:
    """
    Parse one checkpoint line into a draw.

    Returns None unless the line holds exactly 7 whitespace-separated decimal
    integers in 0-255. A single leading "+" on a token is accepted.
    """
    tokens = line.split()
    if len(tokens) != DRAW_LENGTH:
        return None
    numbers = []
    for tok in tokens:
        digits = tok[1:] if tok.startswith("+") else tok
        if not (digits.isascii() and digits.isdigit()):
            return None
        value = int(digits)
        if value > MAX_TOKEN_VALUE:
            return None
        numbers.append(value)
    return tuple(numbers)


class CheckpointStore:
    """Reads and writes the top-K checkpoint file."""

    def __init__(self, path=CHECKPOINT_PATH):
        self.path = os.fspath(path)

    def exists(self):
        return os.path.isfile(self.path)

    def save(self, entries):
        """
        Overwrite the checkpoint with the draws of `entries`, in list order.

        `entries` may hold TopKEntry values or bare draws.

        Raises
        ------
        CheckpointError if the file cannot be created or written.
        """
        temp_path = self.path + ".tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                for entry in entries:
                    draw = entry.draw if hasattr(entry, "draw") else entry
                    f.write(format_line(draw) + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.path)
        except OSError as e:
            with suppress(OSError):
                os.remove(temp_path)
            raise CheckpointError(f"Failed to save top combinations to {self.path}: {e}") from e

    def scan_lines(self):
        """Yield every parsable draw in file order; yields nothing if the file is absent."""
        if not self.exists():
            return
        with open(self.path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                draw = parse_line(line)
                if draw is not None:
                    yield draw

    def load(self):
        """Return the persisted draws in file order (empty on a cold start)."""
        return list(self.scan_lines())

    def restore(self):
        """
        Explicit restore: like `load`, but the checkpoint must exist.

        Raises
        ------
        CheckpointError if the file cannot be opened.
        """
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.readlines()
        except OSError as e:
            raise CheckpointError(f"Failed to open {self.path} for loading top combinations: {e}") from e
        return [draw for draw in (parse_line(line) for line in lines) if draw is not None]
