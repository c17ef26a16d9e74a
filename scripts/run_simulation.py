#!/usr/bin/env python3
"""
Run the lottery draw simulation until interrupted.

Resumes from data/top_combinations.txt when it exists. A checkpoint that
cannot be written stops the run with exit status 1.
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lottosim.simulator import main


if __name__ == "__main__":
    main()
