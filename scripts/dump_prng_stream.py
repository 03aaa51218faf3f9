#!/usr/bin/env python3
"""
Print the raw xorshift128+ stream for a seed pair.

Handy for checking another implementation of the generator against this one.

Usage:
    python scripts/dump_prng_stream.py
    python scripts/dump_prng_stream.py --count 20 --seed0 0x1 --seed1 0x2 --bounded 23
"""

import argparse
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexfleet.prng import DEFAULT_SEED0, DEFAULT_SEED1, SeededRandom


def main():
    parser = argparse.ArgumentParser(description="Dump the xorshift128+ stream")
    parser.add_argument("--count", type=int, default=10, help="Number of values (default: 10)")
    parser.add_argument(
        "--seed0",
        type=lambda v: int(v, 0),
        default=DEFAULT_SEED0,
        help="First seed word (default: 0x%X)" % DEFAULT_SEED0,
    )
    parser.add_argument(
        "--seed1",
        type=lambda v: int(v, 0),
        default=DEFAULT_SEED1,
        help="Second seed word (default: 0x%X)" % DEFAULT_SEED1,
    )
    parser.add_argument(
        "--bounded",
        type=int,
        default=None,
        help="Print bounded(N) draws instead of raw 64-bit values",
    )
    args = parser.parse_args()

    rng = SeededRandom(args.seed0, args.seed1)
    for i in range(args.count):
        if args.bounded:
            print(f"{i:4d}  {rng.bounded(args.bounded)}")
        else:
            print(f"{i:4d}  0x{rng.next_uint64():016X}")


if __name__ == "__main__":
    main()
