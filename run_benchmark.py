#!/usr/bin/env python3
"""
Benchmark prime bag operations across all backing widths.

Builds bags from random raw values and times:
1. count_instances of the elements with index 0 and 1
2. intersection of neighbouring bags
3. union of neighbouring bags (empty bag when the union overflows)
4. forward, backward and grouped iteration

Usage:
    python run_benchmark.py
    python run_benchmark.py --config config/default.yaml --count 1000
"""

import argparse
import os
import time
from pathlib import Path

import numpy as np
import pandas as pd

from prime_bag import PrimeBag8, PrimeBag16, PrimeBag32, PrimeBag64, PrimeBag128
from prime_bag.config import CONFIG_ENV_VAR, load_config

BAG_TYPES = {
    8: PrimeBag8,
    16: PrimeBag16,
    32: PrimeBag32,
    64: PrimeBag64,
    128: PrimeBag128,
}


def random_raw_values(bits: int, count: int, rng: np.random.Generator) -> list:
    """
    Draw `count` uniform raw values of the given width.

    128-bit values are composed from two 64-bit draws. Zero is mapped to 1,
    the empty bag.
    """
    if bits <= 64:
        draws = rng.integers(0, (1 << bits) - 1, size=count,
                             dtype=np.uint64, endpoint=True)
        values = [int(x) for x in draws]
    else:
        hi = rng.integers(0, (1 << 64) - 1, size=count, dtype=np.uint64, endpoint=True)
        lo = rng.integers(0, (1 << 64) - 1, size=count, dtype=np.uint64, endpoint=True)
        values = [(int(h) << 64) | int(l) for h, l in zip(hi, lo)]
    return [max(v, 1) for v in values]


def count_first_two(bags: list) -> tuple:
    t0 = 0
    t1 = 0
    for bag in bags:
        t0 += bag.count_instances(0)
        t1 += bag.count_instances(1)
    return t0, t1


def intersect_all(bags: list) -> int:
    total = 0
    for left, right in zip(bags, bags[1:]):
        total += left.intersection(right).into_inner()
    return total


def union_all(bags: list) -> int:
    total = 0
    for left, right in zip(bags, bags[1:]):
        union = left.try_union(right)
        if union is None:
            union = type(left).empty()
        total += union.into_inner()
    return total


def iterate_forward(bags: list) -> int:
    return sum(len(list(bag)) for bag in bags)


def iterate_backward(bags: list) -> int:
    return sum(len(list(reversed(bag))) for bag in bags)


def iterate_groups(bags: list) -> int:
    return sum(count for bag in bags for _, count in bag.iter_groups())


OPERATIONS = [
    ('count_instances', count_first_two),
    ('intersection', intersect_all),
    ('union', union_all),
    ('iter', iterate_forward),
    ('iter_rev', iterate_backward),
    ('iter_groups', iterate_groups),
]


def time_operation(func, bags: list, repeats: int) -> float:
    """Mean wall time per call, in microseconds."""
    start = time.perf_counter()
    for _ in range(repeats):
        func(bags)
    return (time.perf_counter() - start) / repeats * 1e6


def run_benchmark(widths: list, count: int, seed: int, repeats: int) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []

    for bits in widths:
        bag_type = BAG_TYPES[bits]
        bags = [bag_type.from_inner(v) for v in random_raw_values(bits, count, rng)]

        print(f"  u{bits}: {bag_type.helpers.num_primes} primes, "
              f"{sum(len(b) for b in bags):,} tabled elements in {count} bags")

        for name, func in OPERATIONS:
            mean_us = time_operation(func, bags, repeats)
            rows.append({
                'width': bits,
                'operation': name,
                'bags': count,
                'mean_us': mean_us,
                'per_bag_ns': mean_us * 1e3 / count,
            })

    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description='Benchmark prime bag operations')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    parser.add_argument('--count', type=int, default=None,
                        help='Bags per width (overrides config)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed (overrides config)')
    args = parser.parse_args()

    # Prime tables are sized from this file when first built
    os.environ.setdefault(CONFIG_ENV_VAR, args.config)
    config = load_config(os.environ[CONFIG_ENV_VAR])

    count = args.count if args.count is not None else config['count']
    seed = args.seed if args.seed is not None else config['seed']

    print("=" * 60)
    print("Prime Bag Benchmark")
    print("=" * 60)
    print(f"\nConfiguration:")
    print(f"  count = {count:,}")
    print(f"  seed = {seed}")
    print(f"  repeats = {config['repeats']}")
    print(f"  widths = {config['widths']}")
    print(f"  num_primes = {config['num_primes']}")
    print()

    output_dir = Path(config['output_dir'])
    output_dir.mkdir(parents=True, exist_ok=True)

    start = time.time()
    df = run_benchmark(config['widths'], count, seed, config['repeats'])
    print(f"\n   Completed in {time.time() - start:.1f}s")

    out_path = output_dir / 'benchmark.csv'
    df.to_csv(out_path, index=False)

    print("\n" + "=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(df.pivot(index='operation', columns='width', values='per_bag_ns')
          .round(1).to_string())
    print(f"\nResults saved to {out_path}")


if __name__ == '__main__':
    main()
