"""k-d Tree vs. Linear Scan Benchmark

Purpose:
    Compare exact k-NN query latency of the k-d tree with a numpy linear scan
    on synthetic uniform data, across a grid of dataset sizes, and check that
    both return the same neighbor distances.

Output:
    CSV rows with build time, average query latency for both methods and a
    mismatch count (should always be 0).

Usage:
    python benchmarks/kdtree_vs_linear_scan.py --sizes 1000 10000 50000 \
        --dim 3 --queries 200 --k 10 --out kdtree_bench.csv --plot
"""

from __future__ import annotations
import argparse
import csv
import os
import time
from typing import Dict, List

import numpy as np

from kdt import KDT, as_points


def linear_scan(base: np.ndarray, query: np.ndarray, k: int) -> np.ndarray:
    """Exact top-k squared distances by brute force."""
    dists = np.sum((base - query) ** 2, axis=1)
    if k >= len(dists):
        return np.sort(dists)
    top_idx = np.argpartition(dists, k)[:k]
    return np.sort(dists[top_idx])


def ensure_header(path: str, header: List[str]):
    if not os.path.exists(path) or os.path.getsize(path) == 0:
        with open(path, 'w', newline='') as f:
            csv.writer(f).writerow(header)


def run_one(size: int, dim: int, n_queries: int, k: int, rng: np.random.RandomState) -> Dict:
    base = rng.random_sample((size, dim))
    queries = rng.random_sample((n_queries, dim))

    t0 = time.time()
    index = KDT(as_points(base))
    build_time = time.time() - t0

    tree_time = 0.0
    scan_time = 0.0
    mismatches = 0
    for q in queries:
        t0 = time.time()
        found = index.query(q, k)
        tree_time += time.time() - t0

        t0 = time.time()
        expected = linear_scan(base, q, k)
        scan_time += time.time() - t0

        got = np.array([p.square_dist_to_query for p in found])
        if len(got) != len(expected) or not np.allclose(got, expected):
            mismatches += 1

    return {
        'size': size,
        'dim': dim,
        'k': k,
        'height': index.height(),
        'build_time_s': build_time,
        'kdtree_query_ms': 1000.0 * tree_time / n_queries,
        'linear_scan_ms': 1000.0 * scan_time / n_queries,
        'mismatches': mismatches,
    }


def plot_results(rows: List[Dict], path: str = "kdtree_vs_linear_scan.png"):
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("⚠️  matplotlib not available, skipping plots")
        return

    sizes = [r['size'] for r in rows]
    plt.figure(figsize=(8, 5))
    plt.plot(sizes, [r['kdtree_query_ms'] for r in rows], 'o-', label='k-d tree')
    plt.plot(sizes, [r['linear_scan_ms'] for r in rows], 's-', label='linear scan')
    plt.xscale('log')
    plt.yscale('log')
    plt.xlabel('Dataset size')
    plt.ylabel('Avg query latency (ms)')
    plt.title('Exact k-NN query latency')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.savefig(path, dpi=150, bbox_inches='tight')
    print(f"📈 Plot saved to {path}")


def parse_args():
    ap = argparse.ArgumentParser()
    ap.add_argument('--sizes', type=int, nargs='+', default=[1000, 10000, 50000])
    ap.add_argument('--dim', type=int, default=3)
    ap.add_argument('--queries', type=int, default=200)
    ap.add_argument('--k', type=int, default=10)
    ap.add_argument('--out', default='kdtree_bench.csv')
    ap.add_argument('--seed', type=int, default=42)
    ap.add_argument('--plot', action='store_true')
    return ap.parse_args()


def main():
    args = parse_args()
    rng = np.random.RandomState(args.seed)

    print("=== k-d Tree vs. Linear Scan ===")
    print(f"sizes={args.sizes} dim={args.dim} queries={args.queries} k={args.k}")

    header = ['size', 'dim', 'k', 'height', 'build_time_s',
              'kdtree_query_ms', 'linear_scan_ms', 'mismatches']
    ensure_header(args.out, header)

    rows = []
    for size in args.sizes:
        row = run_one(size, args.dim, args.queries, args.k, rng)
        rows.append(row)
        print(f"  n={size:>8} height={row['height']:>3} build={row['build_time_s']:.2f}s "
              f"tree={row['kdtree_query_ms']:.3f}ms scan={row['linear_scan_ms']:.3f}ms "
              f"mismatches={row['mismatches']}")
        with open(args.out, 'a', newline='') as f:
            csv.writer(f).writerow([row[h] for h in header])

    if args.plot:
        plot_results(rows)

    print(f"\nResults appended to {args.out}")


if __name__ == '__main__':
    main()
