#!/usr/bin/env python3
"""CLI for computing variance-normalizing kernel scale factors across datasets."""

import argparse
import csv
import json
import sys
from pathlib import Path

from joblib import Parallel, delayed
from tqdm import tqdm

# Ensure project root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.block_pairs import DEFAULT_BLOCK_SIZE
from src.datasets import SYNTHETIC_SHAPES, DirectoryDataset, SyntheticDataset
from src.kernel_statistics import DegenerateStatisticsError, NormalizeKernelUnitVariance
from src.kernels import ScaledKernel, parse_kernel_spec
from src.metrics import aggregate_results
from src.preprocessing import random_subsample, standardize_features


def normalize_item(name, X, kernel_spec, block_size, standardize):
    """Normalize one kernel on one point array. Returns result dict or None on failure."""
    try:
        if standardize:
            X, _, _ = standardize_features(X)
        kernel = ScaledKernel(parse_kernel_spec(kernel_spec))
        trainer = NormalizeKernelUnitVariance(block_size=block_size)
        try:
            factor = trainer.train(kernel, X)
        except DegenerateStatisticsError as e:
            print(f"  Degenerate statistics on {name} [{kernel_spec}]: {e}")
            factor = None
        result = trainer.statistics.as_dict()
        result['name'] = name
        result['kernel'] = kernel_spec
        result['scaling_factor'] = factor
        return result
    except ValueError as e:
        print(f"  Error on {name} [{kernel_spec}]: {e}")
        return None


def write_detailed_csv(results, path):
    """Write per-item, per-kernel results to CSV."""
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['item', 'kernel', 'n_samples', 'trace', 'mean',
                         'variance', 'scaling_factor'])
        for r in results:
            factor = r['scaling_factor']
            writer.writerow([
                r['name'], r['kernel'], r['n_samples'],
                f"{r['trace']:.8f}",
                f"{r['mean']:.8f}",
                f"{r['variance']:.8f}",
                f"{factor:.8f}" if factor is not None else '',
            ])


def write_summary_table(all_stats, path, block_size):
    """Write a markdown summary table comparing datasets and kernels."""
    with open(path, 'w') as f:
        f.write("# Kernel Variance Normalization — Summary\n\n")
        f.write(f"Block size: {block_size}\n\n")
        f.write("| Dataset | Kernel | Items | Degenerate | Trace (mean) | Kernel mean (mean) "
                "| Variance (mean) | Scaling factor (mean) | min | max |\n")
        f.write("|---------|--------|------:|-----------:|-------------:|-------------------:"
                "|----------------:|----------------------:|----:|----:|\n")
        for s in all_stats:
            f.write(f"| {s.dataset_name} | {s.kernel_name} | {s.n_items} | {s.n_degenerate} "
                    f"| {s.trace_mean:.6f} | {s.kernel_mean_mean:.6f} | {s.variance_mean:.6f} "
                    f"| {s.scaling_factor_mean:.6f} | {s.scaling_factor_min:.6f} "
                    f"| {s.scaling_factor_max:.6f} |\n")
        f.write("\nScaling factor = 1 / (trace/N − mean/N²).\n")


def build_dataset(name, args):
    """Construct a dataset object from a name string."""
    if name == 'synthetic':
        return SyntheticDataset(n_instances=args.n_instances, n_samples=args.n_samples)
    elif name in SYNTHETIC_SHAPES:
        return SyntheticDataset(shapes=[name], n_instances=args.n_instances,
                                n_samples=args.n_samples)
    else:
        # Treat as directory path
        return DirectoryDataset(name, max_points=args.n_points)


def run_dataset(dataset, kernel_spec, args):
    """Normalize one kernel on an entire dataset, return (results_list, stats)."""
    items = [(name, random_subsample(X, args.n_points, seed=args.seed)) for name, X in dataset]
    print(f"\n=== {dataset} — {kernel_spec} — {len(items)} items ===")

    if args.n_jobs == 1:
        results = []
        for name, X in tqdm(items, desc=str(dataset)):
            r = normalize_item(name, X, kernel_spec, args.block_size, args.standardize)
            if r is not None:
                results.append(r)
    else:
        results = Parallel(n_jobs=args.n_jobs, backend='loky')(
            delayed(normalize_item)(name, X, kernel_spec, args.block_size, args.standardize)
            for name, X in tqdm(items, desc=str(dataset))
        )
        results = [r for r in results if r is not None]

    dataset_name = getattr(dataset, 'root_dir', type(dataset).__name__)
    stats = aggregate_results(results, dataset_name=str(dataset_name), kernel_name=kernel_spec)
    return results, stats


def main(argv=None):
    parser = argparse.ArgumentParser(description="Kernel variance normalization")
    parser.add_argument('--datasets', nargs='+', default=['synthetic'],
                        help='Dataset names or directory paths (synthetic, '
                             + ', '.join(SYNTHETIC_SHAPES) + ', or a path)')
    parser.add_argument('--kernels', nargs='+', default=['linear', 'rbf:gamma=1.0'],
                        help='Kernel specs, e.g. "rbf:gamma=0.5" or "polynomial:degree=3"')
    parser.add_argument('--n-points', type=int, default=512,
                        help='Maximum points per item (subsampled)')
    parser.add_argument('--n-samples', type=int, default=256,
                        help='Samples per synthetic item')
    parser.add_argument('--n-instances', type=int, default=3,
                        help='Instances per synthetic shape')
    parser.add_argument('--block-size', type=int, default=DEFAULT_BLOCK_SIZE,
                        help='Tile size of the pair traversal')
    parser.add_argument('--standardize', action='store_true',
                        help='Z-score features before normalizing')
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--n-jobs', type=int, default=1,
                        help='Parallel workers (1=sequential)')
    parser.add_argument('--output-dir', type=str, default='results')
    args = parser.parse_args(argv)

    out = Path(args.output_dir)
    out.mkdir(parents=True, exist_ok=True)

    kernel_specs = []
    for kernel_spec in args.kernels:
        try:
            parse_kernel_spec(kernel_spec)
        except ValueError as e:
            print(f"Skipping kernel {kernel_spec}: {e}")
            continue
        kernel_specs.append(kernel_spec)

    all_results = []
    all_stats = []

    for ds_name in args.datasets:
        try:
            dataset = build_dataset(ds_name, args)
        except FileNotFoundError as e:
            print(f"Skipping {ds_name}: {e}")
            continue

        for kernel_spec in kernel_specs:
            results, stats = run_dataset(dataset, kernel_spec, args)
            all_results.extend(results)
            all_stats.append(stats)

            print(f"  Items normalized: {stats.n_items}")
            print(f"  Degenerate: {stats.n_degenerate}")
            print(f"  Trace mean: {stats.trace_mean:.6f}")
            print(f"  Scaling factor mean: {stats.scaling_factor_mean:.6f}")

    write_summary_table(all_stats, out / 'summary_table.md', args.block_size)
    write_detailed_csv(all_results, out / 'detailed_results.csv')
    with open(out / 'summary.json', 'w') as f:
        json.dump({
            'config': vars(args),
            'summaries': [vars(s) for s in all_stats],
        }, f, indent=2)
    print(f"\nSummary: {out / 'summary_table.md'}")
    print(f"Details: {out / 'detailed_results.csv'}")
    return all_stats


if __name__ == '__main__':
    main()
