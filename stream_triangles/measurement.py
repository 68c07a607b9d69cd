"""
Measurement Script: Estimate Convergence vs Stream Position
Runs the estimator with several seeds over the same edge stream and records,
after every edge, how many rounds currently hold a closed candidate triangle.

Two numbers are reported per seed:
- the per-round estimate emitted by the aggregator, e * (v - 2) for every
  round whose delta sum is nonzero
- the closed-fraction estimate, (closed rounds / max rounds) * e * (v - 2),
  i.e. the share of rounds whose sampled candidate is currently closed
"""

import argparse
import csv
import os
import random
import sys
import time

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from stream_triangles.config import TriangleCountConfig
from stream_triangles.edge_reader import initialize_spark, scan_graph
from stream_triangles.errors import ConfigurationError, MalformedInputError
from stream_triangles.pipeline import TriangleCountPipeline
from stream_triangles.vertex_registry import VertexRegistry


def run_trace(edges, vertices, config):
    """
    Stream the edges once and trace the number of closed rounds.

    Args:
        edges: Edges in stream order
        vertices: Registry vertices in first-appearance order
        config: TriangleCountConfig (its seed drives the run)

    Returns:
        (pipeline, closed) where closed[k] is the number of rounds with a
        nonzero delta sum after the (k + 1)-th edge
    """
    registry = VertexRegistry(random.Random(config.seed))
    for v in vertices:
        registry.register(v)
    pipeline = TriangleCountPipeline(registry.freeze(), config)

    closed = np.zeros(len(edges), dtype=np.int64)
    for k, edge in enumerate(edges):
        for _ in pipeline.feed(edge):
            pass
        closed[k] = len(pipeline.aggregator.latest)
    pipeline.close()
    return pipeline, closed


def closed_fraction_estimate(closed, config):
    scale = config.edge_count * (config.vertex_count - 2)
    return closed / config.max_rounds * scale


def save_results(results, filename):
    with open(filename, "w", newline="") as csvfile:
        fieldnames = [
            "seed",
            "rounds_with_estimate",
            "round_estimate",
            "closed_fraction_estimate",
            "dropped_tokens",
            "execution_time",
        ]
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()
        for result in results:
            writer.writerow({name: result[name] for name in fieldnames})


def plot_convergence(traces, true_count, filename):
    """Mean and spread of the closed-fraction estimate across seeds."""
    traces = np.vstack(traces)
    mean = traces.mean(axis=0)
    std = traces.std(axis=0)
    x = np.arange(1, traces.shape[1] + 1)

    fig, ax = plt.subplots(figsize=(12, 7))
    ax.plot(x, mean, linewidth=2, color="#2E86AB", label="Mean estimate")
    ax.fill_between(
        x, mean - std, mean + std, alpha=0.3, color="#2E86AB", label="±1 std"
    )
    if true_count is not None:
        ax.axhline(
            y=true_count,
            color="r",
            linestyle="--",
            linewidth=2,
            label=f"True count ({true_count:,})",
        )
    ax.set_xlabel("Edges streamed", fontsize=12, fontweight="bold")
    ax.set_ylabel("Closed-fraction estimate", fontsize=12, fontweight="bold")
    ax.set_title(
        f"Triangle Estimate Convergence ({traces.shape[0]} seeds)",
        fontsize=14,
        fontweight="bold",
        pad=15,
    )
    ax.grid(True, alpha=0.3, linestyle="--")
    ax.legend(fontsize=10)
    plt.tight_layout()
    plt.savefig(filename, dpi=150, bbox_inches="tight")
    plt.close(fig)


def run_measurement(scan, max_rounds, seeds):
    """
    Run the estimator once per seed over a scanned graph.

    Args:
        scan: GraphScan of the input
        max_rounds: Round budget of every run
        seeds: Seeds to run

    Returns:
        (results, traces): one result dict and one closed-fraction trace per seed
    """
    vertices = list(scan.registry)
    results = []
    traces = []
    for seed in seeds:
        config = TriangleCountConfig(
            max_rounds=max_rounds,
            edge_count=scan.edge_count,
            vertex_count=scan.vertex_count,
            seed=seed,
        )
        start = time.time()
        pipeline, closed = run_trace(scan.edges, vertices, config)
        elapsed = time.time() - start

        estimates = pipeline.estimates()
        trace = closed_fraction_estimate(closed, config)
        traces.append(trace)
        results.append(
            {
                "seed": seed,
                "rounds_with_estimate": len(estimates),
                "round_estimate": estimates[-1].estimate if estimates else "",
                "closed_fraction_estimate": float(trace[-1]) if len(trace) else 0.0,
                "dropped_tokens": len(pipeline.dropped),
                "execution_time": elapsed,
            }
        )
        print(
            f"  seed={seed:<6} rounds={len(estimates):<6} "
            f"closed-fraction={results[-1]['closed_fraction_estimate']:<12.1f} "
            f"time={elapsed:.2f}s"
        )
    return results, traces


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Measure convergence of the streaming triangle estimate"
    )
    parser.add_argument("--data", type=str, default="data/sample_graph.txt")
    parser.add_argument("--max-rounds", type=int, default=500)
    parser.add_argument(
        "--seeds", type=int, nargs="+", default=[1, 2, 3, 4, 5], help="Seeds to run"
    )
    parser.add_argument(
        "--true-count",
        type=int,
        default=None,
        help="Known triangle count, for reference",
    )
    parser.add_argument("--output-dir", type=str, default="measurements")
    args = parser.parse_args(argv)

    print("=" * 80)
    print("STREAMING TRIANGLE ESTIMATE - CONVERGENCE MEASUREMENT")
    print("=" * 80)
    print(f"Data file: {args.data}")
    print(f"Max rounds: {args.max_rounds}")
    print(f"Seeds: {args.seeds}")
    print("=" * 80)

    print("\n[Step 1] Scanning graph...")
    sc = initialize_spark("StreamTriangleMeasurement")
    try:
        scan = scan_graph(sc, args.data)
    except MalformedInputError as err:
        print(f"Error: {err}")
        return 1
    finally:
        sc.stop()
    print(f"  ✓ {scan.edge_count:,} edges, {scan.vertex_count:,} vertices")

    print("\n[Step 2] Running estimator for each seed...")
    try:
        results, traces = run_measurement(scan, args.max_rounds, args.seeds)
    except ConfigurationError as err:
        print(f"Error: {err}")
        return 2

    finals = np.array([r["closed_fraction_estimate"] for r in results])
    print("\n" + "=" * 80)
    print("SUMMARY")
    print("=" * 80)
    print(f"Closed-fraction estimate: mean={finals.mean():.1f} std={finals.std():.1f}")
    if args.true_count:
        mape = np.abs(finals - args.true_count) / args.true_count
        print(f"True count: {args.true_count:,}  mean error: {mape.mean():.2%}")

    os.makedirs(args.output_dir, exist_ok=True)
    csv_filename = os.path.join(args.output_dir, "convergence.csv")
    save_results(results, csv_filename)
    print(f"  ✓ Results saved to {csv_filename}")

    if traces and len(traces[0]):
        graph_filename = os.path.join(args.output_dir, "convergence.png")
        plot_convergence(traces, args.true_count, graph_filename)
        print(f"  ✓ Graph saved to {graph_filename}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
