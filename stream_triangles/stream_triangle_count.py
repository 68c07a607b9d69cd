"""
Streaming Triangle Count (Estimate)

Reads an edge list, builds the vertex registry with Spark, then streams the
edges through the single-edge reservoir sampling loop. Every change of a
round's estimate is printed as (round,estimate) while the stream runs.
"""

import argparse
import random
import sys
import time

from stream_triangles.config import MAX_ROUNDS, TriangleCountConfig
from stream_triangles.edge_reader import initialize_spark, scan_graph
from stream_triangles.errors import ConfigurationError, MalformedInputError
from stream_triangles.pipeline import TriangleCountPipeline


def build_parser():
    parser = argparse.ArgumentParser(
        description="Estimate the triangle count of an edge stream by sampling"
    )
    parser.add_argument(
        "--data",
        type=str,
        default="data/sample_graph.txt",
        help=(
            "Path to edge list, one '<src> <trg>' per line "
            "(default: data/sample_graph.txt)"
        ),
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=MAX_ROUNDS,
        help=f"Number of feedback rounds (default: {MAX_ROUNDS})",
    )
    parser.add_argument(
        "--edges",
        type=int,
        default=None,
        help="Edge count used by the estimate (default: counted from the data)",
    )
    parser.add_argument(
        "--vertices",
        type=int,
        default=None,
        help="Vertex count used by the estimate (default: counted from the data)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed (default: unseeded)"
    )
    parser.add_argument(
        "--schedule",
        choices=["stream", "rounds"],
        default="stream",
        help="Token schedule (default: stream)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the summary, not every estimate update",
    )
    return parser


def print_summary(pipeline, elapsed):
    print("\n" + "=" * 70)
    print("STREAM TRIANGLE COUNT RESULTS")
    print("=" * 70)
    print(f"Edges streamed:        {pipeline.edges_seen:,}")
    print(f"Tokens processed:      {pipeline.tokens_processed:,}")
    rounds = len(pipeline.estimates())
    print(f"Rounds with estimate:  {rounds:,} / {pipeline.config.max_rounds:,}")
    print(f"Total delta:           {pipeline.aggregator.total_delta():+,}")
    print(f"Execution Time:        {elapsed:.2f} seconds")

    if pipeline.dropped:
        first = pipeline.dropped[0]
        print(f"\nWarning: {len(pipeline.dropped):,} tokens dropped")
        print(
            f"  First: round {first.token.round}, "
            f"edge {tuple(first.token.edge)}: {first.error}"
        )

    estimates = pipeline.estimates()
    if estimates:
        print(f"\n{'Round':<10} | {'Estimate':<15}")
        print("-" * 30)
        for estimate in estimates[:10]:
            print(f"{estimate.round:<10} | {estimate.estimate:<15,}")
        if len(estimates) > 10:
            print(f"... and {len(estimates) - 10} more rounds")
    else:
        print("\nNo round produced an estimate.")
    print("=" * 70)


def main(argv=None):
    args = build_parser().parse_args(argv)

    print("=" * 70)
    print("STREAMING TRIANGLE COUNT (ESTIMATE)")
    print("=" * 70)
    print(f"Data file: {args.data}")
    print(f"Max rounds: {args.max_rounds}")
    print(f"Schedule: {args.schedule}")
    print("=" * 70)

    sc = initialize_spark("StreamTriangleCount")
    try:
        print("\n[Step 1] Scanning graph and building vertex registry...")
        start = time.time()
        scan = scan_graph(sc, args.data, random.Random(args.seed))
        print(
            f"  ✓ {scan.edge_count:,} edges, {scan.vertex_count:,} vertices "
            f"in {time.time() - start:.2f}s"
        )
    except MalformedInputError as err:
        print(f"Error: {err}")
        return 1
    finally:
        sc.stop()

    try:
        config = TriangleCountConfig.from_args(args, scan.edge_count, scan.vertex_count)
    except ConfigurationError as err:
        print(f"Error: {err}")
        return 2

    print("\n[Step 2] Sampling triangles...")
    print("Output format: (round,estimate)")
    pipeline = TriangleCountPipeline(scan.registry, config)
    start = time.time()
    for estimate in pipeline.run(scan.edges):
        if not args.quiet:
            print(f"({estimate.round},{estimate.estimate})")

    print_summary(pipeline, time.time() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
