"""
Edge list input: "<src> <trg>" per line, integer vertex ids.

Two loaders are provided. read_edges() is a plain generator for local files
and tests; load_edges() reads the file as a Spark RDD, which scan_graph()
uses to build the vertex registry and measure the graph before sampling.
"""

import random

from pyspark import SparkConf, SparkContext, StorageLevel

from stream_triangles.errors import MalformedInputError
from stream_triangles.records import Edge
from stream_triangles.vertex_registry import VertexRegistry


def is_skippable(line):
    stripped = line.strip()
    return not stripped or stripped.startswith("#") or stripped.startswith("%")


def parse_edge_line(line, line_number=None):
    """
    Parse one "<src> <trg>" record.

    Raises:
        MalformedInputError: if the line is not exactly two integers
            separated by a single space
    """
    parts = line.rstrip("\r\n").split(" ")
    if len(parts) != 2:
        raise MalformedInputError(line, line_number)
    try:
        return Edge(int(parts[0]), int(parts[1]))
    except ValueError:
        raise MalformedInputError(line, line_number) from None


def parse_edge_lines(lines):
    """Generator that yields edges from an iterable of text lines."""
    for line_number, line in enumerate(lines, 1):
        if is_skippable(line):
            continue
        yield parse_edge_line(line, line_number)


def read_edges(filepath):
    """Generator that yields edges (u, v) from a local file"""
    with open(filepath, "r") as f:
        yield from parse_edge_lines(f)


# ==========================================
# SPARK LOADING
# ==========================================


def initialize_spark(app_name="StreamTriangleCount"):
    """
    Initialize a local Spark context.

    Args:
        app_name: Name of the Spark application

    Returns:
        SparkContext
    """
    conf = SparkConf().setAppName(app_name).setMaster("local[*]")
    sc = SparkContext.getOrCreate(conf=conf)
    sc.setLogLevel("ERROR")
    return sc


def _parse_record(record):
    line, index = record
    try:
        return index, parse_edge_line(line, index + 1), None
    except MalformedInputError:
        return index, None, line


def load_edges(sc, filepath):
    """
    Load the edge list as an RDD of (index, Edge), index being the position
    of the line in the file.

    Raises:
        MalformedInputError: for the first line that does not parse, reported
            on the driver rather than as a failed Spark task
    """
    parsed = (
        sc.textFile(filepath)
        .zipWithIndex()
        .filter(lambda x: not is_skippable(x[0]))
        .map(_parse_record)
    )
    bad = parsed.filter(lambda x: x[1] is None).sortBy(lambda x: x[0]).take(1)
    if bad:
        index, _, line = bad[0]
        raise MalformedInputError(line, index + 1)
    return parsed.map(lambda x: (x[0], x[1]))


def ordered_vertices(edges_rdd):
    """
    Distinct vertices in order of first appearance in the stream, so that a
    fixed seed draws the same vertices on every run.
    """
    first_seen = (
        edges_rdd.flatMap(
            lambda x: [(x[1].src, 2 * x[0]), (x[1].trg, 2 * x[0] + 1)]
        )
        .reduceByKey(min)
        .sortBy(lambda x: x[1])
    )
    return first_seen.keys().collect()


class GraphScan:
    """Result of the registry-building pass over the input."""

    def __init__(self, edges, registry, edge_count, vertex_count):
        self.edges = edges
        self.registry = registry
        self.edge_count = edge_count
        self.vertex_count = vertex_count


def scan_graph(sc, filepath, rng=None):
    """
    First pass over the input: build and freeze the vertex registry and
    count edges and vertices.

    Args:
        sc: SparkContext
        filepath: Path to the edge list
        rng: Random source handed to the registry

    Returns:
        GraphScan with the edges in file order
    """
    edges_rdd = load_edges(sc, filepath).persist(StorageLevel.MEMORY_AND_DISK)
    try:
        edges = [edge for _, edge in edges_rdd.sortByKey().collect()]
        registry = VertexRegistry(rng if rng is not None else random.Random())
        for v in ordered_vertices(edges_rdd):
            registry.register(v)
        registry.freeze()
    finally:
        edges_rdd.unpersist()
    return GraphScan(edges, registry, len(edges), len(registry))
