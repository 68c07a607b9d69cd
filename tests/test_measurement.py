import csv

import numpy as np
import pytest

from stream_triangles import measurement
from stream_triangles.config import TriangleCountConfig
from stream_triangles.edge_reader import GraphScan, read_edges
from stream_triangles.errors import MalformedInputError
from stream_triangles.measurement import (
    closed_fraction_estimate,
    plot_convergence,
    run_measurement,
    run_trace,
    save_results,
)
from stream_triangles.vertex_registry import VertexRegistry


def _config(seed, max_rounds=100):
    return TriangleCountConfig(
        max_rounds=max_rounds, edge_count=9, vertex_count=6, seed=seed
    )


def test_run_trace_matches_final_estimates(sample_graph_path):
    edges = list(read_edges(sample_graph_path))
    pipeline, closed = run_trace(edges, [1, 2, 3, 4, 5, 6], _config(seed=8))
    assert closed.shape == (9,)
    assert closed[-1] == len(pipeline.estimates())
    assert np.all(closed >= 0) and np.all(closed <= 100)


def test_run_trace_is_reproducible(sample_graph_path):
    edges = list(read_edges(sample_graph_path))
    _, first = run_trace(edges, [1, 2, 3, 4, 5, 6], _config(seed=4))
    _, second = run_trace(edges, [1, 2, 3, 4, 5, 6], _config(seed=4))
    assert np.array_equal(first, second)


def test_closed_fraction_estimate_scales_by_graph_size():
    config = _config(seed=0, max_rounds=10)
    trace = closed_fraction_estimate(np.array([0, 5, 10]), config)
    assert trace.tolist() == [0.0, 18.0, 36.0]


def test_outputs_are_written(tmp_path):
    results = [
        {
            "seed": 1,
            "rounds_with_estimate": 3,
            "round_estimate": 36,
            "closed_fraction_estimate": 1.08,
            "dropped_tokens": 0,
            "execution_time": 0.01,
        }
    ]
    csv_path = tmp_path / "convergence.csv"
    save_results(results, str(csv_path))
    with open(csv_path) as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["seed"] == "1"
    assert rows[0]["round_estimate"] == "36"

    png_path = tmp_path / "convergence.png"
    plot_convergence([np.arange(5.0), np.arange(5.0) + 1], 5, str(png_path))
    assert png_path.stat().st_size > 0


class _StoppedContext:
    def __init__(self):
        self.stopped = False

    def stop(self):
        self.stopped = True


def _local_scan(path):
    edges = list(read_edges(path))
    registry = VertexRegistry.from_edges(edges)
    return GraphScan(edges, registry, len(edges), len(registry))


@pytest.fixture
def local_spark(monkeypatch):
    context = _StoppedContext()
    monkeypatch.setattr(measurement, "initialize_spark", lambda app_name: context)
    return context


def test_run_measurement_one_result_per_seed(sample_graph_path):
    results, traces = run_measurement(_local_scan(sample_graph_path), 30, [1, 2])
    assert [r["seed"] for r in results] == [1, 2]
    assert all(len(trace) == 9 for trace in traces)


def test_main_succeeds_with_zero_exit_status(
    sample_graph_path, local_spark, monkeypatch, tmp_path
):
    monkeypatch.setattr(measurement, "scan_graph", lambda sc, path: _local_scan(path))
    code = measurement.main(
        [
            "--data",
            sample_graph_path,
            "--max-rounds",
            "20",
            "--seeds",
            "1",
            "--output-dir",
            str(tmp_path),
        ]
    )
    assert code == 0
    assert local_spark.stopped
    assert (tmp_path / "convergence.csv").exists()
    assert (tmp_path / "convergence.png").exists()


def test_main_reports_malformed_input(local_spark, monkeypatch, tmp_path, capsys):
    def _bad_scan(sc, path):
        raise MalformedInputError("1 x", 2)

    monkeypatch.setattr(measurement, "scan_graph", _bad_scan)
    code = measurement.main(["--data", "bad.txt", "--output-dir", str(tmp_path)])
    assert code == 1
    assert local_spark.stopped
    assert "Error: Malformed edge at line 2" in capsys.readouterr().out
