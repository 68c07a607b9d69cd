import pytest

from stream_triangles import stream_triangle_count
from stream_triangles.edge_reader import initialize_spark


@pytest.fixture(scope="module", autouse=True)
def spark_available():
    try:
        initialize_spark("StreamTriangleCliCheck").stop()
    except Exception as err:  # no JVM available
        pytest.skip(f"Spark unavailable: {err}")


def test_main_prints_estimates_and_summary(sample_graph_path, capsys):
    code = stream_triangle_count.main(
        ["--data", sample_graph_path, "--max-rounds", "200", "--seed", "5"]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "9 edges, 6 vertices" in out
    assert "(round,estimate)" in out
    assert "STREAM TRIANGLE COUNT RESULTS" in out
    assert ",36)" in out  # 9 * (6 - 2)


def test_main_reports_malformed_input(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("1 2\nnot an edge\n")
    assert stream_triangle_count.main(["--data", str(path), "--quiet"]) == 1
    assert "Malformed edge at line 2" in capsys.readouterr().out


def test_main_rejects_bad_configuration(sample_graph_path, capsys):
    code = stream_triangle_count.main(
        ["--data", sample_graph_path, "--vertices", "2", "--quiet"]
    )
    assert code == 2
    assert "vertex_count" in capsys.readouterr().out
