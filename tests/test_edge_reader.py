import pytest

from stream_triangles.edge_reader import parse_edge_line, parse_edge_lines, read_edges
from stream_triangles.errors import MalformedInputError
from stream_triangles.records import Edge


@pytest.mark.parametrize(
    "line, edge",
    [
        ("1 2", Edge(1, 2)),
        ("7 3\n", Edge(7, 3)),
        ("10 20\r\n", Edge(10, 20)),
        ("-1 4", Edge(-1, 4)),
    ],
)
def test_parse_valid_lines(line, edge):
    assert parse_edge_line(line) == edge


@pytest.mark.parametrize("line", ["1", "1  2", "1\t2", "1,2", "a b", "1 2 3", "1.5 2"])
def test_parse_malformed_lines(line):
    with pytest.raises(MalformedInputError):
        parse_edge_line(line)


def test_malformed_error_reports_line_number():
    lines = ["1 2", "# comment", "", "2 x"]
    with pytest.raises(MalformedInputError) as excinfo:
        list(parse_edge_lines(lines))
    assert excinfo.value.line_number == 4
    assert excinfo.value.line == "2 x"
    assert "line 4" in str(excinfo.value)


def test_read_edges_skips_headers_and_blank_lines(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("# Nodes: 3 Edges: 3\n% konect header\n1 2\n\n2 3\n3 1\n")
    assert list(read_edges(str(path))) == [Edge(1, 2), Edge(2, 3), Edge(3, 1)]


def test_sample_graph(sample_graph_path):
    edges = list(read_edges(sample_graph_path))
    assert len(edges) == 9
    assert edges[0] == Edge(1, 2)
