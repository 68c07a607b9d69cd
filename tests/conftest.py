# Ensure repository root is on sys.path for `from stream_triangles import ...`
import os
import sys

import pytest

_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from stream_triangles.vertex_registry import VertexRegistry  # noqa: E402


class ScriptedRandom:
    """Random source that replays a fixed list of random() values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        if not self.values:
            raise AssertionError(f"ScriptedRandom exhausted after {self.calls} draws")
        self.calls += 1
        return self.values.pop(0)


TRIANGLE = [(1, 2), (2, 3), (3, 1)]
STAR = [(0, 1), (0, 2), (0, 3), (0, 4), (0, 5)]


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def triangle_edges():
    return list(TRIANGLE)


@pytest.fixture
def star_edges():
    return list(STAR)


@pytest.fixture
def triangle_registry():
    def _make(rng):
        return VertexRegistry.from_edges(TRIANGLE, rng)

    return _make


@pytest.fixture
def sample_graph_path():
    return os.path.join(_REPO_ROOT, "data", "sample_graph.txt")
