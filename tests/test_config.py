import argparse

import pytest

from stream_triangles.config import MAX_ROUNDS, TriangleCountConfig
from stream_triangles.errors import ConfigurationError


def test_defaults():
    config = TriangleCountConfig()
    assert config.max_rounds == MAX_ROUNDS == 5000
    assert (config.edge_count, config.vertex_count) == (954, 100)
    assert config.schedule == "stream"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_rounds": 0},
        {"max_rounds": -3},
        {"vertex_count": 2},
        {"edge_count": 0},
        {"schedule": "parallel"},
    ],
)
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        TriangleCountConfig(**kwargs)
    with pytest.raises(ValueError):
        TriangleCountConfig(**kwargs)


def test_from_args_prefers_explicit_sizes():
    args = argparse.Namespace(
        max_rounds=10, edges=None, vertices=50, seed=4, schedule="rounds"
    )
    config = TriangleCountConfig.from_args(args, edge_count=9, vertex_count=6)
    assert (config.edge_count, config.vertex_count) == (9, 50)
    assert config.seed == 4
    assert config.schedule == "rounds"
