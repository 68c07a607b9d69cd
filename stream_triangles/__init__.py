from stream_triangles.aggregator import Aggregator, scaled_estimate
from stream_triangles.config import MAX_ROUNDS, TriangleCountConfig
from stream_triangles.errors import (
    ConfigurationError,
    EmptyRegistryError,
    InsufficientVerticesError,
    MalformedInputError,
    RegistryFrozenError,
    RoundClosedError,
    RoundEvictedError,
    RoundOutOfRangeError,
    SamplingError,
    StreamTriangleError,
)
from stream_triangles.pipeline import TriangleCountPipeline
from stream_triangles.round_state import RoundState, RoundStateStore
from stream_triangles.router import route
from stream_triangles.sampler import TriangleSampler, flip_coin
from stream_triangles.records import Edge, Estimate, Outcome, RouteDecision, Token
from stream_triangles.vertex_registry import VertexRegistry
