"""
Exceptions raised by the streaming triangle count estimator.

Sampling errors abort a single token; the pipeline records them and keeps
going. Configuration errors are fatal. Everything else signals a driver bug.
"""


class StreamTriangleError(Exception):
    """Base class for all estimator errors."""


class ConfigurationError(StreamTriangleError, ValueError):
    """Invalid estimator parameters (round budget, graph-size scalars, schedule)."""


class MalformedInputError(StreamTriangleError, ValueError):
    """A line of the edge list that does not parse into two integers."""

    def __init__(self, line, line_number=None):
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "input"
        super().__init__(f"Malformed edge at {where}: {line!r}")


class SamplingError(StreamTriangleError):
    """A candidate triangle could not be sampled for the current token."""


class EmptyRegistryError(SamplingError):
    """Vertex sampling requested before any vertex was registered."""


class InsufficientVerticesError(SamplingError):
    """Fewer than three vertices are known, so no third vertex can be drawn."""

    def __init__(self, size):
        self.size = size
        super().__init__(
            f"Need at least 3 registered vertices to sample a triangle, have {size}"
        )


class RegistryFrozenError(StreamTriangleError):
    """Registration attempted after the vertex registry was frozen."""


class RoundOutOfRangeError(StreamTriangleError, IndexError):
    """Round number outside the configured round budget."""


class RoundEvictedError(StreamTriangleError):
    """Access to a round whose state has already been evicted."""


class RoundClosedError(StreamTriangleError):
    """Contribution to a round whose aggregate was already finalized."""
