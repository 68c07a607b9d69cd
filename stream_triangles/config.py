"""Configuration for the streaming triangle count estimator."""

from stream_triangles.errors import ConfigurationError

# Round budget of the feedback loop
MAX_ROUNDS = 5000

# Default graph size: a 100-vertex, 954-edge random graph with 884 triangles
DEFAULT_EDGE_COUNT = 954
DEFAULT_VERTEX_COUNT = 100

SCHEDULES = ("stream", "rounds")


class TriangleCountConfig:
    """
    Parameters of one estimator run.

    Args:
        max_rounds: Number of feedback rounds each edge passes through
        edge_count: Number of edges in the graph (used only by the estimate)
        vertex_count: Number of vertices in the graph (used only by the estimate)
        seed: Seed of the random source, None for a nondeterministic run
        schedule: "stream" processes every edge through all rounds before
            reading the next one; "rounds" runs one round over all edges at a
            time and evicts finished rounds
    """

    def __init__(
        self,
        max_rounds=MAX_ROUNDS,
        edge_count=DEFAULT_EDGE_COUNT,
        vertex_count=DEFAULT_VERTEX_COUNT,
        seed=None,
        schedule="stream",
    ):
        self.max_rounds = max_rounds
        self.edge_count = edge_count
        self.vertex_count = vertex_count
        self.seed = seed
        self.schedule = schedule
        self.validate()

    def validate(self):
        if not isinstance(self.max_rounds, int) or self.max_rounds <= 0:
            raise ConfigurationError(
                f"max_rounds must be a positive integer, got {self.max_rounds!r}"
            )
        if not isinstance(self.edge_count, int) or self.edge_count <= 0:
            raise ConfigurationError(
                f"edge_count must be a positive integer, got {self.edge_count!r}"
            )
        if not isinstance(self.vertex_count, int) or self.vertex_count < 3:
            raise ConfigurationError(
                f"vertex_count must be an integer >= 3, got {self.vertex_count!r}"
            )
        if self.schedule not in SCHEDULES:
            raise ConfigurationError(
                f"schedule must be one of {SCHEDULES}, got {self.schedule!r}"
            )

    @classmethod
    def from_args(cls, args, edge_count=None, vertex_count=None):
        """Build a config from parsed CLI args, falling back to measured graph sizes."""
        return cls(
            max_rounds=args.max_rounds,
            edge_count=args.edges if args.edges is not None else edge_count,
            vertex_count=args.vertices if args.vertices is not None else vertex_count,
            seed=args.seed,
            schedule=args.schedule,
        )

    def __repr__(self):
        return (
            f"TriangleCountConfig(max_rounds={self.max_rounds}, "
            f"edge_count={self.edge_count}, vertex_count={self.vertex_count}, "
            f"seed={self.seed}, schedule={self.schedule!r})"
        )
