"""
Feedback loop driver: runs tokens through Sampler -> Router -> Aggregator.

Tokens are processed strictly one at a time from a FIFO work queue, so
every round sees the edges in the order they arrived upstream.
"""

import random
from collections import deque

from stream_triangles.aggregator import Aggregator
from stream_triangles.errors import SamplingError
from stream_triangles.round_state import RoundStateStore
from stream_triangles.router import route
from stream_triangles.sampler import TriangleSampler
from stream_triangles.records import DroppedToken, advance, new_token
from stream_triangles.vertex_registry import VertexRegistry


class TriangleCountPipeline:
    """
    Streaming triangle count estimator.

    Args:
        registry: Frozen VertexRegistry of every vertex in the graph
        config: TriangleCountConfig
        rng: Random source for coin flips and vertex draws. Defaults to the
            registry's source so that one seed controls the whole run.
    """

    def __init__(self, registry, config, rng=None):
        if not registry.frozen:
            registry.freeze()
        self.registry = registry
        self.config = config
        self.rng = rng if rng is not None else registry.rng
        self.store = RoundStateStore(config.max_rounds)
        self.sampler = TriangleSampler(registry, self.store, self.rng)
        self.aggregator = Aggregator(config.edge_count, config.vertex_count)
        self.queue = deque()
        self.dropped = []
        self.edges_seen = 0
        self.tokens_processed = 0

    @classmethod
    def from_edges(cls, edges, config):
        """
        Two-phase construction: register every vertex of an edge collection,
        freeze the registry, then build the pipeline. edges must be re-iterable.
        """
        registry = VertexRegistry.from_edges(edges, random.Random(config.seed))
        return cls(registry, config)

    def step(self, token):
        """
        Process a single token.

        Returns:
            The Estimate it produced, or None. Recirculated tokens are queued.
        """
        try:
            outcome = self.sampler.process(token)
        except SamplingError as err:
            self.dropped.append(DroppedToken(token, err))
            return None
        self.tokens_processed += 1

        decision = route(token, outcome, self.config.max_rounds)
        next_token = advance(token, outcome)
        if decision.recirculate:
            self.queue.append(next_token)
        if decision.forward:
            return self.aggregator.add(next_token.round, next_token.delta)
        return None

    def drain(self):
        """Process queued tokens until the queue is empty, yielding each Estimate."""
        while self.queue:
            estimate = self.step(self.queue.popleft())
            if estimate is not None:
                yield estimate

    def feed(self, edge):
        """Push one edge through every round, yielding Estimates as they change."""
        self.edges_seen += 1
        self.queue.append(new_token(edge))
        yield from self.drain()

    def run(self, edges):
        """Run the configured schedule over an edge iterable."""
        if self.config.schedule == "rounds":
            yield from self.run_rounds(edges)
        else:
            yield from self.run_stream(edges)

    def run_stream(self, edges):
        for edge in edges:
            yield from self.feed(edge)
        self.close()

    def run_rounds(self, edges):
        """
        Run one round over all edges at a time. Round r's state is evicted,
        and the aggregate it feeds (round r + 1) closed, once every edge has
        passed through it.
        """
        tokens = [new_token(edge) for edge in edges]
        self.edges_seen += len(tokens)
        for round_number in range(self.config.max_rounds):
            next_tokens = []
            for token in tokens:
                estimate = self.step(token)
                if estimate is not None:
                    yield estimate
                # collect this round's recirculated tokens in arrival order
                while self.queue:
                    next_tokens.append(self.queue.popleft())
            self.store.evict(round_number)
            self.aggregator.close_round(round_number + 1)
            tokens = next_tokens
            if not tokens:
                break
        self.close()

    def close(self):
        """End of stream: finalize every round and release all round state."""
        self.store.evict_all()
        for round_number in range(1, self.config.max_rounds + 1):
            self.aggregator.close_round(round_number)

    def estimates(self):
        return self.aggregator.estimates()
