import random

from stream_triangles.errors import EmptyRegistryError, InsufficientVerticesError
from stream_triangles.records import Outcome

# ==========================================
# PART 1: SINGLE-EDGE RESERVOIR SAMPLING
# ==========================================


def flip_coin(sides, rng=random):
    """
    Flip a coin that lands heads with probability 1 / sides.

    Args:
        sides: Number of edges observed so far in the round (i >= 1)
        rng: Random source with a random() method

    Returns:
        True if the current edge should replace the sampled base edge.
        Always True for sides == 1.
    """
    return rng.random() * sides < 1


def sample_third_vertex(registry, src, trg):
    """Draw vertices from the registry until one differs from both endpoints."""
    if len(registry) == 0:
        raise EmptyRegistryError("Cannot sample a third vertex from an empty registry")
    if len(registry) < 3:
        raise InsufficientVerticesError(len(registry))
    while True:
        third = registry.sample()
        if third != src and third != trg:
            return third


# ==========================================
# PART 2: TRIANGLE SAMPLER
# ==========================================


class TriangleSampler:
    """
    Maintains one candidate triangle per round and reports when its
    completion status flips.

    Each round keeps a uniform sample of one base edge (s, t) from the edges
    seen in that round, plus a uniformly drawn third vertex w. The candidate
    is closed (beta = 1) once both (s, w) and (t, w) have been observed
    since (s, t) was sampled.
    """

    def __init__(self, registry, store, rng=None):
        self.registry = registry
        self.store = store
        self.rng = rng if rng is not None else registry.rng

    def process(self, token):
        """
        Update the state of token.round with token.edge.

        Returns:
            Outcome(next_round, delta) where delta is +1 if the candidate was
            just completed, -1 if it was just broken and 0 otherwise.
        """
        s, t = token.edge
        state = self.store.get(token.round)

        # Reservoir step: replace the base edge with probability 1/i
        if flip_coin(state.trial_count, self.rng):
            third = sample_third_vertex(self.registry, s, t)
            state.resample(s, t, third)

        # Check whether one of the two closing edges was just observed
        w = state.candidate_third
        if (s == state.candidate_src and t == w) or (
            s == w and t == state.candidate_src
        ):
            state.src_edge_seen = True
        if (s == state.candidate_trg and t == w) or (
            s == w and t == state.candidate_trg
        ):
            state.trg_edge_seen = True

        state.trial_count += 1

        old_beta = state.beta
        state.beta = 1 if state.src_edge_seen and state.trg_edge_seen else 0

        if state.beta < old_beta:
            delta = -1
        elif state.beta > old_beta:
            delta = 1
        else:
            delta = 0
        return Outcome(token.round + 1, delta)
