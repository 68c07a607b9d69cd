"""
Per-round sampling state and the store that owns it.
"""

from stream_triangles.errors import RoundEvictedError, RoundOutOfRangeError


class RoundState:
    """
    Sampling state of one round: a single reservoir-sampled base edge, the
    third vertex completing its candidate triangle, and which of the two
    closing edges have been observed since the candidate was sampled.
    """

    __slots__ = (
        "trial_count",
        "candidate_src",
        "candidate_trg",
        "candidate_third",
        "src_edge_seen",
        "trg_edge_seen",
        "beta",
    )

    def __init__(self):
        self.trial_count = 1
        self.candidate_src = None
        self.candidate_trg = None
        self.candidate_third = None
        self.src_edge_seen = False
        self.trg_edge_seen = False
        self.beta = 0

    def resample(self, src, trg, third):
        self.candidate_src = src
        self.candidate_trg = trg
        self.candidate_third = third
        self.src_edge_seen = False
        self.trg_edge_seen = False

    def candidate(self):
        return self.candidate_src, self.candidate_trg, self.candidate_third

    def __repr__(self):
        return (
            f"RoundState(i={self.trial_count}, candidate={self.candidate()}, "
            f"seen=({self.src_edge_seen}, {self.trg_edge_seen}), beta={self.beta})"
        )


class RoundStateStore:
    """
    Arena of RoundState slots indexed by round number, bounded by the round
    budget. A slot is created on first access and lives until evicted; an
    evicted round is never recreated.
    """

    def __init__(self, max_rounds):
        self.max_rounds = max_rounds
        self._slots = [None] * max_rounds
        self._evicted = set()
        self.live = 0

    def _check(self, round_number):
        if not 0 <= round_number < self.max_rounds:
            raise RoundOutOfRangeError(
                f"Round {round_number} outside [0, {self.max_rounds})"
            )
        if round_number in self._evicted:
            raise RoundEvictedError(f"State for round {round_number} was evicted")

    def get(self, round_number):
        """Fetch the state for a round, creating it on first access."""
        self._check(round_number)
        state = self._slots[round_number]
        if state is None:
            state = RoundState()
            self._slots[round_number] = state
            self.live += 1
        return state

    def peek(self, round_number):
        """Return the state for a round without creating it (None if absent)."""
        self._check(round_number)
        return self._slots[round_number]

    def evict(self, round_number):
        self._check(round_number)
        if self._slots[round_number] is not None:
            self._slots[round_number] = None
            self.live -= 1
        self._evicted.add(round_number)

    def evict_all(self):
        for round_number in range(self.max_rounds):
            if round_number not in self._evicted:
                self.evict(round_number)

    def __contains__(self, round_number):
        return (
            0 <= round_number < self.max_rounds
            and self._slots[round_number] is not None
        )

    def __len__(self):
        return self.live
