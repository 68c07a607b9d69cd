import math
from collections import defaultdict
from fractions import Fraction

from stream_triangles.errors import RoundClosedError
from stream_triangles.records import Estimate


def scaled_estimate(sum_delta, edge_count, vertex_count):
    """
    Triangle estimate for one round: floor((1 / sum) * sum * e * (v - 2)).

    The sum cancels out, so any nonzero sum yields e * (v - 2); only whether
    the sum is zero decides if an estimate exists at all. Computed exactly so
    float rounding cannot shave one off the result.

    Returns:
        The estimate, or None when sum_delta is 0 (undefined).
    """
    if sum_delta == 0:
        return None
    scale = Fraction(1, sum_delta) * sum_delta
    return math.floor(scale * edge_count * (vertex_count - 2))


class Aggregator:
    """
    Sums forwarded deltas per round and keeps the latest estimate of each
    round. Rounds are independent: nothing is carried from one round's sum
    into another's.
    """

    def __init__(self, edge_count, vertex_count):
        self.edge_count = edge_count
        self.vertex_count = vertex_count
        self.sums = defaultdict(int)
        self.latest = {}  # round -> last emitted Estimate
        self.closed = set()
        self.contributions = 0

    def add(self, round_number, delta):
        """
        Add one forwarded delta to its round.

        Returns:
            The new Estimate for the round, or None if its sum is now zero.
            A zero sum emits nothing; the next nonzero contribution emits again.
        """
        if round_number in self.closed:
            raise RoundClosedError(f"Round {round_number} is already finalized")
        self.sums[round_number] += delta
        self.contributions += 1

        value = scaled_estimate(
            self.sums[round_number], self.edge_count, self.vertex_count
        )
        if value is None:
            self.latest.pop(round_number, None)
            return None
        estimate = Estimate(round_number, value)
        self.latest[round_number] = estimate
        return estimate

    def close_round(self, round_number):
        """Finalize a round and return its final Estimate (None if its sum is zero)."""
        self.closed.add(round_number)
        return self.latest.get(round_number)

    def estimates(self):
        """Latest Estimate of every round with a nonzero sum, in round order."""
        return [self.latest[r] for r in sorted(self.latest)]

    def total_delta(self):
        return sum(self.sums.values())
