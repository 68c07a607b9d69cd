"""Feedback Router: decides where a processed token goes next."""

from stream_triangles.records import RouteDecision


def route(token, outcome, max_rounds):
    """
    Dispatch a processed token.

    Args:
        token: The token that was just processed
        outcome: Outcome(next_round, delta) returned by the sampler
        max_rounds: Round budget of the feedback loop

    Returns:
        RouteDecision(recirculate, forward). The token loops back while its
        next round is below the budget, and is forwarded to the aggregator
        whenever its delta is nonzero. Both can hold at once.
    """
    return RouteDecision(
        recirculate=outcome.next_round < max_rounds,
        forward=outcome.delta != 0,
    )
