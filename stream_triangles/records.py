"""Value types flowing through the feedback loop."""

from collections import namedtuple

Edge = namedtuple("Edge", ["src", "trg"])

# One unit of work: the edge, the round it is processed in, and the delta
# computed for it in the previous round (0 for fresh edges)
Token = namedtuple("Token", ["edge", "round", "delta"])

Outcome = namedtuple("Outcome", ["next_round", "delta"])

RouteDecision = namedtuple("RouteDecision", ["recirculate", "forward"])

Estimate = namedtuple("Estimate", ["round", "estimate"])

DroppedToken = namedtuple("DroppedToken", ["token", "error"])


def new_token(edge):
    """Wrap an incoming edge as a round-0 token."""
    return Token(Edge(*edge), 0, 0)


def advance(token, outcome):
    """The token after processing: same edge, next round, new delta."""
    return Token(token.edge, outcome.next_round, outcome.delta)
