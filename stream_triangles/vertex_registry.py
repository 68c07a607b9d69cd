"""
Vertex Registry: the population the third vertex of a candidate triangle is
drawn from. Built in one pass over the edge stream, then frozen.
"""

import random

from stream_triangles.errors import EmptyRegistryError, RegistryFrozenError


class VertexRegistry:
    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()
        self._vertices = []  # first-appearance order, indexed for uniform draws
        self._known = set()
        self.frozen = False

    @classmethod
    def from_edges(cls, edges, rng=None):
        """Register both endpoints of every edge, then freeze."""
        registry = cls(rng)
        for u, v in edges:
            registry.register(u)
            registry.register(v)
        registry.freeze()
        return registry

    def register(self, v):
        if self.frozen:
            raise RegistryFrozenError(
                f"Cannot register vertex {v!r}: registry is frozen"
            )
        if v not in self._known:
            self._known.add(v)
            self._vertices.append(v)

    def freeze(self):
        self.frozen = True
        return self

    def sample(self):
        """Return one registered vertex chosen uniformly at random."""
        if not self._vertices:
            raise EmptyRegistryError("Cannot sample a vertex from an empty registry")
        return self._vertices[int(self.rng.random() * len(self._vertices))]

    def __len__(self):
        return len(self._vertices)

    def __contains__(self, v):
        return v in self._known

    def __iter__(self):
        return iter(self._vertices)
