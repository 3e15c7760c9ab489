"""Vector similarity primitives used by the brute-force store."""

from __future__ import annotations

import math
from collections.abc import Sequence


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Elementwise-product sum; ``0.0`` when the lengths differ."""
    if len(a) != len(b):
        return 0.0
    return sum(x * y for x, y in zip(a, b))


def magnitude(v: Sequence[float]) -> float:
    """Euclidean norm of *v*."""
    return math.sqrt(sum(x * x for x in v))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between *a* and *b*, in ``[-1, 1]``.

    Vectors of different length never match and score ``0.0``; so does a
    zero vector, whose direction is undefined.
    """
    if len(a) != len(b):
        return 0.0
    denominator = magnitude(a) * magnitude(b)
    if denominator == 0:
        return 0.0
    return dot(a, b) / denominator
