"""Dissimilarity measures between sparse vectors.

Every measure returns a non-negative score where 0 means identical. None of
them is guaranteed to satisfy the triangle inequality.
"""

from collections.abc import Callable

from pageshape.config import coerce_method
from pageshape.const import EPS, DissimilarityMethod
from pageshape.vector import SparseVector, dot, dot_inf, jaccard_sim

DissimilarityFn = Callable[..., float]


def _cosine_sim(x: SparseVector, y: SparseVector, x_norm: float, y_norm: float) -> float:
    # A single zero vector shares no direction with anything
    if x_norm < EPS or y_norm < EPS:
        return 0.0
    return dot(x, y) / (x_norm * y_norm)


def cosine(
    x: SparseVector,
    y: SparseVector,
    x_norm: float | None = None,
    y_norm: float | None = None,
) -> float:
    """Returns 2 - 2 * cos(x, y)."""
    x_norm = x.l2norm() if x_norm is None else x_norm
    y_norm = y.l2norm() if y_norm is None else y_norm
    if x_norm < EPS and y_norm < EPS:
        return 0.0
    return max(0.0, 2.0 - 2.0 * _cosine_sim(x, y, x_norm, y_norm))


def jaccard(
    x: SparseVector,
    y: SparseVector,
    x_norm: float | None = None,
    y_norm: float | None = None,
) -> float:
    """Returns 1 - Jaccard index of the key sets."""
    if not x and not y:
        return 0.0
    return 1.0 - jaccard_sim(x, y)


def cosine_jaccard(
    x: SparseVector,
    y: SparseVector,
    x_norm: float | None = None,
    y_norm: float | None = None,
) -> float:
    """Returns 2 - 2 * (cos(x, y) * jaccard(x, y))^2."""
    if not x and not y:
        return 0.0
    x_norm = x.l2norm() if x_norm is None else x_norm
    y_norm = y.l2norm() if y_norm is None else y_norm
    if x_norm < EPS and y_norm < EPS:
        return 0.0
    return max(0.0, 2.0 - 2.0 * (_cosine_sim(x, y, x_norm, y_norm) * jaccard_sim(x, y)) ** 2)


def cosine_inf(
    x: SparseVector,
    y: SparseVector,
    x_norm: float | None = None,
    y_norm: float | None = None,
) -> float:
    """Returns 1 - key overlap over the geometric mean of key counts."""
    if not x and not y:
        return 0.0
    return 1.0 - dot_inf(x, y)


DISSIMILARITIES: dict[DissimilarityMethod, DissimilarityFn] = {
    DissimilarityMethod.COSINE: cosine,
    DissimilarityMethod.JACCARD: jaccard,
    DissimilarityMethod.COSINE_JACCARD: cosine_jaccard,
    DissimilarityMethod.COSINE_INF: cosine_inf,
}


def get_dissimilarity(method: DissimilarityMethod | str) -> DissimilarityFn:
    """Returns the measure for a method name. Raises ValueError if unknown."""
    return DISSIMILARITIES[coerce_method(DissimilarityMethod, method)]
