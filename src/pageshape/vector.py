"""Sparse feature vectors keyed by feature name."""

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from pageshape.const import EPS


def round_half_up(value: float, digits: int = 0) -> float:
    """Rounds half away from zero on the shortest decimal representation."""
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class SparseVector(dict):
    """Mapping from feature key to weight; absent keys weigh 0.

    Equality and hashing are structural, so a vector can key a dict of
    duplicates. Do not mutate a vector once it has been hashed.
    """

    @classmethod
    def from_dict(cls, mapping: Mapping[str, float]) -> "SparseVector":
        return cls((key, float(value)) for key, value in mapping.items())

    def __hash__(self) -> int:  # type: ignore[override]
        return hash(self.canonical())

    def __repr__(self) -> str:
        return f"SparseVector({dict.__repr__(self)})"

    def canonical(self) -> tuple[tuple[str, float], ...]:
        """Returns items sorted by key, independent of insertion order."""
        return tuple(sorted(self.items()))

    def copy(self) -> "SparseVector":
        return SparseVector(self)

    # In-place operations return self for chaining

    def add_(self, other: Mapping[str, float]) -> "SparseVector":
        for key, value in other.items():
            self[key] = self.get(key, 0.0) + value
        return self

    def scale_(self, factor: float) -> "SparseVector":
        for key in self:
            self[key] *= factor
        return self

    def normalize_(self) -> "SparseVector":
        """Scales to unit L2 norm; near-zero vectors are left unchanged."""
        norm = self.l2norm()
        if norm >= EPS:
            self.scale_(1.0 / norm)
        return self

    def round_(self, digits: int = 0) -> "SparseVector":
        for key, value in self.items():
            self[key] = round_half_up(value, digits)
        return self

    def l2norm(self) -> float:
        return math.sqrt(dot(self, self))

    def sum(self) -> float:
        return math.fsum(self.values())


def dot(u: Mapping[str, float], v: Mapping[str, float]) -> float:
    """Returns the inner product over keys present in both vectors."""
    if len(u) > len(v):
        u, v = v, u
    return sum(value * v[key] for key, value in u.items() if key in v)


def dot_inf(u: Mapping[str, float], v: Mapping[str, float]) -> float:
    """Returns key overlap normalized by the geometric mean of key counts."""
    if not u or not v:
        return 0.0
    shared = len(u.keys() & v.keys())
    return shared / math.sqrt(len(u) * len(v))


def jaccard_sim(u: Mapping[str, float], v: Mapping[str, float]) -> float:
    """Returns |keys(u) & keys(v)| / |keys(u) | keys(v)|."""
    union = len(u.keys() | v.keys())
    if union == 0:
        return 0.0
    return len(u.keys() & v.keys()) / union


def interp(
    left: Mapping[str, float],
    right: Mapping[str, float],
    left_size: float,
    right_size: float,
) -> SparseVector:
    """Returns the population-weighted average of two vectors."""
    merged = SparseVector(left).scale_(left_size)
    merged.add_(SparseVector(right).scale_(right_size))
    return merged.scale_(1.0 / (left_size + right_size))
