"""Offline agglomerative clustering of page shapes and dendrogram export."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from pageshape.config import Config, coerce_method
from pageshape.const import DEFAULT_ROUND_DIGITS, DissimilarityMethod, LinkageMethod
from pageshape.dissimilarity import get_dissimilarity
from pageshape.vector import SparseVector, interp, round_half_up

logger = logging.getLogger(__name__)


@dataclass
class PageInfo:
    """One captured page."""

    id: int
    path: str
    query: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "path": self.path, "query": self.query}


@dataclass
class Entry:
    """A distinct page shape shared by one or more pages."""

    vector: SparseVector
    histogram: SparseVector
    pages: list[PageInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "infolist": [page.to_dict() for page in self.pages],
            "hist": dict(self.histogram),
            "origvec": dict(self.histogram),
            "vec": dict(self.vector),
        }


@dataclass
class Merge:
    """One agglomeration step. `left` < `right`; `left` survives as the merged cluster."""

    left: int
    right: int
    left_size: float
    right_size: float
    distance: float


@dataclass
class DendrogramNode:
    """Leaf (entry index, no children) or internal merge node (negative name)."""

    name: int
    vector: SparseVector
    distance: float | None = None
    children: tuple["DendrogramNode", "DendrogramNode"] | None = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def leaves(self) -> list[int]:
        """Returns entry indices under this node, left to right."""
        if self.children is None:
            return [self.name]
        left, right = self.children
        return left.leaves() + right.leaves()

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"name": self.name}
        if self.children is not None:
            node["dist"] = self.distance
            node["children"] = [child.to_dict() for child in self.children]
        node["vec"] = dict(self.vector)
        return node


def deduplicate(pages: Iterable[tuple[PageInfo, SparseVector]]) -> list[Entry]:
    """Groups pages with identical vectors, in first-seen order. Drops all-zero vectors."""
    groups: dict[SparseVector, list[PageInfo]] = {}
    for info, vec in pages:
        if vec.sum() == 0:
            continue
        groups.setdefault(vec, []).append(info)
    return [
        Entry(vector=vec.copy().normalize_(), histogram=vec, pages=infos)
        for vec, infos in groups.items()
    ]


def dissimilarity_matrix(
    vectors: Sequence[SparseVector],
    sim: DissimilarityMethod | str = DissimilarityMethod.COSINE,
) -> np.ndarray:
    """Returns the symmetric pairwise matrix with population sizes (1) on the diagonal."""
    dissim_fn = get_dissimilarity(sim)
    n = len(vectors)
    norms = [vec.l2norm() for vec in vectors]
    dmat = np.eye(n, dtype=np.float64)
    for i in range(n):
        for j in range(i):
            d = dissim_fn(vectors[i], vectors[j], x_norm=norms[i], y_norm=norms[j])
            dmat[i, j] = dmat[j, i] = d
    return dmat


def hclust(
    vectors: Sequence[SparseVector],
    method: LinkageMethod | str = LinkageMethod.AVERAGE,
    sim: DissimilarityMethod | str = DissimilarityMethod.COSINE,
) -> list[Merge]:
    """Agglomerates entries until one cluster remains; returns the n-1 merges in order.

    Ties between equal distances go to the first pair in row-major order over
    the lower triangle, so results depend on input order.
    """
    method = coerce_method(LinkageMethod, method)
    sim = coerce_method(DissimilarityMethod, sim)
    dmat = dissimilarity_matrix(vectors, sim)
    n = len(vectors)
    lower = np.tril(np.ones((n, n), dtype=bool), k=-1)

    merges: list[Merge] = []
    while True:
        sizes = np.diag(dmat).copy()
        active = sizes > 0.0
        if np.count_nonzero(active) < 2:
            break

        candidates = lower & active[:, None] & active[None, :] & ~np.isnan(dmat)
        if not candidates.any():
            break
        masked = np.where(candidates, dmat, np.inf)
        # argmin returns the first minimum in row-major order
        target2, target1 = divmod(int(np.argmin(masked)), n)
        distance = float(dmat[target2, target1])

        size1, size2 = float(sizes[target1]), float(sizes[target2])
        merges.append(Merge(target1, target2, size1, size2, distance))

        others = active.copy()
        others[[target1, target2]] = False
        row1, row2 = dmat[target1, others], dmat[target2, others]
        if method == LinkageMethod.SINGLE:
            merged = np.minimum(row1, row2)
        else:
            merged = (size1 * row1 + size2 * row2) / (size1 + size2)
        dmat[target1, others] = merged
        dmat[others, target1] = merged

        dmat[target1, target1] = size1 + size2
        dmat[target2, target2] = 0.0

    logger.debug(
        "hclust(%s, %s): %d entries, %d merges", method.value, sim.value, n, len(merges)
    )
    return merges


def build_dendrogram(
    merges: Sequence[Merge], vectors: Sequence[SparseVector]
) -> DendrogramNode | None:
    """Folds a merge history into a tree. Returns None for no entries."""
    if not vectors:
        return None
    nodes: dict[int, DendrogramNode] = {}
    for step, merge in enumerate(merges):
        left = nodes.pop(merge.left, None) or DendrogramNode(merge.left, vectors[merge.left])
        right = nodes.pop(merge.right, None) or DendrogramNode(merge.right, vectors[merge.right])
        nodes[merge.left] = DendrogramNode(
            name=-(step + 1),
            vector=interp(left.vector, right.vector, merge.left_size, merge.right_size),
            distance=merge.distance,
            children=(left, right),
        )
    if not merges:
        return DendrogramNode(0, vectors[0])
    # Index 0 is never absorbed, so it always ends up holding the root
    return nodes[0]


def round_tree(node: DendrogramNode, digits: int = DEFAULT_ROUND_DIGITS) -> DendrogramNode:
    """Rounds vectors and distances half-up in place."""
    if node.children is not None:
        for child in node.children:
            round_tree(child, digits)
    node.vector.round_(digits)
    if node.distance is not None:
        node.distance = round_half_up(node.distance, digits)
    return node


class HierarchicalReport:
    """Builds the dendrogram summary of all captured page shapes."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.entries: list[Entry] = []
        self.merges: list[Merge] = []
        self.root: DendrogramNode | None = None

    def build(self, pages: Iterable[tuple[PageInfo, SparseVector]]) -> "HierarchicalReport":
        self.entries = deduplicate(pages)
        vectors = [entry.vector for entry in self.entries]
        self.merges = hclust(vectors, self.config.hclust_method, self.config.sim_method)
        # Leaves get copies so rounding leaves entry vectors intact
        root = build_dendrogram(self.merges, [vec.copy() for vec in vectors])
        if root is not None:
            round_tree(root, self.config.round_digits)
        self.root = root
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "embed_method": self.config.embed_method.value,
            "hclust_method": self.config.hclust_method.value,
            "hclust_sim": self.config.sim_method.value,
            "root": None if self.root is None else self.root.to_dict(),
        }

    def entries_to_dicts(self) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self.entries]
