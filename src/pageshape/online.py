"""Incremental nearest-cluster deduplication for live crawls."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pageshape.config import Config, coerce_method
from pageshape.const import DissimilarityMethod
from pageshape.dissimilarity import get_dissimilarity
from pageshape.embedder import HTMLEmbedder
from pageshape.urls import href_encode
from pageshape.vector import SparseVector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryRecord:
    """One example submitted to a session."""

    response: str
    path: str
    query: Mapping[str, Any] | None


class Cluster:
    """Growing set of page shapes compared by nearest member."""

    def __init__(self, id: int, sim_method: DissimilarityMethod | str):
        self.id = id
        self.sim_method = coerce_method(DissimilarityMethod, sim_method)
        self.version = 0
        self.forbidden = False
        self._dissim_fn = get_dissimilarity(self.sim_method)
        # member vector -> its L2 norm
        self._vectors: dict[SparseVector, float] = {}
        self._hrefs: dict[str, None] = {}

    def __repr__(self) -> str:
        return (
            f"Cluster(id={self.id}, vectors={len(self._vectors)}, "
            f"hrefs={len(self._hrefs)}, forbidden={self.forbidden})"
        )

    @property
    def vectors(self) -> tuple[SparseVector, ...]:
        return tuple(self._vectors)

    @property
    def hrefs(self) -> tuple[str, ...]:
        """Encoded hrefs in insertion order."""
        return tuple(self._hrefs)

    def add_example(self, vector: SparseVector, path: str, query: Mapping[str, Any] | None):
        if vector not in self._vectors:
            member = vector.copy()
            self._vectors[member] = member.l2norm()
        self._hrefs[href_encode(path, query)] = None

    def mark_forbidden(self):
        self.forbidden = True

    def dissim(self, vector: SparseVector) -> float:
        """Returns the smallest dissimilarity to any member (inf when empty)."""
        norm = vector.l2norm()
        best = math.inf
        for member, member_norm in self._vectors.items():
            d = self._dissim_fn(member, vector, x_norm=member_norm, y_norm=norm)
            if d < best:
                best = d
        return best

    def center(self) -> SparseVector:
        """Returns the mean of the member vectors."""
        center = SparseVector()
        for member in self._vectors:
            center.add_(member)
        if self._vectors:
            center.scale_(1.0 / len(self._vectors))
        return center

    def to_dict(self) -> dict[str, Any]:
        return {
            "urlset": sorted(self._hrefs),
            "center": dict(self.center().normalize_()),
        }


class ClusteringSession:
    """Online clustering state: clusters newest first plus every submitted example."""

    def __init__(self, config: Config | None = None, embedder: HTMLEmbedder | None = None):
        self.config = config or Config()
        self.embedder = embedder or HTMLEmbedder(self.config.embed_method)
        self._clusters: list[Cluster] = []
        self._history: list[HistoryRecord] = []

    @property
    def clusters(self) -> tuple[Cluster, ...]:
        return tuple(self._clusters)

    @property
    def history(self) -> tuple[HistoryRecord, ...]:
        return tuple(self._history)

    def classify(self, vector: SparseVector, threshold: float | None = None) -> Cluster | None:
        """Returns the nearest cluster within `threshold`; ties go to the newest.

        The threshold alone bounds a match: with `threshold >= 1.0` a cluster at
        distance exactly 1.0 qualifies.
        """
        threshold = self.config.threshold if threshold is None else threshold
        best, best_distance = None, math.inf
        for cluster in self._clusters:
            d = cluster.dissim(vector)
            if d <= threshold and d < best_distance:
                best, best_distance = cluster, d
        return best

    def add_vector(
        self, vector: SparseVector, path: str, query: Mapping[str, Any] | None
    ) -> Cluster:
        """Adds a pre-embedded example without recording history."""
        cluster = self.classify(vector)
        if cluster is None:
            cluster = Cluster(len(self._clusters) + 1, self.config.sim_method)
            self._clusters.insert(0, cluster)
            logger.debug("New cluster %d for %s", cluster.id, href_encode(path, query))
        cluster.add_example(vector, path, query)
        return cluster

    def add_example(
        self, response: str, path: str, query: Mapping[str, Any] | None = None
    ) -> Cluster:
        """Embeds a response body and files it under its nearest cluster."""
        self._history.append(HistoryRecord(response, path, query))
        return self.add_vector(self.embedder.embed(response), path, query)

    def export(self) -> list[dict[str, Any]]:
        return [cluster.to_dict() for cluster in self._clusters]
