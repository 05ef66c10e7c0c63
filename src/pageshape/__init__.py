"""pageshape: structural clustering of crawled web pages.

Embed HTML as sparse bag-of-tags vectors, deduplicate near-identical pages
online during a crawl, and summarize every captured page shape offline as a
dendrogram.
"""

from pageshape.config import Config
from pageshape.const import DissimilarityMethod, EmbedMethod, LinkageMethod
from pageshape.dissimilarity import (
    cosine,
    cosine_inf,
    cosine_jaccard,
    get_dissimilarity,
    jaccard,
)
from pageshape.embedder import HTMLEmbedder
from pageshape.hclust import (
    DendrogramNode,
    Entry,
    HierarchicalReport,
    Merge,
    PageInfo,
    build_dendrogram,
    deduplicate,
    hclust,
    round_tree,
)
from pageshape.online import Cluster, ClusteringSession, HistoryRecord
from pageshape.urls import href_decode, href_encode
from pageshape.vector import SparseVector, dot, dot_inf, interp, jaccard_sim

__all__ = [
    "Cluster",
    "ClusteringSession",
    "Config",
    "DendrogramNode",
    "DissimilarityMethod",
    "EmbedMethod",
    "Entry",
    "HTMLEmbedder",
    "HierarchicalReport",
    "HistoryRecord",
    "LinkageMethod",
    "Merge",
    "PageInfo",
    "SparseVector",
    "build_dendrogram",
    "cosine",
    "cosine_inf",
    "cosine_jaccard",
    "deduplicate",
    "dot",
    "dot_inf",
    "get_dissimilarity",
    "hclust",
    "href_decode",
    "href_encode",
    "interp",
    "jaccard",
    "jaccard_sim",
    "round_tree",
]
__version__ = "0.1.0"
