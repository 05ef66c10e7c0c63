from enum import Enum


class EmbedMethod(Enum):
    """HTML-to-vector embedding variants."""

    BOT = "bot"
    FULL_BOT = "full_bot"


class DissimilarityMethod(Enum):
    """Pairwise dissimilarity measures between sparse vectors."""

    COSINE = "cosine"
    JACCARD = "jaccard"
    COSINE_JACCARD = "cosine_jaccard"
    COSINE_INF = "cosine_inf"


class LinkageMethod(Enum):
    """Linkage rules for hierarchical agglomeration."""

    SINGLE = "single"
    AVERAGE = "average"


# Norms below this are treated as zero
EPS: float = 1e-8

# Attributes kept in full bag-of-tags structural paths, in path order
PATH_ATTRIBUTES: tuple[str, ...] = ("action", "href", "name")

# Tag and attribute of the synthetic nodes standing in for query parameters
QUERY_NODE_TAG: str = "input"
QUERY_NODE_ATTRIBUTE: str = "name"

DEFAULT_ROUND_DIGITS: int = 3
