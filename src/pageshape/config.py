from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from pageshape.const import (
    DEFAULT_ROUND_DIGITS,
    DissimilarityMethod,
    EmbedMethod,
    LinkageMethod,
)

E = TypeVar("E", bound=Enum)


def coerce_method(enum_cls: type[E], value: E | str) -> E:
    """Resolves a method name (or enum member) to a member of `enum_cls`."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        available = ", ".join(member.value for member in enum_cls)
        raise ValueError(
            f"Unknown {enum_cls.__name__}: {value!r}. Available: {available}"
        ) from e


@dataclass
class Config:
    """Page clustering configuration."""

    # Embedding
    embed_method: EmbedMethod | str = EmbedMethod.FULL_BOT

    # Dissimilarity shared by both clusterers
    sim_method: DissimilarityMethod | str = DissimilarityMethod.JACCARD

    # Offline hierarchical clustering
    hclust_method: LinkageMethod | str = LinkageMethod.SINGLE
    round_digits: int = DEFAULT_ROUND_DIGITS

    # Online clustering: max dissimilarity to join an existing cluster
    threshold: float = 0.2

    def __post_init__(self):
        """Resolves method names and validates numeric parameters."""
        self.embed_method = coerce_method(EmbedMethod, self.embed_method)
        self.sim_method = coerce_method(DissimilarityMethod, self.sim_method)
        self.hclust_method = coerce_method(LinkageMethod, self.hclust_method)

        assert self.threshold >= 0, f"threshold must be non-negative, got {self.threshold}"
        assert self.round_digits >= 0, (
            f"round_digits must be non-negative, got {self.round_digits}"
        )
