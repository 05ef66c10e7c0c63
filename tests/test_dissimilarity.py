import math

import pytest

from pageshape.const import DissimilarityMethod
from pageshape.dissimilarity import (
    DISSIMILARITIES,
    cosine,
    cosine_inf,
    cosine_jaccard,
    get_dissimilarity,
    jaccard,
)
from pageshape.vector import SparseVector

ALL_MEASURES = list(DISSIMILARITIES.values())


def test_jaccard_of_disjoint_vectors_is_one():
    x = SparseVector({"a": 1.0, "b": 2.0})
    y = SparseVector({"c": 3.0})
    assert jaccard(x, y) == 1.0


@pytest.mark.parametrize("measure", ALL_MEASURES)
def test_two_empty_vectors_are_identical(measure):
    assert measure(SparseVector(), SparseVector()) == 0.0


@pytest.mark.parametrize("measure", ALL_MEASURES)
def test_measures_are_symmetric_and_non_negative(measure, sample_vectors):
    for x in sample_vectors:
        for y in sample_vectors:
            d = measure(x, y)
            assert d >= 0.0
            assert d == pytest.approx(measure(y, x))


@pytest.mark.parametrize("measure", ALL_MEASURES)
def test_identical_vectors_have_zero_distance(measure, sample_vectors):
    for x in sample_vectors:
        assert measure(x, x.copy()) == pytest.approx(0.0, abs=1e-12)


def test_cosine_values():
    x = SparseVector({"a": 1.0})
    y = SparseVector({"b": 1.0})
    assert cosine(x, y) == pytest.approx(2.0)
    assert cosine(x, SparseVector({"a": 5.0})) == pytest.approx(0.0)


def test_cosine_with_one_zero_vector_is_maximal():
    assert cosine(SparseVector({"a": 1.0}), SparseVector()) == 2.0
    assert cosine(SparseVector({"a": 0.0}), SparseVector({"b": 0.0})) == 0.0


def test_cosine_uses_precomputed_norms():
    x = SparseVector({"a": 3.0, "b": 4.0})
    y = SparseVector({"a": 1.0})
    assert cosine(x, y, x_norm=5.0, y_norm=1.0) == pytest.approx(cosine(x, y))
    assert cosine(x, y) == pytest.approx(2.0 - 2.0 * 3.0 / 5.0)


def test_cosine_jaccard_value():
    x = SparseVector({"a": 1.0, "b": 1.0})
    y = SparseVector({"a": 1.0})
    cos_sim = 1 / math.sqrt(2)
    assert cosine_jaccard(x, y) == pytest.approx(2.0 - 2.0 * (cos_sim * 0.5) ** 2)


def test_cosine_inf_value():
    x = SparseVector({"a": 1.0, "b": 9.0})
    y = SparseVector({"a": 4.0})
    assert cosine_inf(x, y) == pytest.approx(1.0 - 1 / math.sqrt(2))
    assert cosine_inf(x, SparseVector()) == 1.0


def test_get_dissimilarity_by_name():
    assert get_dissimilarity("cosine") is cosine
    assert get_dissimilarity(DissimilarityMethod.COSINE_INF) is cosine_inf


def test_get_dissimilarity_rejects_unknown_names():
    with pytest.raises(ValueError, match="euclidean"):
        get_dissimilarity("euclidean")


def test_cosine_jaccard_with_two_zero_norm_vectors_is_zero():
    assert cosine_jaccard(SparseVector({"a": 0.0}), SparseVector({"b": 0.0})) == 0.0
