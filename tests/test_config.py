import pytest

from pageshape import Config, DissimilarityMethod, EmbedMethod, LinkageMethod


def test_defaults():
    config = Config()
    assert config.embed_method is EmbedMethod.FULL_BOT
    assert config.sim_method is DissimilarityMethod.JACCARD
    assert config.hclust_method is LinkageMethod.SINGLE


def test_method_names_are_coerced():
    config = Config(embed_method="bot", sim_method="cosine_inf", hclust_method="average")
    assert config.embed_method is EmbedMethod.BOT
    assert config.sim_method is DissimilarityMethod.COSINE_INF
    assert config.hclust_method is LinkageMethod.AVERAGE


@pytest.mark.parametrize(
    "kwargs",
    [{"embed_method": "tfidf"}, {"sim_method": "euclidean"}, {"hclust_method": "complete"}],
)
def test_unknown_methods_raise(kwargs):
    with pytest.raises(ValueError, match="Unknown"):
        Config(**kwargs)


def test_negative_threshold_is_rejected():
    with pytest.raises(AssertionError):
        Config(threshold=-0.1)
