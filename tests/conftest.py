import pytest

from pageshape import Config, SparseVector

LOGIN_PAGE = """
<html><body>
  <form action="/login">
    <input name="user"><input name="pass">
  </form>
  <a href="/item?id=1&amp;sort=asc">Item</a>
</body></html>
"""


@pytest.fixture
def login_page() -> str:
    return LOGIN_PAGE


@pytest.fixture
def cosine_config() -> Config:
    return Config(embed_method="bot", sim_method="cosine", hclust_method="average", threshold=0.3)


@pytest.fixture
def sample_vectors() -> list[SparseVector]:
    return [
        SparseVector({"div": 2.0, "span": 1.0}),
        SparseVector({"div": 1.0, "p": 3.0}),
        SparseVector({"form": 1.0, "input": 2.0}),
        SparseVector({"div": 2.0, "span": 2.0, "p": 1.0}),
        SparseVector({"table": 1.0, "tr": 4.0, "td": 8.0}),
    ]
