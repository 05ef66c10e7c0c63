from pageshape.urls import href_decode, href_encode, query_decode


def test_href_decode_splits_path_and_query():
    assert href_decode("/a/b?x=1&y=") == ("/a/b", {"x": "1", "y": ""})
    assert href_decode("http://example.com/p?q=2") == ("/p", {"q": "2"})


def test_href_decode_without_query():
    assert href_decode("/a") == ("/a", None)
    assert query_decode("") is None


def test_href_encode():
    assert href_encode("/a", None) == "/a"
    assert href_encode("/a", {}) == "/a"
    assert href_encode("/a", {"x": 1, "y": "b c"}) == "/a?x=1&y=b+c"
    assert href_encode(None, {"x": 1}) == "x=1"
