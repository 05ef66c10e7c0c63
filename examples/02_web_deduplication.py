#!/usr/bin/env python3
"""Web Deduplication: Skip pages that share a template during a crawl.

Use case: A crawler fuzzing a web application revisits the same page shape
under many URLs. Filing each response under its nearest cluster lets it test
one representative per shape.
"""

import json

from pageshape import ClusteringSession, Config


def crawl_step(
    session: ClusteringSession,
    body: str,
    path: str,
    query: dict[str, str] | None = None,
) -> bool:
    """Files a response and returns True if its shape is new.

    Args:
        session: Online clustering session shared across the crawl.
        body: HTTP response body.
        path: Request path.
        query: Request query parameters.

    Returns:
        True when the response opened a new cluster.
    """
    known = len(session.clusters)
    cluster = session.add_example(body, path, query)
    if cluster.forbidden:
        return False
    return len(session.clusters) > known


if __name__ == "__main__":
    pages = [
        # Product pages (same template)
        ("/item", {"id": "1"}, "<body><nav><a href='/'>Shop</a></nav><main><h1>iPhone</h1><p>$999</p></main></body>"),
        ("/item", {"id": "2"}, "<body><nav><a href='/'>Shop</a></nav><main><h1>iPad</h1><p>$599</p></main></body>"),
        # Login form
        ("/login", None, "<body><form action='/login'><input name='user'><input name='pass'></form></body>"),
        # Same product template again
        ("/item", {"id": "3"}, "<body><nav><a href='/'>Shop</a></nav><main><h1>Mac</h1><p>$1299</p></main></body>"),
    ]

    session = ClusteringSession(Config(embed_method="full_bot", sim_method="jaccard", threshold=0.2))
    for path, query, body in pages:
        is_new = crawl_step(session, body, path, query)
        print(f"{path} {query}: {'new shape' if is_new else 'duplicate'}")

    print(f"\n{len(session.history)} pages, {len(session.clusters)} shapes")
    print(json.dumps(session.export(), indent=2))
