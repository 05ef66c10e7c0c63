#!/usr/bin/env python3
"""Dendrogram Report: Summarize every captured page shape for review.

Use case: After a crawl, cluster the distinct page shapes hierarchically and
export the tree for a report viewer.
"""

import json

from pageshape import Config, HierarchicalReport, HTMLEmbedder, PageInfo


if __name__ == "__main__":
    config = Config(embed_method="full_bot", sim_method="jaccard", hclust_method="single")
    embedder = HTMLEmbedder(config.embed_method)

    docs = [
        "<body><table><tr><td>1</td></tr></table></body>",
        "<body><table><tr><td>2</td><td>3</td></tr></table></body>",
        "<body><form action='/login'><input name='user'></form></body>",
        "<body><form action='/login'><input name='user'><input name='pass'></form></body>",
        "<body><p>About us</p></body>",
    ]
    pages = [(PageInfo(i, f"/page/{i}"), embedder.embed(doc)) for i, doc in enumerate(docs)]

    report = HierarchicalReport(config).build(pages)
    for merge in report.merges:
        print(f"merge {merge.left} + {merge.right} at {merge.distance:.3f}")

    print(json.dumps(report.to_dict(), indent=2))
