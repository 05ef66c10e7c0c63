#!/usr/bin/env python3
"""Quickstart: Embed pages and compare their structure."""

from pageshape import Config, HTMLEmbedder, get_dissimilarity

config = Config(embed_method="full_bot", sim_method="jaccard")
embedder = HTMLEmbedder(config.embed_method)
dissim = get_dissimilarity(config.sim_method)

html_docs = [
    "<body><nav><a href='/'>Home</a><a href='/about'>About</a></nav><main><h1>Welcome</h1></main></body>",
    "<body><nav><a href='/'>Home</a><a href='/about'>About</a></nav><main><h1>Hello</h1></main></body>",
    "<body><form action='/search'><input name='q'><button>Go</button></form></body>",
]

vectors = [embedder.embed(doc) for doc in html_docs]
for vec in vectors:
    print(f"{len(vec)} features: {sorted(vec)}")

print(f"Same template: {dissim(vectors[0], vectors[1]):.4f}")  # 0.0
print(f"Different template: {dissim(vectors[0], vectors[2]):.4f}")  # 1.0

# Query parameters become synthetic <input name=...> nodes under the anchor
vec = embedder.embed("<body><a href='/item?id=3&sort=asc'>Item</a></body>")
print(sorted(vec))
