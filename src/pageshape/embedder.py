"""HTML documents to structural sparse vectors."""

import logging
from collections.abc import Callable
from typing import Any

from lxml import etree, html

from pageshape.config import coerce_method
from pageshape.const import PATH_ATTRIBUTES, EmbedMethod
from pageshape.utils import element_children, expand_query_params, structural_path, tree_to_dict
from pageshape.vector import SparseVector

logger = logging.getLogger(__name__)

NodeCallback = Callable[[html.HtmlElement], None]

# Text is handed to lxml as UTF-8 bytes so XML declarations naming an encoding still parse
_UTF8_PARSER = html.HTMLParser(encoding="utf-8")


class HTMLEmbedder:
    """Converts HTML to bag-of-tags vectors.

    The tree is walked depth first, children before their parent. Entering an
    anchor rewrites its href to the bare path and attaches one synthetic
    `<input name=KEY>` child per query parameter, which is then visited like
    any other child.
    """

    def __init__(self, method: EmbedMethod | str = EmbedMethod.FULL_BOT):
        self.method = coerce_method(EmbedMethod, method)
        self._embed_fn = {
            EmbedMethod.BOT: self.bot,
            EmbedMethod.FULL_BOT: self.full_bot,
        }[self.method]

    def parse(self, html_content: str | bytes) -> html.HtmlElement | None:
        """Returns the document root, or None if nothing could be parsed."""
        try:
            if isinstance(html_content, str):
                return html.document_fromstring(html_content.encode("utf-8"), parser=_UTF8_PARSER)
            return html.document_fromstring(html_content)
        except (ValueError, etree.ParserError) as e:
            logger.debug("Unparseable document (%d chars): %s", len(html_content), e)
            return None

    def traverse(self, element: html.HtmlElement, visit: NodeCallback):
        """Visits every element post-order, expanding anchor query parameters on entry."""
        if element.tag == "a":
            expand_query_params(element)
        for child in element_children(element):
            self.traverse(child, visit)
        visit(element)

    def embed(self, html_content: str, callback: NodeCallback | None = None) -> SparseVector:
        """Returns the vector for the configured method. Empty vector means ignore the page."""
        return self._embed_fn(html_content, callback)

    def bot(self, html_content: str, callback: NodeCallback | None = None) -> SparseVector:
        """Bag-of-tags: counts occurrences of each tag name."""
        vec = SparseVector()
        root = self.parse(html_content)
        if root is None:
            return vec

        def visit(node: html.HtmlElement):
            if callback is not None:
                callback(node)
            vec[node.tag] = vec.get(node.tag, 0.0) + 1.0

        self.traverse(root, visit)
        return vec

    def full_bot(self, html_content: str, callback: NodeCallback | None = None) -> SparseVector:
        """Full bag-of-tags: counts leaf-most structural paths."""
        vec = SparseVector()
        root = self.parse(html_content)
        if root is None:
            return vec
        parents: set[html.HtmlElement] = set()

        def visit(node: html.HtmlElement):
            if callback is not None:
                callback(node)
            parent = node.getparent()
            if parent is not None:
                parents.add(parent)
            # Children come first, so any node with a visited child is already here
            if node in parents:
                return
            index = structural_path(node, PATH_ATTRIBUTES)
            vec[index] = vec.get(index, 0.0) + 1.0

        self.traverse(root, visit)
        return vec

    def dump_tree(self, html_content: str) -> dict[str, Any] | None:
        """Returns the preprocessed element tree as nested dicts."""
        root = self.parse(html_content)
        if root is None:
            return None
        self.traverse(root, lambda node: None)
        return tree_to_dict(root)
