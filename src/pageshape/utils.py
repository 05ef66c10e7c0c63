import json
import re
from typing import Any

from lxml import html

from pageshape.const import PATH_ATTRIBUTES, QUERY_NODE_ATTRIBUTE, QUERY_NODE_TAG
from pageshape.urls import href_decode


def is_element(node: Any) -> bool:
    """Returns True for elements; comments and processing instructions have no str tag."""
    return isinstance(getattr(node, "tag", None), str)


def element_children(element: html.HtmlElement) -> list[html.HtmlElement]:
    """Returns child elements in document order."""
    return [child for child in element if is_element(child)]


def path_step(element: html.HtmlElement, attrs: tuple[str, ...] = PATH_ATTRIBUTES) -> str:
    """Returns `tag[@a="..." and @b="..."]` for the attributes present on the element."""
    predicates = []
    for attr in attrs:
        value = element.get(attr)
        if value is not None:
            predicates.append(f"@{attr}={json.dumps(value, ensure_ascii=False)}")
    if not predicates:
        return element.tag
    return f"{element.tag}[{' and '.join(predicates)}]"


def structural_path(
    element: html.HtmlElement, attrs: tuple[str, ...] = PATH_ATTRIBUTES
) -> str:
    """Returns the root-to-element path, e.g. `/html/body/form[@action="/login"]`."""
    steps = []
    node = element
    while node is not None:
        steps.append(path_step(node, attrs))
        node = node.getparent()
    return "/" + "/".join(reversed(steps))


def find_ancestor(element: html.HtmlElement, pattern: str | re.Pattern) -> html.HtmlElement | None:
    """Returns the nearest ancestor whose tag matches `pattern`, or None."""
    regex = re.compile(pattern)
    parent = element.getparent()
    while parent is not None:
        if is_element(parent) and regex.search(parent.tag):
            return parent
        parent = parent.getparent()
    return None


def expand_query_params(anchor: html.HtmlElement) -> list[html.HtmlElement]:
    """Rewrites an anchor's href to its bare path and appends one input per query key.

    Returns the synthetic children. Anchors without a decodable href are left as is.
    """
    href = anchor.get("href")
    if href is None:
        return []
    try:
        path, query = href_decode(href)
    except ValueError:
        return []

    anchor.set("href", path)
    added = []
    for key in query or {}:
        try:
            child = anchor.makeelement(QUERY_NODE_TAG, {QUERY_NODE_ATTRIBUTE: key})
        except ValueError:
            # Keys with characters lxml cannot store
            continue
        anchor.append(child)
        added.append(child)
    return added


def tree_to_dict(element: html.HtmlElement) -> dict[str, Any]:
    """Returns a nested `{name, attrs, children}` dump of the element tree."""
    node: dict[str, Any] = {
        "name": element.tag,
        "attrs": {attr: element.get(attr) for attr in PATH_ATTRIBUTES},
    }
    children = [tree_to_dict(child) for child in element_children(element)]
    if children:
        node["children"] = children
    return node
