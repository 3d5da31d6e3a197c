"""
Field resolver helpers.

A resolver table maps a node type to ``{field name: resolver}``; each
resolver is called as ``resolver(node, get_node, get_nodes_by_type,
get_nodes)``. The helpers below build the common cases so a table can be
declared without writing the four-argument functions by hand, e.g.::

    RESOLVERS = {
        "MarkdownRemark": {
            "title": frontmatter("title"),
            "tags": frontmatter("tags"),
            "path": attribute("slug"),
        },
    }

and configured with ``SEARCH_RESOLVERS=site_search_index.resolvers:MARKDOWN_RESOLVERS``.
"""

from __future__ import annotations

from typing import Any, Callable

from .config import FieldResolver
from .nodes.models import Node


def attribute(name: str, default: Any = None) -> FieldResolver:
    """
    Resolve a top-level content attribute of the node.
    """

    def resolve(node: Node, *_lookups: Any) -> Any:
        return node.get(name, default)

    return resolve


def frontmatter(name: str, default: Any = None) -> FieldResolver:
    """
    Resolve a key of the node's ``frontmatter`` mapping.
    """

    def resolve(node: Node, *_lookups: Any) -> Any:
        data = node.get("frontmatter") or {}
        return data.get(name, default)

    return resolve


def parent_attribute(name: str, default: Any = None) -> FieldResolver:
    """
    Resolve an attribute of the node's parent, looked up by id.
    """

    def resolve(node: Node, get_node: Callable[[str], Any], *_lookups: Any) -> Any:
        if not node.parent:
            return default
        parent = get_node(node.parent)
        return parent.get(name, default) if parent is not None else default

    return resolve


MARKDOWN_RESOLVERS = {
    "MarkdownRemark": {
        "title": frontmatter("title"),
        "tags": frontmatter("tags"),
        "path": attribute("slug"),
    },
}
