"""
Document extraction: turn a content node into the flat field map that is
added to the index.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from ..nodes.models import AllItems, ItemLookup, Node, TypeLookup


def extract_document(
    node: Node,
    field_resolvers: Mapping[str, Callable[..., Any]],
    get_node: ItemLookup,
    get_nodes_by_type: TypeLookup,
    get_nodes: AllItems,
) -> Dict[str, Any]:
    """
    Build the index document for ``node``.

    The result always carries ``id`` and ``date`` from the node, plus one
    entry per resolver, each computed as
    ``resolver(node, get_node, get_nodes_by_type, get_nodes)``.

    Resolver exceptions are not caught.
    """
    doc: Dict[str, Any] = {"id": node.id, "date": node.date}

    for field_name, resolver in field_resolvers.items():
        doc[field_name] = resolver(node, get_node, get_nodes_by_type, get_nodes)

    return doc
