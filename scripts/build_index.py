"""
Build a compiled search index from an NDJSON dump of pipeline nodes.

Each input line is one node (``id``, ``internal.type``, content
attributes). Nodes are replayed through the plugin in file order, then the
index is compiled and written as JSON.

    python scripts/build_index.py nodes.ndjson -o public/search_index.json
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Ensure src is in pythonpath
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv
load_dotenv()

from site_search_index.config import load_plugin_options, settings
from site_search_index.core.logging import configure_logging
from site_search_index.nodes.models import Node
from site_search_index.nodes.store import InMemoryNodeStore
from site_search_index.plugin import SearchIndexPlugin
from site_search_index.search.cache import InMemoryIndexCache

logger = logging.getLogger("search.build")


async def main(args: argparse.Namespace) -> int:
    configure_logging(settings.log_level)
    options = load_plugin_options(settings)
    plugin = SearchIndexPlugin(
        options,
        InMemoryNodeStore(),
        InMemoryIndexCache(),
        owner=settings.plugin_name,
    )

    # 1. Replay nodes
    with open(args.input, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            node = Node.model_validate(json.loads(line))
            if plugin.is_index_node(node):
                logger.warning("Skipping reserved node %s", node.id)
                continue
            plugin.store.create_node(node)
            plugin.on_create_node(node)

    index_node = plugin.current_index()
    if index_node is None:
        logger.warning("No eligible nodes in %s, nothing to index", args.input)
        return 1

    # 2. Compile
    compiled = await plugin.resolve_index(index_node)

    # 3. Write
    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(compiled, f, ensure_ascii=False, default=str)

    logger.info(
        "Wrote %s (%d pages, digest %s)",
        args.output,
        len(index_node.pages),
        index_node.content_digest,
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("input", help="NDJSON file of pipeline nodes")
    parser.add_argument(
        "-o", "--output",
        default="search_index.json",
        help="Output path for the compiled index",
    )
    sys.exit(asyncio.run(main(parser.parse_args())))
