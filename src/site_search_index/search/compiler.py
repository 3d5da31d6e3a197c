"""
Index Compiler

Builds the serialized full-text index for an index document revision.

Workflow
--------
1. Look the revision up in the compiled-index cache; a hit is returned
   verbatim.
2. On a miss, create a fresh lunr builder (multi-language when languages
   survive filtering), register the fields and the ``id`` reference.
3. Resolve every page id to its node, extract its document with the
   resolvers registered for its type and add it to the builder.
4. Serialize to JSON-compatible values, store in the cache and return.

A failing resolver aborts the compile and nothing is cached. Concurrent
misses for the same revision may compile twice; the output is a pure
function of (pages, fields, languages) so the second write is redundant.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from fastapi.encoders import jsonable_encoder
from lunr import get_default_builder
from lunr.builder import Builder
from lunr.index import Index
from lunr.languages import get_nltk_builder

from ..nodes.models import AllItems, ItemLookup, TypeLookup
from .cache import IndexCache, cache_key
from .extractor import extract_document
from .languages import BASELINE_LANGUAGE, SUPPORTED_LANGUAGES, filter_languages
from .models import SearchIndexNode

logger = logging.getLogger("search.compiler")

REF_FIELD = "id"

CompiledIndex = Dict[str, Any]
BuilderFactory = Callable[[List[str]], Builder]


# ---------------------------------------------------------------------
# Builder Construction
# ---------------------------------------------------------------------

def default_builder_factory(languages: List[str]) -> Builder:
    """
    Return a lunr builder tokenizing for ``languages``.

    English alone (or no language) uses lunr's default pipeline; any other
    supported language switches to the multi-language Snowball pipeline
    over exactly the given set.
    """
    if not languages or languages == [BASELINE_LANGUAGE]:
        return get_default_builder()
    return get_nltk_builder(languages)


def _field_extractor(field_name: str) -> Callable[[Dict[str, Any]], Any]:
    # Documents of types without a resolver for this field index nothing.
    return lambda doc: doc.get(field_name)


def load_compiled_index(payload: CompiledIndex) -> Index:
    """
    Rehydrate a queryable lunr index from a compiled payload.
    """
    return Index.load(payload["index"])


# ---------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------

class IndexCompiler:
    """
    Compiles index document revisions, caching the result per revision.

    Parameters
    ----------
    cache : IndexCache
        Compiled-index cache.
    get_node, get_nodes_by_type, get_nodes
        Node store lookups handed to field resolvers.
    builder_factory : BuilderFactory
        Creates the underlying lunr builder for a language set.
    """

    def __init__(
        self,
        cache: IndexCache,
        get_node: ItemLookup,
        get_nodes_by_type: TypeLookup,
        get_nodes: AllItems,
        builder_factory: BuilderFactory = default_builder_factory,
    ) -> None:
        self._cache = cache
        self._get_node = get_node
        self._get_nodes_by_type = get_nodes_by_type
        self._get_nodes = get_nodes
        self._builder_factory = builder_factory

    async def compile(
        self,
        index_node: SearchIndexNode,
        fields: Sequence[str],
        resolvers: Mapping[str, Mapping[str, Callable[..., Any]]],
        languages: Optional[Sequence[str]] = None,
    ) -> CompiledIndex:
        """
        Return the compiled index for ``index_node``, building it on a miss.
        """
        key = cache_key(index_node)

        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Compiled index cache hit: %s", key)
            return cached

        logger.debug("Compiled index cache miss: %s", key)
        payload = self.build(index_node, fields, resolvers, languages)

        await self._cache.set(key, payload)
        return payload

    def build(
        self,
        index_node: SearchIndexNode,
        fields: Sequence[str],
        resolvers: Mapping[str, Mapping[str, Callable[..., Any]]],
        languages: Optional[Sequence[str]] = None,
    ) -> CompiledIndex:
        """
        Build the compiled index without consulting the cache.
        """
        accepted: List[str] = filter_languages(languages) if languages else []
        # Each stemmer is registered once, whatever the requested order.
        distinct = list(dict.fromkeys(accepted))
        for lang in distinct:
            if lang != BASELINE_LANGUAGE:
                logger.debug("Enabling %s stemmer", SUPPORTED_LANGUAGES[lang])

        builder = self._builder_factory(distinct)
        builder.ref(REF_FIELD)
        for field_name in fields:
            builder.field(field_name, extractor=_field_extractor(field_name))

        docs: Dict[str, Dict[str, Any]] = {}
        for page_id in index_node.pages:
            node = self._get_node(page_id)
            if node is None:
                logger.warning("Indexed page %s no longer exists, skipping", page_id)
                continue

            field_resolvers = resolvers.get(node.internal.type)
            if not field_resolvers:
                continue

            doc = extract_document(
                node,
                field_resolvers,
                self._get_node,
                self._get_nodes_by_type,
                self._get_nodes,
            )
            builder.add(doc)
            docs[node.id] = doc

        index = builder.build()

        logger.info(
            "Compiled search index: %d document(s), fields=%s, languages=%s",
            len(docs),
            list(fields),
            distinct or [BASELINE_LANGUAGE],
        )

        serialized = index.serialize()

        # Normalised once so a cache hit from any backend equals the miss.
        return jsonable_encoder({
            "version": serialized["version"],
            "ref": REF_FIELD,
            "fields": list(fields),
            "languages": distinct,
            "index": serialized,
            "documentStore": {
                "docs": docs,
                "length": len(docs),
            },
        })
