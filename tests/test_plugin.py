from concurrent.futures import ThreadPoolExecutor

import pytest

from site_search_index.core.digest import digest, serialize
from site_search_index.nodes.store import InMemoryNodeStore
from site_search_index.plugin import SearchIndexPlugin
from site_search_index.search.accumulator import build_revision
from site_search_index.search.cache import InMemoryIndexCache
from site_search_index.search.compiler import load_compiled_index
from site_search_index.search.models import SEARCH_INDEX_ID

from conftest import make_node


def _observe(plugin, node):
    plugin.store.create_node(node)
    return plugin.on_create_node(node)


def test_on_create_node_persists_revisions(plugin, store):
    _observe(plugin, make_node("a", title="Hello"))
    _observe(plugin, make_node("b", "Image"))
    _observe(plugin, make_node("c", title="World"))

    stored = store.get_node(SEARCH_INDEX_ID)
    assert stored is plugin.current_index()
    assert stored.pages == ["a", "c"]
    assert stored.internal.owner == "site-search-index"
    assert stored.content_digest == digest(serialize(["a", "c"]))


def test_own_index_nodes_are_ignored(plugin):
    revision = _observe(plugin, make_node("a", title="Hello"))
    assert plugin.on_create_node(revision) is None
    assert plugin.current_index().pages == ["a"]


def test_source_nodes_touches_and_resumes(options, cache):
    store = InMemoryNodeStore()
    store.begin_run()
    previous = build_revision(["a"], owner="site-search-index")
    store.create_node(previous)
    store.create_node(make_node("unrelated", "File"))

    store.begin_run()
    plugin = SearchIndexPlugin(options, store, cache)
    assert plugin.source_nodes() == 1
    assert plugin.current_index() is previous

    assert store.sweep_stale() == ["unrelated"]
    assert store.get_node(SEARCH_INDEX_ID) is previous

    revision = _observe(plugin, make_node("b", title="Next"))
    assert revision.pages == ["a", "b"]


@pytest.mark.asyncio
async def test_end_to_end(plugin, title_resolver):
    _observe(plugin, make_node("a", "MarkdownRemark", title="Hello world"))
    _observe(plugin, make_node("b", "Unregistered", title="Hello there"))
    _observe(plugin, make_node("c", "MarkdownRemark", title="Goodbye world"))

    index_node = plugin.current_index()
    assert index_node.pages == ["a", "c"]

    first = await plugin.resolve_index(index_node)
    second = await plugin.resolve_index(index_node)

    assert second == first
    assert title_resolver.calls == ["a", "c"]
    assert sorted(first["documentStore"]["docs"]) == ["a", "c"]

    index = load_compiled_index(first)
    assert [r["ref"] for r in index.search("title:hello")] == ["a"]


def test_concurrent_reports_persist_latest_revision(options):
    for round_no in range(50):
        store = InMemoryNodeStore()
        plugin = SearchIndexPlugin(options, store, InMemoryIndexCache())
        nodes = [make_node(f"r{round_no}-n{i}", title="t") for i in range(40)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda n: _observe(plugin, n), nodes))

        stored = store.get_node(SEARCH_INDEX_ID)
        assert stored is plugin.current_index()
        assert len(stored.pages) == 40


def test_index_node_detection():
    assert SearchIndexPlugin.is_index_node(make_node(SEARCH_INDEX_ID, "MarkdownRemark"))
    assert SearchIndexPlugin.is_index_node(make_node("x", "SiteSearchIndex"))
    assert not SearchIndexPlugin.is_index_node(make_node("x", "MarkdownRemark"))
