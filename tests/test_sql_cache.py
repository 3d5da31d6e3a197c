import datetime

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from site_search_index.db import SqlIndexCache, init_models, make_engine, make_session_factory
from site_search_index.search.accumulator import build_revision
from site_search_index.search.compiler import IndexCompiler

from conftest import make_node


@pytest_asyncio.fixture
async def sql_cache():
    engine = make_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_models(engine)
    yield SqlIndexCache(make_session_factory(engine))
    await engine.dispose()


@pytest.mark.asyncio
async def test_get_missing_key(sql_cache):
    assert await sql_cache.get("nope") is None


@pytest.mark.asyncio
async def test_set_then_get_and_overwrite(sql_cache):
    await sql_cache.set("k", {"index": {"fields": ["title"]}})
    assert await sql_cache.get("k") == {"index": {"fields": ["title"]}}

    await sql_cache.set("k", {"index": {"fields": ["body"]}})
    assert await sql_cache.get("k") == {"index": {"fields": ["body"]}}


@pytest.mark.asyncio
async def test_compiler_reuses_persisted_index(sql_cache, store, title_resolver):
    store.create_node(make_node("a", title="Hello", date="2020-01-01"))
    compiler = IndexCompiler(sql_cache, store.get_node, store.get_nodes_by_type, store.get_nodes)
    resolvers = {"MarkdownRemark": {"title": title_resolver}}
    index_node = build_revision(["a"])

    first = await compiler.compile(index_node, ["title"], resolvers)
    second = await compiler.compile(index_node, ["title"], resolvers)

    assert second["documentStore"] == first["documentStore"]
    assert second["fields"] == first["fields"]
    assert title_resolver.calls == ["a"]


@pytest.mark.asyncio
async def test_cache_hit_equals_miss_for_date_values(sql_cache, store, title_resolver):
    store.create_node(make_node("a", title="Hello", date=datetime.date(2020, 1, 1)))
    compiler = IndexCompiler(sql_cache, store.get_node, store.get_nodes_by_type, store.get_nodes)
    resolvers = {"MarkdownRemark": {"title": title_resolver}}
    index_node = build_revision(["a"])

    first = await compiler.compile(index_node, ["title"], resolvers)
    second = await compiler.compile(index_node, ["title"], resolvers)

    assert second == first
    assert first["documentStore"]["docs"]["a"]["date"] == "2020-01-01"
    assert title_resolver.calls == ["a"]
