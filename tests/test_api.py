import pytest
from fastapi.testclient import TestClient

from site_search_index.config import PluginOptions
from site_search_index.main import create_app
from site_search_index.nodes.store import InMemoryNodeStore
from site_search_index.plugin import SearchIndexPlugin
from site_search_index.search.cache import InMemoryIndexCache
from site_search_index.search.models import SEARCH_INDEX_ID, SEARCH_INDEX_TYPE


def node_payload(node_id, type_name="MarkdownRemark", **attrs):
    return {"id": node_id, "internal": {"type": type_name}, **attrs}


@pytest.fixture
def client(plugin):
    with TestClient(create_app(plugin)) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "pages": 0}


def test_index_not_found_before_first_page(client):
    resp = client.get("/search-index")
    assert resp.status_code == 404
    assert resp.json()["error"] == "index_not_found"


def test_report_nodes_and_fetch_index(client, title_resolver):
    resp = client.post("/nodes", json=node_payload("a", title="Hello world", date="2020-01-01"))
    assert resp.json() == {"status": "indexed", "pages": 1}

    resp = client.post("/nodes", json=node_payload("b", "Image", title="Photo"))
    assert resp.json() == {"status": "skipped", "pages": 1}

    resp = client.post("/nodes", json=node_payload("c", title="Another world"))
    assert resp.json() == {"status": "indexed", "pages": 2}

    resp = client.get("/search-index")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == "SearchIndex < Site"
    assert data["pages"] == ["a", "c"]
    assert len(data["contentDigest"]) == 32
    assert sorted(data["index"]["documentStore"]["docs"]) == ["a", "c"]

    resp = client.get("/search-index/index")
    assert resp.status_code == 200
    assert resp.json() == data["index"]

    # Both reads were served by one compile.
    assert title_resolver.calls == ["a", "c"]


@pytest.mark.parametrize("body", [{"index": {}}, "literal", 1, None])
def test_index_field_is_read_only(client, body):
    resp = client.put("/search-index/index", json=body)
    assert resp.status_code == 405
    assert resp.json() == {"error": "not_supported", "detail": "Not supported"}


def test_resolver_failure_returns_500():
    def broken(*args):
        raise RuntimeError("resolver exploded")

    plugin = SearchIndexPlugin(
        PluginOptions(fields=["title"], resolvers={"T": {"title": broken}}),
        InMemoryNodeStore(),
        InMemoryIndexCache(),
    )

    with TestClient(create_app(plugin), raise_server_exceptions=False) as client:
        client.post("/nodes", json=node_payload("a", "T"))
        resp = client.get("/search-index")

    assert resp.status_code == 500
    assert resp.json()["error"] == "internal_server_error"
    assert "exploded" not in resp.text


@pytest.mark.parametrize(
    "body",
    [
        node_payload(SEARCH_INDEX_ID, title="Forged"),
        node_payload("forged", SEARCH_INDEX_TYPE, pages=["forged"]),
    ],
)
def test_reserved_index_nodes_are_rejected(client, plugin, body):
    client.post("/nodes", json=node_payload("a", title="Hello world"))
    before = plugin.current_index()

    resp = client.post("/nodes", json=body)
    assert resp.status_code == 409
    assert resp.json()["error"] == "reserved_node"

    assert plugin.current_index() is before
    assert plugin.store.get_node(SEARCH_INDEX_ID) is before
    assert plugin.store.get_node("forged") is None
    assert client.get("/search-index").json()["pages"] == ["a"]
