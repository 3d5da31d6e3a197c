import pytest

from site_search_index.config import PluginOptions
from site_search_index.nodes.models import Node
from site_search_index.nodes.store import InMemoryNodeStore
from site_search_index.plugin import SearchIndexPlugin
from site_search_index.search.cache import InMemoryIndexCache


def make_node(node_id, type_name="MarkdownRemark", **attrs):
    return Node(id=node_id, internal={"type": type_name}, **attrs)


class CountingResolver:
    """Resolver that returns a fixed value and records its calls."""

    def __init__(self, value=None, attr=None):
        self.value = value
        self.attr = attr
        self.calls = []

    def __call__(self, node, get_node, get_nodes_by_type, get_nodes):
        self.calls.append(node.id)
        if self.attr is not None:
            return node.get(self.attr)
        return self.value


@pytest.fixture
def store():
    return InMemoryNodeStore()


@pytest.fixture
def cache():
    return InMemoryIndexCache()


@pytest.fixture
def title_resolver():
    return CountingResolver(attr="title")


@pytest.fixture
def options(title_resolver):
    return PluginOptions(
        fields=["title"],
        resolvers={"MarkdownRemark": {"title": title_resolver}},
    )


@pytest.fixture
def plugin(options, store, cache):
    return SearchIndexPlugin(options, store, cache)
