"""
Opaque scalar type of the index document's ``index`` field.

The field is derived from the page set and is read-only: values are
serialized verbatim and any attempt to parse a client-supplied value
into it fails.
"""

from __future__ import annotations

from typing import Any

from ..core.errors import NotSupportedError
from .models import SEARCH_INDEX_TYPE


class SearchIndexScalar:
    name = f"{SEARCH_INDEX_TYPE}_Index"
    description = "Serialized lunr search index"

    def serialize(self, value: Any) -> Any:
        return value

    def parse_value(self, value: Any) -> Any:
        raise NotSupportedError()

    def parse_literal(self, value: Any) -> Any:
        raise NotSupportedError()


search_index_scalar = SearchIndexScalar()
