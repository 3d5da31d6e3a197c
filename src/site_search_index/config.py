"""
Service Configuration

Settings are loaded from the environment (prefix ``SEARCH_``) and ``.env``.
The plugin-facing options (fields, resolver table, languages, filter) are
validated separately into ``PluginOptions`` so that a misconfigured service
fails at startup rather than on the first index query.
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigurationError


class Settings(BaseSettings):
    # Plugin options
    fields: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    resolvers: Optional[str] = None  # "package.module:attribute"
    filter: Optional[str] = None

    # Compiled-index cache
    cache_backend: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./data/search_index.db"

    plugin_name: str = "site-search-index"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()


# ---------------------------------------------------------------------
# Plugin Options
# ---------------------------------------------------------------------

FieldResolver = Callable[..., Any]
ResolverTable = Dict[str, Dict[str, FieldResolver]]


class PluginOptions(BaseModel):
    """
    Validated configuration surface of the indexing plugin.

    Attributes
    ----------
    fields : List[str]
        Ordered field names registered as indexable. Required.
    resolvers : ResolverTable
        Node type name -> {field name -> resolver}. Required.
    languages : List[str]
        Requested tokenizer languages. Empty means baseline only.
    filter : Optional[Callable]
        Extra eligibility predicate ``(node, get_node) -> bool``.
    """

    fields: List[str] = Field(..., min_length=1)
    resolvers: ResolverTable
    languages: List[str] = Field(default_factory=list)
    filter: Optional[Callable[..., bool]] = None

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        arbitrary_types_allowed=True,
    )

    @field_validator("resolvers")
    @classmethod
    def validate_resolvers(cls, v: ResolverTable) -> ResolverTable:
        for type_name, field_resolvers in v.items():
            for field_name, resolver in field_resolvers.items():
                if not callable(resolver):
                    raise ValueError(
                        f"Resolver for {type_name}.{field_name} is not callable"
                    )
        return v


def import_object(path: str) -> Any:
    """
    Import an object from a ``module:attribute`` path.
    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(
            f"Invalid import path '{path}': expected 'module:attribute'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module '{module_name}'") from exc

    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigurationError(
            f"Module '{module_name}' has no attribute '{attribute}'"
        ) from exc


def load_plugin_options(
    source: Settings,
    resolvers: Optional[Mapping[str, Mapping[str, FieldResolver]]] = None,
) -> PluginOptions:
    """
    Build ``PluginOptions`` from settings.

    Parameters
    ----------
    source : Settings
        Loaded service settings.
    resolvers : Optional[Mapping]
        Resolver table to use instead of importing ``source.resolvers``.

    Raises
    ------
    ConfigurationError
        If a required option is missing or invalid.
    """
    if resolvers is None:
        if not source.resolvers:
            raise ConfigurationError("The 'resolvers' option is required")
        resolvers = import_object(source.resolvers)

    predicate = import_object(source.filter) if source.filter else None

    try:
        return PluginOptions(
            fields=list(source.fields),
            resolvers={k: dict(v) for k, v in resolvers.items()},
            languages=list(source.languages),
            filter=predicate,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid plugin options: {exc}") from exc
