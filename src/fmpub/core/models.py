"""Immutable document models produced by the front-matter parser"""

from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def freeze(value: Any) -> Any:
    """Deep-copy YAML data into read-only containers (mappingproxy, tuple, frozenset)."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze: plain dicts, lists, and sets for YAML/JSON output."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    if isinstance(value, frozenset):
        return set(value)
    return value


class Metadata(BaseModel):
    """Validated front-matter fields; unknown keys pass through in extra."""

    model_config = {"frozen": True}

    title: str
    date: datetime                  # timezone-aware, offset preserved
    draft: bool = False
    tags: tuple[str, ...] = ()      # de-duplicated, first-seen order
    extra: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("extra", mode="after")
    @classmethod
    def freeze_extra(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)


class Document(BaseModel):
    """A parsed post: metadata plus the untouched body text."""

    model_config = {"frozen": True}

    metadata: Metadata
    body: str
    path: Optional[str] = None      # source file, None for in-memory text


class IndexEntry(BaseModel):
    """One published post as listed in index.json."""
    slug: str
    title: str
    date: str
    tags: list[str] = []
    path: str
    summary: str
    word_count: int
    reading_time: int
    hash: str
