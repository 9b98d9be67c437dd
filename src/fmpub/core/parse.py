"""File discovery, front-matter splitting, and metadata validation"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from fmpub.core.errors import (
    InvalidFieldValue,
    MalformedMetadataSyntax,
    MissingMetadataBlock,
    MissingRequiredField,
    UnterminatedMetadataBlock,
)
from fmpub.core.models import Document, Metadata


logger = logging.getLogger(__name__)

SENTINEL = '---'
MD_EXTENSIONS = {'.md', '.mdx'}
REQUIRED_FIELDS = ('title', 'date')
KNOWN_FIELDS = ('title', 'date', 'draft', 'tags')
DATE_RE = re.compile(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:\d{2}')

_TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'


class _MetadataLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings."""


_MetadataLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_frontmatter(text: str, path: str | None = None) -> tuple[str, str]:
    """Return (metadata_block, body) split on the first pair of '---' lines.

    The body is everything after the closing sentinel line, byte for byte.
    Lines end at '\\n' only; other Unicode line breaks stay inside a line.
    """
    lines = text.split('\n')
    if lines[0].lstrip('\ufeff').rstrip() != SENTINEL:
        raise MissingMetadataBlock(path)

    for i in range(1, len(lines)):
        if lines[i].rstrip() == SENTINEL:
            block = '\n'.join(lines[1:i]) + ('\n' if i > 1 else '')
            return block, '\n'.join(lines[i + 1:])
    raise UnterminatedMetadataBlock(path)


def _load_block(block: str, path: str | None) -> dict[str, Any]:
    """Decode the metadata block as a YAML mapping with string keys."""
    try:
        data = yaml.load(block, Loader=_MetadataLoader)
    except yaml.YAMLError as e:
        raise MalformedMetadataSyntax(f"invalid YAML: {e}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedMetadataSyntax(
            f"expected a key/value mapping, got {type(data).__name__}", path,
        )
    for key in data:
        if not isinstance(key, str):
            raise MalformedMetadataSyntax(f"keys must be strings, got {key!r}", path)
    return data


def _validate_title(value: Any, path: str | None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidFieldValue('title', "must be a non-empty string", path)
    return value


def _validate_date(value: Any, path: str | None) -> datetime:
    """Accept only YYYY-MM-DDTHH:MM:SS+HH:MM (or -HH:MM) naming a real instant."""
    if not isinstance(value, str) or not DATE_RE.fullmatch(value):
        raise InvalidFieldValue('date', f"expected YYYY-MM-DDTHH:MM:SS+HH:MM, got {value!r}", path)
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise InvalidFieldValue('date', str(e), path) from e


def _validate_draft(value: Any, path: str | None) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidFieldValue('draft', f"must be true or false, got {value!r}", path)
    return value


def _validate_tags(value: Any, path: str | None) -> tuple[str, ...]:
    """Return tags de-duplicated in first-seen order; null means no tags."""
    if value is None:
        return ()
    if not isinstance(value, list):
        raise InvalidFieldValue('tags', f"must be a list of strings, got {type(value).__name__}", path)
    for tag in value:
        if not isinstance(tag, str) or not tag.strip():
            raise InvalidFieldValue('tags', f"every tag must be a non-empty string, got {tag!r}", path)
    return tuple(dict.fromkeys(value))


def parse(raw_text: str, path: str | None = None) -> Document:
    """Parse a document into validated metadata and its untouched body.

    Raises a ParseError subclass on any failure; never returns a partial
    Document. Checks run in order: sentinels, YAML syntax, required fields,
    field values.
    """
    block, body = split_frontmatter(raw_text, path)
    data = _load_block(block, path)

    for key in REQUIRED_FIELDS:
        if data.get(key) is None:
            raise MissingRequiredField(key, path)

    metadata = Metadata(
        title=_validate_title(data['title'], path),
        date=_validate_date(data['date'], path),
        draft=_validate_draft(data.get('draft'), path),
        tags=_validate_tags(data.get('tags'), path),
        extra={k: v for k, v in data.items() if k not in KNOWN_FIELDS},
    )
    return Document(metadata=metadata, body=body, path=path)


def parse_file(path: Path) -> Document:
    """Read a UTF-8 file (BOM tolerated) and parse it, tagging errors with its path."""
    raw = path.read_text(encoding='utf-8-sig')
    doc = parse(raw, path=str(path))
    logger.debug("Parsed %s (%d tag(s), draft=%s)", path, len(doc.metadata.tags), doc.metadata.draft)
    return doc


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)
