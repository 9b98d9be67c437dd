"""Emit pipeline: normalized markdown, index entries, tag taxonomy, and output files"""

import json
from pathlib import Path

import yaml

from fmpub.core.models import Document, IndexEntry, thaw
from fmpub.core.summary import body_stats
from fmpub.core.utils.hashing import sha256
from fmpub.core.utils.slug import slugify


def dump(doc: Document) -> str:
    """Serialize a Document back to front matter + body.

    Field order is title, date, draft (only when true), tags (only when
    non-empty), then unknown keys as they appeared. The body is appended
    verbatim, so parse(dump(doc)) == doc.
    """
    meta = doc.metadata
    fm = {"title": meta.title, "date": meta.date.isoformat()}
    if meta.draft:
        fm["draft"] = True
    if meta.tags:
        fm["tags"] = list(meta.tags)
    fm.update(thaw(meta.extra))
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n{doc.body}"


def slug_for(doc: Document) -> str:
    """Slug from a 'slug' key, else the file stem (parent dir for index.md), else the title."""
    explicit = doc.metadata.extra.get('slug')
    if isinstance(explicit, str) and slugify(explicit):
        return slugify(explicit)
    if doc.path:
        src = Path(doc.path)
        stem = slugify(src.parent.name if src.stem == 'index' else src.stem)
        if stem:
            return stem
    return slugify(doc.metadata.title) or 'post'


def sort_by_date(docs: list[Document]) -> list[Document]:
    """Newest first; ties broken by title. Compares instants, not local times."""
    return sorted(docs, key=lambda d: (-d.metadata.date.timestamp(), d.metadata.title))


def build_entry(doc: Document, summary_length: int = 70) -> IndexEntry:
    stats = body_stats(doc.body, summary_length)
    return IndexEntry(
        slug=slug_for(doc),
        title=doc.metadata.title,
        date=doc.metadata.date.isoformat(),
        tags=list(doc.metadata.tags),
        path=doc.path or "",
        summary=stats.summary,
        word_count=stats.word_count,
        reading_time=stats.reading_time,
        hash=sha256(dump(doc)),
    )


def build_index(docs: list[Document], summary_length: int = 70) -> list[dict]:
    """Index entries for docs, newest first."""
    return [build_entry(d, summary_length).model_dump() for d in sort_by_date(docs)]


def build_taxonomy(docs: list[Document]) -> dict[str, list[str]]:
    """Map each tag (sorted) to the slugs of its posts, newest first."""
    terms: dict[str, list[str]] = {}
    for doc in sort_by_date(docs):
        for tag in doc.metadata.tags:
            terms.setdefault(tag, []).append(slug_for(doc))
    return {tag: terms[tag] for tag in sorted(terms)}


def output_path(doc: Document, output_dir: Path, root: Path | None = None) -> Path:
    """Mirror the source directory under output_dir: output_dir / <parent> / <slug>.md

    A parent outside root (or absolute, or climbing with '..' when there is
    no root) collapses to output_dir itself.
    """
    parent = Path()
    if doc.path:
        src = Path(doc.path)
        if src.stem == 'index':
            src = src.parent
        parent = src.parent
        if root is not None:
            try:
                parent = parent.resolve().relative_to(root.resolve())
            except ValueError:
                parent = Path()
        elif parent.is_absolute() or '..' in parent.parts:
            parent = Path()
    return output_dir / parent / f"{slug_for(doc)}.md"


def write_doc(doc: Document, output_dir: Path, root: Path | None = None) -> Path:
    """Write the normalized document and return its path."""
    dest = output_path(doc, output_dir, root)
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(dump(doc), encoding='utf-8')
    return dest


def write_json(data, dest: Path) -> Path:
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
    return dest
