"""Pipeline step functions: batch parse with error collection, then export"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from fmpub.config import Settings
from fmpub.core.drafts import is_publishable
from fmpub.core.emit import build_index, build_taxonomy, output_path, write_doc, write_json
from fmpub.core.models import Document
from fmpub.core.parse import discover_files, parse_file


logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"
TAGS_FILE = "tags.json"


@dataclass(frozen=True)
class BuildContext:
    """Everything one build invocation needs; created per run, never shared."""
    content_dir:    Path
    output_dir:     Path
    build_drafts:   bool = False
    workers:        int = 4
    summary_length: int = 70

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "BuildContext":
        values = {
            "content_dir":    Path(settings.content_dir),
            "output_dir":     Path(settings.output_dir),
            "build_drafts":   settings.build_drafts,
            "workers":        settings.workers,
            "summary_length": settings.summary_length,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def root(self) -> Path:
        """Directory that output paths are made relative to."""
        return self.content_dir.parent if self.content_dir.is_file() else self.content_dir


@dataclass
class BuildReport:
    documents: list[Document] = field(default_factory=list)
    failures:  list[tuple[str, Exception]] = field(default_factory=list)
    build_drafts: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def published(self) -> list[Document]:
        return [d for d in self.documents if is_publishable(d, self.build_drafts)]


def _parse_one(path: Path) -> tuple[Path, Document | None, Exception | None]:
    """Parse a single file, returning the error instead of raising it."""
    try:
        return path, parse_file(path), None
    except (ValueError, OSError) as e:
        # ParseError and UnicodeDecodeError are both ValueErrors
        return path, None, e


def run_build(ctx: BuildContext) -> BuildReport:
    """Parse every document under ctx.content_dir, collecting failures without aborting.

    Documents and failures are sorted by path regardless of completion order.
    """
    files = discover_files(ctx.content_dir)
    logger.info("Parsing %d file(s) under %s with %d worker(s)", len(files), ctx.content_dir, ctx.workers)

    if ctx.workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=ctx.workers) as executor:
            results = list(executor.map(_parse_one, files))
    else:
        results = [_parse_one(p) for p in files]

    report = BuildReport(build_drafts=ctx.build_drafts)
    for path, doc, error in sorted(results, key=lambda r: str(r[0])):
        if error is not None:
            logger.warning("Skipping %s: %s", path, error)
            report.failures.append((str(path), error))
        else:
            report.documents.append(doc)

    skipped = len(report.documents) - len(report.published)
    logger.info(
        "Parsed %d document(s), %d failed, %d draft(s) skipped",
        len(report.documents), len(report.failures), skipped,
    )
    return report


def run_export(report: BuildReport, ctx: BuildContext) -> list[Path]:
    """Write published documents plus index.json and tags.json. Returns written paths.

    Raises ValueError before writing anything if two documents map to the same
    output file, or if any output would land outside ctx.output_dir.
    """
    docs = report.published
    out_root = ctx.output_dir.resolve()
    seen: dict[Path, Document] = {}
    for doc in docs:
        dest = output_path(doc, ctx.output_dir, ctx.root)
        if not dest.resolve().is_relative_to(out_root):
            raise ValueError(f"{doc.path} would export outside {ctx.output_dir}: {dest}")
        if dest in seen:
            raise ValueError(f"{seen[dest].path} and {doc.path} both export to {dest}")
        seen[dest] = doc

    written = [write_doc(doc, ctx.output_dir, ctx.root) for doc in docs]
    written.append(write_json(build_index(docs, ctx.summary_length), ctx.output_dir / INDEX_FILE))
    written.append(write_json(build_taxonomy(docs), ctx.output_dir / TAGS_FILE))
    logger.info("Exported %d document(s) to %s", len(docs), ctx.output_dir)
    return written
