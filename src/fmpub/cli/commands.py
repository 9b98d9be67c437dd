"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from fmpub.config import Settings, load_config
from fmpub.core.emit import build_entry
from fmpub.core.errors import ParseError
from fmpub.core.models import thaw
from fmpub.core.parse import parse_file
from fmpub.core.pipeline import BuildContext, BuildReport, run_build, run_export


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(ctx: typer.Context, overrides: dict = None) -> Settings:
    """Load config and configure logging (--verbose beats log_level)."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    return settings


def _describe(error: Exception) -> str:
    """ErrorName: message, without repeating the path."""
    return f"{type(error).__name__}: {getattr(error, 'message', error)}"


def _echo_failures(report: BuildReport) -> None:
    for path, error in report.failures:
        typer.echo(f"  {path}: {_describe(error)}", err=True)


def check_cmd(
    ctx: typer.Context,
    path: Annotated[Optional[str], typer.Argument(help="File or directory to validate (default: content_dir)")] = None,
    ):
    """Parse every document and report front-matter errors without writing output."""
    settings = _settings(ctx, overrides={"content_dir": path})
    build_ctx = BuildContext.from_settings(settings)
    if not build_ctx.content_dir.exists():
        _fail(f"Path not found: {build_ctx.content_dir}")

    report = run_build(build_ctx)
    _echo_failures(report)
    typer.echo(f"Checked {len(report.documents) + len(report.failures)} document(s), {len(report.failures)} failed")
    if not report.ok:
        raise typer.Exit(1)


def show_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Markdown file to parse")],
    ):
    """Print a document's validated metadata and derived fields as JSON."""
    settings = _settings(ctx)
    try:
        doc = parse_file(path)
    except ParseError as e:
        _fail(f"{e.path}: {_describe(e)}")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)

    entry = build_entry(doc, settings.summary_length)
    payload = {
        **entry.model_dump(),
        "draft": doc.metadata.draft,
        "extra": thaw(doc.metadata.extra),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def build_cmd(
    ctx: typer.Context,
    path: Annotated[Optional[str], typer.Argument(help="File or directory to build (default: content_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include draft documents")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Parser threads", min=1)] = None,
    ):
    """Parse all documents, export the publishable ones, and report failures."""
    settings = _settings(ctx, overrides={
        "content_dir": path, "output_dir": out, "build_drafts": drafts, "workers": workers,
    })
    build_ctx = BuildContext.from_settings(settings)
    if not build_ctx.content_dir.exists():
        _fail(f"Path not found: {build_ctx.content_dir}")

    report = run_build(build_ctx)
    try:
        written = run_export(report, build_ctx)
    except (ValueError, OSError) as e:
        _fail("Export failed", e)

    for doc in report.published:
        typer.echo(f"  {doc.path}")
    _echo_failures(report)
    drafts_skipped = len(report.documents) - len(report.published)
    typer.echo(
        f"Build complete - "
        f"{len(report.published)} published, "
        f"{drafts_skipped} draft(s) skipped, "
        f"{len(report.failures)} failed "
        f"({len(written)} file(s) written to {build_ctx.output_dir}/)"
    )
    if not report.ok:
        raise typer.Exit(1)
