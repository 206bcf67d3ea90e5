"""Command: create a new post file from initial metadata."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import click

from postmeta.commands._base import PostCommand

if TYPE_CHECKING:
    from postmeta.commands._context import AppContext


def _split_values(values: Iterable[str]) -> list[str]:
    """Flatten repeated and comma-delimited option values, dropping blanks."""
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def _merge(defaults: list[str], given: list[str]) -> list[str]:
    """Configured defaults first, then CLI values not already among them."""
    return [*defaults, *(value for value in given if value not in defaults)]


@click.command(
    cls=PostCommand,
    examples="""\
  postmeta new --title "Hello World"
  postmeta new --title "Release Notes" --date 2024-01-05 --categories tech
  postmeta new --title "GUI in Rust" --tags rust,gui --tags egui
  postmeta new --title "Draft" --output-dir content/posts --dry-run""",
)
@click.option("--title", default="", help="Title of the post.")
@click.option(
    "--date",
    "date_text",
    default=None,
    help="Publication date as YYYY-MM-DD (default: today).",
)
@click.option("--tags", multiple=True, help="Tags (repeatable or comma-separated).")
@click.option("--categories", multiple=True, help="Categories (repeatable or comma-separated).")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write the post into (default: configured directory or cwd).",
)
@click.option("--dry-run", is_flag=True, help="Show the file that would be written.")
@click.pass_obj
def new(
    app: AppContext,
    title: str,
    date_text: str | None,
    tags: tuple[str, ...],
    categories: tuple[str, ...],
    output_dir: Path | None,
    dry_run: bool,
) -> None:
    """Create a new post with YAML front matter."""
    defaults = app.settings.article
    svc = app.session(output_dir)
    opened = svc.open(
        title=app.prompt_title(title),
        date=date_text,
        categories=_merge(defaults.categories, _split_values(categories)),
        tags=_merge(defaults.tags, _split_values(tags)),
    )
    if not opened.ok:
        app.emit(opened)
        return

    result = svc.preview() if dry_run else svc.save()
    app.emit(result.with_warnings(opened.warnings))
