"""Command: print the metadata of an existing post."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from postmeta.commands._base import PostCommand

if TYPE_CHECKING:
    from postmeta.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postmeta show 2024-01-05-Hello-World.md
  postmeta --json show content/posts/2024-01-05-Hello-World.md""",
)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def show(app: AppContext, path: Path) -> None:
    """Show the front matter of a saved post."""
    app.emit(app.session().load(path))
