"""AppContext — per-invocation state shared by ``postmeta`` subcommands.

Built once by the root group and handed to ``new`` and ``show`` through
``@click.pass_obj``. It owns the three things every subcommand needs: an
editing session pointed at the right directory, the decision whether
prompting is allowed, and printing the session's results.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from postmeta.config.logging import configure_logging
from postmeta.output.formatters import OutputSettings, format_result
from postmeta.services.article import ArticleService

if TYPE_CHECKING:
    from postmeta.config.settings import PostSettings
    from postmeta.services.result import ServiceResult


class AppContext:
    """Settings, output mode and session factory for one CLI run."""

    def __init__(self, settings: PostSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def interactive(self) -> bool:
        """Prompts require no ``--no-interact``, no ``--json``, and a TTY stdin."""
        return (
            not self.settings.no_interact
            and not self.output.json_output
            and sys.stdin.isatty()
        )

    def session(self, output_dir: Path | None = None) -> ArticleService:
        """Start an editing session writing to *output_dir* or the configured directory."""
        return ArticleService(output_dir=self.settings.resolve_output_dir(output_dir))

    def prompt_title(self, title: str) -> str:
        """Ask for a title when *title* is blank and prompting is allowed."""
        if title.strip() or not self.interactive:
            return title
        return click.prompt("Title", default="", show_default=False)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result ends the command with exit code 1.

        Successes go to stdout so ``postmeta -q new ...`` can be piped into
        an editor. Failures and ``WARNING:`` lines go to stderr; under
        ``--json`` the warnings travel inside the payload instead.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
