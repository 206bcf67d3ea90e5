"""Click base command for postmeta subcommands.

``--help`` stays short; sample invocations live behind ``--examples``,
which prints them and exits before any option is validated (so
``postmeta new --examples`` works without a title).
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager ``--examples`` flag bound to one command's example text."""

    def __init__(self, examples: str) -> None:
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._print_examples,
            help="Show usage examples and exit.",
        )
        self.examples = examples

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class PostCommand(click.Command):
    """Command accepting an ``examples`` keyword, surfaced as ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        if examples:
            kwargs.setdefault("epilog", "Run with --examples for sample invocations.")
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))
