"""Root ``postmeta`` group: output and config flags shared by every command."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from postmeta import __version__
from postmeta.commands import register_commands
from postmeta.commands._context import AppContext
from postmeta.config.settings import PostSettings

# Flags accepted before the subcommand name; each maps onto a PostSettings field.
_GLOBAL_OPTIONS = (
    click.option("--json", "json_output", is_flag=True, help="Print results as JSON."),
    click.option("-q", "--quiet", is_flag=True, help="Print only the saved path or error."),
    click.option("-v", "--verbose", is_flag=True, help="Show error codes, file metadata and debug logs."),
    click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines."),
    click.option("--no-interact", is_flag=True, help="Never prompt for a missing title."),
    click.option(
        "-c",
        "--config",
        "config_path",
        default=None,
        help="Use this postmeta.toml instead of searching upwards.",
    ),
)


def _global_options(func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_GLOBAL_OPTIONS):
        func = option(func)
    return func


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="postmeta")
@_global_options
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """postmeta — write blog posts with YAML front matter.

    Create a post with ``postmeta new``; inspect one with ``postmeta show``.
    """
    ctx.obj = AppContext(PostSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
