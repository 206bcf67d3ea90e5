"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from postmeta.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from postmeta.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Successful saves print only the written path, so the output can be
    piped straight into an editor.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    path = result.data.get("path")
    if path:
        return str(path)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="post.ok")
    op = Text(f"  {result.op}", style="post.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="post.key")
    if isinstance(value, list):
        style = {"categories": "post.category", "tags": "post.tag"}.get(key, "")
        v = Text(" ".join(str(item) for item in value), style=style)
    elif key in ("path", "output_dir"):
        v = Text(str(value), style="post.path")
    elif key == "title":
        v = Text(str(value), style="post.title")
    elif key == "date":
        v = Text(str(value), style="post.date")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Renderers ─────────────────────────────────────────────────────────

_ARTICLE_FIELDS = ("title", "date", "categories", "tags")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_article(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Saved or loaded article: location first, then the metadata fields."""
    _status_line(console, result)
    if "path" in result.data:
        _field(console, "path", result.data["path"])
    for key in _ARTICLE_FIELDS:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_preview(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Dry run: target location, then the exact file content."""
    _status_line(console, result)
    _field(console, "filename", result.data.get("filename", ""))
    _field(console, "output_dir", result.data.get("output_dir", ""))
    console.print()
    console.print(Text(str(result.data.get("frontmatter", "")).rstrip("\n")))
    if verbose:
        _render_meta(console, result)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    label = Text("ERROR", style="post.error")
    op = Text(f"  {result.op}", style="post.op")
    console.print(label, op, end="")
    console.print()
    if result.error is None:
        console.print(Text("  Unknown error"))
        return
    console.print(Text(f"  {result.error.message}"))
    if verbose:
        _field(console, "code", result.error.code)
        for key, value in result.error.detail.items():
            _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "save_article": _render_article,
    "load_article": _render_article,
    "open_article": _render_article,
    "preview_article": _render_preview,
}
