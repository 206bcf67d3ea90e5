"""Front matter serialization — YAML rendering and parsing.

Key order is fixed (``title, date, categories, tags``) and sequences are
emitted in block style, so the same article always renders to
byte-identical text and saved files stay diff-friendly.

The serializer does not validate; callers (``save_article``) enforce the
title precondition before rendering.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Any

from ruamel.yaml import YAML

if TYPE_CHECKING:
    from postmeta.domain.article import ArticleMetadata

FRONTMATTER_KEYS: list[str] = ["title", "date", "categories", "tags"]

FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML instance.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a shared
    instance broken, so every call gets its own.
    """
    y = YAML()
    y.default_flow_style = False
    y.allow_unicode = True
    # Never fold long titles across lines.
    y.width = 4096
    return y


def serialize_frontmatter(article: ArticleMetadata) -> str:
    """Render *article* as a YAML mapping, without a trailing newline."""
    snapshot = article.snapshot().model_dump()
    ordered = {key: snapshot[key] for key in FRONTMATTER_KEYS}
    buf = StringIO()
    _new_yaml().dump(ordered, buf)
    return buf.getvalue().rstrip("\n")


def render_article(article: ArticleMetadata) -> str:
    """Wrap the YAML mapping in ``---`` delimiter lines."""
    return f"{FRONTMATTER_DELIMITER}\n{serialize_frontmatter(article)}\n{FRONTMATTER_DELIMITER}\n"


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split markdown *content* into ``(frontmatter, body)``.

    The first line must be ``---``; the next ``---`` line closes the block.
    Handles both ``\\n`` and ``\\r\\n`` line endings. Returns
    ``({}, content)`` when no complete front-matter block is present.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    fm = _new_yaml().load(yaml_block) or {}
    if not isinstance(fm, dict):
        return {}, content
    return fm, body
