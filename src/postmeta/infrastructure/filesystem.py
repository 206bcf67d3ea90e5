"""Filesystem persistence for articles.

INVARIANT: Saving never overwrites. The destination is opened with
exclusive create, and a file this module created is removed again if the
write fails, so no partial post is left behind.

Pure rendering lives in :mod:`postmeta.domain.frontmatter`. This module
handles file naming, path resolution, and the actual I/O.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml.error import YAMLError

from postmeta.domain.article import ArticleMetadata
from postmeta.domain.errors import (
    ArticleWriteError,
    EmptyTitleError,
    FileAlreadyExistsError,
    InvalidFrontmatterError,
    UnsafeTitleError,
)
from postmeta.domain.frontmatter import parse_frontmatter, render_article

logger = logging.getLogger(__name__)

ARTICLE_SUFFIX = ".md"

# Characters that would turn the filename into a path.
_UNSAFE_TITLE_CHARS = frozenset({"/", "\\", "\x00"})


# ---------------------------------------------------------------------------
# Naming and path resolution
# ---------------------------------------------------------------------------


def derive_filename(article: ArticleMetadata) -> str:
    """Return ``{date}-{title}.md`` with spaces in the title replaced by hyphens.

    No other characters are changed; see :func:`resolve_article_path` for
    the safety check.

    Examples:
        >>> derive_filename(ArticleMetadata("Hello World", "2024-01-05"))
        '2024-01-05-Hello-World.md'
    """
    return f"{article.date}-{article.title.replace(' ', '-')}{ARTICLE_SUFFIX}"


def resolve_article_path(output_dir: Path, article: ArticleMetadata) -> Path:
    """Resolve the destination path for *article* inside *output_dir*.

    Raises:
        UnsafeTitleError: If the title contains a path separator or NUL, or
            the resulting path would land outside *output_dir*.
    """
    unsafe = sorted(_UNSAFE_TITLE_CHARS.intersection(article.title))
    if unsafe:
        msg = f"Title {article.title!r} contains characters not allowed in a filename"
        raise UnsafeTitleError(msg, title=article.title, characters=unsafe)

    path = output_dir / derive_filename(article)

    # Guard against the filename resolving outside output_dir
    if path.parent.resolve() != output_dir.resolve():
        msg = f"Path escapes output directory: {path}"
        raise UnsafeTitleError(msg, title=article.title, path=str(path))

    return path


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def check_destination(article: ArticleMetadata, output_dir: Path) -> Path:
    """Return the path :func:`save_article` would create, without writing.

    The title must contain a non-space character: a whitespace-only title is
    refused like an empty one, since its filename would be only hyphens.

    Raises:
        EmptyTitleError: If the title is empty or whitespace only.
        UnsafeTitleError: If the title cannot be used as a filename.
        FileAlreadyExistsError: If the destination already exists.
    """
    if not article.title.strip():
        msg = "Title is empty"
        raise EmptyTitleError(msg)

    path = resolve_article_path(output_dir, article)
    if path.exists():
        msg = f"The file at {path} already exists"
        raise FileAlreadyExistsError(msg, path=str(path))
    return path


def save_article(article: ArticleMetadata, output_dir: Path) -> Path:
    """Write *article* to a new file in *output_dir* and return its path.

    The payload is ``---\\n`` + YAML + ``\\n---\\n``, encoded as UTF-8.
    Creates *output_dir* if it does not exist. *article* is only read.
    Title and destination are checked by :func:`check_destination` before
    any file-system change.

    Raises:
        EmptyTitleError: If the title is empty or whitespace only.
        UnsafeTitleError: If the title cannot be used as a filename.
        FileAlreadyExistsError: If the destination already exists.
        ArticleWriteError: If the directory or file could not be written.
    """
    path = check_destination(article, output_dir)
    payload = render_article(article).encode("utf-8")

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory {output_dir}: {exc.strerror or exc}"
        raise ArticleWriteError(msg, path=str(output_dir)) from exc

    created = False
    try:
        with path.open("xb") as fh:
            created = True
            fh.write(payload)
    except FileExistsError as exc:
        msg = f"The file at {path} already exists"
        raise FileAlreadyExistsError(msg, path=str(path)) from exc
    except OSError as exc:
        if created:
            path.unlink(missing_ok=True)
        msg = f"Failed to write {path}: {exc.strerror or exc}"
        raise ArticleWriteError(msg, path=str(path)) from exc

    logger.info("Article saved to %s (%d bytes)", path, len(payload))
    return path


def read_article(path: Path) -> ArticleMetadata:
    """Load a saved post back into an :class:`ArticleMetadata`.

    Raises:
        InvalidFrontmatterError: If the file has no YAML front-matter mapping,
            or a field has the wrong shape (e.g. ``tags`` is not a list).
        InvalidDateError: If the stored date is malformed.
        DuplicateEntryError: If a category or tag is listed twice.
    """
    try:
        fm, _body = parse_frontmatter(path.read_text(encoding="utf-8"))
    except (YAMLError, UnicodeDecodeError) as exc:
        msg = f"Front matter in {path} is not valid YAML"
        raise InvalidFrontmatterError(msg, path=str(path)) from exc
    if not fm:
        msg = f"No front matter found in {path}"
        raise InvalidFrontmatterError(msg, path=str(path))
    return ArticleMetadata.from_frontmatter(fm)
