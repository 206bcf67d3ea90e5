"""ArticleMetadata — the editable post entity.

Holds title, publication date, categories, and tags. Categories and tags
are ordered and unique (exact, case-sensitive match). The date is stored
as canonical ``YYYY-MM-DD`` text and is validated before it is stored.

INVARIANT: A failed operation leaves the entity unchanged.
INVARIANT: No method performs I/O. Persistence lives in
:mod:`postmeta.infrastructure.filesystem`.
"""

from __future__ import annotations

from collections.abc import Generator, Iterable, Mapping
from contextlib import contextmanager
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from postmeta.domain.dates import format_date, parse_date, today
from postmeta.domain.errors import (
    DuplicateEntryError,
    EmptyCollectionError,
    IndexOutOfBoundsError,
    InvalidFrontmatterError,
    TextHandleError,
)
from postmeta.domain.text_handle import TextHandle


class ArticleFrontmatter(BaseModel):
    """Immutable snapshot of an article, in front-matter key order."""

    model_config = {"frozen": True}

    title: str
    date: str
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class ArticleMetadata:
    """Mutable article entity edited during a session."""

    def __init__(
        self,
        title: str = "",
        date: str | None = None,
        categories: Iterable[str] = (),
        tags: Iterable[str] = (),
    ) -> None:
        self._title = title
        self._date = format_date(today()) if date is None else format_date(parse_date(date))
        self._categories: list[str] = []
        self._tags: list[str] = []
        self._title_editor: TextHandle | None = None
        for name in categories:
            self.add_category(name)
        for name in tags:
            self.add_tag(name)

    def __repr__(self) -> str:
        return (
            f"ArticleMetadata(title={self._title!r}, date={self._date!r}, "
            f"categories={self._categories!r}, tags={self._tags!r})"
        )

    @classmethod
    def from_frontmatter(cls, fm: Mapping[str, Any]) -> ArticleMetadata:
        """Rebuild an entity from a parsed front-matter mapping.

        Unquoted YAML dates arrive as :class:`~datetime.date` objects and are
        formatted back to text. Scalar titles and entries (``title: 0``,
        ``tags: [2024]``) are kept as their text; missing or null keys fall
        back to constructor defaults.

        Raises:
            InvalidFrontmatterError: If ``title`` is not a scalar, or
                ``categories``/``tags`` is not a list of scalars.
        """
        raw_date = fm.get("date")
        if isinstance(raw_date, date):
            raw_date = format_date(raw_date)
        elif raw_date is not None:
            raw_date = str(raw_date)

        title = fm.get("title")
        if isinstance(title, (Mapping, list)):
            msg = "Front matter 'title' must be text"
            raise InvalidFrontmatterError(msg, key="title")

        return cls(
            title="" if title is None else str(title),
            date=raw_date,
            categories=_frontmatter_entries(fm, "categories"),
            tags=_frontmatter_entries(fm, "tags"),
        )

    # ------------------------------------------------------------------
    # Title
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value

    @contextmanager
    def edit_title(self) -> Generator[TextHandle]:
        """Lend a :class:`TextHandle` over the title for one edit session.

        Only one handle may be open at a time; it is detached when the block
        exits, so it cannot outlive the session.

        Raises:
            TextHandleError: If another handle on the title is still open.
        """
        if self._title_editor is not None:
            msg = "Title is already being edited"
            raise TextHandleError(msg)
        handle = TextHandle(lambda: self._title, self._assign_title)
        self._title_editor = handle
        try:
            yield handle
        finally:
            handle.detach()
            self._title_editor = None

    def _assign_title(self, value: str) -> None:
        self._title = value

    # ------------------------------------------------------------------
    # Date
    # ------------------------------------------------------------------

    @property
    def date(self) -> str:
        """Stored ``YYYY-MM-DD`` text."""
        return self._date

    def get_date(self) -> date:
        """Parse the stored date.

        Raises:
            InvalidDateError: If the stored text was corrupted.
        """
        return parse_date(self._date)

    def set_date(self, value: date) -> None:
        self._date = format_date(value)

    def set_date_text(self, value: str) -> None:
        """Validate and store a ``YYYY-MM-DD`` string."""
        self._date = format_date(parse_date(value))

    # ------------------------------------------------------------------
    # Categories and tags
    # ------------------------------------------------------------------

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._categories)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    def add_category(self, name: str) -> None:
        """Append *name*; raises DuplicateEntryError if already present."""
        _append_unique(self._categories, name, kind="Category")

    def delete_category(self, index: int) -> str:
        """Remove and return the category at *index*.

        Raises:
            EmptyCollectionError: If there are no categories.
            IndexOutOfBoundsError: If *index* is outside ``[0, len)``.
        """
        return _remove_at(self._categories, index, kind="category")

    def add_tag(self, name: str) -> None:
        """Append *name*; raises DuplicateEntryError if already present."""
        _append_unique(self._tags, name, kind="Tag")

    def delete_tag(self, index: int) -> str:
        """Remove and return the tag at *index* (same contract as categories)."""
        return _remove_at(self._tags, index, kind="tag")

    def categories_text(self) -> str:
        """Space-joined categories, for display only."""
        return " ".join(self._categories)

    def tags_text(self) -> str:
        """Space-joined tags, for display only."""
        return " ".join(self._tags)

    # ------------------------------------------------------------------
    # Serialization input
    # ------------------------------------------------------------------

    def snapshot(self) -> ArticleFrontmatter:
        return ArticleFrontmatter(
            title=self._title,
            date=self._date,
            categories=list(self._categories),
            tags=list(self._tags),
        )


def _append_unique(items: list[str], name: str, *, kind: str) -> None:
    if name in items:
        msg = f"{kind} {name!r} already exists"
        raise DuplicateEntryError(msg, value=name)
    items.append(name)


def _remove_at(items: list[str], index: int, *, kind: str) -> str:
    if not items:
        msg = f"There is no {kind} yet"
        raise EmptyCollectionError(msg, kind=kind)
    if not 0 <= index < len(items):
        msg = f"Index {index} out of bounds for {len(items)} {kind} entries"
        raise IndexOutOfBoundsError(msg, index=index, length=len(items))
    return items.pop(index)


def _frontmatter_entries(fm: Mapping[str, Any], key: str) -> list[str]:
    raw = fm.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list) or any(
        item is None or isinstance(item, (Mapping, list)) for item in raw
    ):
        msg = f"Front matter {key!r} must be a list of names"
        raise InvalidFrontmatterError(msg, key=key)
    return [str(item) for item in raw]
