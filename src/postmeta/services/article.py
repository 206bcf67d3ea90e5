"""ArticleService — one editing session over an ArticleMetadata.

The presentation layer routes every discrete user edit to exactly one
method here. Each method returns a :class:`ServiceResult`; domain
failures (:class:`ArticleError`) become ``ok=False`` results and the
entity is left as it was.

Pipeline for ``save``: VALIDATE → RESOLVE → RENDER → PERSIST → RESPOND
(the first four live in :func:`postmeta.infrastructure.filesystem.save_article`).
``save`` and ``load`` log under :func:`article_log_context` and report
file size and timing in ``result.meta``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from datetime import date
from pathlib import Path
from typing import Any

from postmeta.config.logging import article_log_context
from postmeta.domain.article import ArticleMetadata
from postmeta.domain.errors import ArticleError
from postmeta.domain.frontmatter import render_article
from postmeta.infrastructure.filesystem import check_destination, read_article, save_article
from postmeta.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ArticleService:
    """Editing session: the entity plus the directory it will be saved to.

    Usage::

        svc = ArticleService(output_dir=Path("posts"))
        svc.open(title="Hello World", tags=["python"])
        svc.add_category("tech")
        result = svc.save()
    """

    def __init__(
        self,
        article: ArticleMetadata | None = None,
        output_dir: Path | None = None,
    ) -> None:
        self._article = article if article is not None else ArticleMetadata()
        self._output_dir = (output_dir or Path.cwd()).resolve()

    @property
    def article(self) -> ArticleMetadata:
        """The entity being edited (e.g. for ``article.edit_title()``)."""
        return self._article

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    # ------------------------------------------------------------------
    # Session setup
    # ------------------------------------------------------------------

    def open(
        self,
        *,
        title: str = "",
        date: str | None = None,
        categories: Iterable[str] = (),
        tags: Iterable[str] = (),
    ) -> ServiceResult:
        """Replace the entity with a fresh one built from initial values.

        *date* defaults to today. Repeated or blank categories/tags are
        skipped with a warning rather than failing the whole session.
        """
        op = "open_article"
        try:
            article = ArticleMetadata(title=title, date=date)
        except ArticleError as exc:
            return _failure(op, exc)

        warnings: list[str] = []
        for kind, names, add in (
            ("Category", categories, article.add_category),
            ("Tag", tags, article.add_tag),
        ):
            for name in names:
                if not name.strip():
                    warnings.append(f"{kind} name is empty; skipped")
                    continue
                try:
                    add(name)
                except ArticleError as exc:
                    warnings.append(exc.message)

        self._article = article
        return ServiceResult.success(op, self._summary(), warnings=warnings)

    def load(self, path: Path) -> ServiceResult:
        """Replace the entity with the one stored in *path*."""
        op = "load_article"
        started = time.perf_counter()
        with article_log_context(op, path=str(path)):
            try:
                article = read_article(path)
            except ArticleError as exc:
                return _failure(op, exc)
            logger.debug("Article loaded from %s", path)
        self._article = article
        return ServiceResult.success(
            op,
            {"path": str(path), **self._summary()},
            meta={"bytes": path.stat().st_size, "duration_ms": _elapsed_ms(started)},
        )

    def set_output_dir(self, path: Path) -> ServiceResult:
        self._output_dir = path.resolve()
        return ServiceResult.success("set_output_dir", {"output_dir": str(self._output_dir)})

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------

    def set_title(self, title: str) -> ServiceResult:
        self._article.title = title
        return ServiceResult.success("set_title", {"title": title})

    def set_date(self, value: date | str) -> ServiceResult:
        """Set the publication date from a date or ``YYYY-MM-DD`` text."""
        op = "set_date"
        try:
            if isinstance(value, date):
                self._article.set_date(value)
            else:
                self._article.set_date_text(value)
        except ArticleError as exc:
            return _failure(op, exc)
        return ServiceResult.success(op, {"date": self._article.date})

    def add_category(self, name: str) -> ServiceResult:
        return self._add_entry("add_category", name, self._article.add_category)

    def delete_category(self, index: int) -> ServiceResult:
        return self._delete_entry("delete_category", index, self._article.delete_category)

    def add_tag(self, name: str) -> ServiceResult:
        return self._add_entry("add_tag", name, self._article.add_tag)

    def delete_tag(self, index: int) -> ServiceResult:
        return self._delete_entry("delete_tag", index, self._article.delete_tag)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def preview(self) -> ServiceResult:
        """Show the filename and file content ``save`` would produce, without I/O.

        Fails with the same error ``save`` would raise for an empty or unsafe
        title, or an occupied destination.
        """
        op = "preview_article"
        try:
            path = check_destination(self._article, self._output_dir)
        except ArticleError as exc:
            return _failure(op, exc)
        return ServiceResult.success(
            op,
            {
                "filename": path.name,
                "output_dir": str(self._output_dir),
                "frontmatter": render_article(self._article),
            },
        )

    def save(self) -> ServiceResult:
        """Persist the entity as a new file in the output directory."""
        op = "save_article"
        started = time.perf_counter()
        with article_log_context(op, title=self._article.title):
            try:
                path = save_article(self._article, self._output_dir)
            except ArticleError as exc:
                return _failure(op, exc)
        return ServiceResult.success(
            op,
            {"path": str(path), "filename": path.name, **self._summary()},
            meta={
                "output_dir": str(self._output_dir),
                "bytes": path.stat().st_size,
                "duration_ms": _elapsed_ms(started),
            },
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _add_entry(self, op: str, name: str, add: Callable[[str], None]) -> ServiceResult:
        if not name.strip():
            return ServiceResult.failure(op, "EMPTY_ENTRY", "Name is empty")
        try:
            add(name)
        except ArticleError as exc:
            return _failure(op, exc)
        return ServiceResult.success(op, self._summary())

    def _delete_entry(self, op: str, index: int, delete: Callable[[int], str]) -> ServiceResult:
        try:
            removed = delete(index)
        except ArticleError as exc:
            return _failure(op, exc)
        return ServiceResult.success(op, {"removed": removed, **self._summary()})

    def _summary(self) -> dict[str, Any]:
        return {
            "title": self._article.title,
            "date": self._article.date,
            "categories": list(self._article.categories),
            "tags": list(self._article.tags),
        }


def _failure(op: str, exc: ArticleError) -> ServiceResult:
    """Convert a domain error into a failed ServiceResult."""
    logger.debug("%s rejected: %s", op, exc.message)
    return ServiceResult.failure(op, exc.code, exc.message, exc.detail)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)
