"""Article error taxonomy.

Every user-recoverable failure in the domain and infrastructure layers is an
:class:`ArticleError`. Each subclass carries a stable ``code`` (surfaced as
``ServiceError.code``) and a ``detail`` mapping with the offending value,
index, or path. None of these are process-fatal: the service layer converts
them into failed ``ServiceResult`` objects.
"""

from __future__ import annotations

from typing import Any, ClassVar


class ArticleError(ValueError):
    """Base class for recoverable article failures."""

    code: ClassVar[str] = "ARTICLE_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class InvalidDateError(ArticleError):
    """Date string does not match ``YYYY-MM-DD`` or is not a calendar date."""

    code = "INVALID_FORMAT"


class DuplicateEntryError(ArticleError):
    """Category or tag is already present."""

    code = "DUPLICATE_ENTRY"


class EmptyCollectionError(ArticleError):
    """Deletion requested from an empty category/tag list."""

    code = "EMPTY_COLLECTION"


class IndexOutOfBoundsError(ArticleError, IndexError):
    """Index outside the valid range of a collection or text field."""

    code = "INDEX_OUT_OF_BOUNDS"


class EmptyTitleError(ArticleError):
    """Save attempted with a blank title."""

    code = "EMPTY_TITLE"


class UnsafeTitleError(ArticleError):
    """Title would produce a path outside the output directory."""

    code = "UNSAFE_TITLE"


class FileAlreadyExistsError(ArticleError):
    """Destination path is already occupied."""

    code = "FILE_EXISTS"


class ArticleWriteError(ArticleError):
    """The destination file could not be written."""

    code = "WRITE_FAILED"


class TextHandleError(ArticleError):
    """Text handle used after detaching, or opened twice on one field."""

    code = "TEXT_HANDLE"


class InvalidFrontmatterError(ArticleError):
    """A stored file has no readable front-matter mapping."""

    code = "INVALID_FRONTMATTER"
