"""TextHandle — scoped in-place editing of one string field.

A handle is built from a ``(get, set)`` callable pair and never stores the
string itself, so the owning entity keeps ownership of the field. Offsets
are character (code point) offsets.

INVARIANT: A rejected edit leaves the field unchanged.
"""

from __future__ import annotations

from collections.abc import Callable

from postmeta.domain.errors import IndexOutOfBoundsError, TextHandleError


class TextHandle:
    """Read/modify capability over a single text field.

    Usage::

        with article.edit_title() as handle:
            handle.insert("Draft: ", 0)
            handle.delete_range(0, 7)
    """

    def __init__(self, get: Callable[[], str], set: Callable[[str], None]) -> None:  # noqa: A002
        self._get: Callable[[], str] | None = get
        self._set: Callable[[str], None] | None = set

    @property
    def attached(self) -> bool:
        """Whether the handle is still bound to its field."""
        return self._get is not None

    def detach(self) -> None:
        """Release the field; every later operation raises TextHandleError."""
        self._get = None
        self._set = None

    def read(self) -> str:
        """Current content of the field."""
        return self._getter()()

    def insert(self, text: str, char_index: int) -> int:
        """Insert *text* before character *char_index*.

        Returns the number of characters inserted.

        Raises:
            IndexOutOfBoundsError: If *char_index* is negative or beyond the
                end of the current content.
        """
        current = self.read()
        if not 0 <= char_index <= len(current):
            msg = f"Insert position {char_index} out of range 0..{len(current)}"
            raise IndexOutOfBoundsError(msg, index=char_index, length=len(current))
        self._setter()(current[:char_index] + text + current[char_index:])
        return len(text)

    def delete_range(self, start: int, end: int) -> None:
        """Remove the characters in ``[start, end)``.

        Raises:
            IndexOutOfBoundsError: Unless ``0 <= start <= end <= len``.
        """
        current = self.read()
        if not 0 <= start <= end <= len(current):
            msg = f"Range {start}..{end} invalid for text of length {len(current)}"
            raise IndexOutOfBoundsError(msg, start=start, end=end, length=len(current))
        self._setter()(current[:start] + current[end:])

    def clear(self) -> None:
        self._setter()("")

    def replace(self, text: str) -> None:
        self._setter()(text)

    def take(self) -> str:
        """Empty the field and return what it held."""
        previous = self.read()
        self._setter()("")
        return previous

    def _getter(self) -> Callable[[], str]:
        if self._get is None:
            msg = "Text handle is detached"
            raise TextHandleError(msg)
        return self._get

    def _setter(self) -> Callable[[str], None]:
        if self._set is None:
            msg = "Text handle is detached"
            raise TextHandleError(msg)
        return self._set
