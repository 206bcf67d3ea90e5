"""Tests for the ArticleMetadata entity."""

from __future__ import annotations

from datetime import date

import pytest

from postmeta.domain.article import ArticleFrontmatter, ArticleMetadata
from postmeta.domain.dates import format_date
from postmeta.domain.errors import (
    DuplicateEntryError,
    EmptyCollectionError,
    IndexOutOfBoundsError,
    InvalidDateError,
    InvalidFrontmatterError,
    TextHandleError,
)


class TestConstruction:
    def test_defaults(self) -> None:
        article = ArticleMetadata()
        assert article.title == ""
        assert article.date == format_date(date.today())
        assert article.categories == ()
        assert article.tags == ()

    def test_initial_values(self, article: ArticleMetadata) -> None:
        assert article.title == "Hello World"
        assert article.date == "2024-01-05"
        assert article.categories == ("tech",)
        assert article.tags == ("rust", "gui")

    def test_invalid_date_rejected(self) -> None:
        with pytest.raises(InvalidDateError):
            ArticleMetadata(date="2024-13-01")

    def test_duplicate_initial_tags_rejected(self) -> None:
        with pytest.raises(DuplicateEntryError):
            ArticleMetadata(tags=["a", "a"])

    def test_repr_shows_fields(self, article: ArticleMetadata) -> None:
        assert "Hello World" in repr(article)


class TestTitle:
    def test_set_title_allows_empty(self, article: ArticleMetadata) -> None:
        article.title = ""
        assert article.title == ""

    def test_set_title(self, article: ArticleMetadata) -> None:
        article.title = "Another"
        assert article.title == "Another"


class TestDate:
    def test_set_date_stores_canonical_text(self, article: ArticleMetadata) -> None:
        article.set_date(date(2025, 3, 9))
        assert article.date == "2025-03-09"
        assert article.get_date() == date(2025, 3, 9)

    def test_set_date_text(self, article: ArticleMetadata) -> None:
        article.set_date_text("2025-12-31")
        assert article.date == "2025-12-31"

    def test_set_date_text_rejects_and_keeps_previous(self, article: ArticleMetadata) -> None:
        with pytest.raises(InvalidDateError):
            article.set_date_text("2025-1-1")
        assert article.date == "2024-01-05"

    def test_get_date_on_corrupted_state(self, article: ArticleMetadata) -> None:
        article._date = "garbage"  # simulate externally edited state
        with pytest.raises(InvalidDateError):
            article.get_date()


class TestCategories:
    def test_add_appends_in_order(self) -> None:
        article = ArticleMetadata()
        article.add_category("b")
        article.add_category("a")
        assert article.categories == ("b", "a")

    def test_duplicate_add_fails_once_stored(self) -> None:
        article = ArticleMetadata()
        article.add_category("x")
        with pytest.raises(DuplicateEntryError) as excinfo:
            article.add_category("x")
        assert excinfo.value.detail == {"value": "x"}
        assert article.categories == ("x",)

    def test_duplicate_check_is_case_sensitive(self) -> None:
        article = ArticleMetadata()
        article.add_category("Tech")
        article.add_category("tech")
        assert article.categories == ("Tech", "tech")

    def test_delete_shifts_remaining(self) -> None:
        article = ArticleMetadata(categories=["a", "b"])
        assert article.delete_category(0) == "a"
        assert article.categories == ("b",)

    def test_delete_middle_preserves_order(self) -> None:
        article = ArticleMetadata(categories=["a", "b", "c"])
        article.delete_category(1)
        assert article.categories == ("a", "c")

    def test_delete_out_of_bounds_leaves_unchanged(self) -> None:
        article = ArticleMetadata(categories=["a", "b"])
        with pytest.raises(IndexOutOfBoundsError) as excinfo:
            article.delete_category(5)
        assert excinfo.value.detail == {"index": 5, "length": 2}
        assert article.categories == ("a", "b")

    def test_delete_negative_index_is_out_of_bounds(self) -> None:
        article = ArticleMetadata(categories=["a", "b"])
        with pytest.raises(IndexOutOfBoundsError):
            article.delete_category(-1)
        assert article.categories == ("a", "b")

    def test_delete_from_empty(self) -> None:
        with pytest.raises(EmptyCollectionError):
            ArticleMetadata().delete_category(0)

    def test_joined_text(self) -> None:
        article = ArticleMetadata(categories=["a", "b"])
        assert article.categories_text() == "a b"

    def test_returned_tuple_is_a_copy(self) -> None:
        article = ArticleMetadata(categories=["a"])
        view = article.categories
        article.add_category("b")
        assert view == ("a",)


class TestTags:
    def test_independent_of_categories(self) -> None:
        article = ArticleMetadata(categories=["python"])
        article.add_tag("python")
        assert article.tags == ("python",)

    def test_duplicate_tag(self) -> None:
        article = ArticleMetadata(tags=["rust"])
        with pytest.raises(DuplicateEntryError, match="Tag 'rust' already exists"):
            article.add_tag("rust")
        assert article.tags == ("rust",)

    def test_delete_from_empty(self) -> None:
        with pytest.raises(EmptyCollectionError) as excinfo:
            ArticleMetadata().delete_tag(0)
        assert excinfo.value.code == "EMPTY_COLLECTION"

    def test_delete(self, article: ArticleMetadata) -> None:
        article.delete_tag(1)
        assert article.tags == ("rust",)

    def test_joined_text(self, article: ArticleMetadata) -> None:
        assert article.tags_text() == "rust gui"

    def test_joined_text_empty(self) -> None:
        assert ArticleMetadata().tags_text() == ""


class TestEditTitle:
    def test_edits_flow_into_entity(self, article: ArticleMetadata) -> None:
        with article.edit_title() as handle:
            handle.insert("!", len(handle.read()))
        assert article.title == "Hello World!"

    def test_handle_detached_after_block(self, article: ArticleMetadata) -> None:
        with article.edit_title() as handle:
            pass
        assert handle.attached is False
        with pytest.raises(TextHandleError):
            handle.read()

    def test_only_one_handle_at_a_time(self, article: ArticleMetadata) -> None:
        with article.edit_title():
            with pytest.raises(TextHandleError):
                with article.edit_title():
                    pass

    def test_new_handle_after_previous_closed(self, article: ArticleMetadata) -> None:
        with article.edit_title() as first:
            first.clear()
        with article.edit_title() as second:
            second.replace("Fresh")
        assert article.title == "Fresh"

    def test_released_on_exception(self, article: ArticleMetadata) -> None:
        with pytest.raises(RuntimeError), article.edit_title():
            raise RuntimeError("boom")
        with article.edit_title() as handle:
            assert handle.read() == "Hello World"


class TestFromFrontmatter:
    def test_string_date(self) -> None:
        article = ArticleMetadata.from_frontmatter(
            {"title": "T", "date": "2024-01-05", "categories": ["c"], "tags": ["t"]}
        )
        assert article.date == "2024-01-05"
        assert article.categories == ("c",)
        assert article.tags == ("t",)

    def test_yaml_date_object(self) -> None:
        article = ArticleMetadata.from_frontmatter({"title": "T", "date": date(2024, 1, 5)})
        assert article.date == "2024-01-05"

    def test_missing_keys_use_defaults(self) -> None:
        article = ArticleMetadata.from_frontmatter({"title": "T"})
        assert article.date == format_date(date.today())
        assert article.tags == ()

    def test_null_lists(self) -> None:
        article = ArticleMetadata.from_frontmatter({"title": "T", "tags": None})
        assert article.tags == ()

    def test_invalid_date(self) -> None:
        with pytest.raises(InvalidDateError):
            ArticleMetadata.from_frontmatter({"title": "T", "date": "January"})

    def test_falsy_title_kept(self) -> None:
        assert ArticleMetadata.from_frontmatter({"title": 0}).title == "0"
        assert ArticleMetadata.from_frontmatter({"title": None}).title == ""

    @pytest.mark.parametrize(
        "fm",
        [
            {"categories": "tech"},
            {"categories": "book"},
            {"tags": {"a": 1}},
            {"categories": [["x"]]},
            {"title": ["a"]},
        ],
    )
    def test_wrong_shape(self, fm: dict[str, object]) -> None:
        with pytest.raises(InvalidFrontmatterError):
            ArticleMetadata.from_frontmatter(fm)


class TestSnapshot:
    def test_snapshot_fields(self, article: ArticleMetadata) -> None:
        snap = article.snapshot()
        assert isinstance(snap, ArticleFrontmatter)
        assert snap.model_dump() == {
            "title": "Hello World",
            "date": "2024-01-05",
            "categories": ["tech"],
            "tags": ["rust", "gui"],
        }

    def test_snapshot_is_frozen(self, article: ArticleMetadata) -> None:
        snap = article.snapshot()
        with pytest.raises(Exception):
            snap.title = "changed"  # type: ignore[misc]

    def test_snapshot_does_not_track_later_edits(self, article: ArticleMetadata) -> None:
        snap = article.snapshot()
        article.add_tag("new")
        assert snap.tags == ["rust", "gui"]
