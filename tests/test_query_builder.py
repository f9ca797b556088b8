"""
Notes Backend — Query Builder Unit Tests
=========================================

What:  Tests for translating query parameters into SQL predicates.
How:   Inspects the generated SQLAlchemy expressions; no database needed.

What we test:
    ✅ Absent filters produce no predicate at all
    ✅ important=true/false parsing, rejection of other values
    ✅ Empty search is treated as absent
    ✅ Blog search ORs title and author case-insensitively
    ✅ Sort resolution and the authors GROUP BY
"""

import pytest

from noteapp.exceptions import ValidationError
from noteapp.models.blog import Blog
from noteapp.models.note import Note
from noteapp.services.query_builder import (
    BLOG_ORDERINGS,
    NOTE_ORDERINGS,
    authors_aggregate,
    build_blog_filters,
    build_note_filters,
    build_ordering,
    parse_boolean,
)


class TestParseBoolean:

    def test_absent_is_none(self):
        assert parse_boolean({}, "important") is None

    def test_true_and_false(self):
        assert parse_boolean({"important": "true"}, "important") is True
        assert parse_boolean({"important": "false"}, "important") is False

    def test_case_insensitive(self):
        assert parse_boolean({"important": "TRUE"}, "important") is True

    def test_other_values_rejected(self):
        with pytest.raises(ValidationError, match="'true' or 'false'"):
            parse_boolean({"important": "maybe"}, "important")


class TestNoteFilters:

    def test_no_params_no_predicates(self):
        assert build_note_filters({}) == []

    def test_empty_search_is_omitted(self):
        assert build_note_filters({"search": ""}) == []

    def test_important_only(self):
        filters = build_note_filters({"important": "false"})
        assert len(filters) == 1
        assert "notes.important" in str(filters[0])

    def test_search_matches_content(self):
        filters = build_note_filters({"search": "HTML"})
        assert len(filters) == 1
        sql = str(filters[0])
        assert "notes.content" in sql
        assert "LIKE" in sql

    def test_both_filters(self):
        filters = build_note_filters({"important": "true", "search": "HTML"})
        assert len(filters) == 2

    def test_bad_important_rejected(self):
        with pytest.raises(ValidationError):
            build_note_filters({"important": "yes"})


class TestBlogFilters:

    def test_no_params_no_predicates(self):
        assert build_blog_filters({}) == []
        assert build_blog_filters({"search": ""}) == []

    def test_search_title_or_author_case_insensitive(self):
        filters = build_blog_filters({"search": "react"})
        assert len(filters) == 1
        sql = str(filters[0])
        assert "lower(blogs.title)" in sql
        assert "lower(blogs.author)" in sql
        assert " OR " in sql


class TestOrdering:

    def test_default_when_absent(self):
        default = Note.id.asc()
        assert build_ordering({}, NOTE_ORDERINGS, default) == [default]

    def test_likes_descending_then_default(self):
        default = Blog.id.asc()
        ordering = build_ordering({"sort": "likes"}, BLOG_ORDERINGS, default)
        assert len(ordering) == 2
        assert "DESC" in str(ordering[0])
        assert ordering[1] is default

    def test_unknown_sort_rejected(self):
        with pytest.raises(ValidationError, match="likes"):
            build_ordering({"sort": "title"}, BLOG_ORDERINGS, Blog.id.asc())


class TestAuthorsAggregate:

    def test_grouped_by_author_in_sql(self):
        sql = str(authors_aggregate())
        assert "count(blogs.id)" in sql
        assert "sum(blogs.likes)" in sql
        assert "GROUP BY blogs.author" in sql
