"""
Notes Backend — Query Builder
==============================

What:  Translates request query parameters into SQLAlchemy predicates,
       orderings and the per-author aggregate.
How:   Each builder takes a plain mapping of parameter name → string value
       (`request.query_params` works) and returns SQL expressions. Callers
       AND the predicates together with `select(...).where(*predicates)`.

Recognized parameters:
    Notes:
        important   "true" | "false"   exact boolean match
        search      <substring>        case-sensitive match on content
        sort        "date"             newest first
    Blogs:
        search      <substring>        case-insensitive match on title OR author
        sort        "likes"            most liked first

An absent parameter produces no predicate at all, so the generated WHERE
clause only contains the filters the client asked for. `search=` (empty) is
treated as absent.
"""

from typing import Dict, List, Mapping, Optional

from sqlalchemy import ColumnElement, Select, func, or_, select

from noteapp.exceptions import ValidationError
from noteapp.models.blog import Blog
from noteapp.models.note import Note

_BOOLEAN_VALUES = {"true": True, "false": False}


def parse_boolean(params: Mapping[str, str], name: str) -> Optional[bool]:
    """Return the parameter as a bool, or None when absent."""
    raw = params.get(name)
    if raw is None:
        return None
    value = _BOOLEAN_VALUES.get(raw.strip().lower())
    if value is None:
        raise ValidationError(
            f"query parameter '{name}' must be 'true' or 'false'",
            field=name,
        )
    return value


def search_term(params: Mapping[str, str]) -> Optional[str]:
    term = params.get("search")
    if not term:
        return None
    return term


def build_note_filters(params: Mapping[str, str]) -> List[ColumnElement[bool]]:
    filters: List[ColumnElement[bool]] = []

    important = parse_boolean(params, "important")
    if important is not None:
        filters.append(Note.important.is_(important))

    term = search_term(params)
    if term is not None:
        filters.append(Note.content.contains(term, autoescape=True))

    return filters


def build_blog_filters(params: Mapping[str, str]) -> List[ColumnElement[bool]]:
    filters: List[ColumnElement[bool]] = []

    term = search_term(params)
    if term is not None:
        filters.append(
            or_(
                Blog.title.icontains(term, autoescape=True),
                Blog.author.icontains(term, autoescape=True),
            )
        )

    return filters


NOTE_ORDERINGS: Dict[str, ColumnElement] = {
    "date": Note.date.desc(),
}

BLOG_ORDERINGS: Dict[str, ColumnElement] = {
    "likes": Blog.likes.desc(),
}


def build_ordering(
    params: Mapping[str, str],
    allowed: Mapping[str, ColumnElement],
    default: ColumnElement,
) -> List[ColumnElement]:
    """
    Resolve `?sort=` against the allowed orderings.

    The default ordering is always appended as a tie-breaker so results are
    deterministic.
    """
    key = params.get("sort")
    if not key:
        return [default]
    if key not in allowed:
        raise ValidationError(
            f"query parameter 'sort' must be one of: {', '.join(sorted(allowed))}",
            field="sort",
        )
    return [allowed[key], default]


def authors_aggregate() -> Select:
    """
    Per-author blog count and like total, computed by the database.

    SELECT author, count(id) AS articles, coalesce(sum(likes), 0) AS likes
    FROM blogs GROUP BY author ORDER BY likes DESC, author
    """
    articles = func.count(Blog.id).label("articles")
    likes = func.coalesce(func.sum(Blog.likes), 0).label("likes")
    return (
        select(Blog.author, articles, likes)
        .group_by(Blog.author)
        .order_by(likes.desc(), Blog.author.asc())
    )
