"""Listing, filtering and pagination for the public read endpoints."""

import math
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from core.errors import ValidationError
from core.models import Blog, Trip

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def parse_paging(query: dict[str, str]) -> tuple[int, int]:
    try:
        page = int(query.get("page") or 1)
        limit = int(query.get("limit") or DEFAULT_PAGE_SIZE)
    except ValueError:
        raise ValidationError("page and limit must be integers") from None
    return max(page, 1), min(max(limit, 1), MAX_PAGE_SIZE)


def paginate(
    documents: Iterable[BaseModel],
    page: int,
    limit: int,
    total_key: str,
) -> tuple[list[BaseModel], dict[str, Any]]:
    """Newest first, then slice out the requested page."""
    ordered = sorted(documents, key=lambda doc: doc.created_at, reverse=True)
    total = len(ordered)
    total_pages = math.ceil(total / limit)
    start = (page - 1) * limit
    return ordered[start : start + limit], {
        "currentPage": page,
        "totalPages": total_pages,
        total_key: total,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }


def _contains(haystack: str, needle: str | None) -> bool:
    return not needle or needle.casefold() in haystack.casefold()


def filter_trips(
    trips: Iterable[Trip],
    categories: list[str] | None = None,
    origin: str | None = None,
    destination: str | None = None,
) -> list[Trip]:
    wanted = set(categories or [])
    return [
        trip
        for trip in trips
        if (not wanted or wanted.intersection(category.value for category in trip.category))
        and _contains(trip.from_, origin)
        and _contains(trip.to, destination)
    ]


def filter_blogs(blogs: Iterable[Blog], author: str | None = None, location: str | None = None) -> list[Blog]:
    return [blog for blog in blogs if _contains(blog.author_name, author) and _contains(blog.location_name, location)]
