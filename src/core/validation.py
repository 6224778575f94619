"""Request-boundary validation for trip and blog payloads.

Field presence, the category enumeration and list shapes are checked first so
that clients get the same targeted messages for every entry point; the
pydantic request models then produce the typed object handed to the
coordinator. Nothing here touches a remote store.
"""

import math
from collections.abc import Callable
from typing import Any

import pydantic
from pydantic import BaseModel

from core.errors import ValidationError
from core.models import BLOG, TRIP, TRIP_CATEGORIES, BlogCreate, BlogUpdate, EntityKind, TripCreate, TripUpdate

TRIP_REQUIRED_FIELDS = [
    "heading",
    "description",
    "from",
    "to",
    "category",
    "price",
    "highlights",
    "pickupLocation",
    "thingsToCarry",
]

BLOG_REQUIRED_FIELDS = [
    "authorName",
    "heading",
    "locationName",
    "locatedIn",
    "idealFor",
    "whatIsSpecial",
    "foodEssentials",
    "thingsToKnow",
]

_TRIP_LIST_FIELDS = {
    "highlights": "Highlights",
    "pickupLocation": "Pickup location",
    "thingsToCarry": "Things to carry",
}

_BLOG_LIST_FIELDS = {
    "locatedIn": "Located in",
    "idealFor": "Ideal for",
    "foodEssentials": "Food essentials",
    "thingsToKnow": "Things to know",
}

_BLOG_PAIR_FIELDS = {"howToReach": "howToReach", "faq": "FAQ"}


def format_errors(exc: pydantic.ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_list(value: Any) -> Any:
    """A single form value stands for a one-element list."""
    if isinstance(value, str):
        return [value]
    return value


def _drop_blank(form: dict[str, Any]) -> dict[str, Any]:
    return {name: value for name, value in form.items() if not _is_blank(value)}


def _require_fields(form: dict[str, Any], required: list[str]) -> None:
    if any(_is_blank(form.get(name)) for name in required):
        raise ValidationError("Missing required fields", details={"required": required})


def _check_lists(form: dict[str, Any], labels: dict[str, str]) -> None:
    for name, label in labels.items():
        if name not in form:
            continue
        form[name] = _as_list(form[name])
        if not isinstance(form[name], list) or not form[name]:
            raise ValidationError(f"{label} must be a non-empty array")


def _check_trip_fields(form: dict[str, Any], partial: bool) -> None:
    if "category" in form:
        categories = _as_list(form["category"])
        if not isinstance(categories, list):
            categories = [categories]
        invalid = [category for category in categories if category not in TRIP_CATEGORIES]
        if invalid:
            raise ValidationError(
                "Invalid category values",
                details={"invalidCategories": invalid, "validCategories": TRIP_CATEGORIES},
            )
        form["category"] = categories

    if "price" in form:
        price = _parse_price(form["price"])
        if price is None or price <= 0:
            raise ValidationError("Price must be a positive number")
        form["price"] = price

    _check_lists(form, _TRIP_LIST_FIELDS)

    if partial and "itinerary" not in form:
        return
    itinerary = form.get("itinerary")
    if not isinstance(itinerary, list) or not itinerary:
        message = "Itinerary must be a non-empty array" if partial else "Itinerary is required and must be a non-empty array"
        raise ValidationError(message)
    for item in itinerary:
        activities = item.get("activities") if isinstance(item, dict) else None
        if not isinstance(item, dict) or _is_blank(item.get("day")) or not isinstance(activities, list) or not activities:
            raise ValidationError("Each itinerary item must have 'day' and 'activities' (non-empty array)")


def _parse_price(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    return price if math.isfinite(price) else None


def _check_blog_fields(form: dict[str, Any]) -> None:
    _check_lists(form, _BLOG_LIST_FIELDS)

    for name, label in _BLOG_PAIR_FIELDS.items():
        items = form.get(name)
        if not isinstance(items, list):
            continue
        for item in items:
            if not isinstance(item, dict) or _is_blank(item.get("key")) or _is_blank(item.get("value")):
                raise ValidationError(f"Each {label} item must have 'key' and 'value'")


def _build(model: type[BaseModel], form: dict[str, Any]) -> BaseModel:
    try:
        return model.model_validate(form)
    except pydantic.ValidationError as e:
        raise ValidationError("Validation error", details={"errors": format_errors(e)}) from e


def validate_trip_create(form: dict[str, Any]) -> TripCreate:
    form = dict(form)
    _require_fields(form, TRIP_REQUIRED_FIELDS)
    _check_trip_fields(form, partial=False)
    return _build(TripCreate, form)


def validate_trip_update(form: dict[str, Any]) -> TripUpdate:
    form = _drop_blank(form)
    _check_trip_fields(form, partial=True)
    return _build(TripUpdate, form)


def validate_blog_create(form: dict[str, Any]) -> BlogCreate:
    form = dict(form)
    _require_fields(form, BLOG_REQUIRED_FIELDS)
    _check_blog_fields(form)
    return _build(BlogCreate, form)


def validate_blog_update(form: dict[str, Any]) -> BlogUpdate:
    form = _drop_blank(form)
    _check_blog_fields(form)
    return _build(BlogUpdate, form)


_VALIDATORS: dict[str, tuple[Callable[[dict[str, Any]], BaseModel], Callable[[dict[str, Any]], BaseModel]]] = {
    TRIP.name: (validate_trip_create, validate_trip_update),
    BLOG.name: (validate_blog_create, validate_blog_update),
}


def validate_create(kind: EntityKind, form: dict[str, Any]) -> BaseModel:
    return _VALIDATORS[kind.name][0](form)


def validate_update(kind: EntityKind, form: dict[str, Any]) -> BaseModel:
    return _VALIDATORS[kind.name][1](form)
