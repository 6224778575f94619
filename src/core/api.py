"""REST operations shared by the trip and blog Lambda handlers."""

import logging
from collections.abc import Callable
from typing import Any

from core.config import get_config
from core.errors import NotFoundError, TrailpostError
from core.http import error_response, json_response, parse_request
from core.models import TRIP_CATEGORIES, EntityKind
from core.services.catalog import filter_blogs, filter_trips, paginate, parse_paging
from core.services.wiring import get_coordinator, get_entity_store
from core.validation import validate_create, validate_update

logger = logging.getLogger(__name__)

Route = Callable[[dict[str, Any], EntityKind], dict[str, Any]]


def _entity_id(event: dict[str, Any]) -> str:
    return (event.get("pathParameters") or {}).get("id", "")


def _query(event: dict[str, Any]) -> dict[str, str]:
    return event.get("queryStringParameters") or {}


def create_entity(event: dict[str, Any], kind: EntityKind) -> dict[str, Any]:
    form, media = parse_request(event, kind.slot_names, kind.structured_fields)
    fields = validate_create(kind, form)
    coordinator = get_coordinator(kind.name)
    document = coordinator.create(fields, media)
    return json_response(
        201,
        {"success": True, "message": f"{kind.label} created successfully!", "data": coordinator.expand(document)},
    )


def get_entity(event: dict[str, Any], kind: EntityKind) -> dict[str, Any]:
    coordinator = get_coordinator(kind.name)
    document = coordinator.get(_entity_id(event))
    return json_response(200, {"success": True, "data": coordinator.expand(document)})


def update_entity(event: dict[str, Any], kind: EntityKind) -> dict[str, Any]:
    coordinator = get_coordinator(kind.name)
    entity_id = _entity_id(event)
    current = coordinator.get(entity_id)
    form, media = parse_request(event, kind.slot_names, kind.structured_fields)
    changes = validate_update(kind, form)
    document = coordinator.update(entity_id, changes, media, current=current)
    return json_response(
        200,
        {"success": True, "message": f"{kind.label} updated successfully!", "data": coordinator.expand(document)},
    )


def delete_entity(event: dict[str, Any], kind: EntityKind) -> dict[str, Any]:
    get_coordinator(kind.name).delete(_entity_id(event))
    return json_response(200, {"success": True, "message": f"{kind.label} deleted successfully!"})


def list_trips(event: dict[str, Any], kind: EntityKind) -> dict[str, Any]:
    query = _query(event)
    page, limit = parse_paging(query)
    multi = event.get("multiValueQueryStringParameters") or {}
    categories = multi.get("category") or [value for value in (query.get("category") or "").split(",") if value]
    trips = filter_trips(
        get_entity_store(kind.name).scan_all(),
        categories=categories,
        origin=query.get("from"),
        destination=query.get("to"),
    )
    selected, pagination = paginate(trips, page, limit, total_key="totalTrips")
    coordinator = get_coordinator(kind.name)
    return json_response(
        200,
        {"success": True, "data": [coordinator.expand(trip) for trip in selected], "pagination": pagination},
    )


def list_blogs(event: dict[str, Any], kind: EntityKind) -> dict[str, Any]:
    query = _query(event)
    page, limit = parse_paging(query)
    blogs = filter_blogs(
        get_entity_store(kind.name).scan_all(),
        author=query.get("author"),
        location=query.get("location"),
    )
    selected, pagination = paginate(blogs, page, limit, total_key="totalBlogs")
    coordinator = get_coordinator(kind.name)
    return json_response(
        200,
        {"success": True, "data": [coordinator.expand(blog) for blog in selected], "pagination": pagination},
    )


def trip_categories(event: dict[str, Any], kind: EntityKind) -> dict[str, Any]:
    return json_response(200, {"success": True, "data": TRIP_CATEGORIES})


def dispatch(event: dict[str, Any], kind: EntityKind, routes: dict[tuple[str, str], Route]) -> dict[str, Any]:
    """Route an API Gateway proxy event and turn failures into error bodies."""
    config = get_config()
    method = event.get("httpMethod", "")
    resource = event.get("resource", "")

    try:
        route = routes.get((method, resource))
        if route is None:
            raise NotFoundError(f"Route not found: {method} {resource}")
        return route(event, kind)
    except TrailpostError as e:
        if e.status_code >= 500:
            logger.error("%s %s failed: %s", method, resource, e.message)
        else:
            logger.info("%s %s rejected: %s", method, resource, e.message)
        return error_response(e, development=config.is_development)
    except Exception as e:
        logger.exception("Unhandled error in %s %s", method, resource)
        return error_response(TrailpostError(str(e)), development=config.is_development)
