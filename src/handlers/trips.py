"""REST handler for /trips. Admin routes are gated by the API authorizer."""

from typing import Any

from core.api import create_entity, delete_entity, dispatch, get_entity, list_trips, trip_categories, update_entity
from core.models import TRIP

ROUTES = {
    ("GET", "/trips"): list_trips,
    ("GET", "/trips/categories"): trip_categories,
    ("GET", "/trips/{id}"): get_entity,
    ("POST", "/trips"): create_entity,
    ("PUT", "/trips/{id}"): update_entity,
    ("DELETE", "/trips/{id}"): delete_entity,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, TRIP, ROUTES)
