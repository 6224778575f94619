"""REST handler for /blogs. Admin routes are gated by the API authorizer."""

from typing import Any

from core.api import create_entity, delete_entity, dispatch, get_entity, list_blogs, update_entity
from core.models import BLOG

ROUTES = {
    ("GET", "/blogs"): list_blogs,
    ("GET", "/blogs/{id}"): get_entity,
    ("POST", "/blogs"): create_entity,
    ("PUT", "/blogs/{id}"): update_entity,
    ("DELETE", "/blogs/{id}"): delete_entity,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, BLOG, ROUTES)
