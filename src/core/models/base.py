"""Shared pydantic base for documents stored with camelCase attribute names."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def strip_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def coerce_text(value: Any) -> Any:
    """Accept numbers where a label is expected (e.g. itinerary day 1)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return strip_text(value)


def utc_timestamp(moment: datetime | None = None) -> str:
    """Fixed-width ISO-8601 UTC timestamp, safe to compare as a string."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
