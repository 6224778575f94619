"""
Pydantic models for Trailpost.
"""

from core.models.asset import Asset, AssetClaim, AssetDescriptor, AssetStatus, MediaUpload
from core.models.blog import BLOG, Blog, BlogCreate, BlogUpdate, KeyValue
from core.models.entity import EntityKind, MediaSlot
from core.models.trip import TRIP, TRIP_CATEGORIES, ItineraryDay, Trip, TripCategory, TripCreate, TripUpdate

ENTITY_KINDS: dict[str, EntityKind] = {TRIP.name: TRIP, BLOG.name: BLOG}

__all__ = [
    "Asset",
    "AssetClaim",
    "AssetDescriptor",
    "AssetStatus",
    "BLOG",
    "Blog",
    "BlogCreate",
    "BlogUpdate",
    "ENTITY_KINDS",
    "EntityKind",
    "ItineraryDay",
    "KeyValue",
    "MediaSlot",
    "MediaUpload",
    "TRIP",
    "TRIP_CATEGORIES",
    "Trip",
    "TripCategory",
    "TripCreate",
    "TripUpdate",
]
