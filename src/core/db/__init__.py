"""
DynamoDB-backed stores for Trailpost.

Entity documents (trips, blogs) and the media asset registry each live in
their own table, addressed by the string attribute ``id``.
"""

from core.db.asset_registry import AssetRegistry
from core.db.entity_store import EntityStore

__all__ = ["AssetRegistry", "EntityStore"]
