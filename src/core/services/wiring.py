"""Service construction for Lambda handlers, cached across warm invocations."""

from functools import lru_cache

from core.clients import get_dynamo_resource, get_s3_client
from core.config import get_config
from core.db.asset_registry import AssetRegistry
from core.db.entity_store import EntityStore
from core.models import BLOG, ENTITY_KINDS, TRIP
from core.services.media_lifecycle import MediaLifecycleCoordinator
from core.storage.asset_store import AssetStore, S3AssetStore


@lru_cache(maxsize=1)
def get_asset_store() -> AssetStore:
    config = get_config()
    return S3AssetStore(get_s3_client(), config.assets_bucket, config.asset_base_url, config.aws_region)


@lru_cache(maxsize=1)
def get_asset_registry() -> AssetRegistry:
    return AssetRegistry(get_dynamo_resource().Table(get_config().assets_table))


@lru_cache(maxsize=None)
def get_entity_store(kind_name: str) -> EntityStore:
    config = get_config()
    table_names = {TRIP.name: config.trips_table, BLOG.name: config.blogs_table}
    return EntityStore(get_dynamo_resource().Table(table_names[kind_name]), ENTITY_KINDS[kind_name])


@lru_cache(maxsize=None)
def get_coordinator(kind_name: str) -> MediaLifecycleCoordinator:
    return MediaLifecycleCoordinator(
        get_entity_store(kind_name),
        get_asset_registry(),
        get_asset_store(),
        replace_order=get_config().replace_order,
    )
