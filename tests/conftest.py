"""Shared test fixtures for Trailpost."""

import copy
import os
import sys
import uuid
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing (DynamoDB Local doesn't need it)
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from core.config import ReplaceOrder  # noqa: E402
from core.db.asset_registry import AssetRegistry  # noqa: E402
from core.db.entity_store import EntityStore  # noqa: E402
from core.errors import AssetStoreError, ErrorCode, PersistenceError  # noqa: E402
from core.models import BLOG, TRIP, Asset, AssetStatus, BlogCreate, EntityKind, MediaUpload, TripCreate  # noqa: E402
from core.models.asset import AssetDescriptor  # noqa: E402
from core.models.base import utc_timestamp  # noqa: E402
from core.services.media_lifecycle import MediaLifecycleCoordinator  # noqa: E402
from core.storage.asset_store import AssetStore  # noqa: E402


# In-memory doubles for the three stores the coordinator drives
class FakeAssetStore(AssetStore):
    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.upload_calls = 0
        self.fail_uploads: set[int] = set()
        self.fail_deletes = False

    def upload(self, content: bytes, key: str, content_type: str) -> AssetDescriptor:
        self.upload_calls += 1
        if self.upload_calls in self.fail_uploads:
            raise AssetStoreError(f"Image upload failed for {key}", code=ErrorCode.UPLOAD_FAILED)
        self.objects[key] = content
        return AssetDescriptor(name=key.rsplit("/", 1)[-1], url=f"https://cdn.test/{key}", key=key)

    def delete(self, key: str) -> None:
        if self.fail_deletes:
            raise AssetStoreError(f"Image delete failed for {key}", code=ErrorCode.DELETE_FAILED)
        self.objects.pop(key, None)


class InMemoryAssetRegistry(AssetRegistry):
    def __init__(self) -> None:
        self.records: dict[str, Asset] = {}

    def create(self, descriptor, claim=None):
        asset = Asset(
            id=str(uuid.uuid4()),
            name=descriptor.name,
            url=descriptor.url,
            key=descriptor.key,
            status=AssetStatus.PENDING if claim else AssetStatus.COMMITTED,
            created_at=utc_timestamp(),
            claim=claim,
        )
        self.records[asset.id] = asset
        return asset

    def get(self, asset_id):
        return self.records.get(asset_id)

    def delete(self, asset_id):
        self.records.pop(asset_id, None)

    def mark_committed(self, asset_id):
        asset = self.records[asset_id]
        self.records[asset_id] = asset.model_copy(update={"status": AssetStatus.COMMITTED, "claim": None})

    def mark_released(self, asset_id, claim):
        if asset_id not in self.records:
            raise PersistenceError(f"Failed to release asset {asset_id}")
        asset = self.records[asset_id]
        self.records[asset_id] = asset.model_copy(update={"status": AssetStatus.PENDING, "claim": claim})

    def iter_pending(self, created_before):
        for asset in list(self.records.values()):
            if asset.status is AssetStatus.PENDING and asset.created_at < created_before:
                yield asset


class InMemoryEntityStore(EntityStore):
    def __init__(self, kind: EntityKind) -> None:
        self.kind = kind
        self.documents: dict = {}
        self.fail_writes = False
        self.update_calls = 0

    def get(self, entity_id):
        return self.documents.get(entity_id)

    def put(self, document):
        if self.fail_writes:
            raise PersistenceError("write failed")
        self.documents[document.id] = document

    def update(self, entity_id, changes, expected_version):
        self.update_calls += 1
        if self.fail_writes:
            raise PersistenceError("write failed")
        current = self.documents[entity_id]
        if current.version != expected_version:
            raise PersistenceError("modified concurrently", code=ErrorCode.CONFLICT)
        data = current.model_dump(mode="json", by_alias=True)
        data.update(changes)
        data["version"] = expected_version + 1
        data["updatedAt"] = utc_timestamp()
        document = self.kind.document.model_validate(data)
        self.documents[entity_id] = document
        return document

    def delete(self, entity_id):
        self.documents.pop(entity_id, None)

    def scan_all(self):
        yield from list(self.documents.values())


VALID_TRIP_FIELDS = {
    "heading": "  Kedarkantha Winter Trek ",
    "description": "Six days in the snow.",
    "from": "Delhi",
    "to": "Sankri",
    "category": ["SUNRISE TREKS", "BACKPACKING TRIPS"],
    "price": 8999,
    "itinerary": [
        {"day": "1", "activities": ["Drive to Sankri"]},
        {"day": "2", "activities": ["Trek to Juda Ka Talab", "Camp"]},
    ],
    "highlights": ["Summit sunrise", "Frozen lake"],
    "pickupLocation": ["Kashmere Gate"],
    "thingsToCarry": ["Down jacket", "Headlamp"],
}

VALID_BLOG_FIELDS = {
    "authorName": "Asha Rao",
    "heading": "Chasing Monsoon in Coorg",
    "locationName": "Coorg",
    "locatedIn": ["Karnataka", "India"],
    "idealFor": ["Couples"],
    "whatIsSpecial": "Coffee estates and mist.",
    "howToReach": [{"key": "Air", "value": "Mangalore airport"}],
    "foodEssentials": ["Pandi curry"],
    "thingsToKnow": ["Leeches in July"],
    "faq": [],
}


@pytest.fixture
def asset_store():
    return FakeAssetStore()


@pytest.fixture
def registry():
    return InMemoryAssetRegistry()


@pytest.fixture
def trip_store():
    return InMemoryEntityStore(TRIP)


@pytest.fixture
def blog_store():
    return InMemoryEntityStore(BLOG)


@pytest.fixture
def trip_coordinator(trip_store, registry, asset_store):
    return MediaLifecycleCoordinator(trip_store, registry, asset_store)


@pytest.fixture
def blog_coordinator(blog_store, registry, asset_store):
    return MediaLifecycleCoordinator(blog_store, registry, asset_store)


@pytest.fixture
def delete_first_coordinator(trip_store, registry, asset_store):
    return MediaLifecycleCoordinator(trip_store, registry, asset_store, replace_order=ReplaceOrder.DELETE_FIRST)


@pytest.fixture
def trip_form():
    return copy.deepcopy(VALID_TRIP_FIELDS)


@pytest.fixture
def blog_form():
    return copy.deepcopy(VALID_BLOG_FIELDS)


@pytest.fixture
def trip_fields():
    return TripCreate.model_validate(VALID_TRIP_FIELDS)


@pytest.fixture
def blog_fields():
    return BlogCreate.model_validate(VALID_BLOG_FIELDS)


@pytest.fixture
def media():
    return {
        slot: MediaUpload(slot=slot, filename=f"{slot}.jpg", content=content, content_type="image/jpeg")
        for slot, content in (("headerImage", b"header-bytes"), ("heroImage", b"hero-bytes"))
    }


# DynamoDB fixtures
@pytest.fixture
def dynamodb_resource():
    """Provide a DynamoDB resource for integration tests."""
    import boto3
    from core.config import get_config

    config = get_config()
    if not config.dynamodb_endpoint:
        pytest.skip("DYNAMODB_ENDPOINT is not set")

    resource = boto3.resource(
        "dynamodb",
        endpoint_url=config.dynamodb_endpoint,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    return resource


def _emptied(table):
    yield table

    # Cleanup: scan and delete all items created during test
    response = table.scan()
    with table.batch_writer() as batch:
        for item in response.get("Items", []):
            batch.delete_item(Key={"id": item["id"]})


@pytest.fixture
def trips_table(dynamodb_resource):
    """Provide the trips table, emptied after the test."""
    from core.config import get_config

    yield from _emptied(dynamodb_resource.Table(get_config().trips_table))


@pytest.fixture
def blogs_table(dynamodb_resource):
    """Provide the blogs table, emptied after the test."""
    from core.config import get_config

    yield from _emptied(dynamodb_resource.Table(get_config().blogs_table))


@pytest.fixture
def assets_table(dynamodb_resource):
    """Provide the assets table, emptied after the test."""
    from core.config import get_config

    yield from _emptied(dynamodb_resource.Table(get_config().assets_table))
