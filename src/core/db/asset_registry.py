"""DynamoDB-backed registry of uploaded media assets.

Assets are registered ``pending`` with a claim naming the entity slot they
were uploaded for, and flipped to ``committed`` once the owning document
write succeeds. An asset its owner lets go of is released back to
``pending`` before it is deleted. Pending records older than a grace period
are picked up by the reconciliation pass.
"""

import uuid
from collections.abc import Iterator
from typing import Any

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from core.errors import ErrorCode, PersistenceError
from core.models.asset import Asset, AssetClaim, AssetDescriptor, AssetStatus
from core.models.base import utc_timestamp


class AssetRegistry:
    def __init__(self, table: Any) -> None:
        self._table = table

    def create(self, descriptor: AssetDescriptor, claim: AssetClaim | None = None) -> Asset:
        asset = Asset(
            id=str(uuid.uuid4()),
            name=descriptor.name,
            url=descriptor.url,
            key=descriptor.key,
            status=AssetStatus.PENDING if claim else AssetStatus.COMMITTED,
            created_at=utc_timestamp(),
            claim=claim,
        )
        try:
            self._table.put_item(
                Item=asset.model_dump(mode="json", by_alias=True, exclude_none=True),
                ConditionExpression="attribute_not_exists(id)",
            )
        except (BotoCoreError, ClientError) as e:
            raise PersistenceError(f"Failed to register asset {descriptor.key}: {e}") from e
        return asset

    def get(self, asset_id: str) -> Asset | None:
        try:
            response = self._table.get_item(Key={"id": asset_id})
        except (BotoCoreError, ClientError) as e:
            raise PersistenceError(f"Failed to load asset {asset_id}: {e}") from e
        item = response.get("Item")
        return Asset.model_validate(item) if item else None

    def delete(self, asset_id: str) -> None:
        """delete_item is idempotent; no error for missing items."""
        try:
            self._table.delete_item(Key={"id": asset_id})
        except (BotoCoreError, ClientError) as e:
            raise PersistenceError(f"Failed to delete asset {asset_id}: {e}", code=ErrorCode.DELETE_FAILED) from e

    def mark_committed(self, asset_id: str) -> None:
        try:
            self._table.update_item(
                Key={"id": asset_id},
                UpdateExpression="SET #status = :committed REMOVE #claim",
                ConditionExpression="attribute_exists(id)",
                ExpressionAttributeNames={"#status": "status", "#claim": "claim"},
                ExpressionAttributeValues={":committed": AssetStatus.COMMITTED.value},
            )
        except (BotoCoreError, ClientError) as e:
            raise PersistenceError(f"Failed to commit asset {asset_id}: {e}") from e

    def mark_released(self, asset_id: str, claim: AssetClaim) -> None:
        """Put a committed asset back to pending under the slot that dropped it."""
        try:
            self._table.update_item(
                Key={"id": asset_id},
                UpdateExpression="SET #status = :pending, #claim = :claim",
                ConditionExpression="attribute_exists(id)",
                ExpressionAttributeNames={"#status": "status", "#claim": "claim"},
                ExpressionAttributeValues={
                    ":pending": AssetStatus.PENDING.value,
                    ":claim": claim.model_dump(mode="json", by_alias=True),
                },
            )
        except (BotoCoreError, ClientError) as e:
            raise PersistenceError(f"Failed to release asset {asset_id}: {e}") from e

    def iter_pending(self, created_before: str) -> Iterator[Asset]:
        """Yield pending assets registered before the given timestamp."""
        scan_kwargs: dict[str, Any] = {
            "FilterExpression": Attr("status").eq(AssetStatus.PENDING.value) & Attr("createdAt").lt(created_before),
        }
        while True:
            response = self._table.scan(**scan_kwargs)
            for item in response.get("Items", []):
                yield Asset.model_validate(item)

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key
