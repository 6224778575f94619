"""DynamoDB-backed document store for trips and blogs."""

import json
from collections.abc import Iterator
from decimal import Decimal
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from core.errors import ErrorCode, PersistenceError
from core.models.base import utc_timestamp
from core.models.entity import EntityKind

# Maintained by the store itself, never taken from a change set.
_MANAGED_ATTRIBUTES = frozenset({"id", "createdAt", "updatedAt", "version"})


def to_item(data: dict[str, Any]) -> dict[str, Any]:
    """DynamoDB rejects floats; round-trip through JSON to get Decimals."""
    return json.loads(json.dumps(data), parse_float=Decimal)


def from_item(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_item(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_item(v) for v in value]
    return value


def _is_conditional_failure(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


class EntityStore:
    def __init__(self, table: Any, kind: EntityKind) -> None:
        self._table = table
        self.kind = kind

    def get(self, entity_id: str) -> BaseModel | None:
        try:
            response = self._table.get_item(Key={"id": entity_id})
        except (BotoCoreError, ClientError) as e:
            raise PersistenceError(f"Failed to load {self.kind.name} {entity_id}: {e}") from e
        item = response.get("Item")
        return self.kind.document.model_validate(from_item(item)) if item else None

    def put(self, document: BaseModel) -> None:
        item = to_item(document.model_dump(mode="json", by_alias=True))
        try:
            self._table.put_item(Item=item, ConditionExpression="attribute_not_exists(id)")
        except ClientError as e:
            if _is_conditional_failure(e):
                raise PersistenceError(f"{self.kind.label} {item['id']} already exists", code=ErrorCode.CONFLICT) from e
            raise PersistenceError(f"Failed to save {self.kind.name}: {e}") from e
        except BotoCoreError as e:
            raise PersistenceError(f"Failed to save {self.kind.name}: {e}") from e

    def update(self, entity_id: str, changes: dict[str, Any], expected_version: int) -> BaseModel:
        """Apply a partial change set as one conditional write.

        ``changes`` uses stored (camelCase) attribute names. The write only
        succeeds if the stored version still equals ``expected_version``.
        """
        names: dict[str, str] = {"#version": "version", "#updatedAt": "updatedAt"}
        values: dict[str, Any] = {
            ":expected": expected_version,
            ":next": expected_version + 1,
            ":now": utc_timestamp(),
        }
        assignments = ["#version = :next", "#updatedAt = :now"]
        for index, (attribute, value) in enumerate(sorted(changes.items())):
            if attribute in _MANAGED_ATTRIBUTES:
                continue
            names[f"#f{index}"] = attribute
            values[f":v{index}"] = value
            assignments.append(f"#f{index} = :v{index}")

        try:
            response = self._table.update_item(
                Key={"id": entity_id},
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression="attribute_exists(id) AND #version = :expected",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=to_item(values),
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if _is_conditional_failure(e):
                raise PersistenceError(
                    f"{self.kind.label} {entity_id} was modified concurrently",
                    code=ErrorCode.CONFLICT,
                ) from e
            raise PersistenceError(f"Failed to update {self.kind.name} {entity_id}: {e}") from e
        except BotoCoreError as e:
            raise PersistenceError(f"Failed to update {self.kind.name} {entity_id}: {e}") from e

        return self.kind.document.model_validate(from_item(response["Attributes"]))

    def delete(self, entity_id: str) -> None:
        try:
            self._table.delete_item(Key={"id": entity_id})
        except (BotoCoreError, ClientError) as e:
            raise PersistenceError(f"Failed to delete {self.kind.name} {entity_id}: {e}") from e

    def scan_all(self) -> Iterator[BaseModel]:
        scan_kwargs: dict[str, Any] = {}
        while True:
            response = self._table.scan(**scan_kwargs)
            for item in response.get("Items", []):
                yield self.kind.document.model_validate(from_item(item))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key
