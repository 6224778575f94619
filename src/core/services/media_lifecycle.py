"""Media lifecycle coordinator.

Keeps an entity document and the asset records it references consistent
across create, update and delete. The object store and the document store
share no transaction, so every upload is registered ``pending`` with a claim
on its owner slot before the document write and committed after it. Uploads
of a failed request are compensated immediately; whatever compensation
cannot remove is left for the reconciliation pass.
"""

import logging
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

import pydantic
from pydantic import BaseModel

from core.config import ReplaceOrder
from core.db.asset_registry import AssetRegistry
from core.db.entity_store import EntityStore
from core.errors import ErrorCode, IntegrityGuardError, NotFoundError, ValidationError
from core.models.asset import Asset, AssetClaim, MediaUpload
from core.models.base import utc_timestamp
from core.models.entity import EntityKind, MediaSlot
from core.storage.asset_store import AssetStore, build_asset_key
from core.validation import format_errors

logger = logging.getLogger(__name__)

_STORE_MANAGED = ("id", "createdAt", "updatedAt", "version")


class MediaLifecycleCoordinator:
    def __init__(
        self,
        entities: EntityStore,
        registry: AssetRegistry,
        asset_store: AssetStore,
        replace_order: ReplaceOrder = ReplaceOrder.UPLOAD_FIRST,
    ) -> None:
        self._entities = entities
        self._registry = registry
        self._store = asset_store
        self._replace_order = replace_order

    @property
    def kind(self) -> EntityKind:
        return self._entities.kind

    # --- reads

    def get(self, entity_id: str) -> BaseModel:
        try:
            uuid.UUID(entity_id)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid {self.kind.name} ID format", code=ErrorCode.INVALID_ID) from None

        document = self._entities.get(entity_id)
        if document is None:
            raise NotFoundError(f"{self.kind.label} not found")
        return document

    def expand(self, document: BaseModel) -> dict[str, Any]:
        """Render a document with its slot references resolved to asset views."""
        data = document.model_dump(mode="json", by_alias=True)
        for slot in self.kind.slots:
            asset_id = data.get(slot.name)
            asset = self._registry.get(asset_id) if asset_id else None
            data[slot.name] = asset.public_view() if asset else None
        return data

    # --- create

    def create(self, fields: BaseModel, media: Mapping[str, MediaUpload]) -> BaseModel:
        missing = [name for name in self.kind.slot_names if name not in media]
        if missing:
            raise ValidationError(
                "Both header image and hero image are required",
                details={"required": self.kind.slot_names},
            )

        entity_id = str(uuid.uuid4())
        uploaded: list[Asset] = []
        try:
            references: dict[str, str] = {}
            for slot in self.kind.slots:
                asset = self._upload(slot, media[slot.name], entity_id)
                uploaded.append(asset)
                references[slot.attr] = asset.id

            now = utc_timestamp()
            document = self._build_document(
                {**fields.model_dump(), **references, "id": entity_id, "created_at": now, "updated_at": now, "version": 1}
            )
            self._entities.put(document)
        except Exception:
            self._compensate(uploaded)
            raise

        self._commit(uploaded)
        logger.info("Created %s %s with %d assets", self.kind.name, entity_id, len(uploaded))
        return document

    # --- update

    def update(
        self,
        entity_id: str,
        changes: BaseModel,
        media: Mapping[str, MediaUpload],
        current: BaseModel | None = None,
    ) -> BaseModel:
        """Apply field changes and slot replacements to a stored entity.

        ``current`` is the document the caller already loaded for
        ``entity_id``; the version check on the write still catches anything
        that changed since.
        """
        existing = current if current is not None else self.get(entity_id)
        updates = changes.model_dump(exclude_unset=True, exclude_none=True)
        slots = [slot for slot in self.kind.slots if slot.name in media]

        # Field-level validators run before any asset is touched.
        self._build_document({**existing.model_dump(), **updates})

        uploaded: list[Asset] = []
        try:
            for slot in slots:
                if self._replace_order is ReplaceOrder.DELETE_FIRST:
                    old_id = getattr(existing, slot.attr)
                    if old_id:
                        self._discard(old_id)
                asset = self._upload(slot, media[slot.name], existing.id)
                uploaded.append(asset)
                updates[slot.attr] = asset.id

            document = self._write_update(existing, updates)
        except Exception:
            self._compensate(uploaded)
            raise

        self._commit(uploaded)
        if self._replace_order is ReplaceOrder.UPLOAD_FIRST:
            for slot in slots:
                old_id = getattr(existing, slot.attr)
                if old_id:
                    self._discard_quietly(old_id, slot, existing.id)

        logger.info(
            "Updated %s %s (%d fields, %d replaced assets)",
            self.kind.name,
            entity_id,
            len(updates) - len(slots),
            len(slots),
        )
        return document

    def _write_update(self, existing: BaseModel, updates: dict[str, Any]) -> BaseModel:
        merged = self._build_document({**existing.model_dump(), **updates})
        before = existing.model_dump(mode="json", by_alias=True)
        after = merged.model_dump(mode="json", by_alias=True)
        changed = {
            attribute: value
            for attribute, value in after.items()
            if attribute not in _STORE_MANAGED and before.get(attribute) != value
        }
        return self._entities.update(existing.id, changed, expected_version=existing.version)

    # --- delete

    def delete(self, entity_id: str) -> list[str]:
        """Delete an entity, cleaning up its assets on a best-effort basis.

        Returns the ids of assets whose cleanup failed; those are logged and
        left pending for reconciliation so that the entity removal itself
        always goes through.
        """
        document = self.get(entity_id)
        dependents = self.kind.dependents(document)
        if dependents:
            raise IntegrityGuardError(self.kind.dependents_message or f"{self.kind.label} has dependent records")

        # Removed first so released assets are never seen as referenced.
        self._entities.delete(document.id)

        failed: list[str] = []
        for slot in self.kind.slots:
            asset_id = getattr(document, slot.attr)
            if not asset_id:
                continue
            if not self._discard_quietly(asset_id, slot, document.id):
                failed.append(asset_id)

        logger.info("Deleted %s %s (%d asset cleanups failed)", self.kind.name, entity_id, len(failed))
        return failed

    # --- asset steps

    def _build_document(self, data: dict[str, Any]) -> BaseModel:
        try:
            return self.kind.document.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(
                "Validation error",
                code=ErrorCode.PERSISTENCE_INVALID,
                details={"errors": format_errors(e)},
            ) from e

    def _upload(self, slot: MediaSlot, upload: MediaUpload, owner_id: str) -> Asset:
        key = build_asset_key(slot.folder, slot.prefix, upload.filename)
        descriptor = self._store.upload(upload.content, key, upload.content_type)
        try:
            return self._registry.create(
                descriptor,
                claim=AssetClaim(owner_kind=self.kind.name, owner_id=owner_id, slot=slot.name),
            )
        except Exception:
            # Without a record the object is invisible to reconciliation.
            try:
                self._store.delete(descriptor.key)
            except Exception:
                logger.exception("Failed to remove unregistered object %s", descriptor.key)
            raise

    def _discard(self, asset_id: str) -> None:
        asset = self._registry.get(asset_id)
        if asset is None:
            logger.warning("Asset %s already gone", asset_id)
            return
        self._store.delete(asset.key)
        self._registry.delete(asset.id)

    def _discard_quietly(self, asset_id: str, slot: MediaSlot, owner_id: str) -> bool:
        """Discard an asset its owner is letting go of, without raising.

        The record is first put back to ``pending`` with a claim on the old
        slot, so a failed delete leaves an orphan reconciliation can find.
        """
        try:
            self._registry.mark_released(
                asset_id,
                AssetClaim(owner_kind=self.kind.name, owner_id=owner_id, slot=slot.name),
            )
        except Exception:
            logger.exception("Failed to release %s asset %s of %s", slot.name, asset_id, self.kind.name)
        try:
            self._discard(asset_id)
            return True
        except Exception:
            logger.exception("Failed to clean up %s asset %s of %s", slot.name, asset_id, self.kind.name)
            return False

    def _compensate(self, assets: Iterable[Asset]) -> None:
        for asset in assets:
            try:
                self._store.delete(asset.key)
                self._registry.delete(asset.id)
                logger.info("Compensated upload %s", asset.key)
            except Exception:
                logger.exception("Compensation failed for asset %s, left pending for reconciliation", asset.id)

    def _commit(self, assets: Iterable[Asset]) -> None:
        for asset in assets:
            try:
                self._registry.mark_committed(asset.id)
            except Exception:
                # Reconciliation commits assets whose claimed owner references them.
                logger.exception("Failed to commit asset %s, left pending", asset.id)
