"""Reconciliation pass for assets left pending by interrupted requests."""

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

from core.db.asset_registry import AssetRegistry
from core.db.entity_store import EntityStore
from core.models.asset import Asset
from core.models.base import utc_timestamp
from core.storage.asset_store import AssetStore

logger = logging.getLogger(__name__)


def _is_referenced(asset: Asset, entity_stores: Mapping[str, EntityStore]) -> bool:
    if asset.claim is None:
        return False
    store = entity_stores.get(asset.claim.owner_kind)
    if store is None:
        logger.warning("Asset %s claimed by unknown kind %s", asset.id, asset.claim.owner_kind)
        return False
    owner = store.get(asset.claim.owner_id)
    if owner is None:
        return False
    slot = store.kind.slot(asset.claim.slot)
    return getattr(owner, slot.attr) == asset.id


def reconcile_pending_assets(
    registry: AssetRegistry,
    asset_store: AssetStore,
    entity_stores: Mapping[str, EntityStore],
    grace_seconds: int,
    now: datetime | None = None,
) -> dict[str, int]:
    """Commit pending assets their owner references, delete the rest."""
    cutoff = utc_timestamp((now or datetime.now(timezone.utc)) - timedelta(seconds=grace_seconds))
    committed = 0
    deleted = 0
    failed = 0

    for asset in registry.iter_pending(created_before=cutoff):
        try:
            if _is_referenced(asset, entity_stores):
                registry.mark_committed(asset.id)
                committed += 1
                logger.info("Committed referenced asset %s", asset.id)
            else:
                asset_store.delete(asset.key)
                registry.delete(asset.id)
                deleted += 1
                logger.info("Removed orphaned asset %s (%s)", asset.id, asset.key)
        except Exception:
            logger.exception("Error reconciling asset %s", asset.id)
            failed += 1

    return {"committed": committed, "deleted": deleted, "failed": failed}
