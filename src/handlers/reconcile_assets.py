"""Scheduled handler that removes orphaned pending assets."""

import logging
from typing import Any

from core.config import get_config
from core.models import ENTITY_KINDS
from core.services.reconciliation import reconcile_pending_assets
from core.services.wiring import get_asset_registry, get_asset_store, get_entity_store

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    config = get_config()

    result = reconcile_pending_assets(
        get_asset_registry(),
        get_asset_store(),
        {name: get_entity_store(name) for name in ENTITY_KINDS},
        grace_seconds=config.pending_asset_grace_seconds,
    )

    logger.info(
        "Reconciliation complete: %d committed, %d deleted, %d failed",
        result["committed"],
        result["deleted"],
        result["failed"],
    )

    return {
        "statusCode": 200,
        "body": f"Reconciliation: {result['committed']} committed, {result['deleted']} deleted, {result['failed']} failed",
    }
