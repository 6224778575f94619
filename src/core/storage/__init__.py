"""Remote object storage for media assets."""

from core.storage.asset_store import AssetStore, S3AssetStore, build_asset_key, sanitize_filename

__all__ = ["AssetStore", "S3AssetStore", "build_asset_key", "sanitize_filename"]
