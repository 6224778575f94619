"""Remote object store contract and its S3 implementation."""

import logging
import re
import uuid
from abc import ABC, abstractmethod
from time import time
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.errors import AssetStoreError, ErrorCode
from core.models.asset import AssetDescriptor

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: str) -> str:
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).strip("._")
    return name or "upload"


def build_asset_key(folder: str, prefix: str, filename: str, now: float | None = None) -> str:
    """Collision-resistant object key: folder/prefix_<epoch ms>_<random>_<filename>."""
    millis = int((time() if now is None else now) * 1000)
    return f"{folder.strip('/')}/{prefix}_{millis}_{uuid.uuid4().hex[:8]}_{sanitize_filename(filename)}"


class AssetStore(ABC):
    @abstractmethod
    def upload(self, content: bytes, key: str, content_type: str) -> AssetDescriptor: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class S3AssetStore(AssetStore):
    def __init__(self, s3_client: Any, bucket: str, base_url: str = "", region: str = "us-east-1") -> None:
        self._client = s3_client
        self._bucket = bucket
        self._base_url = base_url.rstrip("/") or f"https://{bucket}.s3.{region}.amazonaws.com"

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    def upload(self, content: bytes, key: str, content_type: str) -> AssetDescriptor:
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=content, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            raise AssetStoreError(f"Image upload failed for {key}: {e}", code=ErrorCode.UPLOAD_FAILED) from e

        logger.info("Uploaded %s (%d bytes) to %s", key, len(content), self._bucket)
        return AssetDescriptor(name=key.rsplit("/", 1)[-1], url=self.url_for(key), key=key)

    def delete(self, key: str) -> None:
        """Delete is idempotent: S3 reports success for missing keys."""
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise AssetStoreError(f"Image delete failed for {key}: {e}", code=ErrorCode.DELETE_FAILED) from e

        logger.info("Deleted %s from %s", key, self._bucket)
