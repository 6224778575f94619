"""Pydantic models for media assets and their registry records."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from core.models.base import CamelModel


class AssetStatus(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"


class AssetDescriptor(BaseModel):
    """What the remote object store returns for a successful upload."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    key: str


class AssetClaim(CamelModel):
    """Owner slot a pending asset was uploaded for."""

    model_config = ConfigDict(frozen=True)

    owner_kind: str
    owner_id: str
    slot: str


class Asset(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    url: str
    key: str
    status: AssetStatus = AssetStatus.COMMITTED
    created_at: str
    claim: AssetClaim | None = None

    def public_view(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "url": self.url, "key": self.key}


class MediaUpload(BaseModel):
    """A binary payload received for one media slot."""

    slot: str
    filename: str = Field(..., min_length=1)
    content: bytes
    content_type: str = "application/octet-stream"
