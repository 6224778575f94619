from enum import Enum
from os import environ

from pydantic import BaseModel, ConfigDict


class ReplaceOrder(str, Enum):
    """Ordering of the two remote steps when a media slot is replaced."""

    UPLOAD_FIRST = "upload_first"
    DELETE_FIRST = "delete_first"


DEVELOPMENT_ENVIRONMENTS = frozenset({"local", "development"})


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    dynamodb_endpoint: str | None = None
    s3_endpoint: str | None = None
    assets_bucket: str
    asset_base_url: str = ""
    trips_table: str
    blogs_table: str
    assets_table: str
    environment: str
    remote_timeout_seconds: float = 10.0
    replace_order: ReplaceOrder = ReplaceOrder.UPLOAD_FIRST
    pending_asset_grace_seconds: int = 900

    @property
    def is_development(self) -> bool:
        return self.environment in DEVELOPMENT_ENVIRONMENTS


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config. For testing only."""
    global _cached_config
    _cached_config = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        dynamodb_endpoint=environ.get("DYNAMODB_ENDPOINT"),
        s3_endpoint=environ.get("S3_ENDPOINT"),
        assets_bucket=environ.get("ASSETS_BUCKET", "trailpost-media"),
        asset_base_url=environ.get("ASSET_BASE_URL", ""),
        trips_table=environ.get("TRIPS_TABLE", "Trips"),
        blogs_table=environ.get("BLOGS_TABLE", "Blogs"),
        assets_table=environ.get("ASSETS_TABLE", "Assets"),
        environment=environ.get("ENVIRONMENT", "local"),
        remote_timeout_seconds=float(environ.get("REMOTE_TIMEOUT_SECONDS", "10")),
        replace_order=ReplaceOrder(environ.get("REPLACE_ORDER", ReplaceOrder.UPLOAD_FIRST.value)),
        pending_asset_grace_seconds=int(environ.get("PENDING_ASSET_GRACE_SECONDS", "900")),
    )
    return _cached_config
