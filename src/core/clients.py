"""Lazy-initialized boto3 clients, reused across warm Lambda invocations."""

from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config as BotoConfig

from core.config import get_config


def _boto_config(max_attempts: int | None = None) -> BotoConfig:
    config = get_config()
    kwargs: dict[str, Any] = {
        "connect_timeout": config.remote_timeout_seconds,
        "read_timeout": config.remote_timeout_seconds,
    }
    if max_attempts is not None:
        kwargs["retries"] = {"total_max_attempts": max_attempts, "mode": "standard"}
    return BotoConfig(**kwargs)


@lru_cache(maxsize=1)
def get_dynamo_resource() -> Any:
    config = get_config()
    return boto3.resource(
        "dynamodb",
        endpoint_url=config.dynamodb_endpoint,
        region_name=config.aws_region,
        config=_boto_config(),
    )


@lru_cache(maxsize=1)
def get_s3_client() -> Any:
    # Object store calls are never retried: a failure surfaces to the caller.
    config = get_config()
    return boto3.client(
        "s3",
        endpoint_url=config.s3_endpoint,
        region_name=config.aws_region,
        config=_boto_config(max_attempts=1),
    )
