"""Unit tests for the S3 asset store."""

import re
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, ReadTimeoutError

from core.errors import AssetStoreError, ErrorCode
from core.storage.asset_store import S3AssetStore, build_asset_key, sanitize_filename


def _client_error(code: str = "AccessDenied") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "denied"}}, "PutObject")


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("photo.jpg", "photo.jpg"),
        ("My Summit Photo (1).JPG", "My_Summit_Photo_1_.JPG"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\pic.png", "pic.png"),
        ("...", "upload"),
    ],
)
def test_sanitize_filename(filename, expected):
    assert sanitize_filename(filename) == expected


def test_build_asset_key_format():
    key = build_asset_key("trips/headers/", "trip_header", "sun rise.jpg", now=1700000000.5)
    assert re.fullmatch(r"trips/headers/trip_header_1700000000500_[0-9a-f]{8}_sun_rise\.jpg", key)


def test_build_asset_key_is_unique_for_same_filename():
    keys = {build_asset_key("blogs/heroes", "blog_hero", "a.jpg", now=1.0) for _ in range(20)}
    assert len(keys) == 20


def test_upload_puts_object_and_returns_descriptor():
    s3 = MagicMock()
    store = S3AssetStore(s3, "media-bucket", region="ap-south-1")

    descriptor = store.upload(b"bytes", "trips/heroes/trip_hero_1_ab_x.jpg", "image/jpeg")

    s3.put_object.assert_called_once_with(
        Bucket="media-bucket",
        Key="trips/heroes/trip_hero_1_ab_x.jpg",
        Body=b"bytes",
        ContentType="image/jpeg",
    )
    assert descriptor.name == "trip_hero_1_ab_x.jpg"
    assert descriptor.key == "trips/heroes/trip_hero_1_ab_x.jpg"
    assert descriptor.url == "https://media-bucket.s3.ap-south-1.amazonaws.com/trips/heroes/trip_hero_1_ab_x.jpg"


def test_custom_base_url():
    store = S3AssetStore(MagicMock(), "media-bucket", base_url="https://cdn.example.com/")
    assert store.url_for("blogs/headers/x.jpg") == "https://cdn.example.com/blogs/headers/x.jpg"


def test_upload_failure_raises_upload_failed():
    s3 = MagicMock()
    s3.put_object.side_effect = _client_error()
    store = S3AssetStore(s3, "media-bucket")

    with pytest.raises(AssetStoreError) as exc_info:
        store.upload(b"bytes", "k", "image/png")
    assert exc_info.value.code is ErrorCode.UPLOAD_FAILED
    assert exc_info.value.status_code == 500


def test_upload_timeout_is_an_upload_failure():
    s3 = MagicMock()
    s3.put_object.side_effect = ReadTimeoutError(endpoint_url="https://s3.test")
    store = S3AssetStore(s3, "media-bucket")

    with pytest.raises(AssetStoreError) as exc_info:
        store.upload(b"bytes", "k", "image/png")
    assert exc_info.value.code is ErrorCode.UPLOAD_FAILED


def test_delete_calls_delete_object():
    s3 = MagicMock()
    S3AssetStore(s3, "media-bucket").delete("trips/headers/k.jpg")
    s3.delete_object.assert_called_once_with(Bucket="media-bucket", Key="trips/headers/k.jpg")


def test_delete_failure_raises_delete_failed():
    s3 = MagicMock()
    s3.delete_object.side_effect = _client_error()
    with pytest.raises(AssetStoreError) as exc_info:
        S3AssetStore(s3, "media-bucket").delete("k")
    assert exc_info.value.code is ErrorCode.DELETE_FAILED
