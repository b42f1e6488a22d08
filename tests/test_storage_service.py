"""Tests for photo validation, key layout and storage backends."""
import os
import re
import uuid
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from cadetex.core.config import settings
from cadetex.services import storage_service


def test_validate_photo_accepts_images():
    for filename, content_type in [
        ("receipt.jpg", "image/jpeg"),
        ("receipt.JPEG", "image/jpeg"),
        ("door.png", "image/png"),
        ("door.webp", "image/webp"),
    ]:
        is_valid, error = storage_service.validate_photo(filename, content_type, 1024)
        assert is_valid, error


@pytest.mark.parametrize(
    "filename,content_type,size",
    [
        ("notes.pdf", "application/pdf", 1024),
        ("receipt.jpg", "text/plain", 1024),
        ("receipt", "image/jpeg", 1024),
        ("receipt.jpg", "image/jpeg", 0),
    ],
)
def test_validate_photo_rejects(filename, content_type, size):
    is_valid, error = storage_service.validate_photo(filename, content_type, size)
    assert not is_valid
    assert error


def test_validate_photo_rejects_oversize(monkeypatch):
    monkeypatch.setattr(settings, "MAX_PHOTO_SIZE_BYTES", 10)
    is_valid, error = storage_service.validate_photo("a.png", "image/png", 11)
    assert not is_valid
    assert "limit" in error


def test_build_photo_key_layout():
    task_id = uuid.uuid4()
    key = storage_service.build_photo_key(task_id, "RECEIPT", "JPG")
    assert re.fullmatch(rf"tasks/{task_id}/receipt/\d+-[0-9a-f]{{8}}\.jpg", key)


def test_store_photo_writes_local_file(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(settings, "LOCAL_STORAGE_PATH", str(tmp_path))

    url = storage_service.store_photo("tasks/t1/receipt/1-abc.jpg", b"jpeg-bytes", "image/jpeg")

    assert url == "/media/tasks/t1/receipt/1-abc.jpg"
    with open(os.path.join(tmp_path, "tasks/t1/receipt/1-abc.jpg"), "rb") as f:
        assert f.read() == b"jpeg-bytes"


def test_store_photo_puts_object_to_s3(monkeypatch):
    s3 = Mock()
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "s3")
    monkeypatch.setattr(settings, "S3_BUCKET_NAME", "photos-bucket")
    monkeypatch.setattr(settings, "S3_ENDPOINT_URL", "")
    monkeypatch.setattr(settings, "S3_REGION", "sa-east-1")
    monkeypatch.setattr(storage_service, "get_s3_client", lambda: s3)

    url = storage_service.store_photo("tasks/t1/other/1-abc.png", b"png", "image/png")

    s3.put_object.assert_called_once_with(
        Bucket="photos-bucket",
        Key="tasks/t1/other/1-abc.png",
        Body=b"png",
        ContentType="image/png",
    )
    assert url == "https://photos-bucket.s3.sa-east-1.amazonaws.com/tasks/t1/other/1-abc.png"


def test_store_photo_s3_failure_raises_storage_error(monkeypatch):
    s3 = Mock()
    s3.put_object.side_effect = ClientError(
        {"Error": {"Code": "500", "Message": "boom"}}, "PutObject"
    )
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "s3")
    monkeypatch.setattr(settings, "S3_BUCKET_NAME", "photos-bucket")
    monkeypatch.setattr(storage_service, "get_s3_client", lambda: s3)

    with pytest.raises(storage_service.StorageError):
        storage_service.store_photo("tasks/t1/other/1-abc.png", b"png", "image/png")


def test_store_photo_s3_requires_bucket(monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "s3")
    monkeypatch.setattr(settings, "S3_BUCKET_NAME", "")

    with pytest.raises(storage_service.StorageError):
        storage_service.store_photo("k", b"x", "image/png")
