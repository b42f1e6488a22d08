"""Photo byte storage: local directory (dev) or S3-compatible bucket."""

from __future__ import annotations

import logging
import os
import uuid
from datetime import datetime, timezone

import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from cadetex.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "webp"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/webp"}
LOCAL_URL_PREFIX = "/media"


class StorageError(Exception):
    """Raised when the storage backend cannot accept an object."""


def validate_photo(filename: str, content_type: str, file_size: int) -> tuple[bool, str | None]:
    """
    Validate an uploaded photo against allowlists and size limits.

    Returns (is_valid, error_message)
    """
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in ALLOWED_EXTENSIONS:
        return False, f"File extension '.{ext}' not allowed"
    if content_type not in ALLOWED_MIME_TYPES:
        return False, f"Content type '{content_type}' not allowed"
    if file_size == 0:
        return False, "File is empty"
    if file_size > settings.MAX_PHOTO_SIZE_BYTES:
        max_mb = settings.MAX_PHOTO_SIZE_BYTES / (1024 * 1024)
        return False, f"File size exceeds {max_mb:.0f} MB limit"
    return True, None


def build_photo_key(task_id: uuid.UUID, photo_type: str, extension: str) -> str:
    """tasks/{task_id}/{photo_type}/{timestamp}-{short uuid}.{ext}"""
    timestamp = int(datetime.now(timezone.utc).timestamp() * 1000)
    suffix = uuid.uuid4().hex[:8]
    return f"tasks/{task_id}/{photo_type.lower()}/{timestamp}-{suffix}.{extension.lower()}"


# =============================================================================
# Storage Backend
# =============================================================================

def get_s3_client() -> BaseClient:
    """Return a configured S3 client (supports S3-compatible endpoints)."""
    return boto3.client(
        "s3",
        region_name=settings.S3_REGION or None,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
        endpoint_url=settings.S3_ENDPOINT_URL.rstrip("/") or None,
    )


def public_url(storage_key: str) -> str:
    if settings.STORAGE_BACKEND == "s3":
        if settings.S3_ENDPOINT_URL:
            return f"{settings.S3_ENDPOINT_URL.rstrip('/')}/{settings.S3_BUCKET_NAME}/{storage_key}"
        return f"https://{settings.S3_BUCKET_NAME}.s3.{settings.S3_REGION}.amazonaws.com/{storage_key}"
    return f"{LOCAL_URL_PREFIX}/{storage_key}"


def store_photo(storage_key: str, data: bytes, content_type: str) -> str:
    """
    Store bytes to the configured backend and return their URL.

    Raises:
        StorageError: backend rejected the write or is unreachable
    """
    if settings.STORAGE_BACKEND == "s3":
        if not settings.S3_BUCKET_NAME:
            raise StorageError("S3_BUCKET_NAME is not configured")
        try:
            get_s3_client().put_object(
                Bucket=settings.S3_BUCKET_NAME,
                Key=storage_key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 upload failed for %s: %s", storage_key, exc)
            raise StorageError("Photo storage unavailable") from exc
    else:
        path = os.path.join(settings.LOCAL_STORAGE_PATH, storage_key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as exc:
            logger.error("Local photo write failed for %s: %s", storage_key, exc)
            raise StorageError("Photo storage unavailable") from exc
    return public_url(storage_key)
