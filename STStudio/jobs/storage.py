"""
Blob stores for job photos.

A blob store takes a staged file on local disk and returns a durable public
URL for it.  ``S3BlobStore`` talks to an S3-compatible bucket through boto3;
``LocalBlobStore`` writes under ``MEDIA_ROOT`` for development and for shops
that serve media from the same box.

Dependencies: boto3, botocore, Django storage
System role: Image hosting behind ``jobs.services.attach_image``
"""

from __future__ import annotations

import logging
import mimetypes
import os
import uuid
from typing import Optional, Protocol

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.files import File
from django.core.files.storage import FileSystemStorage

from STStudio.config import StudioConfig
from STStudio.errors import BLOB_STORE, UpstreamFailure

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def upload(self, path: str, *, prefix: str, filename: str = "") -> str:
        ...


def _object_name(prefix: str, filename: str) -> str:
    """Return ``<prefix>/<random hex><ext>``; the original name only lends its extension."""
    ext = os.path.splitext(filename or "")[1].lower()
    if len(ext) > 10 or not ext[1:].isalnum():
        ext = ""
    return f"{prefix.strip('/')}/{uuid.uuid4().hex}{ext}"


class S3BlobStore:
    """Uploads photos to an S3 bucket and returns their public object URL."""

    def __init__(
        self,
        bucket: str,
        access_key: str,
        secret_key: str,
        region: str = "ap-southeast-1",
        endpoint_url: Optional[str] = None,
        public_url: Optional[str] = None,
        timeout: float = 30.0,
        client=None,
    ) -> None:
        """
        Initialize the S3 blob store.

        Args:
            bucket: Bucket the photos are written to
            access_key: Access key id of the image hosting account
            secret_key: Secret access key of the image hosting account
            region: Bucket region
            endpoint_url: Custom endpoint for S3-compatible providers
            public_url: Prefix for returned URLs (CDN or custom domain)
            timeout: Connect and read timeout in seconds
            client: Pre-built boto3 client, mainly for tests
        """
        if not bucket:
            raise ValueError("bucket is required")
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        self._public_url = public_url.rstrip("/") if public_url else None
        if client is None:
            client = boto3.client(
                "s3",
                region_name=region,
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                # Single attempt: failures surface to staff instead of being retried.
                config=Config(
                    connect_timeout=timeout,
                    read_timeout=timeout,
                    retries={"max_attempts": 1, "mode": "standard"},
                ),
            )
        self._s3_client = client

    def public_url_for(self, key: str) -> str:
        if self._public_url:
            return f"{self._public_url}/{key}"
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    def upload(self, path: str, *, prefix: str, filename: str = "") -> str:
        """
        Upload the file at ``path`` and return its public URL.

        Raises:
            UpstreamFailure: If the bucket rejects the upload or cannot be reached
        """
        key = _object_name(prefix, filename)
        content_type = mimetypes.guess_type(filename or key)[0] or "application/octet-stream"
        try:
            self._s3_client.upload_file(
                path,
                self._bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError, S3UploadFailedError) as exc:
            raise UpstreamFailure(BLOB_STORE, f"upload of {key} failed: {exc}") from exc
        logger.info("Uploaded photo to s3://%s/%s", self._bucket, key)
        return self.public_url_for(key)


class LocalBlobStore:
    """Stores photos under ``MEDIA_ROOT`` and links them through ``base_url``."""

    def __init__(self, location: str, base_url: str, media_url: str = "/media/") -> None:
        self._storage = FileSystemStorage(location=location, base_url=media_url)
        self._base_url = base_url.rstrip("/")

    def upload(self, path: str, *, prefix: str, filename: str = "") -> str:
        name = _object_name(prefix, filename)
        try:
            with open(path, "rb") as fh:
                saved = self._storage.save(name, File(fh))
        except OSError as exc:
            raise UpstreamFailure(BLOB_STORE, f"could not write {name}: {exc}") from exc
        logger.info("Stored photo locally as %s", saved)
        return f"{self._base_url}{self._storage.url(saved)}"


def get_blob_store(config: StudioConfig) -> BlobStore:
    """Build the blob store selected by ``STUDIO_BLOB_BACKEND``."""
    if config.blob_backend == "s3":
        return S3BlobStore(
            bucket=config.blob_bucket,
            access_key=config.blob_access_key,
            secret_key=config.blob_secret_key,
            region=config.blob_region,
            endpoint_url=config.blob_endpoint_url,
            public_url=config.blob_public_url,
            timeout=config.upstream_timeout,
        )
    return LocalBlobStore(
        location=str(settings.MEDIA_ROOT),
        base_url=config.base_url,
        media_url=settings.MEDIA_URL,
    )
