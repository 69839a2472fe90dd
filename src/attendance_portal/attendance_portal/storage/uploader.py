from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

import requests

from ..core.constants import DEFAULT_UPLOAD_TIMEOUT_SECONDS
from ..core.exceptions import Timeout, UploadFailed

logger = logging.getLogger(__name__)


class EvidenceUploader(Protocol):
    def upload(self, image_bytes: bytes, bucket: str, path: str) -> str:
        """Store the image and return its public URL."""

        raise NotImplementedError


class SupabaseStorageUploader(EvidenceUploader):
    """Upload evidence photos through the Supabase Storage REST API.

    One attempt per call; failures are raised to the caller, never retried.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_UPLOAD_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def _object_path(self, bucket: str, path: str) -> str:
        return f"{quote(bucket)}/{quote(path.lstrip('/'))}"

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self._object_path(bucket, path)}"

    def upload(self, image_bytes: bytes, bucket: str, path: str) -> str:
        url = f"{self._base_url}/storage/v1/object/{self._object_path(bucket, path)}"
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "apikey": self._api_key,
            "Content-Type": "image/jpeg",
            "x-upsert": "true",
        }
        try:
            resp = self._session.post(url, data=image_bytes, headers=headers, timeout=self._timeout)
        except requests.Timeout as e:
            logger.warning("Photo upload to %s/%s timed out", bucket, path)
            raise Timeout("Photo upload timed out") from e
        except requests.RequestException as e:
            logger.error("Photo upload to %s/%s failed: %s", bucket, path, e)
            raise UploadFailed("Photo upload failed") from e

        if resp.status_code >= 300:
            logger.error("Photo upload to %s/%s rejected: %s - %s", bucket, path, resp.status_code, resp.text)
            raise UploadFailed(f"Photo upload failed ({resp.status_code})")

        return self.public_url(bucket, path)
