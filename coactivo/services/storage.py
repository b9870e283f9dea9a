"""
Supabase Storage service: downloads case files and uploads generated documents.
"""
import logging
from urllib.parse import quote

import requests

from coactivo.errors import DownloadFailed, UploadFailed
from coactivo.services.supabase_rest import SupabaseRest, error_detail

logger = logging.getLogger(__name__)


def _object_path(bucket: str, path: str) -> str:
    # Encode each segment but keep the separators
    return f"{quote(bucket, safe='')}/{quote(path.strip('/'))}"


class SupabaseStorage(SupabaseRest):
    """Blob store backed by the Supabase Storage API. Calls are never retried."""

    def download(self, bucket: str, path: str) -> bytes:
        """
        Download an object.

        Args:
            bucket: Storage bucket name.
            path: Object path inside the bucket.

        Returns:
            Object content as bytes.

        Raises:
            DownloadFailed: On HTTP error, network error or timeout.
        """
        url = f"{self.base_url}/storage/v1/object/{_object_path(bucket, path)}"
        logger.info(f"Downloading {bucket}/{path}")

        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error downloading {bucket}/{path}: {e}")
            raise DownloadFailed(f"Network error during download: {e}") from e

        if response.status_code != 200:
            detail = error_detail(response)
            logger.error(f"Download failed for {bucket}/{path}: {detail}")
            raise DownloadFailed(f"Download failed: {detail}")

        logger.info(f"Downloaded {len(response.content):,} bytes from {bucket}/{path}")
        return response.content

    def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
        overwrite: bool = False,
    ) -> None:
        """
        Upload an object, replacing an existing one when overwrite is set.

        Raises:
            UploadFailed: On HTTP error, network error or timeout.
        """
        url = f"{self.base_url}/storage/v1/object/{_object_path(bucket, path)}"
        headers = self._headers({
            'Content-Type': content_type,
            'x-upsert': 'true' if overwrite else 'false',
        })
        logger.info(f"Uploading {len(content):,} bytes to {bucket}/{path} (overwrite={overwrite})")

        try:
            response = requests.post(url, headers=headers, data=content, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error uploading {bucket}/{path}: {e}")
            raise UploadFailed(f"Network error during upload: {e}") from e

        if response.status_code not in (200, 201):
            detail = error_detail(response)
            logger.error(f"Upload failed for {bucket}/{path}: {detail}")
            raise UploadFailed(f"Upload failed: {detail}")

    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        return f"{self.base_url}/storage/v1/object/public/{_object_path(bucket, path)}"
