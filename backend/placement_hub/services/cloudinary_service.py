"""
Cloudinary Service - resume storage cleanup and zip bundling
"""
import asyncio
import logging
from functools import lru_cache
from typing import Iterable

import cloudinary
import cloudinary.uploader
import cloudinary.utils

from ..errors import ObjectStoreUnavailableError, ResourceCleanupError
from .stores import DestroyStatus, ObjectStore

logger = logging.getLogger(__name__)


def init_cloudinary() -> bool:
    """Initialize Cloudinary SDK from app settings"""
    from ..config import get_settings
    settings = get_settings()

    cloud_name = settings.cloudinary_cloud_name
    api_key = settings.cloudinary_api_key
    api_secret = settings.cloudinary_api_secret

    if not all([cloud_name, api_key, api_secret]):
        logger.warning("Cloudinary credentials not configured. Resume cleanup and downloads will fail.")
        return False

    cloudinary.config(
        cloud_name=cloud_name,
        api_key=api_key,
        api_secret=api_secret,
        secure=True
    )
    logger.info(f"Cloudinary initialized: {cloud_name}")
    return True


class CloudinaryObjectStore(ObjectStore):
    """ObjectStore backed by the Cloudinary upload and archive APIs"""

    def __init__(self, available: bool):
        self.available = available

    async def destroy(self, storage_id: str, kind: str) -> DestroyStatus:
        """
        Delete one resource from Cloudinary

        Args:
            storage_id: Public ID of the resource
            kind: 'image', 'video', or 'raw'

        Returns:
            OK, NOT_FOUND (already gone) or ERROR

        Raises:
            ResourceCleanupError if the API call itself fails
        """
        if not self.available:
            logger.error(f"Cloudinary not configured, cannot delete {storage_id}")
            return DestroyStatus.ERROR

        try:
            # The SDK is blocking; keep the event loop free for sibling deletes
            result = await asyncio.to_thread(
                cloudinary.uploader.destroy,
                storage_id,
                resource_type=kind,
                invalidate=True,
            )
        except Exception as e:
            raise ResourceCleanupError(f"Failed to delete Cloudinary resource {storage_id}: {e}") from e

        outcome = (result or {}).get("result")
        if outcome == "ok":
            return DestroyStatus.OK
        if outcome == "not found":
            return DestroyStatus.NOT_FOUND
        logger.warning(f"Unexpected Cloudinary destroy result for {storage_id}: {outcome}")
        return DestroyStatus.ERROR

    def build_zip_link(self, storage_ids: Iterable[str], kind: str, archive_name: str) -> str:
        """Signed URL that makes Cloudinary build and serve a zip of the resources"""
        if not self.available:
            raise ObjectStoreUnavailableError("Cloudinary is not configured")

        try:
            return cloudinary.utils.download_zip_url(
                public_ids=list(storage_ids),
                resource_type=kind,
                target_public_id=archive_name,
            )
        except Exception as e:
            raise ObjectStoreUnavailableError(f"Failed to generate zip link: {e}") from e


@lru_cache()
def get_object_store() -> ObjectStore:
    return CloudinaryObjectStore(init_cloudinary())
