"""
Business logic for image uploads to Supabase Storage.

Images are stored as-is and served through the storage image renderer,
which applies the resize/quality transform on delivery.
"""

import asyncio
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from typing import Dict, List
from shared.constants import IMAGE_FOLDER
from shared.supabase_client import get_supabase_client, get_image_bucket

logger = logging.getLogger(__name__)

IMAGE_TRANSFORM = {
    "width": 1200,
    "height": 800,
    "resize": "contain",
    "quality": 80,
}


@dataclass
class ImageFile:
    """An uploaded image held in memory."""
    data: bytes
    content_type: str
    filename: str = ""


def public_id_from_route(value: str) -> str:
    """Route-safe ids use "~" in place of "/"; map them back to a storage path."""
    return value.replace("~", "/")


class ImageUploadService:
    """Service class for image upload and removal."""

    def __init__(self):
        self.client = get_supabase_client()
        self.bucket = get_image_bucket()

    def _storage(self):
        return self.client.storage.from_(self.bucket)

    def _build_path(self, image: ImageFile) -> str:
        extension = mimetypes.guess_extension(image.content_type) or ""
        if extension == ".jpe":
            extension = ".jpg"
        return f"{IMAGE_FOLDER}/{uuid.uuid4().hex}{extension}"

    def _upload(self, image: ImageFile) -> Dict[str, str]:
        path = self._build_path(image)

        self._storage().upload(path, image.data, {"content-type": image.content_type})
        url = self._storage().get_public_url(path, {"transform": IMAGE_TRANSFORM})

        logger.info(f"Uploaded image {path} ({len(image.data)} bytes)")
        return {"url": url, "public_id": path}

    async def upload_image(self, image: ImageFile) -> Dict[str, str]:
        """
        Upload one image.

        Returns:
            {"url": transformed public URL, "public_id": storage path}
        """
        return await asyncio.to_thread(self._upload, image)

    async def upload_images(self, images: List[ImageFile]) -> List[Dict[str, str]]:
        """Upload several images concurrently; any failure fails the batch."""
        return list(await asyncio.gather(*(self.upload_image(image) for image in images)))

    async def delete_image(self, public_id: str) -> None:
        """Remove an image by public id ("~" accepted in place of "/")."""
        path = public_id_from_route(public_id)
        await asyncio.to_thread(self._storage().remove, [path])
        logger.info(f"Deleted image {path}")
