"""Cover picture storage and delivery URLs."""
import logging
import os
from pathlib import Path
from typing import Optional
from uuid import uuid4

import aiofiles
import aiofiles.os
from fastapi import HTTPException, UploadFile, status

from ..config import (
    ALLOWED_IMAGE_EXTENSIONS,
    COVER_PICTURE_CROP,
    COVER_PICTURE_GRAVITY,
    COVER_PICTURE_SIZE,
    IMAGE_HOST_URL,
    MEDIA_DIR,
)

logger = logging.getLogger(__name__)


class ImageHost:
    """Stores uploaded images and builds transformed delivery URLs for them.

    Uploads are written to ``media_dir`` under a random public id. Delivery
    URLs follow the ``/image/upload/<transformations>/<public_id>`` layout
    so that the host can resize and crop on the fly.
    """

    def __init__(self, base_url: str, media_dir: Path):
        self.base_url = base_url.rstrip("/")
        self.media_dir = Path(media_dir)

    async def store(self, upload: UploadFile) -> str:
        """Persist an uploaded image and return its public id."""
        extension = os.path.splitext(upload.filename or "")[1].lower()
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cover picture must be png, jpg, jpeg, or webp"
            )

        public_id = f"{uuid4()}{extension}"
        await aiofiles.os.makedirs(self.media_dir, exist_ok=True)
        async with aiofiles.open(self.media_dir / public_id, "wb") as f:
            await f.write(await upload.read())

        logger.debug("Stored image %s as %s", upload.filename, public_id)
        return public_id

    def url(self, public_id: str, width: int, height: int, gravity: str, crop: str) -> str:
        transformation = f"c_{crop},g_{gravity},h_{height},w_{width}"
        return f"{self.base_url}/image/upload/{transformation}/{public_id}"

    def cover_picture_url(self, public_id: str) -> str:
        return self.url(
            public_id,
            width=COVER_PICTURE_SIZE,
            height=COVER_PICTURE_SIZE,
            gravity=COVER_PICTURE_GRAVITY,
            crop=COVER_PICTURE_CROP,
        )

    def public_id_from_url(self, url: Optional[str]) -> Optional[str]:
        """Public id of a URL built by this host, None for anything else."""
        if not url or not url.startswith(f"{self.base_url}/image/upload/"):
            return None
        return url.rsplit("/", 1)[1]

    async def delete(self, public_id: str) -> None:
        try:
            await aiofiles.os.remove(self.media_dir / public_id)
        except FileNotFoundError:
            logger.error(f"Could not remove image that should still exist: {public_id}")


def get_image_host() -> ImageHost:
    """Dependency for the configured image host."""
    return ImageHost(IMAGE_HOST_URL, MEDIA_DIR)
