import logging
import re
from enum import Enum
from io import BytesIO
from typing import Callable, List, Optional, Union

from PIL import Image, ImageOps

from homestock.core.constants import (
    DEFAULT_THUMBNAIL_SIZE,
    IMAGE_EXTENSION,
    IMAGES_DIR,
    THUMBNAILS_DIR,
)
from homestock.storage.blob_storage import BlobStorage

logger = logging.getLogger(__name__)

Resizer = Callable[[bytes, int, int], Optional[bytes]]

_RESIZE_EXCEPTIONS = (OSError, ValueError, Image.DecompressionBombError)
_JPEG_MODES = {"RGB", "L", "CMYK"}


class OwnerKind(str, Enum):
    ARTICLE = "article"
    LOCATION = "location"


def pillow_resize(data: bytes, max_width: int, max_height: int, *, quality: int = 85) -> bytes:
    """Shrink ``data`` to fit inside ``max_width`` x ``max_height`` as JPEG.

    Aspect ratio is preserved and smaller images are never enlarged.
    """
    with Image.open(BytesIO(data)) as source:
        image = ImageOps.exif_transpose(source)
        image.thumbnail((max_width, max_height), Image.Resampling.LANCZOS)
        if image.mode not in _JPEG_MODES:
            image = image.convert("RGB")
        output = BytesIO()
        image.save(output, format="JPEG", quality=quality, optimize=True)
    return output.getvalue()


class ImageStore:
    """Images keyed by owner kind, owner id and image id, plus cached thumbnails.

    Image ids are only unique within their owner. Thumbnails are produced on
    first request and written back next to the originals.
    """

    def __init__(
        self,
        storage: BlobStorage,
        *,
        resizer: Optional[Resizer] = None,
        thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE,
    ):
        self._storage = storage
        self._resizer = resizer or pillow_resize
        self.thumbnail_size = int(thumbnail_size)

    @staticmethod
    def _kind(kind: Union[OwnerKind, str]) -> OwnerKind:
        return kind if isinstance(kind, OwnerKind) else OwnerKind(str(kind).lower())

    def image_path(self, kind, owner_id: int, image_id: int) -> str:
        return f"{IMAGES_DIR}/{self._kind(kind).value}/{owner_id}_{image_id}{IMAGE_EXTENSION}"

    def thumbnail_path(self, kind, owner_id: int, image_id: int) -> str:
        size = self.thumbnail_size
        return (
            f"{IMAGES_DIR}/{self._kind(kind).value}/{THUMBNAILS_DIR}/"
            f"{owner_id}_{image_id}_{size}x{size}{IMAGE_EXTENSION}"
        )

    def save(self, kind, owner_id: int, image_id: int, data: bytes) -> None:
        self._storage.write_bytes(self.image_path(kind, owner_id, image_id), data)
        logger.info("Saved %s image %d_%d (%d bytes).", self._kind(kind).value, owner_id, image_id, len(data))

    def get(self, kind, owner_id: int, image_id: int) -> Optional[bytes]:
        return self._storage.read_bytes(self.image_path(kind, owner_id, image_id))

    def get_thumbnail(self, kind, owner_id: int, image_id: int) -> Optional[bytes]:
        thumbnail_path = self.thumbnail_path(kind, owner_id, image_id)
        cached = self._storage.read_bytes(thumbnail_path)
        if cached is not None:
            return cached

        original = self.get(kind, owner_id, image_id)
        if original is None:
            logger.warning(
                "No %s image %d_%d to build a thumbnail from.", self._kind(kind).value, owner_id, image_id
            )
            return None

        try:
            thumbnail = self._resizer(original, self.thumbnail_size, self.thumbnail_size)
        except _RESIZE_EXCEPTIONS:
            logger.warning(
                "Thumbnail generation failed for %s image %d_%d.",
                self._kind(kind).value,
                owner_id,
                image_id,
                exc_info=True,
            )
            return None
        if thumbnail is None:
            return None

        self._storage.write_bytes(thumbnail_path, thumbnail)
        return thumbnail

    def delete(self, kind, owner_id: int, image_id: int) -> None:
        self._storage.delete_file(self.image_path(kind, owner_id, image_id))
        self._storage.delete_file(self.thumbnail_path(kind, owner_id, image_id))
        logger.info("Deleted %s image %d_%d.", self._kind(kind).value, owner_id, image_id)

    def list_image_ids(self, kind, owner_id: int) -> List[int]:
        prefix = f"{IMAGES_DIR}/{self._kind(kind).value}"
        pattern = re.compile(rf"^{re.escape(prefix)}/{owner_id}_(\d+){re.escape(IMAGE_EXTENSION)}$")
        image_ids = []
        for path in self._storage.list_files(prefix):
            match = pattern.match(path)
            if match:
                image_ids.append(int(match.group(1)))
        return sorted(image_ids)

    def delete_all(self, kind, owner_id: int) -> int:
        image_ids = self.list_image_ids(kind, owner_id)
        for image_id in image_ids:
            self.delete(kind, owner_id, image_id)
        return len(image_ids)


__all__ = ["ImageStore", "OwnerKind", "Resizer", "pillow_resize"]
