from functools import lru_cache
from typing import Optional

from homestock.config import Settings, get_settings
from homestock.services.image_store import ImageStore, pillow_resize
from homestock.services.repository import InventoryRepository
from homestock.storage.blob_storage import LocalBlobStorage


def build_storage(settings: Optional[Settings] = None) -> LocalBlobStorage:
    settings = settings or get_settings()
    return LocalBlobStorage(settings.data_path)


def build_repository(settings: Optional[Settings] = None) -> InventoryRepository:
    settings = settings or get_settings()
    return InventoryRepository(
        build_storage(settings),
        settings.DOCUMENT_NAME,
        max_id_attempts=settings.ID_MAX_ATTEMPTS,
    )


def build_image_store(settings: Optional[Settings] = None) -> ImageStore:
    settings = settings or get_settings()
    quality = settings.THUMBNAIL_QUALITY

    def resize(data, max_width, max_height):
        return pillow_resize(data, max_width, max_height, quality=quality)

    return ImageStore(
        build_storage(settings),
        resizer=resize,
        thumbnail_size=settings.THUMBNAIL_SIZE,
    )


@lru_cache
def get_repository() -> InventoryRepository:
    """Process-wide repository, loaded on first use."""
    repository = build_repository()
    repository.load()
    return repository


@lru_cache
def get_image_store() -> ImageStore:
    return build_image_store()


__all__ = [
    "build_image_store",
    "build_repository",
    "build_storage",
    "get_image_store",
    "get_repository",
]
