from typing import Optional, Tuple

from pydantic import field_validator

from homestock.schemas.base import DocumentModel, UInt32, ensure_unique_ids


class Location(DocumentModel):
    id: UInt32
    name: str
    notes: Optional[str] = None
    image_ids: Tuple[UInt32, ...] = ()
    deleted: Optional[bool] = None

    @field_validator("image_ids")
    @classmethod
    def _unique_image_ids(cls, value):
        return ensure_unique_ids(value)
