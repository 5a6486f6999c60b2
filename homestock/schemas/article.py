from typing import Optional, Tuple

from pydantic import field_validator

from homestock.schemas.base import DocumentModel, UInt32, ensure_unique_ids


class Article(DocumentModel):
    id: UInt32
    name: str
    brand: Optional[str] = None
    abbreviation: Optional[str] = None
    minimum_amount: UInt32 = 0
    default_expiration_days: Optional[UInt32] = None
    notes: Optional[str] = None
    modified: Optional[str] = None
    added: Optional[str] = None
    image_ids: Tuple[UInt32, ...] = ()
    deleted: Optional[bool] = None

    @field_validator("image_ids")
    @classmethod
    def _unique_image_ids(cls, value):
        return ensure_unique_ids(value)
