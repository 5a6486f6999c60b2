from typing import Optional

from homestock.schemas.base import DocumentModel, UInt32


class Assignment(DocumentModel):
    """A quantity of one article stored at one location."""

    id: UInt32
    article_id: UInt32
    location_id: UInt32
    amount: UInt32
    added_date: Optional[str] = None
    expiration_date: Optional[str] = None
    consumed_date: Optional[str] = None
    last_modified: Optional[str] = None
    deleted: Optional[bool] = None

    @property
    def is_consumed(self) -> bool:
        return bool(self.consumed_date)
