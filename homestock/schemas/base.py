from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from homestock.core.constants import UINT32_MAX

UInt32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]


class DocumentModel(BaseModel):
    """Immutable record stored in the inventory document (camelCase on disk)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @property
    def is_deleted(self) -> bool:
        return getattr(self, "deleted", None) is True


def ensure_unique_ids(values):
    seen = set()
    for value in values:
        if value in seen:
            raise ValueError(f"duplicate image id {value}")
        seen.add(value)
    return values
