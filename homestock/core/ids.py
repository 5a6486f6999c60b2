import logging
import secrets
from typing import Callable, Iterable, Optional

from homestock.core.constants import (
    DEFAULT_ID_MAX_ATTEMPTS,
    NAME_TEMPLATE_PLACEHOLDER,
    UINT32_MAX,
)
from homestock.core.errors import IdSpaceExhaustedError

logger = logging.getLogger(__name__)

IdSource = Callable[[], int]


def random_uint32() -> int:
    return secrets.randbelow(UINT32_MAX + 1)


def generate_unique_id(
    existing_ids: Iterable[int],
    *,
    id_source: Optional[IdSource] = None,
    max_attempts: int = DEFAULT_ID_MAX_ATTEMPTS,
) -> int:
    """Draw random unsigned 32-bit ids until one is not in ``existing_ids``.

    ``existing_ids`` is snapshotted once; the caller holds whatever lock
    protects the collection it came from.
    """
    taken = frozenset(existing_ids)
    source = id_source or random_uint32
    for attempt in range(1, max(1, int(max_attempts)) + 1):
        candidate = source()
        if candidate not in taken:
            if attempt > 1:
                logger.debug("Id %d found after %d attempts.", candidate, attempt)
            return candidate
    raise IdSpaceExhaustedError(
        f"No free id after {max_attempts} attempts ({len(taken)} ids in use)."
    )


def format_name_template(template: str, new_id: int) -> str:
    return template.replace(NAME_TEMPLATE_PLACEHOLDER, str(new_id))


__all__ = ["IdSource", "format_name_template", "generate_unique_id", "random_uint32"]
