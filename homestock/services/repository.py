"""JSON-document repository for articles, locations and assignments.

The whole inventory lives in one document. Every mutation rewrites that
document before the in-memory working set is swapped, so a failed write
leaves the repository exactly as it was. Deleted records are kept as
tombstones (``deleted: true``) until ``purge_deleted`` removes them.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional

from pydantic import ValidationError

from homestock.core.constants import DEFAULT_ASSIGNMENT_AMOUNT, DEFAULT_ID_MAX_ATTEMPTS
from homestock.core.dates import Clock, add_days, current_timestamp, today_string, utc_now
from homestock.core.errors import CorruptDataError, DanglingReferenceError, InvalidRecordError
from homestock.core.ids import IdSource, format_name_template, generate_unique_id
from homestock.schemas import Article, Assignment, InventoryData, Location
from homestock.storage.blob_storage import BlobStorage

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_PATH = "inventory.json"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def decode_inventory(content: str) -> InventoryData:
    try:
        return InventoryData.from_json(content)
    except ValidationError as exc:
        raise CorruptDataError(f"Inventory document cannot be decoded: {exc}") from exc


def validate_inventory(data: InventoryData) -> None:
    """Raise on the first blank name or assignment pointing at an unknown id.

    References are checked for existence only; tombstoned articles and
    locations still satisfy them.
    """
    for article in data.articles:
        if _is_blank(article.name):
            raise InvalidRecordError("article", article.id)
    for location in data.locations:
        if _is_blank(location.name):
            raise InvalidRecordError("location", location.id)

    article_ids = {article.id for article in data.articles}
    location_ids = {location.id for location in data.locations}
    for assignment in data.assignments:
        if assignment.article_id not in article_ids:
            raise DanglingReferenceError(assignment.id, "article", assignment.article_id)
        if assignment.location_id not in location_ids:
            raise DanglingReferenceError(assignment.id, "location", assignment.location_id)


def parse_inventory(content: str) -> InventoryData:
    data = decode_inventory(content)
    validate_inventory(data)
    return data


def _live(records):
    return [record for record in records if not record.is_deleted]


class InventoryRepository:
    """Owns the inventory working set and its backing document.

    All public methods take one re-entrant lock, so concurrent callers are
    serialized and readers never see a half-applied mutation.
    """

    def __init__(
        self,
        storage: BlobStorage,
        document_path: str = DEFAULT_DOCUMENT_PATH,
        *,
        clock: Clock = utc_now,
        id_source: Optional[IdSource] = None,
        max_id_attempts: int = DEFAULT_ID_MAX_ATTEMPTS,
    ):
        self._storage = storage
        self.document_path = document_path
        self._clock = clock
        self._id_source = id_source
        self._max_id_attempts = max_id_attempts
        self._data = InventoryData()
        self._lock = threading.RLock()

    # -----------------------------
    # Document lifecycle
    # -----------------------------

    def load(self) -> InventoryData:
        with self._lock:
            content = self._storage.read_text(self.document_path)
            if not content.strip():
                self._data = InventoryData()
                logger.info("No inventory document at %s, starting empty.", self.document_path)
                return self.snapshot()
            try:
                data = parse_inventory(content)
            except CorruptDataError:
                logger.exception("Failed to load inventory document %s.", self.document_path)
                raise
            self._data = data
            logger.info(
                "Loaded inventory: %(articles)d articles, %(locations)d locations, "
                "%(assignments)d assignments.",
                data.counts(),
            )
            return self.snapshot()

    def _commit(self, data: InventoryData) -> None:
        self._storage.write_text(self.document_path, data.to_json())
        self._data = data

    def _replace(self, **collections) -> None:
        self._commit(self._data.model_copy(update=collections))

    def get_raw_json(self) -> str:
        with self._lock:
            return self._storage.read_text(self.document_path)

    def backup(self) -> Optional[str]:
        with self._lock:
            backup_name = self._storage.backup_file(self.document_path)
        if backup_name is not None:
            logger.info("Created backup: %s", backup_name)
        else:
            logger.warning("Backup of %s failed.", self.document_path)
        return backup_name

    def import_data(self, content: str) -> Optional[str]:
        """Replace the inventory with ``content`` once it has been validated.

        Returns the name of the backup taken of the previous document.
        """
        with self._lock:
            data = parse_inventory(content)
            logger.info(
                "Import validation successful: %(articles)d articles, %(locations)d locations, "
                "%(assignments)d assignments.",
                data.counts(),
            )
            backup_name = self.backup()
            self._storage.write_text(self.document_path, content)
            self._data = data
            logger.info("Import completed.")
            return backup_name

    def purge_deleted(self) -> int:
        with self._lock:
            articles = _live(self._data.articles)
            locations = _live(self._data.locations)
            article_ids = {article.id for article in articles}
            location_ids = {location.id for location in locations}
            assignments = [
                assignment
                for assignment in _live(self._data.assignments)
                if assignment.article_id in article_ids and assignment.location_id in location_ids
            ]
            purged = (
                len(self._data.articles) - len(articles)
                + len(self._data.locations) - len(locations)
                + len(self._data.assignments) - len(assignments)
            )
            if purged:
                self._replace(articles=articles, locations=locations, assignments=assignments)
            logger.info("Purged %d deleted records.", purged)
            return purged

    # -----------------------------
    # Views
    # -----------------------------

    def snapshot(self, *, include_deleted: bool = False) -> InventoryData:
        with self._lock:
            data = self._data.model_copy(
                update={
                    "articles": list(self._data.articles),
                    "locations": list(self._data.locations),
                    "assignments": list(self._data.assignments),
                }
            )
        return data if include_deleted else data.without_deleted()

    def articles(self, *, include_deleted: bool = False) -> List[Article]:
        with self._lock:
            records = list(self._data.articles)
        return records if include_deleted else _live(records)

    def locations(self, *, include_deleted: bool = False) -> List[Location]:
        with self._lock:
            records = list(self._data.locations)
        return records if include_deleted else _live(records)

    def assignments(self, *, include_deleted: bool = False) -> List[Assignment]:
        with self._lock:
            records = list(self._data.assignments)
        return records if include_deleted else _live(records)

    def assignment_ids(self) -> set:
        """Every assignment id in the working set, deleted ones included."""
        with self._lock:
            return {assignment.id for assignment in self._data.assignments}

    def assignments_for_article(self, article_id: int) -> List[Assignment]:
        return [item for item in self.assignments() if item.article_id == article_id]

    def assignments_for_location(self, location_id: int) -> List[Assignment]:
        return [item for item in self.assignments() if item.location_id == location_id]

    # -----------------------------
    # Articles
    # -----------------------------

    def get_article_by_id(self, article_id: int) -> Optional[Article]:
        with self._lock:
            return next(
                (a for a in self._data.articles if a.id == article_id and not a.is_deleted),
                None,
            )

    def _new_id(self, records: Iterable) -> int:
        return generate_unique_id(
            (record.id for record in records),
            id_source=self._id_source,
            max_attempts=self._max_id_attempts,
        )

    def create_new_article(self, name_template: str) -> Article:
        with self._lock:
            new_id = self._new_id(self._data.articles)
        timestamp = current_timestamp(self._clock)
        article = Article(
            id=new_id,
            name=format_name_template(name_template, new_id),
            added=timestamp,
            modified=timestamp,
        )
        logger.info("Created new article: id=%d, name=%s", article.id, article.name)
        return article

    def add_or_update_article(self, article: Article) -> None:
        with self._lock:
            articles, updated = _upsert(self._data.articles, article)
            self._replace(articles=articles)
        logger.info(
            "%s article: id=%d, name=%s", "Updated" if updated else "Added", article.id, article.name
        )

    def delete_article(self, article_id: int) -> bool:
        """Tombstone the article and every live assignment that references it.

        Unknown ids and articles that are already deleted are left alone and
        return ``False``. A second delete deliberately keeps the first one's
        timestamps: the tombstone is not re-stamped and the cascade does not
        run again.
        """
        with self._lock:
            return self._tombstone(
                "article",
                article_id,
                self._data.articles,
                lambda assignment: assignment.article_id == article_id,
                stamp_field="modified",
            )

    # -----------------------------
    # Locations
    # -----------------------------

    def get_location_by_id(self, location_id: int) -> Optional[Location]:
        with self._lock:
            return next(
                (loc for loc in self._data.locations if loc.id == location_id and not loc.is_deleted),
                None,
            )

    def create_new_location(self, name_template: str) -> Location:
        with self._lock:
            new_id = self._new_id(self._data.locations)
        location = Location(id=new_id, name=format_name_template(name_template, new_id))
        logger.info("Created new location: id=%d, name=%s", location.id, location.name)
        return location

    def add_or_update_location(self, location: Location) -> None:
        with self._lock:
            locations, updated = _upsert(self._data.locations, location)
            self._replace(locations=locations)
        logger.info(
            "%s location: id=%d, name=%s", "Updated" if updated else "Added", location.id, location.name
        )

    def delete_location(self, location_id: int) -> bool:
        """Tombstone the location and cascade to its live assignments.

        Same no-op rule as ``delete_article`` for unknown or deleted ids.
        """
        with self._lock:
            return self._tombstone(
                "location",
                location_id,
                self._data.locations,
                lambda assignment: assignment.location_id == location_id,
            )

    def _tombstone(
        self,
        kind: str,
        record_id: int,
        records: List,
        references: Callable[[Assignment], bool],
        *,
        stamp_field: Optional[str] = None,
    ) -> bool:
        index = next((i for i, r in enumerate(records) if r.id == record_id), None)
        if index is None or records[index].is_deleted:
            logger.debug("Delete of %s %d ignored, no live record.", kind, record_id)
            return False

        timestamp = current_timestamp(self._clock)
        update = {"deleted": True}
        if stamp_field:
            update[stamp_field] = timestamp
        tombstoned = list(records)
        tombstoned[index] = records[index].model_copy(update=update)

        cascaded = 0
        assignments = []
        for assignment in self._data.assignments:
            if references(assignment) and not assignment.is_deleted:
                assignment = assignment.model_copy(
                    update={"deleted": True, "last_modified": timestamp}
                )
                cascaded += 1
            assignments.append(assignment)

        self._replace(**{f"{kind}s": tombstoned, "assignments": assignments})
        logger.info(
            "Marked %s as deleted: id=%d, name=%s, marked %d assignments as deleted",
            kind,
            record_id,
            records[index].name,
            cascaded,
        )
        return True

    # -----------------------------
    # Assignments
    # -----------------------------

    def create_new_assignment(self, article_id: int, location_id: int) -> Assignment:
        with self._lock:
            new_id = self._new_id(self._data.assignments)
            article = self.get_article_by_id(article_id)

        today = today_string(self._clock)
        expiration_date = None
        if article is not None and article.default_expiration_days:
            expiration_date = add_days(today, article.default_expiration_days)

        assignment = Assignment(
            id=new_id,
            article_id=article_id,
            location_id=location_id,
            amount=DEFAULT_ASSIGNMENT_AMOUNT,
            added_date=today,
            expiration_date=expiration_date,
            last_modified=current_timestamp(self._clock),
        )
        logger.info(
            "Created new assignment: id=%d, articleId=%d, locationId=%d",
            assignment.id,
            article_id,
            location_id,
        )
        return assignment

    def set_location_assignments(self, location_id: int, assignments: Iterable[Assignment]) -> int:
        return self._replace_assignments(
            "locationId", location_id, lambda a: a.location_id == location_id, assignments
        )

    def set_article_assignments(self, article_id: int, assignments: Iterable[Assignment]) -> int:
        return self._replace_assignments(
            "articleId", article_id, lambda a: a.article_id == article_id, assignments
        )

    def _replace_assignments(
        self,
        key_name: str,
        key_value: int,
        belongs: Callable[[Assignment], bool],
        incoming: Iterable[Assignment],
    ) -> int:
        incoming = [assignment for assignment in incoming if assignment.amount > 0]
        incoming_ids = {assignment.id for assignment in incoming}
        with self._lock:
            kept = []
            removed = 0
            for assignment in self._data.assignments:
                if (belongs(assignment) and not assignment.is_deleted) or assignment.id in incoming_ids:
                    removed += 1
                    continue
                kept.append(assignment)

            timestamp = current_timestamp(self._clock)
            added = [
                assignment.model_copy(update={"last_modified": timestamp})
                for assignment in incoming
            ]
            self._replace(assignments=kept + added)

        logger.info(
            "Replaced assignments for %s=%d: removed %d, added %d",
            key_name,
            key_value,
            removed,
            len(added),
        )
        return len(added)


def _upsert(records: List, record) -> tuple[list, bool]:
    updated = list(records)
    for index, existing in enumerate(updated):
        if existing.id == record.id:
            updated[index] = record
            return updated, True
    updated.append(record)
    return updated, False


__all__ = [
    "DEFAULT_DOCUMENT_PATH",
    "InventoryRepository",
    "decode_inventory",
    "parse_inventory",
    "validate_inventory",
]
