class InventoryError(Exception):
    """Base class for inventory data store failures."""


class CorruptDataError(InventoryError):
    """The inventory document cannot be decoded or fails validation."""


class InvalidRecordError(CorruptDataError):
    def __init__(self, kind: str, record_id: int, field: str = "name"):
        self.kind = kind
        self.record_id = record_id
        self.field = field
        super().__init__(f"{kind.capitalize()} with id {record_id} has a blank {field}.")


class DanglingReferenceError(CorruptDataError):
    def __init__(self, assignment_id: int, kind: str, missing_id: int):
        self.assignment_id = assignment_id
        self.kind = kind
        self.missing_id = missing_id
        super().__init__(
            f"Assignment {assignment_id} refers to a non-existent {kind} with id {missing_id}."
        )


class IdSpaceExhaustedError(InventoryError):
    """No free id was found within the configured number of attempts."""


__all__ = [
    "CorruptDataError",
    "DanglingReferenceError",
    "IdSpaceExhaustedError",
    "InvalidRecordError",
    "InventoryError",
]
