"""Split, merge and consume operations on an in-memory assignment list.

Nothing here touches storage. Callers edit the list for one article or
location and hand the result to ``InventoryRepository.set_*_assignments``.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from homestock.core.dates import Clock, today_string, utc_now
from homestock.core.ids import IdSource, generate_unique_id
from homestock.schemas import Assignment

MergeKey = Tuple[int, int, Optional[str], Optional[str], Optional[str]]


def merge_key(assignment: Assignment) -> MergeKey:
    return (
        assignment.article_id,
        assignment.location_id,
        assignment.added_date,
        assignment.expiration_date,
        assignment.consumed_date,
    )


def consume(assignment: Assignment, *, today: Optional[str] = None, clock: Clock = utc_now) -> Assignment:
    return assignment.model_copy(update={"consumed_date": today or today_string(clock)})


def split(
    assignments: Sequence[Assignment],
    target: Assignment,
    *,
    existing_ids: Iterable[int],
    id_source: Optional[IdSource] = None,
) -> List[Assignment]:
    """Replace ``target`` with ``target.amount`` single-unit copies.

    New ids avoid every id in ``assignments``, ``existing_ids`` (the
    repository's ``assignment_ids()``, tombstones included) and each other.
    """
    if target.amount <= 1:
        raise ValueError(f"Assignment {target.id} has amount {target.amount}, nothing to split.")
    index = _index_of(assignments, target)

    taken = {assignment.id for assignment in assignments}
    taken.update(existing_ids)
    pieces = []
    for _ in range(target.amount):
        new_id = generate_unique_id(taken, id_source=id_source)
        taken.add(new_id)
        pieces.append(target.model_copy(update={"id": new_id, "amount": 1}))

    return list(assignments[:index]) + list(assignments[index + 1:]) + pieces


def can_merge(assignments: Iterable[Assignment], target: Assignment) -> bool:
    key = merge_key(target)
    return sum(1 for assignment in assignments if merge_key(assignment) == key) > 1


def merge(assignments: Sequence[Assignment], target: Assignment) -> List[Assignment]:
    """Collapse every assignment sharing ``target``'s merge key into one.

    The merged record keeps ``target``'s id and fields with the summed
    amount. Without a second match the list is returned unchanged.
    """
    key = merge_key(target)
    matches = [assignment for assignment in assignments if merge_key(assignment) == key]
    if len(matches) < 2:
        return list(assignments)

    merged = target.model_copy(update={"amount": sum(item.amount for item in matches)})
    remaining = [assignment for assignment in assignments if merge_key(assignment) != key]
    return remaining + [merged]


def _index_of(assignments: Sequence[Assignment], target: Assignment) -> int:
    for index, assignment in enumerate(assignments):
        if assignment.id == target.id:
            return index
    raise ValueError(f"Assignment {target.id} is not in the list.")


__all__ = ["can_merge", "consume", "merge", "merge_key", "split"]
