"""
services/renumbering.py
-----------------------
Restores the contiguous 1..N identifier sequence after a delete.

The reassignment plan is computed once from the live identifiers and then
applied by the repository as a single batch inside one transaction, so a
failure leaves the table as it was before the renumbering started.
"""

from dataclasses import dataclass
from typing import Iterable, NamedTuple

from repositories.record_repo import RecordRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class Reassignment(NamedTuple):
    old_id: int
    new_id: int


@dataclass
class RenumberResult:
    """
    Attributes:
        total: Rows left in the table (and UPDATEs issued).
        moved: Rows whose identifier actually changed.
    """
    total: int
    moved: int


def plan_renumbering(ids: Iterable[int]) -> list[Reassignment]:
    """
    Map the i-th smallest identifier to i (1-based).

    Every live row gets an entry, including rows already in place, so the
    plan is idempotent and the relative order of rows never changes.

    >>> plan_renumbering([2, 5, 3])
    [Reassignment(old_id=2, new_id=1), Reassignment(old_id=3, new_id=2), Reassignment(old_id=5, new_id=3)]
    """
    return [
        Reassignment(old_id, new_id)
        for new_id, old_id in enumerate(sorted(ids), start=1)
    ]


class RenumberingEngine:
    """Sole writer of the identifier column outside of row creation."""

    def __init__(self, repo: RecordRepository):
        self.repo = repo

    def renumber(self) -> RenumberResult:
        plan = plan_renumbering(self.repo.list_ids())
        moved = sum(1 for step in plan if step.old_id != step.new_id)
        self.repo.reassign_ids(plan)
        if moved:
            logger.info(
                f"Renumbered {self.repo.table}: {moved} of {len(plan)} rows moved."
            )
        return RenumberResult(total=len(plan), moved=moved)
