"""
services/identifier_allocator.py
--------------------------------
Computes the identifier for the next row of an entity type.
"""

from repositories.record_repo import RecordRepository


class IdentifierAllocator:
    """
    Allocates ``max(id) + 1`` (or 1 for an empty table).

    Bound to one repository, so each entity type gets its own namespace.
    Two unsynchronized callers can receive the same value; the primary key
    turns that into an insert error. EntityService serializes its callers.
    """

    def __init__(self, repo: RecordRepository):
        self.repo = repo

    def next_id(self) -> int:
        return self.repo.max_id() + 1
