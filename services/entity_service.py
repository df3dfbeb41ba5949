"""
services/entity_service.py
---------------------------
List, create and delete for one record type.
Composes the readiness check, identifier allocation, and renumbering
around the repository so every mutation keeps the ids contiguous.
"""

import threading
from typing import Any, Mapping, Optional

from repositories.record_repo import RecordRepository, StudentRepository, TeacherRepository
from services.identifier_allocator import IdentifierAllocator
from services.readiness import ReadinessGuard
from services.renumbering import RenumberingEngine
from utils.logger import get_logger

logger = get_logger(__name__)


class EntityService:
    """
    Handles all business logic for one entity type.

    Create and delete (including its renumbering) hold a per-service lock,
    so within one process the 1..N invariant also holds under concurrent
    requests. Separate processes sharing a database are not serialized.
    """

    def __init__(
        self,
        repo: RecordRepository,
        readiness: ReadinessGuard,
        allocator: Optional[IdentifierAllocator] = None,
        renumberer: Optional[RenumberingEngine] = None,
    ):
        self.repo = repo
        self.readiness = readiness
        self.allocator = allocator or IdentifierAllocator(repo)
        self.renumberer = renumberer or RenumberingEngine(repo)
        self._write_lock = threading.Lock()

    @property
    def entity_type(self):
        return self.repo.entity_type

    def list(self) -> list:
        """All live rows, ordered by identifier."""
        self.readiness.ensure_ready()
        return self.repo.list_all()

    def create(self, fields: Mapping[str, Any]) -> Any:
        """
        Insert a row under the next identifier.

        Args:
            fields: Column values keyed by column name. Required columns are
                not checked here; the database rejects the insert instead.

        Returns:
            The created row, with its identifier and creation timestamp.
        """
        self.readiness.ensure_ready()
        with self._write_lock:
            record_id = self.allocator.next_id()
            return self.repo.add(record_id, fields)

    def delete(self, identifier) -> int:
        """
        Delete a row, then close the gap it left.

        Deleting an identifier that does not exist is not an error; the
        renumbering still runs.

        Returns:
            The identifier as requested.

        Raises:
            ValueError: If ``identifier`` is not an integer.
        """
        record_id = int(identifier)
        self.readiness.ensure_ready()
        with self._write_lock:
            if not self.repo.delete(record_id):
                logger.info(f"No {self.entity_type.name} #{record_id} to delete.")
            self.renumberer.renumber()
        return record_id


class StudentService(EntityService):
    """Student records."""

    def __init__(self, repo: StudentRepository, readiness: ReadinessGuard):
        super().__init__(repo, readiness)


class TeacherService(EntityService):
    """Teacher records."""

    def __init__(self, repo: TeacherRepository, readiness: ReadinessGuard):
        super().__init__(repo, readiness)
