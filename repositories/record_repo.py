"""
repositories/record_repo.py
----------------------------
Data access layer for student and teacher records.
All SQL queries for the two tables live here; the table and its columns
come from the EntityType the repository is bound to.
"""

from typing import Any, Iterable, Mapping

from db.connection import StorageGateway
from db.init_db import SYNC_SEQUENCE_SQL
from models.entity_type import EntityType
from models.student import STUDENT
from models.teacher import TEACHER
from utils.logger import get_logger

logger = get_logger(__name__)


class RecordRepository:
    """Repository for CRUD operations on one entity table."""

    def __init__(self, gateway: StorageGateway, entity_type: EntityType):
        self.gateway = gateway
        self.entity_type = entity_type

    @property
    def table(self) -> str:
        return self.entity_type.table

    # ── CREATE ────────────────────────────────────────────

    def add(self, record_id: int, fields: Mapping[str, Any]) -> Any:
        """
        Insert a row with an explicitly allocated identifier.

        Args:
            record_id: Identifier from the IdentifierAllocator.
            fields: Column values; columns missing here are inserted as NULL,
                so a missing name is rejected by the NOT NULL constraint.

        Returns:
            The inserted domain object, including ``created_at``.
        """
        columns = ("id",) + self.entity_type.columns
        column_list = ", ".join(f'"{c}"' for c in columns)
        placeholders = ", ".join(["%s"] * len(columns))
        sql = f"INSERT INTO {self.table} ({column_list}) VALUES ({placeholders}) RETURNING *;"
        params = [record_id] + [fields.get(c) for c in self.entity_type.columns]
        try:
            row = self.gateway.query(sql, params)[0]
        except Exception as e:
            logger.error(f"Failed to add {self.entity_type.name} #{record_id}: {e}")
            raise
        logger.info(f"Added {self.entity_type.name} #{record_id}")
        return self.entity_type.from_row(row)

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list:
        """All rows ordered by identifier ascending."""
        rows = self.gateway.query(f"SELECT * FROM {self.table} ORDER BY id;")
        return [self.entity_type.from_row(r) for r in rows]

    def list_ids(self) -> list[int]:
        """Live identifiers, ascending."""
        rows = self.gateway.query(f"SELECT id FROM {self.table} ORDER BY id;")
        return [r["id"] for r in rows]

    def max_id(self) -> int:
        """Highest live identifier, or 0 when the table is empty."""
        rows = self.gateway.query(f"SELECT COALESCE(MAX(id), 0) AS last_id FROM {self.table};")
        return int(rows[0]["last_id"])

    # ── UPDATE ────────────────────────────────────────────

    def reassign_ids(self, plan: Iterable[tuple[int, int]]) -> int:
        """
        Apply (old_id, new_id) reassignments in one transaction.

        Pairs must be ordered by ascending old_id with new_id <= old_id,
        so every target id is already free when its UPDATE runs.

        Returns:
            Number of UPDATE statements issued.
        """
        params = [(new_id, old_id) for old_id, new_id in plan]
        if not params:
            return 0
        sql = f"UPDATE {self.table} SET id = %s WHERE id = %s;"
        try:
            with self.gateway.transaction() as cur:
                cur.executemany(sql, params)
                cur.execute(SYNC_SEQUENCE_SQL.format(table=self.table))
        except Exception as e:
            logger.error(f"Failed to renumber {self.table}: {e}")
            raise
        return len(params)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, record_id: int) -> bool:
        """
        Delete a row by identifier.

        Returns:
            True if a row was deleted, False if none matched.
        """
        try:
            deleted = self.gateway.execute(
                f"DELETE FROM {self.table} WHERE id = %s;", (record_id,)
            ) > 0
        except Exception as e:
            logger.error(f"Failed to delete {self.entity_type.name} #{record_id}: {e}")
            raise
        if deleted:
            logger.info(f"Deleted {self.entity_type.name} #{record_id}")
        return deleted


class StudentRepository(RecordRepository):
    """Repository for the student table."""

    def __init__(self, gateway: StorageGateway):
        super().__init__(gateway, STUDENT)


class TeacherRepository(RecordRepository):
    """Repository for the teacher table."""

    def __init__(self, gateway: StorageGateway):
        super().__init__(gateway, TEACHER)
