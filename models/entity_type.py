"""
models/entity_type.py
---------------------
Describes one record type: its table, its user-supplied columns, and how
to turn a database row into a domain object.
"""

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class EntityType:
    """
    Attributes:
        name: Singular name used in routes and messages ('student').
        table: Database table holding the rows.
        columns: User-supplied columns, in insert order (id and
            created_at are managed by the service and the database).
        from_row: Factory building a domain object from a dict row.
    """
    name: str
    table: str
    columns: tuple[str, ...]
    from_row: Callable[[dict], Any]

    @property
    def label(self) -> str:
        """Capitalized name for user-facing messages."""
        return self.name.capitalize()
