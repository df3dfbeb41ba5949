"""
models/teacher.py
-----------------
Domain model for teacher records.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models.entity_type import EntityType


@dataclass
class Teacher:
    """A single teacher row. Identifiers are independent of students'."""
    id: int
    name: str
    subject: Optional[str] = None
    class_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "Teacher":
        return cls(
            id=row["id"],
            name=row["name"],
            subject=row.get("subject"),
            class_name=row.get("class"),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "subject": self.subject,
            "class": self.class_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


TEACHER = EntityType(
    name="teacher",
    table="teacher",
    columns=("name", "subject", "class"),
    from_row=Teacher.from_row,
)
