"""
models/student.py
-----------------
Domain model for student records.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models.entity_type import EntityType


@dataclass
class Student:
    """
    Represents a single student row.

    Attributes:
        id: Position in the contiguous 1..N sequence of students.
        name: Full name (required).
        roll_number: Optional roll number.
        class_name: Optional class, stored in the ``class`` column.
        created_at: Set by the database on insert.
    """
    id: int
    name: str
    roll_number: Optional[str] = None
    class_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "Student":
        return cls(
            id=row["id"],
            name=row["name"],
            roll_number=row.get("roll_number"),
            class_name=row.get("class"),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "roll_number": self.roll_number,
            "class": self.class_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


STUDENT = EntityType(
    name="student",
    table="student",
    columns=("name", "roll_number", "class"),
    from_row=Student.from_row,
)
