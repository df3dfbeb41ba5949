"""
handlers/schemas.py
-------------------
Request bodies for the add endpoints.

Every field is optional here on purpose: a missing name must reach the
database and be rejected there, not be turned into a 422 by validation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentIn(BaseModel):
    """Body of POST /addstudent: ``{name, rollNo, class}``."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    rollNo: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="class")

    def to_fields(self) -> dict:
        return {"name": self.name, "roll_number": self.rollNo, "class": self.class_name}


class TeacherIn(BaseModel):
    """Body of POST /addteacher: ``{name, subject, class}``."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    subject: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="class")

    def to_fields(self) -> dict:
        return {"name": self.name, "subject": self.subject, "class": self.class_name}
