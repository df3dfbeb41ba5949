"""
services/registry.py
--------------------
Wires the gateway, bootstrap and services together once at startup.
"""

from dataclasses import dataclass

from db.connection import StorageGateway
from db.init_db import BootstrapManager
from repositories.record_repo import StudentRepository, TeacherRepository
from services.entity_service import EntityService, StudentService, TeacherService
from services.readiness import ReadinessGuard


@dataclass
class Services:
    """Everything the HTTP handlers need, built around one gateway."""
    gateway: StorageGateway
    bootstrap: BootstrapManager
    readiness: ReadinessGuard
    students: EntityService
    teachers: EntityService

    def for_entity(self, name: str) -> EntityService:
        return {"student": self.students, "teacher": self.teachers}[name]


def build_services(gateway: StorageGateway) -> Services:
    bootstrap = BootstrapManager(gateway)
    readiness = ReadinessGuard(gateway, bootstrap)
    return Services(
        gateway=gateway,
        bootstrap=bootstrap,
        readiness=readiness,
        students=StudentService(StudentRepository(gateway), readiness),
        teachers=TeacherService(TeacherRepository(gateway), readiness),
    )
