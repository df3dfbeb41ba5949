"""
Shared fixtures.

Services run against the in-memory fakes in tests/fakes.py; the real
ReadinessGuard and services sit on top of them.
"""

import pytest

from models.student import STUDENT
from models.teacher import TEACHER
from services.entity_service import StudentService, TeacherService
from services.readiness import ReadinessGuard
from services.registry import Services
from tests.fakes import FakeBootstrap, FakeGateway, InMemoryRepository


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def bootstrap():
    return FakeBootstrap()


@pytest.fixture
def readiness(gateway, bootstrap):
    return ReadinessGuard(gateway, bootstrap)


@pytest.fixture
def student_repo():
    return InMemoryRepository(STUDENT)


@pytest.fixture
def teacher_repo():
    return InMemoryRepository(TEACHER)


@pytest.fixture
def student_service(student_repo, readiness):
    return StudentService(student_repo, readiness)


@pytest.fixture
def teacher_service(teacher_repo, readiness):
    return TeacherService(teacher_repo, readiness)


@pytest.fixture
def services(gateway, bootstrap, readiness, student_service, teacher_service):
    return Services(
        gateway=gateway,
        bootstrap=bootstrap,
        readiness=readiness,
        students=student_service,
        teachers=teacher_service,
    )
