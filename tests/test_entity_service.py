import random
import threading

import psycopg2
import pytest


def _ids(service):
    return [r.id for r in service.list()]


def test_first_create_gets_id_one(student_service):
    student = student_service.create({"name": "A"})
    assert student.id == 1
    assert student.created_at is not None


def test_create_returns_previous_max_plus_one(student_service, student_repo):
    student_repo.add(1, {"name": "A"})
    student_repo.add(2, {"name": "B"})
    assert student_service.create({"name": "C", "roll_number": "007", "class": "9B"}).id == 3


def test_create_stores_optional_fields(teacher_service):
    teacher = teacher_service.create({"name": "Dr. Brown", "subject": "Science", "class": "9A"})
    assert teacher.to_dict()["subject"] == "Science"
    assert teacher.to_dict()["class"] == "9A"


def test_missing_name_is_rejected_by_the_store(student_service, student_repo):
    with pytest.raises(psycopg2.IntegrityError, match="not-null"):
        student_service.create({"roll_number": "001"})
    assert student_repo.rows == {}


def test_blank_name_is_rejected_by_the_store(teacher_service):
    with pytest.raises(psycopg2.IntegrityError, match="check constraint"):
        teacher_service.create({"name": "   "})


def test_delete_then_list_scenario(student_service):
    assert student_service.create({"name": "A"}).id == 1
    assert student_service.create({"name": "B"}).id == 2

    assert student_service.delete(1) == 1

    remaining = student_service.list()
    assert [(s.id, s.name) for s in remaining] == [(1, "B")]


def test_deleting_max_id_keeps_relative_order(student_service):
    for name in "ABCD":
        student_service.create({"name": name})

    student_service.delete(4)

    assert [(s.id, s.name) for s in student_service.list()] == [(1, "A"), (2, "B"), (3, "C")]


def test_deleting_missing_id_succeeds_and_keeps_invariant(student_service, student_repo):
    for name in "AB":
        student_service.create({"name": name})

    assert student_service.delete(99) == 99
    assert _ids(student_service) == [1, 2]
    assert len(student_repo.update_batches) == 1


def test_delete_accepts_identifier_from_the_url(teacher_service):
    teacher_service.create({"name": "T"})
    assert teacher_service.delete("1") == 1
    assert teacher_service.list() == []


def test_delete_rejects_non_integer_identifier(teacher_service, teacher_repo):
    with pytest.raises(ValueError):
        teacher_service.delete("abc")
    assert teacher_repo.update_batches == []


def test_entity_types_have_independent_namespaces(student_service, teacher_service):
    student_service.create({"name": "S1"})
    student_service.create({"name": "S2"})
    assert teacher_service.create({"name": "T1"}).id == 1

    student_service.delete(1)
    assert _ids(teacher_service) == [1]


def test_random_serial_operations_keep_ids_contiguous(student_service):
    rng = random.Random(1234)
    expected_names: list[str] = []

    for step in range(200):
        if expected_names and rng.random() < 0.4:
            victim = rng.randint(1, len(expected_names) + 2)
            student_service.delete(victim)
            if victim <= len(expected_names):
                expected_names.pop(victim - 1)
        else:
            name = f"student-{step}"
            created = student_service.create({"name": name})
            assert created.id == len(expected_names) + 1
            expected_names.append(name)

        rows = student_service.list()
        assert [r.id for r in rows] == list(range(1, len(rows) + 1))
        assert [r.name for r in rows] == expected_names


def test_concurrent_creates_do_not_collide(student_service):
    errors = []

    def worker(n):
        try:
            student_service.create({"name": f"worker-{n}"})
        except Exception as e:  # pragma: no cover - failure path
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert _ids(student_service) == list(range(1, 21))


def test_every_operation_checks_readiness(student_service, gateway):
    student_service.list()
    student_service.create({"name": "A"})
    student_service.delete(1)
    assert gateway.pings == 3


def test_unreachable_store_triggers_one_bootstrap_then_proceeds(student_service, gateway, bootstrap):
    gateway.down = True
    student_service.create({"name": "A"})
    assert bootstrap.calls == 1
    assert _ids(student_service) == [1]
