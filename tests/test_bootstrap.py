from unittest.mock import MagicMock

import psycopg2
import pytest
from psycopg2 import sql

from db.init_db import SCHEMA_SQL, SEED_DATA, SYNC_SEQUENCE_SQL, BootstrapManager


@pytest.fixture
def gateway():
    gw = MagicMock()
    gw.dbname = "school"
    gw.tables = {"student": [], "teacher": []}

    admin_cursor = MagicMock()
    admin_cursor.fetchone.return_value = None
    admin_conn = MagicMock()
    admin_conn.cursor.return_value.__enter__.return_value = admin_cursor
    gw.admin_connection.return_value.__enter__.return_value = admin_conn
    gw.admin_cursor = admin_cursor

    tx_cursor = MagicMock()

    def executemany(statement, rows):
        table = statement.split()[2]
        gw.tables[table].extend(rows)

    tx_cursor.executemany.side_effect = executemany
    gw.transaction.return_value.__enter__.return_value = tx_cursor
    gw.transaction.return_value.__exit__.return_value = False
    gw.tx_cursor = tx_cursor

    def query(statement, params=None):
        table = statement.rstrip(";").split()[-1]
        return [{"count": len(gw.tables[table])}]

    gw.query.side_effect = query
    return gw


def test_creates_missing_database_with_quoted_identifier(gateway):
    BootstrapManager(gateway).ensure_database()

    calls = gateway.admin_cursor.execute.call_args_list
    assert calls[0].args == ("SELECT 1 FROM pg_database WHERE datname = %s;", ("school",))
    assert isinstance(calls[1].args[0], sql.Composed)


def test_existing_database_is_left_alone(gateway):
    gateway.admin_cursor.fetchone.return_value = (1,)
    BootstrapManager(gateway).ensure_database()
    assert gateway.admin_cursor.execute.call_count == 1


def test_empty_database_gets_three_seed_rows_per_table(gateway):
    result = BootstrapManager(gateway).ensure_schema()

    assert result.ok
    assert result.seeded == {"student": 3, "teacher": 3}
    gateway.tx_cursor.execute.assert_any_call(SCHEMA_SQL)
    assert [row[0] for row in gateway.tables["student"]] == [1, 2, 3]
    assert [row[0] for row in gateway.tables["teacher"]] == [1, 2, 3]


def test_rerun_on_populated_database_inserts_nothing(gateway):
    manager = BootstrapManager(gateway)
    manager.ensure_schema()

    second = manager.ensure_schema()

    assert second.ok
    assert second.seeded == {"student": 0, "teacher": 0}
    assert len(gateway.tables["student"]) == 3
    assert len(gateway.tables["teacher"]) == 3


def test_seed_rows_match_the_default_set():
    students = [row[1] for row in SEED_DATA["student"][1]]
    teachers = [row[1] for row in SEED_DATA["teacher"][1]]
    assert students == ["John Doe", "Jane Smith", "Bob Johnson"]
    assert teachers == ["Prof. Wilson", "Dr. Brown", "Ms. Davis"]


def test_schema_failure_is_reported_not_raised(gateway):
    gateway.admin_connection.side_effect = psycopg2.OperationalError("connection refused")
    gateway.transaction.side_effect = psycopg2.OperationalError("connection refused")

    result = BootstrapManager(gateway).ensure_schema()

    assert not result.ok
    assert not result.database_ready
    assert not result.schema_ready
    assert "connection refused" in result.error
    assert result.seeded == {}


def test_tables_are_created_when_maintenance_db_is_off_limits(gateway):
    gateway.admin_connection.side_effect = psycopg2.OperationalError(
        'permission denied for database "postgres"'
    )

    result = BootstrapManager(gateway).ensure_schema()

    assert result.ok
    assert result.database_ready
    gateway.tx_cursor.execute.assert_any_call(SCHEMA_SQL)
    assert result.seeded == {"student": 3, "teacher": 3}


def test_seeding_realigns_the_serial_sequence(gateway):
    BootstrapManager(gateway).ensure_schema()

    for table in ("student", "teacher"):
        gateway.tx_cursor.execute.assert_any_call(SYNC_SEQUENCE_SQL.format(table=table))
    statements = [c.args[0] for c in gateway.tx_cursor.method_calls if c.args]
    student_insert = SEED_DATA["student"][0]
    student_sync = SYNC_SEQUENCE_SQL.format(table="student")
    assert statements.index(student_sync) == statements.index(student_insert) + 1


def test_populated_tables_skip_sequence_realignment(gateway):
    gateway.tables["student"].append((1, "X", None, None))
    gateway.tables["teacher"].append((1, "Y", None, None))

    BootstrapManager(gateway).ensure_schema()

    gateway.tx_cursor.executemany.assert_not_called()
    sync_calls = [
        c for c in gateway.tx_cursor.execute.call_args_list
        if "setval" in str(c.args[0])
    ]
    assert sync_calls == []


def test_seed_failure_is_swallowed(gateway):
    def failing_query(statement, params=None):
        if "student" in statement:
            raise psycopg2.ProgrammingError("permission denied for table student")
        return [{"count": 0}]

    gateway.query.side_effect = failing_query

    result = BootstrapManager(gateway).ensure_schema()

    assert result.ok
    assert "permission denied" in result.seed_errors["student"]
    assert result.seeded == {"teacher": 3}
