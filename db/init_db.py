"""
db/init_db.py
-------------
Self-healing bootstrap: creates the database, the tables and the seed rows
if they do not already exist. Safe to run on every start and again whenever
the readiness check fails.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from dataclasses import dataclass, field
from typing import Optional

import psycopg2
from psycopg2 import sql

from db.connection import StorageGateway
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Students: identifiers are kept contiguous (1..N) by the renumbering step
CREATE TABLE IF NOT EXISTS student (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL CHECK (length(trim(name)) > 0),
    roll_number     VARCHAR(50),
    "class"         VARCHAR(50),
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Teachers: independent identifier namespace, same contiguity rule
CREATE TABLE IF NOT EXISTS teacher (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL CHECK (length(trim(name)) > 0),
    subject         VARCHAR(255),
    "class"         VARCHAR(50),
    created_at      TIMESTAMPTZ DEFAULT NOW()
);
"""

# table -> (insert statement, rows with explicit ids 1..3)
SEED_DATA: dict[str, tuple[str, list[tuple]]] = {
    "student": (
        'INSERT INTO student (id, name, roll_number, "class") VALUES (%s, %s, %s, %s);',
        [
            (1, "John Doe", "001", "10A"),
            (2, "Jane Smith", "002", "10B"),
            (3, "Bob Johnson", "003", "9A"),
        ],
    ),
    "teacher": (
        'INSERT INTO teacher (id, name, subject, "class") VALUES (%s, %s, %s, %s);',
        [
            (1, "Prof. Wilson", "Mathematics", "10A"),
            (2, "Dr. Brown", "Science", "9A"),
            (3, "Ms. Davis", "English", "10B"),
        ],
    ),
}

# Keeps SERIAL in step with explicitly assigned ids.
SYNC_SEQUENCE_SQL = (
    "SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
    "COALESCE((SELECT MAX(id) FROM {table}), 0) + 1, false);"
)


@dataclass
class BootstrapResult:
    """
    Outcome of one bootstrap attempt.

    Seed failures never make the bootstrap fail; they are reported here
    so callers can observe them without having to act on them.

    Attributes:
        database_ready: The target database exists (or was created).
        schema_ready: Both tables exist (or were created).
        seeded: table -> number of seed rows inserted by this run.
        seed_errors: table -> error message for seeds that failed.
        error: Message of the fatal error that stopped the run, if any.
    """
    database_ready: bool = False
    schema_ready: bool = False
    seeded: dict[str, int] = field(default_factory=dict)
    seed_errors: dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.schema_ready and self.error is None


class BootstrapManager:
    """Ensures the database, its tables, and their default rows exist."""

    def __init__(self, gateway: StorageGateway):
        self.gateway = gateway

    def ensure_schema(self) -> BootstrapResult:
        """
        Create whatever is missing. Idempotent.

        Never raises on database errors: schema failures are logged and
        left for the next readiness check, seed failures are swallowed.
        """
        result = BootstrapResult()
        logger.info("Initializing database and tables...")
        try:
            self.ensure_database()
            result.database_ready = True
        except psycopg2.Error as e:
            # The role may reach the target database but not the
            # maintenance one; the table step below tells us which.
            logger.warning(f"Could not verify database '{self.gateway.dbname}': {e}")

        try:
            self.create_tables()
            result.database_ready = True
            result.schema_ready = True
        except psycopg2.Error as e:
            result.error = str(e).strip()
            logger.error(f"Database initialization failed: {result.error}")
            return result

        for table in SEED_DATA:
            try:
                result.seeded[table] = self.seed_table(table)
            except psycopg2.Error as e:
                result.seed_errors[table] = str(e).strip()
                logger.error(f"Error inserting sample data into '{table}': {e}")

        logger.info("Database initialization completed.")
        return result

    def ensure_database(self) -> None:
        """Create the target database if it does not exist."""
        dbname = self.gateway.dbname
        with self.gateway.admin_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 FROM pg_database WHERE datname = %s;", (dbname,))
                if cur.fetchone() is None:
                    cur.execute(
                        sql.SQL("CREATE DATABASE {}").format(sql.Identifier(dbname))
                    )
                    logger.info(f"Database '{dbname}' created.")
                else:
                    logger.info(f"Database '{dbname}' verified.")

    def create_tables(self) -> None:
        """
        Execute the schema SQL to create all tables.
        Safe to call multiple times (uses IF NOT EXISTS).
        """
        with self.gateway.transaction() as cur:
            cur.execute(SCHEMA_SQL)
        logger.info("Student and teacher tables created/verified.")

    def seed_table(self, table: str) -> int:
        """
        Insert the default rows into ``table`` if, and only if, it is empty.

        Returns:
            Number of rows inserted (0 when the table already had data).
        """
        count = self.gateway.query(f"SELECT COUNT(*) AS count FROM {table};")[0]["count"]
        if count:
            logger.info(f"Table '{table}' already has {count} records.")
            return 0

        insert_sql, rows = SEED_DATA[table]
        with self.gateway.transaction() as cur:
            cur.executemany(insert_sql, rows)
            cur.execute(SYNC_SEQUENCE_SQL.format(table=table))
        logger.info(f"Inserted {len(rows)} sample rows into '{table}'.")
        return len(rows)


if __name__ == "__main__":
    gateway = StorageGateway.from_config()
    outcome = BootstrapManager(gateway).ensure_schema()
    gateway.close()
    print("Database bootstrap:", "ok" if outcome.ok else f"failed ({outcome.error})")
