"""
db/connection.py
----------------
Storage gateway over a PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so request handlers running in
worker threads can share it. The gateway is constructed explicitly and
passed to the layers above it; nothing here is process-global.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor

import config
from utils.logger import get_logger

logger = get_logger(__name__)


class StorageGateway:
    """
    Executes parameterized queries against PostgreSQL.

    Lifecycle:
        gateway = StorageGateway.from_config()
        gateway.open()      # at startup
        ...
        gateway.close()     # at shutdown

    Callers beyond ``max_conn`` block until a pooled connection is
    released; psycopg2's pool would otherwise raise PoolError.
    """

    def __init__(
        self,
        host: str,
        port: int,
        dbname: str,
        user: str,
        password: str,
        maintenance_db: str = "postgres",
        min_conn: int = 1,
        max_conn: int = 10,
    ):
        self.host = host
        self.port = port
        self.dbname = dbname
        self.user = user
        self.password = password
        self.maintenance_db = maintenance_db
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        self._pool_lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(max_conn)

    @classmethod
    def from_config(cls) -> "StorageGateway":
        """Build a gateway from the settings in config.py."""
        return cls(
            host=config.DB_HOST,
            port=config.DB_PORT,
            dbname=config.DB_NAME,
            user=config.DB_USER,
            password=config.DB_PASSWORD,
            maintenance_db=config.DB_MAINTENANCE_NAME,
            min_conn=config.DB_POOL_MIN,
            max_conn=config.DB_POOL_MAX,
        )

    def _connect_kwargs(self, dbname: str) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "dbname": dbname,
            "user": self.user,
            "password": self.password,
        }

    # ── LIFECYCLE ─────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> None:
        """
        Initialize the connection pool.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        with self._pool_lock:
            if self._pool is not None:
                return
            try:
                self._pool = pool.ThreadedConnectionPool(
                    self.min_conn, self.max_conn, **self._connect_kwargs(self.dbname)
                )
                logger.info(
                    f"Connection pool opened for '{self.dbname}' "
                    f"({self.min_conn}-{self.max_conn} connections)."
                )
            except psycopg2.OperationalError as e:
                logger.error(f"Failed to open connection pool: {e}")
                raise

    def close(self) -> None:
        """Close all connections in the pool."""
        with self._pool_lock:
            if self._pool is not None:
                self._pool.closeall()
                self._pool = None
                logger.info("Connection pool closed.")

    # ── CONNECTIONS ───────────────────────────────────────

    @contextmanager
    def connection(self) -> Iterator:
        """
        Borrow a pooled connection for the duration of the block.

        Opens the pool on first use if startup could not. Connections that
        were closed underneath us are discarded instead of returned.
        """
        self._slots.acquire()
        try:
            if self._pool is None:
                self.open()
            conn = self._pool.getconn()
            try:
                yield conn
            finally:
                self._pool.putconn(conn, close=bool(conn.closed))
        finally:
            self._slots.release()

    @contextmanager
    def transaction(self) -> Iterator:
        """
        Yield a dict cursor inside one transaction.
        Commits when the block exits cleanly, rolls back and re-raises otherwise.
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=RealDictCursor) as cur:
                    yield cur
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    @contextmanager
    def admin_connection(self) -> Iterator:
        """
        Autocommit connection to the maintenance database.
        Needed for CREATE DATABASE, which cannot run inside a transaction
        nor against a database that does not exist yet.
        """
        conn = psycopg2.connect(**self._connect_kwargs(self.maintenance_db))
        try:
            conn.autocommit = True
            yield conn
        finally:
            conn.close()

    # ── QUERIES ───────────────────────────────────────────

    def query(self, sql: str, params: Optional[Sequence] = None) -> list[dict]:
        """Run a SELECT (or RETURNING statement) and return rows as dicts."""
        with self.transaction() as cur:
            cur.execute(sql, params)
            return [dict(row) for row in cur.fetchall()]

    def execute(self, sql: str, params: Optional[Sequence] = None) -> int:
        """Run a write statement and return the affected row count."""
        with self.transaction() as cur:
            cur.execute(sql, params)
            return cur.rowcount

    def ping(self) -> None:
        """
        Borrow a pooled connection and run ``SELECT 1`` on it.

        An idle pooled connection says nothing about the server, so a
        round trip is required. A connection that fails here is closed by
        psycopg2 and therefore discarded by ``connection()``.

        Raises:
            psycopg2.Error: If no connection can be obtained or the server
                does not answer.
        """
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
            conn.rollback()
