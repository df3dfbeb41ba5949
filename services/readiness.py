"""
services/readiness.py
---------------------
Checks that the store is usable before a request touches it, and falls
back to a single bootstrap attempt when it is not.
"""

import psycopg2

from db.connection import StorageGateway
from db.init_db import BootstrapManager
from utils.logger import get_logger

logger = get_logger(__name__)


class ReadinessGuard:
    """Liveness probe plus best-effort self-healing."""

    def __init__(self, gateway: StorageGateway, bootstrap: BootstrapManager):
        self.gateway = gateway
        self.bootstrap = bootstrap

    def probe(self) -> None:
        """
        Borrow and release one pooled connection.

        Raises:
            psycopg2.Error: If the store is unreachable.
        """
        self.gateway.ping()

    def ensure_ready(self) -> bool:
        """
        Probe the store; on failure run the bootstrap once.

        Always returns True: the request proceeds either way and surfaces
        its own error if the store is still unusable.
        """
        try:
            self.probe()
        except psycopg2.Error as e:
            logger.warning(f"Database not ready ({e}), attempting to initialize...")
            result = self.bootstrap.ensure_schema()
            if not result.ok:
                logger.error(f"Re-bootstrap did not complete: {result.error}")
        return True
