from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

from ..core.exceptions import InfrastructureError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 10
    pool_timeout: float = 5.0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "gym_db")),
            pool_size=int(db_config.get("pool_size", 10)),
            pool_timeout=float(db_config.get("pool_timeout", 5.0)),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory backed by a connection pool.

    Each repository operation checks a connection out and returns it when done.
    The pool is created lazily so the app can start before MySQL is reachable.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            logger.info(
                "creating MySQL pool %s@%s:%s/%s (size=%s)",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._config.pool_size,
            )
            self._pool = pooling.MySQLConnectionPool(
                pool_name="gym_pool",
                pool_size=int(self._config.pool_size),
                pool_reset_session=True,
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        return self._pool

    def connect(self):
        """Check a connection out, waiting up to pool_timeout seconds while the pool is exhausted."""

        deadline = time.monotonic() + max(0.0, float(self._config.pool_timeout))
        delay = 0.01
        while True:
            try:
                return self._get_pool().get_connection()
            except pooling.PoolError as e:
                if time.monotonic() >= deadline:
                    logger.warning("no free connection after %ss", self._config.pool_timeout)
                    raise InfrastructureError("Database busy: no free connection") from e
                time.sleep(delay)
                delay = min(delay * 2, 0.2)
            except mysql.connector.Error as e:
                raise InfrastructureError(f"Database unavailable: {e}") from e
