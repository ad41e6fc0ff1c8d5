"""
Neo4j Connection Handler

Owns the single async Neo4j driver for the process.  The driver is a
connection pool that is safe to share between concurrent tasks; sessions
are not, so every query opens its own short-lived session.
"""

import logging
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession

from code_analysis.shared.config import BaseGraphSettings
from code_analysis.shared.exceptions import ConfigurationError

logger = logging.getLogger("code_analysis.neo4j_handler")


class Neo4jHandler:
    """
    Manages one async Neo4j driver for the lifetime of the process.

    Usage
    -----
    handler = Neo4jHandler.from_settings(settings)
    rows = await handler.run("MATCH (n) RETURN n LIMIT 5")
    await handler.close()

    The driver is created on first use.  A pre-built driver can be
    injected instead, which is how the tests substitute a fake.
    """

    def __init__(
        self,
        uri: str,
        username: str,
        password: str,
        database: str = "neo4j",
        driver: AsyncDriver | None = None,
    ):
        if not uri:
            raise ConfigurationError("GRAPH_URI is not set (env or argument)")
        if not username:
            raise ConfigurationError("GRAPH_USER is not set (env or argument)")
        if not password and driver is None:
            raise ConfigurationError("GRAPH_PASSWORD environment variable is required")

        self._uri = uri
        self._username = username
        self._password = password
        self._database = database
        self._driver: AsyncDriver | None = driver
        self._closed = False

    @classmethod
    def from_settings(cls, settings: BaseGraphSettings) -> "Neo4jHandler":
        """Build a handler from GRAPH_* settings."""
        return cls(
            uri=settings.uri,
            username=settings.user,
            password=settings.password,
            database=settings.database,
        )

    # ─── Lifecycle ──────────────────────────────────────────

    async def close(self) -> None:
        """Close the underlying driver.  Safe to call more than once."""
        self._closed = True
        if self._driver is not None:
            driver, self._driver = self._driver, None
            await driver.close()
            logger.info("Neo4j connection closed")

    # ─── Properties ─────────────────────────────────────────

    @property
    def driver(self) -> AsyncDriver:
        """Return the shared async driver, creating it on first access.

        Raises:
            RuntimeError: If the handler has already been closed.
        """
        if self._closed:
            raise RuntimeError("Neo4jHandler is closed")
        if self._driver is None:
            self._driver = AsyncGraphDatabase.driver(
                self._uri, auth=(self._username, self._password)
            )
            logger.info("Neo4j driver created for %s (db=%s)", self._uri, self._database)
        return self._driver

    @property
    def database(self) -> str:
        """Return the configured database name."""
        return self._database

    @property
    def uri(self) -> str:
        """Return the configured Neo4j URI."""
        return self._uri

    @property
    def closed(self) -> bool:
        return self._closed

    # ─── Sessions and queries ───────────────────────────────

    def session(self) -> AsyncSession:
        """Open a fresh session.  Use it as ``async with handler.session() as s``."""
        return self.driver.session(database=self._database)

    async def run(self, query: str, params: dict[str, Any] | None = None) -> list[dict]:
        """Execute a Cypher query in its own session and return all rows as dicts.

        The session is released on every exit path, including when the
        query or the result stream raises.

        Args:
            query: Cypher query string.
            params: Optional query parameters.

        Returns:
            List of result records as dictionaries.
        """
        async with self.session() as session:
            result = await session.run(query, params or {})
            return [record.data() async for record in result]

    async def run_single(self, query: str, params: dict[str, Any] | None = None) -> dict | None:
        """Execute a Cypher query and return the first row, or None."""
        rows = await self.run(query, params)
        return rows[0] if rows else None
