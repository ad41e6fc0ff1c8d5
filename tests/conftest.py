"""
In-memory stand-ins for the async neo4j driver.

FakeDriver is scripted with one outcome per query: a list of row dicts,
or an exception instance to raise from ``session.run``.  Every session
it hands out is kept so tests can check that each one was closed.
"""

import pytest

from code_analysis.analysis.query_service import QueryService
from code_analysis.shared.database import Neo4jHandler


class FakeRecord(dict):
    def data(self) -> dict:
        return dict(self)


class FakeResult:
    def __init__(self, rows: list[dict]):
        self._rows = [FakeRecord(row) for row in rows]
        self.consumed = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for row in self._rows:
            yield row

    async def consume(self) -> None:
        self.consumed = True


class FakeSession:
    def __init__(self, driver: "FakeDriver"):
        self._driver = driver
        self.queries: list[tuple[str, dict | None]] = []
        self.close_count = 0

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def run(self, query: str, parameters: dict | None = None, **kwargs) -> FakeResult:
        self.queries.append((query, parameters))
        outcome = self._driver.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return FakeResult(outcome)

    async def close(self) -> None:
        self.close_count += 1


class FakeDriver:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.sessions: list[FakeSession] = []
        self.session_kwargs: list[dict] = []
        self.close_count = 0

    def session(self, **kwargs) -> FakeSession:
        session = FakeSession(self)
        self.sessions.append(session)
        self.session_kwargs.append(kwargs)
        return session

    async def close(self) -> None:
        self.close_count += 1


def make_handler(driver: FakeDriver, database: str = "neo4j") -> Neo4jHandler:
    return Neo4jHandler(
        uri="neo4j://localhost:7687",
        username="neo4j",
        password="secret",
        database=database,
        driver=driver,
    )


@pytest.fixture
def service_factory():
    """Build a QueryService over a FakeDriver scripted with the given outcomes."""

    def _make(*outcomes) -> tuple[QueryService, FakeDriver]:
        driver = FakeDriver(*outcomes)
        return QueryService(make_handler(driver)), driver

    return _make


@pytest.fixture
def handler_factory():
    """Build a Neo4jHandler over a FakeDriver scripted with the given outcomes."""

    def _make(*outcomes, database: str = "neo4j") -> tuple[Neo4jHandler, FakeDriver]:
        driver = FakeDriver(*outcomes)
        return make_handler(driver, database=database), driver

    return _make
