"""
Query Service: read-only analytics over the code-structure graph.

Each public method runs one fixed Cypher query in its own session and
adapts the rows into the records in ``models``.  Store errors propagate
to the caller; only ``verify_connection`` downgrades failure to a bool.
"""

import logging

from code_analysis.analysis.models import CodeSummary, ComplexityMetric, ComponentDetail
from code_analysis.analysis.queries import (
    CODE_SUMMARY_QUERY,
    COMPLEXITY_LIMIT,
    COMPLEXITY_METRICS_QUERY,
    COMPONENT_DETAILS_QUERY,
    LIVENESS_QUERY,
)
from code_analysis.shared.database import Neo4jHandler
from code_analysis.shared.exceptions import GraphQueryError

logger = logging.getLogger("code_analysis.query_service")


class QueryService:
    """Three fixed analytical questions plus a liveness check.

    The service owns its ``Neo4jHandler``; closing the service closes the
    driver.  It can also be used as an async context manager:

        async with QueryService(handler) as service:
            summary = await service.get_code_summary()
    """

    def __init__(self, handler: Neo4jHandler):
        self._handler = handler

    async def __aenter__(self) -> "QueryService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ─── Lifecycle ──────────────────────────────────────────

    async def verify_connection(self) -> bool:
        """Run a trivial query; True if it succeeds, False on any failure."""
        try:
            async with self._handler.session() as session:
                result = await session.run(LIVENESS_QUERY)
                await result.consume()
            return True
        except Exception as exc:
            logger.error("Neo4j connection error: %s", exc)
            return False

    async def close(self) -> None:
        await self._handler.close()

    # ─── Queries ────────────────────────────────────────────

    async def get_code_summary(self) -> CodeSummary:
        """Distinct counts of components, files, classes and methods."""
        row = await self._handler.run_single(CODE_SUMMARY_QUERY)
        if row is None:
            raise GraphQueryError("Code summary query returned no rows")
        return CodeSummary.model_validate(row)

    async def get_component_details(self) -> list[ComponentDetail]:
        """One entry per Component, including components with no files."""
        rows = await self._handler.run(COMPONENT_DETAILS_QUERY)
        return [ComponentDetail.model_validate(row["component"]) for row in rows]

    async def get_complexity_metrics(self) -> list[ComplexityMetric]:
        """Top methods by complexity, highest first; non-positive scores excluded."""
        rows = await self._handler.run(COMPLEXITY_METRICS_QUERY, {"limit": COMPLEXITY_LIMIT})
        ranked = sorted(
            (row for row in rows if (row.get("complexity") or 0) > 0),
            key=lambda row: row["complexity"],
            reverse=True,
        )
        return [ComplexityMetric.model_validate(row) for row in ranked[:COMPLEXITY_LIMIT]]
