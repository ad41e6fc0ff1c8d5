"""
Code Analysis MCP Server

Exposes three read-only code analytics tools over the stdio transport:

  - get_code_summary: counts of components, files, classes and methods
  - get_component_details: per-component cohesion, coupling and content counts
  - get_complexity_metrics: the ten most complex methods

Run as:  python -m code_analysis.analysis.server        (stdio transport)
    or:  code-analysis-server
"""

import asyncio
import contextlib
import logging
import os
import signal
import sys

from pydantic import ValidationError

from code_analysis.analysis.config import AnalysisServerSettings
from code_analysis.analysis.gateway import ToolGateway
from code_analysis.analysis.query_service import QueryService
from code_analysis.shared.database import Neo4jHandler
from code_analysis.shared.exceptions import ConfigurationError, DatabaseConnectionError
from code_analysis.shared.logging import setup_logging

logger = logging.getLogger("code_analysis.server")

# Seconds to let the stdio transport unwind after cancellation before exiting.
TRANSPORT_RELEASE_TIMEOUT = 1.0


def build_gateway(settings: AnalysisServerSettings) -> ToolGateway:
    """Wire handler → Query Service → Tool Gateway.  The gateway owns the rest."""
    handler = Neo4jHandler.from_settings(settings)
    return ToolGateway(
        QueryService(handler),
        name=settings.server_name,
        version=settings.server_version,
    )


async def _shutdown_and_exit(gateway: ToolGateway, serving: asyncio.Task) -> None:
    """Release connection then transport, and end the process with status 0.

    The stdio reader blocks in a worker thread that cancellation cannot
    interrupt, so the transport gets TRANSPORT_RELEASE_TIMEOUT seconds to
    unwind and the process then exits without waiting for that thread.
    """
    await gateway.shutdown(serving)
    await asyncio.wait({serving}, timeout=TRANSPORT_RELEASE_TIMEOUT)
    logger.info("Shutdown complete")
    for handler in logging.getLogger().handlers:
        handler.flush()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(0)


def _install_interrupt_handler(gateway: ToolGateway, serving: asyncio.Task) -> None:
    loop = asyncio.get_running_loop()

    def _on_interrupt() -> None:
        logger.info("Interrupt received")
        loop.create_task(_shutdown_and_exit(gateway, serving))

    # Not available on every platform (e.g. Windows event loops).
    with contextlib.suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGINT, _on_interrupt)


async def serve(gateway: ToolGateway) -> int:
    """Verify connectivity, then serve until the transport ends or SIGINT arrives.

    Returns:
        Process exit code (0 on a clean or interrupted exit).

    Raises:
        DatabaseConnectionError: If the graph is unreachable at startup.
    """
    try:
        await gateway.start()
        serving = asyncio.create_task(gateway.run())
        _install_interrupt_handler(gateway, serving)
        try:
            await serving
        except asyncio.CancelledError:
            if not serving.cancelled():
                raise
    finally:
        await gateway.shutdown()
    return 0


def main() -> None:
    try:
        settings = AnalysisServerSettings()
        setup_logging("code_analysis", level=settings.log_level)
        gateway = build_gateway(settings)
    except (ConfigurationError, ValidationError) as exc:
        logger.critical("Invalid configuration: %s", exc)
        sys.exit(1)

    try:
        exit_code = asyncio.run(serve(gateway))
    except DatabaseConnectionError as exc:
        logger.critical("Startup aborted: %s", exc)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
