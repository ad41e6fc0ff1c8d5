"""
Structured logging with correlation IDs for tool calls.

Logs always go to stderr: stdout carries the MCP stdio transport, so
anything written there would corrupt the protocol stream.
"""

import logging
import sys
import uuid


def setup_logging(name: str, level: str = "INFO") -> logging.Logger:
    """
    Configure process logging and return a named logger.

    Args:
        name: Logger name (e.g. 'code_analysis.server').
        level: Log level string (e.g. 'INFO', 'DEBUG').

    Returns:
        Configured logger instance.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
        stream=sys.stderr,
    )
    return logging.getLogger(name)


def generate_correlation_id() -> str:
    """Generate a short correlation ID for tracing a single tool call."""
    return uuid.uuid4().hex[:12]
