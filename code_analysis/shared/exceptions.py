"""
Custom exception hierarchy for the code analysis server.

Everything raised internally inherits from AnalysisError so it can be
caught uniformly at the tool gateway boundary.
"""


class AnalysisError(Exception):
    """Base exception for all code analysis errors."""

    def __init__(self, message: str, component: str = "unknown"):
        self.component = component
        super().__init__(f"[{component}] {message}")


class GraphQueryError(AnalysisError):
    """A graph query returned something the query layer cannot adapt."""

    def __init__(self, message: str):
        super().__init__(message, component="query_service")


class DatabaseConnectionError(AnalysisError):
    """Failed to connect to Neo4j."""

    def __init__(self, message: str):
        super().__init__(message, component="database")


class ConfigurationError(AnalysisError):
    """A required setting is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message, component="config")
