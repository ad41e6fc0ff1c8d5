"""
Base configuration for the code analysis server.

Uses Pydantic Settings for environment-based configuration.
Concrete servers extend BaseGraphSettings with their own env prefix.
"""

from pydantic_settings import BaseSettings


class BaseGraphSettings(BaseSettings):
    """Settings shared by anything that talks to the code graph."""

    server_name: str = "base"

    # Neo4j connection
    uri: str = "neo4j://localhost:7687"
    user: str = "neo4j"
    password: str = ""
    database: str = "neo4j"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
