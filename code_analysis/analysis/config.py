"""Code analysis MCP server configuration."""

from code_analysis.shared.config import BaseGraphSettings


class AnalysisServerSettings(BaseGraphSettings):
    """Settings for the code analysis server, read from GRAPH_* variables."""

    server_name: str = "code-analysis-server"
    server_version: str = "0.1.0"

    class Config(BaseGraphSettings.Config):
        env_prefix = "GRAPH_"
