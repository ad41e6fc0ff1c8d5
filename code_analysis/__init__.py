"""Read-only code analytics over a Neo4j code-structure graph, served as MCP tools."""

__version__ = "0.1.0"
