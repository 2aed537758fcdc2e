"""Discord approval bridge: human-in-the-loop tools served over MCP."""

__version__ = "1.2.0"
