"""code-executor: MCP server for running Python code in managed environments."""

__version__ = "0.3.0"
