"""Client and MCP server for Salto hotel-card encoders (PMS protocol)."""

__version__ = "0.1.0"
