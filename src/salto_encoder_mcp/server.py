"""MCP server entry point for a Salto hotel-card encoder.

Exposes the PMS client as tools and resources via the Model Context
Protocol using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import SaltoClient
from .config import Settings
from .protocol.commands import Message
from .protocol.errors import (
    ERROR_CODES,
    ProtocolError,
    SaltoError,
    lookup_error,
)
from .transport.serial_connection import SerialConnection
from .transport.socket_connection import SocketConnection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "salto-encoder",
    instructions="MCP server for Salto hotel-card encoders (PMS protocol)",
)

# Global connection state
_client: SaltoClient | None = None


def _get_client() -> SaltoClient:
    """Get the active client, raising if not connected."""
    if _client is None or not _client.transport.connected:
        raise RuntimeError(
            "Not connected to the PC interface. Use the 'connect' tool first."
        )
    return _client


def _error_result(error: SaltoError) -> dict[str, Any]:
    result: dict[str, Any] = {"error": str(error), "kind": type(error).__name__}
    if isinstance(error, ProtocolError):
        result["code"] = error.code
    if error.response is not None:
        result["response"] = error.response.to_dict()
    return result


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    host: str | None = None,
    port: int | None = None,
    serial_port: str | None = None,
    skip_lrc: bool | None = None,
) -> dict[str, Any]:
    """Open a connection to the Salto PC interface.

    Uses TCP when a host is given, otherwise the serial port. Missing
    arguments fall back to the SALTO_* environment variables. Sends an
    ENQ to confirm the interface is ready.
    """
    global _client
    if _client is not None and _client.transport.connected:
        return {"connected": True, "message": "Already connected"}

    settings = Settings.from_env()
    host = host or settings.host
    port = port or settings.port
    serial_port = serial_port or settings.serial_port
    if skip_lrc is None:
        skip_lrc = settings.skip_lrc

    if host:
        if port is None:
            return {"error": "A TCP port is required with a host"}
        transport = SocketConnection(host, port, timeout=settings.timeout)
        endpoint = f"{host}:{port}"
    elif serial_port:
        transport = SerialConnection(
            serial_port, baudrate=settings.baudrate, timeout=settings.timeout
        )
        endpoint = serial_port
    else:
        return {"error": "No host or serial port configured"}

    client = SaltoClient(transport, skip_lrc=skip_lrc)
    client.open()
    try:
        ready = client.is_ready()
    except Exception:
        client.close()
        raise
    _client = client

    return {
        "connected": True,
        "endpoint": endpoint,
        "ready": ready,
        "skip_lrc": skip_lrc,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the connection to the PC interface."""
    global _client
    if _client is None:
        return {"disconnected": True}
    _client.close()
    _client = None
    return {"disconnected": True}


@mcp.tool()
def is_ready() -> dict[str, bool]:
    """Send ENQ and report whether the PC interface answered ACK."""
    return {"ready": _get_client().is_ready()}


# ─── MESSAGE TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def send_command(
    command: str,
    fields: list[str] | None = None,
    skip_lrc: bool | None = None,
) -> dict[str, Any]:
    """Send a PMS message and return the encoder's answer.

    Args:
        command: Two-character command code.
        fields: Parameter fields, already rendered as text.
        skip_lrc: Override the connection's LRC skipping for this message.
    """
    client = _get_client()
    try:
        message = Message(command, *(fields or []))
    except ValueError as e:
        return {"error": str(e)}

    previous = client.lrc_skipped
    if skip_lrc is not None:
        client.skip_lrc(skip_lrc)
    try:
        response = client.send_message(message)
    except SaltoError as e:
        logger.warning("Command %s failed: %s", command, e)
        return _error_result(e)
    finally:
        client.skip_lrc(previous)

    return response.to_dict()


@mcp.tool()
def describe_error(code: str) -> dict[str, Any]:
    """Look up the description of a two-character encoder error code."""
    description = lookup_error(code.upper())
    if description is None:
        return {"error": f"Unknown error code '{code}'"}
    return {"code": code.upper(), "description": description}


# ─── RESOURCES ────────────────────────────────────────────────────────

@mcp.resource("salto://error-codes")
def error_codes_resource() -> dict[str, str]:
    """All error codes the encoder can report, with descriptions."""
    return dict(ERROR_CODES)


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    settings = Settings.from_env()
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
