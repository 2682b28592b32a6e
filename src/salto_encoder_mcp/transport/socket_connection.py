"""TCP connection to the Salto PC interface."""

from __future__ import annotations

import logging
import socket

from .base import ByteTransport

logger = logging.getLogger(__name__)


class SocketConnection(ByteTransport):
    """Blocking TCP stream to the encoder's PC interface.

    Usage::

        conn = SocketConnection("192.168.1.20", 8090)
        conn.open()
        conn.write(frame_bytes)
        byte = conn.read_byte()
        conn.close()

    Args:
        host: PC interface host name or address.
        port: TCP port.
        timeout: Optional socket timeout in seconds. ``None`` blocks forever.
    """

    def __init__(self, host: str, port: int, timeout: float | None = None) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self._sock: socket.socket | None = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def open(self) -> None:
        if self._sock is not None:
            return
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            raise ConnectionError(
                f"Could not connect to {self.host}:{self.port}: {e}"
            ) from e
        sock.settimeout(self.timeout)
        self._sock = sock
        logger.info("Connected to %s:%s", self.host, self.port)

    def close(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing socket: %s", e)
        finally:
            self._sock = None
            logger.info("Disconnected from %s:%s", self.host, self.port)

    def read_byte(self) -> int:
        if self._sock is None:
            raise ConnectionError("Not connected")
        try:
            data = self._sock.recv(1)
        except socket.timeout as e:
            raise TimeoutError(
                f"No data from {self.host}:{self.port} within {self.timeout}s"
            ) from e
        if not data:
            raise ConnectionError("Connection closed by peer")
        return data[0]

    def write(self, data: bytes) -> int:
        if self._sock is None:
            raise ConnectionError("Not connected")
        self._sock.sendall(data)
        return len(data)
