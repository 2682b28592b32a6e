"""Serial line connection to the Salto PC interface, via pyserial."""

from __future__ import annotations

import logging

import serial

from .base import ByteTransport

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 9600


class SerialConnection(ByteTransport):
    """Blocking serial link to the encoder's PC interface.

    Args:
        port: Serial device, e.g. ``/dev/ttyUSB0`` or ``COM3``.
        baudrate: Line speed.
        timeout: Optional read timeout in seconds. ``None`` blocks forever.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float | None = None,
    ) -> None:
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial: serial.Serial | None = None

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        if self.connected:
            return
        logger.debug(
            "Opening serial port %s at %s baud (timeout=%s)",
            self.port, self.baudrate, self.timeout,
        )
        try:
            self._serial = serial.Serial(
                self.port, baudrate=self.baudrate, timeout=self.timeout
            )
        except serial.SerialException as e:
            raise ConnectionError(f"Could not open {self.port}: {e}") from e

        flushed = self._serial.in_waiting
        self._serial.reset_input_buffer()
        if flushed > 0:
            logger.debug("Flushed %s bytes from input buffer", flushed)
        logger.info("Connected to %s", self.port)

    def close(self) -> None:
        if self._serial is None:
            return
        try:
            self._serial.close()
        except serial.SerialException as e:
            logger.warning("Error closing serial port: %s", e)
        finally:
            self._serial = None
            logger.info("Disconnected from %s", self.port)

    def read_byte(self) -> int:
        if not self.connected:
            raise ConnectionError("Not connected")
        data = self._serial.read(1)
        if not data:
            # pyserial returns empty bytes only when the read timeout expires
            raise TimeoutError(f"No data from {self.port} within {self.timeout}s")
        return data[0]

    def write(self, data: bytes) -> int:
        if not self.connected:
            raise ConnectionError("Not connected")
        written = self._serial.write(data)
        self._serial.flush()
        return written if written is not None else len(data)
