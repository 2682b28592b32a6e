"""Stream transports to the encoder's PC interface."""

from .base import ByteTransport
from .socket_connection import SocketConnection
from .serial_connection import SerialConnection

__all__ = [
    "ByteTransport",
    "SocketConnection",
    "SerialConnection",
]
