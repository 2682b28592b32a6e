"""Abstract byte-stream transport."""

from abc import ABC, abstractmethod


class ByteTransport(ABC):
    """Minimal blocking byte stream the client talks through.

    Subclasses provide the connection-specific I/O. Reads are one byte at
    a time because the response decoder is driven byte by byte.
    """

    @property
    @abstractmethod
    def connected(self) -> bool:
        pass

    @abstractmethod
    def open(self) -> None:
        """Open the connection.

        Raises:
            ConnectionError: If the peer cannot be reached.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Closing twice is a no-op."""
        pass

    @abstractmethod
    def read_byte(self) -> int:
        """Block until one byte is available and return its value.

        Raises:
            ConnectionError: If not connected or the peer closed.
            TimeoutError: If a transport-level timeout is configured and expires.
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write all of ``data`` and return the number of bytes written.

        Raises:
            ConnectionError: If not connected.
        """
        pass

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
