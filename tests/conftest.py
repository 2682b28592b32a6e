"""Shared fixtures: an in-memory transport and a data frame builder."""

import pytest

from salto_encoder_mcp.protocol.framing import ETX, SEPARATOR, STX
from salto_encoder_mcp.transport.base import ByteTransport
from salto_encoder_mcp.utils.lrc import compute_lrc


class FakeTransport(ByteTransport):
    """Serves a scripted byte stream and records everything written."""

    def __init__(self, incoming=b""):
        self.incoming = bytearray(incoming)
        self.written = bytearray()
        self.reads = 0
        self._open = False

    @property
    def connected(self):
        return self._open

    def open(self):
        self._open = True

    def close(self):
        self._open = False

    def feed(self, data):
        self.incoming.extend(data)

    def read_byte(self):
        if not self.incoming:
            raise ConnectionError("Scripted stream exhausted")
        self.reads += 1
        return self.incoming.pop(0)

    def write(self, data):
        self.written.extend(data)
        return len(data)


def build_answer(*fields, lrc=None):
    body = b"".join(bytes([SEPARATOR]) + f.encode("latin-1") for f in fields)
    if lrc is None:
        lrc = compute_lrc(body)
    return bytes([STX]) + body + bytes([ETX, lrc])


@pytest.fixture
def make_answer():
    """Build ``STX SEP f0 SEP f1 ... ETX LRC`` with a correct LRC by default."""
    return build_answer


@pytest.fixture
def fake_transport():
    transport = FakeTransport()
    transport.open()
    return transport
