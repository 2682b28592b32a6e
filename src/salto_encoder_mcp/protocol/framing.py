"""Frame elements and the frame encoder for the Salto PMS protocol.

Data frame layout::

    +-----+-----+--------+-----+--------+-----+-----+--------+-----+-----+
    | STX | SEP | field0 | SEP | field1 | ... | SEP | fieldN | ETX | LRC |
    | 02  | B3  |  text  | B3  |  text  |     | B3  |  text  | 03  | 1 B |
    +-----+-----+--------+-----+--------+-----+-----+--------+-----+-----+

- LRC: XOR of every byte between STX and ETX (both excluded)
- LRC_SKIP (0x0D) may be sent instead of a real LRC to ask the peer to
  skip the check for that exchange

Handshake and control messages are single bytes: ENQ, ACK and NAK.

A frame is assembled from an ordered list of elements, each either a
:class:`RawByte` or a :class:`TextSegment`. The encoder never inserts
framing bytes on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from ..utils.lrc import compute_lrc

STX = 0x02  # start of a frame body
ETX = 0x03  # end of a frame body
ENQ = 0x05  # is the PC interface ready for a new message?
ACK = 0x06
NAK = 0x15
LRC_SKIP = 0x0D
SEPARATOR = 0xB3

DATE_FORMAT = "hhmmDDMMYY"


@dataclass(frozen=True)
class RawByte:
    """A single byte emitted verbatim."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"Raw byte must be 0-255, got {self.value}")

    def to_bytes(self) -> bytes:
        return bytes([self.value])

    def __repr__(self) -> str:
        return f"RawByte(0x{self.value:02X})"


@dataclass(frozen=True)
class TextSegment:
    """Text emitted as one byte per character (the character's ordinal)."""

    text: str

    def to_bytes(self) -> bytes:
        try:
            return self.text.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ValueError(
                f"Text segment {self.text!r} contains characters above 0xFF"
            ) from e


FrameElement = Union[RawByte, TextSegment]


def encode_frame(elements: Iterable[FrameElement]) -> bytes:
    """Flatten an ordered list of frame elements into wire bytes.

    Args:
        elements: Raw bytes and text segments, in wire order.

    Returns:
        The concatenated bytes, ready to write to the transport.
    """
    return b"".join(element.to_bytes() for element in elements)


def build_body(fields: Sequence[str]) -> list[FrameElement]:
    """Build the protected body: a separator before every field."""
    body: list[FrameElement] = []
    for field in fields:
        body.append(RawByte(SEPARATOR))
        body.append(TextSegment(field))
    return body


def build_data_frame(
    fields: Sequence[str], skip_lrc: bool = False
) -> list[FrameElement]:
    """Build the element list for a complete data frame.

    Args:
        fields: Field texts; the first one is the command code.
        skip_lrc: Send ``LRC_SKIP`` instead of the computed checksum.
    """
    body = build_body(fields)
    if skip_lrc:
        lrc = LRC_SKIP
    else:
        lrc = compute_lrc(encode_frame(body))
    return [RawByte(STX), *body, RawByte(ETX), RawByte(lrc)]


def is_enquiry(elements: Sequence[FrameElement]) -> bool:
    """Return True if the frame is a bare ENQ handshake."""
    return len(elements) == 1 and elements[0] == RawByte(ENQ)


def format_hex(data: bytes | Iterable[int]) -> str:
    """Render bytes as ``0x02 0xb3 ...`` for logging."""
    return " ".join(f"0x{b:02x}" for b in data)
