"""Error codes reported by the encoder and the exceptions raised for them.

When the PC interface processes a request but cannot carry it out, the
first field of its answer is a two-character error code instead of the
echoed command.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from ..models.response import Response


ERROR_CODES: Mapping[str, str] = MappingProxyType({
    "ES": (
        "Syntax error. The received message from the PMS is not correct "
        "(unknown command, nonsense parameters, prohibited characters, etc.)"
    ),
    "NC": (
        "No communication. The specified encoder does not answer (encoder is "
        "switched off, disconnected from the PC interface, etc.)"
    ),
    "NF": (
        "No files. Database file in the PC interface is damaged, corrupted "
        "or not found."
    ),
    "OV": (
        "Overflow. The encoder is still busy executing a previous task and "
        "cannot accept a new one."
    ),
    "EP": "Card error. Card not found or wrongly inserted in the encoder.",
    "EF": (
        "Format error. The card has been encoded by another system or may be "
        "damaged."
    ),
    "TD": (
        "Unknown room. This error occurs when trying to encode a card for a "
        "non-existing room."
    ),
    "ED": (
        "Timeout error. The encoder has been waiting too long for a card to "
        "be inserted. The operation is cancelled."
    ),
    "EA": (
        "This error occurs when the PC interface cannot execute the ‘CC’ "
        "command (encode copies of a guest card) because the room is checked "
        "out."
    ),
    "OS": "This error occurs when the requested room is out of service.",
    "EO": "The requested guest card is being encoded by another station.",
    "EG": (
        "General error. When the resulting error is none of the above "
        "described, the PC interface returns an ‘EG’ followed by an "
        "encoder number (or phone number depending on the original request) "
        "and an error description."
    ),
})


def lookup_error(code: str) -> str | None:
    """Return the description for an error code, or None if unknown."""
    return ERROR_CODES.get(code)


def error_codes() -> list[str]:
    """All known two-character error codes."""
    return list(ERROR_CODES)


class SaltoError(Exception):
    """Base class for failures reported while exchanging a message.

    The decoded response, when there is one, is kept on ``response`` for
    diagnostics.
    """

    def __init__(self, message: str, response: Response | None = None):
        self.response = response
        super().__init__(message)


class NakError(SaltoError):
    """The encoder answered NAK; the request will not be processed."""

    def __init__(self, response: Response):
        super().__init__("Request rejected by the encoder (NAK)", response)


class ChecksumError(SaltoError):
    """The received LRC does not match the frame body."""

    def __init__(self, response: Response):
        self.expected = response.compute_lrc()
        super().__init__(
            f"Wrong checksum: received 0x{response.checksum:02X}, "
            f"computed 0x{self.expected:02X}",
            response,
        )


class ProtocolError(SaltoError):
    """The encoder processed the request but reports an error code."""

    def __init__(self, code: str, description: str, response: Response):
        self.code = code
        self.description = description
        super().__init__(f"{code}: {description}", response)


class DecodeError(SaltoError):
    """The byte stream does not follow the frame layout."""

    def __init__(self, message: str, consumed: int = 0):
        self.consumed = consumed
        super().__init__(message)
