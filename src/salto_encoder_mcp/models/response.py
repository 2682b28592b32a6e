"""Decoded answer from the encoder.

A response is either a control answer (ACK or NAK, no body) or a data
frame made of ordered fields plus the received LRC byte. The checksum is
not verified on construction; call :meth:`Response.check` for that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..protocol.errors import lookup_error
from ..protocol.framing import SEPARATOR
from ..utils.lrc import compute_lrc


@dataclass(frozen=True)
class Field:
    """One separator-delimited segment of a frame body."""

    data: bytes

    @property
    def text(self) -> str:
        return self.data.decode("latin-1")

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Field({self.text!r})"


@dataclass
class Response:
    """A decoded encoder answer."""

    fields: list[Field] = field(default_factory=list)
    checksum: int | None = None
    is_ack: bool = False
    is_nak: bool = False
    _request: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.is_ack and self.is_nak:
            raise ValueError("A response cannot be both ACK and NAK")
        if (self.is_ack or self.is_nak) and self.fields:
            raise ValueError("ACK/NAK responses do not carry fields")

    @classmethod
    def ack(cls) -> Response:
        return cls(is_ack=True)

    @classmethod
    def nak(cls) -> Response:
        return cls(is_nak=True)

    @property
    def is_control(self) -> bool:
        return self.is_ack or self.is_nak

    # ─── REQUEST ASSOCIATION ─────────────────────────────────────────

    @property
    def request(self) -> Any:
        """The message that produced this response, if attached."""
        return self._request

    @request.setter
    def request(self, message: Any) -> None:
        if self._request is not None:
            raise ValueError("Request is already attached to this response")
        self._request = message

    # ─── FIELDS ──────────────────────────────────────────────────────

    def get_field(self, index: int) -> Field | None:
        """Return the field at ``index``, or None past the end."""
        if 0 <= index < len(self.fields):
            return self.fields[index]
        return None

    def texts(self) -> list[str]:
        return [f.text for f in self.fields]

    # ─── CHECKSUM ────────────────────────────────────────────────────

    def body_bytes(self) -> bytes:
        """Rebuild the protected body: ``SEP field0 SEP field1 ...``."""
        return b"".join(bytes([SEPARATOR]) + f.data for f in self.fields)

    def compute_lrc(self) -> int:
        return compute_lrc(self.body_bytes())

    def check(self, skip_lrc: bool = False) -> bool:
        """Verify the received LRC against the body.

        Control responses have no checksum and always pass, as does any
        response when ``skip_lrc`` is set.
        """
        if skip_lrc or self.is_control:
            return True
        return self.checksum == self.compute_lrc()

    # ─── ERROR CLASSIFICATION ────────────────────────────────────────

    @property
    def error_code(self) -> str | None:
        """The two-character error code in the first field, if any."""
        first = self.get_field(0)
        if first is None or len(first) < 2:
            return None
        code = first.data[:2].decode("latin-1")
        if lookup_error(code) is None:
            return None
        return code

    def is_error(self) -> bool:
        return self.error_code is not None

    def error_description(self) -> str | None:
        code = self.error_code
        return lookup_error(code) if code else None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "ack": self.is_ack,
            "nak": self.is_nak,
            "fields": self.texts(),
            "checksum": (
                f"0x{self.checksum:02X}" if self.checksum is not None else None
            ),
        }
        if self.is_error():
            result["error_code"] = self.error_code
            result["error_description"] = self.error_description()
        return result
