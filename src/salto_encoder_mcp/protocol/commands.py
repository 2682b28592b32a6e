"""Messages sent from the PMS to the encoder's PC interface.

A message is a command code (the first field) followed by its
parameters. Parameters are rendered to text: dates as ``hhmmDDMMYY``,
integers in decimal.
"""

from __future__ import annotations

from datetime import datetime
from typing import Union

from ..models.dates import format_date
from .framing import ENQ, FrameElement, RawByte, build_data_frame

FieldValue = Union[str, int, datetime]


def render_field(value: FieldValue) -> str:
    """Render a parameter to its wire text."""
    if isinstance(value, datetime):
        return format_date(value)
    if isinstance(value, bool):
        raise TypeError("Boolean fields have no wire representation")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported field type: {type(value).__name__}")


class Message:
    """A data frame request.

    Usage::

        message = Message("CN", "1", "101", datetime(2024, 5, 1, 12, 0))
        frame = message.get_frame()
    """

    def __init__(self, command: str, *fields: FieldValue, skip_lrc: bool = False):
        self._check_command(command)
        self.command = command
        self.fields = [render_field(f) for f in fields]
        self._skip_lrc = skip_lrc

    def _check_command(self, command: str) -> None:
        if len(command) != 2:
            raise ValueError(f"Command code must be 2 characters, got {command!r}")

    @property
    def lrc_skipped(self) -> bool:
        return self._skip_lrc

    def skip_lrc(self, skip: bool = True) -> Message:
        """Send LRC_SKIP instead of the computed checksum."""
        self._skip_lrc = skip
        return self

    def get_frame(self) -> list[FrameElement]:
        return build_data_frame([self.command, *self.fields], self._skip_lrc)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.command!r}, fields={self.fields!r})"


class Enquiry(Message):
    """The ENQ handshake: is the PC interface ready for a new message?"""

    def __init__(self) -> None:
        super().__init__("ENQ")

    def _check_command(self, command: str) -> None:
        # a bare control byte, not a two-character data command
        pass

    def get_frame(self) -> list[FrameElement]:
        return [RawByte(ENQ)]

    def __repr__(self) -> str:
        return "Enquiry()"
