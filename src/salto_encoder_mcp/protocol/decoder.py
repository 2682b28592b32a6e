"""Byte-at-a-time response decoder.

The encoder answers either with a single control byte (ACK or NAK) or
with a data frame ``STX SEP f0 SEP f1 ... ETX LRC``. The decoder reads
one byte at a time from a blocking source and walks these states::

    AWAITING_FRAME_START --STX--> IN_BODY_PRE_FIELD --SEP--> IN_FIELD
    IN_FIELD --SEP--> IN_FIELD (next index)
    IN_FIELD / IN_BODY_PRE_FIELD --ETX--> AFTER_BODY --any--> DONE

NAK terminates in every state, the checksum slot included. In AFTER_BODY
any other byte is taken verbatim as the checksum. ACK depends on the
entry mode chosen at construction: after a bare ENQ it terminates the
exchange, otherwise it is discarded while waiting for the frame to start.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable

from ..models.response import Field, Response
from .errors import ChecksumError, DecodeError, NakError, ProtocolError
from .framing import ACK, ETX, NAK, SEPARATOR, STX

logger = logging.getLogger(__name__)

DEFAULT_MAX_FRAME_BYTES = 4096

ByteSource = Callable[[], int]


class DecodeState(Enum):
    AWAITING_FRAME_START = auto()
    IN_BODY_PRE_FIELD = auto()
    IN_FIELD = auto()
    AFTER_BODY = auto()
    DONE = auto()


class AckMode(Enum):
    """How a stray ACK byte is treated."""

    TERMINATES = auto()  # answer to a bare ENQ
    DISCARDED = auto()  # a data frame is expected


class ResponseDecoder:
    """Decode one response from a blocking one-byte-at-a-time source.

    Usage::

        decoder = ResponseDecoder(transport.read_byte, wait_answer=True)
        response = decoder.decode()

    Args:
        read_byte: Callable returning the next byte value, blocking.
        wait_answer: False after a bare ENQ, where ACK is the whole answer.
        max_bytes: Give up with :class:`DecodeError` after this many bytes
            without reaching a terminal state. ``None`` disables the bound.
    """

    def __init__(
        self,
        read_byte: ByteSource,
        wait_answer: bool = True,
        max_bytes: int | None = DEFAULT_MAX_FRAME_BYTES,
    ) -> None:
        self._read_byte = read_byte
        self.ack_mode = AckMode.DISCARDED if wait_answer else AckMode.TERMINATES
        self._max_bytes = max_bytes
        self.state = DecodeState.AWAITING_FRAME_START
        self._fields: list[bytearray] = []
        self._consumed = 0

    @property
    def consumed(self) -> int:
        """Number of bytes read so far."""
        return self._consumed

    def decode(self) -> Response:
        if self.state is not DecodeState.AWAITING_FRAME_START:
            raise RuntimeError("A decoder instance decodes a single response")

        while True:
            byte = self._next_byte()
            response = self._feed(byte)
            if response is not None:
                self.state = DecodeState.DONE
                return response

    def _next_byte(self) -> int:
        if self._max_bytes is not None and self._consumed >= self._max_bytes:
            raise DecodeError(
                f"No complete response after {self._consumed} bytes "
                f"(state {self.state.name})",
                self._consumed,
            )
        byte = self._read_byte()
        self._consumed += 1
        logger.debug("Byte read: 0x%02x", byte)
        return byte

    def _feed(self, byte: int) -> Response | None:
        if byte == NAK:
            logger.debug("NAK received")
            return Response.nak()

        if self.state is DecodeState.AFTER_BODY:
            return Response(
                fields=[Field(bytes(f)) for f in self._fields],
                checksum=byte,
            )

        if byte == ACK:
            return self._on_ack()

        if self.state is DecodeState.AWAITING_FRAME_START:
            if byte == STX:
                self.state = DecodeState.IN_BODY_PRE_FIELD
            else:
                logger.debug("Discarding 0x%02x while waiting for STX", byte)
            return None

        if byte == SEPARATOR:
            # the separator right after STX opens field 0
            self._fields.append(bytearray())
            self.state = DecodeState.IN_FIELD
        elif byte == ETX:
            self.state = DecodeState.AFTER_BODY
        elif self.state is DecodeState.IN_BODY_PRE_FIELD:
            raise DecodeError(
                f"Unexpected byte 0x{byte:02x} between STX and the first "
                f"separator",
                self._consumed,
            )
        else:
            self._fields[-1].append(byte)
        return None

    def _on_ack(self) -> Response | None:
        if self.ack_mode is AckMode.TERMINATES:
            logger.debug("ACK received")
            return Response.ack()
        if self.state is DecodeState.AWAITING_FRAME_START:
            logger.debug("ACK received, waiting for the answer frame")
            return None
        raise DecodeError(
            f"Unexpected ACK inside a frame body (state {self.state.name})",
            self._consumed,
        )


def validate_response(response: Response, skip_lrc: bool = False) -> Response:
    """Raise for NAK, bad checksum or error code, in that order.

    Returns:
        The response unchanged when it is a success.
    """
    if response.is_nak:
        raise NakError(response)
    if not response.check(skip_lrc):
        raise ChecksumError(response)
    code = response.error_code
    if code is not None:
        raise ProtocolError(code, response.error_description(), response)
    return response


def read_response(
    read_byte: ByteSource,
    wait_answer: bool = True,
    skip_lrc: bool = False,
    max_bytes: int | None = DEFAULT_MAX_FRAME_BYTES,
) -> Response:
    """Decode one response and validate it."""
    response = ResponseDecoder(read_byte, wait_answer, max_bytes).decode()
    return validate_response(response, skip_lrc)
