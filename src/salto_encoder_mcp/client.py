"""Request/response client for the Salto PC interface.

One request is in flight at a time: the frame is written, then the
caller blocks until the decoder reaches a terminal state.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .models.response import Response
from .protocol.commands import Enquiry, Message
from .protocol.decoder import DEFAULT_MAX_FRAME_BYTES, read_response
from .protocol.errors import NakError
from .protocol.framing import FrameElement, encode_frame, format_hex, is_enquiry
from .transport.base import ByteTransport

logger = logging.getLogger(__name__)


class SaltoClient:
    """Sends messages to the encoder and returns validated responses.

    Usage::

        with SaltoClient(SocketConnection(host, port)) as client:
            if client.is_ready():
                response = client.send_message(Message("CN", ...))

    Raises from :meth:`send_request` and :meth:`send_message`:
        NakError: The request was rejected.
        ChecksumError: The answer's LRC is wrong (unless LRC is skipped).
        ProtocolError: The encoder reports an error code.
        DecodeError: The answer does not follow the frame layout.
    """

    def __init__(
        self,
        transport: ByteTransport,
        skip_lrc: bool = False,
        max_frame_bytes: int | None = DEFAULT_MAX_FRAME_BYTES,
    ) -> None:
        self._transport = transport
        self._skip_lrc = skip_lrc
        self._max_frame_bytes = max_frame_bytes

    @property
    def transport(self) -> ByteTransport:
        return self._transport

    @property
    def lrc_skipped(self) -> bool:
        return self._skip_lrc

    def skip_lrc(self, skip: bool = True) -> SaltoClient:
        """Stop sending and checking LRCs. Only call between requests."""
        self._skip_lrc = skip
        return self

    def open(self) -> None:
        self._transport.open()

    def close(self) -> None:
        self._transport.close()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def is_ready(self) -> bool:
        """Send ENQ and report whether the PC interface answered ACK."""
        try:
            return self.send_request(Enquiry().get_frame()).is_ack
        except NakError:
            logger.info("PC interface answered NAK to ENQ")
            return False

    def send_request(self, frame: Sequence[FrameElement]) -> Response:
        """Write a frame and read back the validated response."""
        wait_answer = not is_enquiry(frame)
        data = encode_frame(frame)
        logger.debug("Frame sent: %s", format_hex(data))
        self._transport.write(data)
        return read_response(
            self._transport.read_byte,
            wait_answer=wait_answer,
            skip_lrc=self._skip_lrc,
            max_bytes=self._max_frame_bytes,
        )

    def send_message(self, message: Message) -> Response:
        """Send a message and attach it to the response it produced."""
        message.skip_lrc(self._skip_lrc)
        response = self.send_request(message.get_frame())
        response.request = message
        return response
