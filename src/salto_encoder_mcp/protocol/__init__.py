"""Protocol layer: frame encoding, LRC, response decoding, and error codes."""

from .framing import encode_frame, build_data_frame, RawByte, TextSegment
from .errors import (
    SaltoError,
    NakError,
    ChecksumError,
    ProtocolError,
    DecodeError,
    lookup_error,
)
from .commands import Message, Enquiry
