"""Longitudinal redundancy check used by the Salto PMS protocol.

The LRC is a single byte: the XOR of every byte in the protected region
(the frame body between STX and ETX, separators included).
"""

from __future__ import annotations

from typing import Iterable


def compute_lrc(data: bytes | bytearray | Iterable[int]) -> int:
    """Compute the XOR checksum of ``data``.

    Args:
        data: Bytes, or any iterable of byte values 0-255.

    Returns:
        The checksum as an int in 0-255. Empty input yields 0x00.
    """
    lrc = 0x00
    for value in data:
        lrc ^= value
    return lrc & 0xFF
