"""Small helpers shared by the protocol layer."""

from .lrc import compute_lrc
