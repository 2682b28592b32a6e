"""Connection settings read from the environment.

Variables:
    SALTO_HOST, SALTO_PORT: TCP endpoint of the PC interface.
    SALTO_SERIAL_PORT, SALTO_BAUDRATE: serial line, used when no host is set.
    SALTO_TIMEOUT: transport read timeout in seconds (unset blocks forever).
    SALTO_SKIP_LRC: send LRC_SKIP and do not verify answer checksums.
    SALTO_DEBUG: enable debug logging (frame and byte traces).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .transport.serial_connection import DEFAULT_BAUDRATE

_TRUE_VALUES = ("1", "true", "yes")


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").lower() in _TRUE_VALUES


def _optional(environ: Mapping[str, str], name: str, cast):
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from e


@dataclass
class Settings:
    """Where and how to reach the PC interface."""

    host: str | None = None
    port: int | None = None
    serial_port: str | None = None
    baudrate: int = DEFAULT_BAUDRATE
    timeout: float | None = None
    skip_lrc: bool = False
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        baudrate = _optional(env, "SALTO_BAUDRATE", int)
        return cls(
            host=env.get("SALTO_HOST") or None,
            port=_optional(env, "SALTO_PORT", int),
            serial_port=env.get("SALTO_SERIAL_PORT") or None,
            baudrate=baudrate if baudrate is not None else DEFAULT_BAUDRATE,
            timeout=_optional(env, "SALTO_TIMEOUT", float),
            skip_lrc=_flag(env, "SALTO_SKIP_LRC"),
            debug=_flag(env, "SALTO_DEBUG"),
        )
