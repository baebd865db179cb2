"""Gateway token generation."""

from __future__ import annotations

import hashlib
import secrets
import time
from pathlib import Path

from openclaw_installer.output import messages

TOKEN_BYTES = 32
URANDOM_PATH = Path("/dev/urandom")


def _from_secrets() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def _from_urandom() -> str:
    with URANDOM_PATH.open("rb") as f:
        data = f.read(TOKEN_BYTES)
    if len(data) != TOKEN_BYTES:
        raise OSError(f"Short read from {URANDOM_PATH}")
    return data.hex()


def _from_clock() -> str:
    return hashlib.sha256(str(time.time_ns()).encode()).hexdigest()


def generate_token() -> str:
    """Return a 64 character hex gateway token.

    Tries the ``secrets`` CSPRNG, then ``/dev/urandom``. Only when both are
    unavailable does it fall back to hashing the clock, which is predictable
    and therefore warned about.
    """
    try:
        return _from_secrets()
    except NotImplementedError:
        pass
    try:
        return _from_urandom()
    except OSError:
        pass
    messages.warn(
        "No secure random source available; gateway token derived from the"
        " clock. Replace it with a strong secret."
    )
    return _from_clock()


def token_sources() -> dict[str, bool]:
    """Report which random sources are usable, for the preflight check."""
    try:
        secrets.token_bytes(1)
        csprng = True
    except NotImplementedError:
        csprng = False
    return {
        "secrets": csprng,
        "urandom": URANDOM_PATH.exists(),
    }
