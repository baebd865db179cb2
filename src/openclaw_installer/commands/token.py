"""Token command: print a fresh gateway token."""

from __future__ import annotations

from openclaw_installer.client.errors import error_handler
from openclaw_installer.utils.tokens import generate_token


@error_handler
def token() -> None:
    """Generate a random 64-character gateway token."""
    print(generate_token())
