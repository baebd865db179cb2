"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
import json
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class InstallerError(Exception):
    """Base exception for the installer. Every fatal path exits with 1."""

    exit_code: int = 1


class ConfigurationError(InstallerError):
    """The environment or endpoint configuration is unusable."""


class ValidationError(InstallerError):
    """User input that cannot be accepted and will not be re-prompted."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or "Validation error")


class DeployConnectionError(InstallerError):
    """Network-level failure talking to the deploy API."""


class DeployAPIError(InstallerError):
    """The deploy API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Targon API returned HTTP {status_code}:\n{format_body(body)}")


class DeploymentFailedError(InstallerError):
    """The deploy API reported an error inside the response body."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Deployment error from Targon: {detail}")


class DeploymentCancelled(InstallerError):
    """The user declined the final confirmation."""

    def __init__(self, message: str = "Deployment cancelled by user.") -> None:
        super().__init__(message)


def format_body(body: str) -> str:
    """Pretty-print *body* if it is JSON, otherwise return it unchanged."""
    try:
        return json.dumps(json.loads(body), indent=2)
    except (json.JSONDecodeError, TypeError):
        return body


def error_handler(func: F) -> F:
    """Decorator that catches InstallerError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except InstallerError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
