"""Targon deploy API HTTP client."""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
from rich.markup import escape

from openclaw_installer.client.auth import BearerAuth
from openclaw_installer.client.errors import (
    ConfigurationError,
    DeployAPIError,
    DeployConnectionError,
    InstallerError,
)
from openclaw_installer.config.models import DeploymentRequest
from openclaw_installer.config.settings import InstallerSettings
from openclaw_installer.output import messages


@dataclass
class SubmitResponse:
    """Status code and decoded body of a successful submit."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
    text: str = ""


def decode_body(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body, treating anything else as empty."""
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


class TargonClient:
    """Synchronous HTTP client for the Targon deployments API.

    No retries: a deployment POST is not idempotent. httpx times each
    phase on its own, so ``request`` also holds the whole exchange to
    ``settings.timeout`` seconds.
    """

    def __init__(
        self,
        settings: InstallerSettings,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not settings.api_key:
            raise ConfigurationError("A Targon API key is required.")
        self.settings = settings
        self._client = httpx.Client(
            auth=BearerAuth(settings.api_key),
            timeout=httpx.Timeout(settings.timeout, connect=settings.connect_timeout),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )
        self._clock = clock

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> TargonClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        deadline = self._clock() + self.settings.timeout
        try:
            with self._client.stream(method, url, **kwargs) as response:
                return self._read(response, deadline)
        except httpx.TimeoutException as exc:
            raise DeployConnectionError(
                f"Request to {url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise DeployConnectionError(f"Invalid deploy URL {url}: {exc}") from exc
        except httpx.TransportError as exc:
            raise DeployConnectionError(
                f"Network error while calling Targon deploy API: {exc}"
            ) from exc

    def _read(self, response: httpx.Response, deadline: float) -> httpx.Response:
        """Read the raw body, failing once the overall deadline has passed."""
        chunks = []
        for chunk in response.iter_raw():
            chunks.append(chunk)
            if self._clock() > deadline:
                raise httpx.ReadTimeout(
                    f"no complete response within {self.settings.timeout:g}s",
                    request=response.request,
                )
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=b"".join(chunks),
            request=response.request,
        )

    def submit(self, request: DeploymentRequest) -> SubmitResponse:
        """POST the deployment request. Non-2xx raises DeployAPIError."""
        response = self.request(
            "POST",
            self.settings.deploy_url,
            json=request.model_dump(mode="json"),
        )
        if not response.is_success:
            raise DeployAPIError(response.status_code, response.text)
        return SubmitResponse(
            status_code=response.status_code,
            body=decode_body(response),
            text=response.text,
        )

    def get_status(self, deployment_uid: str) -> dict[str, Any]:
        """GET the status of a deployment. Non-2xx raises DeployAPIError."""
        response = self.request("GET", self.settings.status_url(deployment_uid))
        if not response.is_success:
            raise DeployAPIError(response.status_code, response.text)
        return decode_body(response)

    def fetch_status(self, deployment_uid: str) -> dict[str, Any] | None:
        """Like get_status, but failures become a warning and return None.

        The deployment already exists at this point; only the URL lookup
        is lost.
        """
        try:
            return self.get_status(deployment_uid)
        except DeployAPIError as exc:
            messages.warn(
                f"Status API returned HTTP {exc.status_code}; skipping URL print."
            )
        except InstallerError as exc:
            messages.warn(
                f"Could not fetch deployment status from Targon: {escape(str(exc))}"
            )
        return None
