"""Authentication for the Targon deploy API."""

from __future__ import annotations

from collections.abc import Generator

import httpx


class BearerAuth(httpx.Auth):
    """Authenticate with a Targon API key (``Authorization: Bearer`` header)."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.api_key}"
        yield request
