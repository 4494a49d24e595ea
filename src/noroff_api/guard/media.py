"""
noroff_api.guard.media

Media URL validation collaborator.

Responsibilities:
- Define the validator protocol the guard depends on.
- Provide the production implementation that probes URLs over HTTP (httpx).
"""

from __future__ import annotations

from typing import Protocol

import httpx

from noroff_api.result import Failure, Result, Success

MAX_URL_LENGTH = 300


class MediaValidator(Protocol):
    async def validate(self, url: str) -> Result[None, str]: ...


class HttpMediaValidator:
    """
    Accepts a URL when it answers 2xx with an `image/*` content type.

    Transport errors and timeouts are reported as failures, never raised.
    """

    def __init__(self, *, http: httpx.AsyncClient, timeout: float) -> None:
        self._http = http
        self._timeout = timeout

    async def validate(self, url: str) -> Result[None, str]:
        if len(url) > MAX_URL_LENGTH:
            return Failure(f"Image URL cannot be greater than {MAX_URL_LENGTH} characters")
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            return Failure(f"Image URL is not valid: {e}")
        if parsed.scheme not in ("http", "https") or not parsed.host:
            return Failure("Image URL must be an absolute http(s) URL")

        try:
            # Stream so the body is never downloaded; only status and headers matter.
            async with self._http.stream(
                "GET", parsed, timeout=self._timeout, follow_redirects=True
            ) as response:
                if not response.is_success:
                    return Failure(f"Image is not accessible (HTTP {response.status_code})")
                content_type = response.headers.get("content-type", "")
                if not content_type.lower().startswith("image/"):
                    return Failure("Image URL does not point to an image")
        except httpx.TimeoutException:
            return Failure("Image request timed out")
        except httpx.HTTPError as e:
            return Failure(f"Image is not accessible: {e}")
        return Success(None)


# --- Module Notes -----------------------------------------------------------
# One `httpx.AsyncClient` is shared by the whole process (created in `api.app`);
# the guard itself never opens connections.
