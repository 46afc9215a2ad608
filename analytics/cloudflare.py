"""Shared async HTTP plumbing for the Cloudflare REST API."""

from typing import Any, Optional

import httpx

from .config import CloudflareConfig
from .exceptions import (
    CloudflareAPIError,
    CloudflareAuthenticationError,
    CloudflareNotFoundError,
    CloudflarePermissionError,
    CloudflareRateLimitError,
)
from .logging_config import get_logger

logger = get_logger("cloudflare")


class CloudflareClient:
    """
    Thin async wrapper around the Cloudflare v4 REST API.

    Every call is a single request. Failures are converted into the
    Cloudflare exception hierarchy and propagated; nothing is retried.
    """

    def __init__(
        self,
        config: CloudflareConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config.validate_credentials()
        self.config = config
        self.client = httpx.AsyncClient(
            base_url=config.account_url,
            timeout=config.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    def _get_auth_header(self) -> dict[str, str]:
        """Generate auth header on-demand to avoid storing credentials on the client."""
        return {"Authorization": f"Bearer {self.config.api_token}"}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """Send one request and return the unwrapped ``result`` payload."""
        headers = kwargs.pop("headers", {})
        headers.update(self._get_auth_header())

        try:
            response = await self.client.request(method, path, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 401:
                raise CloudflareAuthenticationError(f"Authentication failed for {path}") from e
            elif status == 403:
                raise CloudflarePermissionError(f"Permission denied for {path}") from e
            elif status == 404:
                raise CloudflareNotFoundError(f"Resource not found: {path}") from e
            elif status == 429:
                retry_after = e.response.headers.get("Retry-After")
                raise CloudflareRateLimitError(
                    f"Rate limited on {method} {path}",
                    retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                ) from e
            raise CloudflareAPIError(
                f"Cloudflare API error: {e.response.text[:200]}", status_code=status
            ) from e

        payload = response.json()
        if not payload.get("success", True):
            errors = payload.get("errors") or []
            message = "; ".join(str(err.get("message", err)) for err in errors) or "request unsuccessful"
            raise CloudflareAPIError(f"Cloudflare API error: {message}", status_code=response.status_code)

        logger.debug(f"{method} {path} -> {response.status_code}")
        return payload.get("result")

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()
