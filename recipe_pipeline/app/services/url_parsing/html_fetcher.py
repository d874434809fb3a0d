"""HTML fetching and URL validation utilities."""

import ipaddress
import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

from recipe_pipeline.app.core.config import Settings, get_settings
from recipe_pipeline.app.core.errors import (
    FetchFailedError,
    InvalidURLError,
    TooManyRedirectsError,
)

logger = logging.getLogger(__name__)


def is_private_host(host: str) -> bool:
    """Check if a host (optionally with a port) is private, local or reserved."""
    hostname = host.strip()
    if hostname.startswith("["):
        hostname = hostname[1:].split("]")[0]
    elif hostname.count(":") == 1:
        hostname = hostname.split(":")[0]
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return hostname.lower().rstrip(".") in {"localhost"}
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved or ip.is_unspecified


class ContentFetcher:
    """Retrieves page text over HTTP with a bounded redirect chain.

    A fresh client is opened per call so that cancelling the calling task
    tears down the connection. ``transport`` lets tests substitute an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    def _validate(self, url: str) -> None:
        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise InvalidURLError("URL must start with http or https")
        if self.settings.fetch_block_private_hosts and is_private_host(parsed.hostname or ""):
            raise InvalidURLError("URL points to a private or disallowed host")

    async def _check_hop(self, request: httpx.Request) -> None:
        # Runs for the initial request and every redirect target.
        self._validate(str(request.url))

    async def fetch(self, url: str) -> str:
        self._validate(url)
        headers = {
            "User-Agent": self.settings.scraper_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
        timeout = httpx.Timeout(self.settings.fetch_timeout_seconds, connect=5.0)

        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            max_redirects=self.settings.fetch_max_redirects,
            headers=headers,
            transport=self._transport,
            event_hooks={"request": [self._check_hop]},
        ) as client:
            try:
                response = await client.get(url)
            except httpx.TooManyRedirects as exc:
                logger.warning("Redirect limit exceeded for %s", url)
                raise TooManyRedirectsError(
                    f"stopped after {self.settings.fetch_max_redirects} redirects"
                ) from exc
            except httpx.HTTPError as exc:
                logger.warning("Network error fetching %s: %s", url, exc)
                raise FetchFailedError(f"request failed: {exc}") from exc

        if not response.is_success:
            logger.info("Fetch of %s returned status %s", url, response.status_code)
            raise FetchFailedError(status_code=response.status_code)

        logger.debug(
            "Fetched %s (%d bytes, %d redirects)", url, len(response.content), len(response.history)
        )
        return response.text
