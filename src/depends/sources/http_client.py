"""Shared async HTTP client utilities for remote package feeds.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error handling, so that every feed
request behaves the same way and is easy to mock in tests.

A 404 answer means "not found" and is reported as ``None``. Every other
failure is logged and raised as ``MetadataSourceError``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from depends.exceptions import MetadataSourceError

logger = logging.getLogger(__name__)

# Timeout for all feed HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "depends-graph/0.1"


def create_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create a pooled client configured for feed access."""
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


async def fetch_bytes(client: httpx.AsyncClient, url: str) -> bytes | None:
    """Fetch a URL and return the raw body.

    Args:
        client: The client to issue the request with.
        url: The URL to fetch.

    Returns:
        Response body, or None when the server answers 404.

    Raises:
        MetadataSourceError: On other HTTP errors, timeouts or
            connection failures.
    """
    try:
        resp = await client.get(url)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.content
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise MetadataSourceError(f"Timeout fetching {url}") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("HTTP %d from %s", exc.response.status_code, url)
        raise MetadataSourceError(
            f"HTTP {exc.response.status_code} from {url}"
        ) from exc
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise MetadataSourceError(f"Request error for {url}: {exc}") from exc


async def fetch_json(client: httpx.AsyncClient, url: str) -> dict[str, Any] | None:
    """Fetch a URL and parse the response as a JSON object.

    Returns:
        Parsed JSON object, or None when the server answers 404.

    Raises:
        MetadataSourceError: On request failures or if the body is not a
            JSON object.
    """
    body = await fetch_bytes(client, url)
    if body is None:
        return None
    try:
        data = json.loads(body)
    except ValueError as exc:
        logger.warning("Invalid JSON from %s", url)
        raise MetadataSourceError(f"Invalid JSON from {url}") from exc
    if not isinstance(data, dict):
        raise MetadataSourceError(f"Expected a JSON object from {url}")
    return data
