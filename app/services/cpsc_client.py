"""
CPSC recall API client: URL building and concurrent fetch.

Responsibility: Talk to the SaferProducts REST endpoint. Each query filters on a
single field; ANDing several fields upstream drops too many toy recalls.
"""

import asyncio
import logging
from typing import Any

import httpx

from app.core.config import CPSC_ROOT, DEFAULT_HAZARD_KEYWORD, DEFAULT_KEYWORD, UPSTREAM_TIMEOUT

logger = logging.getLogger(__name__)

# Fixed query order; on duplicate RecallID the later query wins.
QUERY_FIELDS: tuple[str, ...] = ("ProductName", "RecallTitle", "Hazard")


def build_recall_url(field: str, value: str | None, start: str | None = None, end: str | None = None) -> str:
    """Build one CPSC query URL filtering on a single field, with optional recall-date bounds."""
    params: list[tuple[str, str]] = [("format", "json")]
    if value:
        params.append((field, value))
    if start:
        params.append(("RecallDateStart", start))
    if end:
        params.append(("RecallDateEnd", end))
    return str(httpx.URL(CPSC_ROOT, params=params))


def build_recall_queries(q: str | None, start: str | None = None, end: str | None = None) -> list[str]:
    """Return the three query URLs (ProductName, RecallTitle, Hazard) for a keyword."""
    urls = []
    for field in QUERY_FIELDS:
        default = DEFAULT_HAZARD_KEYWORD if field == "Hazard" else DEFAULT_KEYWORD
        urls.append(build_recall_url(field, q or default, start, end))
    return urls


async def _fetch_one(client: httpx.AsyncClient, url: str) -> Any:
    response = await client.get(url)
    response.raise_for_status()
    return response.json()


async def fetch_recall_batches(
    urls: list[str],
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[list[dict[str, Any]] | None]:
    """
    Fetch all query URLs concurrently and wait for every one to settle.

    Returns one entry per URL in the same order: the decoded record list, or None
    when that query failed or did not return a JSON array. Failures never propagate.
    """
    logger.info("[cpsc:fetch_recall_batches] IN  queries=%d", len(urls))
    async with httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT, transport=transport) as client:
        settled = await asyncio.gather(*(_fetch_one(client, u) for u in urls), return_exceptions=True)

    batches: list[list[dict[str, Any]] | None] = []
    for url, result in zip(urls, settled):
        if isinstance(result, Exception):
            logger.warning("[cpsc:fetch_recall_batches] query failed url=%s error=%r", url, result)
            batches.append(None)
        elif not isinstance(result, list):
            logger.warning("[cpsc:fetch_recall_batches] non-array body url=%s type=%s", url, type(result).__name__)
            batches.append(None)
        else:
            batches.append(result)
    logger.info(
        "[cpsc:fetch_recall_batches] OUT sizes=%s",
        [len(b) if b is not None else None for b in batches],
    )
    return batches
