"""
Recall aggregation: merge the CPSC keyword queries, keep toy recalls, normalize and sort.

Responsibility: Pure request/merge/filter logic behind GET /api/recalls.
No HTTP or FastAPI types here; the upstream transport lives in cpsc_client.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any

import httpx

from app.core.config import DEFAULT_LIMIT, MAX_LIMIT
from app.core.errors import RecallSearchError
from app.schemas.recall import NormalizedRecall, RawRecallRecord, RecallListResponse, RecallProduct
from app.services.cpsc_client import build_recall_queries, fetch_recall_batches

logger = logging.getLogger(__name__)

TOY_PRODUCT_PATTERN = re.compile(r"toy|juguete|doll|lego|figure|puzzle|game", re.IGNORECASE)
TOY_TEXT_PATTERN = re.compile(r"toy|juguete", re.IGNORECASE)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_limit(raw: str | int | None) -> int:
    """
    Parse the limit query value. Reads the leading integer of the string;
    missing, non-numeric or non-positive values fall back to DEFAULT_LIMIT,
    and anything above MAX_LIMIT is clamped.
    """
    if raw is None:
        return DEFAULT_LIMIT
    match = _LEADING_INT.match(str(raw))
    if not match:
        return DEFAULT_LIMIT
    value = int(match.group(1))
    if value <= 0:
        return DEFAULT_LIMIT
    return min(value, MAX_LIMIT)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def is_toy_related(record: RawRecallRecord) -> bool:
    """True if any product looks like a toy, or the title/description mentions toys."""
    for product in record.get("Products") or []:
        haystack = " ".join(_text(product.get(k)) for k in ("Type", "Name", "Description"))
        if TOY_PRODUCT_PATTERN.search(haystack):
            return True
    return bool(TOY_TEXT_PATTERN.search(f"{_text(record.get('Title'))} {_text(record.get('Description'))}"))


def _first_name(entries: list[dict[str, Any]] | None) -> str:
    if not entries:
        return ""
    return _text(entries[0].get("Name") if entries[0] else None).strip()


def normalize_recall(record: RawRecallRecord) -> NormalizedRecall:
    """Project a raw CPSC record onto the compact NormalizedRecall shape."""
    images = [img.get("URL") for img in (record.get("Images") or []) if img]
    products = [
        RecallProduct(
            name=p.get("Name"),
            type=p.get("Type"),
            model=p.get("Model"),
            category_id=p.get("CategoryID"),
        )
        for p in (record.get("Products") or [])
    ]
    return NormalizedRecall(
        id=record.get("RecallID"),
        number=record.get("RecallNumber"),
        title=record.get("Title"),
        url=record.get("URL"),
        published=record.get("LastPublishDate") or record.get("RecallDate"),
        description=record.get("Description"),
        hazard=_first_name(record.get("Hazards")),
        remedy=_first_name(record.get("Remedies")),
        images=[url for url in images if url],
        products=products,
    )


def merge_recall_batches(batches: list[list[dict[str, Any]] | None]) -> list[RawRecallRecord]:
    """
    Merge query results by RecallID, keeping only toy-related records.
    Batches are taken in query order; a later duplicate replaces the earlier record.
    """
    merged: dict[Any, RawRecallRecord] = {}
    for batch in batches:
        if batch is None:
            continue
        for record in batch:
            if not isinstance(record, dict) or not is_toy_related(record):
                continue
            merged[record.get("RecallID")] = record
    return list(merged.values())


def published_sort_key(recall: NormalizedRecall) -> tuple[bool, float]:
    """
    (dated, epoch seconds) of recall.published. Missing or unparseable dates give
    (False, 0.0), so with reverse=True they come after every dated recall, pre-1970 included.
    """
    if not recall.published:
        return False, 0.0
    try:
        dt = datetime.fromisoformat(recall.published.strip())
    except ValueError:
        return False, 0.0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return True, dt.timestamp()


async def search_toy_recalls(
    q: str | None = None,
    start: str | None = None,
    end: str | None = None,
    limit: str | int | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RecallListResponse:
    """
    Pipeline: three CPSC queries → merge by RecallID → toy filter → normalize →
    newest first → truncate to limit.
    """
    logger.info("[recalls:search] IN  q=%r start=%r end=%r limit=%r", q, start, end, limit)
    try:
        lim = parse_limit(limit)
        urls = build_recall_queries(q, start, end)
        batches = await fetch_recall_batches(urls, transport=transport)
        merged = merge_recall_batches(batches)
        normalized = [normalize_recall(r) for r in merged]
        ordered = sorted(normalized, key=published_sort_key, reverse=True)[:lim]
    except Exception as e:
        logger.exception("[recalls:search] aggregation failed")
        raise RecallSearchError(str(e)) from e
    logger.info("[recalls:search] OUT merged=%d returned=%d", len(merged), len(ordered))
    return RecallListResponse(count=len(ordered), items=ordered)
