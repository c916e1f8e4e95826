"""
API handlers: read request data, call services, shape the HTTP response.

Responsibility: Bridge HTTP types and services. Services raise ApiError
subclasses; app.main turns those into {error, detail} JSON responses.
"""

from app.schemas.recall import RecallListResponse
from app.schemas.summarize import SummarizeRequest, SummarizeResponse
from app.services.recall_service import search_toy_recalls
from app.services.summary_service import summarize_recall_text


async def handle_search_recalls(
    q: str | None,
    start: str | None,
    end: str | None,
    limit: str | None,
) -> RecallListResponse:
    """Run the toy recall aggregation. start/end are passed through unvalidated."""
    return await search_toy_recalls(q=q, start=start, end=end, limit=limit)


async def handle_summarize(body: SummarizeRequest | None) -> SummarizeResponse:
    """Summarize recall text; a missing body behaves like an empty one."""
    body = body or SummarizeRequest()
    result = await summarize_recall_text(body.text, body.for_age)
    return SummarizeResponse(summary=result.text)
