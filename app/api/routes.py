"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging

from fastapi import APIRouter

from app.api.handlers import handle_search_recalls, handle_summarize
from app.schemas.recall import RecallListResponse
from app.schemas.summarize import ErrorResponse, SummarizeRequest, SummarizeResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Recalls ---

@router.get(
    "/api/recalls",
    response_model=RecallListResponse,
    tags=["recalls"],
    summary="Search toy-related CPSC recalls",
    description="Queries CPSC by ProductName, RecallTitle and Hazard, merges by RecallID, keeps toy recalls, newest first. 500 if aggregation fails.",
    responses={500: {"model": ErrorResponse}},
)
async def get_recalls(
    q: str | None = None,
    start: str | None = None,
    end: str | None = None,
    limit: str | None = None,
) -> RecallListResponse:
    logger.info("[api:get_recalls] IN  q=%r start=%r end=%r limit=%r", q, start, end, limit)
    result = await handle_search_recalls(q, start, end, limit)
    logger.info("[api:get_recalls] OUT count=%d", result.count)
    return result


# --- Summaries ---

@router.post(
    "/api/summarize",
    response_model=SummarizeResponse,
    tags=["summaries"],
    summary="Summarize recall risk for parents",
    description="Forwards text to OpenAI (OPENAI_API_KEY) or Gemini (GEMINI_API_KEY). 501 if neither key is set, 500 on LLM failure.",
    responses={500: {"model": ErrorResponse}, 501: {"model": ErrorResponse}},
)
async def post_summarize(body: SummarizeRequest | None = None) -> SummarizeResponse:
    logger.info("[api:post_summarize] IN  has_body=%s", body is not None)
    return await handle_summarize(body)
