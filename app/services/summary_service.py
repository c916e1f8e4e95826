"""
Summary forwarding: build the parent-facing prompt and send it to one LLM backend.

OpenAI is used when OPENAI_API_KEY is set, otherwise Gemini. There is no fallback
between backends and no retry.
"""

import logging

from app.core.config import LLMCredentials
from app.core.errors import LLMNotConfiguredError, SummarizeFailedError
from app.llm.backends import SummaryResult, call_gemini, call_openai

logger = logging.getLogger(__name__)

DEFAULT_AGE = "3+"


def build_summary_prompt(text: str | None, for_age: str | None = None) -> str:
    return (
        "Summarize toy recall risk in 3 bullet points for parents of a child aged "
        f"{for_age or DEFAULT_AGE}. Be concise and action-oriented.\n\n{text or ''}"
    )


async def summarize_recall_text(
    text: str | None,
    for_age: str | None = None,
    credentials: LLMCredentials | None = None,
) -> SummaryResult:
    """
    Summarize recall text for parents. Raises LLMNotConfiguredError when no key is
    set (no outbound call is made) and SummarizeFailedError on any backend failure.
    """
    creds = credentials or LLMCredentials.from_env()
    if not creds.configured:
        logger.warning("[summary] no LLM API key configured")
        raise LLMNotConfiguredError()

    prompt = build_summary_prompt(text, for_age)
    backend = "openai" if creds.openai_api_key else "gemini"
    logger.info("[summary] IN  backend=%s text_len=%d for_age=%r", backend, len(text or ""), for_age)
    try:
        if creds.openai_api_key:
            result = await call_openai(prompt, creds.openai_api_key)
        else:
            result = await call_gemini(prompt, creds.gemini_api_key)
    except Exception as e:
        logger.exception("[summary] %s backend failed", backend)
        raise SummarizeFailedError(str(e)) from e
    logger.info("[summary] OUT backend=%s summary_len=%d", result.backend, len(result.text))
    return result
