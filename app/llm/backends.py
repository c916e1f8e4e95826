"""
Summarizer LLM backends: OpenAI (primary) or Gemini (secondary).

Each backend owns its request shape and a dedicated response parser, and returns
its own tagged result so callers always know which backend produced the text.
"""

import logging
from typing import Annotated, Any, Literal, Union

import httpx
from openai import AsyncOpenAI
from pydantic import BaseModel, Field, ValidationError

from app.core.config import GEMINI_API_ROOT, GEMINI_LLM_MODEL, OPENAI_LLM_MODEL
from app.core.errors import UnexpectedLLMResponseError

logger = logging.getLogger(__name__)


class OpenAISummary(BaseModel):
    backend: Literal["openai"] = "openai"
    text: str


class GeminiSummary(BaseModel):
    backend: Literal["gemini"] = "gemini"
    text: str


SummaryResult = Annotated[Union[OpenAISummary, GeminiSummary], Field(discriminator="backend")]


# --- OpenAI ---

def parse_openai_response(response: Any) -> OpenAISummary:
    """
    Read the flat output_text of a Responses API result; fall back to the first
    choice's message content for chat-completions-shaped bodies.
    """
    output_text = getattr(response, "output_text", None)
    if isinstance(output_text, str):
        return OpenAISummary(text=output_text)
    choices = getattr(response, "choices", None)
    if choices:
        msg = getattr(choices[0], "message", None)
        content = getattr(msg, "content", None) if msg else None
        return OpenAISummary(text=content or "")
    raise UnexpectedLLMResponseError("openai", "response has neither output_text nor choices")


async def call_openai(prompt: str, api_key: str) -> OpenAISummary:
    """Send one user message to the OpenAI Responses API."""
    logger.info("[llm:openai] IN  model=%s prompt_len=%d", OPENAI_LLM_MODEL, len(prompt))
    # SDK default timeout; no retries
    async with AsyncOpenAI(api_key=api_key, max_retries=0) as client:
        response = await client.responses.create(
            model=OPENAI_LLM_MODEL,
            input=[{"role": "user", "content": prompt}],
        )
    result = parse_openai_response(response)
    logger.info("[llm:openai] OUT response_len=%d", len(result.text))
    return result


# --- Gemini ---

class _GeminiPart(BaseModel):
    text: str | None = None


class _GeminiContent(BaseModel):
    parts: list[_GeminiPart] = Field(default_factory=list)


class _GeminiCandidate(BaseModel):
    content: _GeminiContent


class _GeminiBody(BaseModel):
    candidates: list[_GeminiCandidate] = Field(..., min_length=1)


def parse_gemini_response(data: Any) -> GeminiSummary:
    """Join the text parts of the first candidate with newlines."""
    try:
        body = _GeminiBody.model_validate(data)
    except ValidationError as e:
        raise UnexpectedLLMResponseError("gemini", f"response has no usable candidates ({e.error_count()} errors)") from e
    parts = body.candidates[0].content.parts
    return GeminiSummary(text="\n".join(p.text or "" for p in parts))


def gemini_url(model: str = GEMINI_LLM_MODEL) -> str:
    return f"{GEMINI_API_ROOT}/{model}:generateContent"


async def call_gemini(prompt: str, api_key: str) -> GeminiSummary:
    """Send one prompt to Gemini generateContent. The key travels as a query parameter."""
    logger.info("[llm:gemini] IN  model=%s prompt_len=%d", GEMINI_LLM_MODEL, len(prompt))
    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    # No client-side deadline, same as the SDK path
    async with httpx.AsyncClient(timeout=None) as client:
        response = await client.post(
            gemini_url(),
            params={"key": api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
        )
    response.raise_for_status()
    result = parse_gemini_response(response.json())
    logger.info("[llm:gemini] OUT response_len=%d", len(result.text))
    return result
