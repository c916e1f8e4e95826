"""Schemas for the summarize endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class SummarizeRequest(BaseModel):
    """Request body for POST /api/summarize."""

    model_config = ConfigDict(populate_by_name=True)

    text: str | None = Field("", description="Recall text to summarize.")
    for_age: str | None = Field(None, alias="forAge", description="Child age shown in the prompt; defaults to 3+.")


class SummarizeResponse(BaseModel):
    """Response for POST /api/summarize."""

    summary: str = Field(..., description="Parent-facing summary from the LLM backend.")


class ErrorResponse(BaseModel):
    """Error body returned with non-200 statuses."""

    error: str
    detail: str | None = None
