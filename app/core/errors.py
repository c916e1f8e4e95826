"""
Application errors for clean API error handling.

Services raise ApiError subclasses; app.main maps them to a JSON body of
{error, detail} with the error's status code.
"""


class ApiError(Exception):
    """Base for errors that surface to the client with a fixed status code and message."""

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(detail or self.error)

    def to_body(self) -> dict[str, str]:
        body = {"error": self.error}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class RecallSearchError(ApiError):
    """Raised when the recall aggregation pipeline itself fails (not a single upstream query)."""

    error = "Error fetching CPSC API"


class LLMNotConfiguredError(ApiError):
    """Raised when neither OPENAI_API_KEY nor GEMINI_API_KEY is set."""

    status_code = 501
    error = "No LLM API key configured"


class SummarizeFailedError(ApiError):
    """Raised when the summarization round trip fails for any reason."""

    error = "LLM summarize failed"


class UnexpectedLLMResponseError(Exception):
    """Raised by a backend parser when the response body matches none of its documented shapes."""

    def __init__(self, backend: str, message: str) -> None:
        self.backend = backend
        super().__init__(f"{backend}: {message}")
