"""Typed errors raised by the ingestion pipeline.

Lower layers raise the most specific subclass; the orchestration layer adds
operation context with :meth:`RecipePipelineError.with_context` and re-raises
the same object, so callers can always branch on the class or ``code``.
"""

from typing import List, Optional


class RecipePipelineError(Exception):
    code = "internal"
    default_message = "internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        self.context: List[str] = []
        super().__init__(self.message)

    def with_context(self, context: str) -> "RecipePipelineError":
        self.context.insert(0, context)
        return self

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{': '.join(self.context)}: {self.message}"


class FetchError(RecipePipelineError):
    code = "fetch_failed"
    default_message = "failed to fetch content"


class FetchFailedError(FetchError):
    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is None and status_code is not None:
            message = f"unexpected status code: {status_code}"
        super().__init__(message)
        self.status_code = status_code


class TooManyRedirectsError(FetchError):
    code = "too_many_redirects"
    default_message = "too many redirects"


class InvalidURLError(FetchError):
    code = "invalid_url"
    default_message = "invalid URL"


class ParseError(RecipePipelineError):
    code = "parse_failed"
    default_message = "failed to parse content"


class NoContentFoundError(ParseError):
    code = "no_content"
    default_message = "no content found"


class ExtractError(RecipePipelineError):
    code = "extract_failed"
    default_message = "failed to extract text from PDF"


class NoTextFoundError(ExtractError):
    code = "no_text"
    default_message = "no text content found in PDF"


class ModelError(RecipePipelineError):
    code = "model_error"
    default_message = "AI model request failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ModelConfigurationError(ModelError):
    code = "model_misconfigured"
    default_message = "AI model is misconfigured"


class UnsupportedModelError(ModelConfigurationError):
    code = "unsupported_model"
    default_message = "unsupported model type"


class MissingAPIKeyError(ModelConfigurationError):
    code = "missing_api_key"
    default_message = "no API key configured for model"


class MalformedModelResponseError(RecipePipelineError):
    code = "malformed_model_response"
    default_message = "model response did not contain valid JSON"


class RecipeTitleMissingError(MalformedModelResponseError):
    code = "recipe_title_missing"
    default_message = "parsed recipe missing title"


class UnauthorizedError(RecipePipelineError):
    code = "unauthorized"
    default_message = "unauthorized"


class NotFoundError(RecipePipelineError):
    code = "not_found"
    default_message = "resource not found"


class InvalidRequestError(RecipePipelineError):
    code = "invalid_request"
    default_message = "invalid request"


class DeadlineExceededError(RecipePipelineError):
    code = "deadline_exceeded"
    default_message = "operation timed out"
