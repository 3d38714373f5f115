"""
Error taxonomy for upstream AI calls.

Clients classify failures by HTTP status into an ErrorKind; the endpoints
turn the kind into the message shown to the user.
"""
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    MODEL_UNAVAILABLE = "model_unavailable"
    CONFIGURATION = "configuration"
    DEGENERATE_OUTPUT = "degenerate_output"
    UPSTREAM = "upstream"


GENERIC_MESSAGE = "Failed to generate content"

USER_MESSAGES = {
    ErrorKind.RATE_LIMITED: "Rate limit exceeded. Please try again in a few minutes.",
    ErrorKind.MODEL_UNAVAILABLE: "Model temporarily unavailable. Please try a different model.",
    ErrorKind.CONFIGURATION: "API configuration issue. Please contact support.",
}


class InferenceError(Exception):
    """Raised by the AI clients and services with a classified kind."""

    def __init__(self, kind: ErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.kind, GENERIC_MESSAGE)


def classify_status(status_code: int) -> ErrorKind:
    """Map an upstream HTTP status code to an ErrorKind."""
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code in (401, 403):
        return ErrorKind.CONFIGURATION
    if status_code in (404, 503):
        # 503 is returned while a hosted model is still loading
        return ErrorKind.MODEL_UNAVAILABLE
    return ErrorKind.UPSTREAM


def raise_for_upstream(response, service: str) -> None:
    """Raise a classified InferenceError for a non-2xx response."""
    if 200 <= response.status_code < 300:
        return
    body = (response.text or "")[:200]
    raise InferenceError(
        classify_status(response.status_code),
        f"{service} API error: {response.status_code} {body}".strip(),
    )
