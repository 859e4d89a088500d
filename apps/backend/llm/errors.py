"""
Error taxonomy for the support chat.

A single tagged error type: callers branch on `ServiceError.kind` and read
the HTTP status and user-facing message from the kind table. `detail` is for
logs only and never reaches the end user.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    TIMEOUT = "timeout"
    AUTH_FAILURE = "auth_failure"
    BAD_UPSTREAM_REQUEST = "bad_upstream_request"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_ERROR = "upstream_error"
    CONFIG_MISSING = "config_missing"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ErrorSpec:
    status_code: int
    retryable: bool
    user_message: str


ERROR_SPECS: Dict[ErrorKind, ErrorSpec] = {
    ErrorKind.INVALID_INPUT: ErrorSpec(400, False, "Message is required"),
    ErrorKind.TIMEOUT: ErrorSpec(
        504, True, "The AI service took too long to respond. Please try again."
    ),
    ErrorKind.AUTH_FAILURE: ErrorSpec(
        500, False, "AI service authentication failed. Please check API key."
    ),
    ErrorKind.BAD_UPSTREAM_REQUEST: ErrorSpec(400, False, "Invalid request to AI service."),
    ErrorKind.RATE_LIMITED: ErrorSpec(429, True, "Service is busy. Please try again in a moment."),
    ErrorKind.UPSTREAM_ERROR: ErrorSpec(500, True, "Failed to generate response. Please try again."),
    ErrorKind.CONFIG_MISSING: ErrorSpec(
        500, False, "AI service not configured. Please add OPENROUTER_API_KEY."
    ),
    ErrorKind.UNKNOWN: ErrorSpec(500, False, "An unexpected error occurred. Please try again."),
}


class ServiceError(Exception):
    """Failure of the answer pipeline, tagged with an ErrorKind."""

    def __init__(self, kind: ErrorKind, detail: str, user_message: Optional[str] = None) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.user_message = user_message or ERROR_SPECS[kind].user_message

    @property
    def status_code(self) -> int:
        return ERROR_SPECS[self.kind].status_code

    @property
    def retryable(self) -> bool:
        return ERROR_SPECS[self.kind].retryable

    @classmethod
    def from_http_status(cls, status: int) -> "ServiceError":
        """Map a non-success provider status to an error."""
        if status == 429:
            return cls(ErrorKind.RATE_LIMITED, "Rate limit exceeded")
        if status in (401, 403):
            return cls(ErrorKind.AUTH_FAILURE, "Authentication failed")
        if status == 400:
            return cls(ErrorKind.BAD_UPSTREAM_REQUEST, "Bad request")
        return cls(ErrorKind.UPSTREAM_ERROR, f"OpenRouter error: {status}")

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value!r}, detail={self.detail!r})"


__all__ = ["ErrorKind", "ErrorSpec", "ERROR_SPECS", "ServiceError"]
