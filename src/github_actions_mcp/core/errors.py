from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    RATE_LIMIT = "rate_limit"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"
    NETWORK = "network"
    GENERIC = "generic"


class GitHubError(Exception):
    """Base error for GitHub API failures. `kind` discriminates the variant."""

    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class GitHubValidationError(GitHubError):
    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field_errors: Optional[List[Dict[str, str]]] = None,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message, status_code=status_code, response=response)
        self.field_errors = list(field_errors or [])


class GitHubResourceNotFoundError(GitHubError):
    kind = ErrorKind.NOT_FOUND


class GitHubAuthenticationError(GitHubError):
    kind = ErrorKind.AUTHENTICATION


class GitHubPermissionError(GitHubError):
    kind = ErrorKind.PERMISSION


class GitHubRateLimitError(GitHubError):
    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        *,
        reset_at: Optional[datetime] = None,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message, status_code=status_code, response=response)
        self.reset_at = reset_at


class GitHubConflictError(GitHubError):
    kind = ErrorKind.CONFLICT


class GitHubTimeoutError(GitHubError):
    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str, *, timeout_seconds: float):
        super().__init__(message)
        self.timeout_seconds = timeout_seconds


class GitHubNetworkError(GitHubError):
    kind = ErrorKind.NETWORK

    def __init__(self, message: str, *, error_code: str):
        super().__init__(message)
        self.error_code = error_code


class GitHubResponseParseError(GitHubError):
    """Upstream returned a 2xx payload that does not match the expected shape."""


class ToolCallError(Exception):
    """Raised at the tool boundary with a user-facing, classified message."""


_KIND_LABELS = {
    ErrorKind.VALIDATION: "Validation Error",
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.AUTHENTICATION: "Authentication Failed",
    ErrorKind.PERMISSION: "Permission Denied",
    ErrorKind.RATE_LIMIT: "Rate Limit Exceeded",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.TIMEOUT: "Timeout",
    ErrorKind.NETWORK: "Network Error",
    ErrorKind.GENERIC: "GitHub API Error",
}


def format_error(exc: GitHubError) -> str:
    """Render a classified error as a single user-visible message."""
    lines = [f"{_KIND_LABELS[exc.kind]}: {exc.message}"]

    if isinstance(exc, GitHubValidationError):
        if exc.field_errors:
            lines.append(f"Details: {json.dumps(exc.field_errors)}")
        elif exc.response is not None:
            lines.append(f"Details: {json.dumps(exc.response, default=str)}")
    elif isinstance(exc, GitHubRateLimitError):
        reset = exc.reset_at.isoformat() if exc.reset_at else "unknown"
        lines.append(f"Resets at: {reset}")
    elif isinstance(exc, GitHubTimeoutError):
        lines.append(f"Timeout setting: {exc.timeout_seconds}s")
    elif isinstance(exc, GitHubNetworkError):
        lines.append(f"Error code: {exc.error_code}")
    elif exc.kind is ErrorKind.GENERIC and exc.status_code is not None:
        lines.append(f"Status: {exc.status_code}")

    return "\n".join(lines)


__all__ = [
    "ErrorKind",
    "GitHubError",
    "GitHubValidationError",
    "GitHubResourceNotFoundError",
    "GitHubAuthenticationError",
    "GitHubPermissionError",
    "GitHubRateLimitError",
    "GitHubConflictError",
    "GitHubTimeoutError",
    "GitHubNetworkError",
    "GitHubResponseParseError",
    "ToolCallError",
    "format_error",
]
