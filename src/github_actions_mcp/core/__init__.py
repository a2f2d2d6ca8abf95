"""Core domain surface for github-actions-mcp (transport-agnostic)."""

from .client import GitHubActionsClient, classify_response
from .config import GitHubConfig, MissingTokenError, load_config
from .errors import (
    ErrorKind,
    GitHubAuthenticationError,
    GitHubConflictError,
    GitHubError,
    GitHubNetworkError,
    GitHubPermissionError,
    GitHubRateLimitError,
    GitHubResourceNotFoundError,
    GitHubResponseParseError,
    GitHubTimeoutError,
    GitHubValidationError,
    ToolCallError,
    format_error,
)
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)
from .urls import build_url
from .validation import validate_owner_name, validate_repository_name

__all__ = [
    # Client
    "GitHubActionsClient",
    "classify_response",
    # Config
    "GitHubConfig",
    "MissingTokenError",
    "load_config",
    # Errors
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
    # Request building
    "build_url",
    "validate_owner_name",
    "validate_repository_name",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
