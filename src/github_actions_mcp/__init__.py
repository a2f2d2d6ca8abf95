"""github_actions_mcp package exports."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    ErrorKind,
    GitHubActionsClient,
    GitHubAuthenticationError,
    GitHubConfig,
    GitHubConflictError,
    GitHubError,
    GitHubNetworkError,
    GitHubPermissionError,
    GitHubRateLimitError,
    GitHubResourceNotFoundError,
    GitHubResponseParseError,
    GitHubTimeoutError,
    GitHubValidationError,
    load_config,
    register_discovered_tools,
)

__all__ = [
    "__version__",
    # Client
    "GitHubActionsClient",
    "GitHubConfig",
    "load_config",
    # Exceptions
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
    # Server utilities
    "register_discovered_tools",
]
