from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .. import __version__

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_TIMEOUT_SECONDS = 30.0

TOKEN_ENV = "GITHUB_PERSONAL_ACCESS_TOKEN"
API_URL_ENV = "GITHUB_API_URL"
TIMEOUT_ENV = "GITHUB_TIMEOUT_SECONDS"


class MissingTokenError(ValueError):
    """Raised when the GitHub token is required but missing."""


@dataclass(frozen=True)
class GitHubConfig:
    token: str
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    api_version: str = DEFAULT_API_VERSION
    user_agent: str = f"github-actions-mcp/{__version__}"

    def __post_init__(self) -> None:
        if not self.token:
            raise MissingTokenError("token must be provided.")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        api_url = (self.api_url or DEFAULT_API_URL).rstrip("/")
        object.__setattr__(self, "api_url", api_url)

    def __repr__(self) -> str:
        return (
            f"GitHubConfig(api_url={self.api_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, "
            f"api_version={self.api_version!r})"
        )


def _parse_timeout(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{TIMEOUT_ENV} must be a number, got {raw!r}") from exc


def load_config(*, use_dotenv: bool = True) -> GitHubConfig:
    """Build a GitHubConfig from environment variables (optional .env)."""
    if use_dotenv:
        load_dotenv()
    token = os.getenv(TOKEN_ENV, "").strip()
    if not token:
        raise MissingTokenError(f"Missing {TOKEN_ENV} in environment.")

    api_url = os.getenv(API_URL_ENV, "").strip() or DEFAULT_API_URL
    raw_timeout = os.getenv(TIMEOUT_ENV, "").strip()
    timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS

    return GitHubConfig(token=token, api_url=api_url, timeout_seconds=timeout)


__all__ = [
    "GitHubConfig",
    "MissingTokenError",
    "load_config",
    "DEFAULT_API_URL",
    "DEFAULT_API_VERSION",
    "DEFAULT_TIMEOUT_SECONDS",
    "TOKEN_ENV",
    "API_URL_ENV",
    "TIMEOUT_ENV",
]
