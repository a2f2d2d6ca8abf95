"""
Helpers for composing GitHub API URLs.
"""

from typing import Any, List, Mapping, Tuple
from urllib.parse import quote, urlencode


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(base: str, params: Mapping[str, Any]) -> str:
    """
    Append the defined entries of `params` to `base` as a query string.
    - None values are dropped entirely.
    - Key order follows the mapping.
    """
    items: List[Tuple[str, str]] = [
        (key, _query_value(value)) for key, value in params.items() if value is not None
    ]
    if not items:
        return base

    query = urlencode(items, quote_via=quote)
    sep = "&" if "?" in base else "?"
    return f"{base}{sep}{query}"


def repo_path(owner: str, repo: str, *parts: Any) -> str:
    """
    Build `/repos/{owner}/{repo}/actions/...`.
    Each part is a single path segment: `/`, `?` and `#` inside it are
    percent-encoded, so a workflow file name can never change the endpoint.
    """
    suffix = "/".join(quote(str(p), safe="") for p in parts)
    base = f"/repos/{owner}/{repo}/actions"
    return f"{base}/{suffix}" if suffix else base


__all__ = ["build_url", "repo_path"]
