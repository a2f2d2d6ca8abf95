import errno
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from .config import GitHubConfig
from .errors import (
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
)
from .observability import log_event

ACCEPT_MEDIA_TYPE = "application/vnd.github+json"
API_VERSION_HEADER = "X-GitHub-Api-Version"
RATE_LIMIT_REMAINING_HEADER = "x-ratelimit-remaining"
RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset"
RETRY_AFTER_HEADER = "retry-after"


def _parse_reset(resp: httpx.Response) -> Optional[datetime]:
    raw = resp.headers.get(RATE_LIMIT_RESET_HEADER)
    if raw:
        try:
            return datetime.fromtimestamp(int(raw), tz=timezone.utc)
        except ValueError:
            return None

    retry_after = resp.headers.get(RETRY_AFTER_HEADER)
    if retry_after and retry_after.isdigit():
        return datetime.now(timezone.utc) + timedelta(seconds=int(retry_after))
    return None


def _transport_error_code(exc: BaseException) -> str:
    """Prefer the OS errno name (ECONNREFUSED, ...) found in the cause chain."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        code = getattr(current, "errno", None)
        if isinstance(code, int) and code in errno.errorcode:
            return errno.errorcode[code]
        current = current.__cause__ or current.__context__
    return type(exc).__name__


def classify_response(resp: httpx.Response, body: Any) -> GitHubError:
    """
    Map a non-2xx response to one classified error.

    A 403 with no remaining rate-limit quota is reported as a rate limit rather
    than a permission failure. That heuristic misclassifies a real permission
    denial that happens to arrive with an exhausted quota.
    """
    status = resp.status_code
    message = "request failed"
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        message = body["message"]
    elif isinstance(body, str) and body:
        message = body

    if status == 401:
        return GitHubAuthenticationError(message, status_code=status, response=body)
    if status == 403:
        if resp.headers.get(RATE_LIMIT_REMAINING_HEADER) == "0":
            return GitHubRateLimitError(
                message,
                reset_at=_parse_reset(resp),
                status_code=status,
                response=body,
            )
        return GitHubPermissionError(message, status_code=status, response=body)
    if status == 404:
        return GitHubResourceNotFoundError(message, status_code=status, response=body)
    if status == 409:
        return GitHubConflictError(message, status_code=status, response=body)
    if status in (400, 422):
        return GitHubValidationError(message, status_code=status, response=body)
    if status == 429:
        return GitHubRateLimitError(
            message, reset_at=_parse_reset(resp), status_code=status, response=body
        )
    return GitHubError(message, status_code=status, response=body)


class GitHubActionsClient:
    """
    HTTP adapter for the GitHub REST API.
    - Adds bearer auth, the versioned JSON media type and API version headers
    - One httpx.AsyncClient per request; nothing is held between calls
    - No retries: every failure is raised as one classified GitHubError
    """

    def __init__(
        self,
        config: GitHubConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.transport = transport
        self.log = logger or logging.getLogger("github_actions_mcp.client")

    @property
    def base_url(self) -> str:
        return self.config.api_url

    @property
    def timeout_seconds(self) -> float:
        return self.config.timeout_seconds

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.token}",
            "Accept": ACCEPT_MEDIA_TYPE,
            API_VERSION_HEADER: self.config.api_version,
            "User-Agent": self.config.user_agent,
        }

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        """
        Send one request and return decoded JSON, or None for an empty 2xx body.
        - Raises GitHubTimeoutError when the timeout elapses
        - Raises GitHubNetworkError on other transport failures
        - Raises a classified GitHubError on non-2xx responses
        - Raises GitHubResponseParseError if a 2xx body isn't valid JSON
        """
        method = method.upper()
        start = time.perf_counter()
        endpoint = url.split("?", 1)[0]

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout_seconds,
                transport=self.transport,
            ) as http:
                resp = await http.request(method, url, json=json)
        except httpx.TimeoutException as exc:
            self._log_failure(tool, method, endpoint, start, exc)
            raise GitHubTimeoutError(
                f"Request to {method} {endpoint} timed out after "
                f"{self.timeout_seconds}s",
                timeout_seconds=self.timeout_seconds,
            ) from exc
        except httpx.TransportError as exc:
            self._log_failure(tool, method, endpoint, start, exc)
            raise GitHubNetworkError(
                f"Network error calling {method} {endpoint}: {exc}",
                error_code=_transport_error_code(exc),
            ) from exc

        log_event(
            "op_call",
            tool=tool,
            method=method,
            endpoint=endpoint,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            error = classify_response(resp, self._error_body(resp))
            self.log.debug(
                "op.error",
                extra={
                    "tool": tool,
                    "endpoint": endpoint,
                    "status": resp.status_code,
                    "error_kind": error.kind.value,
                },
            )
            raise error

        return self._safe_json(resp)

    def _log_failure(
        self,
        tool: Optional[str],
        method: str,
        endpoint: str,
        start: float,
        exc: Exception,
    ) -> None:
        log_event(
            "op_call",
            tool=tool,
            method=method,
            endpoint=endpoint,
            status="exception",
            error_type=type(exc).__name__,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

    @staticmethod
    def _error_body(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return (resp.text or "")[:500]

    @staticmethod
    def _safe_json(resp: httpx.Response) -> Any:
        # 202/204 from write endpoints carry no body
        if not resp.content or not resp.content.strip():
            return None

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise GitHubResponseParseError(
                f"Expected JSON from {resp.request.method} {resp.request.url}, "
                f"got non-JSON body snippet: {snippet!r}",
                status_code=resp.status_code,
            ) from exc

    async def get(self, url: str, *, tool: Optional[str] = None) -> Any:
        return await self.request("GET", url, tool=tool)

    async def post(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        return await self.request("POST", url, json=json, tool=tool)


__all__ = [
    "GitHubActionsClient",
    "classify_response",
    "ACCEPT_MEDIA_TYPE",
    "API_VERSION_HEADER",
]
