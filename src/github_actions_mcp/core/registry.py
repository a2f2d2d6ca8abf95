from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, List, Set, get_type_hints

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .client import GitHubActionsClient
from .errors import GitHubError, ToolCallError, format_error

log = logging.getLogger("github_actions_mcp.core.registry")


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "github_actions_mcp.core.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        if name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield public coroutines defined in `module` that take `client` first."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # Skip imported functions
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "client":
            log.debug(
                "Skipping %s.%s: first parameter must be 'client'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


# --- Wrapping / registration ---------------------------------------------- #


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    return result


def _wrap_tool(
    func: Callable, client_provider: Callable[[], GitHubActionsClient]
) -> Callable:
    """
    Return a tool wrapper that:
    - injects the client and hides it from the signature
    - exposes parameters in camelCase (run_id -> runId) and maps them back
    - converts classified GitHub errors into a formatted ToolCallError
    """
    original_sig = inspect.signature(func)
    type_hints = get_type_hints(func, include_extras=True)

    new_params = []
    renames: Dict[str, str] = {}
    for i, (name, param) in enumerate(original_sig.parameters.items()):
        if i == 0 and name == "client":
            continue  # drop injected client
        public = to_camel(name)
        renames[public] = name
        new_params.append(
            param.replace(
                name=public,
                kind=inspect.Parameter.KEYWORD_ONLY,
                annotation=type_hints.get(name, param.annotation),
            )
        )

    new_sig = inspect.Signature(
        parameters=new_params, return_annotation=Dict[str, Any]
    )

    async def wrapped(**kwargs):
        call_kwargs = {renames.get(k, k): v for k, v in kwargs.items()}
        client = client_provider()
        try:
            result = await func(client, **call_kwargs)
        except GitHubError as exc:
            log.info(
                "tool.failed",
                extra={"tool": func.__name__, "error_kind": exc.kind.value},
            )
            raise ToolCallError(format_error(exc)) from exc
        return _to_jsonable(result)

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    return wrapped


def register_discovered_tools(
    app,
    client_provider: Callable[[], GitHubActionsClient] | GitHubActionsClient,
    modules: List[ModuleType] | None = None,
) -> None:
    """Register discovered tools on an app that exposes a .tool decorator."""
    if isinstance(client_provider, GitHubActionsClient):
        _client = client_provider

        def client_provider():
            return _client

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    modules = modules or discover_tool_modules()
    seen_names: Set[str] = set()

    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            wrapped = _wrap_tool(func, client_provider)
            app.tool(name=name)(wrapped)
            seen_names.add(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)


__all__ = [
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
