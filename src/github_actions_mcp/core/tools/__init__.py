"""
GitHub Actions operations exposed as MCP tools.

Every public coroutine in this package whose first parameter is `client` is
discovered and registered by `github_actions_mcp.core.registry`.
"""

from .runs import (
    cancel_workflow_run,
    get_workflow_run,
    get_workflow_run_jobs,
    list_workflow_runs,
    rerun_workflow_run,
)
from .workflows import (
    get_workflow,
    get_workflow_usage,
    list_workflows,
    trigger_workflow,
)

__all__ = [
    "list_workflows",
    "get_workflow",
    "get_workflow_usage",
    "trigger_workflow",
    "list_workflow_runs",
    "get_workflow_run",
    "get_workflow_run_jobs",
    "cancel_workflow_run",
    "rerun_workflow_run",
]
