from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from pydantic import Field

from github_actions_mcp.core.client import GitHubActionsClient
from github_actions_mcp.core.models import (
    Acknowledgement,
    ListWorkflowsInput,
    OwnerParam,
    PageParam,
    PerPageParam,
    RepoParam,
    TriggerWorkflowInput,
    Workflow,
    WorkflowIdParam,
    WorkflowInput,
    WorkflowList,
    WorkflowUsage,
    parse_response,
)
from github_actions_mcp.core.urls import build_url, repo_path
from github_actions_mcp.core.validation import validate_input


async def list_workflows(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    *,
    page: PageParam = None,
    per_page: PerPageParam = None,
) -> WorkflowList:
    """List workflows in a GitHub repository."""
    params = validate_input(
        ListWorkflowsInput, owner=owner, repo=repo, page=page, per_page=per_page
    )
    url = build_url(
        repo_path(params.owner, params.repo, "workflows"),
        {"page": params.page, "per_page": params.per_page},
    )
    payload = await client.get(url, tool="list_workflows")
    return parse_response(WorkflowList, payload)


async def get_workflow(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    workflow_id: WorkflowIdParam,
) -> Workflow:
    """Get details of a specific workflow by numeric ID or file name."""
    params = validate_input(
        WorkflowInput, owner=owner, repo=repo, workflow_id=workflow_id
    )
    url = repo_path(params.owner, params.repo, "workflows", params.workflow_id)
    payload = await client.get(url, tool="get_workflow")
    return parse_response(Workflow, payload)


async def get_workflow_usage(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    workflow_id: WorkflowIdParam,
) -> WorkflowUsage:
    """Get billable usage (milliseconds per runner OS) of a workflow."""
    params = validate_input(
        WorkflowInput, owner=owner, repo=repo, workflow_id=workflow_id
    )
    url = repo_path(
        params.owner, params.repo, "workflows", params.workflow_id, "timing"
    )
    payload = await client.get(url, tool="get_workflow_usage")
    return parse_response(WorkflowUsage, payload)


async def trigger_workflow(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    workflow_id: WorkflowIdParam,
    ref: Annotated[
        str,
        Field(description="The reference of the workflow run (branch, tag, or SHA)"),
    ],
    *,
    inputs: Annotated[
        Optional[Dict[str, str]],
        Field(description="Input parameters for the workflow"),
    ] = None,
) -> Acknowledgement:
    """
    Trigger a workflow_dispatch run on a branch, tag or SHA.

    The API answers 204 with no body, so the result is an acknowledgement
    rather than the created run.
    """
    params = validate_input(
        TriggerWorkflowInput,
        owner=owner,
        repo=repo,
        workflow_id=workflow_id,
        ref=ref,
        inputs=inputs,
    )
    body: Dict[str, Any] = {"ref": params.ref}
    if params.inputs:
        body["inputs"] = params.inputs

    url = repo_path(
        params.owner, params.repo, "workflows", params.workflow_id, "dispatches"
    )
    await client.post(url, json=body, tool="trigger_workflow")
    return Acknowledgement(
        message=f"Workflow {params.workflow_id} triggered on {params.ref}"
    )
