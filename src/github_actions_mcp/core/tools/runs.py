from __future__ import annotations

from typing import Annotated, Optional, Union

from pydantic import Field

from github_actions_mcp.core.client import GitHubActionsClient
from github_actions_mcp.core.models import (
    Acknowledgement,
    JobFilter,
    JobList,
    ListRunJobsInput,
    ListWorkflowRunsInput,
    OwnerParam,
    PageParam,
    PerPageParam,
    RepoParam,
    RunIdParam,
    RunInput,
    RunStatus,
    WorkflowRun,
    WorkflowRunList,
    parse_response,
)
from github_actions_mcp.core.urls import build_url, repo_path
from github_actions_mcp.core.validation import validate_input


async def list_workflow_runs(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    *,
    workflow_id: Annotated[
        Optional[Union[int, str]],
        Field(description="The ID of the workflow or filename"),
    ] = None,
    actor: Annotated[
        Optional[str],
        Field(
            description="Returns someone's workflow runs. Use the login for the user"
        ),
    ] = None,
    branch: Annotated[
        Optional[str],
        Field(description="Returns workflow runs associated with a branch"),
    ] = None,
    event: Annotated[
        Optional[str],
        Field(description="Returns workflow runs triggered by the event"),
    ] = None,
    status: Annotated[
        Optional[RunStatus],
        Field(description="Returns workflow runs with the check run status"),
    ] = None,
    created: Annotated[
        Optional[str],
        Field(
            description=(
                "Returns workflow runs created within date range (YYYY-MM-DD), "
                "e.g. 2024-01-01 or >=2024-01-01"
            )
        ),
    ] = None,
    exclude_pull_requests: Annotated[
        Optional[bool],
        Field(description="If true, pull requests are omitted from the response"),
    ] = None,
    check_suite_id: Annotated[
        Optional[int],
        Field(description="Returns workflow runs with the check_suite_id"),
    ] = None,
    page: PageParam = None,
    per_page: PerPageParam = None,
) -> WorkflowRunList:
    """
    List workflow runs for a repository, or for one workflow when workflow_id
    is given.
    """
    params = validate_input(
        ListWorkflowRunsInput,
        owner=owner,
        repo=repo,
        workflow_id=workflow_id,
        actor=actor,
        branch=branch,
        event=event,
        status=status,
        created=created,
        exclude_pull_requests=exclude_pull_requests,
        check_suite_id=check_suite_id,
        page=page,
        per_page=per_page,
    )

    # 0 and "" are still workflow ids
    if params.workflow_id is not None:
        path = repo_path(
            params.owner, params.repo, "workflows", params.workflow_id, "runs"
        )
    else:
        path = repo_path(params.owner, params.repo, "runs")

    url = build_url(
        path,
        {
            "actor": params.actor,
            "branch": params.branch,
            "event": params.event,
            "status": params.status,
            "created": params.created,
            "exclude_pull_requests": params.exclude_pull_requests,
            "check_suite_id": params.check_suite_id,
            "page": params.page,
            "per_page": params.per_page,
        },
    )
    payload = await client.get(url, tool="list_workflow_runs")
    return parse_response(WorkflowRunList, payload)


async def get_workflow_run(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    run_id: RunIdParam,
) -> WorkflowRun:
    """Get details of a specific workflow run."""
    params = validate_input(RunInput, owner=owner, repo=repo, run_id=run_id)
    url = repo_path(params.owner, params.repo, "runs", params.run_id)
    payload = await client.get(url, tool="get_workflow_run")
    return parse_response(WorkflowRun, payload)


async def get_workflow_run_jobs(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    run_id: RunIdParam,
    *,
    filter: Annotated[
        Optional[JobFilter],
        Field(description="Jobs of the latest attempt only, or of all attempts"),
    ] = None,
    page: PageParam = None,
    per_page: PerPageParam = None,
) -> JobList:
    """List the jobs of a workflow run (filter: "latest" attempt or "all")."""
    params = validate_input(
        ListRunJobsInput,
        owner=owner,
        repo=repo,
        run_id=run_id,
        filter=filter,
        page=page,
        per_page=per_page,
    )
    url = build_url(
        repo_path(params.owner, params.repo, "runs", params.run_id, "jobs"),
        {"filter": params.filter, "page": params.page, "per_page": params.per_page},
    )
    payload = await client.get(url, tool="get_workflow_run_jobs")
    return parse_response(JobList, payload)


async def cancel_workflow_run(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    run_id: RunIdParam,
) -> Acknowledgement:
    """Cancel a workflow run that is queued or in progress."""
    params = validate_input(RunInput, owner=owner, repo=repo, run_id=run_id)
    url = repo_path(params.owner, params.repo, "runs", params.run_id, "cancel")
    await client.post(url, tool="cancel_workflow_run")
    return Acknowledgement(message=f"Workflow run {params.run_id} cancelled")


async def rerun_workflow_run(
    client: GitHubActionsClient,
    owner: OwnerParam,
    repo: RepoParam,
    run_id: RunIdParam,
) -> Acknowledgement:
    """Re-run a completed workflow run."""
    params = validate_input(RunInput, owner=owner, repo=repo, run_id=run_id)
    url = repo_path(params.owner, params.repo, "runs", params.run_id, "rerun")
    await client.post(url, tool="rerun_workflow_run")
    return Acknowledgement(message=f"Workflow run {params.run_id} restarted")
