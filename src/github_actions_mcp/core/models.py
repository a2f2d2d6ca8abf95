from __future__ import annotations

from typing import (
    Annotated,
    Any,
    Dict,
    List,
    Literal,
    Optional,
    Type,
    TypeVar,
    Union,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from .errors import GitHubResponseParseError, GitHubValidationError
from .validation import validate_owner_name, validate_repository_name

T = TypeVar("T", bound=BaseModel)

RunStatus = Literal[
    "completed",
    "action_required",
    "cancelled",
    "failure",
    "neutral",
    "skipped",
    "stale",
    "success",
    "timed_out",
    "in_progress",
    "queued",
    "requested",
    "waiting",
    "pending",
]
JobFilter = Literal["latest", "all"]
WorkflowState = Literal[
    "active",
    "deleted",
    "disabled_fork",
    "disabled_inactivity",
    "disabled_manually",
]

PageNumber = Annotated[StrictInt, Field(ge=1)]
PerPage = Annotated[StrictInt, Field(ge=1, le=100)]
RunId = Annotated[StrictInt, Field(ge=1)]
WorkflowId = Union[StrictInt, StrictStr]


# --- Tool Parameters (descriptions shown to MCP clients) ---

OwnerParam = Annotated[
    str, Field(description="Repository owner (username or organization)")
]
RepoParam = Annotated[str, Field(description="Repository name")]
WorkflowIdParam = Annotated[
    Union[int, str], Field(description="The ID of the workflow or filename")
]
RunIdParam = Annotated[int, Field(description="The ID of the workflow run")]
PageParam = Annotated[
    Optional[int], Field(description="Page number for pagination")
]
PerPageParam = Annotated[
    Optional[int], Field(description="Results per page (max 100)")
]


# --- Input Models (Tool Payloads) ---


class RepoInput(BaseModel):
    owner: StrictStr
    repo: StrictStr

    model_config = ConfigDict(extra="forbid")

    # pydantic collects ValueError only
    @field_validator("owner")
    @classmethod
    def _check_owner(cls, value: str) -> str:
        try:
            return validate_owner_name(value)
        except GitHubValidationError as exc:
            raise ValueError(exc.field_errors[0]["message"]) from exc

    @field_validator("repo")
    @classmethod
    def _check_repo(cls, value: str) -> str:
        try:
            return validate_repository_name(value)
        except GitHubValidationError as exc:
            raise ValueError(exc.field_errors[0]["message"]) from exc


class ListWorkflowsInput(RepoInput):
    page: Optional[PageNumber] = None
    per_page: Optional[PerPage] = None


class WorkflowInput(RepoInput):
    workflow_id: WorkflowId


class ListWorkflowRunsInput(RepoInput):
    workflow_id: Optional[WorkflowId] = None
    actor: Optional[StrictStr] = None
    branch: Optional[StrictStr] = None
    event: Optional[StrictStr] = None
    status: Optional[RunStatus] = None
    created: Optional[StrictStr] = None
    exclude_pull_requests: Optional[StrictBool] = None
    check_suite_id: Optional[StrictInt] = None
    page: Optional[PageNumber] = None
    per_page: Optional[PerPage] = None


class RunInput(RepoInput):
    run_id: RunId


class ListRunJobsInput(RunInput):
    filter: Optional[JobFilter] = None
    page: Optional[PageNumber] = None
    per_page: Optional[PerPage] = None


class TriggerWorkflowInput(WorkflowInput):
    ref: StrictStr = Field(min_length=1)
    inputs: Optional[Dict[StrictStr, StrictStr]] = None


# --- Response Models ---


class Actor(BaseModel):
    login: StrictStr
    id: StrictInt
    node_id: Optional[StrictStr] = None
    avatar_url: Optional[StrictStr] = None
    html_url: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    site_admin: Optional[StrictBool] = None

    model_config = ConfigDict(extra="ignore")


class PullRequestBranch(BaseModel):
    ref: StrictStr
    sha: StrictStr

    model_config = ConfigDict(extra="ignore")


class PullRequestRef(BaseModel):
    id: StrictInt
    number: StrictInt
    url: StrictStr
    head: PullRequestBranch
    base: PullRequestBranch

    model_config = ConfigDict(extra="ignore")


class Workflow(BaseModel):
    id: StrictInt
    node_id: StrictStr
    name: StrictStr
    path: StrictStr
    state: WorkflowState
    created_at: StrictStr
    updated_at: StrictStr
    url: StrictStr
    html_url: StrictStr
    badge_url: StrictStr

    model_config = ConfigDict(extra="ignore")


class WorkflowList(BaseModel):
    total_count: StrictInt
    workflows: List[Workflow]

    model_config = ConfigDict(extra="ignore")


class WorkflowRun(BaseModel):
    id: StrictInt
    name: Optional[StrictStr] = None
    node_id: StrictStr
    head_branch: Optional[StrictStr]
    head_sha: StrictStr
    path: StrictStr
    display_title: StrictStr
    run_number: StrictInt
    run_attempt: Optional[StrictInt] = None
    event: StrictStr
    status: Optional[StrictStr]
    conclusion: Optional[StrictStr]
    workflow_id: StrictInt
    check_suite_id: Optional[StrictInt] = None
    url: StrictStr
    html_url: StrictStr
    pull_requests: Optional[List[PullRequestRef]]
    created_at: StrictStr
    updated_at: StrictStr
    run_started_at: Optional[StrictStr] = None
    actor: Optional[Actor] = None
    triggering_actor: Optional[Actor] = None
    jobs_url: StrictStr
    logs_url: StrictStr
    check_suite_url: StrictStr
    artifacts_url: StrictStr
    cancel_url: StrictStr
    rerun_url: StrictStr
    workflow_url: StrictStr

    model_config = ConfigDict(extra="ignore")


class WorkflowRunList(BaseModel):
    total_count: StrictInt
    workflow_runs: List[WorkflowRun]

    model_config = ConfigDict(extra="ignore")


class Job(BaseModel):
    # steps are not modelled
    id: StrictInt
    run_id: StrictInt
    run_url: StrictStr
    run_attempt: Optional[StrictInt] = None
    node_id: StrictStr
    head_sha: StrictStr
    head_branch: Optional[StrictStr] = None
    workflow_name: Optional[StrictStr] = None
    url: StrictStr
    html_url: Optional[StrictStr]
    status: StrictStr
    conclusion: Optional[StrictStr]
    created_at: Optional[StrictStr] = None
    started_at: StrictStr
    completed_at: Optional[StrictStr]
    name: StrictStr
    check_run_url: StrictStr
    labels: List[StrictStr]
    runner_id: Optional[StrictInt] = None
    runner_name: Optional[StrictStr] = None
    runner_group_id: Optional[StrictInt] = None
    runner_group_name: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")


class JobList(BaseModel):
    total_count: StrictInt
    jobs: List[Job]

    model_config = ConfigDict(extra="ignore")


class JobRunUsage(BaseModel):
    job_id: StrictInt
    duration_ms: StrictInt

    model_config = ConfigDict(extra="ignore")


class PlatformUsage(BaseModel):
    total_ms: StrictInt
    jobs: Optional[StrictInt] = None
    job_runs: Optional[List[JobRunUsage]] = None

    model_config = ConfigDict(extra="ignore")


class WorkflowUsage(BaseModel):
    """Billable time per runner OS (keys like UBUNTU, MACOS, WINDOWS)."""

    billable: Dict[StrictStr, PlatformUsage]

    model_config = ConfigDict(extra="ignore")


class Acknowledgement(BaseModel):
    success: bool = True
    message: str


def parse_response(model: Type[T], payload: Any) -> T:
    """Validate a decoded JSON payload; never coerce a misshaped one."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise GitHubResponseParseError(
            f"Response did not match model {model.__name__}: {exc}",
            response=payload,
        ) from exc


__all__ = [
    "RunStatus",
    "JobFilter",
    "WorkflowState",
    "WorkflowId",
    "OwnerParam",
    "RepoParam",
    "WorkflowIdParam",
    "RunIdParam",
    "PageParam",
    "PerPageParam",
    "RepoInput",
    "ListWorkflowsInput",
    "WorkflowInput",
    "ListWorkflowRunsInput",
    "RunInput",
    "ListRunJobsInput",
    "TriggerWorkflowInput",
    "Actor",
    "PullRequestBranch",
    "PullRequestRef",
    "Workflow",
    "WorkflowList",
    "WorkflowRun",
    "WorkflowRunList",
    "Job",
    "JobList",
    "JobRunUsage",
    "PlatformUsage",
    "WorkflowUsage",
    "Acknowledgement",
    "parse_response",
]
