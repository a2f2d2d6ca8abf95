import copy

import pytest
from github_actions_mcp.core.errors import ErrorKind, GitHubResponseParseError
from github_actions_mcp.core.models import (
    JobList,
    WorkflowList,
    WorkflowRun,
    WorkflowUsage,
    parse_response,
)


@pytest.mark.parametrize(
    "model, fixture",
    [
        (WorkflowList, "workflow_list.json"),
        (WorkflowRun, "workflow_run.json"),
        (JobList, "job_list.json"),
        (WorkflowUsage, "workflow_usage.json"),
    ],
)
def test_payload_parses_without_losing_fields(load_fixture, model, fixture):
    payload = load_fixture(fixture)

    parsed = parse_response(model, payload)

    assert parsed.model_dump(exclude_unset=True) == payload


def test_unknown_fields_are_ignored(load_fixture):
    payload = load_fixture("workflow_run.json")
    payload["repository"] = {"id": 1, "full_name": "octo-org/octo-repo"}
    payload["head_commit"] = {"id": "abc"}

    run = parse_response(WorkflowRun, payload)

    assert run.id == 30433642
    assert not hasattr(run, "repository")


def test_nullable_run_fields_accept_null(load_fixture):
    payload = load_fixture("workflow_run.json")
    payload.update(status="queued", conclusion=None, head_branch=None)
    payload["pull_requests"] = None

    run = parse_response(WorkflowRun, payload)

    assert run.conclusion is None
    assert run.pull_requests is None


@pytest.mark.parametrize("field", ["id", "head_sha", "conclusion", "workflow_id"])
def test_missing_required_run_field_is_hard_failure(load_fixture, field):
    payload = load_fixture("workflow_run.json")
    del payload[field]

    with pytest.raises(GitHubResponseParseError) as exc:
        parse_response(WorkflowRun, payload)

    assert field in str(exc.value)
    assert exc.value.kind is ErrorKind.GENERIC
    assert exc.value.response == payload


def test_wrong_type_is_not_coerced(load_fixture):
    payload = load_fixture("workflow_list.json")
    payload["total_count"] = "2"

    with pytest.raises(GitHubResponseParseError):
        parse_response(WorkflowList, payload)


def test_nested_shape_errors_fail_the_whole_payload(load_fixture):
    payload = load_fixture("job_list.json")
    broken = copy.deepcopy(payload)
    del broken["jobs"][0]["started_at"]

    with pytest.raises(GitHubResponseParseError) as exc:
        parse_response(JobList, broken)

    assert "JobList" in str(exc.value)


def test_unknown_workflow_state_is_rejected(load_fixture):
    payload = load_fixture("workflow_list.json")
    payload["workflows"][0]["state"] = "sleeping"

    with pytest.raises(GitHubResponseParseError):
        parse_response(WorkflowList, payload)


def test_usage_billable_is_keyed_by_platform(load_fixture):
    usage = parse_response(WorkflowUsage, load_fixture("workflow_usage.json"))

    assert usage.billable["UBUNTU"].total_ms == 180000
    assert usage.billable["UBUNTU"].job_runs[0].duration_ms == 180000
    assert usage.billable["WINDOWS"].jobs is None


def test_none_payload_is_a_parse_error():
    with pytest.raises(GitHubResponseParseError):
        parse_response(WorkflowList, None)
