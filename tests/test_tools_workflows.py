import json

import pytest
import respx
from github_actions_mcp.core.errors import (
    GitHubResourceNotFoundError,
    GitHubResponseParseError,
    GitHubValidationError,
)
from github_actions_mcp.core.models import Acknowledgement, Workflow, WorkflowList
from github_actions_mcp.core.tools.workflows import (
    get_workflow,
    get_workflow_usage,
    list_workflows,
    trigger_workflow,
)
from httpx import Response

BASE = "https://api.github.com/repos/octo-org/hello-world/actions"


@pytest.mark.asyncio
@respx.mock
async def test_list_workflows_with_pagination(client, load_fixture):
    route = respx.get(f"{BASE}/workflows").mock(
        return_value=Response(200, json=load_fixture("workflow_list.json"))
    )

    result = await list_workflows(
        client, "Octo-Org", "hello-world", page=2, per_page=10
    )

    assert isinstance(result, WorkflowList)
    assert result.total_count == 2
    assert [w.name for w in result.workflows] == ["CI", "Linter"]
    assert route.calls.last.request.url.query == b"page=2&per_page=10"


@pytest.mark.asyncio
@respx.mock
async def test_list_workflows_without_pagination_sends_no_query(client, load_fixture):
    route = respx.get(f"{BASE}/workflows").mock(
        return_value=Response(200, json=load_fixture("workflow_list.json"))
    )

    await list_workflows(client, "octo-org", "hello-world")

    assert route.calls.last.request.url.query == b""


@pytest.mark.asyncio
@respx.mock
async def test_get_workflow_by_file_name(client, load_fixture):
    payload = load_fixture("workflow_list.json")["workflows"][0]
    route = respx.get(f"{BASE}/workflows/ci.yml").mock(
        return_value=Response(200, json=payload)
    )

    result = await get_workflow(client, "octo-org", "hello-world", "ci.yml")

    assert route.called
    assert isinstance(result, Workflow)
    assert result.path == ".github/workflows/ci.yml"


@pytest.mark.asyncio
@respx.mock
async def test_get_workflow_by_numeric_id(client, load_fixture):
    payload = load_fixture("workflow_list.json")["workflows"][0]
    route = respx.get(f"{BASE}/workflows/161335").mock(
        return_value=Response(200, json=payload)
    )

    result = await get_workflow(client, "octo-org", "hello-world", 161335)

    assert route.called
    assert result.id == 161335


@pytest.mark.asyncio
@respx.mock
async def test_get_workflow_not_found(client):
    respx.get(f"{BASE}/workflows/missing.yml").mock(
        return_value=Response(404, json={"message": "Not Found"})
    )

    with pytest.raises(GitHubResourceNotFoundError):
        await get_workflow(client, "octo-org", "hello-world", "missing.yml")


@pytest.mark.asyncio
@respx.mock
async def test_get_workflow_rejects_misshaped_payload(client):
    respx.get(f"{BASE}/workflows/1").mock(
        return_value=Response(200, json={"id": 1, "name": "CI"})
    )

    with pytest.raises(GitHubResponseParseError):
        await get_workflow(client, "octo-org", "hello-world", 1)


@pytest.mark.asyncio
@respx.mock
async def test_get_workflow_usage(client, load_fixture):
    route = respx.get(f"{BASE}/workflows/ci.yml/timing").mock(
        return_value=Response(200, json=load_fixture("workflow_usage.json"))
    )

    usage = await get_workflow_usage(client, "octo-org", "hello-world", "ci.yml")

    assert route.called
    assert usage.billable["MACOS"].jobs == 4


@pytest.mark.asyncio
@respx.mock
async def test_trigger_workflow_without_inputs_sends_only_ref(client):
    route = respx.post(f"{BASE}/workflows/deploy.yml/dispatches").mock(
        return_value=Response(204)
    )

    result = await trigger_workflow(
        client, "octo-org", "hello-world", "deploy.yml", "main"
    )

    assert json.loads(route.calls.last.request.content) == {"ref": "main"}
    assert isinstance(result, Acknowledgement)
    assert result.success is True
    assert result.message == "Workflow deploy.yml triggered on main"


@pytest.mark.asyncio
@respx.mock
async def test_trigger_workflow_with_empty_inputs_sends_only_ref(client):
    route = respx.post(f"{BASE}/workflows/42/dispatches").mock(
        return_value=Response(204)
    )

    await trigger_workflow(client, "octo-org", "hello-world", 42, "v1.0", inputs={})

    assert json.loads(route.calls.last.request.content) == {"ref": "v1.0"}


@pytest.mark.asyncio
@respx.mock
async def test_trigger_workflow_includes_inputs_verbatim(client):
    route = respx.post(f"{BASE}/workflows/deploy.yml/dispatches").mock(
        return_value=Response(204)
    )
    inputs = {"environment": "staging", "debug": "true"}

    await trigger_workflow(
        client, "octo-org", "hello-world", "deploy.yml", "main", inputs=inputs
    )

    assert json.loads(route.calls.last.request.content) == {
        "ref": "main",
        "inputs": inputs,
    }


@pytest.mark.asyncio
@respx.mock
async def test_trigger_workflow_invalid_ref_upstream_is_validation(client):
    respx.post(f"{BASE}/workflows/deploy.yml/dispatches").mock(
        return_value=Response(422, json={"message": "No ref found for: nope"})
    )

    with pytest.raises(GitHubValidationError) as exc:
        await trigger_workflow(client, "octo-org", "hello-world", "deploy.yml", "nope")

    assert exc.value.status_code == 422
    assert exc.value.response == {"message": "No ref found for: nope"}


@pytest.mark.asyncio
@respx.mock
async def test_invalid_input_never_reaches_network(client):
    route = respx.route().mock(return_value=Response(200, json={}))

    with pytest.raises(GitHubValidationError) as exc:
        await trigger_workflow(client, "-octo", "bad repo", "ci.yml", "")

    fields = {e["field"] for e in exc.value.field_errors}
    assert fields == {"owner", "repo", "ref"}
    assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_trigger_workflow_escapes_workflow_id_segment(client):
    route = respx.post(host="api.github.com").mock(return_value=Response(204))

    result = await trigger_workflow(
        client, "octo-org", "hello-world", "../runs/5/cancel#", "main"
    )

    request = route.calls.last.request
    assert request.url.raw_path == (
        b"/repos/octo-org/hello-world/actions/workflows/"
        b"..%2Fruns%2F5%2Fcancel%23/dispatches"
    )
    assert result.message == "Workflow ../runs/5/cancel# triggered on main"


@pytest.mark.asyncio
@respx.mock
async def test_get_workflow_id_with_query_characters_stays_in_path(client):
    route = respx.get(host="api.github.com").mock(
        return_value=Response(404, json={"message": "Not Found"})
    )

    with pytest.raises(GitHubResourceNotFoundError):
        await get_workflow(client, "octo-org", "hello-world", "a/b#c?x=1")

    url = route.calls.last.request.url
    assert url.raw_path == (
        b"/repos/octo-org/hello-world/actions/workflows/a%2Fb%23c%3Fx%3D1"
    )
    assert url.query == b""
