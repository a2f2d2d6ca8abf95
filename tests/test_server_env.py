import pytest
from github_actions_mcp.core.client import GitHubActionsClient
from github_actions_mcp.core.config import GitHubConfig, MissingTokenError
from github_actions_mcp.server import create_app, create_client_from_env


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    # Prevent load_dotenv from repopulating values from .env
    monkeypatch.setattr(
        "github_actions_mcp.core.config.load_dotenv", lambda *a, **k: None
    )
    monkeypatch.delenv("GITHUB_API_URL", raising=False)
    monkeypatch.delenv("GITHUB_TIMEOUT_SECONDS", raising=False)


def test_create_client_from_env_missing_token(monkeypatch):
    monkeypatch.delenv("GITHUB_PERSONAL_ACCESS_TOKEN", raising=False)

    with pytest.raises(MissingTokenError) as exc:
        create_client_from_env()

    assert "Missing GITHUB_PERSONAL_ACCESS_TOKEN" in str(exc.value)


def test_create_client_from_env(monkeypatch):
    monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "ghp_example")

    client = create_client_from_env()

    assert isinstance(client, GitHubActionsClient)
    assert client.base_url == "https://api.github.com"
    assert client.timeout_seconds == 30.0


@pytest.mark.asyncio
async def test_create_app_registers_tools():
    app = create_app(GitHubActionsClient(GitHubConfig(token="t")))

    names = {t.name for t in await app.list_tools()}
    assert "trigger_workflow" in names
    assert len(names) == 9
