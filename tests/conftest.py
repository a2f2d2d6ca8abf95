import json
from pathlib import Path

import pytest
from github_actions_mcp.core.client import GitHubActionsClient
from github_actions_mcp.core.config import GitHubConfig

API = "https://api.github.com"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def config():
    return GitHubConfig(token="test-token", timeout_seconds=5.0)


@pytest.fixture
def client(config):
    return GitHubActionsClient(config)


@pytest.fixture
def load_fixture():
    def _load(name: str):
        with open(FIXTURES_DIR / name, encoding="utf-8") as f:
            return json.load(f)

    return _load
