from __future__ import annotations

import asyncio
import os

from mcp.server.fastmcp import FastMCP

from github_actions_mcp.core.client import GitHubActionsClient
from github_actions_mcp.core.config import load_config
from github_actions_mcp.core.logging import setup_logging
from github_actions_mcp.core.registry import register_discovered_tools

SERVER_NAME = "github-actions-mcp"


def create_client_from_env() -> GitHubActionsClient:
    return GitHubActionsClient(load_config())


def create_app(client: GitHubActionsClient) -> FastMCP:
    app = FastMCP(SERVER_NAME)
    register_discovered_tools(app, client)
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    app = create_app(create_client_from_env())
    await app.run_stdio_async()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
