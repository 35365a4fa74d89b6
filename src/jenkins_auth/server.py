"""Jenkins Auth MCP Server — inspect Jenkins credentials via MCP tools."""

from __future__ import annotations

from typing import Any

import jenkins
from fastmcp import FastMCP

from jenkins_auth.auth_store import AuthStore
from jenkins_auth.config import AuthSettings
from jenkins_auth.errors import JenkinsAuthError
from jenkins_auth.resolver import get_client

mcp = FastMCP("Jenkins Auth MCP Server")


def _format_error(e: Exception) -> dict[str, Any]:
    """Format an exception into a consistent error response."""
    return {"error": True, "message": str(e)}


# ---------------------------------------------------------------------------
# Tool 1: whoami
# ---------------------------------------------------------------------------
@mcp.tool
def whoami() -> dict[str, Any]:
    """Return the Jenkins user the resolved credentials authenticate as.

    Returns:
        A dict with the server URL, the user's id and full name.
    """
    try:
        handle = get_client()
        user = handle.api.get_whoami()
        return {
            "success": True,
            "url": handle.url,
            "id": user.get("id", ""),
            "full_name": user.get("fullName", ""),
        }
    except jenkins.JenkinsException as e:
        return _format_error(e)
    except JenkinsAuthError as e:
        return _format_error(e)


# ---------------------------------------------------------------------------
# Tool 2: get_server_version
# ---------------------------------------------------------------------------
@mcp.tool
def get_server_version() -> dict[str, Any]:
    """Return the version of the Jenkins server at JENKINS_URL."""
    try:
        handle = get_client()
        return {
            "success": True,
            "url": handle.url,
            "version": handle.api.get_version(),
        }
    except jenkins.JenkinsException as e:
        return _format_error(e)
    except JenkinsAuthError as e:
        return _format_error(e)


# ---------------------------------------------------------------------------
# Tool 3: list_configured_servers
# ---------------------------------------------------------------------------
@mcp.tool
def list_configured_servers() -> dict[str, Any]:
    """List the servers and usernames stored in the auth config file.

    Tokens are never returned.
    """
    try:
        store = AuthStore(AuthSettings.from_environ().config_path)
        config = store.load()
        servers = [
            {
                "url": server.url,
                "usernames": [a.username for a in server.auths],
            }
            for server in config.servers
        ]
        return {
            "success": True,
            "default_username": config.default_username,
            "total": len(servers),
            "servers": servers,
        }
    except JenkinsAuthError as e:
        return _format_error(e)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
