"""Global configuration constants and the environment-backed settings object."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

# ── Environment variables ──────────────────────────────────────────
ENV_URL = "JENKINS_URL"
ENV_USERNAME = "JENKINS_USERNAME"
ENV_API_TOKEN = "JENKINS_API_TOKEN"
ENV_BEARER_TOKEN = "JENKINS_BEARER_TOKEN"
ENV_CONFIG_PATH = "JENKINS_AUTH_CONFIG"
ENV_INSECURE_SKIP_VERIFY = "JENKINS_INSECURE_SKIP_VERIFY"

# ── Jenkins ────────────────────────────────────────────────────────
DEFAULT_USERNAME = "admin"
# Page where a user can generate an API token, relative to the server URL.
TOKEN_PAGE_PATH = "/me/configure"

# ── Storage ────────────────────────────────────────────────────────
JENKINS_AUTH_DIR = Path.home() / ".jenkins_auth"
CONFIG_FILE = JENKINS_AUTH_DIR / "config.json"

_FALSE_VALUES = {"0", "false", "no", "off"}


def token_url(server_url: str) -> str:
    """Return the API token page for *server_url*."""
    return server_url.rstrip("/") + TOKEN_PAGE_PATH


@dataclass
class AuthSettings:
    """Everything the resolver would otherwise read from the environment."""

    url: str = ""
    username: str = ""
    api_token: str = ""
    bearer_token: str = ""
    config_path: Path = field(default_factory=lambda: CONFIG_FILE)
    # Skipping verification keeps self-signed internal servers working.
    insecure_skip_tls_verify: bool = True

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "AuthSettings":
        env = os.environ if environ is None else environ
        config_path = env.get(ENV_CONFIG_PATH)
        insecure = env.get(ENV_INSECURE_SKIP_VERIFY, "true").strip().lower()
        return cls(
            url=env.get(ENV_URL, ""),
            username=env.get(ENV_USERNAME, ""),
            api_token=env.get(ENV_API_TOKEN, ""),
            bearer_token=env.get(ENV_BEARER_TOKEN, ""),
            config_path=Path(config_path) if config_path else CONFIG_FILE,
            insecure_skip_tls_verify=insecure not in _FALSE_VALUES,
        )
