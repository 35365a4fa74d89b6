"""Persistent store for Jenkins credentials.

Credentials are kept in a JSON file keyed by server URL, together with the
username last entered by the user.  The default location is
``~/.jenkins_auth/config.json`` and can be overridden with the
``JENKINS_AUTH_CONFIG`` environment variable.

The file is always read and rewritten wholesale; the last writer wins.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
import threading
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from jenkins_auth.config import CONFIG_FILE
from jenkins_auth.errors import PersistenceError

logger = logging.getLogger(__name__)


def urls_equal(a: str, b: str) -> bool:
    """Compare two server URLs ignoring trailing slashes."""
    return a.rstrip("/") == b.rstrip("/")


@dataclass
class JenkinsAuth:
    """Credentials for a single Jenkins user."""

    username: str = ""
    api_token: str = ""
    bearer_token: str = ""

    def is_invalid(self) -> bool:
        return not self.api_token and not self.bearer_token


@dataclass
class JenkinsServer:
    """A Jenkins server and the auths known for it."""

    url: str
    auths: list[JenkinsAuth] = field(default_factory=list)


@dataclass
class JenkinsConfig:
    """In-memory view of the config file."""

    default_username: str = ""
    servers: list[JenkinsServer] = field(default_factory=list)

    def find_server(self, url: str) -> JenkinsServer | None:
        for server in self.servers:
            if urls_equal(server.url, url):
                return server
        return None

    def find_auths(self, url: str) -> list[JenkinsAuth]:
        """Return every auth stored for *url*."""
        server = self.find_server(url)
        if server is None:
            return []
        return list(server.auths)

    def find_auth(self, url: str, username: str = "") -> JenkinsAuth | None:
        """Return the auth for *username* on *url*.

        Without a username the first stored auth is returned.  No other
        disambiguation is attempted when several auths exist.
        """
        server = self.find_server(url)
        if server is None or not server.auths:
            return None
        if not username:
            return server.auths[0]
        for auth in server.auths:
            if auth.username == username:
                return auth
        return None

    def set_auth(self, url: str, auth: JenkinsAuth) -> None:
        """Store *auth* for *url*, replacing any auth with the same username."""
        server = self.find_server(url)
        if server is None:
            self.servers.append(JenkinsServer(url=url, auths=[auth]))
            return
        for i, existing in enumerate(server.auths):
            if existing.username == auth.username:
                server.auths[i] = auth
                return
        server.auths.append(auth)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JenkinsConfig":
        """Build a config from parsed JSON.

        Raises:
            TypeError: If a field has the wrong type.
            ValueError: If a server has no URL.
        """
        servers = []
        for server in _objects(data, "servers"):
            url = _string(server, "url")
            if not url:
                raise ValueError("server entry without a url")
            auths = [
                JenkinsAuth(
                    username=_string(a, "username"),
                    api_token=_string(a, "api_token"),
                    bearer_token=_string(a, "bearer_token"),
                )
                for a in _objects(server, "auths")
            ]
            servers.append(JenkinsServer(url=url, auths=auths))
        return cls(default_username=_string(data, "default_username"), servers=servers)


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


def _objects(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise TypeError(f"{key!r} must be a list of objects")
    return value


class AuthStore:
    """Thread-safe, file-backed store for :class:`JenkinsConfig`."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or CONFIG_FILE
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load(self) -> JenkinsConfig:
        """Load the config.  A missing file yields an empty config."""
        with self._lock:
            if not self.path.exists():
                logger.debug("No auth config at %s", self.path)
                return JenkinsConfig()
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if not isinstance(data, dict):
                    raise ValueError("top-level JSON value is not an object")
                return JenkinsConfig.from_dict(data)
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                raise PersistenceError(
                    f"Failed to load Jenkins auth config from {self.path}: {e}"
                ) from e

    def save(self, config: JenkinsConfig) -> None:
        """Atomically rewrite the config file with owner-only permissions."""
        with self._lock:
            try:
                self._ensure_dir()
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.path.parent, prefix=".config-", suffix=".tmp"
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        json.dump(config.to_dict(), fh, ensure_ascii=False, indent=2)
                        fh.write("\n")
                    # chmod 600, skip on Windows
                    if os.name != "nt":
                        os.chmod(tmp_name, stat.S_IRUSR | stat.S_IWUSR)
                    os.replace(tmp_name, self.path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as e:
                raise PersistenceError(
                    f"Failed to save Jenkins auth config to {self.path}: {e}"
                ) from e
        logger.debug("Saved auth config to %s", self.path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _ensure_dir(self) -> None:
        parent = self.path.parent
        if parent.exists():
            return
        parent.mkdir(parents=True, exist_ok=True)
        if os.name != "nt":
            parent.chmod(stat.S_IRWXU)
