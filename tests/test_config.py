"""Tests for environment-derived settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from jenkins_auth.config import CONFIG_FILE, AuthSettings, token_url


class TestTokenUrl:
    def test_appends_configure_page(self):
        assert token_url("http://jenkins.example.com") == "http://jenkins.example.com/me/configure"

    def test_trailing_slash(self):
        assert token_url("http://jenkins.example.com/") == "http://jenkins.example.com/me/configure"


class TestAuthSettings:
    def test_empty_environment(self):
        settings = AuthSettings.from_environ({})

        assert settings.url == ""
        assert settings.username == ""
        assert settings.api_token == ""
        assert settings.bearer_token == ""
        assert settings.config_path == CONFIG_FILE
        assert settings.insecure_skip_tls_verify is True

    def test_reads_credentials(self):
        settings = AuthSettings.from_environ(
            {
                "JENKINS_URL": "http://j",
                "JENKINS_USERNAME": "alice",
                "JENKINS_API_TOKEN": "tok",
                "JENKINS_BEARER_TOKEN": "bear",
                "JENKINS_AUTH_CONFIG": "/tmp/auth.json",
            }
        )

        assert settings.url == "http://j"
        assert settings.username == "alice"
        assert settings.api_token == "tok"
        assert settings.bearer_token == "bear"
        assert settings.config_path == Path("/tmp/auth.json")

    @pytest.mark.parametrize("value", ["false", "0", "No", " OFF "])
    def test_tls_verification_can_be_enabled(self, value):
        settings = AuthSettings.from_environ({"JENKINS_INSECURE_SKIP_VERIFY": value})

        assert settings.insecure_skip_tls_verify is False

    def test_defaults_to_os_environ(self, monkeypatch):
        monkeypatch.setenv("JENKINS_USERNAME", "from-os")

        assert AuthSettings.from_environ().username == "from-os"
