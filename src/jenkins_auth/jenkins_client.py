"""Jenkins client construction for resolved credentials."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import jenkins
import requests

from jenkins_auth.auth_store import JenkinsAuth

logger = logging.getLogger(__name__)


class NoRedirectSession(requests.Session):
    """Session that hands redirect responses back to the caller."""

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        kwargs["allow_redirects"] = False
        return super().send(request, **kwargs)


@dataclass
class JenkinsHandle:
    """A ready-to-use Jenkins API client and the credentials it was built from."""

    url: str
    auth: JenkinsAuth
    api: jenkins.Jenkins
    session: requests.Session


def build_client(
    url: str, auth: JenkinsAuth, insecure_skip_tls_verify: bool = True
) -> JenkinsHandle:
    """Create a Jenkins client for *url* authenticated with *auth*.

    Args:
        url: Jenkins server URL.
        auth: Resolved credentials.  An API token is sent with basic auth;
            otherwise the bearer token is sent in the Authorization header.
        insecure_skip_tls_verify: Disable TLS certificate verification, for
            servers with self-signed certificates.

    Returns:
        A :class:`JenkinsHandle` owning the configured client.
    """
    session = NoRedirectSession()
    session.verify = not insecure_skip_tls_verify
    if insecure_skip_tls_verify:
        logger.warning("TLS certificate verification is disabled for %s", url)

    if auth.api_token:
        api = jenkins.Jenkins(url, username=auth.username, password=auth.api_token)
    else:
        api = jenkins.Jenkins(url)
        if auth.bearer_token:
            session.headers["Authorization"] = f"Bearer {auth.bearer_token}"

    # python-jenkins has no public hook for the HTTP session.
    api._session = session
    return JenkinsHandle(url=url, auth=auth, api=api, session=session)
