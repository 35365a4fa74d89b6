"""Resolve Jenkins credentials from the environment, the config file or the user.

Resolution order:

1. ``JENKINS_USERNAME``/``JENKINS_API_TOKEN`` or ``JENKINS_BEARER_TOKEN``.
2. The auth stored for the server in the config file.
3. An interactive form (never in batch mode), whose answers are saved.
"""

from __future__ import annotations

import logging

from rich.console import Console

from jenkins_auth.auth_store import AuthStore, JenkinsAuth, JenkinsConfig
from jenkins_auth.config import DEFAULT_USERNAME, ENV_API_TOKEN, AuthSettings, token_url
from jenkins_auth.errors import AuthenticationError, ConfigurationError
from jenkins_auth.jenkins_client import JenkinsHandle, build_client
from jenkins_auth.prompts import Prompter, RichPrompter

logger = logging.getLogger(__name__)


def resolve_client(
    url: str,
    batch: bool,
    store: AuthStore,
    settings: AuthSettings | None = None,
    prompter: Prompter | None = None,
    console: Console | None = None,
) -> JenkinsHandle:
    """Find valid credentials for *url* and return a client using them.

    Args:
        url: Jenkins server URL.
        batch: Never prompt; fail with remediation instructions instead.
        store: Where known auths are loaded from and saved to.
        settings: Environment-derived credentials and options.
        prompter: Used to ask for missing credentials.  Never consulted in
            batch mode.
        console: Where instructions are printed.

    Raises:
        ConfigurationError: If *url* is empty.
        PersistenceError: If the config file cannot be read or written.
        AuthenticationError: If no valid credentials could be obtained.
        InputCancelledError: If the user aborted the form.
    """
    if not url:
        raise ConfigurationError(
            "No Jenkins server URL given: set JENKINS_URL or pass the URL explicitly"
        )
    settings = settings or AuthSettings()
    console = console or Console()
    token_page = token_url(url)

    auth = JenkinsAuth(
        username=settings.username,
        api_token=settings.api_token,
        bearer_token=settings.bearer_token,
    )
    if auth.is_invalid():
        config = store.load()
        auths = config.find_auths(url)
        if len(auths) > 1:
            # TODO let the user choose between stored auths for the same server
            logger.debug("%d auths stored for %s, using the first match", len(auths), url)
        stored = config.find_auth(url, auth.username)
        if stored is not None and not stored.is_invalid():
            logger.debug("Using stored auth for %s (user %s)", url, stored.username)
            auth = stored
        elif not batch:
            auth = edit_auth(
                url,
                store,
                config,
                stored or auth,
                token_page,
                prompter or RichPrompter(console),
                console,
            )

    if auth.is_invalid():
        if batch:
            console.print(
                "No $JENKINS_USERNAME and $JENKINS_API_TOKEN environment variables defined!\n",
                markup=False,
            )
            console.print(
                f"Please go to {token_page} and click 'Show API Token' to get your API Token",
                markup=False,
                soft_wrap=True,
            )
            console.print("Then run this command on your terminal and try again:\n", markup=False)
            console.print(f"export {ENV_API_TOKEN}=myApiToken\n", markup=False)
            raise AuthenticationError(
                "No environment variables (JENKINS_USERNAME and JENKINS_API_TOKEN) "
                "or JENKINS_BEARER_TOKEN defined"
            )
        raise AuthenticationError(
            f"No valid username and API token specified for Jenkins server: {url}"
        )

    return build_client(url, auth, settings.insecure_skip_tls_verify)


def edit_auth(
    url: str,
    store: AuthStore,
    config: JenkinsConfig,
    auth: JenkinsAuth,
    token_page: str,
    prompter: Prompter,
    console: Console | None = None,
) -> JenkinsAuth:
    """Ask the user for a username and API token and save them for *url*."""
    console = console or Console()
    console.print(
        "\nTo be able to connect to the Jenkins server we need a username and API Token\n",
        markup=False,
    )
    console.print(
        f"Please go to {token_page} and click 'Show API Token' to get your API Token",
        markup=False,
        soft_wrap=True,
    )
    console.print(
        "Then COPY the API token so that you can paste it into the form below:\n",
        markup=False,
    )

    default_username = auth.username or config.default_username or DEFAULT_USERNAME
    username = prompter.ask_required("Jenkins user name", default_username)
    api_token = prompter.ask_required("Jenkins API Token", auth.api_token, secret=True)
    console.print()

    answers = JenkinsAuth(
        username=username, api_token=api_token, bearer_token=auth.bearer_token
    )
    config.set_auth(url, answers)
    config.default_username = username
    store.save(config)
    logger.info("Saved Jenkins auth for %s (user %s)", url, username)
    return answers


def get_client(settings: AuthSettings | None = None) -> JenkinsHandle:
    """Create a Jenkins client from environment variables without prompting.

    Environment variables:
        JENKINS_URL: Jenkins server URL (required)
        JENKINS_USERNAME / JENKINS_API_TOKEN: basic auth credentials
        JENKINS_BEARER_TOKEN: bearer token, used when no API token is set
        JENKINS_AUTH_CONFIG: config file consulted when the above are unset

    Instructions are printed to stderr so stdout stays free for protocol traffic.
    """
    settings = settings or AuthSettings.from_environ()
    return resolve_client(
        settings.url,
        batch=True,
        store=AuthStore(settings.config_path),
        settings=settings,
        console=Console(stderr=True),
    )
