"""Jenkins Auth CLI — powered by Typer."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jenkins_auth.auth_store import AuthStore
from jenkins_auth.config import AuthSettings, token_url
from jenkins_auth.errors import ConfigurationError, JenkinsAuthError

app = typer.Typer(
    name="jenkins-auth",
    help="🔐 Manage credentials for Jenkins servers",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


def _mask(token: str) -> str:
    if not token:
        return "—"
    if len(token) <= 4:
        return "****"
    return f"****{token[-4:]}"


# ── Auth commands ───────────────────────────────────────────────────


@app.command("login")
def login(
    url: Optional[str] = typer.Argument(
        None, help="Jenkins server URL. Defaults to the JENKINS_URL env var."
    ),
    batch: bool = typer.Option(
        False, "--batch", "-b", help="Never prompt; fail if no credentials are found."
    ),
) -> None:
    """Resolve credentials for a Jenkins server and verify them."""
    import jenkins

    from jenkins_auth.resolver import resolve_client

    settings = AuthSettings.from_environ()
    store = AuthStore(settings.config_path)

    try:
        handle = resolve_client(
            url or settings.url, batch, store, settings=settings, console=console
        )
    except JenkinsAuthError as e:
        console.print(f"[bold red]❌ {escape(str(e))}[/]")
        raise typer.Exit(1)

    try:
        user = handle.api.get_whoami()
    except jenkins.JenkinsException as e:
        console.print(f"[bold red]❌ Jenkins rejected the credentials:[/] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(
        f"[bold green]✅ Authenticated as {escape(str(user.get('id', handle.auth.username)))}[/]"
    )
    console.print(f"[dim]   Server: {escape(handle.url)}[/]", soft_wrap=True)


@app.command("configure")
def configure(
    url: Optional[str] = typer.Argument(
        None, help="Jenkins server URL. Defaults to the JENKINS_URL env var."
    ),
) -> None:
    """Enter (or replace) the username and API token stored for a server."""
    from jenkins_auth.auth_store import JenkinsAuth
    from jenkins_auth.prompts import RichPrompter
    from jenkins_auth.resolver import edit_auth

    settings = AuthSettings.from_environ()
    store = AuthStore(settings.config_path)
    server_url = url or settings.url

    try:
        if not server_url:
            raise ConfigurationError(
                "No Jenkins server URL given: set JENKINS_URL or pass the URL explicitly"
            )
        config = store.load()
        current = config.find_auth(server_url, settings.username) or JenkinsAuth(
            username=settings.username
        )
        auth = edit_auth(
            server_url,
            store,
            config,
            current,
            token_url(server_url),
            RichPrompter(console),
            console,
        )
    except JenkinsAuthError as e:
        console.print(f"[bold red]❌ {escape(str(e))}[/]")
        raise typer.Exit(1)

    console.print(f"[bold green]✅ Saved credentials for {escape(auth.username)}[/]")
    console.print(f"[dim]   Config: {escape(str(store.path))}[/]", soft_wrap=True)


@app.command("servers")
def list_servers() -> None:
    """List the servers stored in the auth config file."""
    store = AuthStore(AuthSettings.from_environ().config_path)
    try:
        config = store.load()
    except JenkinsAuthError as e:
        console.print(f"[bold red]❌ {escape(str(e))}[/]")
        raise typer.Exit(1)

    if not config.servers:
        console.print("[yellow]No Jenkins servers configured[/]")
        return

    table = Table(title="🔐 Jenkins Servers", show_lines=False)
    table.add_column("URL", style="cyan", no_wrap=True)
    table.add_column("Username", style="white")
    table.add_column("API Token", style="dim")

    for server in config.servers:
        for auth in server.auths:
            table.add_row(escape(server.url), escape(auth.username), _mask(auth.api_token))

    console.print(table)
    if config.default_username:
        console.print(f"\n[dim]Default username: {escape(config.default_username)}[/]")


# ── Serve command ───────────────────────────────────────────────────


@app.command("serve")
def serve() -> None:
    """Start the MCP server on stdio."""
    from jenkins_auth.server import mcp

    mcp.run()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
