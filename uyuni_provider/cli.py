"""
Uyuni Provider CLI - manage Uyuni users from the command line.
"""

import logging

import typer
from rich.console import Console
from rich.table import Table

from .errors import ConfigurationError, UyuniProviderError
from .provider import ProviderConfig, UyuniProvider
from .resources import UserModel
from .settings import get_settings

# Setup
app = typer.Typer(
    name="uyuni-provider",
    help="Manage Uyuni users the way the uyuni provider does",
    add_completion=False,
)
console = Console()


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _configure_provider(ctx: typer.Context) -> UyuniProvider:
    """Configure the provider from the global options.

    Raises:
        SystemExit: If the provider cannot be configured
    """
    provider = UyuniProvider()
    try:
        provider.configure(ctx.obj)
    except ConfigurationError as e:
        _handle_command_error(e, "configuration")
    return provider


def _handle_command_error(e: Exception, command_type: str) -> None:
    """Print an error with its diagnostics and exit.

    Args:
        e: Exception that occurred
        command_type: Type of command (for error message context)

    Raises:
        SystemExit: Always exits with code 1
    """
    console.print(f"\n[bold red]✗ {command_type.capitalize()} failed:[/bold red]")
    if isinstance(e, ConfigurationError):
        for diagnostic in e.diagnostics:
            console.print(f"  • {diagnostic.summary}")
            if diagnostic.detail:
                console.print(f"    [dim]{diagnostic.detail}[/dim]")
    else:
        console.print(f"  {e}")

    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    host: str = typer.Option(
        None, "--host", help="Uyuni server host (overrides UYUNI_HOST)"
    ),
    username: str = typer.Option(
        None, "--username", help="Uyuni API user (overrides UYUNI_USERNAME)"
    ),
    password: str = typer.Option(
        None, "--password", help="Uyuni API password (overrides UYUNI_PASSWORD)"
    ),
):
    """Manage Uyuni users."""
    configure_logging()
    ctx.obj = ProviderConfig(host=host, username=username, password=password)


@app.command()
def users(ctx: typer.Context):
    """List all users."""
    provider = _configure_provider(ctx)
    try:
        result = provider.data_sources()[0].read()
    except UyuniProviderError as e:
        _handle_command_error(e, "listing")
    finally:
        provider.client.close()

    table = Table(title="Uyuni users")
    table.add_column("ID", justify="right")
    table.add_column("Login")
    for entry in result.users:
        table.add_row(str(entry.id), entry.login)
    console.print(table)


@app.command()
def show(ctx: typer.Context, login: str = typer.Argument(..., help="User login")):
    """Show the details of one user."""
    provider = _configure_provider(ctx)
    try:
        details = provider.resources()[0].details(login)
    except UyuniProviderError as e:
        _handle_command_error(e, "read")
    finally:
        provider.client.close()

    table = Table(title=f"User {login}", show_header=False)
    for key, value in details.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def create(
    ctx: typer.Context,
    login: str = typer.Argument(..., help="User login"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, help="Password of the new user"
    ),
    firstname: str = typer.Option(..., "--firstname", help="First name"),
    lastname: str = typer.Option(..., "--lastname", help="Last name"),
    email: str = typer.Option(..., "--email", help="E-mail address"),
):
    """Create a user."""
    provider = _configure_provider(ctx)
    resource = provider.resources()[0]
    try:
        plan = resource.validate(
            {
                "login": login,
                "password": password,
                "firstname": firstname,
                "lastname": lastname,
                "email": email,
            }
        )
        resource.create(plan)
    except UyuniProviderError as e:
        _handle_command_error(e, "create")
    finally:
        provider.client.close()

    console.print(f"\n[bold green]✓ User {login} created[/bold green]")


@app.command()
def delete(ctx: typer.Context, login: str = typer.Argument(..., help="User login")):
    """Delete a user."""
    provider = _configure_provider(ctx)
    resource = provider.resources()[0]
    state = UserModel(login=login, password="", firstname="", lastname="", email="")
    try:
        resource.delete(state)
    except UyuniProviderError as e:
        _handle_command_error(e, "delete")
    finally:
        provider.client.close()

    console.print(f"\n[bold green]✓ User {login} deleted[/bold green]")


@app.command()
def version():
    """Show the provider version."""
    from . import __version__

    console.print(f"Uyuni provider version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
