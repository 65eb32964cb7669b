"""
userauth CLI application.

Command-line interface for running and inspecting the auth service.
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from userauth.config import load_auth_config
from userauth.errors import AuthError
from userauth.logging_utils import install_log_safety

# Initialize CLI app
app = typer.Typer(
    name="userauth",
    help="userauth - email/password authentication service",
    add_completion=False,
)

# Sub-command groups
users_app = typer.Typer(help="User directory commands")

app.add_typer(users_app, name="users")

console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
try:
    install_log_safety()
except Exception:
    # Logging should never prevent app startup.
    pass


def _service():
    from userauth.auth.service import AuthService
    from userauth.web.server import build_sql_directory

    config = load_auth_config()
    return AuthService(config, build_sql_directory(config.database_url))


# ==================== DATABASE ====================


@app.command("init-db")
def init_database():
    """Create the users table."""
    from userauth.web.server import build_sql_directory

    config = load_auth_config()
    build_sql_directory(config.database_url)
    console.print("[green]✅ Database initialized[/green]")
    console.print(f"\n[dim]Database: {config.database_url}[/dim]")


# ==================== USER COMMANDS ====================


@users_app.command("show")
def users_show(email: str = typer.Argument(..., help="Account email")):
    """Show a user's profile and token state."""
    service = _service()
    user = service.directory.find_by_email(email)
    if not user:
        console.print(f"[red]User {email} not found[/red]")
        raise typer.Exit(1)

    table = Table(title=f"User {user.email}")
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("ID", user.id)
    table.add_row("Email", user.email)
    table.add_row("Subscription", user.subscription)
    table.add_row("Gender", user.gender or "-")
    table.add_row("Avatar", user.avatar_url or "-")
    table.add_row("Verified", "[green]yes[/green]" if user.is_verified else "[yellow]no[/yellow]")
    table.add_row("Logged in", "yes" if user.is_logged_in else "no")
    table.add_row("Created", str(user.created_at) if user.created_at else "-")

    console.print(table)


@users_app.command("verify")
def users_verify(token: str = typer.Argument(..., help="Verification token")):
    """Consume an email verification token."""
    service = _service()
    try:
        user = asyncio.run(service.verify_email(token))
    except AuthError as e:
        console.print(f"[red]Verification failed: {e.message}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✅ Verified {user.email}[/green]")


# ==================== WEB SERVER ====================


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start the API server."""
    import uvicorn

    console.print(
        Panel(
            f"[bold]userauth API[/bold]\n\n"
            f"Listening on: [cyan]http://{host}:{port}[/cyan]\n\n"
            f"Press Ctrl+C to stop the server",
            title="Web Server",
            border_style="green",
        )
    )

    uvicorn.run(
        "userauth.web.server:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# ==================== MAIN ====================


@app.callback()
def main():
    """
    userauth

    Registration, login, bearer-token authorization and email
    verification for a single service.

    QUICK START:

    1. Create the database: userauth init-db
    2. Start the API: userauth serve
    """
    pass


if __name__ == "__main__":
    app()
