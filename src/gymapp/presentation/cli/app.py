"""GymApp CLI application using Typer.

Command-line utilities for deployment and maintenance: secret generation,
schema creation and refresh token cleanup.
"""

import asyncio
import secrets

import typer
from rich.console import Console

from gymapp.presentation.api.dependencies import (
    build_authentication_service,
    create_tables,
    get_engine,
    get_session_maker,
)
from gymapp_config.settings import get_settings

app = typer.Typer(
    name="gymapp",
    help="GymApp backend CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(
    name="db",
    help="Database schema utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

tokens_app = typer.Typer(
    name="tokens",
    help="Refresh token maintenance",
    no_args_is_help=True,
)
app.add_typer(tokens_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for GymApp configuration.

    Generates the two required secrets:
    - JWT_SECRET_KEY: Secret for signing JWT authentication tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]GymApp Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 random bytes, well above the HS256 key size
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]⚠  Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


async def _init_db() -> None:
    engine = get_engine()
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


@db_app.command("init")
def init_db() -> None:
    """Create all missing database tables."""
    asyncio.run(_init_db())
    console.print("[green]Database schema is up to date.[/green]")


async def _purge_expired() -> int:
    engine = get_engine()
    try:
        async with get_session_maker()() as session:
            auth_service = build_authentication_service(session, get_settings())
            removed = await auth_service.purge_expired_refresh_tokens()
            await session.commit()
    finally:
        await engine.dispose()
    return removed


@tokens_app.command("purge-expired")
def purge_expired_tokens() -> None:
    """Delete refresh tokens whose expiry has passed."""
    removed = asyncio.run(_purge_expired())
    console.print(f"[green]Removed {removed} expired refresh token(s).[/green]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
