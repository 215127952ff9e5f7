"""Sigil CLI application using Typer.

This module provides command-line utilities for the Sigil backend:
signing key generation, database initialization, and running the API.
"""

import asyncio
from pathlib import Path

import typer
import uvicorn
from rich.console import Console

from sigil.infrastructure.persistence.sqlalchemy import create_tables
from sigil.infrastructure.persistence.sqlalchemy.init_db import create_engine_from_url
from sigil_auth import SigningKeyPair
from sigil_config.settings import get_config_dir, get_settings

app = typer.Typer(
    name="sigil",
    help="Sigil - email/password authentication service CLI",
    no_args_is_help=True,
)
console = Console()


keys_app = typer.Typer(
    name="keys",
    help="Signing key utilities",
    no_args_is_help=True,
)
app.add_typer(keys_app)

db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)


@keys_app.command("generate")
def generate_keys(
    out_dir: Path | None = typer.Option(
        None,
        "--out-dir",
        "-o",
        help="Directory for private.pem and public.pem (default: config/keys)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite existing key files",
    ),
) -> None:
    """Generate an Ed25519 key pair for signing session tokens.

    The private key must stay on the issuing host. The public key can be
    handed to any service that needs to verify tokens.
    """
    target = out_dir or get_config_dir() / "keys"
    private_path = target / "private.pem"
    public_path = target / "public.pem"

    existing = [p for p in (private_path, public_path) if p.exists()]
    if existing and not force:
        for path in existing:
            console.print(f"[red]Refusing to overwrite[/red] {path}")
        console.print("Pass [bold]--force[/bold] to replace existing keys.")
        raise typer.Exit(code=1)

    key_pair = SigningKeyPair.generate()
    target.mkdir(parents=True, exist_ok=True)
    private_path.write_bytes(key_pair.private_pem())
    private_path.chmod(0o600)
    public_path.write_bytes(key_pair.public_pem())

    console.print("\n[bold green]Sigil Signing Keys[/bold green]")
    console.print("=" * 60)
    console.print(f"[cyan]Private key[/cyan]: {private_path}")
    console.print(f"[cyan]Public key[/cyan]:  {public_path}")
    console.print(
        "\n[yellow]Keep the private key secret. Set JWT_PRIVATE_KEY_FILE "
        "if you store it elsewhere.[/yellow]\n"
    )


@db_app.command("init")
def init_db() -> None:
    """Create database tables for the configured DATABASE_URL (idempotent)."""
    settings = get_settings()

    async def _run() -> None:
        engine = create_engine_from_url(settings.database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[bold green]Database initialized[/bold green]")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Bind port (default: API_PORT)"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "sigil.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,  # Logging is configured by create_app
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
