"""CLI commands for API management.

This module provides commands for running the OJT Tracker REST API,
issuing access tokens, and checking the API configuration.
"""

import sys
from datetime import timedelta
from pathlib import Path
from typing import Optional

import click

from ojt_tracker.api.auth import create_token_for_user
from ojt_tracker.api.server import run_server
from ojt_tracker.cli.context import load_config


@click.group()
def api() -> None:
    """API server management commands."""
    pass


@api.command()
@click.option("--host", default=None, help="Host address (default: from config)")
@click.option("--port", type=int, default=None, help="Port number (default: from config)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.option("--ssl-cert", type=click.Path(exists=True), help="Path to SSL certificate file")
@click.option("--ssl-key", type=click.Path(exists=True), help="Path to SSL key file")
@click.pass_context
def serve(
    ctx: click.Context,
    host: Optional[str],
    port: Optional[int],
    reload: bool,
    ssl_cert: Optional[str],
    ssl_key: Optional[str],
) -> None:
    """Start the API server.

    Examples:
        ojt-tracker api serve
        ojt-tracker api serve --host 0.0.0.0 --port 8080
        ojt-tracker api serve --reload  # Development mode
    """
    config = load_config(ctx)
    config.ensure_api_secret_key()

    final_host = host or config.get("api.host", "localhost")
    final_port = port or config.get("api.port", 8000)

    ssl_cert_path = Path(ssl_cert) if ssl_cert and ssl_key else None
    ssl_key_path = Path(ssl_key) if ssl_cert and ssl_key else None

    protocol = "https" if ssl_cert_path else "http"
    click.echo("🚀 Starting OJT Tracker API server...")
    click.echo(f"   URL: {protocol}://{final_host}:{final_port}")
    click.echo(f"   Docs: {protocol}://{final_host}:{final_port}/docs")
    if reload:
        click.echo("   Mode: Development (auto-reload enabled)")
    click.echo()

    try:
        run_server(
            config=config,
            host=final_host,
            port=final_port,
            reload=reload,
            workers=config.get("api.workers", 1),
            ssl_certfile=ssl_cert_path,
            ssl_keyfile=ssl_key_path,
        )
    except KeyboardInterrupt:
        click.echo("\n\n👋 Shutting down API server...")
    except Exception as e:
        click.echo(click.style(f"❌ Error starting server: {e}", fg="red"), err=True)
        sys.exit(1)


@api.group()
def token() -> None:
    """Manage API authentication tokens."""
    pass


@token.command("create")
@click.option("--user-id", required=True, help="Principal id that will own entries")
@click.option("--email", default=None, help="Email claim for the token")
@click.option("--expires", type=int, help="Token expiry time in hours (default: from config)")
@click.pass_context
def create_token_cmd(
    ctx: click.Context, user_id: str, email: Optional[str], expires: Optional[int]
) -> None:
    """Create a new authentication token.

    Examples:
        ojt-tracker api token create --user-id alice
        ojt-tracker api token create --user-id alice --expires 48
    """
    config = load_config(ctx)

    if expires is None:
        expires = config.get("api.authentication.token_expiry_hours", 24)

    token_data = create_token_for_user(
        config, user_id=user_id, email=email, expires_delta=timedelta(hours=expires)
    )

    click.echo("✅ Token created successfully!")
    click.echo()
    click.echo(f"Token: {token_data['access_token']}")
    click.echo(f"Expires in: {expires} hours")
    click.echo()
    click.echo("Use this token in API requests:")
    click.echo(f"  Authorization: Bearer {token_data['access_token']}")
    click.echo()
    host = config.get("api.host", "localhost")
    port = config.get("api.port", 8000)
    click.echo("Example curl command:")
    click.echo(
        f'  curl -H "Authorization: Bearer {token_data["access_token"]}" '
        f"http://{host}:{port}/api/entries"
    )


@api.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show API configuration status.

    Examples:
        ojt-tracker api status
    """
    config = load_config(ctx)

    click.echo("📊 OJT Tracker API Status")
    click.echo("=" * 50)

    click.echo("\n🌐 Server Configuration:")
    host = config.get("api.host", "localhost")
    port = config.get("api.port", 8000)
    click.echo(f"  Host: {host}")
    click.echo(f"  Port: {port}")
    click.echo(f"  Workers: {config.get('api.workers', 1)}")
    click.echo(f"  Data: {config.data_dir}")

    click.echo("\n🔐 Authentication:")
    has_secret = bool(config.get("api.authentication.secret_key"))
    click.echo(f"  Token Expiry: {config.get('api.authentication.token_expiry_hours', 24)} hours")
    click.echo(f"  Session Cookie: {config.get('api.authentication.cookie_name', 'ojt_session')}")
    click.echo(f"  Secret Key: {'Set' if has_secret else 'Not set'}")
    if not has_secret:
        click.echo(click.style("  ⚠️  Run 'ojt-tracker api serve' to generate", fg="yellow"))

    click.echo("\n🌍 CORS:")
    cors_enabled = config.get("api.cors.enabled", True)
    click.echo(f"  {'✅' if cors_enabled else '❌'} Enabled: {cors_enabled}")
    if cors_enabled:
        for origin in config.get("api.cors.origins", []):
            click.echo(f"    - {origin}")

    legacy = config.get("api.compat.legacy_not_found_status", False)
    click.echo(f"\n↩️  Not-found status: {'400 (legacy)' if legacy else '404'}")
