"""
This module defines the command-line interface (CLI) for corsgate.

It uses the `click` library for commands and `rich` for output. The commands
serve the demo application, dry-run a CORS negotiation against the configured
policy and show the effective configuration.
"""

import json
import sys

import click
import uvicorn
from rich.console import Console
from rich.table import Table
from starlette.requests import Request

from .config import get_config
from .engine import Fatal, ShortCircuit, execute
from .errors import PolicyConfigurationError
from .log_setup import setup_logging
from .static_policy import StaticPolicy

# Initialize Rich console for pretty output
console = Console()


def build_request(method: str, origin: str | None, request_method: str | None, request_headers: str | None) -> Request:
    """
    Builds a synthetic Starlette request for a dry-run negotiation.

    Args:
        method: The HTTP method.
        origin: The `Origin` header, or None to omit it.
        request_method: The `Access-Control-Request-Method` header, or None.
        request_headers: The `Access-Control-Request-Headers` header, or None.

    Returns:
        A `Request` carrying only the given headers.
    """
    headers = []
    for name, value in (
        ("origin", origin),
        ("access-control-request-method", request_method),
        ("access-control-request-headers", request_headers),
    ):
        if value is not None:
            headers.append((name.encode("latin-1"), value.encode("latin-1")))

    scope = {
        "type": "http",
        "method": method.upper(),
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "headers": headers,
    }
    return Request(scope)


@click.group()
@click.version_option(package_name="corsgate")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """corsgate - policy-driven CORS negotiation middleware."""
    # Without the flag, CORSGATE_DEBUG decides
    setup_logging(debug or None)


@main.command()
@click.option("--host", default=None, help="Host to bind server")
@click.option("--port", default=None, type=int, help="Port to bind server")
def serve(host: str | None, port: int | None) -> None:
    """Start the corsgate demo HTTP server."""
    config = get_config()
    host = host or config.server_host
    port = port or config.server_port

    console.print(f"[green]Starting corsgate demo server at http://{host}:{port}[/green]")
    console.print(f"[dim]• Allowed origins: {', '.join(config.allowed_origins) or '(none)'}[/dim]")
    console.print(f"[dim]• API documentation available at http://{host}:{port}/docs[/dim]")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]\n")

    try:
        uvicorn.run("corsgate.server.app:app", host=host, port=port, log_level="debug" if config.debug else "info")
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped[/yellow]")


@main.command()
@click.option("--origin", default=None, help="Origin header of the simulated request")
@click.option("--method", default="GET", show_default=True, help="HTTP method of the simulated request")
@click.option("--request-method", default=None, help="Access-Control-Request-Method header")
@click.option("--request-headers", default=None, help="Access-Control-Request-Headers header")
def check(origin: str | None, method: str, request_method: str | None, request_headers: str | None) -> None:
    """Negotiate a simulated request against the configured policy."""
    try:
        policy = StaticPolicy.from_config(get_config())
    except PolicyConfigurationError as e:
        console.print(f"[red]Invalid policy configuration: {e}[/red]")
        sys.exit(1)

    outcome = execute(build_request(method, origin, request_method, request_headers), policy)

    if isinstance(outcome, Fatal):
        console.print(f"[red]Fatal: {outcome.error}[/red]")
        sys.exit(1)

    if isinstance(outcome, ShortCircuit):
        console.print(f"[cyan]Short-circuit[/cyan] with status {outcome.status_code} ({outcome.reason})")
    else:
        console.print(f"[cyan]Continue[/cyan] to application ({outcome.reason})")

    if not outcome.headers:
        console.print("[yellow]No CORS headers[/yellow]")
        return

    table = Table(title="CORS response headers")
    table.add_column("Header", style="cyan")
    table.add_column("Value")
    for name, value in outcome.headers.items():
        table.add_row(name, value)
    console.print(table)


@main.command("config")
def show_config() -> None:
    """Show the effective configuration."""
    console.print_json(json.dumps(get_config().to_dict()))


if __name__ == "__main__":
    main()
