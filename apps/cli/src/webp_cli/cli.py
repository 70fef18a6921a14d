"""CLI for the WebP MCP server."""

from __future__ import annotations

import logging

import click

from webp_backend import Config, create_app
from webp_backend.app import configure_logging
from webp_backend.server import PortUnavailable, serve


@click.command()
@click.option("-h", "--host", default=None, help="Bind address (default: WEBP_MCP_HOST or 0.0.0.0)")
@click.option("-p", "--port", default=None, type=int, help="First port to try (default: PORT or 10000)")
@click.option("--max-port-attempts", default=None, type=click.IntRange(min=1),
              help="Ports to try before giving up")
@click.option("-w", "--workers", default=None, type=click.IntRange(min=1),
              help="Conversion worker threads")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(host: str | None, port: int | None, max_port_attempts: int | None,
        workers: int | None, verbose: bool) -> None:
    """Run the PNG to WebP MCP server."""
    configure_logging(logging.DEBUG if verbose else logging.INFO)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = Config.load().replace(
        host=host,
        port=port,
        max_port_attempts=max_port_attempts,
        workers=workers,
    )

    app = create_app(config)
    try:
        serve(app, config.host, config.port, config.max_port_attempts)
    except PortUnavailable as e:
        raise click.ClickException(str(e)) from e
    except KeyboardInterrupt:
        logging.info("Interrupted")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
