"""Command line entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
import flet as ft

from .config import load_config


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--web", is_flag=True, default=False, help="Serve in the browser instead of a desktop window")
@click.option("--port", type=int, default=8550, show_default=True, help="Port used with --web")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Load environment variables from this file",
)
def main(web: bool, port: int, env_file: Optional[Path]) -> None:
    """Launch the ads client dashboard."""

    from .desktop.app import build_app

    config = load_config(env_file)
    if not config.has_backend:
        click.echo("Warning: ADSDASH_BACKEND_URL is not set; requests will fail.", err=True)
    target = build_app(config)
    if web:
        click.echo(f"Serving on http://localhost:{port}")
        ft.app(target=target, view=ft.AppView.WEB_BROWSER, port=port)
    else:
        ft.app(target=target)


if __name__ == "__main__":
    main()
