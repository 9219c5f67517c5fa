from __future__ import annotations

import typer

from .commands import fetch_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="cloudapi",
        help="cloudapi CLI",
        no_args_is_help=True,
    )

    app.command("fetch")(fetch_cmd.fetch)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
