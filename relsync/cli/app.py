from __future__ import annotations

import os
from pathlib import Path

import typer

from relsync import __version__
from relsync.cli.commands.sync import check, sync
from relsync.cli.context import ROOT_ENV_VAR
from relsync.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    rich_markup_mode="rich",
    help="Keep the secondary manifest's version in step with the primary one.",
)


app.command()(sync)
app.command()(check)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help=f"Repository root holding both manifests (default: ${ROOT_ENV_VAR} or cwd)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if root is not None:
        try:
            resolved = root.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --root: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not resolved.is_dir():
            typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[ROOT_ENV_VAR] = str(resolved)

    # Bare `relsync` runs the sync pipeline.
    if ctx.invoked_subcommand is None:
        sync()


def main() -> None:
    app()
