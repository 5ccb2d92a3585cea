"""Sync and check commands."""

from __future__ import annotations

import typer

from relsync.cli.context import build_context
from relsync.core.errors import ErrorCode
from relsync.core.result import Err, Ok
from relsync.git.repository import Repository
from relsync.output.errors import print_sync_failure, sync_failure_exit_code
from relsync.services.amender import GitVersionControl
from relsync.services.pipeline import check_sync, run_sync


def sync() -> None:
    """Copy the primary version into the secondary manifest and amend HEAD."""
    ctx = build_context()
    result = run_sync(
        root=ctx.root,
        manifests=ctx.config.manifests,
        vcs=GitVersionControl(Repository(ctx.root)),
        console=ctx.console,
    )
    match result:
        case Err(failure):
            print_sync_failure(failure, ctx.console)
            raise typer.Exit(code=sync_failure_exit_code(failure))
        case Ok(_):
            pass


def check() -> None:
    """Report whether both manifests carry the same version. Writes nothing."""
    ctx = build_context()
    manifests = ctx.config.manifests
    match check_sync(root=ctx.root, manifests=manifests):
        case Err(failure):
            print_sync_failure(failure, ctx.console)
            raise typer.Exit(code=sync_failure_exit_code(failure))
        case Ok(report):
            if report.in_sync:
                ctx.console.success(
                    f"{manifests.secondary} matches {manifests.primary} "
                    f"({report.primary_version})"
                )
                return
            ctx.console.error(
                f"{manifests.secondary} is out of sync: "
                f"{manifests.primary}={report.primary_version}, "
                f"{manifests.secondary}={report.secondary_version}"
            )
            raise typer.Exit(code=int(ErrorCode.MANIFEST_ERROR))
