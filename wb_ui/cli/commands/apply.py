from __future__ import annotations

from typing import List, Optional

import typer

from wb_common.api import WBError
from wb_ui.presenters.apply import render_apply_report
from wb_ui.wiring.dependencies import UIContext


def register_apply_command(app: typer.Typer, ctx: UIContext) -> None:
    """Register the non-interactive ``apply`` command."""

    @app.command("apply")
    def apply(
        install: Optional[List[str]] = typer.Option(
            None,
            "--install",
            "-i",
            help="Component id to install (repeatable).",
        ),
        uninstall: Optional[List[str]] = typer.Option(
            None,
            "--uninstall",
            "-u",
            help="Component id to uninstall (repeatable).",
        ),
    ) -> None:
        """Install or uninstall components by id without the interactive screen."""
        if not install and not uninstall:
            ctx.ui.present.warning("Nothing to do: pass --install or --uninstall.")
            raise typer.Exit(1)
        try:
            snapshot = ctx.client.plan(install or (), uninstall or ())
        except (ValueError, WBError) as exc:
            ctx.ui.present.error(str(exc))
            raise typer.Exit(1)
        report = ctx.client.apply(snapshot, progress=ctx.ui.progress)
        if not render_apply_report(ctx.ui, report):
            raise typer.Exit(1)
