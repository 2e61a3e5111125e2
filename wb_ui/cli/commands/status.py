from __future__ import annotations

import asyncio

import typer

from wb_common.api import WBError
from wb_ui.presenters.status import render_status
from wb_ui.wiring.dependencies import UIContext


def register_status_command(app: typer.Typer, ctx: UIContext) -> None:
    """Register the non-interactive ``status`` command."""

    @app.command("status")
    def status() -> None:
        """Discover components and print their installation status."""
        try:
            with ctx.ui.progress.status("Checking component status..."):
                snapshot = asyncio.run(ctx.client.load_components())
        except WBError as exc:
            ctx.ui.present.error(str(exc))
            raise typer.Exit(1)
        render_status(ctx.ui, snapshot)
