"""Interactive setup flow shared by the CLI entry point."""

from __future__ import annotations

import io
import logging
import sys

from wb_ui.presenters.apply import render_apply_report
from wb_ui.tui.system.models import SetupOutcome
from wb_ui.wiring.dependencies import UIContext

logger = logging.getLogger(__name__)


def is_interactive_terminal() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def run_screen(ctx: UIContext, *, plain: bool = False) -> SetupOutcome:
    """Run the full-screen picker, falling back to the plain screen."""
    loader = ctx.client.load_components
    if not plain:
        from wb_ui.tui.screens.setup_screen import SetupScreen

        try:
            return SetupScreen(loader).run()
        except (OSError, RuntimeError, io.UnsupportedOperation) as exc:
            logger.warning("Full-screen UI unavailable (%s); using plain mode", exc)

    from wb_ui.tui.screens.raw_screen import RawSetupScreen

    return RawSetupScreen(loader).run()


def finish_setup(ctx: UIContext, outcome: SetupOutcome) -> int:
    """Apply a confirmed selection and return the process exit code."""
    if outcome.load_error is not None:
        ctx.ui.present.error(f"Failed to load components: {outcome.load_error}")
    if not outcome.confirmed:
        ctx.ui.present.info("Exiting without changes.")
        return 0
    if not outcome.has_changes:
        ctx.ui.present.info("No changes selected.")
        return 0

    ctx.ui.present.rule("Applying changes")
    report = ctx.client.apply(outcome.snapshot, progress=ctx.ui.progress)
    return 0 if render_apply_report(ctx.ui, report) else 1
