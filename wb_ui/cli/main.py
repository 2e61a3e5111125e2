"""
Command-line interface for workbench-setup.

Without a subcommand it opens the interactive component picker; ``status``
and ``apply`` cover the same ground non-interactively.
"""

from __future__ import annotations

from contextlib import nullcontext
from pathlib import Path
from typing import Optional

import typer

from wb_common.api import quiet_stderr_logging
from wb_ui.cli.commands.apply import register_apply_command
from wb_ui.cli.commands.status import register_status_command
from wb_ui.cli.interactive import finish_setup, is_interactive_terminal, run_screen
from wb_ui.wiring.dependencies import UIContext, configure_logging


def build_app(ctx: UIContext) -> typer.Typer:
    """Build the Typer app, wired to the given context."""
    app = typer.Typer(help="Pick and install dev benches, AI assistants and tools.")

    @app.callback(invoke_without_command=True)
    def entry(
        typer_ctx: typer.Context,
        root: Optional[Path] = typer.Option(
            None,
            "--root",
            help="Project root holding the benches (default: $WB_PROJECT_ROOT or cwd).",
        ),
        config: Optional[Path] = typer.Option(
            None,
            "--config",
            "-c",
            help="Bench config file (default: <root>/config/bench-config.json).",
        ),
        plain: bool = typer.Option(
            False,
            "--plain",
            help="Use the plain terminal screen instead of the full-screen UI.",
        ),
        debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
        log_file: Optional[Path] = typer.Option(
            None,
            "--log-file",
            help="Write logs to this file instead of stderr.",
        ),
        headless: bool = typer.Option(
            False,
            "--headless",
            help="Force headless output (useful in CI).",
        ),
    ) -> None:
        """Global entry point handling interactive vs headless modes."""
        configure_logging(
            debug=debug,
            log_file=str(log_file) if log_file else None,
            force=True,
        )
        ctx.headless = headless
        if root is not None:
            ctx.root = root
        if config is not None:
            ctx.config_path = config

        if typer_ctx.invoked_subcommand is not None:
            return

        if headless or not is_interactive_terminal():
            ctx.ui.present.error(
                "Interactive setup needs a terminal. Use `wb-setup status` or `wb-setup apply`."
            )
            raise typer.Exit(1)

        quiet = nullcontext() if (debug or log_file) else quiet_stderr_logging()
        with quiet:
            outcome = run_screen(ctx, plain=plain)
        raise typer.Exit(finish_setup(ctx, outcome))

    register_status_command(app, ctx)
    register_apply_command(app, ctx)
    return app


# Initialize global context (lazy)
ctx_store = UIContext()
app = build_app(ctx_store)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
