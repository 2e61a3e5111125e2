"""Presenter for installer results."""

from __future__ import annotations

from wb_app.api import ApplyReport


def render_apply_report(ui, report: ApplyReport) -> bool:
    """
    Render an apply report to the provided UI.

    Returns True when no item failed.
    """
    if not report.outcomes and not report.warnings:
        ui.present.info("Nothing to apply.")
        return True

    for outcome in report.outcomes:
        detail = f" ({outcome.message})" if outcome.message else ""
        line = f"{outcome.action.value} {outcome.name}{detail}"
        if outcome.success:
            ui.present.success(line)
        else:
            ui.present.error(line)

    for warning in report.warnings:
        ui.present.warning(warning)

    hints = report.credential_hints()
    if hints:
        body = "\n".join(f"{name}: {hint}" for name, hint in hints.items())
        ui.present.panel(body, title="Credentials needed", border_style="yellow")

    summary = f"{report.succeeded} succeeded, {report.failed} failed"
    if report.failed:
        ui.present.error(summary)
        return False
    ui.present.success(summary)
    return True
