"""Apply confirmed selections: clone/remove benches, install assistants."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import ContextManager, Iterable, Protocol, Sequence

from wb_app.models import ComponentAction, ComponentCategory, Entry
from wb_app.services.catalog import (
    CREDENTIAL_FOLLOWUP_IDS,
    assistant_definition,
    bench_name,
    tool_definition,
)
from wb_app.services.config_service import ConfigService
from wb_common.api import InstallError, error_to_payload, wrap_error

logger = logging.getLogger(__name__)


class ProgressHook(Protocol):
    def status(self, message: str) -> ContextManager[None]: ...


@dataclass(frozen=True)
class CommandResult:
    success: bool
    output: str = ""


class CommandRunner:
    """Thin wrapper over ``subprocess.run`` so installs can be faked in tests."""

    def run(self, argv: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        logger.debug("Running %s (cwd=%s)", " ".join(argv), cwd)
        try:
            proc = subprocess.run(
                list(argv),
                cwd=cwd,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            error = wrap_error(
                InstallError,
                f"Failed to launch {argv[0]}: {exc}",
                context={"argv": list(argv), "cwd": cwd},
                cause=exc,
            )
            logger.error("Command launch failed", extra=error_to_payload(error))
            return CommandResult(False, str(error))
        output = (proc.stdout or "") + (proc.stderr or "")
        return CommandResult(proc.returncode == 0, output.strip())


@dataclass(frozen=True)
class ApplyOutcome:
    entry_id: str
    name: str
    action: ComponentAction
    success: bool
    message: str = ""


@dataclass
class ApplyReport:
    outcomes: list[ApplyOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    needs_credentials: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def credential_hints(self) -> dict[str, str]:
        hints: dict[str, str] = {}
        for id in self.needs_credentials:
            definition = assistant_definition(id)
            if definition is not None:
                hints[definition.name] = definition.login_hint or f"Log in to {definition.name}"
        return hints


class InstallerService:
    """Executes pending install/uninstall actions in selection order."""

    def __init__(
        self,
        config_service: ConfigService | None = None,
        runner: CommandRunner | None = None,
        *,
        use_sudo: bool = True,
    ) -> None:
        self.config_service = config_service or ConfigService()
        self.runner = runner or CommandRunner()
        self.use_sudo = use_sudo

    def process_selections(
        self,
        benches: Iterable[Entry],
        assistants: Iterable[Entry],
        tools: Iterable[Entry],
        progress: ProgressHook | None = None,
    ) -> ApplyReport:
        report = ApplyReport()
        for entry in (*benches, *assistants, *tools):
            if entry.is_separator or entry.action is ComponentAction.NONE:
                continue
            verb = "Installing" if entry.action is ComponentAction.INSTALL else "Removing"
            status = progress.status(f"{verb} {entry.name}...") if progress else nullcontext()
            with status:
                outcome = self._apply(entry, report)
            if outcome is None:
                continue
            if outcome.success:
                logger.info("%s %s: ok", entry.action.value, entry.id)
            else:
                logger.error("%s %s failed: %s", entry.action.value, entry.id, outcome.message)
            report.outcomes.append(outcome)
        return report

    def _apply(self, entry: Entry, report: ApplyReport) -> ApplyOutcome | None:
        if entry.category is ComponentCategory.BENCH:
            if entry.action is ComponentAction.INSTALL:
                return self.install_bench(entry, report)
            return self.uninstall_bench(entry)
        if entry.category is ComponentCategory.ASSISTANT:
            return self.apply_assistant(entry, report)
        if entry.category is ComponentCategory.TOOL:
            if entry.action is ComponentAction.UNINSTALL:
                report.warnings.append(f"Uninstalling {entry.name} is not supported; skipped.")
                return None
            definition = tool_definition(entry.id)
            message = definition.install_instructions if definition else f"Install {entry.name} manually"
            return ApplyOutcome(entry.id, entry.name, entry.action, True, message)
        return ApplyOutcome(entry.id, entry.name, entry.action, False, "Unknown component")

    def install_bench(self, entry: Entry, report: ApplyReport) -> ApplyOutcome:
        name = bench_name(entry.id)
        config = self.config_service.bench(name)
        if config is None or not config.url:
            return ApplyOutcome(entry.id, entry.name, entry.action, False, f"No URL configured for {name}")

        target = self.config_service.bench_path(name)
        target.parent.mkdir(parents=True, exist_ok=True)
        result = self.runner.run(["git", "clone", config.url, str(target)])
        if not result.success:
            return ApplyOutcome(entry.id, entry.name, entry.action, False, result.output or "git clone failed")

        setup_script = target / "setup.sh"
        if setup_script.exists():
            setup = self.runner.run(["bash", "setup.sh"], cwd=target)
            if not setup.success:
                logger.warning("Setup script failed for %s: %s", name, setup.output)
                report.warnings.append(f"{name}: setup.sh failed; run it manually in {target}")
        return ApplyOutcome(entry.id, entry.name, entry.action, True, f"Cloned into {target}")

    def uninstall_bench(self, entry: Entry) -> ApplyOutcome:
        name = bench_name(entry.id)
        for candidate in self.config_service.bench_candidates(name):
            if candidate.is_dir():
                try:
                    shutil.rmtree(candidate)
                except OSError as exc:
                    return ApplyOutcome(entry.id, entry.name, entry.action, False, str(exc))
                return ApplyOutcome(entry.id, entry.name, entry.action, True, f"Removed {candidate}")
        return ApplyOutcome(entry.id, entry.name, entry.action, False, f"{name} not found")

    def apply_assistant(self, entry: Entry, report: ApplyReport) -> ApplyOutcome:
        definition = assistant_definition(entry.id)
        if definition is None:
            return ApplyOutcome(entry.id, entry.name, entry.action, False, "Unknown assistant")

        installing = entry.action is ComponentAction.INSTALL
        command = definition.install_cmd if installing else definition.uninstall_cmd
        if not command:
            return ApplyOutcome(
                entry.id, entry.name, entry.action, False, f"Cannot uninstall {definition.name} automatically"
            )

        result = self.runner.run(self.build_argv(command))
        if not result.success:
            return ApplyOutcome(entry.id, entry.name, entry.action, False, result.output or "command failed")
        if installing and entry.id in CREDENTIAL_FOLLOWUP_IDS:
            report.needs_credentials.append(entry.id)
        return ApplyOutcome(entry.id, entry.name, entry.action, True, command)

    def build_argv(self, command: str) -> list[str]:
        argv = shlex.split(command)
        if self.use_sudo and argv and argv[0] == "npm" and "-g" in argv:
            argv.insert(0, "sudo")
        return argv
