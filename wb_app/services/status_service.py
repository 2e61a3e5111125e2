"""Status probes: decide whether each component is installed."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import subprocess
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

from wb_app.models import ComponentCategory, ComponentStatus, Entry, SelectionSnapshot
from wb_app.services.catalog import assistant_definition, bench_name
from wb_app.services.config_service import ConfigService
from wb_common.api import StatusProbeError, error_to_payload, wrap_error

logger = logging.getLogger(__name__)

WhichFn = Callable[[str], Optional[str]]


def _normalize_remote(url: str) -> str:
    url = url.strip().rstrip("/")
    return url[: -len(".git")] if url.endswith(".git") else url


def find_file(
    root: Path,
    name: str,
    max_depth: int,
    *,
    path_contains: str | None = None,
) -> Path | None:
    """Search for ``name`` at most ``max_depth`` levels below ``root``.

    Files directly inside ``root`` are at depth 1, like ``find -maxdepth``.
    Unreadable dirs are skipped.
    """
    if max_depth < 1 or not root.is_dir():
        return None
    base_depth = len(root.parts)
    for dirpath, dirnames, filenames in os.walk(root, onerror=lambda _err: None):
        depth = len(Path(dirpath).parts) - base_depth
        if depth + 1 >= max_depth:
            dirnames[:] = []
        if name in filenames:
            candidate = Path(dirpath) / name
            if path_contains is None or path_contains in str(candidate):
                return candidate
    return None


class StatusService:
    """Probes benches, assistants and tools.

    Every probe is independent I/O, so ``load_all_statuses`` runs them all
    concurrently and a failing probe only degrades its own entry to Unknown.
    """

    def __init__(
        self,
        config_service: ConfigService | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
        which: WhichFn = shutil.which,
        windows_root: Path = Path("/mnt/c"),
        proc_version: Path = Path("/proc/version"),
        probe_timeout: float | None = None,
    ) -> None:
        self.config_service = config_service or ConfigService()
        self._environ = os.environ if environ is None else environ
        self._home = home or Path.home()
        self._which = which
        self._windows_root = windows_root
        self._proc_version = proc_version
        self._probe_timeout = probe_timeout or self.config_service.settings.probe_timeout

    def _check_command(self, name: str) -> bool:
        return bool(name) and self._which(name) is not None

    def is_wsl(self) -> bool:
        if self._environ.get("WSL_DISTRO_NAME"):
            return True
        try:
            return "microsoft" in self._proc_version.read_text(encoding="utf-8").lower()
        except OSError:
            return False

    def check(self, entry: Entry) -> ComponentStatus:
        """Synchronously probe a single entry."""
        if entry.is_separator:
            return ComponentStatus.UNKNOWN
        if entry.category is ComponentCategory.BENCH:
            return self.check_bench(bench_name(entry.id))
        if entry.category is ComponentCategory.ASSISTANT:
            return self.check_assistant(entry.id)
        if entry.category is ComponentCategory.TOOL:
            return self.check_tool(entry.id)
        return ComponentStatus.UNKNOWN

    def check_bench(self, name: str) -> ComponentStatus:
        config = self.config_service.bench(name)
        expected_url = config.url if config else None
        for path in self.config_service.bench_candidates(name):
            if not (path / ".git").is_dir():
                continue
            if expected_url:
                remote = self._git_remote(path)
                if remote is None or _normalize_remote(remote) != _normalize_remote(expected_url):
                    logger.info("Bench %s at %s has unexpected remote %s", name, path, remote)
                    return ComponentStatus.NOT_INSTALLED
            # A clone without its project generator on PATH still needs setup.
            short = name.lower().replace("bench", "", 1)
            if self._check_command(f"new-{short}-project"):
                return ComponentStatus.INSTALLED
            return ComponentStatus.NEEDS_CREDENTIALS
        return ComponentStatus.NOT_INSTALLED

    def _git_remote(self, path: Path) -> str | None:
        try:
            result = subprocess.run(
                ["git", "remote", "get-url", "origin"],
                cwd=path,
                capture_output=True,
                text=True,
                timeout=self._probe_timeout,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("git remote lookup failed in %s: %s", path, exc)
            return None
        return result.stdout.strip() if result.returncode == 0 else None

    def check_assistant(self, id: str) -> ComponentStatus:
        definition = assistant_definition(id)
        if definition is None or not definition.command:
            return ComponentStatus.UNKNOWN
        if not self._check_command(definition.command):
            return ComponentStatus.NOT_INSTALLED
        if not definition.credential_env and not definition.credential_files:
            return ComponentStatus.INSTALLED
        has_env = any(self._environ.get(var) for var in definition.credential_env)
        has_file = any((self._home / rel).exists() for rel in definition.credential_files)
        return ComponentStatus.INSTALLED if has_env or has_file else ComponentStatus.NEEDS_CREDENTIALS

    def check_tool(self, id: str) -> ComponentStatus:
        if id == "vscode":
            return self._check_vscode()
        if id == "warp":
            return self._check_desktop_app(
                command="warp-terminal",
                home_dir=".warp",
                windows_paths=("Program Files/Warp/Warp.exe",),
                search=("Warp.exe", 4, None),
            )
        if id == "wave":
            return self._check_desktop_app(
                command="wave",
                home_dir=".waveterm",
                windows_paths=("Program Files/Wave/Wave.exe",),
                search=("Wave.exe", 5, "waveterm"),
            )
        return ComponentStatus.UNKNOWN

    def _check_vscode(self) -> ComponentStatus:
        has_code = self._check_command("code")
        if not self.is_wsl():
            return ComponentStatus.INSTALLED if has_code else ComponentStatus.NOT_INSTALLED
        windows_code = self._windows_root / "Program Files" / "Microsoft VS Code" / "Code.exe"
        if not has_code and not windows_code.exists():
            return ComponentStatus.NOT_INSTALLED
        # Without the WSL server the editor cannot open this distro yet.
        if not (self._home / ".vscode-server").is_dir():
            return ComponentStatus.NEEDS_CREDENTIALS
        return ComponentStatus.INSTALLED

    def _check_desktop_app(
        self,
        *,
        command: str,
        home_dir: str,
        windows_paths: Iterable[str],
        search: tuple[str, int, str | None],
    ) -> ComponentStatus:
        if not self.is_wsl():
            found = self._check_command(command) or (self._home / home_dir).is_dir()
            return ComponentStatus.INSTALLED if found else ComponentStatus.NOT_INSTALLED
        for rel in windows_paths:
            if (self._windows_root / rel).exists():
                return ComponentStatus.INSTALLED
        name, depth, path_contains = search
        if find_file(self._windows_root / "Users", name, depth, path_contains=path_contains):
            return ComponentStatus.INSTALLED
        return ComponentStatus.NOT_INSTALLED

    async def probe(self, entry: Entry) -> Entry:
        """Probe one entry off the event loop and return it with status applied."""
        if entry.is_separator:
            return entry
        try:
            status = await asyncio.wait_for(
                asyncio.to_thread(self.check, entry), timeout=self._probe_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Status probe for %s timed out after %.1fs", entry.id, self._probe_timeout)
            status = ComponentStatus.UNKNOWN
        except Exception as exc:
            error = wrap_error(
                StatusProbeError,
                f"Status probe for {entry.id} failed",
                context={"entry": entry.id, "category": entry.category.value},
                cause=exc,
            )
            logger.error("%s: %s", error, exc, exc_info=exc, extra=error_to_payload(error))
            status = ComponentStatus.UNKNOWN
        # Installed components start checked, meaning "keep installed".
        return replace(entry, status=status, checked=entry.checked or status.is_installed)

    async def load_all_statuses(self, snapshot: SelectionSnapshot) -> SelectionSnapshot:
        """Probe every entry concurrently, preserving section order."""
        sections = (snapshot.benches, snapshot.assistants, snapshot.tools)
        flat = [entry for section in sections for entry in section]
        probed = await asyncio.gather(*(self.probe(entry) for entry in flat))

        results: list[tuple[Entry, ...]] = []
        offset = 0
        for section in sections:
            results.append(tuple(probed[offset : offset + len(section)]))
            offset += len(section)
        return SelectionSnapshot(benches=results[0], assistants=results[1], tools=results[2])
