import asyncio
import json
import time
from pathlib import Path

import pytest

from wb_app.models import ComponentCategory, ComponentStatus, SelectionSnapshot
from wb_app.services.config_service import ConfigService, SetupSettings
from wb_app.services.status_service import StatusService, find_file
from tests.unit.wb_app.factories import make_entry, separator

pytestmark = pytest.mark.unit_app


def _which(*available: str):
    return lambda name: f"/usr/bin/{name}" if name in available else None


def _service(
    tmp_path: Path,
    *,
    commands: tuple[str, ...] = (),
    environ: dict[str, str] | None = None,
    wsl: bool = False,
    probe_timeout: float | None = None,
) -> StatusService:
    root = tmp_path / "project"
    root.mkdir(exist_ok=True)
    home = tmp_path / "home"
    home.mkdir(exist_ok=True)
    proc_version = tmp_path / "proc_version"
    proc_version.write_text("Linux version 6.6 (Microsoft WSL2)" if wsl else "Linux version 6.6 generic")
    return StatusService(
        ConfigService(SetupSettings.from_env(root)),
        environ=environ or {},
        home=home,
        which=_which(*commands),
        windows_root=tmp_path / "mnt_c",
        proc_version=proc_version,
        probe_timeout=probe_timeout,
    )


def test_bench_missing_is_not_installed(tmp_path: Path) -> None:
    service = _service(tmp_path)
    assert service.check_bench("pythonBench") is ComponentStatus.NOT_INSTALLED


def test_bench_without_git_dir_is_not_installed(tmp_path: Path) -> None:
    service = _service(tmp_path)
    (tmp_path / "project" / "pythonBench").mkdir()
    assert service.check_bench("pythonBench") is ComponentStatus.NOT_INSTALLED


def test_bench_clone_needs_setup_until_command_exists(tmp_path: Path) -> None:
    (tmp_path / "project" / "devBenches" / "pythonBench" / ".git").mkdir(parents=True)
    assert _service(tmp_path).check_bench("pythonBench") is ComponentStatus.NEEDS_CREDENTIALS
    service = _service(tmp_path, commands=("new-python-project",))
    assert service.check_bench("pythonBench") is ComponentStatus.INSTALLED


def test_bench_with_wrong_remote_is_not_installed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = tmp_path / "project"
    (root / "config").mkdir(parents=True)
    (root / "config" / "bench-config.json").write_text(
        json.dumps({"benches": {"javaBench": {"path": "javaBench", "url": "https://example.com/javaBench.git"}}})
    )
    (root / "javaBench" / ".git").mkdir(parents=True)
    service = _service(tmp_path, commands=("new-java-project",))

    monkeypatch.setattr(service, "_git_remote", lambda path: "https://example.com/other.git")
    assert service.check_bench("javaBench") is ComponentStatus.NOT_INSTALLED

    monkeypatch.setattr(service, "_git_remote", lambda path: "https://example.com/javaBench/")
    assert service.check_bench("javaBench") is ComponentStatus.INSTALLED


def test_assistant_statuses(tmp_path: Path) -> None:
    service = _service(tmp_path, commands=("claude", "copilot"))
    assert service.check_assistant("codex_cli") is ComponentStatus.NOT_INSTALLED
    assert service.check_assistant("copilot_cli") is ComponentStatus.INSTALLED
    assert service.check_assistant("claude_cli") is ComponentStatus.NEEDS_CREDENTIALS
    assert service.check_assistant("separator1") is ComponentStatus.UNKNOWN


def test_assistant_credentials_from_env_or_file(tmp_path: Path) -> None:
    service = _service(tmp_path, commands=("claude",), environ={"ANTHROPIC_API_KEY": "sk-test"})
    assert service.check_assistant("claude_cli") is ComponentStatus.INSTALLED

    service = _service(tmp_path, commands=("claude",))
    config = tmp_path / "home" / ".claude" / "config.json"
    config.parent.mkdir(parents=True)
    config.write_text("{}")
    assert service.check_assistant("claude_cli") is ComponentStatus.INSTALLED


def test_wsl_detection(tmp_path: Path) -> None:
    assert _service(tmp_path, wsl=True).is_wsl()
    assert _service(tmp_path, environ={"WSL_DISTRO_NAME": "Ubuntu"}).is_wsl()
    assert not _service(tmp_path).is_wsl()


def test_vscode_native_and_wsl(tmp_path: Path) -> None:
    assert _service(tmp_path, commands=("code",)).check_tool("vscode") is ComponentStatus.INSTALLED
    assert _service(tmp_path).check_tool("vscode") is ComponentStatus.NOT_INSTALLED

    wsl = _service(tmp_path, commands=("code",), wsl=True)
    assert wsl.check_tool("vscode") is ComponentStatus.NEEDS_CREDENTIALS
    (tmp_path / "home" / ".vscode-server").mkdir()
    assert wsl.check_tool("vscode") is ComponentStatus.INSTALLED


def test_warp_and_wave_on_wsl_search_windows_paths(tmp_path: Path) -> None:
    service = _service(tmp_path, wsl=True)
    assert service.check_tool("warp") is ComponentStatus.NOT_INSTALLED

    warp = tmp_path / "mnt_c" / "Users" / "dev" / "AppData" / "Warp.exe"
    warp.parent.mkdir(parents=True)
    warp.touch()
    assert service.check_tool("warp") is ComponentStatus.INSTALLED

    wave = tmp_path / "mnt_c" / "Program Files" / "Wave" / "Wave.exe"
    wave.parent.mkdir(parents=True)
    wave.touch()
    assert service.check_tool("wave") is ComponentStatus.INSTALLED


def test_native_terminal_tools(tmp_path: Path) -> None:
    service = _service(tmp_path, commands=("warp-terminal",))
    assert service.check_tool("warp") is ComponentStatus.INSTALLED
    assert service.check_tool("wave") is ComponentStatus.NOT_INSTALLED
    (tmp_path / "home" / ".waveterm").mkdir()
    assert service.check_tool("wave") is ComponentStatus.INSTALLED
    assert service.check_tool("emacs") is ComponentStatus.UNKNOWN


def test_find_file_respects_depth_and_filter(tmp_path: Path) -> None:
    deep = tmp_path / "a" / "b" / "c" / "waveterm" / "Wave.exe"
    deep.parent.mkdir(parents=True)
    deep.touch()
    assert find_file(tmp_path, "Wave.exe", 5, path_contains="waveterm") == deep
    assert find_file(tmp_path, "Wave.exe", 2) is None
    assert find_file(tmp_path, "Wave.exe", 5, path_contains="other") is None
    assert find_file(tmp_path / "missing", "Wave.exe", 5) is None


def test_find_file_stops_at_max_depth(tmp_path: Path) -> None:
    shallow = tmp_path / "a" / "Warp.exe"
    shallow.parent.mkdir()
    shallow.touch()
    assert find_file(tmp_path, "Warp.exe", 2) == shallow
    assert find_file(tmp_path, "Warp.exe", 1) is None

    deep = tmp_path / "x" / "y" / "z" / "Wave.exe"
    deep.parent.mkdir(parents=True)
    deep.touch()
    assert find_file(tmp_path, "Wave.exe", 4) == deep
    assert find_file(tmp_path, "Wave.exe", 3) is None
    assert find_file(tmp_path, "Wave.exe", 0) is None


def test_load_all_statuses_preserves_order_and_checks_installed(tmp_path: Path) -> None:
    service = _service(tmp_path, commands=("copilot", "code"))
    snapshot = SelectionSnapshot(
        benches=(make_entry("bench_javaBench", category=ComponentCategory.BENCH, checked=False),),
        assistants=(
            make_entry("copilot_cli", checked=False),
            separator(),
            make_entry("codex_cli", checked=False),
        ),
        tools=(make_entry("vscode", category=ComponentCategory.TOOL, checked=False),),
    )
    result = asyncio.run(service.load_all_statuses(snapshot))
    assert [entry.id for entry in result.assistants] == ["copilot_cli", "separator1", "codex_cli"]
    assert result.benches[0].status is ComponentStatus.NOT_INSTALLED
    assert result.assistants[0].status is ComponentStatus.INSTALLED
    assert result.assistants[0].checked is True
    assert result.assistants[1] == snapshot.assistants[1]
    assert result.assistants[2].checked is False
    assert result.tools[0].checked is True


def test_failing_probe_degrades_to_unknown(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    service = _service(tmp_path)

    def explode(id: str) -> ComponentStatus:
        raise PermissionError("denied")

    monkeypatch.setattr(service, "check_tool", explode)
    entry = make_entry("vscode", category=ComponentCategory.TOOL, checked=False)
    probed = asyncio.run(service.probe(entry))
    assert probed.status is ComponentStatus.UNKNOWN
    assert probed.checked is False


def test_slow_probe_times_out(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    service = _service(tmp_path, probe_timeout=0.05)

    def slow(id: str) -> ComponentStatus:
        time.sleep(0.3)
        return ComponentStatus.INSTALLED

    monkeypatch.setattr(service, "check_assistant", slow)
    probed = asyncio.run(service.probe(make_entry("codex_cli", checked=False)))
    assert probed.status is ComponentStatus.UNKNOWN
