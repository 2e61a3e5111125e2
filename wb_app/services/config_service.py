"""Settings resolution and bench configuration loading."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from wb_common.api import ConfigurationError
from wb_common.config import parse_float_env, parse_path_env

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_RELPATH = Path("config") / "bench-config.json"
DEFAULT_PROBE_TIMEOUT = 10.0


class BenchConfig(BaseModel):
    """One bench entry of ``bench-config.json``."""

    path: str
    url: Optional[str] = None
    description: Optional[str] = None

    model_config = {
        "extra": "ignore",
    }


class WorkbenchConfig(BaseModel):
    """Top-level structure of ``bench-config.json``."""

    benches: Dict[str, BenchConfig] = Field(
        default_factory=dict,
        description="Bench name -> clone location and source URL",
    )

    model_config = {
        "extra": "ignore",
    }


@dataclass(frozen=True)
class SetupSettings:
    """Resolved locations and limits for one setup run."""

    project_root: Path
    config_path: Path
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT

    @classmethod
    def from_env(
        cls,
        root: Path | None = None,
        config_path: Path | None = None,
    ) -> "SetupSettings":
        """Build settings from explicit values, then ``WB_*`` env vars, then defaults."""
        resolved_root = (
            root
            or parse_path_env(os.environ.get("WB_PROJECT_ROOT"))
            or Path.cwd()
        ).resolve()
        resolved_config = (
            config_path
            or parse_path_env(os.environ.get("WB_BENCH_CONFIG"))
            or resolved_root / DEFAULT_CONFIG_RELPATH
        )
        timeout = parse_float_env(os.environ.get("WB_PROBE_TIMEOUT"))
        return cls(
            project_root=resolved_root,
            config_path=resolved_config,
            probe_timeout=timeout if timeout and timeout > 0 else DEFAULT_PROBE_TIMEOUT,
        )


class ConfigService:
    """Reads and caches the bench configuration for a project root."""

    def __init__(self, settings: SetupSettings | None = None) -> None:
        self.settings = settings or SetupSettings.from_env()
        self._config: WorkbenchConfig | None = None

    @property
    def project_root(self) -> Path:
        return self.settings.project_root

    def load_bench_config(self, *, reload: bool = False) -> WorkbenchConfig:
        """Load ``bench-config.json``; a missing file yields an empty config."""
        if self._config is not None and not reload:
            return self._config

        path = self.settings.config_path
        if not path.exists():
            logger.warning("Config file not found: %s", path)
            self._config = WorkbenchConfig()
            return self._config

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(
                f"Failed to read bench config {path}",
                context={"path": path},
                cause=exc,
            ) from exc

        try:
            self._config = WorkbenchConfig.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid bench config {path}: {exc.error_count()} error(s)",
                context={"path": path, "errors": exc.errors(include_url=False)},
                cause=exc,
            ) from exc
        return self._config

    def bench(self, name: str) -> BenchConfig | None:
        return self.load_bench_config().benches.get(name)

    def bench_path(self, name: str) -> Path:
        """Directory a bench is cloned into (configured path, else its name)."""
        config = self.bench(name)
        return self.project_root / (config.path if config and config.path else name)

    def bench_candidates(self, name: str) -> list[Path]:
        """Locations where an existing bench checkout may live."""
        candidates = [
            self.project_root / name,
            self.project_root / "devBenches" / name,
            self.project_root / "adminBenches" / name,
        ]
        configured = self.bench_path(name)
        if configured not in candidates:
            candidates.insert(0, configured)
        return candidates
