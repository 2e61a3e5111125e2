"""Application-facing services for the setup UI."""

from wb_app.services.component_service import ComponentService
from wb_app.services.config_service import (
    BenchConfig,
    ConfigService,
    SetupSettings,
    WorkbenchConfig,
)
from wb_app.services.installer_service import (
    ApplyOutcome,
    ApplyReport,
    CommandResult,
    CommandRunner,
    InstallerService,
)
from wb_app.services.status_service import StatusService

__all__ = [
    "ApplyOutcome",
    "ApplyReport",
    "BenchConfig",
    "CommandResult",
    "CommandRunner",
    "ComponentService",
    "ConfigService",
    "InstallerService",
    "SetupSettings",
    "StatusService",
    "WorkbenchConfig",
]
