from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wb_app.api import (
    ComponentService,
    ConfigService,
    InstallerService,
    SetupClient,
    SetupSettings,
    StatusService,
)
from wb_common.api import configure_logging
from wb_ui.tui.system.facade import TUI
from wb_ui.tui.system.protocols import UI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""
    headless: bool = False
    root: Optional[Path] = None
    config_path: Optional[Path] = None

    # Lazily initialized services
    _ui: Optional[UI] = None
    _settings: Optional[SetupSettings] = None
    _config_service: Optional[ConfigService] = None
    _component_service: Optional[ComponentService] = None
    _status_service: Optional[StatusService] = None
    _installer_service: Optional[InstallerService] = None
    _client: Optional[SetupClient] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from wb_ui.tui.system.headless import HeadlessUI
                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def settings(self) -> SetupSettings:
        if self._settings is None:
            self._settings = SetupSettings.from_env(self.root, self.config_path)
        return self._settings

    @settings.setter
    def settings(self, value: SetupSettings):
        self._settings = value

    @property
    def config_service(self) -> ConfigService:
        if self._config_service is None:
            self._config_service = ConfigService(self.settings)
        return self._config_service

    @config_service.setter
    def config_service(self, value: ConfigService):
        self._config_service = value

    @property
    def component_service(self) -> ComponentService:
        if self._component_service is None:
            self._component_service = ComponentService(self.config_service)
        return self._component_service

    @component_service.setter
    def component_service(self, value: ComponentService):
        self._component_service = value

    @property
    def status_service(self) -> StatusService:
        if self._status_service is None:
            self._status_service = StatusService(self.config_service)
        return self._status_service

    @status_service.setter
    def status_service(self, value: StatusService):
        self._status_service = value

    @property
    def installer_service(self) -> InstallerService:
        if self._installer_service is None:
            self._installer_service = InstallerService(self.config_service)
        return self._installer_service

    @installer_service.setter
    def installer_service(self, value: InstallerService):
        self._installer_service = value

    @property
    def client(self) -> SetupClient:
        if self._client is None:
            self._client = SetupClient(
                config_service=self.config_service,
                component_service=self.component_service,
                status_service=self.status_service,
                installer_service=self.installer_service,
            )
        return self._client

    @client.setter
    def client(self, value: SetupClient):
        self._client = value


__all__ = [
    "UIContext",
    "configure_logging",
]
