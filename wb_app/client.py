"""Application-level client used by the UI layers."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from wb_app.models import ComponentAction, Entry, SelectionSnapshot
from wb_app.services.component_service import ComponentService
from wb_app.services.config_service import ConfigService, SetupSettings
from wb_app.services.installer_service import ApplyReport, InstallerService, ProgressHook
from wb_app.services.status_service import StatusService


class SetupClient:
    """Wires discovery, status probing and installation for one project root."""

    def __init__(
        self,
        settings: SetupSettings | None = None,
        *,
        config_service: ConfigService | None = None,
        component_service: ComponentService | None = None,
        status_service: StatusService | None = None,
        installer_service: InstallerService | None = None,
    ) -> None:
        self.config_service = config_service or ConfigService(settings)
        self.component_service = component_service or ComponentService(self.config_service)
        self.status_service = status_service or StatusService(self.config_service)
        self.installer_service = installer_service or InstallerService(self.config_service)

    @property
    def settings(self) -> SetupSettings:
        return self.config_service.settings

    async def load_components(self) -> SelectionSnapshot:
        """Discover every component and probe its status."""
        snapshot = await self.component_service.discover()
        return await self.status_service.load_all_statuses(snapshot)

    def apply(
        self, snapshot: SelectionSnapshot, progress: ProgressHook | None = None
    ) -> ApplyReport:
        return self.installer_service.process_selections(
            snapshot.benches, snapshot.assistants, snapshot.tools, progress=progress
        )

    def plan(
        self, install: Iterable[str] = (), uninstall: Iterable[str] = ()
    ) -> SelectionSnapshot:
        """Build a snapshot carrying explicit install/uninstall intents.

        Raises ``ValueError`` when an id does not name a known component.
        """
        actions = {id: ComponentAction.INSTALL for id in install}
        actions.update({id: ComponentAction.UNINSTALL for id in uninstall})
        snapshot = self.component_service.initialize_components()
        known = {entry.id for entry in snapshot.all_entries() if not entry.is_separator}
        unknown = sorted(set(actions) - known)
        if unknown:
            raise ValueError(f"Unknown component id(s): {', '.join(unknown)}")

        def _apply(entries: tuple[Entry, ...]) -> tuple[Entry, ...]:
            return tuple(
                replace(entry, checked=True, action=actions[entry.id]) if entry.id in actions else entry
                for entry in entries
            )

        return SelectionSnapshot(
            benches=_apply(snapshot.benches),
            assistants=_apply(snapshot.assistants),
            tools=_apply(snapshot.tools),
        )
