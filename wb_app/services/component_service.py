"""Discovery: build the initial bench/assistant/tool entry lists."""

from __future__ import annotations

import asyncio
import logging

from wb_app.models import ComponentCategory, Entry, SelectionSnapshot
from wb_app.services.catalog import (
    ASSISTANT_DEFINITIONS,
    DEFAULT_BENCHES,
    TOOL_DEFINITIONS,
    bench_id,
)
from wb_app.services.config_service import ConfigService
from wb_common.api import ConfigurationError, DiscoveryError

logger = logging.getLogger(__name__)


class ComponentService:
    """Produces entries with default status/checked/action values."""

    def __init__(self, config_service: ConfigService | None = None) -> None:
        self.config_service = config_service or ConfigService()

    def initialize_components(self) -> SelectionSnapshot:
        try:
            config = self.config_service.load_bench_config()
        except ConfigurationError as exc:
            raise DiscoveryError(
                "Unable to discover benches", context=exc.context, cause=exc
            ) from exc

        benches = [
            Entry(
                id=bench_id(name),
                name=name,
                description=bench.description or name,
                category=ComponentCategory.BENCH,
            )
            for name, bench in config.benches.items()
        ]
        if not benches:
            logger.info("No benches configured; using defaults")
            benches = [
                Entry(
                    id=bench_id(name),
                    name=name,
                    description=name,
                    category=ComponentCategory.BENCH,
                )
                for name in DEFAULT_BENCHES
            ]

        assistants = [
            Entry(
                id=definition.id,
                name=definition.name,
                description=definition.description,
                category=ComponentCategory.ASSISTANT,
                is_separator=definition.is_separator,
            )
            for definition in ASSISTANT_DEFINITIONS
        ]
        tools = [
            Entry(
                id=definition.id,
                name=definition.name,
                description=definition.description,
                category=ComponentCategory.TOOL,
            )
            for definition in TOOL_DEFINITIONS
        ]
        return SelectionSnapshot(
            benches=tuple(benches),
            assistants=tuple(assistants),
            tools=tuple(tools),
        )

    async def discover(self) -> SelectionSnapshot:
        """Async variant that keeps the config file read off the event loop."""
        return await asyncio.to_thread(self.initialize_components)
