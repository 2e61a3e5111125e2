from __future__ import annotations

from wb_ui.tui.system.protocols import Presenter, PresenterSink


class PresenterBase(Presenter):
    def __init__(self, sink: PresenterSink) -> None:
        super().__init__(sink)


__all__ = ["PresenterBase", "PresenterSink"]
