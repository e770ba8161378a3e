from __future__ import annotations

import logging
from typing import Optional, Union, TYPE_CHECKING

from PySide6.QtCore import QObject, Signal, Slot

from guardiao.controller.workers import DocumentLoadWorker, alerts_worker, evidence_worker, territories_worker
from guardiao.model.evidence import AlertEvidence
from guardiao.model.features import Alert, Territory
from guardiao.model.geometry import ViewportState
from guardiao.model.map_surface import MapSurface, draw_layers, layers_for_view
from guardiao.model.navigation import NavigationState, ViewMode
from guardiao.model.state import SourceState, SurveySession

if TYPE_CHECKING:
    from guardiao.app.application import DataSources

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central state store with signals for page/map sync."""
    territories_changed = Signal(object)
    alerts_changed = Signal(object)
    evidence_changed = Signal(object)
    load_failed = Signal(str, str)  # (source name, message)

    navigation_changed = Signal(object)
    viewport_changed = Signal(object)
    slider_changed = Signal(float)

    def __init__(self, session: SurveySession | None = None) -> None:
        super().__init__()
        self.session = session if session is not None else SurveySession()
        self._workers: list[DocumentLoadWorker] = []

        self.session.navigation.add_listener(self.navigation_changed.emit)
        self.session.navigation.add_viewport_listener(self.viewport_changed.emit)
        self.session.slider.add_listener(self.slider_changed.emit)

    # ---- read-only snapshots ----

    @property
    def territories(self) -> list[Territory]:
        return self.session.territories

    @property
    def alerts(self) -> list[Alert]:
        return self.session.alerts

    @property
    def evidence(self) -> AlertEvidence:
        return self.session.evidence

    @property
    def navigation_state(self) -> NavigationState:
        return self.session.navigation.state

    @property
    def viewport_state(self) -> ViewportState:
        return self.session.navigation.viewport

    @property
    def slider_position(self) -> float:
        return self.session.slider.position

    @property
    def territories_source(self) -> SourceState:
        return self.session.territories_source

    @property
    def alerts_source(self) -> SourceState:
        return self.session.alerts_source

    # ---- loading ----

    def start_loading(self, sources: DataSources) -> None:
        """
        Start a fresh session and issue the independent document reads
        concurrently. Loads still running from an earlier call are awaited first.
        """
        self.shutdown()
        self.session.reset()
        self.territories_changed.emit(self.session.territories)
        self.alerts_changed.emit(self.session.alerts)
        self.evidence_changed.emit(self.session.evidence)

        logger.info("Starting survey data loads...")
        workers = [
            (territories_worker(sources.territories), self.set_territories, self.fail_territories),
            (alerts_worker(sources.alerts), self.set_alerts, self.fail_alerts),
            (evidence_worker(sources.evidence), self.set_evidence, self._evidence_failed),
        ]
        for worker, on_loaded, on_failed in workers:
            worker.loaded.connect(on_loaded)
            worker.failed.connect(on_failed)
            self._workers.append(worker)
            worker.start()

    def shutdown(self) -> None:
        """Wait for outstanding loads and release any open drag session."""
        self.session.slider.end_drag()
        for worker in self._workers:
            worker.wait()
        self._workers.clear()

    @Slot(object)
    def set_territories(self, territories: list[Territory]) -> None:
        self.session.set_territories(territories)
        self.territories_changed.emit(self.session.territories)

    @Slot(object)
    def set_alerts(self, alerts: list[Alert]) -> None:
        self.session.set_alerts(alerts)
        self.alerts_changed.emit(self.session.alerts)

    @Slot(object)
    def set_evidence(self, evidence: AlertEvidence) -> None:
        self.session.evidence = evidence
        self.evidence_changed.emit(evidence)

    @Slot(str)
    def fail_territories(self, message: str) -> None:
        self.session.fail_territories(message)
        self.territories_changed.emit(self.session.territories)
        self.load_failed.emit("territories", message)

    @Slot(str)
    def fail_alerts(self, message: str) -> None:
        self.session.fail_alerts(message)
        self.alerts_changed.emit(self.session.alerts)
        self.load_failed.emit("alerts", message)

    @Slot(str)
    def _evidence_failed(self, message: str) -> None:
        # The built-in sample record stays in place
        logger.warning(f"Using sample evidence: {message}")

    # ---- navigation ----

    def select_territory(self, territory: Territory) -> None:
        self.session.navigation.select_territory(territory)

    def select_alert(self, alert: Alert) -> None:
        self.session.navigation.select_alert(alert)

    def select(self, target: Union[Territory, Alert]) -> None:
        """A polygon click: dispatch on what was clicked."""
        if isinstance(target, Territory):
            self.select_territory(target)
        else:
            self.select_alert(target)

    def back(self) -> None:
        self.session.navigation.back()

    # ---- map ----

    def render_map(self, surface: MapSurface, mode: Optional[ViewMode] = None) -> None:
        """
        Draw the polygons of the current view onto `surface` and apply the viewport.

        If `mode` is given, nothing is drawn unless it is the current mode,
        so a hidden page's map is left alone.
        """
        state = self.navigation_state
        if mode is not None and mode != state.mode:
            return
        layers = layers_for_view(state, self.territories, self.alerts)
        draw_layers(surface, layers, self.viewport_state, self.select)
