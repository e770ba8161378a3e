"""
Navigation State Machine
========================
Tracks which page is shown (Territories -> Alerts -> Alert Details) together
with the drill-down selection, and keeps the map viewport in sync with it.

Why is this file needed?
------------------------
1. Coherence: Each mode has exactly one valid selection shape. Keeping the
   transitions in one place means a page can never show Alert Details
   without an alert, or the Alerts list without a territory.
2. Decoupling: The machine knows nothing about Qt. The Store forwards its
   notifications as signals; tests drive it directly.

Transitions:
    TERRITORIES   --select_territory(T)--> ALERTS          (viewport <- T.boundary)
    TERRITORIES   --select_alert(A)------> ALERT_DETAILS
    ALERTS        --select_alert(A)------> ALERT_DETAILS
    ALERTS        --back()---------------> TERRITORIES     (viewport <- default)
    ALERT_DETAILS --back()---------------> mode it was entered from
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Callable, Optional

from guardiao.model.features import Alert, Territory
from guardiao.model.geometry import ViewportState, compute_viewport

logger = logging.getLogger(__name__)


class ViewMode(StrEnum):
    TERRITORIES = "territories"
    ALERTS = "alerts"
    ALERT_DETAILS = "alert-details"


class NavigationError(ValueError):
    """An event that is not valid in the current view mode."""


@dataclass(frozen=True)
class NavigationState:
    """
    Snapshot of the drill-down context.

    `entry_mode` is only set in ALERT_DETAILS and records the page the alert
    was opened from, so that `back()` can return there.
    """
    mode: ViewMode = ViewMode.TERRITORIES
    selected_territory: Optional[Territory] = None
    selected_alert: Optional[Alert] = None
    entry_mode: Optional[ViewMode] = None

    def is_coherent(self) -> bool:
        match self.mode:
            case ViewMode.TERRITORIES:
                return self.selected_territory is None and self.selected_alert is None
            case ViewMode.ALERTS:
                return self.selected_territory is not None and self.selected_alert is None
            case ViewMode.ALERT_DETAILS:
                return self.selected_alert is not None and self.entry_mode is not None
        return False


StateListener = Callable[[NavigationState], None]
ViewportListener = Callable[[ViewportState], None]


class NavigationStateMachine:
    """Owns the NavigationState and the ViewportState of the survey session."""

    def __init__(self) -> None:
        self._state = NavigationState()
        self._viewport = ViewportState.default()
        self._state_listeners: list[StateListener] = []
        self._viewport_listeners: list[ViewportListener] = []

    # ---- read-only snapshots ----

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    @property
    def mode(self) -> ViewMode:
        return self._state.mode

    # ---- listeners ----

    def add_listener(self, callback: StateListener) -> None:
        self._state_listeners.append(callback)

    def add_viewport_listener(self, callback: ViewportListener) -> None:
        self._viewport_listeners.append(callback)

    # ---- events ----

    def select_territory(self, territory: Territory) -> NavigationState:
        """Drill into a territory. Polygon click and list row are the same event."""
        if territory is None:
            raise NavigationError("Cannot select an empty territory.")
        self._require(ViewMode.TERRITORIES, "select a territory")

        viewport = compute_viewport(territory.boundary)
        if viewport is None:
            logger.debug(f"Territory '{territory.name}' has no valid boundary; viewport unchanged.")
        self._commit(NavigationState(mode=ViewMode.ALERTS, selected_territory=territory), viewport)
        return self._state

    def select_alert(self, alert: Alert) -> NavigationState:
        """Open the details of an alert, from the overview map or the alerts page."""
        if alert is None:
            raise NavigationError("Cannot select an empty alert.")
        self._require((ViewMode.TERRITORIES, ViewMode.ALERTS), "select an alert")

        self._commit(replace(
            self._state,
            mode=ViewMode.ALERT_DETAILS,
            selected_alert=alert,
            entry_mode=self._state.mode,
        ))
        return self._state

    def back(self) -> NavigationState:
        """Step one level up the drill-down."""
        state = self._state
        match state.mode:
            case ViewMode.ALERTS:
                self._return_to_territories()
            case ViewMode.ALERT_DETAILS if state.entry_mode == ViewMode.ALERTS:
                self._commit(replace(state, mode=ViewMode.ALERTS, selected_alert=None, entry_mode=None))
            case ViewMode.ALERT_DETAILS:
                self._return_to_territories()
            case _:
                raise NavigationError(f"Cannot go back from '{state.mode}'.")
        return self._state

    def reset(self) -> None:
        """Back to the initial overview, default viewport."""
        self._return_to_territories()

    # ---- internals ----

    def _require(self, allowed: ViewMode | tuple[ViewMode, ...], action: str) -> None:
        if not isinstance(allowed, tuple):
            allowed = (allowed,)
        if self._state.mode not in allowed:
            raise NavigationError(f"Cannot {action} in '{self._state.mode}' view.")

    def _return_to_territories(self) -> None:
        self._commit(NavigationState(), ViewportState.default())

    def _commit(self, state: NavigationState, viewport: Optional[ViewportState] = None) -> None:
        """
        Apply a transition. Both snapshots are updated before any listener
        runs, so a state listener already sees the matching viewport.
        `viewport=None` keeps the current one.
        """
        state_changed = state != self._state
        viewport_changed = viewport is not None and viewport != self._viewport

        if state_changed:
            logger.debug(f"Navigation: {self._state.mode} -> {state.mode}")
            self._state = state
        if viewport_changed:
            self._viewport = viewport

        if state_changed:
            for callback in self._state_listeners:
                callback(state)
        if viewport_changed:
            for callback in self._viewport_listeners:
                callback(viewport)
