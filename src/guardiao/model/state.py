"""
Survey Session (Data Model)
===========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the loaded territories and alerts, their load
   status, the navigation context and the slider in one place.
2. Decoupling: Views read from this object; the Store and the load workers
   write to it.

Classes:
    LoadStatus: Per data source progress (pending / ready / failed).
    SourceState: Status plus failure message of one data source.
    SurveySession: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from guardiao.model.evidence import AlertEvidence
from guardiao.model.features import Alert, LoadFailure, Territory
from guardiao.model.navigation import NavigationStateMachine
from guardiao.model.slider import ComparisonSlider

logger = logging.getLogger(__name__)


class LoadStatus(StrEnum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass
class SourceState:
    status: LoadStatus = LoadStatus.PENDING
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status == LoadStatus.PENDING

    @property
    def failed(self) -> bool:
        return self.status == LoadStatus.FAILED


@dataclass
class SurveySession:
    """
    Singleton-like class that holds the entire state of the survey viewer.
    Pass this instance to the Store; it is never shared across threads.
    """
    territories: list[Territory] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)
    evidence: AlertEvidence = field(default_factory=AlertEvidence)

    territories_source: SourceState = field(default_factory=SourceState)
    alerts_source: SourceState = field(default_factory=SourceState)

    navigation: NavigationStateMachine = field(default_factory=NavigationStateMachine)
    slider: ComparisonSlider = field(default_factory=ComparisonSlider)

    # ---- load completion (each source independently) ----

    def set_territories(self, territories: list[Territory]) -> None:
        self.territories = list(territories)
        self.territories_source = SourceState(LoadStatus.READY)

    def set_alerts(self, alerts: list[Alert]) -> None:
        self.alerts = list(alerts)
        self.alerts_source = SourceState(LoadStatus.READY)

    def fail_territories(self, failure: LoadFailure | str) -> None:
        # A failed load never leaves a partial collection behind
        self.territories = []
        self.territories_source = SourceState(LoadStatus.FAILED, str(failure))
        logger.error(f"Territories unavailable: {failure}")

    def fail_alerts(self, failure: LoadFailure | str) -> None:
        self.alerts = []
        self.alerts_source = SourceState(LoadStatus.FAILED, str(failure))
        logger.error(f"Alerts unavailable: {failure}")

    def reset(self) -> None:
        """Clear all data for a new session"""
        self.territories = []
        self.alerts = []
        self.evidence = AlertEvidence()
        self.territories_source = SourceState()
        self.alerts_source = SourceState()
        self.navigation.reset()
        self.slider.reset()
        logger.info("Survey session has been reset.")
