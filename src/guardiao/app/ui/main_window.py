"""
Main Application Window
=======================
Hosts the three drill-down pages in a stack and switches between them when
the navigation state changes.
"""
from __future__ import annotations

import logging

from PySide6.QtWidgets import QMainWindow, QStackedWidget

from guardiao.app.application import VISIBLE_APP_NAME
from guardiao.app.state import Store
from guardiao.app.ui.panels.alert_details import AlertDetailsPanel
from guardiao.app.ui.panels.alerts import AlertsPanel
from guardiao.app.ui.panels.territories import TerritoriesPanel
from guardiao.model.navigation import ViewMode

logger = logging.getLogger(__name__)

# Stack order
PAGE_ORDER = [ViewMode.TERRITORIES, ViewMode.ALERTS, ViewMode.ALERT_DETAILS]


class MainWindow(QMainWindow):
    def __init__(self, store: Store) -> None:
        super().__init__()
        self.store = store
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(480, 900)

        self.pages = QStackedWidget(self)
        self.setCentralWidget(self.pages)

        self.territories_panel = TerritoriesPanel(self.store, parent=self)
        self.alerts_panel = AlertsPanel(self.store, parent=self)
        self.details_panel = AlertDetailsPanel(self.store, parent=self)
        for panel in (self.territories_panel, self.alerts_panel, self.details_panel):
            self.pages.addWidget(panel)

        self.store.navigation_changed.connect(self._show_current_page)
        self.store.load_failed.connect(self._on_load_failed)

        self._show_current_page()

    def _show_current_page(self, *_args) -> None:
        mode = self.store.navigation_state.mode
        self.pages.setCurrentIndex(PAGE_ORDER.index(mode))

    def _on_load_failed(self, source: str, message: str) -> None:
        # territories failures take over the overview page; alerts only get a note
        if source == "alerts":
            self.statusBar().showMessage(self.tr("Alerts could not be loaded: {0}").format(message))

    def closeEvent(self, event) -> None:
        self.store.shutdown()
        super().closeEvent(event)
