from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QAbstractItemView, QHeaderView, QLabel, QSplitter, QTableWidget, QTableWidgetItem,
    QVBoxLayout, QWidget,
)

from guardiao.app.state import Store
from guardiao.app.ui.map_view import MapView
from guardiao.app.ui.panels.base import BasePanel, PageHeader
from guardiao.model.features import Alert
from guardiao.model.navigation import ViewMode

logger = logging.getLogger(__name__)

COLUMNS = ["Alert ID", "Status", "Size (ha)", "Detected"]


class AlertsPanel(BasePanel):
    """
    Alerts of the selected territory.

    Top half: map centered on the territory, its outline plus the alert
    outlines (clickable). Bottom half: the alert table; the first row is the
    field evidence record, followed by every loaded alert.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self.header = PageHeader("", with_back=True, parent=self)
        self.header.back_button.clicked.connect(lambda: self.store.back())
        root.addWidget(self.header)

        split = QSplitter(Qt.Orientation.Vertical, self)
        split.setChildrenCollapsible(False)
        root.addWidget(split, 1)

        self.map_view = MapView(split)
        split.addWidget(self.map_view)

        table_host = QWidget(split)
        tv = QVBoxLayout(table_host)
        tv.addWidget(QLabel(f"<b>{self.tr('Active Alerts')}</b>", table_host))

        self.table = QTableWidget(0, len(COLUMNS), table_host)
        self.table.setHorizontalHeaderLabels([self.tr(c) for c in COLUMNS])
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.cellClicked.connect(self._on_row_clicked)
        tv.addWidget(self.table)
        split.addWidget(table_host)

        split.setSizes([450, 450])

        self._rows: list[Alert] = []

        # wiring
        self.store.alerts_changed.connect(self._fill_table)
        self.store.evidence_changed.connect(self._fill_table)
        self.store.navigation_changed.connect(self._on_navigation_changed)

        self._fill_table()

    def _on_navigation_changed(self, *_args) -> None:
        state = self.store.navigation_state
        if state.mode != ViewMode.ALERTS:
            return
        territory = state.selected_territory
        self.header.set_title(territory.name if territory else "")
        self.table.clearSelection()
        self._refresh_map()

    def _refresh_map(self, *_args) -> None:
        self.store.render_map(self.map_view, ViewMode.ALERTS)

    def _fill_table(self, *_args) -> None:
        self._rows = [self.store.evidence.as_alert()] + list(self.store.alerts)

        self.table.setRowCount(len(self._rows))
        for row, alert in enumerate(self._rows):
            status = self.tr("Ongoing") if row == 0 else ""
            values = [f"#{alert.id}", status, f"{alert.area_ha:g}", alert.detected_date]
            for col, text in enumerate(values):
                item = QTableWidgetItem(text)
                if col == 1:
                    item.setForeground(QColor("#d62728"))
                self.table.setItem(row, col, item)

        self._refresh_map()

    def _on_row_clicked(self, row: int, _column: int) -> None:
        if not 0 <= row < len(self._rows):
            return
        alert = self._rows[row]
        logger.debug(f"Alert selected from table: {alert.id}")
        self.store.select_alert(alert)
