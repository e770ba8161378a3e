from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QLabel, QPushButton, QScrollArea, QStackedWidget, QVBoxLayout, QWidget,
)

from guardiao.app.application import VISIBLE_APP_NAME
from guardiao.app.state import Store
from guardiao.app.ui.map_view import MapView
from guardiao.app.ui.panels.base import BasePanel, PageHeader
from guardiao.model.features import Territory
from guardiao.model.navigation import ViewMode

logger = logging.getLogger(__name__)


def format_area(area: float) -> str:
    """Thousands separators: '(12,345 ha)'."""
    return f"({area:,.0f} ha)" if float(area).is_integer() else f"({area:,.2f} ha)"


class TerritoriesPanel(BasePanel):
    """
    Overview page.

    Top: the map with every territory and alert outline (both clickable).
    Below: alert count and one button per territory.
    While the territories document is loading a placeholder is shown; if it
    failed the page is replaced by the error message.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        self.stack = QStackedWidget(self)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addWidget(self.stack)

        # 0: loading
        self.lbl_loading = QLabel(self.tr("Loading territories..."), self)
        self.lbl_loading.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_loading.setStyleSheet("font-size: 18px; color: gray;")
        self.stack.addWidget(self.lbl_loading)

        # 1: error
        self.lbl_error = QLabel("", self)
        self.lbl_error.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setStyleSheet("font-size: 18px; color: #d62728;")
        self.stack.addWidget(self.lbl_error)

        # 2: content
        content = QWidget(self)
        v = QVBoxLayout(content)
        v.setContentsMargins(0, 0, 0, 0)
        v.addWidget(PageHeader(VISIBLE_APP_NAME, parent=content))

        self.map_view = MapView(content)
        v.addWidget(self.map_view, 1)

        self.lbl_alerts_title = QLabel(f"<b>{self.tr('Alerts')}</b>", content)
        self.lbl_alerts_count = QLabel("", content)
        self.lbl_alerts_count.setStyleSheet("color: gray;")
        v.addWidget(self.lbl_alerts_title)
        v.addWidget(self.lbl_alerts_count)

        scroll = QScrollArea(content)
        scroll.setWidgetResizable(True)
        self.list_host = QWidget(scroll)
        self.list_layout = QVBoxLayout(self.list_host)
        self.list_layout.addStretch()
        scroll.setWidget(self.list_host)
        v.addWidget(scroll)

        self.stack.addWidget(content)

        # wiring
        self.store.territories_changed.connect(self._on_data_changed)
        self.store.alerts_changed.connect(self._on_data_changed)
        self.store.load_failed.connect(self._on_data_changed)
        self.store.navigation_changed.connect(self._refresh_map)

        self._on_data_changed()

    def _on_data_changed(self, *_args) -> None:
        source = self.store.territories_source
        if source.failed:
            self.lbl_error.setText(self.tr("Error: {0}").format(source.error))
            self.stack.setCurrentIndex(1)
            return
        if source.is_loading:
            self.stack.setCurrentIndex(0)
            return

        self.stack.setCurrentIndex(2)
        self._fill_territory_buttons(self.store.territories)
        self._update_alert_summary()
        self._refresh_map()

    def _refresh_map(self, *_args) -> None:
        self.store.render_map(self.map_view, ViewMode.TERRITORIES)

    def _update_alert_summary(self) -> None:
        alerts_source = self.store.alerts_source
        if alerts_source.failed:
            self.lbl_alerts_count.setText(self.tr("Alerts unavailable: {0}").format(alerts_source.error))
        elif alerts_source.is_loading:
            self.lbl_alerts_count.setText(self.tr("Loading alerts..."))
        else:
            self.lbl_alerts_count.setText(
                self.tr("{0} deforestation alerts detected").format(len(self.store.alerts))
            )

    def _fill_territory_buttons(self, territories: list[Territory]) -> None:
        # remove old buttons, keep the trailing stretch
        while self.list_layout.count() > 1:
            item = self.list_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        for i, territory in enumerate(territories):
            btn = QPushButton(f"{territory.name}    {format_area(territory.area)}", self.list_host)
            btn.setMinimumHeight(44)
            btn.clicked.connect(lambda _=False, t=territory: self._on_territory_clicked(t))
            self.list_layout.insertWidget(i, btn)

    def _on_territory_clicked(self, territory: Territory) -> None:
        logger.debug(f"Territory selected from list: {territory.name}")
        self.store.select_territory(territory)
