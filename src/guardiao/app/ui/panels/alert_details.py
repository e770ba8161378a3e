from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QGridLayout, QHBoxLayout, QLabel, QPushButton, QScrollArea, QVBoxLayout, QWidget,
)

from guardiao.app.state import Store
from guardiao.app.ui.comparison_slider import ComparisonSliderWidget
from guardiao.app.ui.dialogs.photo_dialog import PhotoDialog
from guardiao.app.ui.dialogs.voice_note_dialog import VoiceNoteDialog
from guardiao.app.ui.panels.base import BasePanel, PageHeader
from guardiao.model.evidence import AlertEvidence
from guardiao.model.navigation import ViewMode

logger = logging.getLogger(__name__)

TIMELINE_THUMB = 96


class AlertDetailsPanel(BasePanel):
    """
    Evidence for the selected alert: metadata grid, before/after comparison
    slider, historical timeline, image dates and the field actions.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self.header = PageHeader(self.tr("Alert Details"), with_back=True, parent=self)
        self.header.back_button.clicked.connect(lambda: self.store.back())
        root.addWidget(self.header)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        root.addWidget(scroll, 1)

        body = QWidget(scroll)
        v = QVBoxLayout(body)
        scroll.setWidget(body)

        # --- metadata ---
        self.info_grid = QGridLayout()
        self._info_labels: dict[str, QLabel] = {}
        for i, (key, caption) in enumerate([
            ("code", "Code"), ("area", "Area"), ("state", "State"),
            ("municipality", "Municipality"), ("source", "Source"), ("detected", "Detected"),
        ]):
            cell = QVBoxLayout()
            cap = QLabel(self.tr(caption), body)
            cap.setStyleSheet("color: gray;")
            value = QLabel("", body)
            cell.addWidget(cap)
            cell.addWidget(value)
            self.info_grid.addLayout(cell, i // 2, i % 2)
            self._info_labels[key] = value
        v.addLayout(self.info_grid)

        # --- before/after ---
        self.comparison = ComparisonSliderWidget(self.store.session.slider, body)
        v.addWidget(self.comparison)

        # --- timeline ---
        v.addWidget(QLabel(f"<b>{self.tr('Historical Timeline')}</b>", body))
        self.timeline_layout = QVBoxLayout()
        v.addLayout(self.timeline_layout)

        # --- dates ---
        dates = QGridLayout()
        self.lbl_before = QLabel("", body)
        self.lbl_detected = QLabel("", body)
        self.lbl_after = QLabel("", body)
        dates.addWidget(self.lbl_before, 0, 0)
        dates.addWidget(self.lbl_detected, 1, 0)
        dates.addWidget(self.lbl_after, 0, 1)
        v.addLayout(dates)

        # --- actions ---
        self.btn_route = QPushButton(self.tr("Plot Route"), body)
        self.btn_route.setEnabled(False)
        self.btn_route.setToolTip(self.tr("Routing is not available"))
        self.btn_photo = QPushButton(self.tr("Take Photo"), body)
        self.btn_photo.clicked.connect(lambda: self.open_photo_dialog())
        self.btn_voice = QPushButton(self.tr("Add Voice Note"), body)
        self.btn_voice.clicked.connect(lambda: self.open_voice_note_dialog())
        for btn in (self.btn_route, self.btn_photo, self.btn_voice):
            btn.setMinimumHeight(40)
            v.addWidget(btn)

        v.addStretch()

        # wiring
        self.store.navigation_changed.connect(self._on_navigation_changed)
        self.store.evidence_changed.connect(self._show_evidence)

        self._show_evidence(self.store.evidence)

    def _on_navigation_changed(self, *_args) -> None:
        state = self.store.navigation_state
        if state.mode != ViewMode.ALERT_DETAILS or state.selected_alert is None:
            return
        alert = state.selected_alert
        self._info_labels["code"].setText(alert.id)
        self._info_labels["area"].setText(f"{alert.area_ha:g} ha")
        self._info_labels["detected"].setText(alert.detected_date)

    def _show_evidence(self, evidence: AlertEvidence) -> None:
        self._info_labels["code"].setText(evidence.code)
        self._info_labels["area"].setText(f"{evidence.area_ha:g} ha")
        self._info_labels["state"].setText(evidence.state)
        self._info_labels["municipality"].setText(evidence.municipality)
        self._info_labels["source"].setText(evidence.source)
        self._info_labels["detected"].setText(evidence.detected_date)

        self.comparison.set_images(evidence.before_image, evidence.after_image)

        self.lbl_before.setText(self.tr("Before: {0}").format(evidence.before_date))
        self.lbl_detected.setText(self.tr("Detected: {0}").format(evidence.detected_date))
        self.lbl_after.setText(self.tr("After: {0}").format(evidence.after_date))

        self._fill_timeline(evidence)
        # a selected alert keeps its own code/area
        self._on_navigation_changed()

    def _fill_timeline(self, evidence: AlertEvidence) -> None:
        while self.timeline_layout.count():
            item = self.timeline_layout.takeAt(0)
            if item.layout() is not None:
                while item.layout().count():
                    child = item.layout().takeAt(0)
                    if child.widget() is not None:
                        child.widget().deleteLater()

        for image in evidence.historical_images:
            row = QHBoxLayout()
            thumb = QLabel(self)
            thumb.setFixedSize(TIMELINE_THUMB, TIMELINE_THUMB)
            thumb.setAlignment(Qt.AlignmentFlag.AlignCenter)
            pix = QPixmap(image.path)
            if pix.isNull():
                thumb.setStyleSheet("background: #e0e0e0;")
            else:
                thumb.setPixmap(pix.scaled(
                    TIMELINE_THUMB, TIMELINE_THUMB,
                    Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                    Qt.TransformationMode.SmoothTransformation,
                ))
            row.addWidget(thumb)
            row.addWidget(QLabel(f"<b>{image.date}</b>", self), 1)
            self.timeline_layout.addLayout(row)

    # ---- dialogs ----

    def open_photo_dialog(self) -> None:
        PhotoDialog(self.store.evidence.photos, self).exec()

    def open_voice_note_dialog(self) -> None:
        VoiceNoteDialog(self).exec()
