"""Voice note dialog. No microphone is opened; only the record toggle is modelled."""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

logger = logging.getLogger(__name__)


class VoiceNoteDialog(QDialog):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(self.tr("Voice Note"))
        self.setModal(True)
        self._recording = False

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f"<b>{self.tr('Voice Note')}</b>", self))

        self.btn_record = QPushButton(self)
        self.btn_record.setFixedSize(72, 72)
        self.btn_record.clicked.connect(lambda: self.toggle_recording())
        layout.addWidget(self.btn_record, 0, Qt.AlignmentFlag.AlignHCenter)

        row = QHBoxLayout()
        self.lbl_status = QLabel(self)
        self.lbl_status.setStyleSheet("color: gray;")
        row.addWidget(self.lbl_status, 1)
        self.btn_delete = QPushButton(self.tr("Delete"), self)
        self.btn_delete.setFlat(True)
        row.addWidget(self.btn_delete)
        layout.addLayout(row)

        btn_close = QPushButton(self.tr("Close"), self)
        btn_close.clicked.connect(self.accept)
        layout.addWidget(btn_close)

        self._update_ui()

    @property
    def is_recording(self) -> bool:
        return self._recording

    def toggle_recording(self) -> None:
        self._recording = not self._recording
        logger.debug(f"Voice note recording: {self._recording}")
        self._update_ui()

    def _update_ui(self) -> None:
        if self._recording:
            self.btn_record.setText("■")
            self.btn_record.setStyleSheet("border-radius: 36px; background: #d62728; color: white; font-size: 24px;")
            self.lbl_status.setText(self.tr("Recording..."))
        else:
            self.btn_record.setText("●")
            self.btn_record.setStyleSheet("border-radius: 36px; background: #1d5c3a; color: white; font-size: 24px;")
            self.lbl_status.setText(self.tr("Tap to record"))
        self.btn_delete.setVisible(not self._recording)

    def reject(self) -> None:
        self._recording = False
        super().reject()

    def accept(self) -> None:
        self._recording = False
        super().accept()
