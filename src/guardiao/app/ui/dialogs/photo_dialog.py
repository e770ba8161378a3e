"""Dialog listing the photos taken on site for an alert."""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QDialog, QGridLayout, QLabel, QPushButton, QVBoxLayout, QWidget

logger = logging.getLogger(__name__)

THUMB_SIZE = 96
COLUMNS = 3


class PhotoDialog(QDialog):
    """
    Photo gallery for the current alert.

    The camera is not available on the desktop: "Take New Photo" is shown
    disabled, as a placeholder for the capture device.
    """
    def __init__(self, photos: list[str], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(self.tr("Photos"))
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f"<b>{self.tr('Photos')}</b>", self))

        grid = QGridLayout()
        for i, path in enumerate(photos):
            grid.addWidget(self._thumbnail(path, i + 1), i // COLUMNS, i % COLUMNS)
        layout.addLayout(grid)

        self.btn_take = QPushButton(self.tr("Take New Photo"), self)
        self.btn_take.setEnabled(False)
        self.btn_take.setToolTip(self.tr("No camera available"))
        layout.addWidget(self.btn_take)

        btn_close = QPushButton(self.tr("Close"), self)
        btn_close.clicked.connect(self.accept)
        layout.addWidget(btn_close)

    def _thumbnail(self, path: str, number: int) -> QLabel:
        label = QLabel(self)
        label.setFixedSize(THUMB_SIZE, THUMB_SIZE)
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        pix = QPixmap(path)
        if pix.isNull():
            logger.warning(f"Could not load photo: {path}")
            label.setText(self.tr("Photo {0}").format(number))
            label.setStyleSheet("background: #e0e0e0; color: gray;")
        else:
            label.setPixmap(pix.scaled(
                THUMB_SIZE, THUMB_SIZE,
                Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                Qt.TransformationMode.SmoothTransformation,
            ))
        return label
