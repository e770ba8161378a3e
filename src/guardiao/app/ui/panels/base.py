from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from guardiao.app.state import Store


class BasePanel(QWidget):
    """Base class for the drill-down pages. Holds a reference to the global store."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store


class PageHeader(QWidget):
    """Title bar with an optional back arrow."""
    def __init__(self, title: str, with_back: bool = False, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAutoFillBackground(True)
        self.setStyleSheet("background-color: #1d5c3a; color: white;")

        row = QHBoxLayout(self)
        row.setContentsMargins(12, 12, 12, 12)

        self.back_button: QPushButton | None = None
        if with_back:
            self.back_button = QPushButton("←", self)
            self.back_button.setFlat(True)
            self.back_button.setFixedWidth(36)
            self.back_button.setStyleSheet("color: white; font-size: 18px;")
            row.addWidget(self.back_button)

        self.title = QLabel(title, self)
        self.title.setStyleSheet("font-size: 18px; font-weight: bold;")
        if not with_back:
            self.title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        row.addWidget(self.title, 1)

    def set_title(self, title: str) -> None:
        self.title.setText(title)
