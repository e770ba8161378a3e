from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QRectF, Qt, Slot
from PySide6.QtGui import QColor, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QSizePolicy, QWidget

from guardiao.model.slider import ComparisonSlider

logger = logging.getLogger(__name__)

HANDLE_DIAMETER = 32
PLACEHOLDER_BEFORE = QColor("#2f6b2f")
PLACEHOLDER_AFTER = QColor("#a0784a")


class ComparisonSliderWidget(QWidget):
    """
    Before/after image comparison.

    The "after" image fills the widget; the "before" image is drawn on top,
    clipped to the left `position` fraction. Dragging anywhere in the widget
    moves the split. Qt's implicit mouse grab keeps delivering moves (and the
    release) to this widget after the pointer leaves it.
    """
    def __init__(self, slider: ComparisonSlider, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.slider = slider
        self._before: Optional[QPixmap] = None
        self._after: Optional[QPixmap] = None

        self.setMinimumHeight(256)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setCursor(Qt.CursorShape.SizeHorCursor)

        self.slider.add_listener(self._on_position_changed)

    def set_images(self, before_path: str, after_path: str) -> None:
        self._before = self._load(before_path)
        self._after = self._load(after_path)
        self.update()

    @staticmethod
    def _load(path: str) -> Optional[QPixmap]:
        pix = QPixmap(path)
        if pix.isNull():
            logger.warning(f"Could not load image: {path}")
            return None
        return pix

    # ---- drag session ----

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        # Measure the live container at drag start
        self.slider.begin_drag(event.position().x(), 0.0, float(self.width()))
        event.accept()

    def mouseMoveEvent(self, event) -> None:
        session = self.slider.session
        if session is None:
            super().mouseMoveEvent(event)
            return
        session.update(event.position().x())
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.slider.end_drag()
        super().mouseReleaseEvent(event)

    def hideEvent(self, event) -> None:
        # Page switched away mid-drag: release the session
        self.slider.end_drag()
        super().hideEvent(event)

    @Slot(float)
    def _on_position_changed(self, _position: float) -> None:
        self.update()

    # ---- painting ----

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = QRectF(self.rect())

        self._draw_image(painter, rect, self._after, PLACEHOLDER_AFTER)

        split_x = rect.width() * self.slider.position
        painter.save()
        painter.setClipRect(QRectF(0.0, 0.0, split_x, rect.height()))
        self._draw_image(painter, rect, self._before, PLACEHOLDER_BEFORE)
        painter.restore()

        # divider + handle
        painter.setPen(QPen(Qt.GlobalColor.white, 4))
        painter.drawLine(int(split_x), 0, int(split_x), int(rect.height()))

        handle = QRectF(
            split_x - HANDLE_DIAMETER / 2,
            rect.height() / 2 - HANDLE_DIAMETER / 2,
            HANDLE_DIAMETER,
            HANDLE_DIAMETER,
        )
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(self.palette().highlight())
        painter.drawEllipse(handle)
        painter.setPen(Qt.GlobalColor.white)
        painter.drawText(handle, Qt.AlignmentFlag.AlignCenter, "↔")
        painter.end()

    @staticmethod
    def _draw_image(painter: QPainter, rect: QRectF, pixmap: Optional[QPixmap], fallback: QColor) -> None:
        if pixmap is None:
            painter.fillRect(rect, fallback)
            return
        # object-fit: cover
        scaled = pixmap.scaled(
            rect.size().toSize(),
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.SmoothTransformation,
        )
        x = (rect.width() - scaled.width()) / 2
        y = (rect.height() - scaled.height()) / 2
        painter.drawPixmap(int(x), int(y), scaled)
