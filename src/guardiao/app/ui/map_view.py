"""
Map View
Pannable/zoomable 2D plot of boundary polygons in lng/lat space.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import pyqtgraph as pg
from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QBrush, QColor, QPolygonF
from PySide6.QtWidgets import QGraphicsPolygonItem, QWidget

from guardiao.model.geometry import GeoPoint, ring_to_xy
from guardiao.model.map_surface import PolygonStyle

logger = logging.getLogger(__name__)

# Web-map convention: one 256 px tile spans 360 degrees at zoom 0
TILE_SIZE_PX = 256


def span_for_zoom(zoom: int, size_px: int) -> float:
    """Degrees covered by `size_px` pixels at the given zoom level."""
    return max(1, size_px) * 360.0 / (TILE_SIZE_PX * 2 ** zoom)


class PolygonItem(QGraphicsPolygonItem):
    """A boundary outline. Clicks anywhere inside trigger `on_click`."""

    def __init__(self, points: Sequence[GeoPoint], style: PolygonStyle,
                 on_click: Optional[Callable[[], None]] = None) -> None:
        super().__init__(QPolygonF([QPointF(float(x), float(y)) for x, y in ring_to_xy(points)]))
        self._on_click = on_click

        self.setPen(pg.mkPen(style.stroke_color, width=style.stroke_width))
        if style.fill_color:
            self.setBrush(QBrush(QColor(style.fill_color)))
        else:
            self.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        if on_click is not None:
            self.setCursor(Qt.CursorShape.PointingHandCursor)

    def mouseClickEvent(self, ev) -> None:
        # Dispatched by pyqtgraph's GraphicsScene; drags still pan the view
        if self._on_click is None or ev.button() != Qt.MouseButton.LeftButton:
            return
        ev.accept()
        self._on_click()


class MapView(pg.PlotWidget):
    """
    pyqtgraph implementation of the MapSurface capability:
      - locked aspect (1 deg lng == 1 deg lat on screen),
      - mouse pan/zoom,
      - viewport given as center + integer zoom level.
    """
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent=parent)
        self.setAspectLocked(True)
        self.showGrid(x=True, y=True, alpha=0.2)
        self.setLabel("bottom", "Longitude")
        self.setLabel("left", "Latitude")
        self.setMenuEnabled(False)

        self._polygons: list[PolygonItem] = []
        self._center: Optional[GeoPoint] = None
        self._zoom: Optional[int] = None

    # ---- MapSurface ----

    def render_polygon(self, points: Sequence[GeoPoint], style: PolygonStyle,
                       on_click: Optional[Callable[[], None]] = None) -> None:
        if not points:
            return
        item = PolygonItem(points, style, on_click)
        item.setZValue(len(self._polygons))  # later layers on top
        self.addItem(item)
        self._polygons.append(item)

    def set_viewport(self, center: GeoPoint, zoom: int) -> None:
        self._center = center
        self._zoom = zoom
        self._apply_viewport()

    def clear_polygons(self) -> None:
        for item in self._polygons:
            self.removeItem(item)
        self._polygons.clear()

    # ---- helpers ----

    def _apply_viewport(self) -> None:
        if self._center is None or self._zoom is None:
            return
        half_w = span_for_zoom(self._zoom, self.width()) / 2
        half_h = span_for_zoom(self._zoom, self.height()) / 2
        self.setRange(
            xRange=(self._center.lng - half_w, self._center.lng + half_w),
            yRange=(self._center.lat - half_h, self._center.lat + half_h),
            padding=0,
        )

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._apply_viewport()
