"""
Map surface capability.

The model only needs two things from a map: draw a boundary polygon and move
the viewport. Anything that implements this protocol (the pyqtgraph MapView,
a recording fake in tests) can be driven by the Store.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, Union

from guardiao.config import ALERT_STROKE, TERRITORY_STROKE
from guardiao.model.features import Alert, Territory
from guardiao.model.geometry import GeoPoint, ViewportState
from guardiao.model.navigation import NavigationState, ViewMode


@dataclass(frozen=True)
class PolygonStyle:
    stroke_color: str
    stroke_width: float = 2.0
    fill_color: Optional[str] = None  # None -> transparent


TERRITORY_STYLE = PolygonStyle(*TERRITORY_STROKE)
ALERT_STYLE = PolygonStyle(*ALERT_STROKE)


class MapSurface(Protocol):
    def render_polygon(
        self,
        points: Sequence[GeoPoint],
        style: PolygonStyle,
        on_click: Optional[Callable[[], None]] = None,
    ) -> None: ...

    def set_viewport(self, center: GeoPoint, zoom: int) -> None: ...

    def clear_polygons(self) -> None: ...


@dataclass(frozen=True)
class MapLayer:
    """One polygon to draw. `target` is what a click on it selects (None: not clickable)."""
    points: tuple[GeoPoint, ...]
    style: PolygonStyle
    target: Union[Territory, Alert, None] = None


def layers_for_view(
    state: NavigationState,
    territories: Sequence[Territory],
    alerts: Sequence[Alert],
) -> list[MapLayer]:
    """
    The polygons visible in the given navigation state.

    Overview: every territory and every alert, all clickable.
    Alerts page: the selected territory outline (inert) plus clickable alerts.
    Alert details: no map.
    Items with an empty boundary are never drawn.
    """
    layers: list[MapLayer] = []
    match state.mode:
        case ViewMode.TERRITORIES:
            layers += [MapLayer(t.boundary, TERRITORY_STYLE, t) for t in territories]
        case ViewMode.ALERTS if state.selected_territory is not None:
            layers.append(MapLayer(state.selected_territory.boundary, TERRITORY_STYLE))
        case _:
            return []
    layers += [MapLayer(a.boundary, ALERT_STYLE, a) for a in alerts]
    return [layer for layer in layers if layer.points]


def draw_layers(
    surface: MapSurface,
    layers: Sequence[MapLayer],
    viewport: ViewportState,
    on_select: Callable[[Union[Territory, Alert]], None],
) -> None:
    """Replace everything on the surface with `layers` and apply the viewport."""
    surface.clear_polygons()
    for layer in layers:
        callback = None
        if layer.target is not None:
            target = layer.target
            callback = lambda target=target: on_select(target)
        surface.render_polygon(layer.points, layer.style, callback)
    surface.set_viewport(viewport.center, viewport.zoom_level)
