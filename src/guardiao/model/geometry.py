"""
Geographic Primitives, Ring Validation and Viewport Bounds.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, TYPE_CHECKING

import numpy as np

from guardiao.config import DEFAULT_CENTER, DEFAULT_ZOOM, TERRITORY_ZOOM

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoPoint:
    """A point on the map in decimal degrees."""
    lat: float
    lng: float

    def to_xy(self) -> tuple[float, float]:
        """Plot coordinates: x is longitude, y is latitude."""
        return self.lng, self.lat


@dataclass(frozen=True)
class ViewportState:
    """Map center and integer zoom level."""
    center: GeoPoint
    zoom_level: int

    @classmethod
    def default(cls) -> ViewportState:
        lat, lng = DEFAULT_CENTER
        return cls(center=GeoPoint(lat=lat, lng=lng), zoom_level=DEFAULT_ZOOM)


@dataclass(frozen=True)
class Envelope:
    """
    The smallest axis-aligned rectangle in lat/lng space containing a point set.
    """
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @classmethod
    def from_points(cls, points: Sequence[GeoPoint]) -> Optional[Envelope]:
        """
        Linear scan for the min/max of both axes.

        Returns:
            The envelope, or None for an empty point set.
        """
        if not points:
            return None
        coords: npt.NDArray[np.float64] = np.array(
            [(p.lat, p.lng) for p in points], dtype=np.float64
        )
        min_lat, min_lng = coords.min(axis=0)
        max_lat, max_lng = coords.max(axis=0)
        return cls(
            min_lat=float(min_lat),
            max_lat=float(max_lat),
            min_lng=float(min_lng),
            max_lng=float(max_lng),
        )

    @property
    def center(self) -> GeoPoint:
        """Midpoint of the south-west and north-east corners."""
        return GeoPoint(
            lat=(self.min_lat + self.max_lat) / 2,
            lng=(self.min_lng + self.max_lng) / 2,
        )


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, Real) and not isinstance(value, bool)


def is_valid_coordinate(coord: Any) -> bool:
    """
    True for an ordered pair of two finite numbers.

    Strings and mappings are never pairs, even when they have length 2.
    """
    if not isinstance(coord, (list, tuple)) or len(coord) != 2:
        return False
    x, y = coord
    if not (_is_number(x) and _is_number(y)):
        return False
    try:
        fx, fy = float(x), float(y)
    except OverflowError:
        # integers beyond float range
        return False
    return math.isfinite(fx) and math.isfinite(fy)


def validate_ring(raw: Optional[Iterable[Any]]) -> list[GeoPoint]:
    """
    Filter a raw GeoJSON ring to well-formed coordinates and swap the axes.

    GeoJSON stores each position as [lng, lat]. Malformed entries (wrong
    length, non-numeric, NaN, +-Infinity) are dropped silently and the order
    of the remaining points is preserved.

    Args:
        raw: Any iterable of raw coordinates, or None.

    Returns:
        The accepted points as GeoPoint(lat, lng). May be empty.
    """
    if raw is None or isinstance(raw, (str, bytes)):
        return []
    try:
        items = list(raw)
    except TypeError:
        return []

    points = [
        GeoPoint(lat=float(coord[1]), lng=float(coord[0]))
        for coord in items
        if is_valid_coordinate(coord)
    ]

    dropped = len(items) - len(points)
    if dropped:
        logger.debug(f"Dropped {dropped} of {len(items)} malformed coordinates.")
    return points


def compute_viewport(points: Sequence[GeoPoint]) -> Optional[ViewportState]:
    """
    Center the map on the envelope of the given points.

    The zoom is always TERRITORY_ZOOM; it is not fitted to the envelope size.

    Returns:
        The new viewport, or None when there is nothing to center on (the
        caller keeps its current viewport).
    """
    envelope = Envelope.from_points(points)
    if envelope is None:
        return None
    return ViewportState(center=envelope.center, zoom_level=TERRITORY_ZOOM)


def ring_to_xy(points: Sequence[GeoPoint]) -> npt.NDArray[np.float64]:
    """
    Convert a boundary to an (N, 2) array of (lng, lat) plot coordinates,
    closing the ring if the first and last points differ.
    """
    if not points:
        return np.empty((0, 2), dtype=np.float64)
    arr = np.array([p.to_xy() for p in points], dtype=np.float64)
    if not np.allclose(arr[0], arr[-1]):
        arr = np.vstack([arr, arr[0]])
    return arr
