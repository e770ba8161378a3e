"""
Territories and Alerts (Survey Features)
========================================
Typed, validated collections built from GeoJSON FeatureCollection payloads.

Why is this file needed?
------------------------
1. Typing: The raw payload is a loose tree of dicts and lists. The rest of
   the application only ever sees immutable Territory and Alert records.
2. Validation: Every boundary ring goes through `validate_ring`, so rendering
   and bounds math never see malformed coordinates.

Classes:
    Territory: A protected territory (name, area in hectares, boundary).
    Alert: A deforestation alert (code, area in hectares, detection date, boundary).
    LoadFailure: A data source could not be fetched or parsed.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

from guardiao.model.geometry import GeoPoint, validate_ring

logger = logging.getLogger(__name__)


class LoadFailure(Exception):
    """A survey data document could not be retrieved or parsed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.message} ({self.source})"
        return self.message


@dataclass(frozen=True)
class Territory:
    name: str
    area: float  # ha
    boundary: tuple[GeoPoint, ...] = field(default_factory=tuple)

    @property
    def is_renderable(self) -> bool:
        return len(self.boundary) > 0


@dataclass(frozen=True)
class Alert:
    id: str
    area_ha: float
    detected_date: str
    boundary: tuple[GeoPoint, ...] = field(default_factory=tuple)

    @property
    def is_renderable(self) -> bool:
        return len(self.boundary) > 0


# -------------------------------------------------------------------------------
# Payload helpers
# -------------------------------------------------------------------------------

def _features_of(payload: Any) -> Sequence[Any]:
    """Accept a FeatureCollection mapping or the bare feature list."""
    if isinstance(payload, Mapping):
        features = payload.get("features")
    else:
        features = payload
    if isinstance(features, Sequence) and not isinstance(features, (str, bytes)):
        return features
    raise LoadFailure("Payload is not a GeoJSON FeatureCollection.")


def _properties(feature: Any) -> Mapping[str, Any]:
    if isinstance(feature, Mapping):
        props = feature.get("properties")
        if isinstance(props, Mapping):
            return props
    return {}


def _outer_ring(feature: Any) -> Any:
    """coordinates[0] of the feature geometry, or None if absent."""
    if not isinstance(feature, Mapping):
        return None
    geometry = feature.get("geometry")
    if not isinstance(geometry, Mapping):
        return None
    coordinates = geometry.get("coordinates")
    if isinstance(coordinates, Sequence) and not isinstance(coordinates, (str, bytes)) and coordinates:
        return coordinates[0]
    return None


def _as_float(value: Any) -> float:
    """Numeric property value; anything non-numeric or non-finite reads as 0.0."""
    if isinstance(value, bool) or not isinstance(value, (Real, str)):
        return 0.0
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


# -------------------------------------------------------------------------------
# Public API
# -------------------------------------------------------------------------------

def territory_from_feature(feature: Any) -> Territory:
    props = _properties(feature)
    return Territory(
        name=_as_text(props.get("name")),
        area=_as_float(props.get("area")),
        boundary=tuple(validate_ring(_outer_ring(feature))),
    )


def alert_from_feature(feature: Any) -> Alert:
    props = _properties(feature)
    return Alert(
        id=_as_text(props.get("CODEALERTA")),
        area_ha=_as_float(props.get("AREAHA")),
        detected_date=_as_text(props.get("DATADETEC")),
        boundary=tuple(validate_ring(_outer_ring(feature))),
    )


def load_territories(payload: Any) -> list[Territory]:
    """
    Map a territories FeatureCollection to Territory records.

    Features whose first ring is missing or entirely invalid are kept with an
    empty boundary (listed, but not drawn).

    Raises:
        LoadFailure: If the payload carries no feature sequence.
    """
    territories = [territory_from_feature(f) for f in _features_of(payload)]
    empty = sum(1 for t in territories if not t.is_renderable)
    logger.debug(f"Built {len(territories)} territories ({empty} without a renderable boundary).")
    return territories


def load_alerts(payload: Any) -> list[Alert]:
    """
    Map an alerts FeatureCollection (CODEALERTA / AREAHA / DATADETEC) to Alert records.

    Raises:
        LoadFailure: If the payload carries no feature sequence.
    """
    alerts = [alert_from_feature(f) for f in _features_of(payload)]
    empty = sum(1 for a in alerts if not a.is_renderable)
    logger.debug(f"Built {len(alerts)} alerts ({empty} without a renderable boundary).")
    return alerts
