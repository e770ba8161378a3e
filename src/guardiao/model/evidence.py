"""
Alert Evidence
==============
The field evidence shown on the Alert Details page: alert metadata, the
before/after image pair for the comparison slider, the historical timeline
and the photos taken on site.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from guardiao.model.features import Alert


@dataclass
class HistoricalImage:
    date: str
    path: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoricalImage:
        return cls(date=str(data.get("date", "")), path=str(data.get("path", "")))


@dataclass
class AlertEvidence:
    code: str = "1356062"
    area_ha: float = 3.20
    state: str = "State of Pará"
    municipality: str = "Santarém"
    source: str = "Sentinel-2"

    before_date: str = "10/02/2024"
    after_date: str = "12/03/2024"
    detected_date: str = "01/03/2024"

    before_image: str = "before.jpg"
    after_image: str = "after.jpg"
    photos: list[str] = field(default_factory=lambda: ["close1.jpg"])
    historical_images: list[HistoricalImage] = field(default_factory=lambda: [
        HistoricalImage(date="Feb 2024", path="1.png"),
        HistoricalImage(date="Mar 2024", path="2.png"),
        HistoricalImage(date="Apr 2024", path="3.png"),
    ])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AlertEvidence:
        """Build from a JSON object; absent keys keep the sample values."""
        default = cls()
        dates = data.get("dates", {}) or {}
        historical = data.get("historical_images")
        return cls(
            code=str(data.get("code", default.code)),
            area_ha=float(data.get("area_ha", default.area_ha)),
            state=str(data.get("state", default.state)),
            municipality=str(data.get("municipality", default.municipality)),
            source=str(data.get("source", default.source)),
            before_date=str(dates.get("before", default.before_date)),
            after_date=str(dates.get("after", default.after_date)),
            detected_date=str(dates.get("detected", default.detected_date)),
            before_image=str(data.get("before_image", default.before_image)),
            after_image=str(data.get("after_image", default.after_image)),
            photos=[str(p) for p in data.get("photos", default.photos)],
            historical_images=(
                [HistoricalImage.from_dict(h) for h in historical]
                if historical is not None else default.historical_images
            ),
        )

    def as_alert(self) -> Alert:
        """The evidence record as a selectable alert row (it has no boundary)."""
        return Alert(id=self.code, area_ha=self.area_ha, detected_date=self.detected_date)

    def resolve(self, base_dir: str) -> AlertEvidence:
        """Return a copy with every relative image path joined to base_dir."""
        def _abs(path: str) -> str:
            return path if os.path.isabs(path) else os.path.join(base_dir, path)

        return AlertEvidence(
            code=self.code,
            area_ha=self.area_ha,
            state=self.state,
            municipality=self.municipality,
            source=self.source,
            before_date=self.before_date,
            after_date=self.after_date,
            detected_date=self.detected_date,
            before_image=_abs(self.before_image),
            after_image=_abs(self.after_image),
            photos=[_abs(p) for p in self.photos],
            historical_images=[HistoricalImage(h.date, _abs(h.path)) for h in self.historical_images],
        )
