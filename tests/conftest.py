import json
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication  # noqa: E402

from guardiao.model.features import Alert, Territory  # noqa: E402
from guardiao.model.geometry import GeoPoint  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


def square(lat: float, lng: float, size: float = 1.0) -> tuple[GeoPoint, ...]:
    return (
        GeoPoint(lat, lng),
        GeoPoint(lat, lng + size),
        GeoPoint(lat + size, lng + size),
        GeoPoint(lat + size, lng),
    )


@pytest.fixture
def tapajos() -> Territory:
    return Territory(name="Tapajós", area=1000.0, boundary=square(0.0, 0.0, 10.0))


@pytest.fixture
def alert() -> Alert:
    return Alert(id="1356063", area_ha=1.75, detected_date="2024-02-14", boundary=square(1.0, 1.0))


@pytest.fixture
def write_json(tmp_path):
    def _write(name: str, data) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write
