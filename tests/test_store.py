import pytest

from guardiao.app.application import DataSources
from guardiao.app.state import Store
from guardiao.controller.workers import DocumentLoadWorker, evidence_worker
from guardiao.model.features import LoadFailure
from guardiao.model.geometry import ViewportState
from guardiao.model.navigation import NavigationError, ViewMode
from guardiao.model.state import LoadStatus


class RecordingSurface:
    def __init__(self):
        self.polygons = []
        self.viewport = None
        self.callbacks = []

    def render_polygon(self, points, style, on_click=None):
        self.polygons.append((tuple(points), style))
        self.callbacks.append(on_click)

    def set_viewport(self, center, zoom):
        self.viewport = (center, zoom)

    def clear_polygons(self):
        self.polygons.clear()
        self.callbacks.clear()


@pytest.fixture
def store(qapp):
    return Store()


def test_set_and_fail_emit_signals(store, tapajos):
    changed, failures = [], []
    store.territories_changed.connect(changed.append)
    store.load_failed.connect(lambda source, message: failures.append((source, message)))

    store.set_territories([tapajos])
    assert changed == [[tapajos]]

    store.fail_alerts("Network error")
    assert failures == [("alerts", "Network error")]
    assert store.alerts == []
    assert store.territories == [tapajos]
    assert store.alerts_source.failed


def test_select_emits_navigation_and_viewport(store, tapajos, alert):
    states, viewports = [], []
    store.navigation_changed.connect(states.append)
    store.viewport_changed.connect(viewports.append)

    store.select(tapajos)
    assert states[-1].mode == ViewMode.ALERTS
    assert viewports[-1] != ViewportState.default()

    store.select(alert)
    assert store.navigation_state.mode == ViewMode.ALERT_DETAILS

    store.back()
    store.back()
    assert store.navigation_state.mode == ViewMode.TERRITORIES
    assert store.viewport_state == ViewportState.default()


def test_invalid_event_propagates(store):
    with pytest.raises(NavigationError):
        store.back()


def test_slider_signal(store):
    positions = []
    store.slider_changed.connect(positions.append)
    store.session.slider.on_drag_move(30, 0, 100)
    assert positions == [pytest.approx(0.3)]


def test_render_map_click_drills_down(store, tapajos, alert):
    store.set_territories([tapajos])
    store.set_alerts([alert])
    surface = RecordingSurface()

    store.render_map(surface, ViewMode.TERRITORIES)
    assert len(surface.polygons) == 2
    assert surface.viewport == (store.viewport_state.center, store.viewport_state.zoom_level)

    surface.callbacks[0]()
    assert store.navigation_state.selected_territory is tapajos

    # the overview page no longer draws once the alerts page is current
    stale = RecordingSurface()
    store.render_map(stale, ViewMode.TERRITORIES)
    assert stale.polygons == [] and stale.viewport is None


def test_evidence_failure_keeps_sample(store):
    code = store.evidence.code
    store._evidence_failed("Data file not found (evidence.json)")
    assert store.evidence.code == code


def test_worker_reports_result(qapp, tapajos):
    worker = DocumentLoadWorker("territories", "memory", lambda source: [tapajos])
    loaded = []
    worker.loaded.connect(loaded.append)
    worker.run()
    assert loaded == [[tapajos]]


def test_worker_reports_failure(qapp):
    def loader(source):
        raise LoadFailure("Data file not found", source)

    worker = DocumentLoadWorker("alerts", "missing.geojson", loader)
    failed = []
    worker.failed.connect(failed.append)
    worker.run()
    assert failed == ["Data file not found (missing.geojson)"]


def test_worker_reports_unexpected_error(qapp):
    def loader(source):
        raise RuntimeError("disk on fire")

    worker = DocumentLoadWorker("evidence", "evidence.json", loader)
    loaded, failed = [], []
    worker.loaded.connect(loaded.append)
    worker.failed.connect(failed.append)
    worker.run()
    assert loaded == []
    assert failed == ["Failed to load evidence data: disk on fire"]


def test_malformed_evidence_worker_fails(qapp, write_json):
    path = write_json("evidence.json", {"area_ha": "n/a"})
    worker = evidence_worker(path)
    failed = []
    worker.failed.connect(failed.append)
    worker.run()
    assert len(failed) == 1
    assert "Failed to load evidence data" in failed[0]


def _load(qapp, store, sources):
    store.start_loading(sources)
    store.shutdown()
    # deliver the queued loaded/failed signals
    qapp.processEvents()


def test_loads_reach_a_terminal_state(qapp, store, write_json):
    territories = write_json("territories.geojson", {"features": [
        {"properties": {"name": "Tapajós", "area": 1000},
         "geometry": {"coordinates": [[[0, 0], [10, 0], [10, 10], [0, 10]]]}},
    ]})
    alerts = write_json("alerts.geojson", {"features": [
        {"properties": {"CODEALERTA": "1"}, "geometry": {"coordinates": [[[10 ** 400, 0], [1, 1]]]}},
    ]})
    evidence = write_json("evidence.json", {"dates": "x"})

    _load(qapp, store, DataSources(territories=territories, alerts=alerts, evidence=evidence))

    assert store.territories_source.status == LoadStatus.READY
    assert [t.name for t in store.territories] == ["Tapajós"]
    assert store.alerts_source.status == LoadStatus.READY
    assert len(store.alerts[0].boundary) == 1
    assert store.evidence.code == "1356062"


def test_malformed_territories_fail_instead_of_hanging(qapp, store, write_json, tmp_path):
    territories = write_json("territories.geojson", {"type": "FeatureCollection"})
    failures = []
    store.load_failed.connect(lambda source, message: failures.append(source))

    _load(qapp, store, DataSources(
        territories=territories,
        alerts=str(tmp_path / "missing.geojson"),
        evidence=str(tmp_path / "missing.json"),
    ))

    assert store.territories_source.failed
    assert store.alerts_source.failed
    assert sorted(failures) == ["alerts", "territories"]


def test_start_loading_resets_the_session(qapp, store, tapajos, write_json):
    store.set_territories([tapajos])
    store.select_territory(tapajos)
    store.session.slider.on_drag_move(10, 0, 100)
    path = write_json("territories.geojson", {"features": []})

    _load(qapp, store, DataSources(territories=path, alerts=path, evidence=write_json("e.json", {})))

    assert store.navigation_state.mode == ViewMode.TERRITORIES
    assert store.viewport_state == ViewportState.default()
    assert store.slider_position == 0.5
    assert store.territories == []
