import random

import pytest

from guardiao.config import TERRITORY_ZOOM
from guardiao.model.features import Alert, Territory, load_territories
from guardiao.model.geometry import Envelope, GeoPoint, ViewportState
from guardiao.model.navigation import NavigationError, NavigationState, NavigationStateMachine, ViewMode


@pytest.fixture
def nav():
    return NavigationStateMachine()


def test_initial_state(nav):
    assert nav.state == NavigationState()
    assert nav.mode == ViewMode.TERRITORIES
    assert nav.viewport == ViewportState.default()


def test_select_territory_centers_map(nav, tapajos):
    state = nav.select_territory(tapajos)
    assert state.mode == ViewMode.ALERTS
    assert state.selected_territory is tapajos
    assert state.selected_alert is None
    assert nav.viewport == ViewportState(center=GeoPoint(5.0, 5.0), zoom_level=TERRITORY_ZOOM)


def test_territory_without_boundary_keeps_viewport(nav):
    nav.select_territory(Territory(name="Empty", area=0.0))
    assert nav.mode == ViewMode.ALERTS
    assert nav.viewport == ViewportState.default()


def test_alert_from_alerts_and_back(nav, tapajos, alert):
    nav.select_territory(tapajos)
    viewport = nav.viewport
    state = nav.select_alert(alert)
    assert state.mode == ViewMode.ALERT_DETAILS
    assert state.selected_alert is alert
    assert state.selected_territory is tapajos
    # alert selection never moves the map
    assert nav.viewport == viewport

    state = nav.back()
    assert state == NavigationState(mode=ViewMode.ALERTS, selected_territory=tapajos)
    assert nav.viewport == viewport


def test_alert_from_overview_returns_to_overview(nav, alert):
    nav.select_alert(alert)
    assert nav.state.entry_mode == ViewMode.TERRITORIES
    assert nav.back() == NavigationState()
    assert nav.viewport == ViewportState.default()


def test_back_from_alerts_resets_viewport(nav, tapajos):
    nav.select_territory(tapajos)
    assert nav.back() == NavigationState()
    assert nav.viewport == ViewportState.default()


def test_invalid_events(nav, tapajos, alert):
    with pytest.raises(NavigationError):
        nav.back()
    with pytest.raises(NavigationError):
        nav.select_territory(None)
    nav.select_territory(tapajos)
    with pytest.raises(NavigationError):
        nav.select_territory(tapajos)
    nav.select_alert(alert)
    with pytest.raises(NavigationError):
        nav.select_alert(alert)
    # a rejected event leaves the state as it was
    assert nav.mode == ViewMode.ALERT_DETAILS


def test_listeners_fire_on_change_only(nav, tapajos):
    states, viewports = [], []
    nav.add_listener(states.append)
    nav.add_viewport_listener(viewports.append)

    nav.reset()
    assert states == [] and viewports == []

    nav.select_territory(tapajos)
    nav.back()
    assert [s.mode for s in states] == [ViewMode.ALERTS, ViewMode.TERRITORIES]
    assert viewports[-1] == ViewportState.default()
    assert len(viewports) == 2


def test_reset(nav, tapajos, alert):
    nav.select_territory(tapajos)
    nav.select_alert(alert)
    nav.reset()
    assert nav.state == NavigationState()
    assert nav.viewport == ViewportState.default()


def test_random_event_sequences_stay_coherent(tapajos, alert):
    rng = random.Random(7)
    nav = NavigationStateMachine()
    events = [
        lambda: nav.select_territory(tapajos),
        lambda: nav.select_alert(alert),
        nav.back,
    ]
    for _ in range(500):
        try:
            rng.choice(events)()
        except NavigationError:
            pass
        assert nav.state.is_coherent()
        if nav.mode == ViewMode.TERRITORIES:
            assert nav.viewport == ViewportState.default()


def test_loaded_territory_drills_down_to_its_centroid(nav):
    payload = {"type": "FeatureCollection", "features": [{
        "type": "Feature",
        "properties": {"name": "Tapajós", "area": 1000},
        "geometry": {"type": "Polygon", "coordinates": [[[-55.2, -3.1], [-54.6, -3.1], [-54.6, -2.6], [-55.2, -2.6]]]},
    }]}
    (territory,) = load_territories(payload)

    state = nav.select_territory(territory)

    assert state.mode == ViewMode.ALERTS
    assert state.selected_territory.name == "Tapajós"
    assert state.selected_territory.area == 1000.0
    expected = Envelope.from_points(territory.boundary).center
    assert nav.viewport == ViewportState(center=expected, zoom_level=TERRITORY_ZOOM)
    assert nav.viewport.center.lat == pytest.approx(-2.85)
    assert nav.viewport.center.lng == pytest.approx(-54.9)


def test_state_listeners_see_the_new_viewport(nav, tapajos):
    seen = []
    nav.add_listener(lambda state: seen.append((state.mode, nav.viewport)))

    nav.select_territory(tapajos)
    nav.back()

    assert seen == [
        (ViewMode.ALERTS, ViewportState(center=GeoPoint(5.0, 5.0), zoom_level=TERRITORY_ZOOM)),
        (ViewMode.TERRITORIES, ViewportState.default()),
    ]


def test_each_transition_notifies_once(nav, tapajos, alert):
    calls = []
    nav.add_listener(lambda state: calls.append("state"))
    nav.add_viewport_listener(lambda viewport: calls.append("viewport"))

    nav.select_territory(tapajos)
    assert calls == ["state", "viewport"]

    calls.clear()
    nav.select_alert(alert)
    nav.back()
    assert calls == ["state", "state"]
