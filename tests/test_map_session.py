import pytest

from common.geometry import Coordinate
from mapview.markers import MarkerRegistry, MarkerRole
from mapview.session import ROUTE_ID, MapSession, MapStyle
from mapview.surface import InMemoryMapSurface, MapSurfaceError

HOME = Coordinate(longitude=69.2401, latitude=41.3111)
CHORSU = Coordinate(longitude=69.2343, latitude=41.3265)
AIRPORT = Coordinate(longitude=69.2812, latitude=41.2579)


@pytest.fixture
def surface():
    return InMemoryMapSurface()


@pytest.fixture
def session(surface):
    map_session = MapSession(surface, MapStyle(style_url="https://tiles.example/style.json", zoom=12))
    map_session.initialize(HOME)
    return map_session


def line(*coords):
    return [Coordinate(longitude=lon, latitude=lat) for lon, lat in coords]


def test_initialize_creates_map_with_navigation_control(surface, session):
    assert surface.calls[0] == ("create_map", HOME, 12, "https://tiles.example/style.json")
    assert surface.controls == ["navigation"]
    assert surface.center == HOME


def test_initialize_twice_is_rejected(session):
    with pytest.raises(MapSurfaceError):
        session.initialize(HOME)


def test_route_layer_uses_fixed_id_and_line_style(surface, session):
    session.set_route_geometry(line((69.24, 41.31), (69.25, 41.32)))

    layer = surface.layers[ROUTE_ID]
    assert layer["source"] == ROUTE_ID
    assert layer["layout"] == {"line-join": "round", "line-cap": "round"}
    assert layer["paint"] == {"line-color": "#007cbf", "line-width": 4}
    geometry = surface.sources[ROUTE_ID]["data"]["geometry"]
    assert geometry == {"type": "LineString", "coordinates": [[69.24, 41.31], [69.25, 41.32]]}


def test_two_consecutive_routes_leave_exactly_one_pair(surface, session):
    session.set_route_geometry(line((69.24, 41.31), (69.25, 41.32)))
    session.set_route_geometry(line((69.24, 41.31), (69.28, 41.26), (69.29, 41.25)))

    assert list(surface.sources) == [ROUTE_ID]
    assert list(surface.layers) == [ROUTE_ID]
    assert len(surface.sources[ROUTE_ID]["data"]["geometry"]["coordinates"]) == 3
    # old pair is torn down layer-first before the new one goes in
    assert surface.calls[-4:] == [
        ("remove_layer", ROUTE_ID),
        ("remove_source", ROUTE_ID),
        ("add_source", ROUTE_ID),
        ("add_layer", ROUTE_ID),
    ]


def test_invalid_geometry_leaves_previous_route_untouched(surface, session):
    session.set_route_geometry(line((69.24, 41.31), (69.25, 41.32)))
    before = list(surface.calls)

    with pytest.raises(ValueError):
        session.set_route_geometry(line((69.24, 41.31)))

    assert surface.calls == before
    assert session.has_route


def test_failed_layer_does_not_leave_dangling_source():
    class BrokenLayerSurface(InMemoryMapSurface):
        def add_layer(self, layer):
            raise MapSurfaceError("style not loaded")

    surface = BrokenLayerSurface()
    broken = MapSession(surface, MapStyle())
    broken.initialize(HOME)

    with pytest.raises(MapSurfaceError):
        broken.set_route_geometry(line((69.24, 41.31), (69.25, 41.32)))

    assert surface.sources == {}
    assert not broken.has_route


def test_session_requires_initialize_before_drawing(surface):
    map_session = MapSession(surface, MapStyle())

    with pytest.raises(MapSurfaceError):
        map_session.center_on(HOME)


def test_style_validation():
    with pytest.raises(ValueError):
        MapStyle(zoom=30).validate()


# --- MarkerRegistry ---

def test_first_place_start_creates_blue_marker_without_recentering(surface, session):
    markers = MarkerRegistry(session)

    marker = markers.place_start(HOME)

    assert marker.role == MarkerRole.START
    assert marker.color == "blue"
    assert surface.markers[marker.handle].coordinate == HOME
    assert not any(call[0] == "set_center" for call in surface.calls)


def test_place_start_again_moves_same_marker_and_recenters(surface, session):
    markers = MarkerRegistry(session)
    first = markers.place_start(HOME)

    second = markers.place_start(CHORSU)

    assert second is first
    assert len(surface.markers) == 1
    assert surface.markers[first.handle].coordinate == CHORSU
    assert surface.center == CHORSU


def test_end_marker_is_created_lazily_once_and_then_moved(surface, session):
    markers = MarkerRegistry(session)
    markers.place_start(HOME)
    assert markers.end is None

    first = markers.place_end(CHORSU)
    second = markers.place_end(AIRPORT)

    assert first is second
    assert first.color == "red"
    assert [call[0] for call in surface.calls].count("create_marker") == 2
    assert surface.markers[first.handle].coordinate == AIRPORT
    # end marker never moves the camera
    assert surface.center == HOME


def test_rejected_new_route_puts_previous_route_back():
    class OneBadLayerSurface(InMemoryMapSurface):
        fail_next_layer = False

        def add_layer(self, layer):
            if self.fail_next_layer:
                self.fail_next_layer = False
                raise MapSurfaceError("webgl context lost")
            super().add_layer(layer)

    surface = OneBadLayerSurface()
    map_session = MapSession(surface, MapStyle())
    map_session.initialize(HOME)
    map_session.set_route_geometry(line((69.24, 41.31), (69.25, 41.32)))
    old_source = surface.sources[ROUTE_ID]
    old_layer = surface.layers[ROUTE_ID]

    surface.fail_next_layer = True
    with pytest.raises(MapSurfaceError):
        map_session.set_route_geometry(line((69.24, 41.31), (69.28, 41.26)))

    assert surface.sources == {ROUTE_ID: old_source}
    assert surface.layers == {ROUTE_ID: old_layer}

    # the restored pair is replaced normally by the next route
    map_session.set_route_geometry(line((69.24, 41.31), (69.29, 41.25)))
    assert list(surface.layers) == [ROUTE_ID]
    assert surface.sources[ROUTE_ID]["data"]["geometry"]["coordinates"][-1] == [69.29, 41.25]
