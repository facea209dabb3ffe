import pytest
import requests
from unittest.mock import MagicMock, patch

from common.geometry import Coordinate
from common.results import ErrorKind
from routing.models import DirectionStep
from routing.osrm_client import OSRMClient, OSRMError
from routing.route_service import RouteService, parse_route

START = Coordinate(longitude=69.30, latitude=41.30)
END = Coordinate(longitude=69.28, latitude=41.29)


def make_step(distance, instruction, maneuver_type="turn"):
    return {
        "distance": distance,
        "name": "Amir Temur",
        "maneuver": {"type": maneuver_type, "instruction": instruction},
    }


def osrm_payload(legs, geometry=None):
    """legs: list of step lists; leg distance = sum of its step distances."""
    return {
        "code": "Ok",
        "routes": [{
            "geometry": geometry or {"type": "LineString", "coordinates": [[69.30, 41.30], [69.29, 41.295], [69.28, 41.29]]},
            "legs": [{"distance": sum(s["distance"] for s in steps), "steps": steps} for steps in legs],
        }],
    }


class MockOSRM:
    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    async def route(self, start, end):
        self.calls.append((start, end))
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.mark.asyncio
async def test_single_leg_route_sums_to_800_meters():
    payload = osrm_payload([[make_step(500, "Head north", "depart"), make_step(300, "Arrive", "arrive")]])
    service = RouteService(client=MockOSRM(payload))

    result = await service.fetch_route(START, END)

    assert result.ok
    route = result.value
    assert route.total_distance_m == 800
    assert route.directions == [
        DirectionStep(instruction="Head north", distance_m=500.0, maneuver_type="depart"),
        DirectionStep(instruction="Arrive", distance_m=300.0, maneuver_type="arrive"),
    ]
    assert route.geometry_points[0] == START
    assert route.geometry_points[-1] == END


def test_multi_leg_steps_are_flattened_in_order_and_legs_summed():
    legs = [
        [make_step(100, "a1"), make_step(200, "a2")],
        [make_step(50, "b1")],
        [make_step(25.5, "c1"), make_step(4.5, "c2")],
    ]
    route = parse_route(osrm_payload(legs))

    assert [step.instruction for step in route.directions] == ["a1", "a2", "b1", "c1", "c2"]
    assert route.total_distance_m == pytest.approx(380.0)


def test_total_distance_comes_from_legs_not_steps():
    payload = osrm_payload([[make_step(500, "x")]])
    payload["routes"][0]["legs"][0]["distance"] = 512.5

    assert parse_route(payload).total_distance_m == 512.5


def test_only_first_route_alternative_is_used():
    payload = osrm_payload([[make_step(10, "best")]])
    alternative = osrm_payload([[make_step(99, "worse")]])["routes"][0]
    payload["routes"].append(alternative)

    route = parse_route(payload)

    assert [step.instruction for step in route.directions] == ["best"]


def test_missing_instruction_is_described_from_maneuver():
    step = {"distance": 40, "name": "Navoi", "maneuver": {"type": "turn", "modifier": "left"}}

    route = parse_route(osrm_payload([[step]]))

    assert route.directions[0].instruction == "turn left onto Navoi"


@pytest.mark.asyncio
@pytest.mark.parametrize("answer", [
    OSRMError("OSRM request failed: connection reset"),
    {"code": "Ok", "routes": [{"legs": []}]},  # no geometry
    {"code": "Ok", "routes": [{"geometry": {"type": "LineString", "coordinates": [[69.3, 41.3]]}, "legs": []}]},
    {"code": "Ok", "routes": [{"geometry": {"type": "LineString", "coordinates": [[69.3, 41.3], [69.2, 41.2]]},
                               "legs": [{"distance": 5, "steps": [{"maneuver": {"type": "turn"}}]}]}]},
])
async def test_failures_become_route_failure_results(answer):
    service = RouteService(client=MockOSRM(answer))

    result = await service.fetch_route(START, END)

    assert not result.ok
    assert result.error == ErrorKind.ROUTE_FAILURE
    assert result.value is None


# --- OSRM client over a mocked requests session ---

def mock_session(payload=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value.json.return_value = payload
    return session


def test_format_coordinates_is_lon_lat():
    client = OSRMClient(base_url="http://osrm.local", session=mock_session())

    assert client.format_coordinates([START, END]) == "69.3,41.3;69.28,41.29"


@pytest.mark.asyncio
async def test_client_requests_geojson_steps_route():
    payload = osrm_payload([[make_step(1, "go")]])
    session = mock_session(payload=payload)
    client = OSRMClient(profile="driving", timeout=7, base_url="http://osrm.local/", session=session)

    data = await client.route(START, END)

    assert data is payload
    args, kwargs = session.get.call_args
    assert args[0] == "http://osrm.local/route/v1/driving/69.3,41.3;69.28,41.29"
    assert kwargs["params"]["geometries"] == "geojson"
    assert kwargs["params"]["steps"] == "true"
    assert kwargs["timeout"] == 7


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"code": "NoRoute", "message": "Impossible route between points"},
    {"code": "Ok", "routes": []},
    ["not", "a", "dict"],
])
async def test_client_rejects_error_payloads(payload):
    client = OSRMClient(base_url="http://osrm.local", session=mock_session(payload=payload))

    with pytest.raises(OSRMError):
        await client.route(START, END)


@pytest.mark.asyncio
async def test_network_error_through_service_is_route_failure():
    client = OSRMClient(base_url="http://osrm.local", session=mock_session(error=requests.ConnectionError("down")))

    result = await RouteService(client=client).fetch_route(START, END)

    assert result.error == ErrorKind.ROUTE_FAILURE


def test_client_requires_base_url():
    with pytest.raises(ValueError):
        OSRMClient(base_url="", session=mock_session())


@pytest.mark.asyncio
async def test_client_without_injected_session_calls_requests_get_per_request():
    payload = osrm_payload([[make_step(1, "go")]])
    with patch("requests.get") as get:
        get.return_value.json.return_value = payload
        client = OSRMClient(profile="driving", base_url="http://osrm.local")

        await client.route(START, END)
        await client.route(END, START)

    assert get.call_count == 2
    assert get.call_args[0][0] == "http://osrm.local/route/v1/driving/69.28,41.29;69.3,41.3"
