"""Pytest configuration and fixtures for all tests."""

import json
from typing import Callable, Generator

import httpx
import pytest

from foxhole_war_api.client import WarApiClient
from foxhole_war_api.config import ClientConfig

TEST_BASE_URL = "http://war-api.test/api"


# ============================================================================
# Response Body Fixtures
# ============================================================================

@pytest.fixture
def war_data_json() -> str:
    """War status body for an ongoing war."""
    return """{
        "warId" : "1e82269a-d82b-4350-b1b1-06a98c983503",
        "warNumber" : 83,
        "winner" : "NONE",
        "conquestStartTime" : 1632326703205,
        "conquestEndTime" : null,
        "resistanceStartTime" : null,
        "requiredVictoryTowns" : 32
    }"""


@pytest.fixture
def map_names_json() -> str:
    """Map list body."""
    return '["TheFingersHex", "GreatMarchHex", "TempestIslandHex"]'


@pytest.fixture
def static_map_json() -> str:
    """Static map body with labels only."""
    return """{
        "regionId": 38,
        "scorchedVictoryTowns": 0,
        "mapItems": [],
        "mapTextItems": [
            {
                "text": "Captain's Dread",
                "x": 0.8643478,
                "y": 0.4387644,
                "mapMarkerType": "Minor"
            },
            {
                "text": "Cavitatis",
                "x": 0.43523252,
                "y": 0.6119927,
                "mapMarkerType": "Minor"
            }
        ],
        "lastUpdated": 1635388391413,
        "version": 3
    }"""


@pytest.fixture
def dynamic_map_json() -> str:
    """Dynamic map body with one salvage field per team."""
    return """{
        "regionId" : 38,
        "scorchedVictoryTowns" : 0,
        "mapItems" : [ {
            "teamId" : "NONE",
            "iconType" : 20,
            "x" : 0.43503433,
            "y" : 0.83201146,
            "flags" : 0
        }, {
            "teamId" : "COLONIALS",
            "iconType" : 20,
            "x" : 0.83840775,
            "y" : 0.45411408,
            "flags" : 0
        }, {
            "teamId" : "WARDENS",
            "iconType" : 20,
            "x" : 0.83840775,
            "y" : 0.45411408,
            "flags" : 0
        } ],
        "mapTextItems" : [ ],
        "lastUpdated" : 1635534670643,
        "version" : 5
    }"""


@pytest.fixture
def api_routes(war_data_json, map_names_json, static_map_json, dynamic_map_json) -> dict[str, str]:
    """Default path -> body routing for the fake War API."""
    return {
        "/api/worldconquest/war": war_data_json,
        "/api/worldconquest/maps": map_names_json,
        "/api/worldconquest/maps/TheFingersHex/static": static_map_json,
        "/api/worldconquest/maps/TheFingersHex/dynamic/public": dynamic_map_json,
    }


# ============================================================================
# HTTP Fixtures
# ============================================================================

def build_handler(routes: dict[str, str], requests: list) -> Callable[[httpx.Request], httpx.Response]:
    """Build a MockTransport handler serving ``routes`` and recording requests."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        body = routes.get(request.url.raw_path.decode())
        if body is None:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(
            200,
            content=body.encode(),
            headers={"content-type": "application/json"},
        )

    return handler


@pytest.fixture
def test_config() -> ClientConfig:
    """Client configuration pointing at the fake API."""
    return ClientConfig(base_url=TEST_BASE_URL)


@pytest.fixture
def recorded_requests() -> list:
    """Requests seen by the fake API, in order."""
    return []


@pytest.fixture
def mock_transport(api_routes, recorded_requests) -> httpx.MockTransport:
    """Transport serving the default routes."""
    return httpx.MockTransport(build_handler(api_routes, recorded_requests))


@pytest.fixture
def client(test_config, mock_transport) -> Generator[WarApiClient, None, None]:
    """Synchronous client wired to the fake API."""
    http_client = httpx.Client(transport=mock_transport)
    yield WarApiClient(test_config, http_client=http_client)
    http_client.close()


@pytest.fixture
def client_factory(test_config) -> Callable[[Callable[[httpx.Request], httpx.Response]], WarApiClient]:
    """Build a client around an arbitrary request handler."""

    def factory(handler):
        return WarApiClient(
            test_config,
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )

    return factory


@pytest.fixture
def war_data_payload(war_data_json) -> dict:
    """War status body as a dict, for building variants."""
    return json.loads(war_data_json)
