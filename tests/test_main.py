import httpx
import pytest
from fastapi.testclient import TestClient

import main


class FakeRiot:
    def __init__(self, response: httpx.Response | Exception):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def riot():
    return FakeRiot(httpx.Response(200, json={"puuid": "P1", "gameName": "Faker", "tagLine": "KR1"}))


@pytest.fixture
def api(riot):
    upstream = httpx.AsyncClient(
        transport=httpx.MockTransport(riot), headers={"X-Riot-Token": "test-token"}
    )
    main.app.dependency_overrides[main.get_upstream_client] = lambda: upstream
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


def test_account_is_forwarded_to_region(api, riot):
    response = api.get("/api/riot", params={"endpoint": "account", "gameName": "Faker", "tagLine": "KR1", "region": "asia"})

    assert response.status_code == 200
    assert response.json()["puuid"] == "P1"
    sent = riot.requests[0]
    assert str(sent.url) == "https://asia.api.riotgames.com/riot/account/v1/accounts/by-riot-id/Faker/KR1"
    assert sent.headers["X-Riot-Token"] == "test-token"


@pytest.mark.parametrize("region", [None, "atlantis"])
def test_missing_or_unknown_region_uses_americas(api, riot, region):
    params = {"endpoint": "match", "matchId": "NA1_1"}
    if region:
        params["region"] = region
    api.get("/api/riot", params=params)

    assert str(riot.requests[0].url) == "https://americas.api.riotgames.com/lol/match/v5/matches/NA1_1"


def test_matches_endpoint_pages_and_filters_queue(api, riot):
    riot.response = httpx.Response(200, json=["EUW1_1"])
    response = api.get("/api/riot", params={"endpoint": "matches", "puuid": "P1", "region": "europe", "queue": "1700"})

    assert response.json() == ["EUW1_1"]
    sent = riot.requests[0]
    assert sent.url.path == "/lol/match/v5/matches/by-puuid/P1/ids"
    assert dict(sent.url.params) == {"start": "0", "count": "20", "queue": "1700"}


def test_matches_endpoint_without_queue(api, riot):
    riot.response = httpx.Response(200, json=[])
    api.get("/api/riot", params={"endpoint": "matches", "puuid": "P1"})

    assert "queue" not in riot.requests[0].url.params


@pytest.mark.parametrize(
    "params,message",
    [
        ({}, "Endpoint is required"),
        ({"endpoint": "account", "gameName": "Faker"}, "Game name and tag line are required"),
        ({"endpoint": "matches"}, "PUUID is required"),
        ({"endpoint": "match"}, "Match ID is required"),
        ({"endpoint": "summoner"}, "Invalid endpoint"),
    ],
)
def test_bad_requests(api, riot, params, message):
    response = api.get("/api/riot", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": message}
    assert riot.requests == []


def test_upstream_error_is_passed_through(api, riot):
    body = {"status": {"status_code": 404, "message": "Data not found - No results found for player with riot id"}}
    riot.response = httpx.Response(404, json=body)

    response = api.get("/api/riot", params={"endpoint": "account", "gameName": "x", "tagLine": "y"})

    assert response.status_code == 404
    assert response.json() == body


def test_unexpected_failure_is_a_500(api, riot):
    riot.response = httpx.ConnectError("network down")

    response = api.get("/api/riot", params={"endpoint": "match", "matchId": "KR_1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_health_without_upstream_client():
    main.app.dependency_overrides.clear()
    response = TestClient(main.app).get("/health")
    assert response.status_code == 503


def test_startup_requires_token(monkeypatch):
    monkeypatch.setattr(main.config, "RIOT_API_TOKEN", None)
    with pytest.raises(RuntimeError):
        with TestClient(main.app):
            pass
