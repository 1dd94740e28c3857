import httpx
import pytest

from storage import MemoryStore

ACCOUNT = {"puuid": "P1", "gameName": "Faker", "tagLine": "KR1"}


def match_payload(match_id: str, participants: list[dict]) -> dict:
    """A trimmed Riot match-v5 body; extra fields are kept to mimic the real payload."""
    return {
        "metadata": {"matchId": match_id, "dataVersion": "2"},
        "info": {"gameMode": "CHERRY", "queueId": 1700, "participants": participants},
    }


class FakeProxy:
    """Records every proxied call and answers from a (endpoint, region) -> response table."""

    def __init__(self, responses: dict[tuple[str, str], httpx.Response | Exception]):
        self.responses = responses
        self.calls: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        self.calls.append(params)
        answer = self.responses.get(
            (params.get("endpoint"), params.get("region")),
            httpx.Response(404, json={"status": {"status_code": 404, "message": "Data not found"}}),
        )
        if isinstance(answer, Exception):
            raise answer
        return answer

    @property
    def regions(self) -> list[str]:
        return [c["region"] for c in self.calls]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_client():
    def _make(proxy: FakeProxy) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(proxy), base_url="http://proxy")

    return _make
