import httpx
import pytest

import httpdig
from httpdig import DohClient, Settings


@pytest.fixture
def recorded_requests(monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"Status": 0, "edns_client_subnet": "0.0.0.0/0"})

    client = DohClient(httpx.Client(transport=httpx.MockTransport(handler)), Settings())
    monkeypatch.setattr(httpdig, "_default_client", client)
    return seen


def test_module_query_uses_default_client(recorded_requests: list[httpx.Request]) -> None:
    response = httpdig.query("google.com", "NS")

    assert response.status == 0
    assert response.edns_client_subnet == "0.0.0.0/0"
    assert recorded_requests[0].url.params["type"] == "NS"
    assert recorded_requests[0].url.params["edns_client_subnet"] == "0.0.0.0/0"


def test_module_subnet_applies_to_later_queries(recorded_requests: list[httpx.Request]) -> None:
    httpdig.set_edns_subnet("")
    httpdig.query("google.com", "A")
    assert "edns_client_subnet" not in recorded_requests[-1].url.params

    httpdig.set_edns_subnet("1.2.3.0/24")
    httpdig.query("google.com", "A")
    assert recorded_requests[-1].url.params["edns_client_subnet"] == "1.2.3.0/24"


def test_default_client_is_created_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(httpdig, "_default_client", None)
    first = httpdig.get_default_client()
    try:
        assert httpdig.get_default_client() is first
        assert first.edns_subnet == "0.0.0.0/0"
    finally:
        first.close()
