from starlette.requests import Request

from src.api.utils.request_meta import client_ip, user_agent


def _request(headers=None, client=("10.1.2.3", 51000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/auth/xsuaa",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


def test_forwarded_for_takes_first_hop():
    request = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})

    assert client_ip(request) == "203.0.113.7"


def test_real_ip_header():
    assert client_ip(_request({"X-Real-IP": "198.51.100.4"})) == "198.51.100.4"


def test_peer_address_fallback():
    assert client_ip(_request()) == "10.1.2.3"
    assert client_ip(_request(client=None)) is None


def test_user_agent():
    assert user_agent(_request({"User-Agent": "Mozilla/5.0"})) == "Mozilla/5.0"
    assert user_agent(_request()) is None
