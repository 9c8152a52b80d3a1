import pytest
import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    """以 endpoint 對應回應的假 Session，記錄所有請求。"""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        for endpoint, response in self.routes.items():
            if url.endswith(endpoint):
                if isinstance(response, Exception):
                    raise response
                return response
        raise requests.exceptions.ConnectionError(f"No route for {url}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


CATALOG = [
    {"id": "abc-coin", "symbol": "abc", "name": "ABC Token"},
    {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"},
    {"id": "pegged-bitcoin", "symbol": "btc", "name": "Binance-Peg BTC"},
    {"id": "ethereum", "symbol": "eth", "name": "Ethereum"},
    {"id": "usd-peg", "symbol": "usdp", "name": "USD Peg Dollar"},
]


@pytest.fixture
def catalog_payload():
    return list(CATALOG)


@pytest.fixture
def fake_session(catalog_payload):
    return FakeSession({
        "/coins/list": FakeResponse(catalog_payload),
        "/simple/price": FakeResponse({
            "abc-coin": {"inr": 150, "usd": 2},
            "bitcoin": {"inr": 3000000, "usd": 36000},
        }),
    })
