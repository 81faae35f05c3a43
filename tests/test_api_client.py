import pytest
import requests

from storefront.api.client import ApiClient
from storefront.errors import ApiError

from conftest import FakeHttp, FakeResponse


def make_client(response=None, token=None, exc=None):
    http = FakeHttp(response, exc)
    client = ApiClient("https://api.test/api", token_provider=lambda: token, timeout=5, http=http)
    return client, http


def test_json_request_headers_and_bearer_token():
    client, http = make_client(FakeResponse(200, {"ok": True}), token="tok")
    assert client.post("/auth/login", json={"email": "a@b.c"}) == {"ok": True}

    method, url, kwargs = http.sent[0]
    assert method == "POST"
    assert url == "https://api.test/api/auth/login"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["json"] == {"email": "a@b.c"}
    assert kwargs["timeout"] == 5


def test_no_token_no_authorization_header():
    client, http = make_client(FakeResponse(200, []))
    client.get("/products")
    assert "Authorization" not in http.sent[0][2]["headers"]


def test_multipart_skips_json_content_type():
    client, http = make_client(FakeResponse(201, {"id": "o1"}), token="tok")
    client.post("/orders", form=[("note", "hi"), ("receipt", ("r.png", b"\x89PNG", "image/png"))])

    kwargs = http.sent[0][2]
    assert "Content-Type" not in kwargs["headers"]
    assert kwargs["files"] == [("note", (None, "hi")), ("receipt", ("r.png", b"\x89PNG", "image/png"))]
    assert "json" not in kwargs


def test_error_uses_body_text():
    client, _ = make_client(FakeResponse(400, "Email already registered", "text/plain"))
    with pytest.raises(ApiError) as exc:
        client.post("/auth/register", json={})
    assert str(exc.value) == "Email already registered"
    assert exc.value.status == 400


def test_error_with_empty_body_gets_generic_message():
    client, _ = make_client(FakeResponse(503, "", None))
    with pytest.raises(ApiError, match="Request failed with status 503"):
        client.get("/orders")


def test_no_content_returns_none():
    client, _ = make_client(FakeResponse(204, "", None))
    assert client.delete("/cart/row1") is None


def test_non_json_returns_text():
    client, _ = make_client(FakeResponse(200, "pong", "text/plain; charset=utf-8"))
    assert client.get("/health") == "pong"


def test_transport_failure_becomes_api_error():
    client, _ = make_client(exc=requests.ConnectionError("connection refused"))
    with pytest.raises(ApiError, match="connection refused"):
        client.get("/products")


def test_malformed_json_body_becomes_api_error():
    client, _ = make_client(FakeResponse(200, "<html>gateway</html>", "application/json"))
    with pytest.raises(ApiError, match="Invalid JSON response") as exc:
        client.get("/cart")
    assert exc.value.status == 200
