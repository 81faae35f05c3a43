import json
from dataclasses import replace

from storefront.config import settings
from storefront.db.sqlite import MemoryStorage
from storefront.main import build_storefront
from storefront.models import Product

from conftest import FakeHttp, FakeResponse

BASE = "https://shop.test/api"


class RoutingHttp(FakeHttp):
    """Answers by path so the whole stack can run against canned JSON."""

    def __init__(self, routes):
        super().__init__()
        self.routes = routes

    def request(self, method, url, **kwargs):
        self.sent.append((method, url, kwargs))
        path = url[len(BASE):]
        return self.routes.get((method, path), FakeResponse(204, "", None))


def test_sign_in_flows_token_into_later_requests():
    http = RoutingHttp(
        {
            ("POST", "/auth/login"): FakeResponse(200, {"access_token": "tok-1", "user": {"id": "u1", "email": "a@b.c"}}),
            ("GET", "/cart"): FakeResponse(200, {"items": [{"id": 5, "productId": "p1", "quantity": 2,
                                                            "product": {"id": "p1", "name": "Dress", "price": 100}}]}),
            ("GET", "/wishlist"): FakeResponse(200, []),
        }
    )
    local = MemoryStorage()
    cfg = replace(settings, api_base_url=BASE)
    store = build_storefront(cfg, local_storage=local, http=http)
    store.session.restore()

    ok, _ = store.session.sign_in("a@b.c", "pw")

    assert ok
    assert json.loads(local.get_item("hok_session"))["token"] == "tok-1"
    assert store.cart.item_count == 2
    assert "Authorization" not in http.sent[0][2]["headers"]
    cart_call = next(s for s in http.sent if s[1].endswith("/cart"))
    assert cart_call[2]["headers"]["Authorization"] == "Bearer tok-1"


def test_text_and_malformed_responses_surface_as_failures():
    http = RoutingHttp(
        {
            ("POST", "/auth/login"): FakeResponse(200, "OK", "text/plain"),
        }
    )
    store = build_storefront(replace(settings, api_base_url=BASE), local_storage=MemoryStorage(), http=http)
    store.session.restore()

    ok, message = store.session.sign_in("a@b.c", "pw")
    assert not ok
    assert message
    assert not store.session.is_authenticated

    http.routes = {
        ("POST", "/auth/login"): FakeResponse(200, {"access_token": "tok-1", "user": {"id": "u1", "email": "a@b.c"}}),
        ("GET", "/cart"): FakeResponse(200, []),
        ("GET", "/wishlist"): FakeResponse(200, []),
        ("POST", "/cart"): FakeResponse(200, "<html>bad gateway</html>", "application/json"),
    }
    assert store.session.sign_in("a@b.c", "pw")[0]

    assert store.cart.add_item(Product(id="p1", name="Dress", price=100)) is False
    assert store.cart.items == []
    assert store.notifier.history[-1].title == "Cart update failed"
