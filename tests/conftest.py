import copy
import json

import pytest

from storefront.db.sqlite import MemoryStorage
from storefront.errors import ApiError
from storefront.models import AuthResult, AuthUser, Order, Product, RemoteCartRow, Review, WishlistItem
from storefront.notices import Notifier
from storefront.state.cart import CartSynchronizer
from storefront.state.navigation import Navigator
from storefront.state.session import SessionStore
from storefront.state.wishlist import WishlistSynchronizer

DRESS = Product(id="p1", name="Ankara Dress", price=25000, image_urls=["https://img/p1.jpg"])
BAG = Product(id="p2", name="Leather Bag", price=40000, image_urls=["https://img/p2.jpg"])


class FakeStoreApi:
    """In-memory stand-in for StoreApi. Put method names in fail_on to make them raise."""

    def __init__(self):
        self.calls = []
        self.fail_on = set()
        self.user = AuthUser(id="u1", email="ada@example.com", role="CUSTOMER", name="Ada Obi")
        self.products = {p.id: p for p in (DRESS, BAG)}
        self.cart_rows = []
        self.wishlist = []
        self.orders = []
        self.reviews = []
        self._next_row = 1

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail_on:
            raise ApiError(f"{name} failed", 500)

    def count(self, name):
        return sum(1 for c in self.calls if c[0] == name)

    # auth
    def login(self, email, password):
        self._call("login", email, password)
        return AuthResult(token="tok-123", user=self.user)

    def register(self, email, password, name=None, phone=None, role=None):
        self._call("register", email, password, name)
        return AuthResult(token="tok-456", user=AuthUser(id="u2", email=email, name=name))

    # cart
    def fetch_cart(self):
        self._call("fetch_cart")
        return copy.deepcopy(self.cart_rows)

    def add_to_cart(self, product_id, quantity=1):
        self._call("add_to_cart", product_id, quantity)
        for row in self.cart_rows:
            if row.product_id == product_id:
                row.quantity += quantity
                return
        self.cart_rows.append(
            RemoteCartRow(id=f"row{self._next_row}", product_id=product_id, quantity=quantity,
                          product=self.products.get(product_id))
        )
        self._next_row += 1

    def update_cart_row(self, row_id, quantity):
        self._call("update_cart_row", row_id, quantity)
        for row in self.cart_rows:
            if row.id == row_id:
                row.quantity = quantity

    def delete_cart_row(self, row_id):
        self._call("delete_cart_row", row_id)
        self.cart_rows = [r for r in self.cart_rows if r.id != row_id]

    def clear_cart(self):
        self._call("clear_cart")
        self.cart_rows = []

    # wishlist
    def fetch_wishlist(self):
        self._call("fetch_wishlist")
        return list(self.wishlist)

    def add_to_wishlist(self, product_id):
        self._call("add_to_wishlist", product_id)
        p = self.products[product_id]
        if all(w.id != product_id for w in self.wishlist):
            self.wishlist.append(WishlistItem(id=p.id, name=p.name, price=p.price, image=p.image))

    def remove_from_wishlist(self, product_id):
        self._call("remove_from_wishlist", product_id)
        self.wishlist = [w for w in self.wishlist if w.id != product_id]

    # orders / reviews
    def create_order(self, draft, as_guest=False):
        self._call("create_order", draft, as_guest)
        order = Order(id=f"o{len(self.orders) + 1}", status="PENDING")
        self.orders.append((draft, as_guest))
        return order

    def fetch_product_reviews(self, product_id):
        self._call("fetch_product_reviews", product_id)
        return [r for r in self.reviews if r.product_id == product_id]

    def create_review(self, product_id, rating, comment):
        self._call("create_review", product_id, rating, comment)
        review = Review(id=str(len(self.reviews) + 1), product_id=product_id, rating=rating, comment=comment)
        self.reviews.append(review)
        return review


@pytest.fixture
def api():
    return FakeStoreApi()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def session_storage():
    return MemoryStorage()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def navigator():
    return Navigator(path="/products/p1", search="?color=red", hash="#reviews")


@pytest.fixture
def session(api, storage):
    s = SessionStore(api, storage)
    s.restore()
    return s


@pytest.fixture
def cart(api, session, notifier):
    return CartSynchronizer(api, session, notifier)


@pytest.fixture
def wishlist(api, session, storage, session_storage, notifier, navigator):
    return WishlistSynchronizer(api, session, storage, session_storage, notifier, navigator, auth_path="/auth")


def sign_in(session):
    ok, err = session.sign_in("ada@example.com", "secret")
    assert ok, err


@pytest.fixture
def login(session):
    return lambda: sign_in(session)


class FakeResponse:
    def __init__(self, status_code=200, body="", content_type="application/json"):
        self.status_code = status_code
        self.text = body if isinstance(body, str) else json.dumps(body)
        self.headers = {"content-type": content_type} if content_type else {}

    def json(self):
        return json.loads(self.text)


class FakeHttp:
    def __init__(self, response=None, exc=None):
        self.response = response or FakeResponse()
        self.exc = exc
        self.sent = []

    def request(self, method, url, **kwargs):
        self.sent.append((method, url, kwargs))
        if self.exc:
            raise self.exc
        return self.response

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)
