import pytest

from storefront.errors import ApiError
from storefront.models import AuthResult, AuthUser, Order, Product, ProductInput
from storefront.services.admin import AdminConsole
from storefront.state.session import SessionStore


class AdminApi:
    def __init__(self):
        self.calls = []
        self.fail_create = False

    def login(self, email, password):
        return AuthResult(token="t", user=AuthUser(id="a1", email=email, role="ADMIN"))

    def update_order_status(self, order_id, status, reference=None):
        self.calls.append(("status", order_id, status))
        return Order(id=order_id, status=status)

    def create_product(self, data):
        self.calls.append(("create", list(data.image_urls)))
        if self.fail_create:
            raise ApiError("duplicate product code", 409)
        return Product(id="p9", name=data.name, price=data.price, image_urls=list(data.image_urls))

    def delete_user(self, user_id):
        self.calls.append(("delete_user", user_id))


@pytest.fixture
def admin_api():
    return AdminApi()


@pytest.fixture
def console(admin_api, storage, notifier):
    session = SessionStore(admin_api, storage)
    session.sign_in("boss@example.com", "pw")
    uploads = []

    def fake_upload(content, filename):
        uploads.append(filename)
        return f"https://cdn.test/{filename}"

    c = AdminConsole(admin_api, session, notifier, upload=fake_upload)
    c.uploads = uploads
    return c


def test_non_admin_is_refused(api, session, notifier):
    console = AdminConsole(api, session, notifier)
    assert console.update_order_status("o1", "CONFIRMED") is None
    assert notifier.history[-1].title == "Admins only"


def test_status_is_normalized_and_checked(admin_api, console, notifier):
    assert console.update_order_status("o1", "shipped") is None
    assert notifier.history[-1].title == "Invalid status"

    order = console.update_order_status("o1", "confirmed")
    assert order.status == "CONFIRMED"
    assert admin_api.calls == [("status", "o1", "CONFIRMED")]


def test_create_product_uploads_images_first(admin_api, console):
    data = ProductInput(name="Kaftan", price=30000, product_code="HK-9", quantity=2, category="Men")

    product = console.create_product(data, images=[("front.jpg", b"1"), ("back.jpg", b"2")])

    assert console.uploads == ["front.jpg", "back.jpg"]
    assert admin_api.calls == [("create", ["https://cdn.test/front.jpg", "https://cdn.test/back.jpg"])]
    assert product.image == "https://cdn.test/front.jpg"


def test_create_product_validates_price(admin_api, console, notifier):
    data = ProductInput(name="Kaftan", price=0, product_code="HK-9", quantity=2, category="Men")
    assert console.create_product(data) is None
    assert notifier.history[-1].title == "Invalid price"
    assert admin_api.calls == []


def test_admin_cannot_delete_self(admin_api, console):
    assert console.delete_user("a1") is False
    assert console.delete_user("u7") is True
    assert admin_api.calls == [("delete_user", "u7")]


def test_failed_create_leaves_input_untouched(admin_api, console, notifier):
    admin_api.fail_create = True
    data = ProductInput(name="Kaftan", price=30000, product_code="HK-9", quantity=2, category="Men",
                        image_urls=["https://cdn.test/existing.jpg"])

    assert console.create_product(data, images=[("front.jpg", b"1")]) is None
    assert data.image_urls == ["https://cdn.test/existing.jpg"]
    assert admin_api.calls == [("create", ["https://cdn.test/existing.jpg", "https://cdn.test/front.jpg"])]
    assert notifier.history[-1].title == "Could not create product"
