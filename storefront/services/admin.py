from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from storefront.api.store import StoreApi
from storefront.constants import ORDER_STATUSES
from storefront.errors import StorefrontError, ValidationError
from storefront.models import AuthUser, MetricsOverview, Order, Product, ProductInput
from storefront.notices import Notifier
from storefront.services.upload import upload_image
from storefront.state.session import SessionStore
from storefront.utils.validators import is_blank, require_positive_number

logger = logging.getLogger(__name__)


def validate_product(data: ProductInput) -> None:
    if is_blank(data.name) or is_blank(data.product_code) or is_blank(data.category):
        raise ValidationError("Missing product details", "Name, product code and category are required.")
    try:
        require_positive_number(data.price, "price")
    except ValueError as e:
        raise ValidationError("Invalid price", str(e)) from e
    if data.quantity < 0:
        raise ValidationError("Invalid quantity", "quantity must be >= 0")


class AdminConsole:
    """Back-office actions. Every call is refused unless the user is an admin."""

    def __init__(self, api: StoreApi, session: SessionStore, notifier: Notifier, upload=upload_image):
        self.api = api
        self.session = session
        self.notifier = notifier
        self.upload = upload

    def _allowed(self) -> bool:
        if self.session.is_admin:
            return True
        self.notifier.error("Admins only", "You don't have access to this area.")
        return False

    def _fail(self, title: str, e: Exception) -> None:
        logger.exception(title)
        self.notifier.error(title, str(e))

    # ---------------- orders ----------------

    def list_orders(self, status: Optional[str] = None) -> List[Order]:
        if not self._allowed():
            return []
        try:
            return self.api.fetch_orders(status)
        except StorefrontError as e:
            self._fail("Could not load orders", e)
            return []

    def update_order_status(self, order_id: str, status: str, reference: Optional[str] = None) -> Optional[Order]:
        if not self._allowed():
            return None
        status = (status or "").upper()
        if status not in ORDER_STATUSES:
            self.notifier.error("Invalid status", f"Status must be one of {', '.join(ORDER_STATUSES)}.")
            return None
        try:
            order = self.api.update_order_status(order_id, status, reference)
        except StorefrontError as e:
            self._fail("Status update failed", e)
            return None
        self.notifier.notify("Order updated", f"Order {order.display_id} is now {status}.")
        return order

    def confirm_payment(
        self, order_id: str, reference: Optional[str] = None, receipt_url: Optional[str] = None
    ) -> Optional[Order]:
        if not self._allowed():
            return None
        try:
            order = self.api.confirm_order_payment(order_id, reference, receipt_url)
        except StorefrontError as e:
            self._fail("Payment confirmation failed", e)
            return None
        self.notifier.notify("Payment confirmed", f"Order {order.display_id} was marked as paid.")
        return order

    # ---------------- products ----------------

    def create_product(self, data: ProductInput, images: Sequence[Tuple[str, bytes]] = ()) -> Optional[Product]:
        if not self._allowed():
            return None
        try:
            validate_product(data)
        except ValidationError as e:
            self.notifier.error(e.title, e.description)
            return None
        try:
            uploaded = [self.upload(content, filename) for filename, content in images]
            product = self.api.create_product(replace(data, image_urls=[*data.image_urls, *uploaded]))
        except StorefrontError as e:
            self._fail("Could not create product", e)
            return None
        self.notifier.notify("Product created", f"{product.name} is now live.")
        return product

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Optional[Product]:
        if not self._allowed():
            return None
        try:
            product = self.api.update_product(product_id, changes)
        except StorefrontError as e:
            self._fail("Could not update product", e)
            return None
        self.notifier.notify("Product updated", f"{product.name} was saved.")
        return product

    def delete_product(self, product_id: str) -> bool:
        if not self._allowed():
            return False
        try:
            self.api.delete_product(product_id)
        except StorefrontError as e:
            self._fail("Could not delete product", e)
            return False
        self.notifier.notify("Product deleted")
        return True

    # ---------------- users / metrics ----------------

    def list_users(self) -> List[AuthUser]:
        if not self._allowed():
            return []
        try:
            return self.api.fetch_users()
        except StorefrontError as e:
            self._fail("Could not load users", e)
            return []

    def delete_user(self, user_id: str) -> bool:
        if not self._allowed():
            return False
        if self.session.user and self.session.user.id == user_id:
            self.notifier.error("Not allowed", "You can't delete your own account here.")
            return False
        try:
            self.api.delete_user(user_id)
        except StorefrontError as e:
            self._fail("Could not delete user", e)
            return False
        self.notifier.notify("User deleted")
        return True

    def metrics(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Optional[MetricsOverview]:
        if not self._allowed():
            return None
        try:
            return self.api.fetch_metrics_overview(start_date, end_date, status)
        except StorefrontError as e:
            self._fail("Could not load metrics", e)
            return None
