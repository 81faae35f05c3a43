from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from storefront.api.store import StoreApi
from storefront.errors import StorefrontError
from storefront.models import AuthUser, CartItem, RemoteCartRow
from storefront.notices import Notifier
from storefront.services.pricing import OrderTotals, order_totals
from storefront.state.session import SessionStore

logger = logging.getLogger(__name__)


def rows_to_items(rows: List[RemoteCartRow]) -> List[CartItem]:
    """Maps remote cart rows to local items, one entry per product."""
    by_id: Dict[str, CartItem] = {}
    for row in rows:
        if row.quantity <= 0:
            continue
        existing = by_id.get(row.product_id)
        if existing:
            existing.quantity += row.quantity
            continue
        product = row.product
        by_id[row.product_id] = CartItem(
            id=row.product_id,
            name=product.name if product else "",
            price=product.price if product else 0.0,
            image=product.image if product else "",
            quantity=row.quantity,
        )
    return list(by_id.values())


class CartSynchronizer:
    """Local cart kept in step with the signed-in user's remote cart.

    Local state only moves after the remote call has succeeded. There is no
    guest cart: adding while signed out is refused with a notice.
    """

    def __init__(self, api: StoreApi, session: SessionStore, notifier: Notifier):
        self.api = api
        self.session = session
        self.notifier = notifier
        self._items: List[CartItem] = []
        session.subscribe(self._on_user_changed)

    @property
    def items(self) -> List[CartItem]:
        return [replace(it) for it in self._items]

    @property
    def total(self) -> float:
        return sum(it.price * it.quantity for it in self._items)

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self._items)

    @property
    def totals(self) -> OrderTotals:
        return order_totals(self._items)

    def _on_user_changed(self, user: Optional[AuthUser]) -> None:
        if user is None:
            self._items = []
            return
        self.load_cart_items()

    def _fail(self, action: str, e: Exception) -> bool:
        logger.exception("Cart %s failed", action)
        self.notifier.error("Cart update failed", str(e) or "Please try again.")
        return False

    def load_cart_items(self) -> bool:
        user_id = self.session.session.user_id
        if user_id is None:
            self._items = []
            return True
        try:
            rows = self.api.fetch_cart()
        except StorefrontError as e:
            return self._fail("load", e)
        if self.session.session.user_id != user_id:
            logger.info("Dropping cart for %s: user changed while loading", user_id)
            return False
        self._items = rows_to_items(rows)
        return True

    def add_item(self, product) -> bool:
        """product: anything with id, name, price and image (Product, WishlistItem)."""
        if not self.session.is_authenticated:
            self.notifier.error("Please sign in", "Sign in to add items to your cart.")
            return False
        product_id = str(product.id)
        try:
            self.api.add_to_cart(product_id, 1)
        except StorefrontError as e:
            return self._fail("add", e)

        if any(it.id == product_id for it in self._items):
            self._items = [
                replace(it, quantity=it.quantity + 1) if it.id == product_id else it for it in self._items
            ]
        else:
            new_item = CartItem(
                id=product_id,
                name=product.name,
                price=float(product.price),
                image=product.image or "",
                quantity=1,
            )
            self._items = self._items + [new_item]
        self.notifier.notify("Added to cart", f"{product.name} was added to your cart.")
        return True

    def _find_row(self, product_id: str) -> Optional[RemoteCartRow]:
        for row in self.api.fetch_cart():
            if row.product_id == product_id:
                return row
        return None

    def update_quantity(self, product_id: str, quantity: int) -> bool:
        try:
            row = self._find_row(product_id)
            if quantity <= 0:
                if row:
                    self.api.delete_cart_row(row.id)
            else:
                if row is None:
                    raise LookupError("This item is no longer in your cart.")
                self.api.update_cart_row(row.id, quantity)
        except (StorefrontError, LookupError) as e:
            return self._fail("update", e)

        if quantity <= 0:
            self._items = [it for it in self._items if it.id != product_id]
        else:
            self._items = [replace(it, quantity=quantity) if it.id == product_id else it for it in self._items]
        return True

    def remove_item(self, product_id: str) -> bool:
        try:
            row = self._find_row(product_id)
            if row:
                self.api.delete_cart_row(row.id)
        except StorefrontError as e:
            return self._fail("remove", e)
        self._items = [it for it in self._items if it.id != product_id]
        return True

    def clear_cart(self) -> bool:
        if not self.session.is_authenticated:
            self._items = []
            return True
        try:
            self.api.clear_cart()
        except StorefrontError as e:
            return self._fail("clear", e)
        self._items = []
        self.notifier.notify("Cart cleared", "All items were removed from your cart.")
        return True
