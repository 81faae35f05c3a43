from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from storefront.api.store import StoreApi
from storefront.errors import StorefrontError, ValidationError
from storefront.models import AuthUser, CartItem, Order, OrderDraft, OrderLine, Receipt
from storefront.notices import Notifier
from storefront.services.pricing import OrderTotals, order_totals
from storefront.state.cart import CartSynchronizer
from storefront.state.session import SessionStore
from storefront.utils.validators import is_blank

logger = logging.getLogger(__name__)


@dataclass
class CheckoutForm:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    note: str = ""


def validate_checkout(
    items: List[CartItem],
    form: CheckoutForm,
    user: Optional[AuthUser],
    receipt: Optional[Receipt],
) -> None:
    if not items:
        raise ValidationError("Your cart is empty", "Add some products before checking out.")

    if user is None and (is_blank(form.email) or is_blank(form.first_name) or is_blank(form.last_name)):
        raise ValidationError(
            "Contact info required",
            "Please provide your name and email for guest checkout.",
        )

    email = form.email if not is_blank(form.email) else (user.email if user else "")
    if any(is_blank(v) for v in (form.first_name, form.last_name, form.phone, form.address, email)):
        raise ValidationError(
            "Billing details missing",
            "Please fill first name, last name, phone, email, and address before submitting.",
        )

    if receipt is None:
        raise ValidationError("Receipt required", "Upload your payment receipt before submitting.")


def build_order_draft(items: List[CartItem], form: CheckoutForm, as_guest: bool, receipt: Receipt) -> OrderDraft:
    draft = OrderDraft(
        items=[OrderLine(product_id=it.id, quantity=it.quantity) for it in items],
        shipping_address=form.address.strip(),
        note=form.note.strip() or None,
        receipt=receipt,
    )
    if as_guest:
        draft.customer_email = form.email.strip()
        draft.customer_name = f"{form.first_name} {form.last_name}".strip()
        draft.customer_phone = form.phone.strip() or None
    return draft


class Checkout:
    """Bank-transfer checkout: the buyer uploads a payment receipt with the order."""

    def __init__(self, api: StoreApi, session: SessionStore, cart: CartSynchronizer, notifier: Notifier):
        self.api = api
        self.session = session
        self.cart = cart
        self.notifier = notifier

    def summary(self) -> OrderTotals:
        return order_totals(self.cart.items)

    def place_order(self, form: CheckoutForm, receipt: Optional[Receipt]) -> Optional[Order]:
        items = self.cart.items
        user = self.session.user
        try:
            validate_checkout(items, form, user, receipt)
        except ValidationError as e:
            self.notifier.error(e.title, e.description)
            return None

        as_guest = user is None
        try:
            order = self.api.create_order(build_order_draft(items, form, as_guest, receipt), as_guest=as_guest)
        except StorefrontError as e:
            logger.exception("Checkout failed")
            self.notifier.error("Checkout failed", str(e) or "We couldn't place your order. Please try again.")
            return None

        self.notifier.notify("Order sent", "Your order has been submitted successfully.")
        self.cart.clear_cart()
        return order
