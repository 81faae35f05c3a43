from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from storefront.api.client import ApiClient, FormFields
from storefront.api.parsers import (
    parse_auth,
    parse_cart_row,
    parse_metrics,
    parse_order,
    parse_product,
    parse_product_page,
    parse_review,
    parse_user,
    parse_wishlist_item,
    unwrap_list,
)
from storefront.constants import SORT_OPTIONS
from storefront.models import (
    AuthResult,
    AuthUser,
    MetricsOverview,
    Order,
    OrderDraft,
    Product,
    ProductInput,
    ProductPage,
    RemoteCartRow,
    Review,
    WishlistItem,
)


@dataclass
class ProductFilters:
    category: Optional[str] = None
    search: Optional[str] = None
    is_new_arrival: bool = False
    is_best_seller: bool = False
    is_featured: bool = False
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_option: Optional[str] = None  # featured / price-low / price-high / name / newest
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    collection_type: Optional[str] = None
    product_code: Optional[str] = None


def _num(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


def build_query(filters: ProductFilters) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if filters.limit:
        params["limit"] = str(filters.limit)
    if filters.page:
        params["page"] = str(filters.page)
    if filters.search:
        params["search"] = filters.search
    if filters.collection_type:
        params["collectionType"] = filters.collection_type
    if filters.product_code:
        params["productCode"] = filters.product_code
    if filters.category and filters.category != "All":
        params["category"] = filters.category
    if filters.min_price is not None:
        params["minPrice"] = _num(filters.min_price)
    if filters.max_price is not None:
        params["maxPrice"] = _num(filters.max_price)
    if filters.is_new_arrival:
        params["isNewArrival"] = "true"
    if filters.is_best_seller:
        params["isBestSeller"] = "true"
    if filters.is_featured:
        params["isFeatured"] = "true"

    if filters.sort_option:
        sort_by, sort_order = SORT_OPTIONS.get(filters.sort_option, SORT_OPTIONS["featured"])
        params["sortBy"] = sort_by
        params["sortOrder"] = sort_order
    else:
        if filters.sort_by:
            params["sortBy"] = filters.sort_by
        if filters.sort_order:
            params["sortOrder"] = filters.sort_order
    return params


def _product_form(data: ProductInput) -> FormFields:
    form: FormFields = [
        ("name", data.name),
        ("price", _num(data.price)),
        ("productCode", data.product_code),
        ("quantity", str(data.quantity)),
        ("category", data.category),
    ]
    if data.collection_type:
        form.append(("collectionType", data.collection_type))
    if data.description:
        form.append(("description", data.description))
    if data.features:
        form.append(("features", ", ".join(data.features)))
    for field_name, value in (
        ("isFeatured", data.is_featured),
        ("isAvailable", data.is_available),
        ("isBestSeller", data.is_best_seller),
        ("isNewArrival", data.is_new_arrival),
    ):
        if isinstance(value, bool):
            form.append((field_name, "true" if value else "false"))
    form.extend(("imageUrls", url) for url in data.image_urls)
    form.extend(("videoUrls", url) for url in data.video_urls)
    return form


def _order_form(draft: OrderDraft, as_guest: bool) -> FormFields:
    form: FormFields = []
    if draft.shipping_address:
        form.append(("shippingAddress", draft.shipping_address))
    if draft.note:
        form.append(("note", draft.note))
    form.append(("items", json.dumps([line.to_dict() for line in draft.items])))
    if draft.receipt:
        r = draft.receipt
        form.append(("receipt", (r.filename, r.content, r.content_type)))
    if as_guest:
        if draft.customer_email:
            form.append(("customerEmail", draft.customer_email))
        if draft.customer_name:
            form.append(("customerName", draft.customer_name))
        if draft.customer_phone:
            form.append(("customerPhone", draft.customer_phone))
    return form


class StoreApi:
    """One method per remote endpoint; results come back as typed records."""

    def __init__(self, client: ApiClient):
        self.client = client

    # ---------------- auth / users ----------------

    def login(self, email: str, password: str) -> AuthResult:
        return parse_auth(self.client.post("/auth/login", json={"email": email, "password": password}))

    def register(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        role: Optional[str] = None,
    ) -> AuthResult:
        payload: Dict[str, Any] = {"email": email, "password": password}
        for k, v in (("name", name), ("phone", phone), ("role", role)):
            if v:
                payload[k] = v
        return parse_auth(self.client.post("/auth/register", json=payload))

    def fetch_profile(self) -> Optional[AuthUser]:
        return parse_user(self.client.get("/users/me"))

    def fetch_users(self) -> List[AuthUser]:
        return [u for u in (parse_user(raw) for raw in unwrap_list(self.client.get("/users"))) if u]

    def delete_user(self, user_id: str) -> None:
        self.client.delete(f"/users/{user_id}")

    # ---------------- products ----------------

    def fetch_products(self, filters: Optional[ProductFilters] = None) -> ProductPage:
        params = build_query(filters or ProductFilters())
        return parse_product_page(self.client.get("/products", params=params))

    def fetch_product(self, product_id: str) -> Product:
        return parse_product(self.client.get(f"/products/{product_id}"))

    def create_product(self, data: ProductInput) -> Product:
        return parse_product(self.client.post("/products", form=_product_form(data)))

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Product:
        return parse_product(self.client.patch(f"/products/{product_id}", json=changes))

    def delete_product(self, product_id: str) -> None:
        self.client.delete(f"/products/{product_id}")

    # ---------------- orders ----------------

    def fetch_orders(self, status: Optional[str] = None) -> List[Order]:
        params = {"status": status} if status else None
        return [parse_order(o) for o in unwrap_list(self.client.get("/orders", params=params))]

    def fetch_order(self, order_id: str) -> Order:
        return parse_order(self.client.get(f"/orders/{order_id}"))

    def create_order(self, draft: OrderDraft, as_guest: bool = False) -> Order:
        endpoint = "/orders/guest" if as_guest else "/orders"
        return parse_order(self.client.post(endpoint, form=_order_form(draft, as_guest)) or {})

    def update_order_status(self, order_id: str, status: str, reference: Optional[str] = None) -> Order:
        payload = {"status": status, "reference": reference}
        return parse_order(self.client.patch(f"/orders/{order_id}/status", json=payload) or {"id": order_id})

    def confirm_order_payment(
        self, order_id: str, reference: Optional[str] = None, receipt_url: Optional[str] = None
    ) -> Order:
        payload = {k: v for k, v in (("reference", reference), ("receiptUrl", receipt_url)) if v}
        return parse_order(self.client.patch(f"/orders/{order_id}/confirm-payment", json=payload) or {"id": order_id})

    # ---------------- reviews / metrics ----------------

    def fetch_product_reviews(self, product_id: str) -> List[Review]:
        return [parse_review(r) for r in unwrap_list(self.client.get("/reviews", params={"productId": product_id}))]

    def create_review(self, product_id: str, rating: int, comment: str) -> Review:
        payload = {"productId": product_id, "rating": rating, "comment": comment}
        raw = self.client.post("/reviews", json=payload) or payload
        return parse_review(raw)

    def fetch_metrics_overview(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
    ) -> MetricsOverview:
        params = {k: v for k, v in (("startDate", start_date), ("endDate", end_date), ("status", status)) if v}
        return parse_metrics(self.client.get("/metrics/overview", params=params or None))

    # ---------------- cart ----------------

    def fetch_cart(self) -> List[RemoteCartRow]:
        return [parse_cart_row(r) for r in unwrap_list(self.client.get("/cart"))]

    def add_to_cart(self, product_id: str, quantity: int = 1) -> None:
        self.client.post("/cart", json={"productId": product_id, "quantity": quantity})

    def update_cart_row(self, row_id: str, quantity: int) -> None:
        self.client.patch(f"/cart/{row_id}", json={"quantity": quantity})

    def delete_cart_row(self, row_id: str) -> None:
        self.client.delete(f"/cart/{row_id}")

    def clear_cart(self) -> None:
        self.client.delete("/cart")

    # ---------------- wishlist ----------------

    def fetch_wishlist(self) -> List[WishlistItem]:
        return [parse_wishlist_item(r) for r in unwrap_list(self.client.get("/wishlist"))]

    def add_to_wishlist(self, product_id: str) -> None:
        self.client.post("/wishlist", json={"productId": product_id})

    def remove_from_wishlist(self, product_id: str) -> None:
        self.client.delete(f"/wishlist/{product_id}")
