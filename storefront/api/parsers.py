"""Turns remote JSON into typed records.

The API is not consistent about field naming (``imageUrls`` next to
``image_url``, ``isFeatured`` next to ``is_featured``) so every alias is
resolved here and nowhere else.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from storefront.models import (
    AuthResult,
    AuthUser,
    MetricsOverview,
    Order,
    OrderItem,
    Product,
    ProductPage,
    ProductVariant,
    RemoteCartRow,
    Review,
    WishlistItem,
)


def _pick(raw: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        v = raw.get(k)
        if v is not None:
            return v
    return default


def _as_dict(raw: Any) -> Dict[str, Any]:
    """Non-object payloads (plain text, lists, None) read as an empty record."""
    return raw if isinstance(raw, dict) else {}


def _str(v: Any) -> Optional[str]:
    return None if v is None else str(v)


def _float(v: Any, default: float = 0.0) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return default


def _int(v: Any, default: int = 0) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _opt_int(v: Any) -> Optional[int]:
    return None if v is None else _int(v)


def _opt_bool(v: Any) -> Optional[bool]:
    if v is None:
        return None
    if isinstance(v, str):
        return v.strip().lower() == "true"
    return bool(v)


def unwrap_list(payload: Any) -> List[Dict[str, Any]]:
    """Accepts a bare array or an envelope like ``{"data": [...]}``/``{"items": [...]}``."""
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "items", "results"):
            if isinstance(payload.get(key), list):
                return payload[key]
    return []


def parse_user(raw: Optional[Dict[str, Any]]) -> Optional[AuthUser]:
    raw = _as_dict(raw)
    if not raw:
        return None
    return AuthUser(
        id=str(_pick(raw, "id", "_id", "user_id", default="")),
        email=str(raw.get("email") or ""),
        role=_str(raw.get("role")),
        name=_str(_pick(raw, "name", "full_name", "fullName")),
        phone=_str(raw.get("phone")),
    )


def parse_auth(raw: Optional[Dict[str, Any]]) -> AuthResult:
    raw = _as_dict(raw)
    return AuthResult(
        token=_str(_pick(raw, "access_token", "accessToken", "token")),
        user=parse_user(raw.get("user")),
    )


def _parse_features(raw: Any) -> List[str]:
    if isinstance(raw, list):
        return [str(f) for f in raw]
    if isinstance(raw, str):
        return [f.strip() for f in raw.split(",") if f.strip()]
    return []


def _parse_image_urls(raw: Dict[str, Any]) -> List[str]:
    urls = [raw.get("image_url")] + list(raw.get("imageUrls") or raw.get("image_urls") or [])
    if raw.get("image"):
        urls.append(raw["image"])
    seen = []
    for u in urls:
        if u and u not in seen:
            seen.append(u)
    return seen


def parse_variant(raw: Dict[str, Any]) -> ProductVariant:
    raw = _as_dict(raw)
    return ProductVariant(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        price_delta=None if _pick(raw, "priceDelta", "price_delta") is None else _float(_pick(raw, "priceDelta", "price_delta")),
        sku=_str(raw.get("sku")),
        quantity=_opt_int(raw.get("quantity")),
    )


def parse_product(raw: Dict[str, Any]) -> Product:
    raw = _as_dict(raw)
    return Product(
        id=str(_pick(raw, "id", "_id", default="")),
        name=str(raw.get("name") or ""),
        price=_float(_pick(raw, "price", "new_price")),
        image_urls=_parse_image_urls(raw),
        video_urls=list(_pick(raw, "videoUrls", "video_urls", default=[])),
        product_code=_str(_pick(raw, "productCode", "product_code")),
        collection_type=_str(_pick(raw, "collectionType", "collection_type")),
        quantity=_opt_int(_pick(raw, "quantity", "stock_quantity")),
        description=_str(raw.get("description")),
        features=_parse_features(raw.get("features")),
        category=_str(raw.get("category")),
        is_featured=_opt_bool(_pick(raw, "isFeatured", "is_featured")),
        is_available=_opt_bool(_pick(raw, "isAvailable", "is_available")),
        is_best_seller=_opt_bool(_pick(raw, "isBestSeller", "is_best_seller")),
        is_new_arrival=_opt_bool(_pick(raw, "isNewArrival", "is_new_arrival")),
        created_at=_str(_pick(raw, "createdAt", "created_at")),
        updated_at=_str(_pick(raw, "updatedAt", "updated_at")),
        variants=[parse_variant(v) for v in raw.get("variants") or []],
    )


def parse_product_page(payload: Any) -> ProductPage:
    meta = (payload.get("meta") or {}) if isinstance(payload, dict) else {}
    return ProductPage(
        data=[parse_product(p) for p in unwrap_list(payload)],
        total=_opt_int(meta.get("total")),
        page=_opt_int(meta.get("page")),
        limit=_opt_int(meta.get("limit")),
    )


def parse_order_item(raw: Dict[str, Any]) -> OrderItem:
    raw = _as_dict(raw)
    product = _as_dict(raw.get("product"))
    variants = product.get("variants") or []
    variant = _pick(raw, "variant", "variantName")
    if not variant and variants:
        first = _as_dict(variants[0])
        variant = first.get("name") or first.get("sku")
    images = _parse_image_urls(product) if product else []
    return OrderItem(
        product_id=str(_pick(raw, "productId", "product_id", default=product.get("id") or "")),
        quantity=_int(raw.get("quantity")),
        price=_float(_pick(raw, "price", "unitPrice", "unit_price")),
        product_name=_str(_pick(raw, "productName", "product_name", default=product.get("name"))),
        product_code=_str(_pick(raw, "productCode", "product_code", default=product.get("productCode"))),
        variant=_str(variant),
        image=images[0] if images else None,
    )


def parse_order(raw: Dict[str, Any]) -> Order:
    raw = _as_dict(raw)
    total = _pick(raw, "totalAmount", "total_amount")
    return Order(
        id=str(_pick(raw, "id", "_id", default="")),
        status=_str(raw.get("status")),
        total_amount=None if total is None else _float(total),
        customer_name=_str(_pick(raw, "customerName", "customer_name")),
        customer_email=_str(_pick(raw, "customerEmail", "customer_email")),
        customer_phone=_str(_pick(raw, "customerPhone", "customer_phone")),
        shipping_address=_str(_pick(raw, "shippingAddress", "shipping_address", "billingAddress")),
        note=_str(raw.get("note")),
        receipt_url=_str(_pick(raw, "receiptUrl", "receipt_url")),
        created_at=_str(_pick(raw, "createdAt", "created_at")),
        friendly_id=_str(_pick(raw, "friendlyId", "friendly_id")),
        items=[parse_order_item(i) for i in unwrap_list(_pick(raw, "items", "order_items"))],
    )


def parse_review(raw: Dict[str, Any]) -> Review:
    raw = _as_dict(raw)
    user = _as_dict(raw.get("user"))
    return Review(
        id=str(_pick(raw, "id", "_id", default="")),
        product_id=str(_pick(raw, "productId", "product_id", default="")),
        rating=_int(raw.get("rating")),
        comment=str(raw.get("comment") or ""),
        author_name=_str(_pick(raw, "authorName", "author_name", "name", default=user.get("name"))),
        created_at=_str(_pick(raw, "createdAt", "created_at")),
    )


def parse_cart_row(raw: Dict[str, Any]) -> RemoteCartRow:
    raw = _as_dict(raw)
    product_raw = _pick(raw, "product", "product_detail", "products")
    product = parse_product(product_raw) if isinstance(product_raw, dict) else None
    product_id = _pick(raw, "productId", "product_id")
    if product_id is None:
        product_id = product.id if product else raw.get("product")
    return RemoteCartRow(
        id=str(_pick(raw, "id", "_id", default="")),
        product_id=str(product_id or ""),
        quantity=_int(raw.get("quantity"), default=1),
        product=product,
    )


def parse_wishlist_item(raw: Dict[str, Any]) -> WishlistItem:
    raw = _as_dict(raw)
    product_raw = _pick(raw, "product", "product_detail")
    if isinstance(product_raw, dict):
        product = parse_product(product_raw)
        return WishlistItem(id=product.id, name=product.name, price=product.price, image=product.image or None)
    product = parse_product(raw)
    product_id = _pick(raw, "productId", "product_id", default=product.id)
    return WishlistItem(id=str(product_id), name=product.name, price=product.price, image=product.image or None)


def parse_metrics(raw: Optional[Dict[str, Any]]) -> MetricsOverview:
    raw = _as_dict(raw)
    return MetricsOverview(
        total_revenue=_float(_pick(raw, "totalRevenue", "total_revenue")),
        total_orders=_int(_pick(raw, "totalOrders", "total_orders")),
        pending_orders=_int(_pick(raw, "pendingOrders", "pending_orders")),
        best_sellers=_int(_pick(raw, "bestSellers", "best_sellers")),
    )
