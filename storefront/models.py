from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class AuthUser:
    id: str
    email: str
    role: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class Session:
    user: Optional[AuthUser] = None
    token: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None


@dataclass
class CartItem:
    id: str  # product id
    name: str
    price: float
    image: str
    quantity: int = 1


@dataclass(frozen=True)
class WishlistItem:
    id: str  # product id
    name: str
    price: float
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProductVariant:
    id: Optional[str] = None
    name: Optional[str] = None
    price_delta: Optional[float] = None
    sku: Optional[str] = None
    quantity: Optional[int] = None


@dataclass
class Product:
    id: str
    name: str
    price: float
    image_urls: List[str] = field(default_factory=list)
    video_urls: List[str] = field(default_factory=list)
    product_code: Optional[str] = None
    collection_type: Optional[str] = None
    quantity: Optional[int] = None
    description: Optional[str] = None
    features: List[str] = field(default_factory=list)
    category: Optional[str] = None
    is_featured: Optional[bool] = None
    is_available: Optional[bool] = None
    is_best_seller: Optional[bool] = None
    is_new_arrival: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    variants: List[ProductVariant] = field(default_factory=list)

    @property
    def image(self) -> str:
        return self.image_urls[0] if self.image_urls else ""


@dataclass
class ProductPage:
    data: List[Product]
    total: Optional[int] = None
    page: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class ProductInput:
    name: str
    price: float
    product_code: str
    quantity: int
    category: str
    description: Optional[str] = None
    features: List[str] = field(default_factory=list)
    image_urls: List[str] = field(default_factory=list)
    video_urls: List[str] = field(default_factory=list)
    collection_type: Optional[str] = None
    is_featured: Optional[bool] = None
    is_available: Optional[bool] = None
    is_best_seller: Optional[bool] = None
    is_new_arrival: Optional[bool] = None


@dataclass
class RemoteCartRow:
    id: str  # row id in the remote cart table
    product_id: str
    quantity: int
    product: Optional[Product] = None


@dataclass
class OrderItem:
    product_id: str
    quantity: int
    price: float = 0.0
    product_name: Optional[str] = None
    product_code: Optional[str] = None
    variant: Optional[str] = None
    image: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.product_name or self.product_code or self.product_id or "Product"


@dataclass
class Order:
    id: str
    status: Optional[str] = None
    total_amount: Optional[float] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    shipping_address: Optional[str] = None
    note: Optional[str] = None
    receipt_url: Optional[str] = None
    created_at: Optional[str] = None
    friendly_id: Optional[str] = None
    items: List[OrderItem] = field(default_factory=list)

    @property
    def display_id(self) -> str:
        return self.friendly_id or self.id


@dataclass
class OrderLine:
    product_id: str
    quantity: int
    variant_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"productId": self.product_id, "quantity": self.quantity}
        if self.variant_id:
            d["variantId"] = self.variant_id
        return d


@dataclass
class Receipt:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class OrderDraft:
    items: List[OrderLine]
    shipping_address: Optional[str] = None
    note: Optional[str] = None
    receipt: Optional[Receipt] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None


@dataclass
class Review:
    id: str
    product_id: str
    rating: int
    comment: str
    author_name: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class MetricsOverview:
    total_revenue: float = 0.0
    total_orders: int = 0
    pending_orders: int = 0
    best_sellers: int = 0


@dataclass
class AuthResult:
    token: Optional[str]
    user: Optional[AuthUser]
