SESSION_KEY = "hok_session"
WISHLIST_KEY = "hok_wishlist_items"
RETURN_TO_KEY = "hok_return_to"

# processing fee: 1.5% of subtotal, rounded to whole units, capped
PROCESSING_FEE_RATE = 0.015
PROCESSING_FEE_CAP = 2000

ROLE_ADMIN = "ADMIN"

STATUS_PENDING = "PENDING"
STATUS_CONFIRMED = "CONFIRMED"
STATUS_CANCELLED = "CANCELLED"

ORDER_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_CANCELLED)

NOTICE_DEFAULT = "default"
NOTICE_DESTRUCTIVE = "destructive"
NOTICE_HISTORY_LIMIT = 50

SORT_OPTIONS = {
    "featured": ("featured", "desc"),
    "price-low": ("price", "asc"),
    "price-high": ("price", "desc"),
    "name": ("name", "asc"),
    "newest": ("createdAt", "desc"),
}
