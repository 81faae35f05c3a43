import logging
from dataclasses import dataclass
from functools import partial
from typing import Optional

from storefront.api.client import ApiClient
from storefront.api.store import StoreApi
from storefront.config import Settings, settings
from storefront.db.sqlite import LocalStorage, MemoryStorage
from storefront.notices import Notifier
from storefront.services.admin import AdminConsole
from storefront.services.checkout import Checkout
from storefront.services.reviews import Reviews
from storefront.state.cart import CartSynchronizer
from storefront.state.navigation import Navigator
from storefront.state.session import SessionStore, read_stored_token
from storefront.state.wishlist import WishlistSynchronizer

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    api: StoreApi
    notifier: Notifier
    navigator: Navigator
    session: SessionStore
    cart: CartSynchronizer
    wishlist: WishlistSynchronizer
    checkout: Checkout
    reviews: Reviews
    admin: AdminConsole


def build_storefront(cfg: Settings = settings, local_storage=None, session_storage=None, http=None) -> Storefront:
    local_storage = local_storage or LocalStorage(cfg.storage_path)
    session_storage = session_storage or MemoryStorage()

    client = ApiClient(
        cfg.api_base_url,
        token_provider=partial(read_stored_token, local_storage),
        timeout=cfg.request_timeout,
        http=http,
    )
    api = StoreApi(client)
    notifier = Notifier()
    navigator = Navigator()
    session = SessionStore(api, local_storage)
    cart = CartSynchronizer(api, session, notifier)
    wishlist = WishlistSynchronizer(
        api, session, local_storage, session_storage, notifier, navigator, auth_path=cfg.auth_path
    )
    return Storefront(
        api=api,
        notifier=notifier,
        navigator=navigator,
        session=session,
        cart=cart,
        wishlist=wishlist,
        checkout=Checkout(api, session, cart, notifier),
        reviews=Reviews(api, notifier),
        admin=AdminConsole(api, session, notifier),
    )


def main(cfg: Optional[Settings] = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    store = build_storefront(cfg or settings)
    store.session.restore()

    user = store.session.user
    logger.info("API: %s", (cfg or settings).api_base_url)
    logger.info("Signed in as: %s", user.email if user else "guest")
    logger.info("Cart: %d item(s), total %.2f", store.cart.item_count, store.cart.total)
    logger.info("Wishlist: %d item(s)", store.wishlist.count)


if __name__ == "__main__":
    main()
