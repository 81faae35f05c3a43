from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
from urllib.parse import urlencode

from storefront.api.parsers import parse_wishlist_item
from storefront.api.store import StoreApi
from storefront.config import settings
from storefront.constants import RETURN_TO_KEY, WISHLIST_KEY
from storefront.errors import StorefrontError
from storefront.models import AuthUser, WishlistItem
from storefront.notices import Notifier
from storefront.state.navigation import Navigator
from storefront.state.session import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class LoginPrompt:
    """Handed to the login-required hook; call one of the two."""

    login: Callable[[], None]
    continue_as_guest: Callable[[], None]


class WishlistSynchronizer:
    """Wishlist for signed-in users (remote, optimistic) and guests (local storage).

    Signed-in mutations are applied locally first, then confirmed remotely and
    reconciled with a fresh fetch. Any failure restores the snapshot taken
    before the mutation.
    """

    def __init__(
        self,
        api: StoreApi,
        session: SessionStore,
        storage,
        session_storage,
        notifier: Notifier,
        navigator: Navigator,
        on_require_login: Optional[Callable[[LoginPrompt], None]] = None,
        auth_path: Optional[str] = None,
    ):
        self.api = api
        self.session = session
        self.storage = storage
        self.session_storage = session_storage
        self.notifier = notifier
        self.navigator = navigator
        self.on_require_login = on_require_login
        self.auth_path = auth_path or settings.auth_path
        self._items: Tuple[WishlistItem, ...] = ()
        self._load_local()
        session.subscribe(self._on_user_changed)

    @property
    def items(self) -> Tuple[WishlistItem, ...]:
        return self._items

    @property
    def count(self) -> int:
        return len(self._items)

    def is_wished(self, product_id: str) -> bool:
        return any(it.id == product_id for it in self._items)

    # ---------------- loading ----------------

    def _load_local(self) -> None:
        raw = self.storage.get_item(WISHLIST_KEY)
        if not raw:
            self._items = ()
            return
        try:
            self._items = tuple(parse_wishlist_item(entry) for entry in json.loads(raw))
        except (ValueError, TypeError, AttributeError):
            logger.exception("Failed to load wishlist")
            self._items = ()

    def _persist(self, items: Tuple[WishlistItem, ...]) -> None:
        self._items = items
        self.storage.set_item(WISHLIST_KEY, json.dumps([it.to_dict() for it in items]))

    def _on_user_changed(self, user: Optional[AuthUser]) -> None:
        if user is None:
            self._load_local()
            return
        try:
            self._reconcile()
        except StorefrontError as e:
            logger.exception("Wishlist load failed")
            self.notifier.error("Could not load wishlist", str(e))

    def _reconcile(self) -> None:
        user_id = self.session.session.user_id
        items = tuple(self.api.fetch_wishlist())
        if self.session.session.user_id != user_id:
            logger.info("Dropping wishlist for %s: user changed while loading", user_id)
            return
        self._items = items

    def reload(self) -> bool:
        if not self.session.is_authenticated:
            self._load_local()
            return True
        try:
            self._reconcile()
        except StorefrontError as e:
            logger.exception("Wishlist load failed")
            self.notifier.error("Could not load wishlist", str(e))
            return False
        return True

    # ---------------- login required ----------------

    def redirect_to_login(self) -> None:
        location = self.navigator.location
        self.session_storage.set_item(RETURN_TO_KEY, location)
        self.navigator.navigate(f"{self.auth_path}?{urlencode({'returnTo': location})}")

    def _require_login(self, guest_action: Callable[[], None]) -> None:
        if self.on_require_login is None:
            self.redirect_to_login()
            return
        self.on_require_login(LoginPrompt(login=self.redirect_to_login, continue_as_guest=guest_action))

    # ---------------- guest ----------------

    def _guest_add(self, item: WishlistItem) -> None:
        if self.is_wished(item.id):
            return
        self._persist(self._items + (item,))
        self.notifier.notify("Added to wishlist", f"{item.name} was saved for later.")

    def _guest_toggle(self, item: WishlistItem) -> None:
        exists = self.is_wished(item.id)
        if exists:
            self._persist(tuple(it for it in self._items if it.id != item.id))
            self.notifier.notify("Removed from wishlist", f"{item.name} was removed.")
        else:
            self._persist(self._items + (item,))
            self.notifier.notify("Added to wishlist", f"{item.name} was saved for later.")

    # ---------------- operations ----------------

    def _rollback(self, snapshot: Tuple[WishlistItem, ...], e: Exception) -> bool:
        logger.exception("Wishlist update failed")
        self._items = snapshot
        self.notifier.error("Wishlist update failed", str(e) or "Please try again.")
        return False

    def add_item(self, item: WishlistItem) -> bool:
        if not self.session.is_authenticated:
            self._require_login(lambda: self._guest_add(item))
            return False
        if self.is_wished(item.id):
            return True

        self._items = self._items + (item,)
        self.notifier.notify("Added to wishlist", f"{item.name} was saved for later.")
        try:
            self.api.add_to_wishlist(item.id)
            self._reconcile()
        except StorefrontError as e:
            logger.exception("Wishlist add failed")
            self._items = tuple(it for it in self._items if it.id != item.id)
            self.notifier.error("Wishlist update failed", str(e) or "Please try again.")
            return False
        return True

    def toggle_item(self, item: WishlistItem) -> bool:
        if not self.session.is_authenticated:
            self._require_login(lambda: self._guest_toggle(item))
            return False

        snapshot = self._items
        exists = self.is_wished(item.id)
        if exists:
            self._items = tuple(it for it in snapshot if it.id != item.id)
            self.notifier.notify("Removed from wishlist", f"{item.name} was removed.")
        else:
            self._items = snapshot + (item,)
            self.notifier.notify("Added to wishlist", f"{item.name} was saved for later.")
        try:
            if exists:
                self.api.remove_from_wishlist(item.id)
            else:
                self.api.add_to_wishlist(item.id)
            self._reconcile()
        except StorefrontError as e:
            return self._rollback(snapshot, e)
        return True

    def remove_item(self, product_id: str) -> bool:
        if not self.session.is_authenticated:
            self._persist(tuple(it for it in self._items if it.id != product_id))
            return True

        snapshot = self._items
        self._items = tuple(it for it in snapshot if it.id != product_id)
        try:
            self.api.remove_from_wishlist(product_id)
            self._reconcile()
        except StorefrontError as e:
            return self._rollback(snapshot, e)
        return True

    def clear_wishlist(self) -> bool:
        if not self.session.is_authenticated:
            self._persist(())
            return True

        snapshot = self._items
        self._items = ()
        try:
            # every removal is issued even if an earlier one failed
            first_error: Optional[StorefrontError] = None
            for it in snapshot:
                try:
                    self.api.remove_from_wishlist(it.id)
                except StorefrontError as e:
                    first_error = first_error or e
            if first_error:
                raise first_error
            self._reconcile()
        except StorefrontError as e:
            return self._rollback(snapshot, e)
        return True
