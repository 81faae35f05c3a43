from __future__ import annotations

import json
import logging
from typing import Callable, List, Optional, Tuple

from storefront.api.parsers import parse_user
from storefront.api.store import StoreApi
from storefront.constants import ROLE_ADMIN, SESSION_KEY
from storefront.errors import StorefrontError
from storefront.models import AuthResult, AuthUser, Session

logger = logging.getLogger(__name__)

UserListener = Callable[[Optional[AuthUser]], None]


def read_stored_session(storage) -> Session:
    raw = storage.get_item(SESSION_KEY)
    if not raw:
        return Session()
    try:
        parsed = json.loads(raw)
        return Session(user=parse_user(parsed.get("user")), token=parsed.get("token"))
    except (ValueError, TypeError, AttributeError):
        logger.exception("Failed to parse stored session")
        return Session()


def read_stored_token(storage) -> Optional[str]:
    return read_stored_session(storage).token


def full_name(first_name: Optional[str], last_name: Optional[str]) -> Optional[str]:
    name = " ".join(part for part in (first_name, last_name) if part).strip()
    return name or None


class SessionStore:
    """Current user and bearer token, persisted under SESSION_KEY."""

    def __init__(self, api: StoreApi, storage):
        self.api = api
        self.storage = storage
        self.session = Session()
        self.loading = True
        self._listeners: List[UserListener] = []

    @property
    def user(self) -> Optional[AuthUser]:
        return self.session.user

    @property
    def token(self) -> Optional[str]:
        return self.session.token

    @property
    def is_authenticated(self) -> bool:
        return self.session.user is not None

    @property
    def is_admin(self) -> bool:
        return is_admin(self.session.user)

    def subscribe(self, listener: UserListener) -> None:
        """listener(user) runs whenever the signed-in identity changes."""
        self._listeners.append(listener)

    def _set(self, session: Session) -> None:
        previous = self.session.user_id
        self.session = session
        if session.user_id != previous:
            for listener in list(self._listeners):
                listener(session.user)

    def restore(self) -> Session:
        self._set(read_stored_session(self.storage))
        self.loading = False
        return self.session

    def _accept(self, result: AuthResult) -> Tuple[bool, str]:
        if not result.token:
            logger.error("Auth response carried no token")
            return False, "The server did not return a session. Please try again."
        payload = {"user": result.user.to_dict() if result.user else None, "token": result.token}
        self.storage.set_item(SESSION_KEY, json.dumps(payload))
        self._set(Session(user=result.user, token=result.token))
        return True, ""

    def sign_in(self, email: str, password: str) -> Tuple[bool, str]:
        try:
            result = self.api.login(email, password)
        except StorefrontError as e:
            logger.error("Login failed: %s", e)
            return False, str(e)
        return self._accept(result)

    def sign_up(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Tuple[bool, str]:
        try:
            result = self.api.register(email, password, name=full_name(first_name, last_name))
        except StorefrontError as e:
            logger.error("Registration failed: %s", e)
            return False, str(e)
        return self._accept(result)

    def sign_out(self) -> Tuple[bool, str]:
        self.storage.remove_item(SESSION_KEY)
        self._set(Session())
        return True, ""


def is_admin(user: Optional[AuthUser]) -> bool:
    return (user.role or "").upper() == ROLE_ADMIN if user else False
