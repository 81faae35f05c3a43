from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List

from storefront.constants import NOTICE_DEFAULT, NOTICE_DESTRUCTIVE, NOTICE_HISTORY_LIMIT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    title: str
    description: str = ""
    variant: str = NOTICE_DEFAULT


class Notifier:
    """Collects user-facing notices and forwards them to whoever renders them."""

    def __init__(self):
        self.history: Deque[Notice] = deque(maxlen=NOTICE_HISTORY_LIMIT)
        self._listeners: List[Callable[[Notice], None]] = []

    def subscribe(self, listener: Callable[[Notice], None]) -> None:
        self._listeners.append(listener)

    def notify(self, title: str, description: str = "", variant: str = NOTICE_DEFAULT) -> Notice:
        notice = Notice(title, description, variant)
        self.history.append(notice)
        if variant == NOTICE_DESTRUCTIVE:
            logger.warning("notice: %s | %s", title, description)
        else:
            logger.info("notice: %s | %s", title, description)
        for listener in list(self._listeners):
            listener(notice)
        return notice

    def error(self, title: str, description: str = "") -> Notice:
        return self.notify(title, description, NOTICE_DESTRUCTIVE)
