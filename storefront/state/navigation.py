from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlsplit


class Navigator:
    """Where the user currently is; the presentation layer moves it around."""

    def __init__(self, path: str = "/", search: str = "", hash: str = ""):
        self.path = path
        self.search = search
        self.hash = hash
        self.history: List[str] = []

    @property
    def location(self) -> str:
        return f"{self.path}{self.search}{self.hash}"

    def navigate(self, url: str) -> None:
        self.history.append(self.location)
        parts = urlsplit(url)
        self.path = parts.path or "/"
        self.search = f"?{parts.query}" if parts.query else ""
        self.hash = f"#{parts.fragment}" if parts.fragment else ""

    def back(self) -> Optional[str]:
        if not self.history:
            return None
        previous = self.history.pop()
        parts = urlsplit(previous)
        self.path = parts.path or "/"
        self.search = f"?{parts.query}" if parts.query else ""
        self.hash = f"#{parts.fragment}" if parts.fragment else ""
        return previous
