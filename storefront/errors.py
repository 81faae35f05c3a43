from __future__ import annotations

from typing import Optional


class StorefrontError(Exception):
    """Base class for every error raised by the storefront client."""


class ApiError(StorefrontError):
    """Remote call failed: HTTP error status, transport failure or upload rejection.

    The message is meant to be shown to the user as-is.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ValidationError(StorefrontError):
    """Raised locally before any request is sent."""

    def __init__(self, title: str, description: str = ""):
        super().__init__(title)
        self.title = title
        self.description = description
