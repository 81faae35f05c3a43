from __future__ import annotations

import logging
import mimetypes
from typing import Optional

import requests

from storefront.config import settings
from storefront.errors import ApiError

logger = logging.getLogger(__name__)


def upload_image(
    content: bytes,
    filename: str,
    upload_url: Optional[str] = None,
    http: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> str:
    """Sends one file to the media upload function and returns its public URL."""
    url = upload_url or settings.upload_url
    if not url:
        raise ApiError("Image upload is not configured. Set UPLOAD_URL in .env")

    content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    if http is None:
        with requests.Session() as own:
            return upload_image(content, filename, url, own, timeout)

    try:
        r = http.post(
            url,
            files={"file": (filename, content, content_type)},
            timeout=timeout or settings.request_timeout,
        )
    except requests.RequestException as e:
        raise ApiError(f"Network error: {e}") from e

    try:
        data = r.json()
    except ValueError:
        data = None

    if not isinstance(data, dict):
        if not 200 <= r.status_code < 300:
            raise ApiError(r.text or f"Upload failed with status {r.status_code}", r.status_code)
        raise ApiError("Upload returned an unreadable response", r.status_code)

    if not 200 <= r.status_code < 300 or not data.get("success") or not data.get("url"):
        raise ApiError(data.get("error") or f"Upload failed with status {r.status_code}", r.status_code)

    logger.info("Uploaded %s -> %s", filename, data["url"])
    return data["url"]
