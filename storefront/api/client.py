from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import requests

from storefront.config import settings
from storefront.errors import ApiError

logger = logging.getLogger(__name__)

# multipart field value: plain text, or (filename, content, content_type)
FormValue = Union[str, Tuple[str, bytes, str]]
FormFields = List[Tuple[str, FormValue]]


class ApiClient:
    """Single entry point for every call to the storefront REST API.

    Attaches the bearer token when one is stored, sends JSON unless a multipart
    form is given, and turns every response into a result or an ApiError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout or settings.request_timeout
        self.http = http or requests.Session()

    def _headers(self, is_form_data: bool, extra: Optional[Dict[str, str]]) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if not is_form_data:
            headers["Content-Type"] = "application/json"
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        form: Optional[FormFields] = None,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        is_form_data = form is not None
        kwargs: Dict[str, Any] = {
            "headers": self._headers(is_form_data, headers),
            "timeout": self.timeout,
        }
        if params:
            kwargs["params"] = params
        if is_form_data:
            # requests only builds multipart bodies from `files`; text fields get a None filename
            kwargs["files"] = [
                (name, value if isinstance(value, tuple) else (None, value)) for name, value in form
            ]
        elif json is not None:
            kwargs["json"] = json

        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.http.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Network error: {e}") from e

        if not 200 <= response.status_code < 300:
            text = response.text
            logger.warning("%s %s -> %s", method, url, response.status_code)
            raise ApiError(text or f"Request failed with status {response.status_code}", response.status_code)

        if response.status_code == 204:
            return None

        content_type = response.headers.get("content-type") or ""
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                logger.warning("%s %s returned malformed JSON", method, url)
                raise ApiError(f"Invalid JSON response: {e}", response.status_code) from e

        return response.text

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Any:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)
