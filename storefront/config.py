from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../package
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    upload_url: str
    storage_path: str
    export_dir: str
    request_timeout: float
    currency: str
    currency_symbol: str
    decimals: int
    store_name: str
    store_email: str
    auth_path: str


settings = Settings(
    api_base_url=(_get_env("HOK_API_URL", "BASE_URL", default="https://hok-db.vercel.app/api") or "").rstrip("/"),
    upload_url=_get_env("UPLOAD_URL", "CLOUDINARY_UPLOAD_URL", default="") or "",
    storage_path=_get_path("STORAGE_PATH", default=str(ROOT_DIR / "data" / "storage.db")),
    export_dir=_get_path("EXPORT_DIR", default=str(ROOT_DIR / "exports")),
    request_timeout=_get_float("REQUEST_TIMEOUT", default=30.0) or 30.0,
    currency=_get_env("CURRENCY", default="NGN") or "NGN",
    currency_symbol=_get_env("CURRENCY_SYMBOL", default="₦") or "",
    decimals=_get_int("DECIMALS", default=0) or 0,
    store_name=_get_env("STORE_NAME", default="HOK FASHION HOUSE") or "HOK FASHION HOUSE",
    store_email=_get_env("STORE_EMAIL", default="support@hokfashionhouse.com") or "",
    auth_path=_get_env("AUTH_PATH", default="/auth") or "/auth",
)

if not settings.api_base_url.startswith(("http://", "https://")):
    raise RuntimeError("HOK_API_URL must be an absolute http(s) URL. Set HOK_API_URL in .env")
if settings.request_timeout <= 0:
    raise RuntimeError("REQUEST_TIMEOUT must be > 0")
