from datetime import datetime
from typing import Optional

from storefront.config import settings


def money(v: float, with_symbol: bool = True) -> str:
    amount = f"{float(v or 0):,.{settings.decimals}f}"
    if with_symbol and settings.currency_symbol:
        return f"{settings.currency_symbol}{amount}"
    return f"{amount} {settings.currency}"


def format_date(value: Optional[str]) -> str:
    if not value:
        return "N/A"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%d/%m/%Y")
    except ValueError:
        return value
