from typing import Optional


def require_positive_number(v: float, name: str = "value") -> None:
    if v <= 0:
        raise ValueError(f"{name} must be > 0")


def is_blank(v: Optional[str]) -> bool:
    return v is None or not str(v).strip()
