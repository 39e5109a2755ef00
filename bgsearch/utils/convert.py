import math
from decimal import Decimal
from typing import List, Optional, Union


def to_float(value: Union[Decimal, float, int, None]) -> Optional[float]:
    """DB decimal -> plain float. NULL stays None, zero stays 0.0."""

    if value is None:
        return None
    return float(value)


def split_csv(value: Optional[str]) -> List[str]:
    """Comma separated query value -> list of trimmed, non-empty items."""

    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def page_count(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
