"""Explicit per-request context handed to the cart and checkout handlers.

Handlers never read ambient state to find out who is shopping or what
time it is; both arrive through these objects.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CustomerSession:

    customer_id: str

    def __post_init__(self) -> None:
        if not self.customer_id or not self.customer_id.strip():
            raise ValidationError("A customer is required")
