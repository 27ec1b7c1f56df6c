"""JSON-file-backed implementation of CouponRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.coupon import Coupon
from storefront.domain.model.discount import DiscountKind
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.infrastructure.persistence.json_store import (
    JsonFile,
    dump_datetime,
    load_datetime,
)

logger = logging.getLogger(__name__)


class JsonCouponRepository(CouponRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- CouponRepository interface -------------------------------------------

    def get_by_code(self, code: str) -> Coupon | None:
        for raw in self._file.load():
            if raw["code"] == code:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Coupon]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, coupon: Coupon, previous_code: str | None = None) -> None:
        key = previous_code or coupon.code
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["code"] == key:
                    # usage only moves through increment_usage / decrement_usage
                    records[i] = {**self._to_raw(coupon), "used_count": raw.get("used_count", 0)}
                    break
            else:
                records.append(self._to_raw(coupon))

    def delete(self, code: str) -> bool:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["code"] == code:
                    del records[i]
                    return True
        return False

    def increment_usage(self, code: str) -> bool:
        with self._file.transaction() as records:
            for raw in records:
                if raw["code"] != code:
                    continue
                limit = raw.get("usage_limit")
                if limit is not None and raw["used_count"] >= limit:
                    return False
                raw["used_count"] += 1
                return True
        return False

    def decrement_usage(self, code: str) -> None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["code"] == code and raw.get("used_count", 0) > 0:
                    raw["used_count"] -= 1
                    return
        logger.warning("No recorded use of coupon %s to give back", code)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(coupon: Coupon) -> dict:
        return {
            "code": coupon.code,
            "type": coupon.kind.value,
            "discount": str(coupon.value),
            "min_amount": str(coupon.min_amount.amount) if coupon.min_amount else None,
            "max_discount": str(coupon.max_discount.amount) if coupon.max_discount else None,
            "expiry_date": dump_datetime(coupon.expiry_date),
            "usage_limit": coupon.usage_limit,
            "used_count": coupon.used_count,
            "is_active": coupon.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Coupon:
        return Coupon(
            code=raw["code"],
            kind=DiscountKind(raw["type"]),
            value=Decimal(raw["discount"]),
            min_amount=Money(Decimal(raw["min_amount"])) if raw.get("min_amount") else None,
            max_discount=(
                Money(Decimal(raw["max_discount"])) if raw.get("max_discount") else None
            ),
            expiry_date=load_datetime(raw.get("expiry_date")),
            usage_limit=raw.get("usage_limit"),
            used_count=raw.get("used_count", 0),
            is_active=raw.get("is_active", True),
        )
