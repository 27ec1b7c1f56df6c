"""Application service: Create Coupon use case."""

from __future__ import annotations

from storefront.application.dto import CouponDTO, CouponSpec
from storefront.application.mappers import coupon_to_dto
from storefront.application.set_product_discount import parse_kind
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.coupon import Coupon, normalize_code
from storefront.domain.model.value_objects import Money, parse_decimal
from storefront.domain.repository.coupon_repository import CouponRepository


def coupon_fields(spec: CouponSpec) -> dict:
    """Parse the admin's raw input into keyword arguments for Coupon."""
    return {
        "kind": parse_kind(spec.kind),
        "value": parse_decimal(spec.value, "coupon value"),
        "min_amount": Money.of(spec.min_amount) if spec.min_amount else None,
        "max_discount": Money.of(spec.max_discount) if spec.max_discount else None,
        "expiry_date": spec.expiry_date,
        "usage_limit": spec.usage_limit,
    }


class CreateCouponHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self, spec: CouponSpec) -> CouponDTO:
        code = normalize_code(spec.code)
        if code and self._coupon_repo.get_by_code(code) is not None:
            raise ValidationError(f"Coupon code '{code}' already exists")

        coupon = Coupon.create(code=spec.code, **coupon_fields(spec))
        self._coupon_repo.save(coupon)
        return coupon_to_dto(coupon)
