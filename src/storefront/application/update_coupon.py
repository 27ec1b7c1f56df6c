"""Application service: Update Coupon use case.

The usage counter survives an update; only the admin-editable fields
change.
"""

from __future__ import annotations

from storefront.application.create_coupon import coupon_fields
from storefront.application.dto import CouponDTO, CouponSpec
from storefront.application.mappers import coupon_to_dto
from storefront.domain.exceptions import CouponNotFoundError, ValidationError
from storefront.domain.model.coupon import normalize_code
from storefront.domain.repository.coupon_repository import CouponRepository


class UpdateCouponHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self, current_code: str, spec: CouponSpec) -> CouponDTO:
        previous = normalize_code(current_code)
        coupon = self._coupon_repo.get_by_code(previous)
        if coupon is None:
            raise CouponNotFoundError(previous)

        new_code = normalize_code(spec.code)
        if new_code != previous and self._coupon_repo.get_by_code(new_code) is not None:
            raise ValidationError(f"Coupon code '{new_code}' already exists")

        coupon.rename(spec.code)
        coupon.reconfigure(**coupon_fields(spec))
        self._coupon_repo.save(coupon, previous_code=previous)
        return coupon_to_dto(coupon)
