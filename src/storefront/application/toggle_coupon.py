"""Application services: Toggle Coupon and Delete Coupon use cases."""

from __future__ import annotations

from storefront.application.dto import CouponDTO
from storefront.application.mappers import coupon_to_dto
from storefront.domain.exceptions import CouponNotFoundError
from storefront.domain.model.coupon import normalize_code
from storefront.domain.repository.coupon_repository import CouponRepository


class ToggleCouponHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self, code: str) -> CouponDTO:
        normalized = normalize_code(code)
        coupon = self._coupon_repo.get_by_code(normalized)
        if coupon is None:
            raise CouponNotFoundError(normalized)
        coupon.toggle()
        self._coupon_repo.save(coupon)
        return coupon_to_dto(coupon)


class DeleteCouponHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self, code: str) -> None:
        normalized = normalize_code(code)
        if not self._coupon_repo.delete(normalized):
            raise CouponNotFoundError(normalized)
