"""Application service: List Coupons use case (query)."""

from __future__ import annotations

from storefront.application.dto import CouponDTO
from storefront.application.mappers import coupon_to_dto
from storefront.domain.repository.coupon_repository import CouponRepository


class ListCouponsHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self) -> list[CouponDTO]:
        coupons = sorted(self._coupon_repo.list_all(), key=lambda c: c.code)
        return [coupon_to_dto(c) for c in coupons]
