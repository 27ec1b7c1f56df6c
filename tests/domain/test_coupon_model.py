"""Unit tests for the Coupon aggregate and CouponValidator."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import (
    CouponExhaustedError,
    CouponNotFoundError,
    ValidationError,
)
from storefront.domain.model.coupon import Coupon, normalize_code
from storefront.domain.model.discount import DiscountKind
from storefront.domain.model.value_objects import Money
from storefront.domain.service.coupon_validator import CouponValidator
from tests.fakes import NOW, FakeCouponRepository


class TestNormalizeCode:

    @pytest.mark.parametrize("raw", ["save10", " SAVE10 ", "Save10\n"])
    def test_strips_and_uppercases(self, raw):
        assert normalize_code(raw) == "SAVE10"

    def test_none_becomes_empty(self):
        assert normalize_code(None) == ""


class TestCouponCreate:

    def test_code_is_normalized(self):
        coupon = Coupon.create(" welcome ", DiscountKind.FIXED, Decimal("5"))
        assert coupon.code == "WELCOME"

    def test_blank_code_rejected(self):
        with pytest.raises(ValidationError, match="Coupon code is required"):
            Coupon.create("   ", DiscountKind.FIXED, Decimal("5"))

    def test_zero_value_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Coupon.create("X", DiscountKind.FIXED, Decimal("0"))

    def test_percentage_over_hundred_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed 100"):
            Coupon.create("X", DiscountKind.PERCENTAGE, Decimal("101"))

    def test_negative_usage_limit_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Coupon.create("X", DiscountKind.FIXED, Decimal("5"), usage_limit=-1)

    def test_zero_limit_and_minimum_mean_none(self):
        coupon = Coupon.create("X", DiscountKind.FIXED, Decimal("5"),
                               min_amount=Money.zero(), usage_limit=0)
        assert coupon.min_amount is None
        assert coupon.usage_limit is None
        assert not coupon.is_exhausted

    def test_max_discount_dropped_for_fixed(self):
        coupon = Coupon.create("X", DiscountKind.FIXED, Decimal("5"),
                               max_discount=Money.of("2"))
        assert coupon.max_discount is None

    def test_describe(self):
        pct = Coupon.create("P", DiscountKind.PERCENTAGE, Decimal("15"),
                            max_discount=Money.of("20"))
        assert pct.describe() == "15% off (max $20.00)"
        assert Coupon.create("F", DiscountKind.FIXED, Decimal("5")).describe() == "$5.00 off"


class TestCouponValidator:

    def _validator(self, *coupons: Coupon) -> CouponValidator:
        return CouponValidator(FakeCouponRepository(list(coupons)))

    def test_lookup_is_case_insensitive(self):
        validator = self._validator(Coupon.create("SAVE10", DiscountKind.FIXED, Decimal("10")))
        assert validator.lookup("save10").code == "SAVE10"

    def test_unknown_code(self):
        with pytest.raises(CouponNotFoundError, match="Coupon 'NOPE' not found"):
            self._validator().lookup("nope")

    def test_blank_code_not_found(self):
        with pytest.raises(CouponNotFoundError):
            self._validator().lookup("  ")

    def test_validate_returns_applied_coupon(self):
        validator = self._validator(Coupon.create("SAVE10", DiscountKind.FIXED, Decimal("10")))
        applied = validator.validate(" Save10", Money.of("40"), NOW)
        assert applied.code == "SAVE10"
        assert applied.discount == Money.of("10")

    def test_validate_propagates_rule_failure(self):
        coupon = Coupon.create("ONCE", DiscountKind.FIXED, Decimal("10"), usage_limit=1)
        coupon.used_count = 1
        with pytest.raises(CouponExhaustedError):
            self._validator(coupon).validate("ONCE", Money.of("40"), NOW)
