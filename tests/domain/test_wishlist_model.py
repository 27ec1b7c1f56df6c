"""Unit tests for the Wishlist aggregate."""

from datetime import timedelta

import pytest

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.wishlist import Wishlist
from tests.fakes import NOW


class TestWishlist:

    def test_add_and_contains(self):
        wishlist = Wishlist("alice")
        entry = wishlist.add("1", NOW)
        assert entry.added_at == NOW
        assert wishlist.contains("1")
        assert not wishlist.contains("2")

    def test_product_saved_once(self):
        wishlist = Wishlist("alice")
        wishlist.add("1", NOW)
        with pytest.raises(ValidationError, match="already in wishlist"):
            wishlist.add("1", NOW + timedelta(hours=1))
        assert len(wishlist.entries) == 1

    def test_remove(self):
        wishlist = Wishlist("alice")
        wishlist.add("1", NOW)
        wishlist.remove("1")
        assert wishlist.is_empty

    def test_remove_missing(self):
        with pytest.raises(EntityNotFoundError, match="Item not found in wishlist"):
            Wishlist("alice").remove("1")

    def test_newest_first(self):
        wishlist = Wishlist("alice")
        wishlist.add("1", NOW)
        wishlist.add("2", NOW + timedelta(days=1))
        wishlist.add("3", NOW - timedelta(days=1))
        assert [e.product_id for e in wishlist.newest_first()] == ["2", "1", "3"]
