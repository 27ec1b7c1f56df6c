"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

The data directory defaults to ``<project root>/data`` and can be moved
with the ``STOREFRONT_DATA_DIR`` environment variable or ``configure()``
(the CLI's ``--data-dir`` option).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_coupon_repository import (
    JsonCouponRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_settings_repository import (
    JsonSettingsRepository,
)
from storefront.infrastructure.persistence.json_wishlist_repository import (
    JsonWishlistRepository,
)

DATA_DIR_ENV = "STOREFRONT_DATA_DIR"
LOG_LEVEL_ENV = "STOREFRONT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_data_dir: Path | None = None


def configure(data_dir: Path | None = None, log_level: str = "WARNING") -> None:
    """Set the data directory and logging level for this process."""
    global _data_dir
    _data_dir = data_dir
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT, force=True)
    logging.getLogger(__name__).debug("Using data directory %s", data_dir_path())


def data_dir_path() -> Path:
    if _data_dir is not None:
        return _data_dir
    env = os.getenv(DATA_DIR_ENV)
    return Path(env) if env else _DEFAULT_DATA_DIR


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir_path() / "products.json")


def coupon_repository() -> JsonCouponRepository:
    return JsonCouponRepository(data_dir_path() / "coupons.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(data_dir_path() / "orders.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(data_dir_path() / "carts.json")


def settings_repository() -> JsonSettingsRepository:
    return JsonSettingsRepository(data_dir_path() / "settings.json")


def wishlist_repository() -> JsonWishlistRepository:
    return JsonWishlistRepository(data_dir_path() / "wishlists.json")
