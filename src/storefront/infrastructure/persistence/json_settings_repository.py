"""JSON-file-backed implementation of SettingsRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.settings import (
    DEFAULT_EXCHANGE_RATES,
    DEFAULT_STORE_NAME,
    StoreSettings,
)
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.infrastructure.persistence.json_store import JsonFile


class JsonSettingsRepository(SettingsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty={})

    def get(self) -> StoreSettings:
        raw = self._file.load()
        rates = dict(DEFAULT_EXCHANGE_RATES)
        rates.update({code: Decimal(rate) for code, rate in raw.get("exchange_rates", {}).items()})
        return StoreSettings(
            store_name=raw.get("store_name", DEFAULT_STORE_NAME),
            currency_code=raw.get("currency_code", "USD"),
            exchange_rates=rates,
        )

    def save(self, settings: StoreSettings) -> None:
        self._file.persist({
            "store_name": settings.store_name,
            "currency_code": settings.currency_code,
            "exchange_rates": {
                code: str(rate) for code, rate in settings.exchange_rates.items()
            },
        })
