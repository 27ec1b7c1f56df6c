"""Application services: Show Settings and Set Currency use cases."""

from __future__ import annotations

from storefront.domain.model.settings import StoreSettings
from storefront.domain.model.value_objects import parse_decimal
from storefront.domain.repository.settings_repository import SettingsRepository


class ShowSettingsHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def handle(self) -> StoreSettings:
        return self._settings_repo.get()


class SetCurrencyHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def handle(self, code: str, rate: str | None = None) -> StoreSettings:
        """Select the display currency, optionally overriding its rate."""
        settings = self._settings_repo.get()
        if rate is not None:
            settings.set_rate(code, parse_decimal(rate, "exchange rate"))
        settings.set_currency(code)
        self._settings_repo.save(settings)
        return settings
