"""Abstract repository for the singleton StoreSettings."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.settings import StoreSettings


class SettingsRepository(ABC):

    @abstractmethod
    def get(self) -> StoreSettings:
        """Return the stored settings, or defaults if none were saved."""

    @abstractmethod
    def save(self, settings: StoreSettings) -> None:
        """Persist the settings."""
