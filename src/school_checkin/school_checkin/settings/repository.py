from __future__ import annotations

from typing import Optional, Protocol

from .model import AppSettings


class SettingsRepository(Protocol):
    def load(self) -> Optional[dict]:
        """Stored options keyed like AppSettings fields; missing keys are absent."""

        raise NotImplementedError

    def save(self, settings: AppSettings) -> None:
        raise NotImplementedError
