"""Flat option storage for the plugin settings record."""

import logging
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS: dict[str, Any] = {
    "migration_ws": False,
    "migration_token": None,
    "migration_token_id": None,
    "client_secret": None,
}


class SettingsStore(Protocol):
    """Read/write access to the persisted settings record."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def get_all(self) -> dict[str, Any]: ...

    def update(self, values: Mapping[str, Any]) -> None: ...


class InMemorySettingsStore:
    """Process-local settings record. Last writer wins."""

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._options: dict[str, Any] = deepcopy(DEFAULT_OPTIONS)
        if initial:
            self._options.update(initial)

    def get(self, key: str, default: Any = None) -> Any:
        value = self._options.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        self._options[key] = value

    def get_all(self) -> dict[str, Any]:
        return dict(self._options)

    def update(self, values: Mapping[str, Any]) -> None:
        self._options.update(values)
        logger.debug("Settings updated", extra={"keys": sorted(values)})
