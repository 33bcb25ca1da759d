from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .data import CalendarData
from .errors import UnknownCalendarError
from .keys import EARTH, key_name
from .provider import DataProvider

logger = logging.getLogger(__name__)


@dataclass
class CalendarRegistry:
    """
    Calendar key -> provider, with lazily built and memoized CalendarData.

    data(key) builds at most once per key across threads; readers of an
    already built key never take a lock.
    """
    _providers: Dict[int, DataProvider] = field(default_factory=dict)
    _default_key: int = EARTH
    _data: Dict[int, CalendarData] = field(default_factory=dict, repr=False)
    _build_locks: Dict[int, threading.Lock] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def provider(self, key: int) -> DataProvider:
        if key not in self._providers:
            raise UnknownCalendarError(f"Unknown calendar {key_name(key)}. Available: {self.list()}")
        return self._providers[key]

    def list(self) -> List[int]:
        return sorted(self._providers.keys())

    def is_registered(self, key: int) -> bool:
        return key in self._providers

    def register(self, key: int, provider: DataProvider, *, overwrite: bool = False) -> None:
        with self._lock:
            if (not overwrite) and (key in self._providers):
                raise KeyError(f"Calendar {key_name(key)} already exists. Use overwrite=True to replace.")
            self._providers[key] = provider
            self._data.pop(key, None)
        logger.debug("Registered %s for calendar %s", type(provider).__name__, key_name(key))

    @property
    def default_key(self) -> int:
        return self._default_key

    def set_default_key(self, key: int) -> None:
        if key not in self._providers:
            raise UnknownCalendarError(f"Cannot make unregistered calendar {key_name(key)} the default")
        self._default_key = key
        logger.debug("Default calendar is now %s", key_name(key))

    def resolve(self, key: Optional[int]) -> int:
        return self._default_key if key is None else key

    def data(self, key: Optional[int] = None) -> CalendarData:
        k = self.resolve(key)
        d = self._data.get(k)
        if d is not None:
            return d

        provider = self.provider(k)
        with self._lock:
            build_lock = self._build_locks.setdefault(k, threading.Lock())
        with build_lock:
            d = self._data.get(k)
            if d is None:
                d = CalendarData.from_provider(provider, key=k)
                with self._lock:
                    # a concurrent re-registration wins over this build
                    if self._providers.get(k) is provider:
                        self._data[k] = d
        return d

    def is_loaded(self, key: int) -> bool:
        return key in self._data

    def clear(self, key: int) -> None:
        with self._lock:
            self._data.pop(key, None)
        logger.debug("Cleared data of calendar %s", key_name(key))

    def clear_all(self) -> None:
        with self._lock:
            self._data.clear()
        logger.debug("Cleared data of all calendars")
