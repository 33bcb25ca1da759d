from __future__ import annotations

from typing import List, Optional

from .core.data import CalendarData
from .core.provider import DataProvider
from .core.registry import CalendarRegistry

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def get_registry() -> CalendarRegistry:
    return _reg()

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def list_calendars() -> List[int]:
    return _reg().list()

def register_provider(key: int, provider: DataProvider, *, overwrite: bool = False) -> None:
    _reg().register(key, provider, overwrite=overwrite)

def calendar_data(key: Optional[int] = None) -> CalendarData:
    """Memoized data of the given calendar, or of the default calendar."""
    return _reg().data(key)

def resolve_key(key: Optional[int]) -> int:
    return _reg().resolve(key)

def default_key() -> int:
    return _reg().default_key

def set_default_key(key: int) -> None:
    _reg().set_default_key(key)

def clear(key: int) -> None:
    _reg().clear(key)

def clear_all() -> None:
    _reg().clear_all()
