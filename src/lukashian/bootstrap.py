from __future__ import annotations

import logging
import os

from lukashian.core.keys import EARTH, EARTH_HTTP, MARS, MARS_HTTP, parse_key
from lukashian.core.registry import CalendarRegistry
from lukashian.providers import (
    StandardEarthProvider,
    StandardMarsProvider,
    standard_earth_http_provider,
    standard_mars_http_provider,
)

logger = logging.getLogger(__name__)


def build_registry() -> CalendarRegistry:
    """Standard calendars; nothing is loaded until first use."""
    reg = CalendarRegistry()
    reg.register(EARTH, StandardEarthProvider())
    reg.register(EARTH_HTTP, standard_earth_http_provider())
    reg.register(MARS, StandardMarsProvider())
    reg.register(MARS_HTTP, standard_mars_http_provider())

    name = os.environ.get("LUKASHIAN_DEFAULT_CALENDAR", "").strip()
    if name:
        reg.set_default_key(parse_key(name))
        logger.debug("Default calendar %s taken from LUKASHIAN_DEFAULT_CALENDAR", name)
    return reg
