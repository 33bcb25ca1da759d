"""
Providers that load pre-computed calendar data from an external resource
such as a directory or a web server, so that one authority can maintain the
exact numbers that define a calendar instance.

A resource is located by joining a base location and an extension as plain
strings (the base must end with its separator). Every consecutive 8 bytes of
a resource encode one big-endian signed 64-bit integer; the offset resource
holds exactly one.
"""
from __future__ import annotations

import logging
import os
import urllib.request
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import numpy as np

from ..core.data import CalendarData
from ..core.errors import ProviderError
from ..core.provider import DataProvider

logger = logging.getLogger(__name__)

DEFAULT_UNIX_EPOCH_OFFSET_EXTENSION = "unixEpochOffset"
DEFAULT_YEAR_ENDS_EXTENSION = "yearEpochMilliseconds"
DEFAULT_DAY_ENDS_EXTENSION = "dayEpochMilliseconds"

STANDARD_EARTH_URL = "https://lukashian.org/millisecondstore/standardearth/"
STANDARD_MARS_URL = "https://lukashian.org/millisecondstore/standardmars/"

BLOB_DTYPE = np.dtype(">i8")


def decode_ms(blob: bytes) -> np.ndarray:
    if len(blob) % BLOB_DTYPE.itemsize:
        raise ValueError(f"Blob of {len(blob)} bytes is not a whole number of 64-bit integers")
    return np.frombuffer(blob, dtype=BLOB_DTYPE).astype(np.int64)


def encode_ms(values) -> bytes:
    return np.asarray(values, dtype=np.int64).astype(BLOB_DTYPE).tobytes()


class ExternalResourceProvider(ABC):
    def __init__(
        self,
        base_location: str,
        unix_epoch_offset_extension: str = DEFAULT_UNIX_EPOCH_OFFSET_EXTENSION,
        year_ends_extension: str = DEFAULT_YEAR_ENDS_EXTENSION,
        day_ends_extension: str = DEFAULT_DAY_ENDS_EXTENSION,
    ) -> None:
        self.base_location = base_location
        self.unix_epoch_offset_extension = unix_epoch_offset_extension
        self.year_ends_extension = year_ends_extension
        self.day_ends_extension = day_ends_extension

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.base_location!r})"

    @abstractmethod
    def load_bytes(self, location: str) -> bytes:
        """Raw content of base_location + extension."""

    def _load_ms(self, extension: str) -> np.ndarray:
        location = self.base_location + extension
        try:
            blob = self.load_bytes(location)
            if not blob:
                raise ProviderError(f"No bytes could be loaded from '{location}'")
            values = decode_ms(blob)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"Loading milliseconds from '{location}' failed: {e}") from e
        logger.info("Loaded %d values (%d bytes) from %s", values.size, len(blob), location)
        return values

    def load_unix_epoch_offset_ms(self) -> int:
        values = self._load_ms(self.unix_epoch_offset_extension)
        if values.size != 1:
            raise ProviderError("Expected exactly one unix epoch offset")
        return int(values[0])

    def load_year_ends_ms(self) -> np.ndarray:
        return self._load_ms(self.year_ends_extension)

    def load_day_ends_ms(self, year_ends_ms: np.ndarray) -> np.ndarray:
        return self._load_ms(self.day_ends_extension)


class FileProvider(ExternalResourceProvider):
    """
    Loads the blobs from files, e.g. an offline copy of the standard data:

        curl -L https://lukashian.org/millisecondstore/standardearth/unixEpochOffset -o unixEpochOffset

    or a directory written by write_blobs().
    """

    def load_bytes(self, location: str) -> bytes:
        return Path(location).read_bytes()


class HttpProvider(ExternalResourceProvider):
    def __init__(self, base_url: str, *args, timeout: float = 30.0, **kwargs) -> None:
        super().__init__(base_url, *args, **kwargs)
        self.timeout = timeout

    def load_bytes(self, location: str) -> bytes:
        # urlopen follows redirects
        req = urllib.request.Request(location, headers={"Accept": "application/octet-stream"})
        with urllib.request.urlopen(req, timeout=self.timeout) as r:
            status = r.status
            if status != 200:
                raise ProviderError(f"Expected response code 200, instead received response code {status}")
            return r.read()


def standard_earth_http_provider(timeout: float = 30.0) -> HttpProvider:
    return HttpProvider(STANDARD_EARTH_URL, timeout=timeout)


def standard_mars_http_provider(timeout: float = 30.0) -> HttpProvider:
    return HttpProvider(STANDARD_MARS_URL, timeout=timeout)


def default_cache_dir() -> Path:
    """
    Where exported calendar data goes by default:
      1) LUKASHIAN_CACHE_DIR
      2) $XDG_CACHE_HOME/lukashian or ~/.cache/lukashian
    """
    p = os.environ.get("LUKASHIAN_CACHE_DIR", "").strip()
    if p:
        return Path(p).expanduser()
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    return (Path(xdg).expanduser() / "lukashian") if xdg else (Path.home() / ".cache" / "lukashian")


def write_blobs(source: Union[CalendarData, DataProvider], directory: Union[str, Path], *, key: Optional[int] = None) -> Path:
    """
    Write the three blobs under their default extensions, readable by
    FileProvider(str(directory) + os.sep). Returns the directory.
    """
    data = source if isinstance(source, CalendarData) else CalendarData.from_provider(source, key=key or 0)
    out = Path(directory)
    out.mkdir(parents=True, exist_ok=True)
    blobs = {
        DEFAULT_UNIX_EPOCH_OFFSET_EXTENSION: encode_ms([data.unix_epoch_offset_ms]),
        DEFAULT_YEAR_ENDS_EXTENSION: encode_ms(data.year_ends_ms),
        DEFAULT_DAY_ENDS_EXTENSION: encode_ms(data.day_ends_ms),
    }
    for name, blob in blobs.items():
        (out / name).write_bytes(blob)
    logger.info("Wrote %d years and %d days to %s", data.number_of_years, data.number_of_days, out)
    return out
