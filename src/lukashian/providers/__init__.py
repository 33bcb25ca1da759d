"""Data providers: the standard Earth and Mars generators and external-resource loaders."""

from .earth import StandardEarthProvider
from .mars import StandardMarsProvider
from .external import (
    ExternalResourceProvider,
    FileProvider,
    HttpProvider,
    standard_earth_http_provider,
    standard_mars_http_provider,
    write_blobs,
)

__all__ = [
    "StandardEarthProvider",
    "StandardMarsProvider",
    "ExternalResourceProvider",
    "FileProvider",
    "HttpProvider",
    "standard_earth_http_provider",
    "standard_mars_http_provider",
    "write_blobs",
]
