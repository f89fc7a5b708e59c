"""Client library for the Wargaming World of Tanks public API."""

from wgapi.client import AsyncWGAPI, BaseWGAPI, WGAPI, __version__
from wgapi.errors import InvalidArgument, InvalidConfiguration, TransportError, WGAPIError
from wgapi.regions import Region

__all__ = [
    "AsyncWGAPI",
    "BaseWGAPI",
    "InvalidArgument",
    "InvalidConfiguration",
    "Region",
    "TransportError",
    "WGAPI",
    "WGAPIError",
]
