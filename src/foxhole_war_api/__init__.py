"""Foxhole War API client.

Provides:
- WarApiClient / AsyncWarApiClient: Typed clients for the war, map list and
  map data endpoints
- ClientConfig / Shard: Client configuration and shard selection
- Response models: WarData, MapNameList, MapData, MapItem, MapTextItem
- Errors: WarApiError, TransportError, DecodeError
"""

from .client import AsyncWarApiClient, WarApiClient
from .config import ClientConfig, Shard, load_client_config
from .exceptions import DecodeError, TransportError, WarApiError
from .models import (
    IconType,
    MapData,
    MapItem,
    MapMarkerType,
    MapNameList,
    MapTextItem,
    TeamId,
    WarData,
    decode,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncWarApiClient",
    "WarApiClient",
    "ClientConfig",
    "Shard",
    "load_client_config",
    "DecodeError",
    "TransportError",
    "WarApiError",
    "IconType",
    "MapData",
    "MapItem",
    "MapMarkerType",
    "MapNameList",
    "MapTextItem",
    "TeamId",
    "WarData",
    "decode",
]
