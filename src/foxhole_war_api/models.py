"""
Response models for all War API endpoints.

Pydantic models mirroring the JSON bodies served by the Foxhole War API
(https://github.com/clapfoot/warapi). Wire names are camelCase and are
mapped onto snake_case attributes. Every model is frozen and decoded in
strict mode: unknown enum tags, missing fields and type mismatches are
errors, never best-effort values.
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Annotated, Any, Iterator, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    GetCoreSchemaHandler,
    RootModel,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel
from pydantic_core import CoreSchema, core_schema

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

U8 = Annotated[int, Field(ge=0, le=0xFF)]
U16 = Annotated[int, Field(ge=0, le=0xFFFF)]
U32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]
U64 = Annotated[int, Field(ge=0, le=0xFFFFFFFFFFFFFFFF)]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_millis(millis: Optional[int]) -> Optional[datetime]:
    if millis is None:
        return None
    return EPOCH + timedelta(milliseconds=millis)


class TeamId(str, Enum):
    """Owning team of a map item, or winner of a war."""

    NONE = "NONE"
    WARDENS = "WARDENS"
    COLONIALS = "COLONIALS"


class MapMarkerType(str, Enum):
    """Whether a map label is a major or minor marker."""

    MAJOR = "Major"
    MINOR = "Minor"


class IconType(IntEnum):
    """Icon type of a map item, keyed by the integer tag the API sends."""

    STATIC_BASE = 5
    STATIC_BASE_2 = 6
    STATIC_BASE_3 = 7
    FORWARD_BASE_1 = 8
    FORWARD_BASE_2 = 9
    FORWARD_BASE_3 = 10
    HOSPITAL = 11
    VEHICLE_FACTORY = 12
    ARMORY = 13
    SUPPLY_STATION = 14
    WORKSHOP = 15
    MANUFACTURING_PLANT = 16
    REFINERY = 17
    SHIPYARD = 18
    TECH_CENTER = 19
    SALVAGE_FIELD = 20
    COMPONENT_FIELD = 21
    FUEL_FIELD = 22
    SULFUR_FIELD = 23
    WORLD_MAP_TENT = 24
    TRAVEL_TENT = 25
    TRAINING_AREA = 26
    SPECIAL_BASE = 27
    OBSERVATION_TOWER = 28
    FORT = 29
    TROOP_SHIP = 30
    SULFUR_MINE = 32
    STORAGE_FACILITY = 33
    FACTORY = 34
    GARRISON_STATION = 35
    AMMO_FACTORY = 36
    ROCKET_SITE = 37
    SALVAGE_MINE = 38
    CONSTRUCTION_YARD = 39
    COMPONENT_MINE = 40
    OIL_WELL = 41
    RELIC_BASE_1 = 45
    RELIC_BASE_2 = 46
    RELIC_BASE_3 = 47
    MASS_PRODUCTION_FACTORY = 51
    SEAPORT = 52
    COASTAL_GUN = 53
    SOUL_FACTORY = 54
    TOWN_BASE_1 = 56
    TOWN_BASE_2 = 57
    TOWN_BASE_3 = 58
    STORM_CANNON = 59
    INTEL_CENTER = 60

    @classmethod
    def from_tag(cls, tag: Any) -> "IconType":
        """Look up the variant for an integer tag.

        Only exact integers are tags: floats such as ``20.0``, booleans and
        strings are rejected along with integers that have no variant.
        """
        if isinstance(tag, cls):
            return tag
        if type(tag) is not int:
            raise ValueError(f"icon type tag must be an integer, got {type(tag).__name__}")
        return cls(tag)

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.from_tag,
            serialization=core_schema.plain_serializer_function_ser_schema(int, when_used="json"),
        )


class WireModel(BaseModel):
    """Base for models decoded from camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        strict=True,
    )


class WarData(WireModel):
    """
    Response for the ``/worldconquest/war`` endpoint.

    Status of the current war on a shard. ``winner`` is ``TeamId.NONE``
    while the war is ongoing, and the two optional timestamps stay unset
    until the corresponding phase begins. Timestamps are milliseconds since
    the Unix epoch.
    """

    war_id: str = Field(..., description="Opaque war identifier")
    war_number: U32 = Field(..., description="War sequence number")
    winner: TeamId = Field(..., description="Winning team, NONE while ongoing")
    conquest_start_time: U64 = Field(..., description="Conquest start (ms epoch)")
    conquest_end_time: Optional[U64] = Field(None, description="Conquest end (ms epoch)")
    resistance_start_time: Optional[U64] = Field(
        None, description="Resistance phase start (ms epoch)"
    )
    required_victory_towns: U8 = Field(..., description="Victory towns needed to win")

    @property
    def is_resolved(self) -> bool:
        """True once the conquest phase has ended."""
        return self.conquest_end_time is not None

    @property
    def conquest_started_at(self) -> datetime:
        return _from_millis(self.conquest_start_time)

    @property
    def conquest_ended_at(self) -> Optional[datetime]:
        return _from_millis(self.conquest_end_time)

    @property
    def resistance_started_at(self) -> Optional[datetime]:
        return _from_millis(self.resistance_start_time)


class MapNameList(RootModel[tuple[str, ...]]):
    """
    Response for the ``/worldconquest/maps`` endpoint.

    Map identifiers in server order. Duplicates are not filtered.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    @property
    def maps(self) -> tuple[str, ...]:
        return self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> str:
        return self.root[index]

    def __contains__(self, name: object) -> bool:
        return name in self.root


class MapItem(WireModel):
    """A single structure or resource node on a map hex.

    ``x`` and ``y`` are normalized positions within the hex. ``flags`` is
    the raw bit field sent by the server and is not interpreted.
    """

    team_id: TeamId
    icon_type: IconType
    x: float
    y: float
    flags: U16


class MapTextItem(WireModel):
    """A map label: text, position and marker size."""

    text: str
    x: float
    y: float
    map_marker_type: MapMarkerType


class MapData(WireModel):
    """
    Response for the ``/worldconquest/maps/{map}/static`` and
    ``/worldconquest/maps/{map}/dynamic/public`` endpoints.

    The server bumps ``version`` whenever the content changes. Comparing
    versions across fetches is left to the caller.
    """

    region_id: U16
    scorched_victory_towns: U16
    map_items: tuple[MapItem, ...]
    map_text_items: tuple[MapTextItem, ...]
    last_updated: U64
    version: U16

    @property
    def last_updated_at(self) -> datetime:
        return _from_millis(self.last_updated)

    def items_for_team(self, team: TeamId) -> tuple[MapItem, ...]:
        """Map items owned by ``team``."""
        return tuple(item for item in self.map_items if item.team_id == team)

    def items_of_type(self, icon_type: IconType) -> tuple[MapItem, ...]:
        """Map items with the given icon type."""
        return tuple(item for item in self.map_items if item.icon_type == icon_type)


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def decode(target: type[T], payload: str | bytes, url: Optional[str] = None) -> T:
    """Decode a JSON document into ``target`` in strict mode.

    Args:
        target: Model or enum type to decode into
        payload: Raw JSON text
        url: Request URL, recorded on the error for context

    Returns:
        Decoded value of type ``target``

    Raises:
        DecodeError: If the payload is not valid JSON for ``target``
    """
    try:
        return _adapter(target).validate_json(payload, strict=True)
    except ValidationError as e:
        name = getattr(target, "__name__", repr(target))
        logger.error(f"Failed to decode {name} from {url or 'payload'}: {e}")
        raise DecodeError(f"Could not decode {name}: {e}", url=url) from e
