"""Road-type speed lookup.

Speeds are in km/h and lengths in km, so travel times are in hours.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_SPEED = 20

_SPEED_BY_ROAD_TYPE = {
    "unclassified": 50,
    "residential": 20,
    "tertiary": 50,
    "living_street": 50,
    "motorway_link": 130,
    "motorway": 130,
    "secondary": 50,
    "secondary_link": 50,
    "primary": 60,
    "trunk_link": 60,
    "trunk": 60,
}


@dataclass(frozen=True)
class SpeedTable:
    """Immutable mapping from road classification to speed.

    Unknown classifications resolve to ``default_speed``. Tables compare
    by content; the hash covers ``default_speed`` only.
    """

    speeds: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(_SPEED_BY_ROAD_TYPE)),
        hash=False,
    )
    default_speed: int = DEFAULT_SPEED

    def __post_init__(self) -> None:
        if self.default_speed <= 0:
            raise ValueError(f"Default speed must be positive, got {self.default_speed}")
        bad = {k: v for k, v in self.speeds.items() if v <= 0}
        if bad:
            raise ValueError(f"Speeds must be positive, got {bad}")
        if not isinstance(self.speeds, MappingProxyType):
            object.__setattr__(self, "speeds", MappingProxyType(dict(self.speeds)))

    def speed_for(self, road_type: str) -> int:
        return self.speeds.get(road_type, self.default_speed)

    def travel_time(self, length: float, road_type: str) -> float:
        """Time needed to cover ``length`` on a road of ``road_type``."""
        return length / self.speed_for(road_type)


DEFAULT_SPEED_TABLE = SpeedTable()
