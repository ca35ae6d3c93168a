# garden/models.py
"""
Garden data model
-----------------
PlantType is read-only reference data (seeded externally). PlantedInstance is
one seed in one garden slot; its `current_stage` / `is_mature` fields are a
cached projection of the growth calculator and may lag behind it until the
refresh job runs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from garden.clock import parse_timestamp
from garden.weather import WEATHER_CATEGORIES

MIN_STAGE = 1
MAX_STAGE = 5
GARDEN_SLOTS = 3


class GardenDataError(ValueError):
    """A persistence row that cannot be turned into a model."""


@dataclass(frozen=True)
class PlantType:
    """Plant metadata shared by every seed of this kind."""
    id: str
    name: str
    growth_time_hours: float
    weather_bonus: Mapping[str, float] = field(default_factory=dict)
    harvest_points: int = 0
    planting_cost: int = 0
    image_path: str = ''
    created_at: Optional[datetime] = None

    def __post_init__(self):
        # bonus tables are shared reference data
        object.__setattr__(self, 'weather_bonus', MappingProxyType(dict(self.weather_bonus or {})))

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'PlantType':
        try:
            return cls(
                id=str(row['id']),
                name=row['name'],
                growth_time_hours=float(row['growth_time_hours']),
                weather_bonus={k: float(v) for k, v in (row.get('weather_bonus') or {}).items()},
                harvest_points=int(row.get('harvest_points', 0)),
                planting_cost=int(row.get('planting_cost', 0)),
                image_path=row.get('image_path', ''),
                created_at=parse_timestamp(row.get('created_at')),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GardenDataError(f"Invalid plant row {row!r}: {e}") from e


@dataclass
class PlantedInstance:
    id: str
    garden_owner_id: str
    planter_id: str
    plant_id: str
    planted_at: datetime
    current_stage: int = 2
    is_mature: bool = False
    slot: int = 0
    harvested_at: Optional[datetime] = None
    harvester_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not MIN_STAGE <= self.current_stage <= MAX_STAGE:
            raise GardenDataError(f"stage {self.current_stage} outside [{MIN_STAGE}, {MAX_STAGE}]")
        if not 0 <= self.slot < GARDEN_SLOTS:
            raise GardenDataError(f"slot {self.slot} outside [0, {GARDEN_SLOTS - 1}]")

    @property
    def is_harvested(self):
        return self.harvested_at is not None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'PlantedInstance':
        try:
            return cls(
                id=str(row['id']),
                garden_owner_id=str(row['garden_owner_id']),
                planter_id=str(row['planter_id']),
                plant_id=str(row['plant_id']),
                planted_at=parse_timestamp(row['planted_at']),
                current_stage=int(row.get('current_stage', 2)),
                is_mature=bool(row.get('is_mature', False)),
                slot=int(row.get('slot', 0)),
                harvested_at=parse_timestamp(row.get('harvested_at')),
                harvester_id=row.get('harvester_id'),
                created_at=parse_timestamp(row.get('created_at')),
            )
        except GardenDataError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise GardenDataError(f"Invalid planted row {row!r}: {e}") from e


def validate_plant_type(plant_type):
    return bool(
        plant_type.id
        and plant_type.name
        and plant_type.growth_time_hours > 0
        and plant_type.weather_bonus
        and all(k in plant_type.weather_bonus for k in WEATHER_CATEGORIES)
        and plant_type.image_path
    )


def validate_planted_instance(instance):
    return bool(
        instance.id
        and instance.garden_owner_id
        and instance.planter_id
        and instance.plant_id
        and MIN_STAGE <= instance.current_stage <= MAX_STAGE
    )
