# garden/store.py
"""
GardenStore
-----------
In-memory stand-in for the hosted database: plant types, user profiles (last
known weather and points) and planted rows. Seeds can be loaded from YAML.

Garden actions:
    plant_seed  - spend points to put a seed in an empty slot
    harvest     - stamp harvest metadata on a mature plant and pay out points
"""

import itertools
import logging
import os
from typing import Dict

import yaml

from garden.growth import MATURE_STAGE, PLANTED_STAGE, GrowthCalculator
from garden.models import GARDEN_SLOTS, PlantedInstance, PlantType

logger = logging.getLogger(__name__)

DEFAULT_WEATHER = 'clear'


class GardenActionError(RuntimeError):
    """A garden action the rules do not allow (occupied slot, unripe harvest, ...)."""


class GardenStore:
    def __init__(self, plant_types=None, cfg=None, calculator=None):
        cfg = cfg or {}
        self.starting_points = cfg.get('starting_points', 100)
        self.default_weather = cfg.get('default_weather', DEFAULT_WEATHER)
        self.calculator = calculator or GrowthCalculator()

        self.plant_types: Dict[str, PlantType] = {pt.id: pt for pt in plant_types or []}
        self.profiles: Dict[str, dict] = {}
        self.planted: Dict[str, PlantedInstance] = {}
        self._ids = itertools.count(1)

    # Loading ----------------------------------------------------------------
    @classmethod
    def from_seed(cls, seed, plant_rows, cfg=None, calculator=None):
        """seed: dict with optional 'profiles' and 'planted' lists of rows."""
        store = cls([PlantType.from_row(r) for r in plant_rows], cfg=cfg, calculator=calculator)
        for profile in seed.get('profiles', []) or []:
            store.add_profile(profile['id'], profile.get('weather_condition'), profile.get('points'))
        for row in seed.get('planted', []) or []:
            store.add_instance(PlantedInstance.from_row(row))
        logger.info("Loaded %d plant types, %d profiles, %d planted",
                    len(store.plant_types), len(store.profiles), len(store.planted))
        return store

    @classmethod
    def from_yaml(cls, path, plant_rows, cfg=None, calculator=None):
        if not os.path.exists(path):
            raise FileNotFoundError(f"Garden seed not found: {path}")
        with open(path, 'r') as f:
            seed = yaml.safe_load(f) or {}
        return cls.from_seed(seed, plant_rows, cfg=cfg, calculator=calculator)

    # Profiles ---------------------------------------------------------------
    def add_profile(self, user_id, weather_condition=None, points=None):
        self.profiles[user_id] = {
            'weather_condition': weather_condition,
            'points': self.starting_points if points is None else int(points),
        }
        return self.profiles[user_id]

    def _profile(self, user_id):
        if user_id not in self.profiles:
            raise GardenActionError(f"Unknown user {user_id}")
        return self.profiles[user_id]

    def weather_for(self, owner_id):
        profile = self.profiles.get(owner_id) or {}
        return profile.get('weather_condition') or self.default_weather

    def set_weather(self, owner_id, condition):
        self._profile(owner_id)['weather_condition'] = condition

    def points_for(self, user_id):
        return self._profile(user_id)['points']

    # Planted rows -----------------------------------------------------------
    def add_instance(self, instance):
        self.planted[instance.id] = instance
        return instance

    def get_instance(self, instance_id):
        if instance_id not in self.planted:
            raise GardenActionError(f"Unknown planted plant {instance_id}")
        return self.planted[instance_id]

    def unharvested(self, owner_id=None, mature=None):
        rows = [p for p in self.planted.values() if not p.is_harvested]
        if owner_id is not None:
            rows = [p for p in rows if p.garden_owner_id == owner_id]
        if mature is not None:
            rows = [p for p in rows if p.is_mature == mature]
        return sorted(rows, key=lambda p: p.planted_at, reverse=True)

    def garden_for(self, owner_id):
        """slot -> PlantedInstance for the owner's unharvested plants."""
        return {p.slot: p for p in self.unharvested(owner_id)}

    def update_growth(self, instance_id, stage, is_mature):
        instance = self.get_instance(instance_id)
        instance.current_stage = stage
        instance.is_mature = is_mature
        return instance

    # Actions ----------------------------------------------------------------
    def plant_seed(self, owner_id, slot, plant_id, planter_id, now=None):
        if not 0 <= slot < GARDEN_SLOTS:
            raise GardenActionError(f"Slot {slot} outside [0, {GARDEN_SLOTS - 1}]")
        if slot in self.garden_for(owner_id):
            raise GardenActionError("Slot Occupied")
        plant_type = self.plant_types.get(plant_id)
        if plant_type is None:
            raise GardenActionError(f"Unknown plant {plant_id}")

        planter = self._profile(planter_id)
        if planter['points'] < plant_type.planting_cost:
            raise GardenActionError(
                f"{planter_id} has {planter['points']} points, {plant_type.name} costs {plant_type.planting_cost}")
        planter['points'] -= plant_type.planting_cost

        now = now if now is not None else self.calculator.clock()
        instance = PlantedInstance(
            id=str(next(self._ids)),
            garden_owner_id=owner_id,
            planter_id=planter_id,
            plant_id=plant_id,
            planted_at=now,
            current_stage=PLANTED_STAGE,
            is_mature=False,
            slot=slot,
            created_at=now,
        )
        # ids may collide with seeded rows
        while instance.id in self.planted:
            instance.id = str(next(self._ids))
        self.add_instance(instance)
        logger.info("%s planted %s in %s's slot %d", planter_id, plant_type.name, owner_id, slot)
        return instance

    def harvest(self, instance_id, harvester_id, now=None):
        instance = self.get_instance(instance_id)
        if instance.is_harvested:
            raise GardenActionError(f"Planted plant {instance_id} was already harvested")
        plant_type = self.plant_types.get(instance.plant_id)
        if plant_type is None:
            raise GardenActionError(f"Unknown plant {instance.plant_id}")
        now = now if now is not None else self.calculator.clock()

        weather = self.weather_for(instance.garden_owner_id)
        if not self.calculator.is_mature(instance.planted_at, plant_type, weather, now):
            raise GardenActionError(f"{plant_type.name} in slot {instance.slot} is not ready to harvest")

        harvester = self._profile(harvester_id)
        harvester['points'] += plant_type.harvest_points
        instance.current_stage = MATURE_STAGE
        instance.is_mature = True
        instance.harvested_at = now
        instance.harvester_id = harvester_id
        logger.info("%s harvested %s from %s's slot %d (+%d points)",
                    harvester_id, plant_type.name, instance.garden_owner_id, instance.slot,
                    plant_type.harvest_points)
        return instance

