"""
Pytest configuration and shared fixtures for the forceclass test suite.

This module provides:
- An equipment taxonomy covering every classification rule
- A unit summary factory
- Catalog and repository fixtures (in-memory SQLite for repository tests)
- A counting fake entity loader for quad resolution
"""

import asyncio
import json
from typing import AsyncGenerator, Dict, Optional

import pytest
import pytest_asyncio

from forceclass.schemas.summary import EquipmentEntry, UnitSummary
from forceclass.services.catalog import ClassificationCatalog
from forceclass.services.categories import UnitType, WeightClass
from forceclass.services.equipment import EquipmentTaxonomy
from forceclass.services.exceptions import EntityLoadError
from forceclass.services.quad_resolver import EntityDefinition, QuadChassisResolver
from forceclass.services.repository import UnitRepository
from forceclass.services.scanner import EquipmentScanner


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

EQUIPMENT_ROWS = [
    {"internal_name": "ISMediumLaser", "kind": "weapon", "bv": 46, "long_range": 9,
     "intro_year": 2300, "lookup_names": ["Medium Laser", "IS Medium Laser"]},
    {"internal_name": "ISLRM20", "kind": "weapon", "bv": 181, "long_range": 21,
     "ammo_type": "LRM", "intro_year": 2295, "lookup_names": ["LRM 20"]},
    {"internal_name": "ISLRM10", "kind": "weapon", "bv": 90, "long_range": 21,
     "ammo_type": "LRM", "intro_year": 2295, "lookup_names": ["LRM 10"]},
    {"internal_name": "ISAC5", "kind": "weapon", "bv": 70, "long_range": 18,
     "ammo_type": "AC", "intro_year": 2250, "lookup_names": ["Autocannon/5"]},
    {"internal_name": "ISLBXAC10", "kind": "weapon", "bv": 148, "long_range": 18,
     "ammo_type": "AC_LBX", "families": ["lbx_autocannon"], "intro_year": 2595,
     "extinct_year": 2840, "reintro_year": 3035, "lookup_names": ["LB 10-X AC"]},
    {"internal_name": "ISArrowIV", "kind": "weapon", "bv": 240, "long_range": 136,
     "ammo_type": "ARROW_IV", "families": ["artillery"], "intro_year": 2600,
     "lookup_names": ["Arrow IV"]},
    {"internal_name": "ISFlamer", "kind": "weapon", "bv": 6, "long_range": 3,
     "families": ["flamer"], "intro_year": 2025, "lookup_names": ["Flamer"]},
    {"internal_name": "ISMachine Gun", "kind": "weapon", "bv": 5, "long_range": 3,
     "ammo_type": "MG", "families": ["machine_gun"], "intro_year": 1950,
     "lookup_names": ["Machine Gun"]},
    {"internal_name": "ISTAG", "kind": "weapon", "bv": 0, "long_range": 15,
     "families": ["tag"], "intro_year": 2600, "lookup_names": ["TAG"]},
    {"internal_name": "ISC3MasterUnit", "kind": "weapon", "bv": 0, "long_range": 15,
     "families": ["c3_master", "tag"], "intro_year": 3050,
     "lookup_names": ["C3 Master Computer"]},
    {"internal_name": "ISC3MasterBoostedSystemUnit", "kind": "weapon", "bv": 0,
     "long_range": 15, "families": ["c3_boosted_master", "tag"], "intro_year": 3073},
    {"internal_name": "ISC3SlaveUnit", "kind": "misc", "intro_year": 3050,
     "lookup_names": ["C3 Slave"]},
    {"internal_name": "ISNC3Unit", "kind": "misc", "intro_year": 2795},
    {"internal_name": "BattleArmorC3", "kind": "misc", "intro_year": 3073},
    {"internal_name": "ISC3BoostedSystemSlaveUnit", "kind": "misc", "intro_year": 3073},
    {"internal_name": "ISC3iUnit", "kind": "misc", "intro_year": 3062},
    {"internal_name": "NovaCEWS", "kind": "misc", "intro_year": 3065},
    {"internal_name": "Heat Sink", "kind": "misc", "intro_year": 2022},
    {"internal_name": "ISLRM20 Ammo", "kind": "ammo", "intro_year": 2295},
]


@pytest.fixture
def taxonomy() -> EquipmentTaxonomy:
    return EquipmentTaxonomy.from_records(EQUIPMENT_ROWS)


@pytest.fixture
def taxonomy_file(tmp_path) -> str:
    path = tmp_path / "equipment.json"
    path.write_text(json.dumps(EQUIPMENT_ROWS))
    return str(path)


@pytest.fixture
def scanner(taxonomy) -> EquipmentScanner:
    return EquipmentScanner(taxonomy)


def make_summary(chassis: str = "Griffin", model: str = "GRF-1N", **overrides) -> UnitSummary:
    """Unit summary with sensible inner-sphere mek defaults."""
    equipment = overrides.pop("equipment", [("LRM 10", 1)])
    data = dict(
        chassis=chassis,
        model=model,
        unit_type="Mek",
        unit_sub_type="Standard",
        year=2492,
        weight_class=int(WeightClass.MEDIUM),
        tons=55,
        engine_name="275 Fusion Engine",
        armor_types=[0],
        internals_type=0,
        clan=False,
        walk_mp=5,
        jump_mp=5,
        movement_mode="Biped",
        equipment=[EquipmentEntry(name=name, quantity=qty) for name, qty in equipment],
    )
    data.update(overrides)
    return UnitSummary(**data)


@pytest.fixture
def summary_factory():
    return make_summary


class FakeEntityLoader:
    """EntityLoader double counting calls per unit key."""

    def __init__(self, entities: Optional[Dict[str, EntityDefinition]] = None, delay: float = 0.0):
        self.entities = entities or {}
        self.delay = delay
        self.calls = []
        self.failures = 0

    async def load_entity(self, unit_key: str) -> Optional[EntityDefinition]:
        self.calls.append(unit_key)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.failures > 0:
            self.failures -= 1
            raise EntityLoadError(f"{unit_key}: file unreadable")
        return self.entities.get(unit_key)


@pytest.fixture
def quad_entities() -> Dict[str, EntityDefinition]:
    return {
        "Scorpion SCP-1N": EntityDefinition("Scorpion SCP-1N", UnitType.MEK, motive_layout="quad"),
        "Griffin GRF-1N": EntityDefinition("Griffin GRF-1N", UnitType.MEK, motive_layout="biped"),
        "Kanazuchi (Standard)": EntityDefinition(
            "Kanazuchi (Standard)", UnitType.BATTLE_ARMOR, chassis_type="quad"
        ),
    }


@pytest.fixture
def entity_loader(quad_entities) -> FakeEntityLoader:
    return FakeEntityLoader(quad_entities)


@pytest.fixture
def catalog(scanner, entity_loader) -> ClassificationCatalog:
    resolver = QuadChassisResolver(entity_loader, timeout=1.0, retry_interval=0.0)
    catalog = ClassificationCatalog(scanner, resolver=resolver)
    catalog.add_summaries([
        make_summary("Griffin", "GRF-1N", equipment=[("LRM 10", 1), ("Medium Laser", 2)]),
        make_summary("Griffin", "GRF-1S", year=3025, equipment=[("LRM 20", 1), ("Medium Laser", 2)]),
        make_summary("Scorpion", "SCP-1N", year=2655, walk_mp=4, jump_mp=0,
                     equipment=[("Autocannon/5", 1), ("Machine Gun", 2)]),
        make_summary("Scorpion", "SCP-1O", year=3060, walk_mp=4, jump_mp=0,
                     equipment=[("C3 Master Computer", 1), ("Medium Laser", 2)]),
    ])
    return catalog


@pytest_asyncio.fixture
async def repository() -> AsyncGenerator[UnitRepository, None]:
    """Open repository on an in-memory SQLite database with the schema created."""
    repo = UnitRepository(TEST_DATABASE_URL)
    await repo.open(create_schema=True)
    yield repo
    await repo.close()
