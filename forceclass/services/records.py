"""
Model and chassis records.

A ModelRecord is one unit variant with the attributes force generation needs
but the catalog does not state directly: network capability, weapon-value
ratios, normalized weight class, Star League tech and inferred roles. It is
built in one pass over the unit's catalog summary. A ChassisRecord groups the
variants of one chassis under the least restrictive shared attributes.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Set

from forceclass.schemas.summary import UnitSummary
from forceclass.services.categories import UnitType, WeightClass
from forceclass.services.constraints import ConstraintStore, MissionRole
from forceclass.services.network import NetworkCapability
from forceclass.services.normalizer import compute_ratios, normalize_weight_class, weight_class_offset
from forceclass.services.scanner import EquipmentScanner

# Catalog codes
ARMOR_FERRO_FIBROUS = 1
STRUCTURE_ENDO_STEEL = 1

_SINGLE_LETTER = re.compile(r"[A-Z]")
_IS_AERO_OMNI = re.compile(r".*-O[A-Z]?\s?.*")
_IS_AERO_OMNI_PREFIXES = ("DARO-1", "MR-1S")


class EngineType(Enum):
    FUSION = "fusion"
    XL = "xl"
    XXL = "xxl"
    LIGHT = "light"
    COMPACT = "compact"
    ICE = "ice"
    FUEL_CELL = "fuel_cell"
    FISSION = "fission"
    NONE = "none"

    @classmethod
    def from_name(cls, engine_name: str) -> "EngineType":
        name = engine_name.lower()
        if not name:
            return cls.NONE
        # checked most specific first: "XXL" also contains "XL"
        for token, engine_type in (
            ("xxl", cls.XXL),
            ("xl", cls.XL),
            ("light", cls.LIGHT),
            ("compact", cls.COMPACT),
            ("fuel cell", cls.FUEL_CELL),
            ("fuel-cell", cls.FUEL_CELL),
            ("fission", cls.FISSION),
            ("ice", cls.ICE),
            ("i.c.e.", cls.ICE),
        ):
            if token in name:
                return engine_type
        return cls.FUSION


def chassis_key_for(chassis: str, unit_type: UnitType, omni: bool) -> str:
    key = f"{chassis}[{unit_type.label}]"
    return key + "Omni" if omni else key


def is_omni(summary: UnitSummary, unit_type: UnitType, unit_exists: Callable[[str], bool]) -> bool:
    """Whether the variant belongs to an omni chassis with swappable pods."""
    model = summary.model

    def prime_variant() -> bool:
        return model == "Prime" or (
            _SINGLE_LETTER.fullmatch(model) is not None
            and unit_exists(f"{summary.chassis} Prime")
        )

    if unit_type is UnitType.MEK:
        return summary.unit_sub_type == "Omni"
    if unit_type in (UnitType.TANK, UnitType.VTOL, UnitType.NAVAL):
        return prime_variant()
    if unit_type is UnitType.AERO:
        if summary.clan:
            return model == "(Sealed)" or prime_variant()
        return (
            _IS_AERO_OMNI.fullmatch(model) is not None
            or model.startswith(_IS_AERO_OMNI_PREFIXES)
        )
    if unit_type is UnitType.BATTLE_ARMOR:
        return True
    return False


def uses_star_league_construction(summary: UnitSummary) -> bool:
    return (
        EngineType.from_name(summary.engine_name) is EngineType.XL
        or ARMOR_FERRO_FIBROUS in summary.armor_types
        or summary.internals_type == STRUCTURE_ENDO_STEEL
    )


@dataclass
class ModelRecord:
    chassis: str
    model: str
    unit_type: UnitType
    chassis_key: str
    intro_year: int = 0
    omni: bool = False
    clan: bool = False
    movement_type: str = ""
    weight_class: WeightClass = WeightClass.LIGHT
    star_league: bool = False
    network_mask: NetworkCapability = NetworkCapability.NONE
    flak: float = 0.0
    long_range: float = 0.0
    ammo_requirement: float = 0.0
    speed: int = 0
    flamer: bool = False
    ap_weapons: bool = False
    constraints: ConstraintStore = field(default_factory=ConstraintStore, repr=False)

    @property
    def key(self) -> str:
        return f"{self.chassis} {self.model}".strip()

    @property
    def min_weight_class(self) -> WeightClass:
        """Lightest weight class on this unit type's scale."""
        return weight_class_offset(self.unit_type)

    @property
    def roles(self) -> Set[MissionRole]:
        return self.constraints.roles

    @property
    def deployed_with(self) -> List[str]:
        return self.constraints.deployed_with

    @property
    def required_units(self) -> List[str]:
        return self.constraints.required_units

    @property
    def excluded_factions(self) -> Set[str]:
        return self.constraints.excluded_factions

    def faction_is_excluded(self, faction: str, subfaction: Optional[str] = None) -> bool:
        return self.constraints.faction_is_excluded(faction, subfaction)

    def create_chassis_record(self) -> "ChassisRecord":
        chassis_record = ChassisRecord(
            chassis=self.chassis,
            chassis_key=self.chassis_key,
            unit_type=self.unit_type,
            intro_year=self.intro_year,
            omni=self.omni,
            clan=self.clan,
            movement_type=self.movement_type,
        )
        chassis_record.add_model(self)
        return chassis_record

    @classmethod
    def from_summary(
        cls,
        summary: UnitSummary,
        scanner: EquipmentScanner,
        unit_exists: Callable[[str], bool] = lambda name: False,
    ) -> "ModelRecord":
        """
        Classify a unit summary.

        Args:
            summary: catalog summary of the variant
            scanner: equipment scanner bound to the equipment taxonomy
            unit_exists: catalog membership test by unit name, used to find
                the "Prime" configuration of omni vehicles

        Raises:
            UnknownUnitTypeError: the summary's unit type is not a known category
        """
        unit_type = UnitType.parse(summary.unit_type)
        omni = is_omni(summary, unit_type, unit_exists)

        scan = scanner.scan(unit_type, summary.equipment)
        ratios = compute_ratios(scan, unit_type)

        lostech = scan.advanced_tech or uses_star_league_construction(summary)

        record = cls(
            chassis=summary.chassis,
            model=summary.model,
            unit_type=unit_type,
            chassis_key=chassis_key_for(summary.chassis, unit_type, omni),
            intro_year=summary.year,
            omni=omni,
            clan=summary.clan,
            movement_type=summary.movement_mode,
            weight_class=normalize_weight_class(summary.weight_class, summary.tons),
            star_league=lostech and not summary.clan,
            network_mask=scan.network_mask,
            flak=ratios.flak,
            long_range=ratios.long_range,
            ammo_requirement=ratios.ammo_requirement,
            speed=summary.walk_mp + (1 if summary.jump_mp > 0 else 0),
            flamer=scan.flamer,
            ap_weapons=scan.ap_weapons,
        )
        record.constraints.add_inferred_roles(scan.roles)
        return record


@dataclass
class ChassisRecord:
    chassis: str
    chassis_key: str
    unit_type: UnitType
    intro_year: int = 0
    omni: bool = False
    clan: bool = False
    movement_type: str = ""
    models: List[ModelRecord] = field(default_factory=list, repr=False)

    def add_model(self, record: ModelRecord) -> None:
        self.models.append(record)
        if record.intro_year < self.intro_year:
            self.intro_year = record.intro_year
