"""
Equipment taxonomy: static descriptors looked up by equipment name.

The taxonomy is pure data supplied from outside (a JSON export of the
equipment tables). Classification only needs a handful of facts per item:
whether it is a weapon, its battle value, its long range, whether it uses
ammunition, which weapon families it belongs to and when it was available.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EquipmentKind(str, Enum):
    WEAPON = "weapon"
    AMMO = "ammo"
    MISC = "misc"


class WeaponFamily(str, Enum):
    """Weapon families the classifier has rules for."""
    LBX_AUTOCANNON = "lbx_autocannon"
    ARTILLERY = "artillery"
    HYPER_ASSAULT_GAUSS = "hyper_assault_gauss"
    SILVER_BULLET_GAUSS = "silver_bullet_gauss"
    FLAMER = "flamer"
    MACHINE_GUN = "machine_gun"
    B_POD = "b_pod"
    TAG = "tag"
    C3_MASTER = "c3_master"
    C3_BOOSTED_MASTER = "c3_boosted_master"


# Families whose ammunition can be fired as flak
FLAK_FAMILIES = frozenset({
    WeaponFamily.LBX_AUTOCANNON,
    WeaponFamily.ARTILLERY,
    WeaponFamily.HYPER_ASSAULT_GAUSS,
    WeaponFamily.SILVER_BULLET_GAUSS,
})

ANTI_PERSONNEL_FAMILIES = frozenset({
    WeaponFamily.MACHINE_GUN,
    WeaponFamily.B_POD,
})


@dataclass(frozen=True)
class EquipmentDescriptor:
    internal_name: str
    kind: EquipmentKind
    bv: float = 0.0
    long_range: int = 0
    ammo_type: Optional[str] = None
    families: FrozenSet[WeaponFamily] = frozenset()
    intro_year: Optional[int] = None
    extinct_year: Optional[int] = None
    reintro_year: Optional[int] = None
    lookup_names: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_weapon(self) -> bool:
        return self.kind is EquipmentKind.WEAPON

    @property
    def uses_ammo(self) -> bool:
        return self.ammo_type is not None

    def in_family(self, *families: WeaponFamily) -> bool:
        return any(f in self.families for f in families)

    @property
    def has_era_data(self) -> bool:
        return self.intro_year is not None

    def is_available_in(self, year: int) -> bool:
        """True when the item is in production in the given year."""
        if self.intro_year is None or self.intro_year > year:
            return False
        if self.extinct_year is not None and self.extinct_year <= year:
            return self.reintro_year is not None and self.reintro_year <= year
        return True


class EquipmentSpec(BaseModel):
    """One row of a taxonomy export."""
    internal_name: str
    kind: EquipmentKind
    bv: float = Field(0.0, ge=0)
    long_range: int = Field(0, ge=0)
    ammo_type: Optional[str] = None
    families: List[WeaponFamily] = Field(default_factory=list)
    intro_year: Optional[int] = None
    extinct_year: Optional[int] = None
    reintro_year: Optional[int] = None
    lookup_names: List[str] = Field(default_factory=list)

    def to_descriptor(self) -> EquipmentDescriptor:
        return EquipmentDescriptor(
            internal_name=self.internal_name,
            kind=self.kind,
            bv=self.bv,
            long_range=self.long_range,
            ammo_type=self.ammo_type,
            families=frozenset(self.families),
            intro_year=self.intro_year,
            extinct_year=self.extinct_year,
            reintro_year=self.reintro_year,
            lookup_names=frozenset(self.lookup_names),
        )


class EquipmentTaxonomy:
    """Case-insensitive registry of equipment descriptors by internal or lookup name."""

    def __init__(self, descriptors: Iterable[EquipmentDescriptor] = ()):
        self._by_name: Dict[str, EquipmentDescriptor] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    def add(self, descriptor: EquipmentDescriptor) -> None:
        for name in (descriptor.internal_name, *descriptor.lookup_names):
            self._by_name[name.lower()] = descriptor

    def get(self, name: str) -> Optional[EquipmentDescriptor]:
        return self._by_name.get(name.lower())

    def __len__(self) -> int:
        return len({d.internal_name for d in self._by_name.values()})

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "EquipmentTaxonomy":
        return cls(EquipmentSpec(**row).to_descriptor() for row in records)

    @classmethod
    def from_json_file(cls, path: str) -> "EquipmentTaxonomy":
        with open(Path(path), "r", encoding="utf-8") as f:
            rows = json.load(f)
        taxonomy = cls.from_records(rows)
        logger.info(f"Loaded {len(taxonomy)} equipment descriptors from {path}")
        return taxonomy
