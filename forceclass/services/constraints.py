"""
Mission roles, deployment affinities and faction exclusions of a unit variant.

These are declared in faction data and written in a second phase, after the
records have been built from the unit catalog. Roles and exclusions are
replaced wholesale by each update; deployment tokens accumulate, since the
faction data may list them across several rows.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Set

from forceclass.services.exceptions import MalformedEncodingError

logger = logging.getLogger(__name__)

REQUIRED_PREFIX = "req:"


class MissionRole(str, Enum):
    RECON = "recon"
    RAIDER = "raider"
    INCENDIARY = "incendiary"
    EW_SUPPORT = "ew_support"
    ARTILLERY = "artillery"
    MISSILE_ARTILLERY = "missile_artillery"
    MIXED_ARTILLERY = "mixed_artillery"
    FIRE_SUPPORT = "fire_support"
    SR_FIRE_SUPPORT = "sr_fire_support"
    INF_SUPPORT = "inf_support"
    ANTI_AIRCRAFT = "anti_aircraft"
    ANTI_INFANTRY = "anti_infantry"
    APC = "apc"
    SPECOPS = "specops"
    CAVALRY = "cavalry"
    COMMAND = "command"
    URBAN = "urban"
    SPOTTER = "spotter"
    TRAINING = "training"
    CIVILIAN = "civilian"
    FIELD_GUN = "field_gun"
    ENGINEER = "engineer"
    MECHANIZED_BA = "mechanized_ba"
    MAG_CLAMP = "mag_clamp"
    MARINE = "marine"
    MOUNTAINEER = "mountaineer"
    PARATROOPER = "paratrooper"
    XCT = "xct"
    ASSAULT = "assault"
    INTERCEPTOR = "interceptor"
    GROUND_SUPPORT = "ground_support"
    ESCORT = "escort"
    BOMBER = "bomber"
    CARGO = "cargo"
    SUPPORT = "support"
    TUG = "tug"
    POCKET_WARSHIP = "pocket_warship"

    @classmethod
    def parse(cls, name: str) -> Optional["MissionRole"]:
        """Role for a data-file name, or None. Case, spaces and hyphens are ignored."""
        key = name.strip().lower().replace(" ", "_").replace("-", "_")
        key = _ROLE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


# Spellings found in older faction data
_ROLE_ALIASES = {
    "incindiary": "incendiary",
    "ew": "ew_support",
    "spec_ops": "specops",
    "short_range_fire_support": "sr_fire_support",
    "infantry_support": "inf_support",
    "aa": "anti_aircraft",
}


def split_tokens(encoding: Optional[str]) -> List[str]:
    """Comma-separated tokens, trimmed, empty tokens dropped."""
    if not encoding:
        return []
    return [token.strip() for token in encoding.split(",") if token.strip()]


def parse_roles(encoding: str, strict: bool = False) -> Set[MissionRole]:
    roles = set()
    for token in split_tokens(encoding):
        role = MissionRole.parse(token)
        if role is None:
            if strict:
                raise MalformedEncodingError(f"Unknown mission role: {token!r}")
            logger.warning(f"Skipping unknown mission role {token!r}")
            continue
        roles.add(role)
    return roles


def faction_key(faction: str, subfaction: Optional[str] = None) -> str:
    return faction if subfaction is None else f"{faction}.{subfaction}"


class ConstraintStore:
    """Roles, deployment affinities, required units and faction exclusions of one record."""

    def __init__(self):
        self.roles: Set[MissionRole] = set()
        self.deployed_with: List[str] = []
        self.required_units: List[str] = []
        self.excluded_factions: Set[str] = set()

    def replace_roles(self, encoding: str, strict: bool = False) -> None:
        # a strict failure leaves the previous roles in place
        self.roles = parse_roles(encoding, strict=strict)

    def add_inferred_roles(self, roles: Iterable[MissionRole]) -> None:
        self.roles.update(roles)

    def append_deployment(self, encoding: str) -> None:
        for unit in split_tokens(encoding):
            if unit.startswith(REQUIRED_PREFIX):
                self.required_units.append(unit[len(REQUIRED_PREFIX):])
            else:
                self.deployed_with.append(unit)

    def replace_excluded_factions(self, encoding: str) -> None:
        self.excluded_factions = set(split_tokens(encoding))

    def is_excluded(self, key: str) -> bool:
        return key in self.excluded_factions

    def faction_is_excluded(self, faction: str, subfaction: Optional[str] = None) -> bool:
        return self.is_excluded(faction_key(faction, subfaction))
