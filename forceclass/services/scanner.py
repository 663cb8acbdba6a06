import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Set

from forceclass.core.config import LONG_RANGE_THRESHOLD, TECH_BASELINE_YEAR
from forceclass.schemas.summary import EquipmentEntry
from forceclass.services.categories import UnitType
from forceclass.services.constraints import MissionRole
from forceclass.services.equipment import (
    ANTI_PERSONNEL_FAMILIES,
    FLAK_FAMILIES,
    EquipmentTaxonomy,
    WeaponFamily,
)
from forceclass.services.network import (
    NetworkCapability,
    master_bits,
    network_bit_for,
    resolve_network_mask,
)

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Running totals from one pass over a unit's equipment."""
    total_bv: float = 0.0
    flak_bv: float = 0.0
    long_range_bv: float = 0.0
    ammo_bv: float = 0.0
    network_mask: NetworkCapability = NetworkCapability.NONE
    flamer: bool = False
    ap_weapons: bool = False
    advanced_tech: bool = False
    roles: Set[MissionRole] = field(default_factory=set)
    unknown_equipment: List[str] = field(default_factory=list)


class EquipmentScanner:
    """
    Classifies each equipment entry of a unit and accumulates weighted totals.

    Unknown equipment names are tolerated: they are recorded on the result and
    contribute nothing. Weapons without a matching rule still count toward the
    total battle value.
    """

    def __init__(
        self,
        taxonomy: EquipmentTaxonomy,
        tech_baseline_year: int = TECH_BASELINE_YEAR,
        long_range_threshold: int = LONG_RANGE_THRESHOLD,
    ):
        self.taxonomy = taxonomy
        self.tech_baseline_year = tech_baseline_year
        self.long_range_threshold = long_range_threshold

    def scan(self, unit_type: UnitType, equipment: Sequence[EquipmentEntry]) -> ScanResult:
        result = ScanResult()
        contributions = []

        for entry in equipment:
            eq = self.taxonomy.get(entry.name)
            if eq is None:
                result.unknown_equipment.append(entry.name)
                continue

            if eq.has_era_data and not eq.is_available_in(self.tech_baseline_year):
                # TODO: primitive-tech items are unavailable at the baseline too and should not count as lostech
                result.advanced_tech = True

            if not eq.is_weapon:
                contributions.append(network_bit_for(eq.internal_name))
                continue

            weighted = eq.bv * entry.quantity
            result.total_bv += weighted

            if eq.in_family(*FLAK_FAMILIES):
                result.flak_bv += weighted
            if eq.in_family(WeaponFamily.FLAMER):
                result.flamer = True
                result.ap_weapons = True
            if eq.in_family(*ANTI_PERSONNEL_FAMILIES):
                result.ap_weapons = True
            if eq.uses_ammo:
                result.ammo_bv += weighted
            if eq.long_range >= self.long_range_threshold:
                result.long_range_bv += weighted
            if eq.in_family(WeaponFamily.TAG):
                result.roles.add(MissionRole.SPOTTER)
            if eq.in_family(WeaponFamily.C3_MASTER):
                contributions.append(master_bits(boosted=False, quantity=entry.quantity))
            if eq.in_family(WeaponFamily.C3_BOOSTED_MASTER):
                contributions.append(master_bits(boosted=True, quantity=entry.quantity))

        result.network_mask = resolve_network_mask(contributions)

        if result.unknown_equipment:
            logger.debug(
                f"Ignored {len(result.unknown_equipment)} unknown equipment entries for {unit_type.label}",
                extra={'unknown_equipment': result.unknown_equipment}
            )
        return result
