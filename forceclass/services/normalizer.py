from dataclasses import dataclass

from forceclass.services.categories import SUPPORT_WEIGHT_CLASSES, UnitType, WeightClass
from forceclass.services.exceptions import ClassificationError
from forceclass.services.scanner import ScanResult

# Unit types whose weapon-value ratios mean something for force generation
RATIO_UNIT_TYPES = frozenset({
    UnitType.MEK,
    UnitType.TANK,
    UnitType.BATTLE_ARMOR,
    UnitType.INFANTRY,
    UnitType.PROTOMEK,
    UnitType.NAVAL,
    UnitType.GUN_EMPLACEMENT,
})

# (max tons, class) for support vehicles folded into the standard scale
SUPPORT_TONNAGE_TIERS = (
    (39, WeightClass.LIGHT),
    (59, WeightClass.MEDIUM),
    (79, WeightClass.HEAVY),
    (100, WeightClass.ASSAULT),
)


@dataclass(frozen=True)
class CombatRatios:
    flak: float = 0.0
    long_range: float = 0.0
    ammo_requirement: float = 0.0


def compute_ratios(scan: ScanResult, unit_type: UnitType) -> CombatRatios:
    """Shares of total weapon BV; all zero when there is no weapon BV or the type has no ratios."""
    if scan.total_bv <= 0 or unit_type not in RATIO_UNIT_TYPES:
        return CombatRatios()
    return CombatRatios(
        flak=scan.flak_bv / scan.total_bv,
        long_range=scan.long_range_bv / scan.total_bv,
        ammo_requirement=scan.ammo_bv / scan.total_bv,
    )


def normalize_weight_class(declared: int, tons: float) -> WeightClass:
    """Support vehicles are regrouped by tonnage; every other class is kept."""
    try:
        weight_class = WeightClass(declared)
    except ValueError:
        raise ClassificationError(f"Unknown weight class: {declared}") from None
    if weight_class not in SUPPORT_WEIGHT_CLASSES:
        return weight_class
    for max_tons, tier in SUPPORT_TONNAGE_TIERS:
        if tons <= max_tons:
            return tier
    return WeightClass.COLOSSAL


def weight_class_offset(unit_type: UnitType) -> WeightClass:
    """
    Lightest weight class available to a unit type.

    Support vehicles have already been folded into the standard scale by
    normalize_weight_class, so they start at LIGHT like other ground units.
    """
    if unit_type in (UnitType.BATTLE_ARMOR, UnitType.INFANTRY):
        return WeightClass.ULTRA_LIGHT
    if unit_type is UnitType.SMALL_CRAFT:
        return WeightClass.SMALL_CRAFT
    if unit_type is UnitType.DROPSHIP:
        return WeightClass.SMALL_DROP
    if unit_type in (UnitType.JUMPSHIP, UnitType.WARSHIP):
        return WeightClass.SMALL_WAR
    return WeightClass.LIGHT
