from enum import Enum, IntEnum

from forceclass.services.exceptions import UnknownUnitTypeError


class UnitType(Enum):
    """Unit categories as named in the unit catalog."""
    MEK = "Mek"
    TANK = "Tank"
    BATTLE_ARMOR = "BattleArmor"
    INFANTRY = "Infantry"
    PROTOMEK = "ProtoMek"
    VTOL = "VTOL"
    NAVAL = "Naval"
    GUN_EMPLACEMENT = "Gun Emplacement"
    CONV_FIGHTER = "Conventional Fighter"
    AERO = "Aero"
    SMALL_CRAFT = "Small Craft"
    DROPSHIP = "Dropship"
    JUMPSHIP = "Jumpship"
    WARSHIP = "Warship"
    SPACE_STATION = "Space Station"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, type_name: str) -> "UnitType":
        try:
            return cls(type_name)
        except ValueError:
            raise UnknownUnitTypeError(f"Unknown unit type: {type_name!r}") from None


class WeightClass(IntEnum):
    """
    Weight classes of every unit scale.

    Ground units use ULTRA_LIGHT..COLOSSAL; support vehicles, small craft,
    dropships and capital ships each have their own range.
    """
    ULTRA_LIGHT = 0
    LIGHT = 1
    MEDIUM = 2
    HEAVY = 3
    ASSAULT = 4
    COLOSSAL = 5
    SMALL_SUPPORT = 6
    MEDIUM_SUPPORT = 7
    LARGE_SUPPORT = 8
    SMALL_CRAFT = 9
    SMALL_DROP = 10
    MEDIUM_DROP = 11
    LARGE_DROP = 12
    SMALL_WAR = 13
    LARGE_WAR = 14


SUPPORT_WEIGHT_CLASSES = frozenset({
    WeightClass.SMALL_SUPPORT,
    WeightClass.MEDIUM_SUPPORT,
    WeightClass.LARGE_SUPPORT,
})
