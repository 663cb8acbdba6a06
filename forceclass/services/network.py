"""
Network capability bits (C3 command/communication networks).

The three slave variants (standard C3 slave, naval C3 and battle armor C3)
share one bit; consumers test the combined bit.
"Boosted" capabilities are the base bit plus the BOOSTED modifier.
"""

from enum import IntFlag
from functools import reduce
from operator import or_
from typing import Dict, Iterable


class NetworkCapability(IntFlag):
    NONE = 0
    SLAVE = 1
    NAVAL_SLAVE = 1
    BA_SLAVE = 1
    MASTER = 1 << 1
    C3I = 1 << 2
    NOVA = 1 << 3
    BOOSTED = 1 << 4
    COMPANY_COMMAND = 1 << 5

    BOOSTED_SLAVE = SLAVE | BOOSTED
    BOOSTED_MASTER = MASTER | BOOSTED


# Logical slave variant -> bit. All three map to the same value.
SLAVE_VARIANTS: Dict[str, NetworkCapability] = {
    "standard": NetworkCapability.SLAVE,
    "naval": NetworkCapability.NAVAL_SLAVE,
    "battle_armor": NetworkCapability.BA_SLAVE,
}

# Non-weapon communication equipment by internal name
COMMUNICATION_EQUIPMENT: Dict[str, NetworkCapability] = {
    "ISC3SlaveUnit": SLAVE_VARIANTS["standard"],
    "ISC3EmergencyMaster": SLAVE_VARIANTS["standard"],
    "ISNC3Unit": SLAVE_VARIANTS["naval"],
    "BattleArmorC3": SLAVE_VARIANTS["battle_armor"],
    "ISC3BoostedSystemSlaveUnit": NetworkCapability.BOOSTED_SLAVE,
    "ISC3iUnit": NetworkCapability.C3I,
    "ISBC3i": NetworkCapability.C3I,
    "NovaCEWS": NetworkCapability.NOVA,
}


def network_bit_for(internal_name: str) -> NetworkCapability:
    """Contribution of a non-weapon item, NONE when it is not communication gear."""
    return COMMUNICATION_EQUIPMENT.get(internal_name, NetworkCapability.NONE)


def master_bits(boosted: bool, quantity: int) -> NetworkCapability:
    """Contribution of a C3 master computer mounted `quantity` times."""
    bits = NetworkCapability.BOOSTED_MASTER if boosted else NetworkCapability.MASTER
    if quantity > 1:
        bits |= NetworkCapability.COMPANY_COMMAND
    return bits


def resolve_network_mask(contributions: Iterable[NetworkCapability]) -> NetworkCapability:
    return reduce(or_, contributions, NetworkCapability.NONE)


# Single-bit members, in bit order
CANONICAL_BITS = (
    NetworkCapability.SLAVE,
    NetworkCapability.MASTER,
    NetworkCapability.C3I,
    NetworkCapability.NOVA,
    NetworkCapability.BOOSTED,
    NetworkCapability.COMPANY_COMMAND,
)


def capability_names(mask: NetworkCapability) -> list:
    return [bit.name for bit in CANONICAL_BITS if bit in mask]
