import itertools

import pytest

from forceclass.services.network import (
    COMMUNICATION_EQUIPMENT,
    SLAVE_VARIANTS,
    NetworkCapability,
    capability_names,
    master_bits,
    network_bit_for,
    resolve_network_mask,
)


def test_slave_variants_share_one_bit():
    assert NetworkCapability.NAVAL_SLAVE is NetworkCapability.SLAVE
    assert NetworkCapability.BA_SLAVE is NetworkCapability.SLAVE
    assert {int(bit) for bit in SLAVE_VARIANTS.values()} == {1}


def test_boosted_values_are_base_plus_modifier():
    assert NetworkCapability.BOOSTED_SLAVE == NetworkCapability.SLAVE | NetworkCapability.BOOSTED
    assert NetworkCapability.BOOSTED_MASTER == NetworkCapability.MASTER | NetworkCapability.BOOSTED
    assert NetworkCapability.SLAVE in NetworkCapability.BOOSTED_SLAVE
    assert NetworkCapability.MASTER not in NetworkCapability.BOOSTED_SLAVE


@pytest.mark.parametrize("internal_name, expected", [
    ("ISC3SlaveUnit", NetworkCapability.SLAVE),
    ("ISC3EmergencyMaster", NetworkCapability.SLAVE),
    ("ISNC3Unit", NetworkCapability.SLAVE),
    ("BattleArmorC3", NetworkCapability.SLAVE),
    ("ISC3BoostedSystemSlaveUnit", NetworkCapability.BOOSTED_SLAVE),
    ("ISC3iUnit", NetworkCapability.C3I),
    ("ISBC3i", NetworkCapability.C3I),
    ("NovaCEWS", NetworkCapability.NOVA),
    ("Heat Sink", NetworkCapability.NONE),
])
def test_network_bit_for_communication_equipment(internal_name, expected):
    assert network_bit_for(internal_name) == expected


def test_master_bits_company_command_only_above_one():
    assert master_bits(boosted=False, quantity=1) == NetworkCapability.MASTER
    assert master_bits(boosted=False, quantity=2) == NetworkCapability.MASTER | NetworkCapability.COMPANY_COMMAND
    assert master_bits(boosted=True, quantity=1) == NetworkCapability.BOOSTED_MASTER
    assert NetworkCapability.COMPANY_COMMAND in master_bits(boosted=True, quantity=3)


def test_resolve_empty_is_none():
    assert resolve_network_mask([]) == NetworkCapability.NONE


def test_resolve_is_idempotent():
    contributions = [NetworkCapability.SLAVE, NetworkCapability.C3I]
    once = resolve_network_mask(contributions)
    assert resolve_network_mask(contributions + contributions) == once
    assert resolve_network_mask([once, once]) == once


def test_resolve_is_order_independent():
    contributions = list(COMMUNICATION_EQUIPMENT.values()) + [NetworkCapability.COMPANY_COMMAND]
    expected = resolve_network_mask(contributions)
    for permutation in itertools.permutations(contributions[:5]):
        assert resolve_network_mask(list(permutation) + contributions[5:]) == expected


def test_capability_names_lists_single_bits():
    mask = NetworkCapability.BOOSTED_MASTER | NetworkCapability.COMPANY_COMMAND
    assert capability_names(mask) == ["MASTER", "BOOSTED", "COMPANY_COMMAND"]
    assert capability_names(NetworkCapability.NONE) == []
