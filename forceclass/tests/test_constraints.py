import pytest

from forceclass.services.constraints import ConstraintStore, MissionRole, faction_key, parse_roles
from forceclass.services.exceptions import MalformedEncodingError


@pytest.mark.parametrize("name, expected", [
    ("recon", MissionRole.RECON),
    ("Fire Support", MissionRole.FIRE_SUPPORT),
    ("anti-aircraft", MissionRole.ANTI_AIRCRAFT),
    ("INCINDIARY", MissionRole.INCENDIARY),
    (" spotter ", MissionRole.SPOTTER),
    ("sky pirate", None),
])
def test_mission_role_parse(name, expected):
    assert MissionRole.parse(name) is expected


def test_replace_roles_replaces_previous():
    store = ConstraintStore()
    store.replace_roles("recon,raider")
    store.replace_roles("fire_support")
    assert store.roles == {MissionRole.FIRE_SUPPORT}


def test_replace_roles_skips_unknown_tokens(caplog):
    store = ConstraintStore()
    store.replace_roles("recon,,bogus,urban")
    assert store.roles == {MissionRole.RECON, MissionRole.URBAN}
    assert "bogus" in caplog.text


def test_strict_role_parse_keeps_previous_roles():
    store = ConstraintStore()
    store.replace_roles("recon")
    with pytest.raises(MalformedEncodingError):
        store.replace_roles("urban,bogus", strict=True)
    assert store.roles == {MissionRole.RECON}


def test_empty_role_encoding_clears_roles():
    store = ConstraintStore()
    store.add_inferred_roles([MissionRole.SPOTTER])
    store.replace_roles("")
    assert store.roles == set()


def test_parse_roles_is_a_set():
    assert parse_roles("recon,recon,Recon") == {MissionRole.RECON}


def test_required_prefix_split():
    store = ConstraintStore()
    store.append_deployment("req:UnitA,UnitB")
    assert store.required_units == ["UnitA"]
    assert store.deployed_with == ["UnitB"]


def test_deployment_appends_across_calls():
    store = ConstraintStore()
    store.append_deployment("Locust LCT-1V,req:Atlas AS7-D")
    store.append_deployment("Commando COM-2D")
    assert store.deployed_with == ["Locust LCT-1V", "Commando COM-2D"]
    assert store.required_units == ["Atlas AS7-D"]


def test_excluded_factions_replace():
    store = ConstraintStore()
    store.replace_excluded_factions("CC,FS")
    store.replace_excluded_factions("FactionX.Clan")
    assert store.excluded_factions == {"FactionX.Clan"}


def test_faction_is_excluded_compound_key():
    store = ConstraintStore()
    store.replace_excluded_factions("FactionX.Clan")
    assert store.faction_is_excluded("FactionX", "Clan") is True
    assert store.faction_is_excluded("FactionX", None) is False
    assert store.is_excluded("FactionX.Clan") is True


def test_faction_is_excluded_plain_key():
    store = ConstraintStore()
    store.replace_excluded_factions("CC")
    assert store.faction_is_excluded("CC") is True
    assert store.faction_is_excluded("CC", "Warrior House") is False


def test_faction_key():
    assert faction_key("FS") == "FS"
    assert faction_key("FS", "DMM") == "FS.DMM"
