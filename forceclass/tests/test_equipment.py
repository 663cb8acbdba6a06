import json

import pytest
from pydantic import ValidationError

from forceclass.services.equipment import (
    EquipmentDescriptor,
    EquipmentKind,
    EquipmentTaxonomy,
    WeaponFamily,
)
from forceclass.services.records import ModelRecord
from forceclass.services.scanner import EquipmentScanner


def test_availability_window():
    gauss = EquipmentDescriptor(
        "ISGaussRifle", EquipmentKind.WEAPON, intro_year=2590, extinct_year=2865, reintro_year=3040
    )
    assert gauss.is_available_in(2700) is True
    assert gauss.is_available_in(3000) is False
    assert gauss.is_available_in(3050) is True
    assert gauss.is_available_in(2500) is False


def test_never_reintroduced_stays_unavailable():
    item = EquipmentDescriptor("ISOldThing", EquipmentKind.MISC, intro_year=2400, extinct_year=2800)
    assert item.is_available_in(3100) is False


def test_missing_era_data_does_not_mark_star_league(summary_factory):
    taxonomy = EquipmentTaxonomy.from_records([
        {"internal_name": "ISMediumLaser", "kind": "weapon", "bv": 46, "long_range": 9,
         "intro_year": 2300, "lookup_names": ["Medium Laser"]},
        {"internal_name": "Heat Sink", "kind": "misc"},
    ])
    summary = summary_factory(equipment=[("Medium Laser", 2), ("Heat Sink", 10)])

    assert taxonomy.get("Heat Sink").has_era_data is False
    assert ModelRecord.from_summary(summary, EquipmentScanner(taxonomy)).star_league is False


def test_taxonomy_lookup_by_any_name(taxonomy):
    by_internal = taxonomy.get("ISLRM20")
    assert by_internal is taxonomy.get("LRM 20")
    assert by_internal is taxonomy.get("lrm 20")
    assert taxonomy.get("Not A Weapon") is None


def test_descriptor_families(taxonomy):
    lbx = taxonomy.get("LB 10-X AC")
    assert lbx.is_weapon and lbx.uses_ammo
    assert lbx.in_family(WeaponFamily.LBX_AUTOCANNON, WeaponFamily.ARTILLERY)
    assert not lbx.in_family(WeaponFamily.FLAMER)


def test_from_json_file(tmp_path):
    path = tmp_path / "equipment.json"
    path.write_text(json.dumps([
        {"internal_name": "ISERPPC", "kind": "weapon", "bv": 229, "long_range": 23,
         "intro_year": 2760, "lookup_names": ["ER PPC"]},
    ]))
    taxonomy = EquipmentTaxonomy.from_json_file(str(path))
    assert len(taxonomy) == 1
    assert taxonomy.get("ER PPC").long_range == 23


def test_invalid_rows_are_rejected():
    with pytest.raises(ValidationError):
        EquipmentTaxonomy.from_records([{"internal_name": "X", "kind": "laser-sword"}])
