"""Classify the unit catalog, apply a faction data sheet and report what changed."""

import argparse
import asyncio
import logging

from forceclass.core.config import EQUIPMENT_TAXONOMY_PATH, get_database_url
from forceclass.core.logging import setup_logging
from forceclass.services.catalog import build_catalog
from forceclass.services.equipment import EquipmentTaxonomy
from forceclass.services.faction_loader import load_faction_data
from forceclass.services.repository import UnitRepository

logger = logging.getLogger(__name__)


async def run(file_path: str, taxonomy_path: str, strict: bool):
    taxonomy = EquipmentTaxonomy.from_json_file(taxonomy_path)

    async with UnitRepository(get_database_url()) as repository:
        catalog = await build_catalog(repository, taxonomy)

    applied = load_faction_data(catalog, file_path, strict=strict)

    for record in catalog.records():
        if record.roles or record.deployed_with or record.required_units or record.excluded_factions:
            print(
                f"{record.key}: roles={sorted(r.value for r in record.roles)} "
                f"deployed_with={record.deployed_with} required={record.required_units} "
                f"excluded={sorted(record.excluded_factions)}"
            )
    print(f"Rows applied: {applied}")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("file_path", help="CSV or Excel faction data sheet")
    parser.add_argument("--taxonomy", default=EQUIPMENT_TAXONOMY_PATH, required=EQUIPMENT_TAXONOMY_PATH is None)
    parser.add_argument("--strict", action="store_true", help="fail on unknown mission roles")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(run(args.file_path, args.taxonomy, args.strict))


if __name__ == "__main__":
    main()
