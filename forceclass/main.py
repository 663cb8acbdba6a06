from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forceclass.core.config import (
    EQUIPMENT_TAXONOMY_PATH,
    FACTION_DATA_PATH,
    get_database_url,
)
from forceclass.core.logging import setup_logging
from forceclass.exceptions import record_not_found_handler
from forceclass.routers import health, metrics, records
from forceclass.services.catalog import build_catalog
from forceclass.services.equipment import EquipmentTaxonomy
from forceclass.services.exceptions import ClassificationError, RecordNotFoundError
from forceclass.services.faction_loader import load_faction_data
from forceclass.services.repository import SqlEntityLoader, UnitRepository


logger = logging.getLogger(__name__)


def load_taxonomy() -> EquipmentTaxonomy:
    if not EQUIPMENT_TAXONOMY_PATH:
        logger.warning("EQUIPMENT_TAXONOMY_PATH not set; every equipment entry will be treated as unknown")
        return EquipmentTaxonomy()
    return EquipmentTaxonomy.from_json_file(EQUIPMENT_TAXONOMY_PATH)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    repository = UnitRepository(get_database_url())
    await repository.open()
    try:
        catalog = await build_catalog(repository, load_taxonomy(), loader=SqlEntityLoader(repository))
        if FACTION_DATA_PATH:
            try:
                load_faction_data(catalog, FACTION_DATA_PATH)
            except (ClassificationError, OSError, ValueError) as e:
                # the classified catalog is served without faction constraints
                logger.warning(f"Faction data not applied from {FACTION_DATA_PATH}: {e}")
        app.state.catalog = catalog
        yield
    finally:
        # teardown on shutdown
        app.state.catalog = None
        await repository.close()


app = FastAPI(title="Force Classification API", lifespan=lifespan)

# Register exception handler
app.add_exception_handler(RecordNotFoundError, record_not_found_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(records.router)
app.include_router(metrics.router)
