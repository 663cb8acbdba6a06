from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from forceclass.schemas.records import ChassisRecordOut, ExclusionOut, ModelRecordOut, QuadOut
from forceclass.services.catalog import ClassificationCatalog


router = APIRouter(tags=["records"])


def get_catalog(request: Request) -> ClassificationCatalog:
    return request.app.state.catalog


@router.get("/records/{key:path}/quad", response_model=QuadOut)
async def get_quad(key: str, catalog: ClassificationCatalog = Depends(get_catalog)):
    """Quad classification of the unit's chassis; loads a full definition on first request."""
    record = catalog.get_record(key)
    quad = await catalog.is_quad(key)
    return QuadOut(
        key=record.key,
        chassis_key=record.chassis_key,
        quad=quad,
        state=catalog.quad_state(key).value,
    )


@router.get("/records/{key:path}/excluded", response_model=ExclusionOut)
async def get_exclusion(
    key: str,
    faction: str = Query(..., min_length=1),
    subfaction: Optional[str] = Query(None),
    catalog: ClassificationCatalog = Depends(get_catalog),
):
    record = catalog.get_record(key)
    return ExclusionOut(
        key=record.key,
        faction=faction,
        subfaction=subfaction,
        excluded=record.faction_is_excluded(faction, subfaction),
    )


@router.get("/records/{key:path}", response_model=ModelRecordOut)
async def get_record(key: str, catalog: ClassificationCatalog = Depends(get_catalog)):
    return ModelRecordOut.from_record(catalog.get_record(key))


@router.get("/chassis/{chassis_key:path}", response_model=ChassisRecordOut)
async def get_chassis(chassis_key: str, catalog: ClassificationCatalog = Depends(get_catalog)):
    return ChassisRecordOut.from_record(catalog.get_chassis(chassis_key))
