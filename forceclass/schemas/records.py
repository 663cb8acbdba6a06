from typing import List, Optional

from pydantic import BaseModel, Field

from forceclass.services.network import capability_names
from forceclass.services.records import ChassisRecord, ModelRecord


class ModelRecordOut(BaseModel):
    key: str
    chassis: str
    model: str
    chassis_key: str
    unit_type: str
    intro_year: int
    omni: bool
    clan: bool
    star_league: bool
    movement_type: str
    weight_class: str
    min_weight_class: str
    flak: float = Field(..., ge=0.0, le=1.0)
    long_range: float = Field(..., ge=0.0, le=1.0)
    ammo_requirement: float = Field(..., ge=0.0, le=1.0)
    speed: int
    flamer: bool
    ap_weapons: bool
    network_mask: int
    network: List[str]
    roles: List[str]
    deployed_with: List[str]
    required_units: List[str]
    excluded_factions: List[str]

    @classmethod
    def from_record(cls, record: ModelRecord) -> "ModelRecordOut":
        return cls(
            key=record.key,
            chassis=record.chassis,
            model=record.model,
            chassis_key=record.chassis_key,
            unit_type=record.unit_type.label,
            intro_year=record.intro_year,
            omni=record.omni,
            clan=record.clan,
            star_league=record.star_league,
            movement_type=record.movement_type,
            weight_class=record.weight_class.name,
            min_weight_class=record.min_weight_class.name,
            flak=record.flak,
            long_range=record.long_range,
            ammo_requirement=record.ammo_requirement,
            speed=record.speed,
            flamer=record.flamer,
            ap_weapons=record.ap_weapons,
            network_mask=int(record.network_mask),
            network=capability_names(record.network_mask),
            roles=sorted(role.value for role in record.roles),
            deployed_with=list(record.deployed_with),
            required_units=list(record.required_units),
            excluded_factions=sorted(record.excluded_factions),
        )


class ChassisRecordOut(BaseModel):
    chassis: str
    chassis_key: str
    unit_type: str
    intro_year: int
    omni: bool
    clan: bool
    movement_type: str
    models: List[str]

    @classmethod
    def from_record(cls, record: ChassisRecord) -> "ChassisRecordOut":
        return cls(
            chassis=record.chassis,
            chassis_key=record.chassis_key,
            unit_type=record.unit_type.label,
            intro_year=record.intro_year,
            omni=record.omni,
            clan=record.clan,
            movement_type=record.movement_type,
            models=[model.key for model in record.models],
        )


class QuadOut(BaseModel):
    key: str
    chassis_key: str
    quad: Optional[bool]
    state: str


class ExclusionOut(BaseModel):
    key: str
    faction: str
    subfaction: Optional[str] = None
    excluded: bool
