from typing import List

from pydantic import BaseModel, Field


class EquipmentEntry(BaseModel):
    name: str
    quantity: int = Field(1, ge=0)


class UnitSummary(BaseModel):
    """Catalog summary of one unit variant, as read from the unit catalog."""
    chassis: str
    model: str = ""
    unit_type: str = Field(..., description="Catalog unit type name, e.g. 'Mek' or 'Gun Emplacement'")
    unit_sub_type: str = ""
    year: int
    weight_class: int = Field(..., ge=0)
    tons: float = Field(..., ge=0)
    engine_name: str = ""
    armor_types: List[int] = Field(default_factory=list)
    internals_type: int = 0
    clan: bool = False
    walk_mp: int = Field(0, ge=0)
    jump_mp: int = Field(0, ge=0)
    movement_mode: str = ""
    equipment: List[EquipmentEntry] = Field(default_factory=list)

    @property
    def name(self) -> str:
        return f"{self.chassis} {self.model}".strip()
