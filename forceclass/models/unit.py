from sqlalchemy import Column, Integer, String, Float, Boolean, JSON
from forceclass.core.db import Base


class UnitSummaryRow(Base):
    __tablename__ = "unit_summaries"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)  # '<chassis> <model>'
    chassis = Column(String, nullable=False, index=True)
    model = Column(String, nullable=False, default="")
    unit_type = Column(String, nullable=False)  # 'Mek' | 'Tank' | 'BattleArmor' | ...
    unit_sub_type = Column(String, nullable=False, default="")  # 'Omni' for omnimeks
    year = Column(Integer, nullable=False)
    weight_class = Column(Integer, nullable=False)
    tons = Column(Float, nullable=False)
    engine_name = Column(String, nullable=False, default="")
    armor_types = Column(JSON, nullable=False, default=list)  # armor codes per location group
    internals_type = Column(Integer, nullable=False, default=0)
    clan = Column(Boolean, nullable=False, default=False)
    walk_mp = Column(Integer, nullable=False, default=0)
    jump_mp = Column(Integer, nullable=False, default=0)
    movement_mode = Column(String, nullable=False, default="")
    equipment = Column(JSON, nullable=False, default=list)  # [{"name": ..., "quantity": ...}]


class UnitEntityRow(Base):
    """Full structural definition of a unit; expensive to read, loaded on demand."""
    __tablename__ = "unit_entities"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    unit_type = Column(String, nullable=False)
    motive_layout = Column(String, nullable=False, default="")  # meks: 'biped' | 'quad' | 'tripod' | 'quadvee' | 'lam'
    chassis_type = Column(String, nullable=False, default="")  # battle armor: 'biped' | 'quad'
    definition = Column(JSON, nullable=True)  # remaining structure (locations, crits, ...)
