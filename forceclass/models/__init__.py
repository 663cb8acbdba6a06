# Table registration for metadata.create_all
from .unit import UnitSummaryRow, UnitEntityRow
