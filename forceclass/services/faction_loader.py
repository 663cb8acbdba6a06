import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from forceclass.services.catalog import ClassificationCatalog
from forceclass.services.exceptions import FactionDataError, RecordNotFoundError

logger = logging.getLogger(__name__)

COLUMNS = {
    "unit": "Unit",
    "roles": "Roles",
    "deployed_with": "Deployed With",
    "excluded_factions": "Excluded Factions",
}


def read_faction_frame(file_path: str, sheet_name: str = "Models") -> pd.DataFrame:
    """Faction data sheet as a DataFrame; CSV or Excel depending on the file suffix."""
    path = Path(file_path)
    if path.suffix.lower() in (".xlsx", ".xlsm", ".xls"):
        df = pd.read_excel(path, sheet_name=sheet_name)
    else:
        df = pd.read_csv(path)
    df.columns = df.columns.str.strip()
    if COLUMNS["unit"] not in df.columns:
        raise FactionDataError(f"{file_path} has no {COLUMNS['unit']!r} column")
    return df.dropna(subset=[COLUMNS["unit"]])


def _cell(row: pd.Series, column: str) -> Optional[str]:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def apply_faction_frame(catalog: ClassificationCatalog, df: pd.DataFrame, strict: bool = False) -> int:
    """
    Write roles, deployment affinities and exclusions onto catalog records.

    Rows for units the catalog does not know are logged and skipped. Returns
    the number of rows applied.
    """
    applied = 0
    for _, row in df.iterrows():
        key = _cell(row, COLUMNS["unit"])
        try:
            catalog.update_constraints(
                key,
                roles=_cell(row, COLUMNS["roles"]),
                deployed_with=_cell(row, COLUMNS["deployed_with"]),
                excluded_factions=_cell(row, COLUMNS["excluded_factions"]),
                strict=strict,
            )
        except RecordNotFoundError:
            logger.warning(f"Faction data references unknown unit {key}")
            continue
        applied += 1

    logger.info(f"Applied faction data to {applied} of {len(df)} rows")
    return applied


def load_faction_data(catalog: ClassificationCatalog, file_path: str, strict: bool = False) -> int:
    return apply_faction_frame(catalog, read_faction_frame(file_path), strict=strict)
