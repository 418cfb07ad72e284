"""
Catalog loading for the calculation engine.

Sources:
  - the bundled starter catalog (default_catalog)
  - a JSON file with ``component_times``, ``installation_types`` and
    ``room_templates`` arrays (load_catalog)
  - a spreadsheet export of component time rows (load_component_times_csv)
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
from pydantic import ValidationError

from elcalc.models.catalog_schema import CalculationCatalog, ComponentTimeIntelligence
from elcalc.services import default_catalog as seed

logger = logging.getLogger("elcalc-catalog")

PathLike = Union[str, Path]

CSV_REQUIRED_COLUMNS = ("component_type", "base_install_time_seconds", "wiring_time_seconds")
CSV_NUMERIC_COLUMNS = (
    "base_install_time_seconds",
    "wiring_time_seconds",
    "finishing_time_seconds",
    "cable_meters_per_unit",
    "material_cost_estimate",
)


class CatalogError(Exception):
    """Catalog data could not be read or failed validation."""


def default_catalog() -> CalculationCatalog:
    return CalculationCatalog(
        component_times=seed.COMPONENT_TIMES,
        installation_types=seed.INSTALLATION_TYPES,
        room_templates=seed.ROOM_TEMPLATES,
    )


def load_catalog(path: PathLike) -> CalculationCatalog:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        catalog = CalculationCatalog.model_validate(data)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog {path}: {e.error_count()} validation error(s)") from e

    logger.info(
        f"Catalog loaded from {path}: {len(catalog.component_times)} component times, "
        f"{len(catalog.installation_types)} installation types, "
        f"{len(catalog.room_templates)} room templates"
    )
    return catalog


def _parse_materials(raw) -> list:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return []
    if isinstance(raw, str):
        return json.loads(raw)
    return raw


def load_component_times_csv(path: PathLike) -> List[ComponentTimeIntelligence]:
    """
    Read component time rows from a CSV export.

    ``materials_per_unit`` is a JSON array in a single cell; blank cells
    become None so schema defaults apply.
    """
    try:
        df = pd.read_csv(path, dtype={"materials_per_unit": str, "component_subtype": str,
                                      "installation_type_id": str, "cable_type": str})
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise CatalogError(f"Cannot read component time CSV {path}: {e}") from e

    missing = [c for c in CSV_REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogError(f"Component time CSV {path} is missing columns: {missing}")

    for col in CSV_NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

    df = df.astype(object).where(pd.notna(df), None)

    rows: List[ComponentTimeIntelligence] = []
    for i, record in enumerate(df.to_dict(orient="records"), start=2):
        record = {k: v for k, v in record.items() if v is not None}
        try:
            record["materials_per_unit"] = _parse_materials(record.get("materials_per_unit"))
            rows.append(ComponentTimeIntelligence.model_validate(record))
        except (json.JSONDecodeError, ValidationError) as e:
            raise CatalogError(f"{path}, line {i}: {e}") from e

    logger.info(f"Imported {len(rows)} component time rows from {path}")
    return rows


def load_catalog_or_default(path: Optional[PathLike]) -> CalculationCatalog:
    """Catalog from ``path`` when given, else the bundled one.  Read failures fall back too."""
    if not path:
        return default_catalog()
    try:
        return load_catalog(path)
    except CatalogError as e:
        logger.error(f"{e}; falling back to bundled catalog")
        return default_catalog()
