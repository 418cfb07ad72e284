"""FastAPI dependencies: engine access and (re)construction."""
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status

from elcalc.config import env_settings
from elcalc.services.calculation_engine import CalculationIntelligenceEngine
from elcalc.services.catalog_engine import load_catalog_or_default

logger = logging.getLogger("elcalc-api")


def build_engine(catalog_path: Optional[str] = None, hourly_rate: Optional[float] = None) -> CalculationIntelligenceEngine:
    settings = env_settings()
    catalog = load_catalog_or_default(catalog_path if catalog_path is not None else settings["catalog_path"])
    rate = hourly_rate if hourly_rate is not None else settings["hourly_rate"]
    return CalculationIntelligenceEngine.from_catalog(catalog, hourly_rate=rate)


def install_engine(app: FastAPI, engine: CalculationIntelligenceEngine) -> None:
    """Swap the shared engine; in-flight requests keep the instance they started with."""
    app.state.engine = engine
    logger.info(f"Calculation engine ready: {engine.catalog_summary()}")


def get_engine(request: Request) -> CalculationIntelligenceEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Calculation engine not initialised",
        )
    return engine
