"""
Electrical Calculation API
FastAPI service around the calculation intelligence engine: room estimates,
priced project offers, profit simulation and anomaly checks.
"""
import os
import time
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from elcalc.api.calculation_routes import router as calculation_router
from elcalc.api.deps import build_engine, install_engine
from elcalc.config import env_settings
from elcalc.services.logging_config import setup_logging
from elcalc.services.middleware import RequestTimingMiddleware

load_dotenv()

_settings = env_settings()
setup_logging(
    level=_settings["log_level"],
    json_output=_settings["json_logs"],
    service_level=_settings["service_log_level"],
)
logger = logging.getLogger("elcalc-api")

_PROCESS_START = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not _settings["catalog_path"]:
        logger.info("ELCALC_CATALOG_PATH not set, using bundled catalog")
    install_engine(app, build_engine())
    yield


app = FastAPI(
    title="Electrical Calculation API",
    version="1.0.0",
    description="Room-based estimation and pricing for electrical installation offers",
    lifespan=lifespan,
)

app.add_middleware(RequestTimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculation_router)


@app.get("/health")
async def health():
    engine = getattr(app.state, "engine", None)
    return {
        "status": "ok" if engine is not None else "starting",
        "uptime_seconds": round(time.monotonic() - _PROCESS_START, 1),
        "catalog": engine.catalog_summary() if engine is not None else None,
    }
