"""
Calculation API Routes

POST /api/calculations/room               : estimate a single room
POST /api/calculations/project            : full priced project estimate
POST /api/calculations/profit-simulation  : margin / discount scenario table
POST /api/calculations/anomalies          : sanity checks on a calculation
GET  /api/calculations/catalog            : loaded catalog counts
POST /api/calculations/catalog/reload     : rebuild the engine from the catalog source
GET  /api/calculations/point-kinds        : supported electrical point vocabulary
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from elcalc.api.deps import build_engine, get_engine, install_engine
from elcalc.models.calculation_models import (
    AnomalyCheckInput,
    ProfitSimulationInput,
    ProjectCalculationInput,
    RoomCalculationInput,
)
from elcalc.services.anomaly_engine import detect_anomalies
from elcalc.services.calculation_engine import CalculationIntelligenceEngine
from elcalc.services.profit_simulator import simulate_profit
from elcalc.services.room_estimator import POINT_TO_COMPONENT

router = APIRouter(prefix="/api/calculations", tags=["Calculations"])
logger = logging.getLogger("elcalc-calculation-routes")


@router.post("/room")
async def calculate_room(
    room: RoomCalculationInput,
    hourly_rate: Optional[float] = Query(None, ge=0),
    engine: CalculationIntelligenceEngine = Depends(get_engine),
):
    return engine.calculate_room(room, hourly_rate).to_dict()


@router.post("/project")
async def calculate_project(
    project: ProjectCalculationInput,
    engine: CalculationIntelligenceEngine = Depends(get_engine),
):
    return engine.calculate_project(project).to_dict()


@router.post("/profit-simulation")
async def profit_simulation(sim: ProfitSimulationInput):
    return simulate_profit(sim).to_dict()


@router.post("/anomalies")
async def anomalies(check: AnomalyCheckInput):
    found = detect_anomalies(check)
    return {
        "calculation_id": check.calculation_id,
        "count": len(found),
        "has_critical": any(a.severity == "critical" for a in found),
        "anomalies": [a.to_dict() for a in found],
    }


@router.get("/catalog")
async def catalog_summary(engine: CalculationIntelligenceEngine = Depends(get_engine)):
    return {
        **engine.catalog_summary(),
        "hourly_rate": engine.hourly_rate,
        "installation_types": [
            {"id": it.id, "code": it.code, "name": it.name}
            for it in engine.lookup.installation_types.values()
        ],
    }


@router.post("/catalog/reload")
async def reload_catalog(request: Request):
    engine = build_engine()
    install_engine(request.app, engine)
    return engine.catalog_summary()


@router.get("/point-kinds")
async def point_kinds():
    return {kind: {"type": ref.type, "subtype": ref.subtype} for kind, ref in POINT_TO_COMPONENT.items()}
