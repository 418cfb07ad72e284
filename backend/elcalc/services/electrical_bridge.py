"""
Bridge to the electrical-engineering calculator (cable sizing, load analysis,
DS/HD 60364 compliance).

The calculator itself is a collaborator injected by the caller:

    ElectricalCalculator = Callable[[ElectricalProjectInput], ElectricalProjectResult | dict]

This module converts room points into electrical loads and normalises
whatever the calculator returns.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from elcalc.models.calculation_models import ProjectCalculationInput, RoomCalculationInput

logger = logging.getLogger("elcalc-electrical")

DEFAULT_AREA_M2 = 10.0
DEFAULT_CEILING_HEIGHT_M = 2.5
FLOOR_HEATING_W_PER_M2 = 100.0
ELECTRICAL_WET_ROOM_TYPES = frozenset({"bathroom", "outdoor", "utility"})


# ── Schemas ───────────────────────────────────────────────────────────────────

class LoadEntry(BaseModel):
    description: str
    category: str = Field(..., description="socket_outlet | lighting | cooking | ev_charger | heating | fixed_appliance")
    rated_power_watts: float
    quantity: int = 1
    power_factor: float = 1.0
    is_continuous: bool = False


class ElectricalRoomInput(BaseModel):
    name: str
    room_type: str
    area_m2: float = DEFAULT_AREA_M2
    floor: int = 0
    is_wet_room: bool = False
    installation_type: Optional[str] = None
    ceiling_height_m: float = DEFAULT_CEILING_HEIGHT_M
    loads: List[LoadEntry] = Field(default_factory=list)


class ElectricalProjectInput(BaseModel):
    building_type: str = "residential"
    building_age_years: Optional[int] = None
    supply_phase: str = "3-phase"
    is_renovation: bool = False
    default_installation_method: str = "B2"
    rooms: List[ElectricalRoomInput] = Field(default_factory=list)


class ComplianceIssue(BaseModel):
    model_config = ConfigDict(extra="allow")

    severity: str = "warning"   # error | warning | info
    description: str
    standard_ref: str = ""


class ComplianceResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    compliant: bool = True
    issues: List[ComplianceIssue] = Field(default_factory=list)


class ElectricalProjectResult(BaseModel):
    """Minimum shape the estimate relies on; any extra detail is passed through."""
    model_config = ConfigDict(extra="allow")

    warnings: List[str] = Field(default_factory=list)
    compliance: ComplianceResult = Field(default_factory=ComplianceResult)


ElectricalCalculator = Callable[[ElectricalProjectInput], Union[ElectricalProjectResult, Dict[str, Any]]]


# ── Point -> load conversion ──────────────────────────────────────────────────

# point kind: (description, category, watts, power factor, continuous)
_APPLIANCE_LOADS = (
    ("ovn_tilslutning",       "Ovn (3-fase)",        "cooking",         3600.0,  1.0,  False),
    ("induktion_tilslutning", "Induktionskogeplade", "cooking",         7200.0,  0.95, False),
    ("elbil_lader",           "EV-lader",            "ev_charger",      11000.0, 0.99, True),
    ("vaskemaskine",          "Vaskemaskine",        "fixed_appliance", 2200.0,  0.85, False),
    ("tørretumbler",          "Tørretumbler",        "fixed_appliance", 2500.0,  0.85, False),
    ("opvaskemaskine",        "Opvaskemaskine",      "fixed_appliance", 2200.0,  0.85, False),
)


def room_loads(room: RoomCalculationInput) -> List[LoadEntry]:
    points = room.points
    loads: List[LoadEntry] = []

    outlets = sum(points.get(k, 0) for k in ("outlets", "outlets_countertop", "outlets_ip44"))
    if outlets > 0:
        loads.append(LoadEntry(
            description=f"Stikkontakter {room.room_name}",
            category="socket_outlet", rated_power_watts=230.0, quantity=outlets, power_factor=1.0,
        ))

    lights = sum(points.get(k, 0) for k in ("ceiling_lights", "spots", "udendørs_lamper"))
    if lights > 0:
        loads.append(LoadEntry(
            description=f"Belysning {room.room_name}",
            category="lighting", rated_power_watts=60.0, quantity=lights, power_factor=0.95,
        ))

    for kind, description, category, watts, pf, continuous in _APPLIANCE_LOADS[:3]:
        if points.get(kind):
            loads.append(LoadEntry(
                description=description, category=category, rated_power_watts=watts,
                quantity=points[kind], power_factor=pf, is_continuous=continuous,
            ))

    if points.get("gulvvarme_tilslutning"):
        loads.append(LoadEntry(
            description="Gulvvarme",
            category="heating",
            rated_power_watts=FLOOR_HEATING_W_PER_M2 * (room.size_m2 or DEFAULT_AREA_M2),
            quantity=points["gulvvarme_tilslutning"],
            power_factor=1.0,
        ))

    for kind, description, category, watts, pf, continuous in _APPLIANCE_LOADS[3:]:
        if points.get(kind):
            loads.append(LoadEntry(
                description=description, category=category, rated_power_watts=watts,
                quantity=points[kind], power_factor=pf, is_continuous=continuous,
            ))

    return loads


def build_electrical_input(project: ProjectCalculationInput) -> ElectricalProjectInput:
    rooms = [
        ElectricalRoomInput(
            name=room.room_name,
            room_type=room.room_type,
            area_m2=room.size_m2 or DEFAULT_AREA_M2,
            floor=room.floor_number or 0,
            is_wet_room=room.room_type in ELECTRICAL_WET_ROOM_TYPES,
            installation_type=room.installation_type_id,
            ceiling_height_m=room.ceiling_height_m or DEFAULT_CEILING_HEIGHT_M,
            loads=room_loads(room),
        )
        for room in project.rooms
    ]
    return ElectricalProjectInput(
        building_type="residential",
        building_age_years=project.building_age_years,
        supply_phase="3-phase",
        is_renovation=(project.building_age_years or 0) > 0,
        default_installation_method="B2",
        rooms=rooms,
    )


def normalise_result(raw: Union[ElectricalProjectResult, Dict[str, Any]]) -> ElectricalProjectResult:
    if isinstance(raw, ElectricalProjectResult):
        return raw
    return ElectricalProjectResult.model_validate(raw)
