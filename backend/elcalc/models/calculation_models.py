"""
Calculation input schemas.

These are the per-call inputs the engine accepts from callers (API routes,
offer builders).  Validation rejects negative quantities and percentages;
optional pricing fields left as ``None`` fall back to FINANCIAL_DEFAULTS.
"""
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoomCalculationInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    room_name: str = Field(..., description="e.g., Køkken, Badeværelse 1. sal")
    room_type: str = Field(..., description="bathroom | kitchen | bedroom | living | ...")
    points: Dict[str, int] = Field(
        default_factory=dict,
        description="Electrical point kind -> quantity, e.g. {'outlets': 6, 'spots': 4}",
    )
    room_template_id: Optional[str] = None
    installation_type_id: Optional[str] = None
    size_m2: Optional[float] = Field(None, ge=0)
    ceiling_height_m: Optional[float] = Field(None, ge=0)
    floor_number: int = 0
    calculation_id: Optional[str] = None
    notes: Optional[str] = None
    sort_order: int = 0

    @field_validator("points")
    @classmethod
    def _no_negative_points(cls, v: Dict[str, int]) -> Dict[str, int]:
        for kind, qty in v.items():
            if qty < 0:
                raise ValueError(f"point quantity for '{kind}' must be >= 0, got {qty}")
        return v


class ProjectCalculationInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    rooms: List[RoomCalculationInput] = Field(default_factory=list)
    building_type: Optional[str] = Field(None, description="residential | commercial | industrial")
    building_age_years: Optional[int] = Field(None, ge=0)
    hourly_rate: Optional[float] = Field(None, ge=0, description="0/None -> engine hourly rate")
    overhead_percentage: Optional[float] = Field(None, ge=0)
    risk_percentage: Optional[float] = Field(None, ge=0)
    margin_percentage: Optional[float] = Field(None, ge=0)
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    vat_percentage: Optional[float] = Field(None, ge=0)
    customer_id: Optional[str] = None
    calculation_id: Optional[str] = None


class ProfitSimulationInput(BaseModel):
    """Inputs for the margin / discount what-if table."""
    model_config = ConfigDict(frozen=True)

    hourly_rate: float = Field(..., ge=0)
    total_hours: float = Field(..., ge=0)
    material_cost: float = Field(..., ge=0)
    overhead_percentage: float = Field(12.0, ge=0)
    risk_percentage: float = Field(3.0, ge=0)
    margin_percentage: float = Field(25.0, ge=0)
    discount_percentage: float = Field(0.0, ge=0, le=100)
    vat_percentage: float = Field(25.0, ge=0)


class BreakdownRef(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", from_attributes=True)

    type: str
    subtype: Optional[str] = None


class AnomalyRoom(BaseModel):
    """
    The slice of a room estimate the anomaly checks read.  Accepts a
    RoomEstimate itself or its to_dict() payload; extra keys are ignored.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", from_attributes=True)

    room_name: str
    room_type: str
    points: Dict[str, int] = Field(default_factory=dict)
    component_breakdown: List[BreakdownRef] = Field(default_factory=list)

    @field_validator("points", mode="before")
    @classmethod
    def _points_as_dict(cls, v):
        if isinstance(v, Mapping) and not isinstance(v, dict):
            return dict(v)
        return v


class AnomalyCheckInput(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    calculation_id: Optional[str] = None
    rooms: List[AnomalyRoom] = Field(default_factory=list)
    total_hours: float = Field(0.0, ge=0)
    cost_price: float = Field(0.0, ge=0)
    margin_percentage: float = 0.0
    material_cost: float = Field(0.0, ge=0)
