"""
Result records produced by the calculation engine.

All records are frozen dataclasses: built once per calculation call and never
mutated afterwards.  ``to_dict()`` gives a plain JSON-ready payload (tuples
become lists) for API responses and storage by the calling layer.
"""
from dataclasses import dataclass, field, fields, is_dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    return value


class _Record:
    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)


# ---------------------------------------------------------------------------
# Component / room level
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MaterialLine(_Record):
    name: str
    quantity: float
    unit: str
    unit_cost: float = 0.0   # priced later by supplier lookup
    total_cost: float = 0.0


@dataclass(frozen=True)
class ComponentTime(_Record):
    total_time_seconds: int
    install_time_seconds: int
    wiring_time_seconds: int
    finishing_time_seconds: int
    cable_meters: float
    cable_type: str
    material_cost: float
    materials: Tuple[MaterialLine, ...] = ()
    match_level: str = "exact"  # exact | subtype | type | default


@dataclass(frozen=True)
class ComponentBreakdownItem(_Record):
    type: str
    subtype: Optional[str]
    quantity: int
    time_seconds: int
    material_cost: float
    cable_meters: float
    cable_type: str = ""
    materials: Tuple[MaterialLine, ...] = ()


@dataclass(frozen=True)
class RoomEstimate(_Record):
    room_name: str
    room_type: str
    points: Mapping[str, int]
    total_time_seconds: int
    total_material_cost: float
    total_cable_meters: float
    total_labor_cost: float
    total_cost: float
    component_breakdown: Tuple[ComponentBreakdownItem, ...] = ()
    warnings: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    installation_type_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.points, MappingProxyType):
            object.__setattr__(self, "points", MappingProxyType(dict(self.points)))

    def __hash__(self):
        return hash((self.room_name, self.room_type, tuple(sorted(self.points.items())),
                     self.total_time_seconds, self.total_cost, self.component_breakdown))

    @property
    def total_points(self) -> int:
        return sum(self.points.values())


# ---------------------------------------------------------------------------
# Project level
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PanelDetail(_Record):
    description: str
    quantity: int
    estimated_cost: float


@dataclass(frozen=True)
class PanelRequirements(_Record):
    total_groups_needed: int
    rcd_groups_needed: int
    main_breaker_upgrade: bool
    surge_protection_recommended: bool
    estimated_panel_cost: float
    details: Tuple[PanelDetail, ...] = ()


@dataclass(frozen=True)
class CableTypeTotal(_Record):
    type: str
    total_meters: float
    estimated_cost_per_meter: float
    total_cost: float


@dataclass(frozen=True)
class CableSummary(_Record):
    cable_types: Tuple[CableTypeTotal, ...]
    total_meters: float
    total_cable_cost: float


@dataclass(frozen=True)
class RiskFactor(_Record):
    type: str          # old_building | difficult_installation | large_project | high_value | wet_rooms
    description: str
    severity: str      # low | medium | high
    impact_percentage: float


@dataclass(frozen=True)
class RiskAnalysisResult(_Record):
    risk_score: int    # 1..5
    risk_level: str    # low | medium | high | critical
    factors: Tuple[RiskFactor, ...]
    recommended_buffer_percentage: int


@dataclass(frozen=True)
class PriceBreakdown(_Record):
    """Rounded output of the pricing waterfall (DKK)."""
    cost_price: float
    overhead_amount: float
    risk_amount: float
    sales_basis: float
    margin_amount: float
    sale_price_excl_vat: float
    discount_amount: float
    net_price: float
    vat_amount: float
    final_amount: float
    db_amount: float
    db_percentage: float
    db_per_hour: float


@dataclass(frozen=True)
class ProjectEstimate(_Record):
    rooms: Tuple[RoomEstimate, ...]
    panel_requirements: PanelRequirements
    cable_summary: CableSummary
    total_time_seconds: int
    total_labor_hours: float
    total_material_cost: float
    total_cable_meters: float
    total_labor_cost: float
    total_other_costs: float
    cost_price: float
    overhead_amount: float
    risk_amount: float
    sales_basis: float
    margin_amount: float
    sale_price_excl_vat: float
    discount_amount: float
    net_price: float
    vat_amount: float
    final_amount: float
    db_amount: float
    db_percentage: float
    db_per_hour: float
    warnings: Tuple[str, ...]
    obs_points: Tuple[str, ...]
    risk_analysis: RiskAnalysisResult
    electrical: Optional[Dict[str, Any]] = None


# ---------------------------------------------------------------------------
# Simulation / anomaly results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProfitScenario(_Record):
    name: str
    margin_percentage: float
    discount_percentage: float
    sale_price_excl_vat: float
    discount_amount: float
    net_price: float
    vat_amount: float
    final_amount: float
    db_amount: float
    db_percentage: float
    db_per_hour: float


@dataclass(frozen=True)
class ProfitSimulationResult(_Record):
    cost_price: float
    labor_cost: float
    material_cost: float
    overhead_amount: float
    risk_amount: float
    sales_basis: float
    scenarios: Tuple[ProfitScenario, ...]


@dataclass(frozen=True)
class Anomaly(_Record):
    anomaly_type: str   # time_outlier | margin_warning | missing_rcd | price_deviation
    severity: str       # info | warning | critical
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
