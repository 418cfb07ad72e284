"""
CalculationIntelligenceEngine: room-based estimation for electrical
installation offers.

Covers:
  - Component time lookup with installation-type multipliers
  - Per-room time / material / cable / labour estimates
  - Panel (el-tavle) sizing and cable summary
  - Other direct costs (transport, special tool rental)
  - Pricing waterfall: cost price -> overhead -> risk -> margin -> discount -> VAT
  - Risk analysis and offer OBS notices
  - Optional electrical-engineering pass through an injected calculator

The engine captures its catalog lookup maps once at construction and never
mutates them, so one instance can serve concurrent requests.  Build a new
instance when the catalog changes.
"""

import logging
import time
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from elcalc.config import FINANCIAL_DEFAULTS
from elcalc.models.calculation_models import ProjectCalculationInput, RoomCalculationInput
from elcalc.models.catalog_schema import (
    CalculationCatalog,
    ComponentTimeIntelligence,
    InstallationType,
    RoomTemplate,
)
from elcalc.models.estimate_models import (
    CableSummary,
    ComponentTime,
    PanelRequirements,
    ProjectEstimate,
    RiskAnalysisResult,
    RoomEstimate,
)
from elcalc.services.cable_engine import calculate_cable_summary
from elcalc.services.compliance_engine import generate_obs_points, merge_electrical_result
from elcalc.services.component_time import ComponentTimeLookup
from elcalc.services.costing_engine import apply_financials, estimate_other_costs, resolve_financials
from elcalc.services.electrical_bridge import (
    ElectricalCalculator,
    build_electrical_input,
    normalise_result,
)
from elcalc.services.panel_engine import calculate_panel_requirements, panel_install_seconds
from elcalc.services.risk_engine import RiskAnalyzer
from elcalc.services.room_estimator import RoomEstimator
from elcalc.services.rounding import round_money

logger = logging.getLogger("elcalc-engine")


class CalculationIntelligenceEngine:
    """
    Parameters
    ----------
    component_times, installation_types, room_templates:
        Catalog records.  Inactive records are ignored.
    hourly_rate:
        Default DKK labour rate; a project may override it.
    financial_rates:
        Overrides for FINANCIAL_DEFAULTS percentages.
    pricing_config:
        Optional sections overriding config defaults:
        ``panel`` (PANEL_PRICING), ``cable_costs`` (CABLE_COST_PER_METER),
        ``other_costs`` (OTHER_COST_RATES), ``risk`` (RISK_THRESHOLDS),
        ``room`` (ROOM_RULES).
    """

    def __init__(
        self,
        component_times: Iterable[ComponentTimeIntelligence] = (),
        installation_types: Iterable[InstallationType] = (),
        room_templates: Iterable[RoomTemplate] = (),
        hourly_rate: float = FINANCIAL_DEFAULTS["hourly_rate"],
        financial_rates: Optional[Dict[str, float]] = None,
        pricing_config: Optional[Dict[str, Dict[str, float]]] = None,
    ):
        cfg = pricing_config or {}
        self.hourly_rate = hourly_rate
        self.financial_defaults = {**FINANCIAL_DEFAULTS, **(financial_rates or {}), "hourly_rate": hourly_rate}
        self.panel_pricing = cfg.get("panel")
        self.cable_costs = cfg.get("cable_costs")
        self.other_cost_rates = cfg.get("other_costs")

        self.lookup = ComponentTimeLookup(component_times, installation_types)
        self.room_estimator = RoomEstimator(self.lookup, room_templates, hourly_rate, cfg.get("room"))
        self.risk_analyzer = RiskAnalyzer(self.lookup, cfg.get("risk"))

    @classmethod
    def from_catalog(cls, catalog: CalculationCatalog, **kwargs) -> "CalculationIntelligenceEngine":
        return cls(catalog.component_times, catalog.installation_types, catalog.room_templates, **kwargs)

    @classmethod
    def from_default_catalog(cls, **kwargs) -> "CalculationIntelligenceEngine":
        from elcalc.services.catalog_engine import default_catalog
        return cls.from_catalog(default_catalog(), **kwargs)

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def get_component_time(
        self,
        component_type: str,
        component_subtype: Optional[str] = None,
        installation_type_id: Optional[str] = None,
        quantity: int = 1,
    ) -> ComponentTime:
        return self.lookup.get_component_time(component_type, component_subtype, installation_type_id, quantity)

    def calculate_room(self, room: RoomCalculationInput, hourly_rate: Optional[float] = None) -> RoomEstimate:
        return self.room_estimator.calculate_room(room, hourly_rate)

    def calculate_panel_requirements(self, rooms: Iterable[RoomEstimate]) -> PanelRequirements:
        return calculate_panel_requirements(rooms, self.panel_pricing)

    def calculate_cable_summary(self, rooms: Iterable[RoomEstimate]) -> CableSummary:
        return calculate_cable_summary(rooms, self.lookup, self.cable_costs)

    def analyze_risks(
        self, project: ProjectCalculationInput, rooms: Iterable[RoomEstimate], cost_price: float
    ) -> RiskAnalysisResult:
        return self.risk_analyzer.analyze_risks(project, rooms, cost_price)

    # ------------------------------------------------------------------
    # Project estimate
    # ------------------------------------------------------------------

    def calculate_project(self, project: ProjectCalculationInput) -> ProjectEstimate:
        started = time.perf_counter()
        fin = resolve_financials(project, self.financial_defaults)
        rate = fin["hourly_rate"]

        rooms = tuple(self.calculate_room(room, rate) for room in project.rooms)

        total_seconds = sum(r.total_time_seconds for r in rooms)
        material_cost = sum(r.total_material_cost for r in rooms)
        cable_meters = sum(r.total_cable_meters for r in rooms)
        warnings: List[str] = [w for r in rooms for w in r.warnings]

        panel = self.calculate_panel_requirements(rooms)
        cables = self.calculate_cable_summary(rooms)
        material_cost += panel.estimated_panel_cost + cables.total_cable_cost
        total_seconds += panel_install_seconds(panel, self.panel_pricing)

        labor_hours = total_seconds / 3600
        labor_cost = labor_hours * rate
        other_costs = estimate_other_costs(project.rooms, labor_hours, self.lookup, self.other_cost_rates)
        cost_price = material_cost + labor_cost + other_costs

        price = apply_financials(cost_price, labor_hours, fin)
        risk = self.analyze_risks(project, rooms, cost_price)
        obs_points = generate_obs_points(project, rooms, risk, self.lookup, self.risk_analyzer.t)

        estimate = ProjectEstimate(
            rooms=rooms,
            panel_requirements=panel,
            cable_summary=cables,
            total_time_seconds=int(total_seconds),
            total_labor_hours=round_money(labor_hours),
            total_material_cost=round_money(material_cost),
            total_cable_meters=round_money(cable_meters),
            total_labor_cost=round_money(labor_cost),
            total_other_costs=round_money(other_costs),
            cost_price=price.cost_price,
            overhead_amount=price.overhead_amount,
            risk_amount=price.risk_amount,
            sales_basis=price.sales_basis,
            margin_amount=price.margin_amount,
            sale_price_excl_vat=price.sale_price_excl_vat,
            discount_amount=price.discount_amount,
            net_price=price.net_price,
            vat_amount=price.vat_amount,
            final_amount=price.final_amount,
            db_amount=price.db_amount,
            db_percentage=price.db_percentage,
            db_per_hour=price.db_per_hour,
            warnings=tuple(warnings),
            obs_points=tuple(obs_points),
            risk_analysis=risk,
        )

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"Project calculated: {len(rooms)} rooms, {estimate.total_labor_hours} h, "
            f"final {estimate.final_amount} DKK",
            extra={"calculation_id": project.calculation_id, "duration_ms": duration_ms},
        )
        return estimate

    def calculate_project_with_electrical(
        self,
        project: ProjectCalculationInput,
        electrical_calculator: ElectricalCalculator,
    ) -> ProjectEstimate:
        """
        calculate_project plus the electrical-engineering pass.  A failing
        calculator never fails the estimate: the base estimate is returned
        with ``electrical=None``.
        """
        base = self.calculate_project(project)
        try:
            result = normalise_result(electrical_calculator(build_electrical_input(project)))
        except Exception as e:
            logger.warning(
                f"Electrical calculation failed, returning base estimate: {e}",
                exc_info=True,
                extra={"calculation_id": project.calculation_id},
            )
            return replace(base, electrical=None)

        warnings, obs_points = merge_electrical_result(base.warnings, base.obs_points, result)
        electrical: Dict[str, Any] = result.model_dump()
        return replace(base, warnings=warnings, obs_points=obs_points, electrical=electrical)

    # ------------------------------------------------------------------

    def catalog_summary(self) -> Dict[str, int]:
        return {
            "component_times": len(self.lookup.component_times),
            "installation_types": len(self.lookup.installation_types),
            "room_templates": len(self.room_estimator.room_templates),
        }
