"""Profit simulator: the same offer priced under alternative margin/discount scenarios."""
import logging
from typing import List, Optional, Sequence, Tuple

from elcalc.models.calculation_models import ProfitSimulationInput
from elcalc.models.estimate_models import ProfitScenario, ProfitSimulationResult
from elcalc.services.costing_engine import apply_pricing_waterfall
from elcalc.services.rounding import round_money

logger = logging.getLogger("elcalc-profit")

# (name, margin %, discount %); None means "use the input's value"
DEFAULT_SCENARIOS: Tuple[Tuple[str, Optional[float], Optional[float]], ...] = (
    ("Minimal margin", 10.0, 0.0),
    ("Lav margin", 15.0, 0.0),
    ("Standard margin", None, None),
    ("Høj margin", 30.0, 0.0),
    ("Premium margin", 40.0, 0.0),
    ("Med 5% rabat", None, 5.0),
    ("Med 10% rabat", None, 10.0),
)


def simulate_profit(
    sim: ProfitSimulationInput,
    scenarios: Sequence[Tuple[str, Optional[float], Optional[float]]] = DEFAULT_SCENARIOS,
) -> ProfitSimulationResult:
    labor_cost = sim.hourly_rate * sim.total_hours
    cost_price = sim.material_cost + labor_cost

    def price_at(margin: float, discount: float):
        return apply_pricing_waterfall(
            cost_price,
            sim.total_hours,
            overhead_percentage=sim.overhead_percentage,
            risk_percentage=sim.risk_percentage,
            margin_percentage=margin,
            discount_percentage=discount,
            vat_percentage=sim.vat_percentage,
        )

    # overhead, risk and sales basis do not depend on margin or discount
    base = price_at(0.0, 0.0)

    rows: List[ProfitScenario] = []
    for name, margin, discount in scenarios:
        margin = sim.margin_percentage if margin is None else margin
        discount = sim.discount_percentage if discount is None else discount
        price = price_at(margin, discount)
        rows.append(ProfitScenario(
            name=name,
            margin_percentage=margin,
            discount_percentage=discount,
            sale_price_excl_vat=price.sale_price_excl_vat,
            discount_amount=price.discount_amount,
            net_price=price.net_price,
            vat_amount=price.vat_amount,
            final_amount=price.final_amount,
            db_amount=price.db_amount,
            db_percentage=price.db_percentage,
            db_per_hour=price.db_per_hour,
        ))

    logger.debug(f"Profit simulation: cost price {base.cost_price}, {len(rows)} scenarios")

    return ProfitSimulationResult(
        cost_price=base.cost_price,
        labor_cost=round_money(labor_cost),
        material_cost=round_money(sim.material_cost),
        overhead_amount=base.overhead_amount,
        risk_amount=base.risk_amount,
        sales_basis=base.sales_basis,
        scenarios=tuple(rows),
    )
