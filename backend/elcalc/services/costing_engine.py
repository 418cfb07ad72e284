"""
Costing: the offer pricing waterfall and the "other costs" estimate.

Waterfall order (each step a percentage of the running basis):

    overhead  = cost_price  × overhead%
    risk      = cost_price  × risk%
    basis     = cost_price + overhead + risk
    margin    = basis       × margin%
    sale      = basis + margin                 (excl. VAT)
    discount  = sale        × discount%
    net       = sale - discount
    vat       = net         × vat%
    final     = net + vat

DB (dækningsbidrag) = net - cost_price.  Reordering any step changes the
final price, so callers must always go through apply_pricing_waterfall.
Rounding to 2 decimals happens once, on the finished figures.
"""

import math
import logging
from typing import Any, Dict, Iterable, Optional

from elcalc.config import FINANCIAL_DEFAULTS, OTHER_COST_RATES
from elcalc.models.calculation_models import RoomCalculationInput
from elcalc.models.estimate_models import PriceBreakdown
from elcalc.services.component_time import ComponentTimeLookup
from elcalc.services.rounding import round_money

logger = logging.getLogger("elcalc-costing")

_PERCENTAGE_KEYS = (
    "overhead_percentage",
    "risk_percentage",
    "margin_percentage",
    "discount_percentage",
    "vat_percentage",
)


# ---------------------------------------------------------------------------
# Rate resolution
# ---------------------------------------------------------------------------

def resolve_financials(
    overrides: Optional[Any] = None,
    defaults: Optional[Dict[str, float]] = None,
) -> Dict[str, float]:
    """
    Merge per-call overrides (a ProjectCalculationInput or a plain dict) over
    the defaults.  Percentages fall back only when None; an hourly rate of 0
    or None falls back to the default rate.
    """
    base = {**FINANCIAL_DEFAULTS, **(defaults or {})}
    if overrides is None:
        return base
    get = overrides.get if isinstance(overrides, dict) else (lambda k: getattr(overrides, k, None))

    resolved = dict(base)
    rate = get("hourly_rate")
    if rate:
        resolved["hourly_rate"] = float(rate)
    for key in _PERCENTAGE_KEYS:
        value = get(key)
        if value is not None:
            resolved[key] = float(value)
    return resolved


# ---------------------------------------------------------------------------
# Waterfall
# ---------------------------------------------------------------------------

def apply_pricing_waterfall(
    cost_price: float,
    labor_hours: float,
    overhead_percentage: float = FINANCIAL_DEFAULTS["overhead_percentage"],
    risk_percentage: float = FINANCIAL_DEFAULTS["risk_percentage"],
    margin_percentage: float = FINANCIAL_DEFAULTS["margin_percentage"],
    discount_percentage: float = FINANCIAL_DEFAULTS["discount_percentage"],
    vat_percentage: float = FINANCIAL_DEFAULTS["vat_percentage"],
) -> PriceBreakdown:
    overhead = cost_price * (overhead_percentage / 100)
    risk = cost_price * (risk_percentage / 100)
    sales_basis = cost_price + overhead + risk

    margin = sales_basis * (margin_percentage / 100)
    sale_excl_vat = sales_basis + margin

    discount = sale_excl_vat * (discount_percentage / 100)
    net_price = sale_excl_vat - discount

    vat = net_price * (vat_percentage / 100)
    final = net_price + vat

    db_amount = net_price - cost_price
    db_percentage = (db_amount / net_price) * 100 if net_price > 0 else 0.0
    db_per_hour = db_amount / labor_hours if labor_hours > 0 else 0.0

    return PriceBreakdown(
        cost_price=round_money(cost_price),
        overhead_amount=round_money(overhead),
        risk_amount=round_money(risk),
        sales_basis=round_money(sales_basis),
        margin_amount=round_money(margin),
        sale_price_excl_vat=round_money(sale_excl_vat),
        discount_amount=round_money(discount),
        net_price=round_money(net_price),
        vat_amount=round_money(vat),
        final_amount=round_money(final),
        db_amount=round_money(db_amount),
        db_percentage=round_money(db_percentage),
        db_per_hour=round_money(db_per_hour),
    )


def apply_financials(cost_price: float, labor_hours: float, financials: Dict[str, float]) -> PriceBreakdown:
    """apply_pricing_waterfall with the percentages taken from a resolve_financials() dict."""
    return apply_pricing_waterfall(
        cost_price,
        labor_hours,
        **{key: financials[key] for key in _PERCENTAGE_KEYS},
    )


# ---------------------------------------------------------------------------
# Other direct costs
# ---------------------------------------------------------------------------

def estimate_other_costs(
    rooms: Iterable[RoomCalculationInput],
    labor_hours: float,
    lookup: ComponentTimeLookup,
    rates: Optional[Dict[str, float]] = None,
) -> float:
    """
    Transport per started work day plus rental per special tool.

    Special tools are counted once per room using an installation type that
    requires them (two BETON rooms rent the concrete saw twice).
    """
    r = {**OTHER_COST_RATES, **(rates or {})}
    work_days = math.ceil(labor_hours / r["hours_per_work_day"])
    transport = work_days * r["transport_per_day"]

    tool_rental = 0.0
    for room in rooms:
        install_type = lookup.get_installation_type(room.installation_type_id)
        if install_type is not None:
            tool_rental += len(install_type.special_tools) * r["special_tool_rental"]

    logger.debug(f"Other costs: {work_days} work days, {tool_rental:.2f} DKK tool rental")
    return round_money(transport + tool_rental)
