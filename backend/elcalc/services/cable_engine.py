"""Cable summary: metres and cost per cable type across all rooms."""

import logging
from typing import Dict, Iterable, Optional

from elcalc.config import (
    CABLE_COST_PER_METER,
    DEFAULT_CABLE_COST_PER_METER,
    DEFAULT_CABLE_TYPE,
    UNKNOWN_CABLE_COST_PER_METER,
)
from elcalc.models.estimate_models import CableSummary, CableTypeTotal, RoomEstimate
from elcalc.services.component_time import ComponentTimeLookup
from elcalc.services.rounding import round_money

logger = logging.getLogger("elcalc-cable")


def calculate_cable_summary(
    rooms: Iterable[RoomEstimate],
    lookup: ComponentTimeLookup,
    cable_costs: Optional[Dict[str, float]] = None,
) -> CableSummary:
    """
    Aggregate breakdown cable metres by cable type.

    The cable type is resolved from the catalog by (type, subtype) regardless
    of installation type.  Components without a catalog row are costed as
    DEFAULT_CABLE_TYPE; catalog cable types missing from the cost table are
    costed at UNKNOWN_CABLE_COST_PER_METER.  Types keep first-seen order.
    """
    costs = {**CABLE_COST_PER_METER, **(cable_costs or {})}
    per_type: Dict[str, Dict[str, float]] = {}

    for room in rooms:
        for comp in room.component_breakdown:
            if comp.cable_meters <= 0:
                continue
            cable_type = lookup.cable_type_for(comp.type, comp.subtype)
            if cable_type:
                cost_per_meter = costs.get(cable_type, UNKNOWN_CABLE_COST_PER_METER)
            else:
                cable_type = DEFAULT_CABLE_TYPE
                cost_per_meter = costs.get(DEFAULT_CABLE_TYPE, DEFAULT_CABLE_COST_PER_METER)

            entry = per_type.setdefault(cable_type, {"meters": 0.0, "cost_per_meter": cost_per_meter})
            entry["meters"] += comp.cable_meters

    cable_types = tuple(
        CableTypeTotal(
            type=cable_type,
            total_meters=round_money(entry["meters"]),
            estimated_cost_per_meter=entry["cost_per_meter"],
            total_cost=round_money(entry["meters"] * entry["cost_per_meter"]),
        )
        for cable_type, entry in per_type.items()
    )

    unknown = [ct.type for ct in cable_types if ct.type not in costs]
    if unknown:
        logger.warning(f"No cable price for {unknown}, using {UNKNOWN_CABLE_COST_PER_METER} DKK/m")

    return CableSummary(
        cable_types=cable_types,
        total_meters=round_money(sum(ct.total_meters for ct in cable_types)),
        total_cable_cost=round_money(sum(ct.total_cost for ct in cable_types)),
    )
