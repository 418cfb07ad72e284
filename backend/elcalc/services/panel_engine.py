"""
Panel requirements: circuit groups, RCD groups and the estimated cost of the
distribution board (el-tavle) for a set of room estimates.

Sizing rules:
  - 1 group per 6 outlet-like points, 1 group per 10 light-like points
  - 1 dedicated group per high-power appliance (oven, induction, EV, floor heating)
  - rooms in RCD_ROOM_TYPES add ceil(room_groups / 2) RCD groups, min 1 overall
  - main breaker upgrade above 20 groups, large enclosure above 12 groups
"""

import logging
import math
from typing import Dict, Iterable, List, Optional

from elcalc.config import PANEL_PRICING, RCD_ROOM_TYPES
from elcalc.models.estimate_models import PanelDetail, PanelRequirements, RoomEstimate
from elcalc.services.rounding import round_money

logger = logging.getLogger("elcalc-panel")

SPECIAL_GROUP_POINT_KINDS = (
    "ovn_tilslutning",
    "induktion_tilslutning",
    "elbil_lader",
    "gulvvarme_tilslutning",
)


def _is_outlet_kind(kind: str) -> bool:
    return "outlet" in kind


def _is_light_kind(kind: str) -> bool:
    return "light" in kind or kind == "spots"


def room_groups(points: Dict[str, int], pricing: Optional[Dict[str, float]] = None) -> Dict[str, int]:
    """Outlet / light / special circuit groups for one room's points."""
    p = {**PANEL_PRICING, **(pricing or {})}
    outlets = sum(q for k, q in points.items() if _is_outlet_kind(k))
    lights = sum(q for k, q in points.items() if _is_light_kind(k))
    outlet_groups = math.ceil(outlets / p["outlets_per_group"])
    light_groups = math.ceil(lights / p["lights_per_group"])
    special_groups = sum(points.get(k, 0) for k in SPECIAL_GROUP_POINT_KINDS)
    return {
        "outlet_groups": outlet_groups,
        "light_groups": light_groups,
        "special_groups": special_groups,
        "total": outlet_groups + light_groups + special_groups,
    }


def calculate_panel_requirements(
    rooms: Iterable[RoomEstimate],
    pricing: Optional[Dict[str, float]] = None,
) -> PanelRequirements:
    p = {**PANEL_PRICING, **(pricing or {})}
    total_groups = 0
    rcd_groups = 0
    details: List[PanelDetail] = []

    for room in rooms:
        g = room_groups(room.points, p)
        if room.room_type in RCD_ROOM_TYPES:
            rcd_groups += math.ceil(g["total"] / 2)
        total_groups += g["total"]

        if g["total"] > 0:
            details.append(PanelDetail(
                description=(
                    f"{room.room_name}: {g['outlet_groups']} stik-grupper, "
                    f"{g['light_groups']} lys-grupper, {g['special_groups']} special-grupper"
                ),
                quantity=g["total"],
                estimated_cost=round_money(
                    g["total"] * p["group_breaker_cost"]
                    + g["special_groups"] * p["special_group_detail_cost"]
                ),
            ))

    rcd_groups = max(rcd_groups, int(p["min_rcd_groups"]))
    main_breaker_upgrade = total_groups > p["main_breaker_threshold"]
    surge_protection = True

    cost = (
        total_groups * p["group_breaker_cost"]
        + rcd_groups * p["rcd_cost"]
        + (p["main_breaker_upgrade_cost"] if main_breaker_upgrade else 0.0)
        + (p["surge_protection_cost"] if surge_protection else 0.0)
        + (p["enclosure_large_cost"] if total_groups > p["enclosure_large_threshold"]
           else p["enclosure_small_cost"])
    )

    logger.debug(f"Panel sizing: {total_groups} groups, {rcd_groups} RCD groups, {cost:.2f} DKK")

    return PanelRequirements(
        total_groups_needed=total_groups,
        rcd_groups_needed=rcd_groups,
        main_breaker_upgrade=main_breaker_upgrade,
        surge_protection_recommended=surge_protection,
        estimated_panel_cost=round_money(cost),
        details=tuple(details),
    )


def panel_install_seconds(panel: PanelRequirements, pricing: Optional[Dict[str, float]] = None) -> int:
    """1 hour per circuit group plus a 2 hour fixed base."""
    p = {**PANEL_PRICING, **(pricing or {})}
    return int(panel.total_groups_needed * p["install_seconds_per_group"] + p["install_base_seconds"])
