"""
RoomEstimator: turns a room's electrical point counts into time, material,
cable and labour totals plus installer warnings and recommendations.

Point kinds are the Danish electrical vocabulary used on site surveys
("stikkontakter", "spots", "hpfi_afbrydere" ...).  Each kind maps to one
catalog component (type, subtype).  Unknown kinds are skipped.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional

from elcalc.config import FINANCIAL_DEFAULTS, ROOM_RULES
from elcalc.models.calculation_models import RoomCalculationInput
from elcalc.models.catalog_schema import RoomTemplate
from elcalc.models.estimate_models import ComponentBreakdownItem, RoomEstimate
from elcalc.services.component_time import ComponentTimeLookup
from elcalc.services.rounding import round_money, round_seconds

logger = logging.getLogger("elcalc-room")


class ComponentRef(NamedTuple):
    type: str
    subtype: str


# ---------------------------------------------------------------------------
# Point kind -> catalog component
# ---------------------------------------------------------------------------
POINT_TO_COMPONENT: Mapping[str, ComponentRef] = MappingProxyType({
    # Outlets
    "outlets":                  ComponentRef("outlet", "single"),
    "outlets_countertop":       ComponentRef("outlet", "double"),
    "outlets_ip44":             ComponentRef("outlet", "ip44"),
    "data_points":              ComponentRef("outlet", "data"),
    "tv_udtag":                 ComponentRef("outlet", "data"),
    # Switches
    "switches":                 ComponentRef("switch", "single"),
    # Lighting
    "ceiling_lights":           ComponentRef("light", "ceiling"),
    "spots":                    ComponentRef("light", "spot"),
    "udendørs_lamper":          ComponentRef("light", "outdoor_wall"),
    "havepæle":                 ComponentRef("light", "garden_pole"),
    # Appliance connections
    "ventilation":              ComponentRef("appliance", "ventilation"),
    "emhætte_tilslutning":      ComponentRef("appliance", "ventilation"),
    "gulvvarme_tilslutning":    ComponentRef("appliance", "floor_heating"),
    "ovn_tilslutning":          ComponentRef("appliance", "oven_3phase"),
    "induktion_tilslutning":    ComponentRef("appliance", "induction"),
    "elbil_lader":              ComponentRef("appliance", "ev_charger"),
    "opvaskemaskine":           ComponentRef("outlet", "single"),
    "vaskemaskine":             ComponentRef("outlet", "single"),
    "tørretumbler":             ComponentRef("outlet", "single"),
    # Panel
    "gruppeafbrydere":          ComponentRef("panel", "group_breaker"),
    "hpfi_afbrydere":           ComponentRef("panel", "rcd"),
    "hovedafbryder":            ComponentRef("panel", "main_breaker"),
    "overspændingsbeskyttelse": ComponentRef("panel", "surge_protection"),
})

RCD_POINT_KIND = "hpfi_afbrydere"


def format_number(value: float) -> str:
    """2.0 -> '2', 2.2 -> '2.2' (as printed on offers)."""
    return f"{value:g}"


class RoomEstimator:
    """Per-room estimation over a shared ComponentTimeLookup."""

    def __init__(
        self,
        lookup: ComponentTimeLookup,
        room_templates: Iterable[RoomTemplate] = (),
        hourly_rate: float = FINANCIAL_DEFAULTS["hourly_rate"],
        room_rules: Optional[Dict[str, float]] = None,
    ):
        self.lookup = lookup
        self._room_templates: Mapping[str, RoomTemplate] = MappingProxyType(
            {rt.id: rt for rt in room_templates if rt.is_active}
        )
        self.hourly_rate = hourly_rate
        self.rules = {**ROOM_RULES, **(room_rules or {})}

    @property
    def room_templates(self) -> Mapping[str, RoomTemplate]:
        return self._room_templates

    def calculate_room(
        self, room: RoomCalculationInput, hourly_rate: Optional[float] = None
    ) -> RoomEstimate:
        rate = hourly_rate or self.hourly_rate
        template = self._room_templates.get(room.room_template_id) if room.room_template_id else None
        install_type = self.lookup.get_installation_type(room.installation_type_id)

        points = dict(room.points)
        breakdown: List[ComponentBreakdownItem] = []
        total_seconds = 0
        material_cost = 0.0
        cable_meters = 0.0

        for kind, quantity in points.items():
            if quantity <= 0:
                continue
            ref = POINT_TO_COMPONENT.get(kind)
            if ref is None:
                logger.debug(f"Skipping unknown point kind '{kind}' in {room.room_name}")
                continue

            ct = self.lookup.get_component_time(ref.type, ref.subtype, room.installation_type_id, quantity)
            total_seconds += ct.total_time_seconds
            material_cost += ct.material_cost
            cable_meters += ct.cable_meters
            breakdown.append(ComponentBreakdownItem(
                type=ref.type,
                subtype=ref.subtype,
                quantity=quantity,
                time_seconds=ct.total_time_seconds,
                material_cost=ct.material_cost,
                cable_meters=ct.cable_meters,
                cable_type=ct.cable_type,
                materials=ct.materials,
            ))

        warnings: List[str] = []
        recommendations: List[str] = []

        if template is not None:
            for req in template.special_requirements:
                warnings.append(f"{req.requirement}: {req.description}")
            if template.recommended_rcd and not points.get(RCD_POINT_KIND):
                recommendations.append(
                    f"Anbefalet: HPFI/RCD beskyttelse for {room.room_name} ({template.room_type})"
                )

        if install_type is not None:
            if install_type.difficulty_multiplier > self.rules["difficulty_warning_threshold"]:
                warnings.append(
                    f"Sværhedsgrad: {install_type.name} kræver ekstra tid "
                    f"(×{format_number(install_type.difficulty_multiplier)})"
                )
            special_tools = install_type.special_tools
            if special_tools:
                recommendations.append(
                    "Specialværktøj påkrævet: " + ", ".join(t.tool_name for t in special_tools)
                )

        if room.size_m2:
            outlets_per_m2 = points.get("outlets", 0) / room.size_m2
            if outlets_per_m2 < self.rules["min_outlets_per_m2"]:
                recommendations.append(
                    f"Få stikkontakter per m² ({outlets_per_m2:.2f}/m²). Overvej flere for komfort."
                )

        # Labour is priced on the unscaled time; the height premium only
        # shows up in the reported seconds.
        labor_cost = total_seconds / 3600 * rate

        height = room.ceiling_height_m
        if height and height > self.rules["ceiling_height_threshold_m"]:
            total_seconds = round_seconds(total_seconds * height / self.rules["standard_ceiling_height_m"])
            warnings.append(f"Forhøjet lofthøjde ({format_number(height)}m) - ekstra tid tillagt")

        return RoomEstimate(
            room_name=room.room_name,
            room_type=room.room_type,
            points=points,
            total_time_seconds=total_seconds,
            total_material_cost=round_money(material_cost),
            total_cable_meters=round_money(cable_meters),
            total_labor_cost=round_money(labor_cost),
            total_cost=round_money(material_cost + labor_cost),
            component_breakdown=tuple(breakdown),
            warnings=tuple(warnings),
            recommendations=tuple(recommendations),
            installation_type_id=room.installation_type_id,
        )
