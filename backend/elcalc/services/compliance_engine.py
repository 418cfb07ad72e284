"""
Offer compliance notices ("OBS points").

OBS points are printed verbatim on the customer offer, so the texts are kept
in Danish.  The panel-capacity disclaimer is always last.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from elcalc.config import RISK_THRESHOLDS
from elcalc.models.calculation_models import ProjectCalculationInput
from elcalc.models.estimate_models import RiskAnalysisResult, RoomEstimate
from elcalc.services.component_time import ComponentTimeLookup
from elcalc.services.electrical_bridge import ElectricalProjectResult

logger = logging.getLogger("elcalc-compliance")


# ── OBS texts ─────────────────────────────────────────────────────────────────
OBS_OLD_INSTALLATION = (
    "OBS: Ved ældre installationer kan der forekomme behov for udskiftning af "
    "eksisterende kabler og dåser, som ikke er inkluderet i dette tilbud."
)
OBS_CONCRETE_MASONRY = (
    "OBS: Ved boring/fræsning i beton/mur kan der forekomme støjgener. "
    "Malerarbejde og reetablering af overflader er ikke inkluderet."
)
OBS_WET_ROOM = (
    "OBS: Installation i vådrum udføres iht. DS/HD 60364 zonebestemmelser. "
    "Alle materialer er IP44 eller bedre."
)
OBS_EV_CHARGER = (
    "OBS: Elbilslader kræver dedikeret gruppe i tavlen. "
    "Tilslutning forudsætter tilstrækkelig kapacitet i hovedtilslutningen."
)
OBS_HIGH_RISK = (
    "OBS: Projektet har en forhøjet risikoprofil (score: {score}/5). "
    "Der er tillagt {buffer}% risikobuffer."
)
OBS_PANEL_CAPACITY = (
    "OBS: Tilbuddet forudsætter tilstrækkelig plads i eksisterende el-tavle. "
    "Evt. tavleudvidelse eller ny tavle er estimeret men kan variere."
)

SURFACE_REINSTATEMENT_CODES = frozenset({"BETON", "MUR"})


def generate_obs_points(
    project: ProjectCalculationInput,
    rooms: Iterable[RoomEstimate],
    risk: RiskAnalysisResult,
    lookup: ComponentTimeLookup,
    thresholds: Optional[Dict[str, float]] = None,
) -> List[str]:
    t = {**RISK_THRESHOLDS, **(thresholds or {})}
    rooms = list(rooms)
    obs: List[str] = []

    age = project.building_age_years
    if age and age > t["old_building_years"]:
        obs.append(OBS_OLD_INSTALLATION)

    for room in project.rooms:
        install_type = lookup.get_installation_type(room.installation_type_id)
        if install_type is not None and install_type.code in SURFACE_REINSTATEMENT_CODES:
            obs.append(OBS_CONCRETE_MASONRY)
            break

    if any(r.room_type == "bathroom" for r in rooms):
        obs.append(OBS_WET_ROOM)

    if any(r.points.get("elbil_lader", 0) > 0 for r in rooms):
        obs.append(OBS_EV_CHARGER)

    if risk.risk_level in ("high", "critical"):
        obs.append(OBS_HIGH_RISK.format(score=risk.risk_score, buffer=risk.recommended_buffer_percentage))

    obs.append(OBS_PANEL_CAPACITY)
    return obs


def merge_electrical_result(
    warnings: Iterable[str],
    obs_points: Iterable[str],
    result: ElectricalProjectResult,
) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """
    Append the electrical pass's warnings, and turn each error-severity
    compliance issue into a FEJL line on the offer.
    """
    merged_warnings = tuple(warnings) + tuple(result.warnings)
    errors = []
    if not result.compliance.compliant:
        errors = [
            f"FEJL: {issue.description} ({issue.standard_ref})"
            for issue in result.compliance.issues
            if issue.severity == "error"
        ]
    if errors:
        logger.warning(f"Electrical compliance: {len(errors)} error(s) added to offer notices")
    return merged_warnings, tuple(obs_points) + tuple(errors)
