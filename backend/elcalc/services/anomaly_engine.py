"""
Anomaly detection: flags calculations that look wrong before they are sent.

Each check runs independently, so one input can raise several anomalies
(a 8 % margin is both a low-margin warning and a critical-margin anomaly).
The engine never blocks; callers decide what a "critical" anomaly means.
"""
import logging
from typing import Dict, List, Optional

from elcalc.config import ANOMALY_THRESHOLDS, WET_ROOM_TYPES
from elcalc.models.calculation_models import AnomalyCheckInput, AnomalyRoom
from elcalc.models.estimate_models import Anomaly, ProjectEstimate
from elcalc.services.room_estimator import RCD_POINT_KIND, format_number

logger = logging.getLogger("elcalc-anomaly")


def detect_anomalies(check: AnomalyCheckInput, thresholds: Optional[Dict[str, float]] = None) -> List[Anomaly]:
    t = {**ANOMALY_THRESHOLDS, **(thresholds or {})}
    anomalies: List[Anomaly] = []
    anomalies.extend(_check_hours_per_point(check, t))
    anomalies.extend(_check_margin(check.margin_percentage, t))
    anomalies.extend(_check_missing_rcd(check.rooms))
    anomalies.extend(_check_material_ratio(check, t))

    if anomalies:
        logger.info(
            f"Anomaly check: {len(anomalies)} found "
            f"({sum(a.severity == 'critical' for a in anomalies)} critical)",
            extra={"calculation_id": check.calculation_id},
        )
    return anomalies


def anomaly_input_from_estimate(
    estimate: ProjectEstimate,
    margin_percentage: float,
    calculation_id: Optional[str] = None,
) -> AnomalyCheckInput:
    """Build the anomaly check input for a finished project estimate."""
    return AnomalyCheckInput(
        calculation_id=calculation_id,
        rooms=list(estimate.rooms),
        total_hours=estimate.total_labor_hours,
        cost_price=estimate.cost_price,
        margin_percentage=margin_percentage,
        material_cost=estimate.total_material_cost,
    )


# ── Checks ────────────────────────────────────────────────────────────────────

def _check_hours_per_point(check: AnomalyCheckInput, t: Dict[str, float]) -> List[Anomaly]:
    total_points = sum(sum(room.points.values()) for room in check.rooms)
    if total_points <= 0:
        return []

    hours_per_point = check.total_hours / total_points
    details = {"hours_per_point": hours_per_point, "total_points": total_points}
    if hours_per_point > t["max_hours_per_point"]:
        return [Anomaly(
            anomaly_type="time_outlier",
            severity="warning",
            message=f"Høj tidsestimat: {hours_per_point:.1f} timer per el-punkt (normalt 0.3-1.5 timer)",
            details=details,
        )]
    if hours_per_point < t["min_hours_per_point"]:
        return [Anomaly(
            anomaly_type="time_outlier",
            severity="warning",
            message=f"Lavt tidsestimat: {hours_per_point:.2f} timer per el-punkt (normalt 0.3-1.5 timer)",
            details=details,
        )]
    return []


def _check_margin(margin: float, t: Dict[str, float]) -> List[Anomaly]:
    found = []
    if margin < t["low_margin"]:
        found.append(Anomaly(
            anomaly_type="margin_warning",
            severity="warning",
            message=f"Lav margin: {format_number(margin)}% (anbefalet minimum {format_number(t['low_margin'])}%)",
            details={"margin_percentage": margin},
        ))
    if margin < t["critical_margin"]:
        found.append(Anomaly(
            anomaly_type="margin_warning",
            severity="critical",
            message=f"Kritisk lav margin: {format_number(margin)}% (risiko for tab)",
            details={"margin_percentage": margin},
        ))
    return found


def _has_rcd(room: AnomalyRoom) -> bool:
    if room.points.get(RCD_POINT_KIND):
        return True
    return any(c.type == "panel" and c.subtype == "rcd" for c in room.component_breakdown)


def _check_missing_rcd(rooms: List[AnomalyRoom]) -> List[Anomaly]:
    return [
        Anomaly(
            anomaly_type="missing_rcd",
            severity="critical",
            message=f"Manglende HPFI/RCD i {room.room_name} ({room.room_type}) - lovkrav",
            details={"room_name": room.room_name, "room_type": room.room_type},
        )
        for room in rooms
        if room.room_type in WET_ROOM_TYPES and not _has_rcd(room)
    ]


def _check_material_ratio(check: AnomalyCheckInput, t: Dict[str, float]) -> List[Anomaly]:
    if check.cost_price <= 0:
        return []
    ratio = check.material_cost / check.cost_price
    if ratio < t["low_material_ratio"]:
        return [Anomaly(
            anomaly_type="price_deviation",
            severity="info",
            message=f"Lav materialeandel ({ratio * 100:.0f}%) - typisk 30-50%",
            details={"material_ratio": ratio},
        )]
    if ratio > t["high_material_ratio"]:
        return [Anomaly(
            anomaly_type="price_deviation",
            severity="warning",
            message=f"Høj materialeandel ({ratio * 100:.0f}%) - tjek materialepriser",
            details={"material_ratio": ratio},
        )]
    return []
