"""Risk analysis: scores a project 1-5 and recommends a cost buffer."""
import logging
import math
from typing import Dict, Iterable, List, Optional

from elcalc.config import RISK_THRESHOLDS, WET_ROOM_TYPES
from elcalc.models.calculation_models import ProjectCalculationInput
from elcalc.models.estimate_models import RiskAnalysisResult, RiskFactor, RoomEstimate
from elcalc.services.component_time import ComponentTimeLookup
from elcalc.services.room_estimator import format_number
from elcalc.services.rounding import round_money, round_whole

logger = logging.getLogger("elcalc-risk")


def format_dkk(amount: float) -> str:
    """Whole kroner with Danish thousands separators: 250000.4 -> '250.000'."""
    return f"{round_whole(amount):,}".replace(",", ".")


def risk_level_for_score(score: int) -> str:
    if score <= 1:
        return "low"
    if score <= 2:
        return "medium"
    if score <= 4:
        return "high"
    return "critical"


class RiskAnalyzer:
    """Rule-based project risk scoring."""

    def __init__(self, lookup: ComponentTimeLookup, thresholds: Optional[Dict[str, float]] = None):
        self.lookup = lookup
        self.t = {**RISK_THRESHOLDS, **(thresholds or {})}

    def analyze_risks(
        self,
        project: ProjectCalculationInput,
        rooms: Iterable[RoomEstimate],
        cost_price: float,
    ) -> RiskAnalysisResult:
        rooms = list(rooms)
        factors: List[RiskFactor] = []
        factors.extend(self._check_building_age(project.building_age_years))
        factors.extend(self._check_installation_difficulty(project))
        factors.extend(self._check_project_size(rooms))
        factors.extend(self._check_project_value(cost_price))
        factors.extend(self._check_wet_rooms(rooms))

        total_impact = sum(f.impact_percentage for f in factors)
        score = min(5, max(1, math.ceil(total_impact / 10)))
        buffer = round_whole(total_impact / 3)
        buffer = int(min(self.t["max_buffer_percentage"], max(self.t["min_buffer_percentage"], buffer)))

        result = RiskAnalysisResult(
            risk_score=score,
            risk_level=risk_level_for_score(score),
            factors=tuple(factors),
            recommended_buffer_percentage=buffer,
        )
        logger.info(
            f"Risk analysis: score {score}/5 ({result.risk_level}), "
            f"{len(factors)} factors, buffer {buffer}%"
        )
        return result

    # ─── Individual checks ────────────────────────────────────────────────

    def _check_building_age(self, age: Optional[int]) -> List[RiskFactor]:
        if not age or age <= self.t["old_building_years"]:
            return []
        very_old = age > self.t["very_old_building_years"]
        return [RiskFactor(
            type="old_building",
            description=f"Bygning over {age} år - risiko for uforudsete installationer",
            severity="high" if very_old else "medium",
            impact_percentage=self.t["very_old_building_impact"] if very_old else self.t["old_building_impact"],
        )]

    def _check_installation_difficulty(self, project: ProjectCalculationInput) -> List[RiskFactor]:
        factors = []
        for room in project.rooms:
            install_type = self.lookup.get_installation_type(room.installation_type_id)
            if install_type is None:
                continue
            mult = install_type.difficulty_multiplier
            if mult > self.t["difficulty_threshold"]:
                factors.append(RiskFactor(
                    type="difficult_installation",
                    description=(
                        f"{room.room_name}: {install_type.name} installation "
                        f"(sværhedsgrad ×{format_number(mult)})"
                    ),
                    severity="high" if mult > self.t["high_difficulty_threshold"] else "medium",
                    impact_percentage=round_money((mult - 1) * 10),
                ))
        return factors

    def _check_project_size(self, rooms: List[RoomEstimate]) -> List[RiskFactor]:
        total_points = sum(r.total_points for r in rooms)
        if total_points <= self.t["large_project_points"]:
            return []
        return [RiskFactor(
            type="large_project",
            description=f"Stort projekt med {total_points} elektriske punkter",
            severity="high" if total_points > self.t["very_large_project_points"] else "medium",
            impact_percentage=self.t["large_project_impact"],
        )]

    def _check_project_value(self, cost_price: float) -> List[RiskFactor]:
        if cost_price <= self.t["high_value_cost_price"]:
            return []
        return [RiskFactor(
            type="high_value",
            description=f"Høj projektværdi ({format_dkk(cost_price)} kr)",
            severity="high" if cost_price > self.t["very_high_value_cost_price"] else "medium",
            impact_percentage=self.t["high_value_impact"],
        )]

    def _check_wet_rooms(self, rooms: List[RoomEstimate]) -> List[RiskFactor]:
        wet = [r for r in rooms if r.room_type in WET_ROOM_TYPES]
        if not wet:
            return []
        return [RiskFactor(
            type="wet_rooms",
            description=f"{len(wet)} vådrum/udendørs installationer - kræver IP-klassificerede materialer",
            severity="medium",
            impact_percentage=self.t["wet_room_impact"],
        )]
