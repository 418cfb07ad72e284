"""Component time lookup: resolves a component to its time, cable and material profile."""
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from elcalc.config import CABLE_WASTE_FACTOR, DEFAULT_COMPONENT_PROFILE
from elcalc.models.catalog_schema import ComponentTimeIntelligence, InstallationType
from elcalc.models.estimate_models import ComponentTime, MaterialLine
from elcalc.services.rounding import round_half_up, round_money, round_seconds

logger = logging.getLogger("elcalc-lookup")

LookupKey = Tuple[str, str, str]


def lookup_key(component_type: str, component_subtype: Optional[str],
               installation_type_id: Optional[str]) -> LookupKey:
    return (component_type, component_subtype or "", installation_type_id or "")


class ComponentTimeLookup:
    """
    Read-only index over component time rows and installation types.

    Resolution order for (type, subtype, installation type):
      1. exact triple
      2. same type + subtype, any installation type
      3. same type, any subtype
      4. DEFAULT_COMPONENT_PROFILE
    The first catalog row (in load order) wins within tiers 2 and 3.
    """

    def __init__(
        self,
        component_times: Iterable[ComponentTimeIntelligence] = (),
        installation_types: Iterable[InstallationType] = (),
        cable_waste_factor: float = CABLE_WASTE_FACTOR,
    ):
        index = {}
        for row in component_times:
            if not row.is_active:
                continue
            key = lookup_key(row.component_type, row.component_subtype, row.installation_type_id)
            index[key] = row
        self._index: Mapping[LookupKey, ComponentTimeIntelligence] = MappingProxyType(index)
        self._installation_types: Mapping[str, InstallationType] = MappingProxyType(
            {it.id: it for it in installation_types if it.is_active}
        )
        self.cable_waste_factor = cable_waste_factor

    @property
    def component_times(self) -> Mapping[LookupKey, ComponentTimeIntelligence]:
        return self._index

    @property
    def installation_types(self) -> Mapping[str, InstallationType]:
        return self._installation_types

    def get_installation_type(self, installation_type_id: Optional[str]) -> Optional[InstallationType]:
        if not installation_type_id:
            return None
        return self._installation_types.get(installation_type_id)

    # ── Resolution ────────────────────────────────────────────────────────────

    def resolve(
        self,
        component_type: str,
        component_subtype: Optional[str],
        installation_type_id: Optional[str],
    ) -> Tuple[Optional[ComponentTimeIntelligence], str]:
        """Return (row, match_level); row is None when only the default applies."""
        row = self._index.get(lookup_key(component_type, component_subtype, installation_type_id))
        if row is not None:
            return row, "exact"

        subtype = component_subtype or ""
        for (ctype, csub, _), candidate in self._index.items():
            if ctype == component_type and csub == subtype:
                return candidate, "subtype"

        for (ctype, _, _), candidate in self._index.items():
            if ctype == component_type:
                return candidate, "type"

        return None, "default"

    def cable_type_for(self, component_type: str, component_subtype: Optional[str]) -> Optional[str]:
        """Cable type of the first catalog row for (type, subtype), any installation type."""
        for row in self._index.values():
            if row.component_type == component_type and row.component_subtype == component_subtype:
                return row.cable_type
        return None

    def get_component_time(
        self,
        component_type: str,
        component_subtype: Optional[str] = None,
        installation_type_id: Optional[str] = None,
        quantity: int = 1,
    ) -> ComponentTime:
        row, match_level = self.resolve(component_type, component_subtype, installation_type_id)

        if row is None:
            logger.debug(
                f"No catalog profile for {component_type}/{component_subtype}, using default"
            )
            return self._default_profile(quantity)

        install_type = self.get_installation_type(installation_type_id)
        time_mult = install_type.time_multiplier if install_type else 1.0
        difficulty_mult = install_type.difficulty_multiplier if install_type else 1.0
        waste_mult = install_type.material_waste_multiplier if install_type else 1.0

        install = row.base_install_time_seconds * time_mult * difficulty_mult
        wiring = row.wiring_time_seconds * time_mult
        finishing = row.finishing_time_seconds * time_mult
        cable_per_unit = row.cable_meters_per_unit * self.cable_waste_factor

        materials = tuple(
            MaterialLine(
                name=m.name,
                quantity=round_half_up(m.quantity * quantity * waste_mult, 3),
                unit=m.unit,
            )
            for m in row.materials_per_unit
        )

        return ComponentTime(
            total_time_seconds=round_seconds((install + wiring + finishing) * quantity),
            install_time_seconds=round_seconds(install * quantity),
            wiring_time_seconds=round_seconds(wiring * quantity),
            finishing_time_seconds=round_seconds(finishing * quantity),
            cable_meters=round_money(cable_per_unit * quantity),
            cable_type=row.cable_type,
            material_cost=round_money(row.material_cost_estimate * quantity * waste_mult),
            materials=materials,
            match_level=match_level,
        )

    @staticmethod
    def _default_profile(quantity: int) -> ComponentTime:
        p = DEFAULT_COMPONENT_PROFILE
        install = int(p["install_time_seconds"]) * quantity
        wiring = int(p["wiring_time_seconds"]) * quantity
        finishing = int(p["finishing_time_seconds"]) * quantity
        return ComponentTime(
            total_time_seconds=install + wiring + finishing,
            install_time_seconds=install,
            wiring_time_seconds=wiring,
            finishing_time_seconds=finishing,
            cable_meters=round_money(float(p["cable_meters"]) * quantity),
            cable_type=str(p["cable_type"]),
            material_cost=round_money(float(p["material_cost"]) * quantity),
            materials=(),
            match_level="default",
        )
