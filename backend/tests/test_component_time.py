"""
test_component_time.py: unit tests for ComponentTimeLookup.

Tests cover:
  - Three-tier resolution (exact, type+subtype, type) and the default profile
  - Installation-type multipliers (time, difficulty, material waste)
  - 10 % cable waste and per-quantity rounding
  - Inactive catalog rows and read-only lookup maps
"""

import pytest

from elcalc.models.catalog_schema import ComponentTimeIntelligence, InstallationType
from elcalc.services.component_time import ComponentTimeLookup


# ===========================================================================
# Class 1: Graceful fallback
# ===========================================================================

class TestDefaultProfile:
    """Unknown components never raise; they get the hardcoded default."""

    def test_unknown_type_returns_default(self, default_engine):
        ct = default_engine.get_component_time("unknown_type", None, None, 1)
        assert ct.match_level == "default"
        assert ct.total_time_seconds == 900
        assert ct.install_time_seconds == 600
        assert ct.wiring_time_seconds == 300
        assert ct.finishing_time_seconds == 0
        assert ct.cable_meters == 3.0
        assert ct.cable_type == "PVT 3x1.5mm²"
        assert ct.material_cost == 100.0
        assert ct.materials == ()

    def test_default_scales_with_quantity(self, empty_engine):
        """4 units: 3600 s, 12 m cable, 400 DKK (no waste factor on the default)."""
        ct = empty_engine.get_component_time("outlet", "single", None, 4)
        assert ct.total_time_seconds == 3600
        assert ct.cable_meters == 12.0
        assert ct.material_cost == 400.0

    def test_unknown_installation_type_uses_unit_multipliers(self, default_engine):
        ct = default_engine.get_component_time("outlet", "single", "no-such-type", 1)
        assert ct.total_time_seconds == 1800
        assert ct.material_cost == 85.0


# ===========================================================================
# Class 2: Resolution tiers
# ===========================================================================

class TestResolutionTiers:

    def test_exact_match(self, default_engine):
        ct = default_engine.get_component_time("outlet", "single", "gips", 1)
        assert ct.match_level == "exact"

    def test_subtype_match_any_installation_type(self, default_engine):
        """Catalog rows are all GIPS; asking for BETON falls back to the GIPS row."""
        ct = default_engine.get_component_time("outlet", "double", "beton", 1)
        assert ct.match_level == "subtype"
        assert ct.cable_type == "PVT 3x2.5mm²"

    def test_type_only_match(self, default_engine):
        """Unknown subtype resolves to the first outlet row (outlet/single)."""
        ct = default_engine.get_component_time("outlet", "quadruple", None, 1)
        assert ct.match_level == "type"
        assert ct.material_cost == 85.0

    def test_no_installation_type_uses_subtype_tier(self, default_engine):
        """
        outlet/single without installation type:
            1800 s (900 + 600 + 300), cable 3.0 × 1.10 = 3.3 m, 85 DKK.
        """
        ct = default_engine.get_component_time("outlet", "single", None, 1)
        assert ct.match_level == "subtype"
        assert ct.total_time_seconds == 1800
        assert ct.cable_meters == 3.3
        assert ct.material_cost == 85.0

    def test_first_loaded_row_wins_in_fallback(self):
        rows = [
            ComponentTimeIntelligence(component_type="light", component_subtype="spot",
                                      installation_type_id="a", base_install_time_seconds=100,
                                      wiring_time_seconds=0, finishing_time_seconds=0),
            ComponentTimeIntelligence(component_type="light", component_subtype="spot",
                                      installation_type_id="b", base_install_time_seconds=999,
                                      wiring_time_seconds=0, finishing_time_seconds=0),
        ]
        lookup = ComponentTimeLookup(rows)
        assert lookup.get_component_time("light", "spot", "c").total_time_seconds == 100


# ===========================================================================
# Class 3: Multipliers
# ===========================================================================

class TestInstallationMultipliers:

    def test_gips_waste_multiplier(self, default_engine):
        """
        2 × outlet/single in GIPS (1.0 / 1.0 / waste 1.05):
            time = (900 + 600 + 300) × 2 = 3600 s
            cable = 3.0 × 1.10 × 2 = 6.6 m
            material = 85 × 2 × 1.05 = 178.5 DKK
            material qty = 1 × 2 × 1.05 = 2.1 each
        """
        ct = default_engine.get_component_time("outlet", "single", "gips", 2)
        assert ct.total_time_seconds == 3600
        assert ct.install_time_seconds == 1800
        assert ct.wiring_time_seconds == 1200
        assert ct.finishing_time_seconds == 600
        assert ct.cable_meters == 6.6
        assert ct.material_cost == 178.5
        assert [m.name for m in ct.materials] == ["Stikkontakt enkel", "Indmuringsdåse"]
        assert all(m.quantity == 2.1 for m in ct.materials)

    def test_beton_difficulty_only_on_install_time(self, default_engine):
        """
        outlet/single in BETON (time 2.2, difficulty 2.0, waste 1.10):
            install   = 900 × 2.2 × 2.0 = 3960
            wiring    = 600 × 2.2       = 1320
            finishing = 300 × 2.2       = 660
            total     = 5940 s
            material  = 85 × 1.10       = 93.5
        """
        ct = default_engine.get_component_time("outlet", "single", "beton", 1)
        assert ct.install_time_seconds == 3960
        assert ct.wiring_time_seconds == 1320
        assert ct.finishing_time_seconds == 660
        assert ct.total_time_seconds == 5940
        assert ct.material_cost == 93.5
        assert ct.cable_meters == 3.3

    def test_material_unit_costs_left_at_zero(self, default_engine):
        ct = default_engine.get_component_time("appliance", "ev_charger", "gips", 1)
        assert ct.materials
        assert all(m.unit_cost == 0.0 and m.total_cost == 0.0 for m in ct.materials)

    def test_cable_waste_factor_configurable(self):
        rows = [ComponentTimeIntelligence(component_type="cable", component_subtype="x",
                                          cable_meters_per_unit=10.0)]
        lookup = ComponentTimeLookup(rows, cable_waste_factor=1.0)
        assert lookup.get_component_time("cable", "x").cable_meters == 10.0


# ===========================================================================
# Class 4: Catalog state
# ===========================================================================

class TestLookupState:

    def test_inactive_rows_ignored(self):
        rows = [ComponentTimeIntelligence(component_type="switch", component_subtype="single",
                                          base_install_time_seconds=1, is_active=False)]
        lookup = ComponentTimeLookup(rows)
        assert lookup.get_component_time("switch", "single").match_level == "default"

    def test_inactive_installation_type_ignored(self):
        it = InstallationType(id="x", code="X", name="X", time_multiplier=3.0, is_active=False)
        lookup = ComponentTimeLookup([], [it])
        assert lookup.get_installation_type("x") is None

    def test_maps_are_read_only(self, lookup):
        with pytest.raises(TypeError):
            lookup.component_times[("outlet", "single", "gips")] = None
        with pytest.raises(TypeError):
            lookup.installation_types["gips"] = None

    def test_cable_type_for(self, lookup):
        assert lookup.cable_type_for("outlet", "data") == "CAT6"
        assert lookup.cable_type_for("outlet", "nope") is None
