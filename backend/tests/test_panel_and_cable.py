"""
test_panel_and_cable.py: unit tests for panel sizing and the cable summary.

Panel cost formula (default pricing):
    groups × 85 + RCD groups × 650 + surge 1200
    + main breaker upgrade 2500 (groups > 20)
    + enclosure 1500 (<= 12 groups) or 2800 (> 12 groups)
"""

import pytest

from elcalc.models.catalog_schema import ComponentTimeIntelligence
from elcalc.services.calculation_engine import CalculationIntelligenceEngine
from elcalc.services.panel_engine import panel_install_seconds, room_groups


def _estimates(engine, make_room, *rooms):
    return [engine.calculate_room(make_room(**r)) for r in rooms]


# ===========================================================================
# Class 1: Group counting
# ===========================================================================

class TestRoomGroups:

    def test_outlet_light_and_special_groups(self):
        g = room_groups({"outlets": 13, "spots": 11, "ovn_tilslutning": 1, "elbil_lader": 1})
        assert g == {"outlet_groups": 3, "light_groups": 2, "special_groups": 2, "total": 7}

    def test_all_outlet_variants_share_groups(self):
        """outlets + outlets_countertop + outlets_ip44 = 7 -> 2 groups."""
        g = room_groups({"outlets": 3, "outlets_countertop": 2, "outlets_ip44": 2})
        assert g["outlet_groups"] == 2

    def test_all_light_variants_share_groups(self):
        """ceiling_lights + spots = 10 -> exactly 1 group."""
        assert room_groups({"ceiling_lights": 4, "spots": 6})["light_groups"] == 1

    def test_floor_heating_counts_per_point(self):
        assert room_groups({"gulvvarme_tilslutning": 2})["special_groups"] == 2

    def test_group_size_overridable(self):
        assert room_groups({"outlets": 8}, {"outlets_per_group": 4})["outlet_groups"] == 2


# ===========================================================================
# Class 2: Panel requirements
# ===========================================================================

class TestPanelRequirements:

    def test_kitchen_with_appliances(self, empty_engine, make_room):
        """
        7 groups, RCD ceil(7/2) = 4:
            7 × 85 + 4 × 650 + 1200 + 1500 = 5895
        Detail: 7 × 85 + 2 special × 200 = 995
        """
        rooms = _estimates(empty_engine, make_room, {
            "room_name": "Køkken", "room_type": "kitchen",
            "points": {"outlets": 13, "spots": 11, "ovn_tilslutning": 1, "elbil_lader": 1},
        })
        panel = empty_engine.calculate_panel_requirements(rooms)
        assert panel.total_groups_needed == 7
        assert panel.rcd_groups_needed == 4
        assert panel.main_breaker_upgrade is False
        assert panel.surge_protection_recommended is True
        assert panel.estimated_panel_cost == 5895.0
        assert len(panel.details) == 1
        detail = panel.details[0]
        assert detail.description == "Køkken: 3 stik-grupper, 2 lys-grupper, 2 special-grupper"
        assert detail.quantity == 7
        assert detail.estimated_cost == 995.0

    def test_minimum_one_rcd_group(self, empty_engine, make_room):
        rooms = _estimates(empty_engine, make_room, {"points": {"outlets": 6}})
        panel = empty_engine.calculate_panel_requirements(rooms)
        assert panel.rcd_groups_needed == 1

    def test_main_breaker_upgrade_above_twenty_groups(self, empty_engine, make_room):
        """126 outlets = 21 groups: 1785 + 650 + 2500 + 1200 + 2800 = 8935."""
        rooms = _estimates(empty_engine, make_room, {"points": {"outlets": 126}})
        panel = empty_engine.calculate_panel_requirements(rooms)
        assert panel.total_groups_needed == 21
        assert panel.main_breaker_upgrade is True
        assert panel.estimated_panel_cost == 8935.0

    def test_large_enclosure_above_twelve_groups(self, empty_engine, make_room):
        """78 outlets = 13 groups: 1105 + 650 + 1200 + 2800 = 5755."""
        rooms = _estimates(empty_engine, make_room, {"points": {"outlets": 78}})
        panel = empty_engine.calculate_panel_requirements(rooms)
        assert panel.total_groups_needed == 13
        assert panel.main_breaker_upgrade is False
        assert panel.estimated_panel_cost == 5755.0

    def test_no_rooms_still_prices_base_panel(self, empty_engine):
        """0 groups: 1 RCD 650 + surge 1200 + small enclosure 1500."""
        panel = empty_engine.calculate_panel_requirements([])
        assert panel.total_groups_needed == 0
        assert panel.estimated_panel_cost == 3350.0
        assert panel.details == ()

    def test_rcd_only_for_rcd_room_types(self, empty_engine, make_room):
        """Bathroom 2 groups -> 1 RCD; living room 3 groups -> none."""
        rooms = _estimates(
            empty_engine, make_room,
            {"room_name": "Bad", "room_type": "bathroom", "points": {"outlets": 12}},
            {"room_name": "Stue", "room_type": "living", "points": {"outlets": 18}},
        )
        panel = empty_engine.calculate_panel_requirements(rooms)
        assert panel.total_groups_needed == 5
        assert panel.rcd_groups_needed == 1
        assert [d.quantity for d in panel.details] == [2, 3]

    def test_install_seconds(self, empty_engine):
        """1 h per group + 2 h base."""
        panel = empty_engine.calculate_panel_requirements([])
        assert panel_install_seconds(panel) == 7200


# ===========================================================================
# Class 3: Cable summary
# ===========================================================================

class TestCableSummary:

    def test_groups_by_catalog_cable_type(self, default_engine, make_room):
        """
        outlets 2   -> PVT 3x2.5mm², 6.6 m × 12   = 79.2
        data 1      -> CAT6,          4.4 m × 12   = 52.8
        spots 2     -> PVT 3x1.5mm²,  5.5 m × 8.5  = 46.75
        """
        rooms = _estimates(default_engine, make_room,
                           {"points": {"outlets": 2, "data_points": 1, "spots": 2}})
        summary = default_engine.calculate_cable_summary(rooms)
        assert [(c.type, c.total_meters, c.total_cost) for c in summary.cable_types] == [
            ("PVT 3x2.5mm²", 6.6, 79.2),
            ("CAT6", 4.4, 52.8),
            ("PVT 3x1.5mm²", 5.5, 46.75),
        ]
        assert summary.total_meters == 16.5
        assert summary.total_cable_cost == 178.75

    def test_same_type_merged_across_rooms(self, default_engine, make_room):
        rooms = _estimates(default_engine, make_room,
                           {"room_name": "A", "points": {"outlets": 1}},
                           {"room_name": "B", "points": {"outlets_countertop": 1}})
        summary = default_engine.calculate_cable_summary(rooms)
        assert len(summary.cable_types) == 1
        assert summary.cable_types[0].total_meters == 6.6

    def test_components_without_catalog_row_use_default_type(self, empty_engine, make_room):
        """Default profile: 8 × 3.0 m = 24 m of PVT 3x1.5mm² at 8.5."""
        rooms = _estimates(empty_engine, make_room,
                           {"points": {"outlets": 6, "ceiling_lights": 2}})
        summary = empty_engine.calculate_cable_summary(rooms)
        assert len(summary.cable_types) == 1
        ct = summary.cable_types[0]
        assert (ct.type, ct.total_meters, ct.estimated_cost_per_meter, ct.total_cost) == (
            "PVT 3x1.5mm²", 24.0, 8.5, 204.0
        )

    def test_unpriced_cable_type_costs_ten_per_meter(self, make_room):
        engine = CalculationIntelligenceEngine([
            ComponentTimeIntelligence(component_type="outlet", component_subtype="single",
                                      cable_meters_per_unit=10.0, cable_type="NOIKLX 3G2.5"),
        ])
        rooms = _estimates(engine, make_room, {"points": {"outlets": 1}})
        ct = engine.calculate_cable_summary(rooms).cable_types[0]
        assert ct.type == "NOIKLX 3G2.5"
        assert ct.estimated_cost_per_meter == 10.0
        assert ct.total_cost == 110.0

    def test_zero_meter_components_skipped(self, default_engine, make_room):
        """Panel components carry no cable."""
        rooms = _estimates(default_engine, make_room, {"points": {"hpfi_afbrydere": 2}})
        summary = default_engine.calculate_cable_summary(rooms)
        assert summary.cable_types == ()
        assert summary.total_cable_cost == 0

    @pytest.mark.parametrize("cable_type,price", [
        ("PVT 3x4mm²", 18.0),
        ("PVT 5x6mm²", 42.0),
    ])
    def test_cable_price_override(self, make_room, cable_type, price):
        engine = CalculationIntelligenceEngine(
            [ComponentTimeIntelligence(component_type="outlet", component_subtype="single",
                                       cable_meters_per_unit=10.0, cable_type=cable_type)],
            pricing_config={"cable_costs": {cable_type: price * 2}},
        )
        rooms = _estimates(engine, make_room, {"points": {"outlets": 1}})
        assert engine.calculate_cable_summary(rooms).cable_types[0].estimated_cost_per_meter == price * 2
