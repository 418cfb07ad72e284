"""
Engine configuration: single source of truth for pricing defaults,
thresholds and environment-driven settings.

Import from here in all services rather than hardcoding values.  Every dict
can be overridden per engine instance through ``pricing_config``.
"""
from __future__ import annotations

import os

# ── Financial defaults (percentages are whole numbers, 12 == 12 %) ──────────────
FINANCIAL_DEFAULTS: dict[str, float] = {
    "hourly_rate":          495.0,   # DKK per labour hour
    "overhead_percentage":  12.0,
    "risk_percentage":      3.0,
    "margin_percentage":    25.0,
    "discount_percentage":  0.0,
    "vat_percentage":       25.0,    # Danish moms
}

# ── Component lookup ──────────────────────────────────────────────────────────
CABLE_WASTE_FACTOR: float = 1.10

# Last-resort profile when the catalog has nothing for a component type
DEFAULT_COMPONENT_PROFILE: dict[str, float | str] = {
    "install_time_seconds":   600,
    "wiring_time_seconds":    300,
    "finishing_time_seconds": 0,
    "cable_meters":           3.0,
    "cable_type":             "PVT 3x1.5mm²",
    "material_cost":          100.0,
}

# ── Room rules ────────────────────────────────────────────────────────────────
ROOM_RULES: dict[str, float] = {
    "difficulty_warning_threshold": 1.5,
    "min_outlets_per_m2":           0.3,
    "ceiling_height_threshold_m":   3.0,
    "standard_ceiling_height_m":    2.5,
}

# ── Panel sizing and pricing (DKK) ────────────────────────────────────────────
PANEL_PRICING: dict[str, float] = {
    "outlets_per_group":         6,
    "lights_per_group":          10,
    "group_breaker_cost":        85.0,
    "rcd_cost":                  650.0,
    "main_breaker_upgrade_cost": 2500.0,
    "surge_protection_cost":     1200.0,
    "enclosure_small_cost":      1500.0,
    "enclosure_large_cost":      2800.0,
    "enclosure_large_threshold": 12,    # groups above this need the large enclosure
    "main_breaker_threshold":    20,    # groups above this need a main breaker upgrade
    "special_group_detail_cost": 200.0,
    "min_rcd_groups":            1,
    "install_seconds_per_group": 3600,
    "install_base_seconds":      7200,
}

# Room types whose circuits must sit behind an RCD
RCD_ROOM_TYPES: frozenset[str] = frozenset({"bathroom", "kitchen", "utility", "outdoor"})

# Room types counted as wet / outdoor for risk, OBS and anomaly rules
WET_ROOM_TYPES: frozenset[str] = frozenset({"bathroom", "outdoor"})

# ── Cable pricing (DKK per metre) ─────────────────────────────────────────────
DEFAULT_CABLE_TYPE: str = "PVT 3x1.5mm²"
DEFAULT_CABLE_COST_PER_METER: float = 8.5
UNKNOWN_CABLE_COST_PER_METER: float = 10.0

CABLE_COST_PER_METER: dict[str, float] = {
    "PVT 3x1.5mm²": 8.5,
    "PVT 3x2.5mm²": 12.0,
    "PVT 3x4mm²":   18.0,
    "PVT 5x2.5mm²": 22.0,
    "PVT 5x4mm²":   28.0,
    "PVT 5x6mm²":   42.0,
    "PVT 5x10mm²":  65.0,
    "CAT6":         12.0,
}

# ── Other direct costs (DKK) ──────────────────────────────────────────────────
OTHER_COST_RATES: dict[str, float] = {
    "transport_per_day":    350.0,
    "hours_per_work_day":   8.0,
    "special_tool_rental":  500.0,
}

# ── Risk scoring ──────────────────────────────────────────────────────────────
RISK_THRESHOLDS: dict[str, float] = {
    "old_building_years":        30,
    "very_old_building_years":   50,
    "old_building_impact":       8.0,
    "very_old_building_impact":  15.0,
    "difficulty_threshold":      1.5,
    "high_difficulty_threshold": 2.0,
    "large_project_points":      100,
    "very_large_project_points": 200,
    "large_project_impact":      5.0,
    "high_value_cost_price":     200_000.0,
    "very_high_value_cost_price": 500_000.0,
    "high_value_impact":         3.0,
    "wet_room_impact":           5.0,
    "min_buffer_percentage":     3,
    "max_buffer_percentage":     20,
}

# ── Anomaly thresholds ────────────────────────────────────────────────────────
ANOMALY_THRESHOLDS: dict[str, float] = {
    "max_hours_per_point":   2.0,
    "min_hours_per_point":   0.1,
    "low_margin":            15.0,
    "critical_margin":       10.0,
    "low_material_ratio":    0.2,
    "high_material_ratio":   0.7,
}


# ── Environment ───────────────────────────────────────────────────────────────
def env_settings() -> dict:
    """Read runtime settings from the environment (call after load_dotenv)."""
    return {
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "service_log_level": os.getenv("ELCALC_LOG_LEVEL") or None,
        "json_logs": os.getenv("LOG_FORMAT", "json").lower() != "text",
        "catalog_path": os.getenv("ELCALC_CATALOG_PATH") or None,
        "hourly_rate": float(os.getenv("ELCALC_HOURLY_RATE", FINANCIAL_DEFAULTS["hourly_rate"])),
    }
