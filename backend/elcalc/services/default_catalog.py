"""
Bundled starter catalog: Danish installation types, room templates and
component time profiles measured in plasterboard (GIPS).  Other installation
types reuse the GIPS rows through their multipliers.
"""

GIPS_ID = "gips"

# ---------------------------------------------------------------------------
# Installation types
# ---------------------------------------------------------------------------
INSTALLATION_TYPES: list[dict] = [
    {
        "id": "gips", "code": "GIPS", "name": "Gipsvæg",
        "description": "Installation i gipsplader/letbeton",
        "time_multiplier": 1.0, "difficulty_multiplier": 1.0, "material_waste_multiplier": 1.05,
        "extra_materials": [
            {"material_name": "Gipsskruer", "quantity_per_unit": 2, "unit": "stk"},
            {"material_name": "Gipsdåse", "quantity_per_unit": 1, "unit": "stk"},
        ],
        "required_tools": [{"tool_name": "Hulbor gips", "is_special": False}],
        "sort_order": 1,
    },
    {
        "id": "beton", "code": "BETON", "name": "Beton",
        "description": "Installation i beton/armeret beton",
        "time_multiplier": 2.2, "difficulty_multiplier": 2.0, "material_waste_multiplier": 1.10,
        "extra_materials": [
            {"material_name": "Betonskruer", "quantity_per_unit": 4, "unit": "stk"},
            {"material_name": "Rawlplugs", "quantity_per_unit": 2, "unit": "stk"},
        ],
        "required_tools": [
            {"tool_name": "Borehammer SDS", "is_special": False},
            {"tool_name": "Betonsavklinge", "is_special": True},
        ],
        "sort_order": 2,
    },
    {
        "id": "trae", "code": "TRAE", "name": "Træ",
        "description": "Installation i træskelet/trævæg",
        "time_multiplier": 0.9, "difficulty_multiplier": 0.8, "material_waste_multiplier": 1.03,
        "extra_materials": [{"material_name": "Træskruer", "quantity_per_unit": 3, "unit": "stk"}],
        "required_tools": [{"tool_name": "Spadeborssæt", "is_special": False}],
        "sort_order": 3,
    },
    {
        "id": "mur", "code": "MUR", "name": "Murstensværk",
        "description": "Installation i mursten/tegl",
        "time_multiplier": 1.8, "difficulty_multiplier": 1.6, "material_waste_multiplier": 1.08,
        "extra_materials": [
            {"material_name": "Murplugs", "quantity_per_unit": 2, "unit": "stk"},
            {"material_name": "Murbor", "quantity_per_unit": 0.1, "unit": "stk"},
        ],
        "required_tools": [
            {"tool_name": "Borehammer", "is_special": False},
            {"tool_name": "Murmejsel", "is_special": False},
        ],
        "sort_order": 4,
    },
    {
        "id": "gasbeton", "code": "GASBETON", "name": "Gasbeton/Lecablokke",
        "description": "Installation i gasbeton eller lecablokke",
        "time_multiplier": 1.3, "difficulty_multiplier": 1.2, "material_waste_multiplier": 1.06,
        "extra_materials": [{"material_name": "Gasbetonplugs", "quantity_per_unit": 2, "unit": "stk"}],
        "required_tools": [{"tool_name": "Gasbetonbor", "is_special": False}],
        "sort_order": 5,
    },
    {
        "id": "udvendig", "code": "UDVENDIG", "name": "Udvendig",
        "description": "Udvendig installation (facade, tag)",
        "time_multiplier": 1.5, "difficulty_multiplier": 1.5, "material_waste_multiplier": 1.15,
        "extra_materials": [
            {"material_name": "Rustfri skruer", "quantity_per_unit": 4, "unit": "stk"},
            {"material_name": "Silikonefuge", "quantity_per_unit": 0.05, "unit": "tube"},
        ],
        "required_tools": [{"tool_name": "Stillads/lift", "is_special": True}],
        "sort_order": 6,
    },
    {
        "id": "forsaenket", "code": "FORSÆNKET", "name": "Forsænket installation",
        "description": "Skjult/forsænket kabelføring",
        "time_multiplier": 2.5, "difficulty_multiplier": 2.2, "material_waste_multiplier": 1.12,
        "extra_materials": [{"material_name": "Spartel", "quantity_per_unit": 0.1, "unit": "kg"}],
        "required_tools": [
            {"tool_name": "Rillefræser", "is_special": True},
            {"tool_name": "Støvsuger industri", "is_special": False},
        ],
        "sort_order": 7,
    },
    {
        "id": "synlig", "code": "SYNLIG", "name": "Synlig installation",
        "description": "Synlig/påbygning kabelføring",
        "time_multiplier": 0.7, "difficulty_multiplier": 0.6, "material_waste_multiplier": 1.15,
        "extra_materials": [
            {"material_name": "Kabelkanal", "quantity_per_unit": 1.1, "unit": "m"},
            {"material_name": "Kanalskruer", "quantity_per_unit": 3, "unit": "stk"},
        ],
        "required_tools": [],
        "sort_order": 8,
    },
]


# ---------------------------------------------------------------------------
# Room templates
# ---------------------------------------------------------------------------
def _reqs(*pairs):
    return [{"requirement": r, "description": d} for r, d in pairs]


ROOM_TEMPLATES: list[dict] = [
    {
        "id": "bathroom", "code": "BATHROOM", "name": "Badeværelse", "room_type": "bathroom",
        "description": "Standard badeværelse med vådrum",
        "default_points": {"outlets": 2, "switches": 2, "ceiling_lights": 1, "spots": 4,
                           "ventilation": 1, "gulvvarme_tilslutning": 1},
        "typical_size_m2": 8.0, "recommended_circuit_groups": 2, "recommended_rcd": True,
        "special_requirements": _reqs(
            ("IP44 minimum", "Alle installationer i zone 1+2 skal være IP44 eller bedre"),
            ("HPFI 30mA", "Dedikeret HPFI gruppe påkrævet"),
        ),
    },
    {
        "id": "kitchen", "code": "KITCHEN", "name": "Køkken", "room_type": "kitchen",
        "description": "Standard køkken med hvidevarer",
        "default_points": {"outlets": 8, "outlets_countertop": 4, "switches": 3, "ceiling_lights": 1,
                           "spots": 6, "emhætte_tilslutning": 1, "opvaskemaskine": 1,
                           "ovn_tilslutning": 1, "induktion_tilslutning": 1},
        "typical_size_m2": 15.0, "recommended_circuit_groups": 3, "recommended_rcd": True,
        "special_requirements": _reqs(
            ("Separat gruppe til ovn", "Ovn/komfur skal have egen 3-faset gruppe"),
            ("Separat gruppe til induktion", "Induktionskogeplade kræver egen gruppe"),
        ),
    },
    {
        "id": "bedroom", "code": "BEDROOM", "name": "Soveværelse", "room_type": "bedroom",
        "description": "Standard soveværelse",
        "default_points": {"outlets": 6, "switches": 2, "ceiling_lights": 1, "data_points": 1},
        "typical_size_m2": 14.0, "recommended_circuit_groups": 1, "recommended_rcd": False,
        "special_requirements": [],
    },
    {
        "id": "living", "code": "LIVING", "name": "Stue", "room_type": "living",
        "description": "Standard stue/opholdsstue",
        "default_points": {"outlets": 10, "switches": 3, "ceiling_lights": 1, "spots": 6,
                           "tv_udtag": 1, "data_points": 2},
        "typical_size_m2": 25.0, "recommended_circuit_groups": 2, "recommended_rcd": False,
        "special_requirements": [],
    },
    {
        "id": "office", "code": "OFFICE", "name": "Kontor/arbejdsværelse", "room_type": "office",
        "description": "Hjemmekontor",
        "default_points": {"outlets": 8, "switches": 2, "ceiling_lights": 1, "spots": 4, "data_points": 2},
        "typical_size_m2": 12.0, "recommended_circuit_groups": 1, "recommended_rcd": False,
        "special_requirements": _reqs(("Datanetværk", "Min. 2 CAT6 forbindelser anbefales")),
    },
    {
        "id": "hallway", "code": "HALLWAY", "name": "Gang/entre", "room_type": "hallway",
        "description": "Gang eller entre",
        "default_points": {"outlets": 2, "switches": 3, "ceiling_lights": 2, "spots": 4},
        "typical_size_m2": 10.0, "recommended_circuit_groups": 1, "recommended_rcd": False,
        "special_requirements": [],
    },
    {
        "id": "utility", "code": "UTILITY", "name": "Bryggers/vaskerum", "room_type": "utility",
        "description": "Bryggers med vaskemaskine",
        "default_points": {"outlets": 4, "switches": 2, "ceiling_lights": 1, "vaskemaskine": 1, "tørretumbler": 1},
        "typical_size_m2": 8.0, "recommended_circuit_groups": 2, "recommended_rcd": True,
        "special_requirements": _reqs(
            ("Separat gruppe", "Vaskemaskine og tørretumbler bør have separate grupper"),
        ),
    },
    {
        "id": "garage", "code": "GARAGE", "name": "Garage", "room_type": "garage",
        "description": "Standard garage med elbils-lader",
        "default_points": {"outlets": 4, "switches": 2, "ceiling_lights": 2, "elbil_lader": 1},
        "typical_size_m2": 30.0, "recommended_circuit_groups": 2, "recommended_rcd": True,
        "special_requirements": _reqs(
            ("Elbilslader", "11-22kW lader kræver 3-faset tilslutning og separat gruppe"),
        ),
    },
    {
        "id": "outdoor", "code": "OUTDOOR", "name": "Udendørs", "room_type": "outdoor",
        "description": "Udendørs belysning og stik",
        "default_points": {"outlets_ip44": 2, "switches": 1, "udendørs_lamper": 3, "havepæle": 2},
        "typical_size_m2": 0.0, "recommended_circuit_groups": 1, "recommended_rcd": True,
        "special_requirements": _reqs(("IP44+", "Alle udendørs installationer skal være min. IP44")),
    },
    {
        "id": "panel", "code": "TAVLE", "name": "El-tavle", "room_type": "panel",
        "description": "Hovedtavle/gruppetavle",
        "default_points": {"gruppeafbrydere": 12, "hpfi_afbrydere": 4, "hovedafbryder": 1,
                           "overspændingsbeskyttelse": 1},
        "typical_size_m2": 1.0, "recommended_circuit_groups": 0, "recommended_rcd": False,
        "special_requirements": _reqs(("Dimensionering", "Tavle skal dimensioneres efter DS/HD 60364")),
    },
]


# ---------------------------------------------------------------------------
# Component time profiles (GIPS)
# (type, subtype, install s, wiring s, finishing s, cable m/unit, cable type, materials, DKK/unit)
# ---------------------------------------------------------------------------
def _m(name, quantity=1, unit="stk"):
    return {"name": name, "quantity": quantity, "unit": unit}


_BOX = _m("Indmuringsdåse")

_COMPONENT_ROWS = [
    ("outlet", "single", 900, 600, 300, 3.0, "PVT 3x2.5mm²", [_m("Stikkontakt enkel"), _BOX], 85.0),
    ("outlet", "double", 1080, 600, 360, 3.0, "PVT 3x2.5mm²", [_m("Stikkontakt dobbelt"), _BOX], 120.0),
    ("outlet", "data", 1200, 900, 360, 4.0, "CAT6",
     [_m("Dataudtag RJ45"), _BOX, _m("CAT6 kabel", 4, "m")], 180.0),
    ("outlet", "ip44", 1200, 600, 420, 4.0, "PVT 3x2.5mm²",
     [_m("Stikkontakt IP44"), _m("Påbygningsdåse IP44")], 150.0),
    ("switch", "single", 720, 480, 240, 2.5, "PVT 3x1.5mm²", [_m("Afbryder enkelt"), _BOX], 95.0),
    ("switch", "double", 840, 600, 300, 3.0, "PVT 3x1.5mm²", [_m("Afbryder dobbelt"), _BOX], 130.0),
    ("switch", "dimmer", 900, 600, 300, 3.0, "PVT 3x1.5mm²", [_m("Lysdæmper LED"), _BOX], 350.0),
    ("switch", "motion_sensor", 1080, 720, 360, 3.5, "PVT 3x1.5mm²", [_m("Bevægelsessensor"), _BOX], 450.0),
    ("light", "ceiling", 1200, 600, 360, 2.0, "PVT 3x1.5mm²", [_m("DCL udtag"), _m("Loftkrog")], 65.0),
    ("light", "spot", 900, 480, 300, 2.5, "PVT 3x1.5mm²",
     [_m("Spotindbygning"), _m("LED spot GU10"), _m("GU10 fatning")], 180.0),
    ("light", "outdoor_wall", 1500, 900, 480, 5.0, "PVT 3x1.5mm²",
     [_m("Udendørs væglampe IP44"), _m("Monteringsbeslag")], 350.0),
    ("light", "garden_pole", 2400, 1200, 600, 8.0, "PVT 3x1.5mm²",
     [_m("Havepæl"), _m("Jordkabel XPLE", 8, "m")], 800.0),
    ("cable", "pvt_1.5", 0, 180, 0, 1.0, "PVT 3x1.5mm²", [_m("PVT 3x1.5mm²", 1, "m")], 8.5),
    ("cable", "pvt_2.5", 0, 200, 0, 1.0, "PVT 3x2.5mm²", [_m("PVT 3x2.5mm²", 1, "m")], 12.0),
    ("cable", "pvt_4.0", 0, 240, 0, 1.0, "PVT 5x4mm²", [_m("PVT 5x4mm²", 1, "m")], 28.0),
    ("cable", "pvt_10", 0, 360, 0, 1.0, "PVT 5x10mm²", [_m("PVT 5x10mm²", 1, "m")], 65.0),
    ("panel", "group_breaker", 1800, 600, 300, 0.0, "", [_m("Gruppeafbryder C16")], 85.0),
    ("panel", "rcd", 2400, 900, 360, 0.0, "", [_m("HPFI relæ 30mA")], 650.0),
    ("panel", "main_breaker", 3600, 1200, 600, 0.0, "", [_m("Hovedafbryder")], 450.0),
    ("panel", "surge_protection", 1800, 600, 300, 0.0, "", [_m("Overspændingsbeskyttelse T2")], 1200.0),
    ("appliance", "oven_3phase", 2400, 1200, 600, 6.0, "PVT 5x2.5mm²",
     [_m("Komfurudtag 3-faset"), _m("PVT 5x2.5mm²", 6, "m")], 250.0),
    ("appliance", "induction", 2400, 1200, 600, 6.0, "PVT 5x4mm²",
     [_m("CEE udtag"), _m("PVT 5x4mm²", 6, "m")], 350.0),
    ("appliance", "ev_charger", 7200, 3600, 1800, 15.0, "PVT 5x6mm²",
     [_m("Elbilslader 11kW"), _m("PVT 5x6mm²", 15, "m"), _m("CEE udtag 16A")], 8500.0),
    ("appliance", "ventilation", 1800, 900, 480, 3.0, "PVT 3x1.5mm²", [_m("Ventilator")], 650.0),
    ("appliance", "floor_heating", 3600, 1800, 900, 2.0, "PVT 3x1.5mm²",
     [_m("Gulvvarme termostat"), _m("Følerledning", 3, "m")], 750.0),
]

COMPONENT_TIMES: list[dict] = [
    {
        "id": f"{ctype}-{subtype}-{GIPS_ID}",
        "component_type": ctype,
        "component_subtype": subtype,
        "installation_type_id": GIPS_ID,
        "base_install_time_seconds": base,
        "wiring_time_seconds": wiring,
        "finishing_time_seconds": finishing,
        "cable_meters_per_unit": cable_m,
        "cable_type": cable_type,
        "materials_per_unit": materials,
        "material_cost_estimate": cost,
    }
    for ctype, subtype, base, wiring, finishing, cable_m, cable_type, materials, cost in _COMPONENT_ROWS
]
