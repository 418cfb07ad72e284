"""
conftest.py: shared pytest fixtures for the calculation engine test suite.

No database or external service fixtures are defined here.  Engine tests are
pure unit tests; API tests use FastAPI's TestClient in-process.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``elcalc.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any elcalc imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def empty_engine():
    """
    Engine with no catalog data at all.

    Every component resolves to the default profile:
      900 s per unit (600 install + 300 wiring), 3.0 m cable, 100 DKK material.
    Hourly rate 495 DKK.
    """
    from elcalc.services.calculation_engine import CalculationIntelligenceEngine
    return CalculationIntelligenceEngine()


@pytest.fixture(scope="session")
def default_engine():
    """
    Engine built from the bundled catalog (25 GIPS component rows,
    8 installation types, 10 room templates), hourly rate 495 DKK.
    """
    from elcalc.services.calculation_engine import CalculationIntelligenceEngine
    return CalculationIntelligenceEngine.from_default_catalog()


@pytest.fixture(scope="session")
def lookup(default_engine):
    return default_engine.lookup


# ---------------------------------------------------------------------------
# Input factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_room():
    """Factory for RoomCalculationInput with sensible defaults."""
    from elcalc.models.calculation_models import RoomCalculationInput

    def _make(room_name="Rum", room_type="bedroom", points=None, **kwargs):
        return RoomCalculationInput(
            room_name=room_name,
            room_type=room_type,
            points=points or {},
            **kwargs,
        )

    return _make


@pytest.fixture
def make_project(make_room):
    """Factory for ProjectCalculationInput; rooms may be inputs or kwargs dicts."""
    from elcalc.models.calculation_models import ProjectCalculationInput

    def _make(rooms=(), **kwargs):
        built = [r if not isinstance(r, dict) else make_room(**r) for r in rooms]
        return ProjectCalculationInput(rooms=built, **kwargs)

    return _make


@pytest.fixture
def kitchen_project(make_project):
    """
    One kitchen: 6 outlets + 2 ceiling lights, no installation type,
    default percentages, hourly rate 495.
    """
    return make_project(
        rooms=[{"room_name": "Køkken", "room_type": "kitchen",
                "points": {"outlets": 6, "ceiling_lights": 2}}],
        hourly_rate=495,
    )
