"""
test_import_safety.py: import and circular-import checks.

Verifies that:
  1. Every elcalc module imports cleanly (no database, network or server needed).
  2. Calculation services do not depend on the API layer.
  3. The engine modules stay free of web framework imports.
"""

import sys
import os
import importlib
import inspect
import pytest

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


_SERVICE_MODULES = [
    "elcalc.services.rounding",
    "elcalc.services.component_time",
    "elcalc.services.room_estimator",
    "elcalc.services.panel_engine",
    "elcalc.services.cable_engine",
    "elcalc.services.costing_engine",
    "elcalc.services.risk_engine",
    "elcalc.services.compliance_engine",
    "elcalc.services.electrical_bridge",
    "elcalc.services.calculation_engine",
    "elcalc.services.profit_simulator",
    "elcalc.services.anomaly_engine",
    "elcalc.services.catalog_engine",
    "elcalc.services.default_catalog",
    "elcalc.services.logging_config",
    "elcalc.services.middleware",
]

_MODEL_MODULES = [
    "elcalc.config",
    "elcalc.models.catalog_schema",
    "elcalc.models.calculation_models",
    "elcalc.models.estimate_models",
]

_API_MODULES = [
    "elcalc.api.deps",
    "elcalc.api.calculation_routes",
    "elcalc.main",
]


class TestModuleImports:

    @pytest.mark.parametrize("module_path", _SERVICE_MODULES + _MODEL_MODULES)
    def test_module_imports(self, module_path):
        try:
            mod = importlib.import_module(module_path)
            assert mod is not None, f"Module {module_path} is None after import"
        except Exception as e:
            pytest.fail(f"{module_path} raised on import: {type(e).__name__}: {e}")

    @pytest.mark.parametrize("module_path", _API_MODULES)
    def test_api_module_imports(self, module_path):
        mod = importlib.import_module(module_path)
        assert mod is not None


class TestNoCyclicImports:

    @pytest.mark.parametrize("module_path", [
        m for m in _SERVICE_MODULES if not m.endswith("middleware")
    ])
    def test_services_do_not_import_api_layer(self, module_path):
        src = inspect.getsource(importlib.import_module(module_path))
        assert "elcalc.api" not in src, f"{module_path} must not depend on elcalc.api"
        assert "fastapi" not in src, f"{module_path} must stay framework-free"

    def test_models_have_no_service_imports(self):
        for module_path in _MODEL_MODULES:
            src = inspect.getsource(importlib.import_module(module_path))
            assert "elcalc.services" not in src, f"{module_path} imports a service module"

    def test_point_vocabulary_loaded_once(self):
        from elcalc.services import room_estimator
        from elcalc.api import calculation_routes
        assert calculation_routes.POINT_TO_COMPONENT is room_estimator.POINT_TO_COMPONENT
