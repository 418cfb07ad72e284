from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class _CatalogRecord(BaseModel):
    model_config = ConfigDict(frozen=True)


class ComponentMaterial(_CatalogRecord):
    """One material consumed per installed unit of a component."""
    name: str = Field(..., description="e.g., Stikkontakt enkel, Indmuringsdåse")
    quantity: float = Field(..., ge=0, description="Quantity per installed unit")
    unit: str = Field("stk", description="stk | m | kg | tube")
    sku_pattern: Optional[str] = Field(None, description="Supplier SKU search pattern")


class ExtraMaterial(_CatalogRecord):
    material_name: str
    quantity_per_unit: float = Field(0.0, ge=0)
    unit: str = "stk"


class RequiredTool(_CatalogRecord):
    tool_name: str
    is_special: bool = Field(False, description="Special tools are rented per job")


class InstallationType(_CatalogRecord):
    """
    Installation context (wall material / mounting style) and its multipliers.
    The short code (e.g., BETON, MUR) drives qualitative offer notices.
    """
    id: str
    code: str = Field(..., description="e.g., GIPS, BETON, MUR")
    name: str = Field(..., description="e.g., Beton")
    description: Optional[str] = None
    time_multiplier: float = Field(1.0, gt=0)
    difficulty_multiplier: float = Field(1.0, gt=0)
    material_waste_multiplier: float = Field(1.0, gt=0)
    extra_materials: List[ExtraMaterial] = Field(default_factory=list)
    required_tools: List[RequiredTool] = Field(default_factory=list)
    sort_order: int = 0
    is_active: bool = True

    @property
    def special_tools(self) -> List[RequiredTool]:
        return [t for t in self.required_tools if t.is_special]


class SpecialRequirement(_CatalogRecord):
    requirement: str
    description: str


class RoomTemplate(_CatalogRecord):
    """Named preset of room characteristics (bathroom, kitchen, ...)."""
    id: str
    code: str
    name: str
    description: Optional[str] = None
    room_type: str = Field(..., description="bathroom | kitchen | bedroom | living | office | hallway | utility | garage | outdoor | panel")
    default_points: Dict[str, int] = Field(default_factory=dict)
    typical_size_m2: Optional[float] = None
    recommended_circuit_groups: int = 1
    recommended_rcd: bool = True
    special_requirements: List[SpecialRequirement] = Field(default_factory=list)
    sort_order: int = 0
    is_active: bool = True


class ComponentTimeIntelligence(_CatalogRecord):
    """
    Time, cable and material profile of one component in one installation
    context.  Keyed by (component_type, component_subtype, installation_type_id).
    """
    id: Optional[str] = None
    component_type: str = Field(..., description="outlet | switch | light | cable | panel | appliance")
    component_subtype: Optional[str] = Field(None, description="e.g., single, double, ip44, rcd")
    installation_type_id: Optional[str] = None
    base_install_time_seconds: float = Field(900, ge=0)
    wiring_time_seconds: float = Field(600, ge=0)
    finishing_time_seconds: float = Field(300, ge=0)
    cable_meters_per_unit: float = Field(3.0, ge=0)
    cable_type: str = "PVT 3x1.5mm²"
    materials_per_unit: List[ComponentMaterial] = Field(default_factory=list)
    material_cost_estimate: float = Field(0.0, ge=0, description="Fallback DKK cost per unit")
    notes: Optional[str] = None
    is_active: bool = True


class CalculationCatalog(_CatalogRecord):
    """All catalog data an engine instance is built from."""
    component_times: List[ComponentTimeIntelligence] = Field(default_factory=list)
    installation_types: List[InstallationType] = Field(default_factory=list)
    room_templates: List[RoomTemplate] = Field(default_factory=list)
