"""
Shared input resolution for the pressure-design tools.

Turns loosely-typed tool arguments (size as NPS or bore, material aliases)
into a validated DesignInput while keeping a log of every interpretation made.
"""

import logging
from typing import Dict, List, Optional

from pressure_design.exceptions import InvalidInputError
from pressure_design.tables import ReferenceTables
from pressure_design.thickness import DesignInput

from .material_aliases import map_material_code

logger = logging.getLogger("pipe-thickness-mcp.input_resolver")


class InputResolver:
    """
    Centralized input resolution with consistent logging and error handling.
    """

    def __init__(self, tool_name: str, tables: ReferenceTables):
        self.tool_name = tool_name
        self.tables = tables
        self.results_log: List[str] = []

    def resolve_nominal_size(self, nominal_size: Optional[str] = None,
                             nb_mm: Optional[float] = None) -> str:
        """Nominal size token from either an NPS/bore token or a bore in mm."""
        if nominal_size is not None and str(nominal_size).strip():
            token = str(nominal_size).strip()
            size = self.tables.sizes.resolve(token)
            if size.nps != token:
                self.results_log.append(f"Nominal size: '{token}' -> NPS {size.nps}")
            else:
                self.results_log.append(f"Nominal size: NPS {size.nps}")
            return size.nps

        if nb_mm is not None:
            size = self.tables.sizes.resolve(f"DN{nb_mm:g}")
            self.results_log.append(f"Nominal size: NB {nb_mm:g} mm -> NPS {size.nps}")
            return size.nps

        raise InvalidInputError("Provide nominal_size (NPS or DN token) or nb_mm",
                                field="nominal_size")

    def resolve_material(self, material_code: Optional[str]) -> str:
        """Material code, mapping aliases when the name is not a table code."""
        if not material_code or not str(material_code).strip():
            raise InvalidInputError("material_code is required", field="material_code")
        if material_code in self.tables.stress:
            self.results_log.append(f"Material: {material_code}")
            return material_code

        mapped = map_material_code(material_code)
        if mapped != material_code:
            self.results_log.append(f"Material: '{material_code}' -> {mapped}")
        return mapped

    def resolve_design_input(self, **kwargs) -> DesignInput:
        """Build a validated DesignInput from tool arguments."""
        nominal_size = self.resolve_nominal_size(kwargs.pop("nominal_size", None),
                                                 kwargs.pop("nb_mm", None))
        material_code = self.resolve_material(kwargs.pop("material_code", None))
        data = {k: v for k, v in kwargs.items() if v is not None}
        return DesignInput.build(nominal_size=nominal_size, material_code=material_code, **data)

    def get_logs(self) -> Dict[str, List[str]]:
        """Get accumulated logs."""
        return {"log": self.results_log.copy()}
