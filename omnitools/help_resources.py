"""Help resources omnitool - lists available materials, sizes, schedules and design factors."""

import json
import logging
from typing import Literal, Optional

from pressure_design.exceptions import PressureDesignError
from pressure_design.schedules import ScheduleSelector
from utils.material_aliases import MATERIAL_NAME_MAP, APPROXIMATE_ALIASES
from utils.reference_data import default_tables

logger = logging.getLogger("pipe-thickness-mcp.help_resources")


# ASME B31.3 design factors with typical values
DESIGN_FACTORS = {
    "joint_efficiency": {
        "symbol": "E",
        "reference": "ASME B31.3 Table A-1B / 302.3.4",
        "default": 1.0,
        "typical_values": [
            {"value": 1.0, "description": "Seamless pipe (A106, A335, seamless A312)"},
            {"value": 0.85, "description": "Electric resistance welded (A53 ERW, API 5L ERW)"},
            {"value": 0.80, "description": "Double-welded butt seam, no radiography"},
            {"value": 0.60, "description": "Furnace butt welded (A53 Type F)"},
        ],
    },
    "weld_strength_reduction": {
        "symbol": "W",
        "reference": "ASME B31.3 para. 302.3.5(e)",
        "default": 1.0,
        "typical_values": [
            {"value": 1.0, "description": "Below the creep range (CS up to 427°C)"},
            {"value": 0.9, "description": "Longitudinal welds in the creep range (approximate)"},
        ],
    },
    "y_coefficient": {
        "symbol": "Y",
        "reference": "ASME B31.3 Table 304.1.1",
        "default": 0.4,
        "typical_values": [
            {"value": 0.4, "description": "Ferritic and austenitic steels at or below 482°C"},
            {"value": 0.5, "description": "Ferritic steels at 510°C"},
            {"value": 0.7, "description": "Ferritic steels at 538°C and above"},
        ],
        "note": "Valid for t < D/6; thicker walls need Y = (d + 2c)/(D + d + 2c).",
    },
    "corrosion_allowance_mm": {
        "symbol": "c",
        "default": 0.0,
        "typical_values": [
            {"value": 1.5, "description": "Carbon steel, mildly corrosive service"},
            {"value": 3.0, "description": "Carbon steel, general process service"},
            {"value": 0.0, "description": "Stainless steel in clean service"},
        ],
    },
}

SCHEDULE_SERIES = [
    {"name": "5S, 10S, 40S, 80S", "description": "Stainless steel schedules (ASME B36.19)"},
    {"name": "10 to 160", "description": "Numbered carbon steel schedules (ASME B36.10)"},
    {"name": "XXS", "description": "Double extra strong"},
]


def get_material_aliases() -> dict:
    """Aliases accepted for each material code."""
    aliases = {}
    for alias, code in sorted(MATERIAL_NAME_MAP.items()):
        aliases.setdefault(code, []).append(alias)
    return aliases


def help_resources(
    resource_type: Literal["materials", "sizes", "schedules", "design_factors", "all"] = "all",
    nominal_size: Optional[str] = None,
) -> str:
    """
    List available resources for pipe pressure-design calculations.

    Provides lists of:
    - Materials with allowable stress data and accepted aliases
    - Nominal pipe sizes with outside diameter and nominal bore
    - Standard schedule designations
    - ASME B31.3 design factors (E, W, Y, corrosion allowance)

    Args:
        resource_type: Type of resources to list
            - "materials": Material codes, names, temperature ranges and aliases
            - "sizes": Nominal pipe sizes
            - "schedules": Schedule series, or one size's schedules with nominal_size
            - "design_factors": Typical E, W, Y and corrosion allowance values
            - "all": All resources (summary)
        nominal_size: Optional size filter for schedules (e.g. "6", "DN150")

    Returns:
        JSON string with requested resource information

    Examples:
        List materials:
        >>> help_resources(resource_type="materials")

        Schedules available for NPS 2:
        >>> help_resources(resource_type="schedules", nominal_size="2")
    """
    tables = default_tables()
    result = {}

    if resource_type == "materials" or resource_type == "all":
        aliases = get_material_aliases()
        materials = []
        for entry in tables.stress.materials():
            code = entry["material_code"]
            samples = tables.stress.samples(code)
            materials.append({
                **entry,
                "temperature_range_c": [samples[0].temperature_c, samples[-1].temperature_c],
                "aliases": aliases.get(code, []),
            })
        if resource_type == "all":
            result["materials"] = {
                "count": len(materials),
                "note": "Use resource_type='materials' for temperature ranges and aliases",
                "codes": [m["material_code"] for m in materials],
            }
        else:
            result["materials"] = materials
            result["approximate_aliases"] = sorted(APPROXIMATE_ALIASES)

    if resource_type == "sizes" or resource_type == "all":
        with_schedules = set(tables.schedules.sizes())
        sizes = [
            {
                "nps": r.nps,
                "nb_mm": r.nb_mm,
                "outside_diameter_in": r.outside_diameter_in,
                "has_schedules": r.nps in with_schedules,
            }
            for r in tables.sizes.records()
        ]
        if resource_type == "all":
            result["sizes"] = {
                "count": len(sizes),
                "note": "Use resource_type='sizes' for OD and bore of each size",
                "nps": [s["nps"] for s in sizes],
            }
        else:
            result["sizes"] = sizes

    if resource_type == "schedules" or resource_type == "all":
        if nominal_size and resource_type == "schedules":
            try:
                nps = tables.sizes.resolve(nominal_size).nps
                records = ScheduleSelector(tables.schedules).candidates(nps)
                result["schedules"] = {
                    "nps": nps,
                    "designations": [r.schedule for r in records],
                }
            except PressureDesignError as e:
                logger.warning(f"Schedule help lookup failed for '{nominal_size}': {e}")
                result["schedules"] = {"error": str(e), "available_sizes": tables.schedules.sizes()}
        else:
            result["schedules"] = SCHEDULE_SERIES

    if resource_type == "design_factors" or resource_type == "all":
        result["design_factors"] = DESIGN_FACTORS

    if resource_type == "all":
        result["notes"] = {
            "formula": "t = P*D / (2*(S*E*W + P*Y)); t_m = t + c (ASME B31.3 para. 304.1.2)",
            "units": "Inputs in bar and °C; stress table temperatures are in °C",
            "mill_tolerance": "No mill tolerance is applied; pass margin_mm to recommend_schedule if needed",
            "out_of_range_temperature": "Temperatures outside a material's table use the nearest tabulated value",
        }

    return json.dumps(result, indent=2)
