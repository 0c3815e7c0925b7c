import logging
from typing import List, Optional

from pressure_design.exceptions import PressureDesignError
from pressure_design.stress import StressResolver
from pressure_design.tables import ReferenceTables
from utils.constants import KSI_to_MPA, ROUND_STRESS, celsius_to_fahrenheit
from utils.json_helpers import error_payload, safe_json_dumps
from utils.material_aliases import map_material_code
from utils.reference_data import default_tables

# Configure logging
logger = logging.getLogger("pipe-thickness-mcp.allowable_stress")


def _table_code(tables: ReferenceTables, material_code: str) -> str:
    if material_code in tables.stress:
        return material_code
    return map_material_code(material_code)


def get_allowable_stress(
    material_code: str,
    temperature_c: float,
    tables: Optional[ReferenceTables] = None,
) -> str:
    """Allowable stress for a material at a design temperature.

    Exact table temperatures return the stored value; temperatures outside the
    table clamp to the nearest boundary; anything else is linearly interpolated.

    Args:
        material_code: Material code or alias
        temperature_c: Temperature in Celsius
        tables: Reference tables (default: bundled ASME data)

    Returns:
        JSON string with stress in ksi and MPa
    """
    tables = tables or default_tables()
    try:
        code = _table_code(tables, material_code)
        resolver = StressResolver(tables.stress)
        stress_ksi = resolver.resolve(code, temperature_c)
        samples = resolver.curve(code)

        result = {
            "material_code": code,
            "temperature_c": temperature_c,
            "temperature_f": round(celsius_to_fahrenheit(temperature_c), 1),
            "allowable_stress_ksi": round(stress_ksi, ROUND_STRESS),
            "allowable_stress_mpa": round(stress_ksi * KSI_to_MPA, ROUND_STRESS),
            "table_range_c": [samples[0].temperature_c, samples[-1].temperature_c],
            "successful": True,
        }
        if not samples[0].temperature_c <= temperature_c <= samples[-1].temperature_c:
            result["warning"] = (
                f"Temperature {temperature_c}°C is outside the tabulated range "
                f"({samples[0].temperature_c:g} to {samples[-1].temperature_c:g}°C); "
                f"the boundary value was used."
            )
        return safe_json_dumps(result)

    except PressureDesignError as e:
        logger.warning(f"get_allowable_stress rejected input: {e}")
        return safe_json_dumps(error_payload(e))
    except Exception as e:
        logger.error(f"Error in get_allowable_stress: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))


def get_stress_table(
    material_code: str,
    temperatures_c: Optional[List[float]] = None,
    tables: Optional[ReferenceTables] = None,
) -> str:
    """Tabulated allowable stress curve for one material.

    When ``temperatures_c`` is given the curve is also evaluated at those
    temperatures with the same exact/clamp/interpolate policy.
    """
    tables = tables or default_tables()
    try:
        code = _table_code(tables, material_code)
        resolver = StressResolver(tables.stress)
        samples = resolver.curve(code)
        result = {
            "material_code": code,
            "material_name": samples[0].material_name,
            "points": [
                {
                    "temperature_c": s.temperature_c,
                    "temperature_f": round(celsius_to_fahrenheit(s.temperature_c), 1),
                    "allowable_stress_ksi": s.allowable_stress_ksi,
                    "allowable_stress_mpa": round(s.allowable_stress_ksi * KSI_to_MPA, ROUND_STRESS),
                }
                for s in samples
            ],
            "successful": True,
        }
        if temperatures_c:
            stresses = resolver.resolve_many(code, temperatures_c)
            result["evaluated"] = [
                {
                    "temperature_c": float(t),
                    "allowable_stress_ksi": round(float(s), ROUND_STRESS),
                    "allowable_stress_mpa": round(float(s) * KSI_to_MPA, ROUND_STRESS),
                }
                for t, s in zip(temperatures_c, stresses)
            ]
        return safe_json_dumps(result)
    except PressureDesignError as e:
        logger.warning(f"get_stress_table rejected input: {e}")
        return safe_json_dumps(error_payload(e))
    except Exception as e:
        logger.error(f"Error in get_stress_table: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))


def list_materials(tables: Optional[ReferenceTables] = None) -> str:
    """List materials with allowable stress data."""
    tables = tables or default_tables()
    try:
        materials = tables.stress.materials()
        return safe_json_dumps({
            "materials": materials,
            "total_count": len(materials),
            "successful": True,
        })
    except Exception as e:
        logger.error(f"Error in list_materials: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))
