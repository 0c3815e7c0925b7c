"""
Pressure design wall thickness per ASME B31.3 para. 304.1.2.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from pressure_design.exceptions import PressureDesignError
from pressure_design.tables import ReferenceTables
from pressure_design.thickness import DesignResult, ThicknessCalculator
from utils.constants import (
    BAR_to_PSI, INCH_to_MM, ROUND_INCH, ROUND_MM, ROUND_STRESS, SWEEP_MAX_POINTS,
)
from utils.input_resolver import InputResolver
from utils.json_helpers import error_payload, safe_json_dumps
from utils.reference_data import default_tables

logger = logging.getLogger("pipe-thickness-mcp.pipe_thickness")


def format_design_result(result: DesignResult) -> Dict[str, Any]:
    """Rounded, unit-expanded dictionary of a DesignResult."""
    output = {
        "nps": result.nps,
        "outside_diameter_in": round(result.outside_diameter_in, ROUND_INCH),
        "outside_diameter_mm": round(result.outside_diameter_in * INCH_to_MM, ROUND_MM),
        "pressure_psi": round(result.pressure_psi, 2),
        "temperature_f": round(result.temperature_f, 1),
        "design_thickness_in": round(result.design_thickness_in, ROUND_INCH),
        "design_thickness_mm": round(result.design_thickness_mm, ROUND_MM),
        "min_required_thickness_in": round(result.min_required_thickness_in, ROUND_INCH),
        "min_required_thickness_mm": round(result.min_required_thickness_mm, ROUND_MM),
        "allowable_stress_ksi": round(result.allowable_stress_ksi, ROUND_STRESS),
        "allowable_stress_mpa": round(result.allowable_stress_mpa, ROUND_STRESS),
        "recommended_schedule": result.recommended_schedule,
        "recommended_wall_in": round(result.recommended_wall_thickness_in, ROUND_INCH),
        "recommended_wall_mm": round(result.recommended_wall_thickness_mm, ROUND_MM),
        "warnings": list(result.warnings),
        "notes": result.notes,
    }
    if result.selected_schedule is not None:
        output["selected_schedule"] = result.selected_schedule
        output["is_selected_schedule_adequate"] = result.selected_schedule_adequate
        if result.selected_schedule_wall_in is not None:
            output["selected_schedule_wall_in"] = round(result.selected_schedule_wall_in, ROUND_INCH)
            output["selected_schedule_wall_mm"] = round(result.selected_schedule_wall_mm, ROUND_MM)
    return output


def calculate_pipe_thickness(
    pressure_bar: Optional[float] = None,       # bar (gauge)
    temperature_c: Optional[float] = None,      # °C
    nominal_size: Optional[str] = None,         # NPS token or DN/NB token
    nb_mm: Optional[float] = None,              # nominal bore, alternative to nominal_size
    material_code: Optional[str] = None,        # stress table code or alias
    selected_schedule: Optional[str] = None,
    corrosion_allowance_mm: Optional[float] = None,
    joint_efficiency: Optional[float] = None,
    weld_strength_reduction: Optional[float] = None,
    y_coefficient: Optional[float] = None,
    tables: Optional[ReferenceTables] = None,
) -> str:
    """
    Calculate minimum required wall thickness and recommend a pipe schedule.

    Uses t = P*D / (2*(S*E*W + P*Y)) and t_m = t + corrosion allowance.

    Args:
        pressure_bar: Design pressure in bar
        temperature_c: Design temperature in Celsius
        nominal_size: Nominal pipe size ("6", "1-1/4") or bore ("DN150")
        nb_mm: Nominal bore in mm (alternative to nominal_size)
        material_code: Material code (e.g. "ASTM_A106_Grade_B") or alias ("A106B")
        selected_schedule: Optional schedule to check for adequacy
        corrosion_allowance_mm: Corrosion allowance in mm (default 0)
        joint_efficiency: E factor (default 1.0, seamless)
        weld_strength_reduction: W factor (default 1.0)
        y_coefficient: Y coefficient (default 0.4)
        tables: Reference tables (default: bundled ASME data)

    Returns:
        JSON string with thicknesses, stress, recommendation and warnings
    """
    tables = tables or default_tables()
    resolver = InputResolver("calculate_pipe_thickness", tables)
    try:
        if pressure_bar is None or temperature_c is None:
            return safe_json_dumps({
                "error": "pressure_bar and temperature_c are required",
                "successful": False,
            })

        design = resolver.resolve_design_input(
            pressure_bar=pressure_bar,
            temperature_c=temperature_c,
            nominal_size=nominal_size,
            nb_mm=nb_mm,
            material_code=material_code,
            selected_schedule=selected_schedule,
            corrosion_allowance_mm=corrosion_allowance_mm,
            joint_efficiency=joint_efficiency,
            weld_strength_reduction=weld_strength_reduction,
            y_coefficient=y_coefficient,
        )
        resolver.results_log.append(
            f"Pressure: {pressure_bar} bar -> {pressure_bar * BAR_to_PSI:.2f} psi")

        result = ThicknessCalculator(tables).calculate(design)
        logger.info("NPS %s %s at %.1f bar / %.1f°C: t_m=%.4f in, recommended Sch %s",
                    result.nps, design.material_code, design.pressure_bar,
                    design.temperature_c, result.min_required_thickness_in,
                    result.recommended_schedule)

        output = format_design_result(result)
        output["material_code"] = design.material_code
        output["log"] = resolver.get_logs()["log"]
        output["successful"] = True
        return safe_json_dumps(output)

    except PressureDesignError as e:
        logger.warning(f"calculate_pipe_thickness rejected input: {e}")
        return safe_json_dumps(error_payload(e))
    except Exception as e:
        logger.error(f"Error in calculate_pipe_thickness: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))


def pipe_thickness_sweep(
    variable: str,
    start: float,
    stop: float,
    n: int,
    pressure_bar: Optional[float] = None,
    temperature_c: Optional[float] = None,
    nominal_size: Optional[str] = None,
    nb_mm: Optional[float] = None,
    material_code: Optional[str] = None,
    corrosion_allowance_mm: Optional[float] = None,
    joint_efficiency: Optional[float] = None,
    weld_strength_reduction: Optional[float] = None,
    y_coefficient: Optional[float] = None,
    tables: Optional[ReferenceTables] = None,
) -> str:
    """
    Sweep pressure_bar or temperature_c and report thickness at each point.

    The swept variable's fixed value may be omitted; ``start`` is used to
    validate the base case.

    Returns:
        JSON string with one row per point
    """
    tables = tables or default_tables()
    resolver = InputResolver("pipe_thickness_sweep", tables)
    try:
        if n < 2 or n > SWEEP_MAX_POINTS:
            return safe_json_dumps({
                "error": f"n must be between 2 and {SWEEP_MAX_POINTS}, got {n}",
                "successful": False,
            })

        base = {"pressure_bar": pressure_bar, "temperature_c": temperature_c}
        if variable in base:
            base[variable] = start
        if base["pressure_bar"] is None or base["temperature_c"] is None:
            return safe_json_dumps({
                "error": "pressure_bar and temperature_c are required for the fixed variable",
                "successful": False,
            })

        design = resolver.resolve_design_input(
            nominal_size=nominal_size,
            nb_mm=nb_mm,
            material_code=material_code,
            corrosion_allowance_mm=corrosion_allowance_mm,
            joint_efficiency=joint_efficiency,
            weld_strength_reduction=weld_strength_reduction,
            y_coefficient=y_coefficient,
            **base,
        )

        values = np.linspace(start, stop, n)
        results = ThicknessCalculator(tables).sweep(design, variable, values)

        rows = []
        for value, result in zip(values, results):
            rows.append({
                variable: float(value),
                "allowable_stress_ksi": round(result.allowable_stress_ksi, ROUND_STRESS),
                "design_thickness_mm": round(result.design_thickness_mm, ROUND_MM),
                "min_required_thickness_mm": round(result.min_required_thickness_mm, ROUND_MM),
                "recommended_schedule": result.recommended_schedule,
                "recommended_wall_mm": round(result.recommended_wall_thickness_mm, ROUND_MM),
                "warnings": list(result.warnings),
            })

        logger.info("Swept %s over %d points for NPS %s", variable, n, design.nominal_size)
        return safe_json_dumps({
            "variable": variable,
            "nps": results[0].nps,
            "material_code": design.material_code,
            "points": rows,
            "log": resolver.get_logs()["log"],
            "successful": True,
        })

    except PressureDesignError as e:
        logger.warning(f"pipe_thickness_sweep rejected input: {e}")
        return safe_json_dumps(error_payload(e))
    except Exception as e:
        logger.error(f"Error in pipe_thickness_sweep: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))
