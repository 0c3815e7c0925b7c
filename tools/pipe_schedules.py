"""
Standard pipe schedule lookups and recommendation.
"""

import logging
import math
from typing import Optional

from pressure_design.exceptions import InvalidInputError, PressureDesignError
from pressure_design.schedules import ScheduleSelector
from pressure_design.tables import ReferenceTables, ScheduleRecord
from utils.constants import INCH_to_MM, ROUND_INCH, ROUND_MM
from utils.input_resolver import InputResolver
from utils.json_helpers import error_payload, safe_json_dumps
from utils.reference_data import default_tables

logger = logging.getLogger("pipe-thickness-mcp.pipe_schedules")


def _record_dict(record: ScheduleRecord) -> dict:
    return {
        "nps": record.nps,
        "nb_mm": record.nb_mm,
        "schedule": record.schedule,
        "wall_thickness_in": record.wall_thickness_in,
        "wall_thickness_mm": round(record.wall_thickness_mm, ROUND_MM),
        "outside_diameter_in": record.outside_diameter_in,
        "outside_diameter_mm": round(record.outside_diameter_mm, ROUND_MM),
    }


def recommend_schedule(
    nominal_size: Optional[str] = None,
    required_thickness_mm: Optional[float] = None,
    required_thickness_in: Optional[float] = None,
    margin_mm: float = 0.0,
    nb_mm: Optional[float] = None,
    tables: Optional[ReferenceTables] = None,
) -> str:
    """
    Recommend the thinnest standard schedule meeting a required wall thickness.

    Args:
        nominal_size: Nominal pipe size ("6", "1-1/4") or bore ("DN150")
        required_thickness_mm: Required wall thickness in mm
        required_thickness_in: Required wall thickness in inches (alternative)
        margin_mm: Extra thickness added to the requirement (default 0)
        nb_mm: Nominal bore in mm (alternative to nominal_size)

    Returns:
        JSON string with the recommended schedule; a warning is included when
        the requirement exceeds the thickest standard schedule
    """
    tables = tables or default_tables()
    resolver = InputResolver("recommend_schedule", tables)
    try:
        if required_thickness_in is None and required_thickness_mm is None:
            raise InvalidInputError("Provide required_thickness_mm or required_thickness_in",
                                    field="required_thickness")
        if required_thickness_in is None:
            required_thickness_in = required_thickness_mm / INCH_to_MM
            resolver.results_log.append(
                f"Required thickness: {required_thickness_mm} mm -> {required_thickness_in:.4f} in")
        if not (math.isfinite(required_thickness_in) and math.isfinite(margin_mm)):
            raise InvalidInputError("Required thickness and margin must be finite",
                                    field="required_thickness")
        if required_thickness_in < 0 or margin_mm < 0:
            raise InvalidInputError("Required thickness and margin must be non-negative",
                                    field="required_thickness")

        nps = resolver.resolve_nominal_size(nominal_size, nb_mm)
        recommendation = ScheduleSelector(tables.schedules).select(
            nps, required_thickness_in, margin_mm / INCH_to_MM)

        result = {
            "nps": nps,
            "required_thickness_in": round(required_thickness_in, ROUND_INCH),
            "required_thickness_mm": round(required_thickness_in * INCH_to_MM, ROUND_MM),
            "margin_mm": margin_mm,
            "recommended_schedule": recommendation.schedule,
            "recommended_wall_in": recommendation.wall_thickness_in,
            "recommended_wall_mm": round(recommendation.wall_thickness_mm, ROUND_MM),
            "log": resolver.get_logs()["log"],
            "successful": True,
        }
        if recommendation.warning:
            result["warning"] = recommendation.warning
        return safe_json_dumps(result)

    except PressureDesignError as e:
        logger.warning(f"recommend_schedule rejected input: {e}")
        return safe_json_dumps(error_payload(e))
    except Exception as e:
        logger.error(f"Error in recommend_schedule: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))


def get_schedules(
    nominal_size: Optional[str] = None,
    nb_mm: Optional[float] = None,
    tables: Optional[ReferenceTables] = None,
) -> str:
    """All standard schedules for a size, thinnest first."""
    tables = tables or default_tables()
    resolver = InputResolver("get_schedules", tables)
    try:
        records = []
        if not nominal_size and nb_mm is not None:
            records = tables.schedules.for_bore(nb_mm)
            if records:
                resolver.results_log.append(f"Nominal size: NB {nb_mm:g} mm -> NPS {records[0].nps}")
        if records:
            nps = records[0].nps
        else:
            nps = resolver.resolve_nominal_size(nominal_size, nb_mm)
            records = ScheduleSelector(tables.schedules).candidates(nps)
        return safe_json_dumps({
            "nps": nps,
            "schedules": [_record_dict(r) for r in records],
            "total_count": len(records),
            "log": resolver.get_logs()["log"],
            "successful": True,
        })
    except PressureDesignError as e:
        logger.warning(f"get_schedules rejected input: {e}")
        return safe_json_dumps(error_payload(e))
    except Exception as e:
        logger.error(f"Error in get_schedules: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))


def list_nominal_sizes(tables: Optional[ReferenceTables] = None) -> str:
    """Nominal sizes in numeric order, flagging which have schedule data."""
    tables = tables or default_tables()
    try:
        with_schedules = set(tables.schedules.sizes())
        sizes = [
            {
                "nps": record.nps,
                "nb_mm": record.nb_mm,
                "outside_diameter_in": record.outside_diameter_in,
                "outside_diameter_mm": round(record.outside_diameter_mm, ROUND_MM),
                "has_schedules": record.nps in with_schedules,
            }
            for record in tables.sizes.records()
        ]
        return safe_json_dumps({"sizes": sizes, "total_count": len(sizes), "successful": True})
    except Exception as e:
        logger.error(f"Error in list_nominal_sizes: {e}", exc_info=True)
        return safe_json_dumps(error_payload(e))
