"""
JSON serialization helpers for pipe-thickness-mcp.

This module provides utilities for safe JSON serialization, particularly
handling special float values (inf, nan) that are not valid in JSON per RFC 7159,
plus the standard error payloads returned by the tools.
"""

import json
import math
from typing import Any, Dict

import numpy as np
from pydantic import BaseModel

from pressure_design.exceptions import InvalidInputError, NotFoundError, PressureDesignError


def sanitize_for_json(obj: Any) -> Any:
    """
    Recursively sanitize an object for JSON serialization.

    Replaces inf and nan float values with None, which serializes to null.
    Handles numpy scalars/arrays and pydantic models.

    Examples:
        >>> sanitize_for_json({'value': float('inf')})
        {'value': None}
        >>> sanitize_for_json([1.0, float('nan'), 3.0])
        [1.0, None, 3.0]
    """
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj

    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            return None
        return obj

    if isinstance(obj, (np.integer, np.floating)):
        return sanitize_for_json(float(obj))
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())

    if isinstance(obj, BaseModel):
        return sanitize_for_json(obj.model_dump())

    if isinstance(obj, dict):
        return {k: sanitize_for_json(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]

    return str(obj)


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """
    Safely serialize an object to JSON string.

    Examples:
        >>> safe_json_dumps({'value': float('inf')})
        '{"value": null}'
    """
    return json.dumps(sanitize_for_json(obj), **kwargs)


def error_payload(exc: Exception) -> Dict[str, Any]:
    """Error dictionary for a failed tool call.

    Typed pressure-design failures keep their lookup/key so callers can tell an
    unknown material from an unknown size or schedule.
    """
    if isinstance(exc, NotFoundError):
        return {
            "error": str(exc),
            "error_type": "not_found",
            "lookup": exc.lookup,
            "key": exc.key,
            "successful": False,
        }
    if isinstance(exc, InvalidInputError):
        return {
            "error": str(exc),
            "error_type": "invalid_input",
            "field": exc.field,
            "successful": False,
        }
    if isinstance(exc, PressureDesignError):
        return {"error": str(exc), "error_type": "pressure_design", "successful": False}
    return {"error": f"Calculation error: {str(exc)}", "successful": False}
