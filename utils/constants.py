"""
Constants used across the Pipe Thickness MCP server.

Conversion factors, default design factors and advisory thresholds live in
pressure_design.constants and are re-exported here; this module adds the
display rounding and sweep limits used by the tool layer.
"""

from pressure_design.constants import (  # noqa: F401
    BAR_to_PSI, INCH_to_MM, KSI_to_PSI, KSI_to_MPA, celsius_to_fahrenheit,
    DEFAULT_JOINT_EFFICIENCY, DEFAULT_WELD_STRENGTH_REDUCTION, DEFAULT_Y_COEFFICIENT,
    DEFAULT_CORROSION_ALLOWANCE_MM, CREEP_WARNING_TEMP_F, CREEP_Y_REVISION_TEMP_F,
)

# Display rounding for tool output
ROUND_INCH = 4
ROUND_MM = 2
ROUND_STRESS = 2

# Parameter sweep limits
SWEEP_MAX_POINTS = 200
