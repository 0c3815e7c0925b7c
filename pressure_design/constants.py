"""
Unit conversion factors, ASME B31.3 default design factors and advisory
temperature thresholds used by the pressure-design core.
"""

# Conversion factors
BAR_to_PSI = 14.5038         # bar to psi
INCH_to_MM = 25.4            # inch to millimetre
KSI_to_PSI = 1000.0          # ksi to psi
KSI_to_MPA = 6.895           # ksi to MPa


def celsius_to_fahrenheit(temperature_c: float) -> float:
    """Convert a temperature from Celsius to Fahrenheit."""
    return temperature_c * 9 / 5 + 32


# ASME B31.3 para. 304.1.2 default factors
DEFAULT_JOINT_EFFICIENCY = 1.0        # E: seamless pipe
DEFAULT_WELD_STRENGTH_REDUCTION = 1.0  # W: no weld strength reduction
DEFAULT_Y_COEFFICIENT = 0.4           # Y: ferritic steels below the creep range
DEFAULT_CORROSION_ALLOWANCE_MM = 0.0

# Advisory temperature thresholds (°F)
CREEP_WARNING_TEMP_F = 700.0
CREEP_Y_REVISION_TEMP_F = 900.0
