"""Unified parameter sweep for pressure-design calculations."""

from typing import Optional, Literal
import inspect
from tools.pipe_thickness import pipe_thickness_sweep


def parameter_sweep(
    calculation: Literal["thickness"],
    variable: Literal["pressure_bar", "temperature_c"],
    start: float,
    stop: float,
    n: int,

    # Fixed design conditions
    pressure_bar: Optional[float] = None,
    temperature_c: Optional[float] = None,

    # Pipe and material
    nominal_size: Optional[str] = None,
    nb_mm: Optional[float] = None,
    material_code: Optional[str] = None,

    # Design factors
    corrosion_allowance_mm: Optional[float] = None,
    joint_efficiency: Optional[float] = None,
    weld_strength_reduction: Optional[float] = None,
    y_coefficient: Optional[float] = None,
) -> str:
    """Unified parameter sweep calculations.

    Performs parameter sweeps for different calculation types:
    - calculation='thickness': Required wall thickness and recommended schedule
      as design pressure or design temperature varies

    Args:
        calculation: Type of calculation to sweep
        variable: Variable to sweep ("pressure_bar" or "temperature_c")
        start: Start value for sweep
        stop: End value for sweep
        n: Number of points in sweep
        pressure_bar: Fixed pressure when sweeping temperature
        temperature_c: Fixed temperature when sweeping pressure

    Returns:
        JSON string with sweep results

    Examples:
        >>> parameter_sweep(calculation="thickness", variable="temperature_c",
        ...                 start=20, stop=500, n=10, pressure_bar=40,
        ...                 nominal_size="8", material_code="A106B")
    """
    params = locals().copy()
    params.pop("calculation")

    if calculation == "thickness":
        fn = pipe_thickness_sweep
    else:
        return f'{{"error": "Invalid calculation: {calculation}", "successful": false}}'

    sig = inspect.signature(fn)
    allowed = set(sig.parameters.keys())
    forwarded = {k: v for k, v in params.items() if k in allowed and v is not None}

    return fn(**forwarded)
