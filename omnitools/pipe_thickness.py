"""Unified pipe wall thickness, allowable stress and schedule lookups."""

from typing import List, Optional, Literal
import inspect
from tools.pipe_thickness import calculate_pipe_thickness
from tools.allowable_stress import get_allowable_stress, get_stress_table, list_materials
from tools.pipe_schedules import recommend_schedule, get_schedules, list_nominal_sizes


OPERATIONS = {
    "calculate": calculate_pipe_thickness,
    "allowable_stress": get_allowable_stress,
    "recommend_schedule": recommend_schedule,
    "schedules": get_schedules,
    "stress_table": get_stress_table,
    "materials": list_materials,
    "sizes": list_nominal_sizes,
}


def pipe_thickness(
    operation: Literal[
        "calculate", "allowable_stress", "recommend_schedule",
        "schedules", "stress_table", "materials", "sizes"
    ] = "calculate",

    # Design conditions
    pressure_bar: Optional[float] = None,
    temperature_c: Optional[float] = None,

    # Pipe identification
    nominal_size: Optional[str] = None,
    nb_mm: Optional[float] = None,
    selected_schedule: Optional[str] = None,

    # Material
    material_code: Optional[str] = None,
    temperatures_c: Optional[List[float]] = None,

    # Design factors
    corrosion_allowance_mm: Optional[float] = None,
    joint_efficiency: Optional[float] = None,
    weld_strength_reduction: Optional[float] = None,
    y_coefficient: Optional[float] = None,

    # Schedule recommendation
    required_thickness_mm: Optional[float] = None,
    required_thickness_in: Optional[float] = None,
    margin_mm: Optional[float] = None,
) -> str:
    """Pressure design of straight pipe per ASME B31.3 para. 304.1.2.

    Operations:
    - operation='calculate': Minimum required wall thickness, allowable stress,
      recommended schedule and adequacy of a selected schedule
    - operation='allowable_stress': Allowable stress of a material at temperature
    - operation='recommend_schedule': Thinnest schedule meeting a given thickness
    - operation='schedules': All standard schedules for a nominal size
    - operation='stress_table': Tabulated stress curve for a material
    - operation='materials': Materials with allowable stress data
    - operation='sizes': Nominal pipe sizes with OD and nominal bore

    Args:
        operation: Which calculation or lookup to run

        Design conditions:
            pressure_bar: Design pressure in bar (gauge)
            temperature_c: Design temperature in Celsius

        Pipe identification:
            nominal_size: NPS ("6", "1-1/4") or bore token ("DN150")
            nb_mm: Nominal bore in mm (alternative to nominal_size)
            selected_schedule: Schedule to check for adequacy (e.g. "40", "XS")

        Material:
            material_code: Stress table code or alias ("A106B", "TP316", "P11")
            temperatures_c: Temperatures (°C) at which to evaluate the stress curve
                (stress_table only)

        Design factors (calculate only):
            corrosion_allowance_mm: Corrosion allowance in mm (default 0)
            joint_efficiency: E factor (default 1.0, seamless)
            weld_strength_reduction: W factor (default 1.0)
            y_coefficient: Y coefficient (default 0.4)

        Schedule recommendation:
            required_thickness_mm: Required wall thickness in mm
            required_thickness_in: Required wall thickness in inches
            margin_mm: Extra thickness on top of the requirement

    Returns:
        JSON string with calculation results

    Examples:
        Thickness for NPS 6 A106 B at 20 bar, 20°C:
        >>> pipe_thickness(operation="calculate", pressure_bar=20, temperature_c=20,
        ...                nominal_size="6", material_code="A106B")

        Check an existing schedule:
        >>> pipe_thickness(operation="calculate", pressure_bar=100, temperature_c=200,
        ...                nb_mm=150, material_code="TP316", selected_schedule="10S")

        Allowable stress:
        >>> pipe_thickness(operation="allowable_stress", material_code="A106B",
        ...                temperature_c=121)
    """
    params = locals().copy()
    params.pop("operation")

    # Preflight checks for required parameters
    if operation == "calculate" and (pressure_bar is None or temperature_c is None):
        return '{"error": "pressure_bar and temperature_c are required for operation=calculate", "successful": false}'
    if operation in ("allowable_stress", "stress_table") and not material_code:
        return f'{{"error": "material_code is required for operation={operation}", "successful": false}}'
    if operation == "allowable_stress" and temperature_c is None:
        return '{"error": "temperature_c is required for operation=allowable_stress", "successful": false}'

    fn = OPERATIONS.get(operation)
    if fn is None:
        return f'{{"error": "Invalid operation: {operation}. Must be one of {", ".join(OPERATIONS)}", "successful": false}}'

    # Filter parameters to only those accepted by the target function
    sig = inspect.signature(fn)
    allowed = set(sig.parameters.keys())
    forwarded = {k: v for k, v in params.items() if k in allowed and v is not None}

    return fn(**forwarded)
