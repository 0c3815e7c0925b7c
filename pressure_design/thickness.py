"""
ASME B31.3 para. 304.1.2 pressure-design wall thickness.

    t   = P * D / (2 * (S * E * W + P * Y))
    t_m = t + c

P is design pressure (psi), D outside diameter (in), S allowable stress (psi),
E joint efficiency, W weld strength reduction factor, Y the temperature
coefficient and c the corrosion allowance. The calculator works in these
customary units internally; input arrives in bar and Celsius.
"""

import logging
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    BAR_to_PSI, INCH_to_MM, KSI_to_MPA, KSI_to_PSI,
    DEFAULT_JOINT_EFFICIENCY, DEFAULT_WELD_STRENGTH_REDUCTION, DEFAULT_Y_COEFFICIENT,
    DEFAULT_CORROSION_ALLOWANCE_MM, CREEP_WARNING_TEMP_F, CREEP_Y_REVISION_TEMP_F,
    celsius_to_fahrenheit,
)
from .exceptions import InvalidInputError
from .schedules import ScheduleRecommendation, ScheduleSelector
from .stress import StressResolver
from .tables import ReferenceTables

logger = logging.getLogger("pipe-thickness-mcp.thickness")

SWEEPABLE_VARIABLES = ("pressure_bar", "temperature_c")


class DesignInput(BaseModel):
    """One pressure-design request."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    pressure_bar: float = Field(..., description="Design pressure in bar (gauge)", ge=0)
    temperature_c: float = Field(..., description="Design temperature in Celsius")
    nominal_size: str = Field(..., description="NPS token ('6', '1-1/4') or nominal bore ('DN150')")
    material_code: str = Field(..., description="Material code in the stress table")
    selected_schedule: Optional[str] = Field(None, description="Schedule to check for adequacy")
    corrosion_allowance_mm: float = Field(DEFAULT_CORROSION_ALLOWANCE_MM, ge=0)
    joint_efficiency: float = Field(DEFAULT_JOINT_EFFICIENCY, gt=0, le=1.0)
    weld_strength_reduction: float = Field(DEFAULT_WELD_STRENGTH_REDUCTION, gt=0, le=1.0)
    y_coefficient: float = Field(DEFAULT_Y_COEFFICIENT, ge=0, lt=1.0)

    @field_validator("nominal_size", "material_code", mode="before")
    @classmethod
    def not_blank(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("must not be blank")
        return str(v).strip()

    @field_validator("selected_schedule", mode="before")
    @classmethod
    def blank_schedule_is_none(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @classmethod
    def build(cls, **data) -> "DesignInput":
        """Construct from keyword data, raising InvalidInputError on bad fields."""
        try:
            return cls(**data)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ()))
            raise InvalidInputError(f"Invalid design input '{field}': {first['msg']}",
                                    field=field) from e


class DesignResult(BaseModel):
    """Outcome of one thickness calculation. Thicknesses are in inches."""

    model_config = ConfigDict(frozen=True)

    nps: str
    outside_diameter_in: float
    pressure_psi: float
    temperature_f: float
    allowable_stress_ksi: float

    design_thickness_in: float
    min_required_thickness_in: float

    selected_schedule: Optional[str] = None
    selected_schedule_wall_in: Optional[float] = None
    selected_schedule_adequate: Optional[bool] = None

    recommended_schedule: str
    recommended_wall_thickness_in: float

    warnings: List[str] = Field(default_factory=list)
    notes: str = ""

    @property
    def design_thickness_mm(self) -> float:
        return self.design_thickness_in * INCH_to_MM

    @property
    def min_required_thickness_mm(self) -> float:
        return self.min_required_thickness_in * INCH_to_MM

    @property
    def allowable_stress_mpa(self) -> float:
        return self.allowable_stress_ksi * KSI_to_MPA

    @property
    def recommended_wall_thickness_mm(self) -> float:
        return self.recommended_wall_thickness_in * INCH_to_MM

    @property
    def selected_schedule_wall_mm(self) -> Optional[float]:
        if self.selected_schedule_wall_in is None:
            return None
        return self.selected_schedule_wall_in * INCH_to_MM


def design_thickness(pressure_psi: float, outside_diameter_in: float, stress_psi: float,
                     joint_efficiency: float = DEFAULT_JOINT_EFFICIENCY,
                     weld_strength_reduction: float = DEFAULT_WELD_STRENGTH_REDUCTION,
                     y_coefficient: float = DEFAULT_Y_COEFFICIENT) -> float:
    """Pressure design thickness t (inches), without allowances."""
    denominator = 2 * (stress_psi * joint_efficiency * weld_strength_reduction
                       + pressure_psi * y_coefficient)
    if denominator <= 0:
        raise InvalidInputError(
            "Allowable stress and Y coefficient give a non-positive formula denominator",
            field="allowable_stress")
    return pressure_psi * outside_diameter_in / denominator


def _format_factor(value: float) -> str:
    return f"{value:g}"


class ThicknessCalculator:
    """Minimum wall thickness and schedule recommendation per ASME B31.3.

    Args:
        tables: Reference data snapshot. Every call reads a single snapshot;
            ``reload_tables`` replaces it atomically.
    """

    def __init__(self, tables: ReferenceTables):
        self._tables = tables

    @property
    def tables(self) -> ReferenceTables:
        return self._tables

    def reload_tables(self, tables: ReferenceTables) -> None:
        self._tables = tables
        logger.info("Reference tables reloaded")

    def resolve_stress(self, material_code: str, temperature_c: float) -> float:
        """Allowable stress (ksi) for a material at a Celsius temperature."""
        return StressResolver(self._tables.stress).resolve(material_code, temperature_c)

    def select_schedule(self, nominal_size: str, required_thickness_in: float,
                        margin_in: float = 0.0) -> ScheduleRecommendation:
        """Thinnest adequate schedule for a size token (NPS or bore)."""
        tables = self._tables
        size = tables.sizes.resolve(nominal_size)
        return ScheduleSelector(tables.schedules).select(size.nps, required_thickness_in, margin_in)

    def calculate(self, design: Union[DesignInput, dict]) -> DesignResult:
        """Run the full pressure-design calculation.

        Raises:
            NotFoundError: Unknown material, size without OD, size without schedules
            InvalidInputError: Unresolvable size token or invalid input fields
        """
        if isinstance(design, dict):
            design = DesignInput.build(**design)

        tables = self._tables
        stress_resolver = StressResolver(tables.stress)
        selector = ScheduleSelector(tables.schedules)
        warnings: List[str] = []

        # Step 1: units and geometry
        size = tables.sizes.resolve(design.nominal_size)
        nps = size.nps
        pressure_psi = design.pressure_bar * BAR_to_PSI
        temperature_f = celsius_to_fahrenheit(design.temperature_c)
        od_in = size.outside_diameter_in

        # Step 2: allowable stress, looked up on the table's Celsius axis
        stress_ksi = stress_resolver.resolve(design.material_code, design.temperature_c)

        # Steps 3-4: design thickness and corrosion allowance
        e = design.joint_efficiency
        w = design.weld_strength_reduction
        y = design.y_coefficient
        t = design_thickness(pressure_psi, od_in, stress_ksi * KSI_to_PSI, e, w, y)
        t_min = t + design.corrosion_allowance_mm / INCH_to_MM

        # Step 5: adequacy of a user-selected schedule
        selected_wall = None
        adequate = None
        if design.selected_schedule:
            record = selector.find(nps, design.selected_schedule)
            if record is not None:
                selected_wall = record.wall_thickness_in
                adequate = selected_wall >= t_min
                if not adequate:
                    warnings.append(
                        f"Selected schedule {design.selected_schedule} "
                        f"({selected_wall * INCH_to_MM:.2f}mm) is INADEQUATE. "
                        f"Minimum required: {t_min * INCH_to_MM:.2f}mm."
                    )
            else:
                warnings.append(f"Schedule {design.selected_schedule} not found for NPS {nps}.")

        # Step 6: recommendation
        recommendation = selector.select(nps, t_min)
        if recommendation.warning:
            warnings.append(recommendation.warning)

        # Step 7: temperature advisories
        if temperature_f > CREEP_WARNING_TEMP_F:
            warnings.append("Temperature exceeds 700°F (371°C). Creep considerations may apply.")
        if temperature_f > CREEP_Y_REVISION_TEMP_F:
            warnings.append(
                "Temperature exceeds 900°F (482°C). Y coefficient may need adjustment for creep range.")

        joint = "seamless" if e == 1.0 else "welded"
        notes = (
            f"Calculated per ASME B31.3 para. 304.1.2. E={_format_factor(e)} ({joint}), "
            f"W={_format_factor(w)}, Y={_format_factor(y)}. "
            f"Corrosion allowance: {_format_factor(design.corrosion_allowance_mm)}mm. "
            f"No mill tolerance applied."
        )

        logger.debug("NPS %s, %s: t=%.4f in, t_m=%.4f in, S=%.2f ksi, recommended %s",
                     nps, design.material_code, t, t_min, stress_ksi, recommendation.schedule)

        return DesignResult(
            nps=nps,
            outside_diameter_in=od_in,
            pressure_psi=pressure_psi,
            temperature_f=temperature_f,
            allowable_stress_ksi=stress_ksi,
            design_thickness_in=t,
            min_required_thickness_in=t_min,
            selected_schedule=design.selected_schedule,
            selected_schedule_wall_in=selected_wall,
            selected_schedule_adequate=adequate,
            recommended_schedule=recommendation.schedule,
            recommended_wall_thickness_in=recommendation.wall_thickness_in,
            warnings=warnings,
            notes=notes,
        )

    def sweep(self, design: DesignInput, variable: str,
              values: Iterable[float]) -> List[DesignResult]:
        """Evaluate ``calculate`` with one input varied over ``values``."""
        if variable not in SWEEPABLE_VARIABLES:
            raise InvalidInputError(
                f"Cannot sweep '{variable}'. Choose one of: {', '.join(SWEEPABLE_VARIABLES)}",
                field="variable")
        results = []
        for value in values:
            point = DesignInput.build(**{**design.model_dump(), variable: float(value)})
            results.append(self.calculate(point))
        return results
