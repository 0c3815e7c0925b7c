#!/usr/bin/env python3
"""
Tests for the ASME B31.3 wall thickness calculator.

Manual check for NPS 6 at 20 bar, 20°C, A106 B (S = 20 ksi):
    P = 20 * 14.5038 = 290.076 psi
    t = 290.076 * 6.625 / (2 * (20000 + 0.4 * 290.076)) = 0.04777 in
"""

import pytest

from pressure_design.exceptions import InvalidInputError, NotFoundError
from pressure_design.schedules import EXCEEDS_MAX_SCHEDULE_WARNING
from pressure_design.tables import (
    MaterialStressSample, NominalSizeRecord, ReferenceTables,
    ScheduleRecord, ScheduleTable, SizeTable, StressTable,
)
from pressure_design.thickness import DesignInput, ThicknessCalculator, design_thickness
from utils.reference_data import default_tables

A106B = "ASTM_A106_Grade_B"

CREEP_WARNING = "Temperature exceeds 700°F (371°C). Creep considerations may apply."
Y_WARNING = "Temperature exceeds 900°F (482°C). Y coefficient may need adjustment for creep range."


def make_design(**overrides):
    data = dict(pressure_bar=20.0, temperature_c=20.0, nominal_size="6", material_code=A106B)
    data.update(overrides)
    return DesignInput.build(**data)


def make_flat_tables(stress_ksi):
    """Single size, single material tables with a constant stress."""
    return ReferenceTables(
        stress=StressTable([
            MaterialStressSample(material_code=A106B, temperature_c=20, allowable_stress_ksi=stress_ksi),
        ]),
        schedules=ScheduleTable([
            ScheduleRecord(nps="6", schedule="40", wall_thickness_in=0.280, outside_diameter_in=6.625),
            ScheduleRecord(nps="6", schedule="80", wall_thickness_in=0.432, outside_diameter_in=6.625),
        ]),
        sizes=SizeTable([NominalSizeRecord(nps="6", nb_mm=150, outside_diameter_in=6.625)]),
    )


class TestDesignThickness:
    """The thickness formula itself."""

    def test_nps6_manual_calculation(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design())
        expected = 290.076 * 6.625 / (2 * (20000 + 0.4 * 290.076))

        assert result.pressure_psi == pytest.approx(290.076)
        assert result.allowable_stress_ksi == 20.0
        assert result.design_thickness_in == pytest.approx(expected)
        assert result.min_required_thickness_in == result.design_thickness_in
        assert 0 < result.design_thickness_in < result.outside_diameter_in / 2
        assert result.recommended_wall_thickness_in >= result.design_thickness_in
        assert result.recommended_schedule == "5S"

    def test_mm_properties(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design())
        assert result.design_thickness_mm == pytest.approx(result.design_thickness_in * 25.4)
        assert result.allowable_stress_mpa == pytest.approx(20.0 * 6.895)

    def test_corrosion_allowance_added(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design(corrosion_allowance_mm=3.0))
        assert result.min_required_thickness_in - result.design_thickness_in == pytest.approx(3.0 / 25.4)
        assert result.min_required_thickness_mm == pytest.approx(result.design_thickness_mm + 3.0)

    def test_joint_efficiency_increases_thickness(self):
        calc = ThicknessCalculator(default_tables())
        seamless = calc.calculate(make_design())
        welded = calc.calculate(make_design(joint_efficiency=0.85))
        assert welded.design_thickness_in > seamless.design_thickness_in
        assert "E=0.85 (welded)" in welded.notes

    def test_default_notes(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design())
        assert result.notes == (
            "Calculated per ASME B31.3 para. 304.1.2. E=1 (seamless), W=1, Y=0.4. "
            "Corrosion allowance: 0mm. No mill tolerance applied."
        )

    def test_zero_denominator_rejected(self):
        with pytest.raises(InvalidInputError):
            design_thickness(100.0, 6.625, 0.0, y_coefficient=0.0)

    def test_zero_pressure_gives_zero_thickness(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design(pressure_bar=0))
        assert result.design_thickness_in == 0.0
        assert result.recommended_schedule == "5S"


class TestProperties:
    """Monotonicity and idempotence."""

    def test_monotonic_in_pressure(self):
        calc = ThicknessCalculator(default_tables())
        thicknesses = [calc.calculate(make_design(pressure_bar=p)).min_required_thickness_in
                       for p in (5, 10, 20, 50, 100, 200)]
        assert thicknesses == sorted(thicknesses)
        assert len(set(thicknesses)) == len(thicknesses)

    def test_idempotent(self):
        calc = ThicknessCalculator(default_tables())
        design = make_design(temperature_c=250, selected_schedule="40", corrosion_allowance_mm=1.5)
        assert calc.calculate(design) == calc.calculate(design)

    def test_dict_input(self):
        calc = ThicknessCalculator(default_tables())
        from_dict = calc.calculate({"pressure_bar": 20, "temperature_c": 20,
                                    "nominal_size": "6", "material_code": A106B})
        assert from_dict == calc.calculate(make_design())

    def test_bore_and_nps_give_same_result(self):
        calc = ThicknessCalculator(default_tables())
        assert calc.calculate(make_design(nominal_size="DN150")) == calc.calculate(make_design())


class TestSelectedSchedule:
    """Adequacy check of a user-selected schedule."""

    def test_adequate_schedule(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design(selected_schedule="40"))
        assert result.selected_schedule_adequate is True
        assert result.selected_schedule_wall_in == 0.280
        assert result.warnings == []

    def test_inadequate_schedule_warns_with_both_values(self):
        result = ThicknessCalculator(default_tables()).calculate(
            make_design(selected_schedule="5S", corrosion_allowance_mm=3.0))

        assert result.selected_schedule_adequate is False
        assert result.selected_schedule_wall_in < result.min_required_thickness_in
        assert result.warnings[0] == (
            f"Selected schedule 5S (2.77mm) is INADEQUATE. "
            f"Minimum required: {result.min_required_thickness_mm:.2f}mm."
        )
        assert result.recommended_schedule == "40"

    def test_unknown_schedule_warns(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design(selected_schedule="STD"))
        assert result.selected_schedule_adequate is None
        assert result.selected_schedule_wall_in is None
        assert "Schedule STD not found for NPS 6." in result.warnings

    def test_blank_schedule_ignored(self):
        result = ThicknessCalculator(default_tables()).calculate(make_design(selected_schedule="  "))
        assert result.selected_schedule is None
        assert result.selected_schedule_adequate is None


class TestRecommendation:
    """Recommended schedule and the exceeds-thickest fallback."""

    def test_exceeds_thickest_schedule(self):
        result = ThicknessCalculator(default_tables()).calculate(
            make_design(pressure_bar=400, nominal_size="24"))
        assert result.recommended_schedule == "160"
        assert result.recommended_wall_thickness_in == 2.344
        assert result.min_required_thickness_in > 2.344
        assert EXCEEDS_MAX_SCHEDULE_WARNING in result.warnings

    def test_select_schedule_accepts_bore_token(self):
        rec = ThicknessCalculator(default_tables()).select_schedule("DN50", 0.1)
        assert rec.nps == "2"
        assert rec.schedule == "10S"


class TestTemperatureWarnings:
    """Creep range advisories."""

    def test_below_700f_no_warning(self):
        # 371°C = 699.8°F
        result = ThicknessCalculator(default_tables()).calculate(make_design(temperature_c=371))
        assert result.warnings == []

    def test_above_700f(self):
        # 400°C = 752°F
        result = ThicknessCalculator(default_tables()).calculate(make_design(temperature_c=400))
        assert result.temperature_f == pytest.approx(752.0)
        assert result.warnings == [CREEP_WARNING]

    def test_above_900f_both_warnings(self):
        # 500°C = 932°F
        result = ThicknessCalculator(default_tables()).calculate(make_design(temperature_c=500))
        assert result.temperature_f > 900
        assert CREEP_WARNING in result.warnings
        assert Y_WARNING in result.warnings

    def test_warning_order(self):
        result = ThicknessCalculator(default_tables()).calculate(
            make_design(temperature_c=500, selected_schedule="5S", pressure_bar=100))
        assert result.warnings[0].startswith("Selected schedule 5S")
        assert result.warnings[-2:] == [CREEP_WARNING, Y_WARNING]


class TestErrors:
    """Fatal lookup and input failures."""

    def test_unknown_material(self):
        with pytest.raises(NotFoundError) as exc_info:
            ThicknessCalculator(default_tables()).calculate(make_design(material_code="UNOBTAINIUM"))
        assert exc_info.value.lookup == "material"

    def test_size_without_outside_diameter(self):
        with pytest.raises(NotFoundError) as exc_info:
            ThicknessCalculator(default_tables()).calculate(make_design(nominal_size="7"))
        assert exc_info.value.lookup == "outside_diameter"

    def test_size_without_schedules(self):
        with pytest.raises(NotFoundError) as exc_info:
            ThicknessCalculator(default_tables()).calculate(make_design(nominal_size="26"))
        assert exc_info.value.lookup == "schedule"

    def test_unresolvable_size_token(self):
        with pytest.raises(InvalidInputError):
            ThicknessCalculator(default_tables()).calculate(make_design(nominal_size="DN175"))

    def test_negative_pressure_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            make_design(pressure_bar=-1)
        assert exc_info.value.field == "pressure_bar"

    def test_invalid_factors_rejected(self):
        with pytest.raises(InvalidInputError):
            make_design(joint_efficiency=0)
        with pytest.raises(InvalidInputError):
            make_design(weld_strength_reduction=1.2)
        with pytest.raises(InvalidInputError):
            make_design(y_coefficient=1.0)
        with pytest.raises(InvalidInputError):
            make_design(corrosion_allowance_mm=-0.5)

    def test_blank_material_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            make_design(material_code="  ")
        assert exc_info.value.field == "material_code"

    def test_nan_temperature_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            make_design(temperature_c=float("nan"))
        assert exc_info.value.field == "temperature_c"

    def test_infinite_pressure_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            make_design(pressure_bar=float("inf"))
        assert exc_info.value.field == "pressure_bar"

    def test_non_finite_factors_rejected(self):
        with pytest.raises(InvalidInputError):
            make_design(pressure_bar=float("nan"))
        with pytest.raises(InvalidInputError):
            make_design(corrosion_allowance_mm=float("inf"))
        with pytest.raises(InvalidInputError):
            make_design(y_coefficient=float("nan"))

    def test_nan_in_dict_input_is_typed_failure(self):
        with pytest.raises(InvalidInputError):
            ThicknessCalculator(default_tables()).calculate(
                {"pressure_bar": 20, "temperature_c": float("nan"),
                 "nominal_size": "6", "material_code": A106B})


class TestSweepAndReload:
    """Parameter sweeps and table snapshots."""

    def test_pressure_sweep(self):
        calc = ThicknessCalculator(default_tables())
        results = calc.sweep(make_design(), "pressure_bar", [10, 20, 30])
        assert len(results) == 3
        assert results[1] == calc.calculate(make_design(pressure_bar=20))
        thicknesses = [r.design_thickness_in for r in results]
        assert thicknesses == sorted(thicknesses)

    def test_temperature_sweep_derates_stress(self):
        calc = ThicknessCalculator(default_tables())
        results = calc.sweep(make_design(), "temperature_c", [20, 300, 500])
        stresses = [r.allowable_stress_ksi for r in results]
        assert stresses[0] > stresses[1] > stresses[2]

    def test_sweep_rejects_other_variables(self):
        with pytest.raises(InvalidInputError):
            ThicknessCalculator(default_tables()).sweep(make_design(), "nominal_size", ["2", "4"])

    def test_reload_tables(self):
        calc = ThicknessCalculator(make_flat_tables(20.0))
        before = calc.calculate(make_design())
        calc.reload_tables(make_flat_tables(10.0))
        after = calc.calculate(make_design())
        assert after.allowable_stress_ksi == 10.0
        assert after.design_thickness_in > before.design_thickness_in

    def test_reference_tables_immutable(self):
        tables = make_flat_tables(20.0)
        with pytest.raises(AttributeError):
            tables.stress = None


class TestConstants:
    """Design constants live in the core and are re-exported for the tools."""

    def test_utils_reexports_core_constants(self):
        from pressure_design import constants as core
        from utils import constants as shared

        assert shared.BAR_to_PSI is core.BAR_to_PSI
        assert shared.INCH_to_MM == core.INCH_to_MM == 25.4
        assert shared.celsius_to_fahrenheit is core.celsius_to_fahrenheit
        assert core.celsius_to_fahrenheit(500) == pytest.approx(932.0)
