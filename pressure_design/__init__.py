"""
Pressure-design core: ASME B31.3 wall thickness, allowable stress
interpolation and standard schedule selection.

The package is pure; reference data is injected through ReferenceTables.
"""

from .exceptions import PressureDesignError, NotFoundError, InvalidInputError
from .tables import (
    MaterialStressSample, ScheduleRecord, NominalSizeRecord,
    StressTable, ScheduleTable, SizeTable, ReferenceTables,
)
from .stress import StressResolver
from .schedules import ScheduleSelector, ScheduleRecommendation
from .thickness import DesignInput, DesignResult, ThicknessCalculator, design_thickness

__all__ = [
    'PressureDesignError',
    'NotFoundError',
    'InvalidInputError',
    'MaterialStressSample',
    'ScheduleRecord',
    'NominalSizeRecord',
    'StressTable',
    'ScheduleTable',
    'SizeTable',
    'ReferenceTables',
    'StressResolver',
    'ScheduleSelector',
    'ScheduleRecommendation',
    'DesignInput',
    'DesignResult',
    'ThicknessCalculator',
    'design_thickness',
]
