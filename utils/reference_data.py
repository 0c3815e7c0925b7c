"""
Default reference data for the pressure-design calculator.

- Nominal sizes: ASME B36.10 outside diameters with nominal bore (mm)
- Schedules: ASME B36.10/B36.19 standard wall thicknesses, NPS 1/2 to 24
- Allowable stresses: ASME B31.3 Table A-1 values (ksi) by temperature (°C)

Callers with their own data build a ReferenceTables directly; this module only
supplies the bundled default snapshot.
"""

import logging
from functools import lru_cache

from pressure_design.tables import (
    MaterialStressSample, NominalSizeRecord, ReferenceTables,
    ScheduleRecord, ScheduleTable, SizeTable, StressTable,
)

logger = logging.getLogger("pipe-thickness-mcp.reference_data")

# NPS -> (OD inches, nominal bore mm)
NPS_OD_NB = {
    '1/8': (0.405, 6), '1/4': (0.540, 8), '3/8': (0.675, 10),
    '1/2': (0.840, 15), '3/4': (1.050, 20), '1': (1.315, 25),
    '1-1/4': (1.660, 32), '1-1/2': (1.900, 40), '2': (2.375, 50),
    '2-1/2': (2.875, 65), '3': (3.500, 80), '3-1/2': (4.000, 90),
    '4': (4.500, 100), '5': (5.563, 125), '6': (6.625, 150),
    '8': (8.625, 200), '10': (10.750, 250), '12': (12.750, 300),
    '14': (14.000, 350), '16': (16.000, 400), '18': (18.000, 450),
    '20': (20.000, 500), '22': (22.000, 550), '24': (24.000, 600),
    '26': (26.000, 650), '28': (28.000, 700), '30': (30.000, 750),
    '32': (32.000, 800), '34': (34.000, 850), '36': (36.000, 900),
    '42': (42.000, 1050), '48': (48.000, 1200),
}

# NPS -> {schedule: wall thickness inches}
SCHEDULE_WALL_IN = {
    '1/2': {'5S': 0.065, '10S': 0.083, '40': 0.109, '40S': 0.109, '80': 0.147, '80S': 0.147, '160': 0.188, 'XXS': 0.294},
    '3/4': {'5S': 0.065, '10S': 0.083, '40': 0.113, '40S': 0.113, '80': 0.154, '80S': 0.154, '160': 0.219, 'XXS': 0.308},
    '1': {'5S': 0.065, '10S': 0.109, '40': 0.133, '40S': 0.133, '80': 0.179, '80S': 0.179, '160': 0.250, 'XXS': 0.358},
    '1-1/4': {'5S': 0.065, '10S': 0.109, '40': 0.140, '40S': 0.140, '80': 0.191, '80S': 0.191, '160': 0.250, 'XXS': 0.382},
    '1-1/2': {'5S': 0.065, '10S': 0.109, '40': 0.145, '40S': 0.145, '80': 0.200, '80S': 0.200, '160': 0.281, 'XXS': 0.400},
    '2': {'5S': 0.065, '10S': 0.109, '40': 0.154, '40S': 0.154, '80': 0.218, '80S': 0.218, '160': 0.344, 'XXS': 0.436},
    '2-1/2': {'5S': 0.083, '10S': 0.120, '40': 0.203, '40S': 0.203, '80': 0.276, '80S': 0.276, '160': 0.375, 'XXS': 0.552},
    '3': {'5S': 0.083, '10S': 0.120, '40': 0.216, '40S': 0.216, '80': 0.300, '80S': 0.300, '160': 0.438, 'XXS': 0.600},
    '3-1/2': {'5S': 0.083, '10S': 0.120, '40': 0.226, '40S': 0.226, '80': 0.318, '80S': 0.318},
    '4': {'5S': 0.083, '10S': 0.120, '40': 0.237, '40S': 0.237, '80': 0.337, '80S': 0.337, '120': 0.438, '160': 0.531, 'XXS': 0.674},
    '5': {'5S': 0.109, '10S': 0.134, '40': 0.258, '40S': 0.258, '80': 0.375, '80S': 0.375, '120': 0.500, '160': 0.625, 'XXS': 0.750},
    '6': {'5S': 0.109, '10S': 0.134, '40': 0.280, '40S': 0.280, '80': 0.432, '80S': 0.432, '120': 0.562, '160': 0.719, 'XXS': 0.864},
    '8': {'5S': 0.109, '10S': 0.148, '20': 0.250, '30': 0.277, '40': 0.322, '60': 0.406, '80': 0.500, '100': 0.594, '120': 0.719, '140': 0.812, '160': 0.906, 'XXS': 0.875},
    '10': {'5S': 0.134, '10S': 0.165, '20': 0.250, '30': 0.307, '40': 0.365, '60': 0.500, '80': 0.594, '100': 0.719, '120': 0.844, '140': 1.000, '160': 1.125},
    '12': {'5S': 0.156, '10S': 0.180, '20': 0.250, '30': 0.330, '40': 0.406, '60': 0.562, '80': 0.688, '100': 0.844, '120': 1.000, '140': 1.125, '160': 1.312},
    '14': {'10': 0.250, '20': 0.312, '30': 0.375, '40': 0.438, '60': 0.594, '80': 0.750, '100': 0.938, '120': 1.094, '140': 1.250, '160': 1.406},
    '16': {'10': 0.250, '20': 0.312, '30': 0.375, '40': 0.500, '60': 0.656, '80': 0.844, '100': 1.031, '120': 1.219, '140': 1.438, '160': 1.594},
    '18': {'10': 0.250, '20': 0.312, '30': 0.438, '40': 0.562, '60': 0.750, '80': 0.938, '100': 1.156, '120': 1.375, '140': 1.562, '160': 1.781},
    '20': {'10': 0.250, '20': 0.375, '30': 0.500, '40': 0.594, '60': 0.812, '80': 1.031, '100': 1.281, '120': 1.500, '140': 1.750, '160': 1.969},
    '24': {'10': 0.250, '20': 0.375, '30': 0.562, '40': 0.688, '60': 0.969, '80': 1.219, '100': 1.531, '120': 1.812, '140': 2.062, '160': 2.344},
}

# Temperatures (°C) shared by the stress curves below
_T = [-29, 38, 93, 149, 204, 260, 316, 343, 371, 399, 427, 454, 482, 510, 538]
_T_AUSTENITIC = [-29, 38, 93, 149, 204, 260, 316, 371, 427, 482, 538, 593, 649, 704, 760, 816]
_T_CHROME_MOLY = [-29, 38, 93, 149, 204, 260, 316, 371, 427, 482, 538, 566, 593, 621, 649]

# code -> (name, temperatures °C, allowable stress ksi)
MATERIAL_STRESS_KSI = {
    'ASTM_A106_Grade_B': (
        'ASTM A106 Grade B (Seamless Carbon Steel)', _T,
        [20.0, 20.0, 20.0, 20.0, 18.9, 17.3, 15.8, 15.0, 14.4, 13.0, 10.8, 8.7, 6.5, 4.5, 2.5]),
    'ASTM_A53_Grade_B': (
        'ASTM A53 Grade B (ERW Carbon Steel)', _T[:9],
        [20.0, 20.0, 20.0, 20.0, 18.9, 17.3, 15.8, 15.0, 14.4]),
    'API_5L_Grade_B': (
        'API 5L Grade B (Line Pipe)', _T[:7],
        [20.0, 20.0, 20.0, 20.0, 18.9, 17.3, 15.8]),
    'ASTM_A312_TP304': (
        'ASTM A312 TP304 (Stainless Steel)', _T_AUSTENITIC,
        [20.0, 20.0, 20.0, 18.7, 17.5, 16.5, 15.6, 14.9, 14.3, 13.5, 12.0, 9.8, 7.4, 5.3, 3.7, 2.6]),
    'ASTM_A312_TP316': (
        'ASTM A312 TP316 (316 Stainless Steel)', _T_AUSTENITIC,
        [20.0, 20.0, 20.0, 19.4, 18.5, 17.6, 16.9, 16.3, 15.8, 14.9, 13.3, 10.9, 8.3, 6.1, 4.4, 3.2]),
    'ASTM_A335_P11': (
        'ASTM A335 P11 (1-1/4Cr-1/2Mo Chrome-Moly)', _T_CHROME_MOLY,
        [17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 16.5, 14.0, 11.7, 9.0, 6.5, 4.5]),
    'ASTM_A335_P22': (
        'ASTM A335 P22 (2-1/4Cr-1Mo Chrome-Moly)', _T_CHROME_MOLY,
        [17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 17.1, 15.4, 13.2, 10.8, 8.2, 6.0]),
}


def build_size_table() -> SizeTable:
    return SizeTable(
        NominalSizeRecord(nps=nps, outside_diameter_in=od, nb_mm=nb)
        for nps, (od, nb) in NPS_OD_NB.items()
    )


def build_schedule_table() -> ScheduleTable:
    records = []
    for nps, schedules in SCHEDULE_WALL_IN.items():
        od, nb = NPS_OD_NB[nps]
        for schedule, wall in schedules.items():
            records.append(ScheduleRecord(
                nps=nps, schedule=schedule, wall_thickness_in=wall,
                outside_diameter_in=od, nb_mm=nb,
            ))
    return ScheduleTable(records)


def build_stress_table() -> StressTable:
    samples = []
    for code, (name, temps, stresses) in MATERIAL_STRESS_KSI.items():
        if len(temps) != len(stresses):
            raise ValueError(f"Stress curve for {code} has mismatched lengths")
        samples.extend(
            MaterialStressSample(material_code=code, material_name=name,
                                 temperature_c=t, allowable_stress_ksi=s)
            for t, s in zip(temps, stresses)
        )
    return StressTable(samples)


@lru_cache(maxsize=1)
def default_tables() -> ReferenceTables:
    """The bundled reference snapshot, built once and shared read-only."""
    tables = ReferenceTables(
        stress=build_stress_table(),
        schedules=build_schedule_table(),
        sizes=build_size_table(),
    )
    logger.info("Loaded default reference tables: %d materials, %d sizes with schedules",
                len(MATERIAL_STRESS_KSI), len(SCHEDULE_WALL_IN))
    return tables
