"""
Read-only reference tables consumed by the pressure-design calculator.

Three tables are involved:

- StressTable: allowable stress (ksi) by material and temperature (Celsius)
- ScheduleTable: standard wall thickness by nominal size and schedule
- SizeTable: outside diameter and nominal bore by nominal size

All tables are immutable once built. ReferenceTables bundles one consistent
snapshot of the three so a calculation never sees a half-swapped data set.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .constants import INCH_to_MM
from .exceptions import InvalidInputError, NotFoundError
from .nominal_sizes import normalize_nps, nps_sort_key, nps_value, parse_bore_mm

logger = logging.getLogger("pipe-thickness-mcp.tables")


class MaterialStressSample(BaseModel):
    """One point of a material's allowable-stress curve."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    material_code: str = Field(..., description="Material code, e.g. ASTM_A106_Grade_B")
    temperature_c: float = Field(..., description="Temperature in Celsius")
    allowable_stress_ksi: float = Field(..., description="Allowable stress in ksi", ge=0)
    material_name: Optional[str] = Field(None, description="Human readable material name")


class ScheduleRecord(BaseModel):
    """Standard wall thickness of one schedule at one nominal size."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    nps: str = Field(..., description="Nominal pipe size, e.g. '6' or '1-1/4'")
    schedule: str = Field(..., description="Schedule designation, e.g. '40', 'XXS'")
    wall_thickness_in: float = Field(..., description="Wall thickness in inches", gt=0)
    outside_diameter_in: float = Field(..., description="Outside diameter in inches", gt=0)
    nb_mm: Optional[float] = Field(None, description="Nominal bore in mm")

    @property
    def wall_thickness_mm(self) -> float:
        return self.wall_thickness_in * INCH_to_MM

    @property
    def outside_diameter_mm(self) -> float:
        return self.outside_diameter_in * INCH_to_MM


class NominalSizeRecord(BaseModel):
    """Outside diameter and nominal bore of one nominal pipe size."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    nps: str
    nb_mm: Optional[float] = None
    outside_diameter_in: float = Field(..., gt=0)

    @property
    def outside_diameter_mm(self) -> float:
        return self.outside_diameter_in * INCH_to_MM


class StressTable:
    """Allowable stress samples grouped by material.

    Args:
        samples: Stress samples; (material_code, temperature_c) must be unique
        equivalents: Optional mapping of material code -> code whose samples it
            shares (e.g. a national-standard grade pointing to its ASTM twin)
    """

    def __init__(self, samples: Iterable[MaterialStressSample],
                 equivalents: Optional[Mapping[str, str]] = None):
        grouped: Dict[str, List[MaterialStressSample]] = defaultdict(list)
        names: Dict[str, Optional[str]] = {}
        for sample in samples:
            grouped[sample.material_code].append(sample)
            if names.get(sample.material_code) is None:
                names[sample.material_code] = sample.material_name

        self._samples: Dict[str, Tuple[MaterialStressSample, ...]] = {}
        for code, items in grouped.items():
            items.sort(key=lambda s: s.temperature_c)
            temps = [s.temperature_c for s in items]
            if len(set(temps)) != len(temps):
                raise InvalidInputError(
                    f"Duplicate temperature samples for material '{code}'", field="samples")
            self._samples[code] = tuple(items)

        self._names = names
        self._equivalents = dict(equivalents or {})

    def canonical_code(self, material_code: str) -> str:
        """Follow equivalent-grade links to the code that owns the samples."""
        code = material_code
        seen = {code}
        while code not in self._samples and code in self._equivalents:
            code = self._equivalents[code]
            if code in seen:
                raise InvalidInputError(
                    f"Circular material equivalence starting at '{material_code}'",
                    field="material_code")
            seen.add(code)
        return code

    def samples(self, material_code: str) -> Tuple[MaterialStressSample, ...]:
        """Samples for a material sorted ascending by temperature.

        Raises:
            NotFoundError: If the material has no samples
        """
        code = self.canonical_code(material_code)
        samples = self._samples.get(code)
        if not samples:
            raise NotFoundError("material", material_code,
                                f"No allowable stress data for material '{material_code}'")
        return samples

    def materials(self) -> List[Dict[str, Optional[str]]]:
        """All material codes (including equivalents) with display names."""
        result = [{"material_code": code, "material_name": self._names.get(code),
                   "equivalent_of": None}
                  for code in sorted(self._samples)]
        for code, target in sorted(self._equivalents.items()):
            if code in self._samples:
                continue
            result.append({"material_code": code, "material_name": None,
                           "equivalent_of": target})
        return result

    def __contains__(self, material_code: str) -> bool:
        try:
            return self.canonical_code(material_code) in self._samples
        except InvalidInputError:
            return False


class ScheduleTable:
    """Schedule records grouped by canonical NPS token."""

    def __init__(self, records: Iterable[ScheduleRecord]):
        grouped: Dict[str, Dict[str, ScheduleRecord]] = defaultdict(dict)
        for record in records:
            nps = normalize_nps(record.nps)
            key = record.schedule.strip().upper()
            if key in grouped[nps]:
                raise InvalidInputError(
                    f"Duplicate schedule '{record.schedule}' for NPS {nps}", field="records")
            grouped[nps][key] = record
        self._records: Dict[str, Dict[str, ScheduleRecord]] = dict(grouped)

    def records(self, nps: str) -> List[ScheduleRecord]:
        """Records for one size in table order (unsorted)."""
        return list(self._records.get(normalize_nps(nps), {}).values())

    def get(self, nps: str, schedule: str) -> Optional[ScheduleRecord]:
        return self._records.get(normalize_nps(nps), {}).get(str(schedule).strip().upper())

    def for_bore(self, nb_mm: float) -> List[ScheduleRecord]:
        """Records whose nominal bore matches, sorted by wall thickness."""
        found = [r for group in self._records.values() for r in group.values()
                 if r.nb_mm is not None and abs(r.nb_mm - nb_mm) < 1e-9]
        return sorted(found, key=lambda r: (r.wall_thickness_in, r.schedule))

    def sizes(self) -> List[str]:
        return sorted(self._records, key=nps_sort_key)


class SizeTable:
    """Nominal size -> outside diameter, with nominal bore reverse lookup."""

    def __init__(self, records: Iterable[NominalSizeRecord]):
        self._by_nps: Dict[str, NominalSizeRecord] = {}
        self._by_value = {}
        self._by_bore: Dict[float, NominalSizeRecord] = {}
        for record in records:
            nps = normalize_nps(record.nps)
            if nps in self._by_nps:
                raise InvalidInputError(f"Duplicate size record for NPS {nps}", field="records")
            self._by_nps[nps] = record
            value = nps_value(nps)
            if value is not None:
                self._by_value[value] = record
            if record.nb_mm is not None:
                self._by_bore[float(record.nb_mm)] = record

    def resolve(self, token) -> NominalSizeRecord:
        """Resolve a nominal size token to its size record.

        NPS tokens take precedence; a bare number that is not a known NPS is
        retried as a nominal bore in mm.

        Raises:
            InvalidInputError: Token is neither an NPS nor a known bore
            NotFoundError: Token is a plausible NPS with no OD mapping
        """
        text = str(token).strip()
        if not text:
            raise InvalidInputError("Nominal size must not be empty", field="nominal_size")

        bore = parse_bore_mm(text)
        if bore is not None:
            record = self._by_bore.get(bore)
            if record is None:
                raise InvalidInputError(
                    f"Nominal bore {bore:g} mm does not map to a nominal pipe size",
                    field="nominal_size")
            logger.debug("Resolved bore %s to NPS %s", text, record.nps)
            return record

        nps = normalize_nps(text)
        record = self._by_nps.get(nps)
        if record is not None:
            return record

        value = nps_value(nps)
        if value is None:
            raise InvalidInputError(
                f"'{text}' is not a recognised nominal pipe size or nominal bore",
                field="nominal_size")
        if value in self._by_value:
            return self._by_value[value]

        record = self._by_bore.get(float(value))
        if record is not None:
            logger.debug("Resolved bare bore %s mm to NPS %s", text, record.nps)
            return record

        raise NotFoundError("outside_diameter", nps, f"No outside diameter data for NPS {nps}")

    def nominal_sizes(self) -> List[str]:
        """NPS tokens in ascending numeric order."""
        return sorted(self._by_nps, key=nps_sort_key)

    def records(self) -> List[NominalSizeRecord]:
        return [self._by_nps[nps] for nps in self.nominal_sizes()]


class ReferenceTables:
    """An immutable snapshot of the three reference tables."""

    __slots__ = ("stress", "schedules", "sizes")

    def __init__(self, stress: StressTable, schedules: ScheduleTable, sizes: SizeTable):
        object.__setattr__(self, "stress", stress)
        object.__setattr__(self, "schedules", schedules)
        object.__setattr__(self, "sizes", sizes)

    def __setattr__(self, name, value):
        raise AttributeError("ReferenceTables is immutable")
