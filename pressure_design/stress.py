"""
Allowable stress lookup with temperature interpolation.

Policy, in order:
1. exact temperature match returns the stored value untouched
2. temperatures outside the sampled range clamp to the nearest boundary
3. anything else is linearly interpolated between the bracketing samples
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from .exceptions import InvalidInputError
from .tables import MaterialStressSample, StressTable

logger = logging.getLogger("pipe-thickness-mcp.stress")


class StressResolver:
    """Resolve allowable stress (ksi) for a material at a temperature (Celsius)."""

    def __init__(self, table: StressTable):
        self.table = table

    def curve(self, material_code: str) -> Tuple[MaterialStressSample, ...]:
        """Stored samples for a material, ascending by temperature."""
        return self.table.samples(material_code)

    def resolve(self, material_code: str, temperature_c: float) -> float:
        """Allowable stress in ksi at ``temperature_c``.

        Raises:
            NotFoundError: If the material has no stress samples
            InvalidInputError: If the temperature is NaN
        """
        samples = self.table.samples(material_code)

        for sample in samples:
            if sample.temperature_c == temperature_c:
                return sample.allowable_stress_ksi

        lowest, highest = samples[0], samples[-1]
        if temperature_c < lowest.temperature_c:
            logger.debug("%s: %.1f°C below table minimum %.1f°C, clamping",
                         material_code, temperature_c, lowest.temperature_c)
            return lowest.allowable_stress_ksi
        if temperature_c > highest.temperature_c:
            logger.debug("%s: %.1f°C above table maximum %.1f°C, clamping",
                         material_code, temperature_c, highest.temperature_c)
            return highest.allowable_stress_ksi

        for low, high in zip(samples, samples[1:]):
            if low.temperature_c <= temperature_c <= high.temperature_c:
                t_low, s_low = low.temperature_c, low.allowable_stress_ksi
                t_high, s_high = high.temperature_c, high.allowable_stress_ksi
                return s_low + (s_high - s_low) * (temperature_c - t_low) / (t_high - t_low)

        # NaN falls through every comparison
        raise InvalidInputError(f"Cannot interpolate stress at temperature {temperature_c!r}",
                                field="temperature_c")

    def resolve_many(self, material_code: str, temperatures_c: Sequence[float]) -> np.ndarray:
        """Vectorised ``resolve`` over an array of temperatures.

        np.interp clamps outside the sample range, which matches the scalar
        policy; exact matches are written back from the table afterwards.
        """
        samples = self.table.samples(material_code)
        temps = np.array([s.temperature_c for s in samples], dtype=float)
        stresses = np.array([s.allowable_stress_ksi for s in samples], dtype=float)
        query = np.atleast_1d(np.asarray(temperatures_c, dtype=float))
        if np.isnan(query).any():
            raise InvalidInputError("Cannot interpolate stress at a NaN temperature",
                                    field="temperature_c")

        result = np.interp(query, temps, stresses)
        for t, s in zip(temps, stresses):
            result[query == t] = s
        return result
