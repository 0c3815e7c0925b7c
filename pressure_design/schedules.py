"""
Standard schedule selection for a required wall thickness.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .constants import INCH_to_MM
from .exceptions import NotFoundError
from .tables import ScheduleRecord, ScheduleTable

logger = logging.getLogger("pipe-thickness-mcp.schedules")

EXCEEDS_MAX_SCHEDULE_WARNING = (
    "Required thickness exceeds maximum standard schedule. "
    "Consider special wall thickness or pipe upgrade."
)


class ScheduleRecommendation(BaseModel):
    """Outcome of a schedule search."""

    model_config = ConfigDict(frozen=True)

    nps: str
    schedule: str
    wall_thickness_in: float
    required_thickness_in: float
    margin_in: float = 0.0
    warning: Optional[str] = None

    @property
    def wall_thickness_mm(self) -> float:
        return self.wall_thickness_in * INCH_to_MM

    @property
    def is_adequate(self) -> bool:
        return self.warning is None


class ScheduleSelector:
    """Pick the thinnest standard schedule meeting a thickness requirement."""

    def __init__(self, table: ScheduleTable):
        self.table = table

    def candidates(self, nps: str) -> List[ScheduleRecord]:
        """Records for a size, thinnest first; equal walls ordered by designation.

        Raises:
            NotFoundError: If the size has no schedule records
        """
        records = self.table.records(nps)
        if not records:
            raise NotFoundError("schedule", nps, f"No schedule data for NPS {nps}")
        return sorted(records, key=lambda r: (r.wall_thickness_in, r.schedule))

    def find(self, nps: str, schedule: str) -> Optional[ScheduleRecord]:
        return self.table.get(nps, schedule)

    def select(self, nps: str, required_thickness_in: float,
               margin_in: float = 0.0) -> ScheduleRecommendation:
        """Thinnest schedule with wall >= required + margin.

        When nothing qualifies the thickest schedule is returned with a warning.
        """
        candidates = self.candidates(nps)
        target = required_thickness_in + margin_in

        for record in candidates:
            if record.wall_thickness_in >= target:
                return ScheduleRecommendation(
                    nps=record.nps,
                    schedule=record.schedule,
                    wall_thickness_in=record.wall_thickness_in,
                    required_thickness_in=required_thickness_in,
                    margin_in=margin_in,
                )

        max_wall = candidates[-1].wall_thickness_in
        thickest = next(r for r in candidates if r.wall_thickness_in == max_wall)
        logger.info("NPS %s: required %.4f in exceeds thickest schedule %s (%.4f in)",
                    nps, target, thickest.schedule, max_wall)
        return ScheduleRecommendation(
            nps=thickest.nps,
            schedule=thickest.schedule,
            wall_thickness_in=thickest.wall_thickness_in,
            required_thickness_in=required_thickness_in,
            margin_in=margin_in,
            warning=EXCEEDS_MAX_SCHEDULE_WARNING,
        )
