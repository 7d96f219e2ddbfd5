"""Growth stage inference from planting date."""
from datetime import date, datetime, time
from typing import Sequence, Union

from .config import ENGINE
from .inputs import GrowthStage

# Inclusive upper bounds in days since planting: initial, development, flowering
DEFAULT_STAGE_THRESHOLDS = ENGINE.stage_thresholds

DateLike = Union[date, datetime]


def _as_datetime(value: DateLike, tzinfo=None) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=tzinfo)


def days_since_planting(planting_date: DateLike, now: DateLike) -> int:
    """Whole days elapsed since planting, partial days rounded down."""
    if isinstance(planting_date, datetime) or isinstance(now, datetime):
        start = _as_datetime(planting_date, getattr(now, "tzinfo", None))
        end = _as_datetime(now, getattr(planting_date, "tzinfo", None))
        if (start.tzinfo is None) != (end.tzinfo is None):
            # Mixed aware and naive values compare on local wall-clock time
            start, end = start.replace(tzinfo=None), end.replace(tzinfo=None)
        return (end - start).days
    return (now - planting_date).days


class GrowthStageResolver:
    """Maps elapsed days since planting onto a GrowthStage."""

    def __init__(self, thresholds: Sequence[int] = DEFAULT_STAGE_THRESHOLDS):
        if len(thresholds) != 3 or list(thresholds) != sorted(thresholds):
            raise ValueError(f"Expected three ascending stage thresholds, got {thresholds!r}")
        self.thresholds = tuple(thresholds)

    def stage_for_days(self, days_elapsed: int) -> GrowthStage:
        initial, development, flowering = self.thresholds
        # A planting date in the future is treated as just planted
        if days_elapsed <= initial:
            return GrowthStage.INITIAL
        if days_elapsed <= development:
            return GrowthStage.DEVELOPMENT
        if days_elapsed <= flowering:
            return GrowthStage.FLOWERING
        return GrowthStage.MATURITY

    def resolve(self, planting_date: DateLike, now: DateLike) -> GrowthStage:
        return self.stage_for_days(days_since_planting(planting_date, now))


def resolve_growth_stage(planting_date: DateLike, now: DateLike) -> GrowthStage:
    """Growth stage with the default 20/40/70 day thresholds."""
    return GrowthStageResolver().resolve(planting_date, now)
