from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo

from profile_checker.models import Direction
from profile_checker.models import SeriesPoint
from profile_checker.services.dates import year_label


@dataclass(frozen=True)
class RatingEvent:
    """Platform-neutral rating change, produced by an adapter's field mapping."""

    timestamp: int
    rating: int | float
    title: str
    rank: int | None = None
    problems_solved: int | None = None
    total_problems: int | None = None


def classify_direction(current: int | float, previous: int | float) -> Direction:
    """Trend used for chart icons. Equal ratings count as UP."""

    if current >= previous:
        return Direction.UP
    return Direction.DOWN


def strict_direction(current: int | float, previous: int | float) -> Direction:
    if current == previous:
        return Direction.SAME
    if current > previous:
        return Direction.UP
    return Direction.DOWN


def normalize_series(
    events: Iterable[RatingEvent], tz: tzinfo | None = None
) -> list[SeriesPoint]:
    """Convert rating events into chart points, keeping the given order.

    Events must already be in ascending time order; they are not re-sorted
    and duplicate timestamps are kept.
    """

    points: list[SeriesPoint] = []
    previous_rating: int | float | None = None
    for event in events:
        previous = event.rating if previous_rating is None else previous_rating
        points.append(
            SeriesPoint(
                timestamp=event.timestamp,
                rating=event.rating,
                rank=event.rank,
                title=event.title,
                year_label=year_label(event.timestamp, tz),
                direction=classify_direction(event.rating, previous),
                problems_solved=event.problems_solved,
                total_problems=event.total_problems,
            )
        )
        previous_rating = event.rating

    return points


def axis_ticks(series: Sequence[SeriesPoint]) -> list[str]:
    """Return the first and last year labels; empty for an empty series."""

    if not series:
        return []
    return [series[0].year_label, series[-1].year_label]
