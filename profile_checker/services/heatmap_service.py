from collections.abc import Iterable
from collections.abc import Mapping
from datetime import date
from datetime import tzinfo

from profile_checker.models import HeatmapCell
from profile_checker.services.dates import Instant
from profile_checker.services.dates import rolling_window
from profile_checker.services.dates import truncate_to_day


WINDOW_DAYS = 365
LEVEL_NAMES = ("empty", "tier1", "tier2", "tier3", "tier4")


def heatmap_level(count: int) -> int:
    """Map daily activity count to a heatmap level in range 0..4."""

    if count <= 0:
        return 0
    if count <= 2:
        return 1
    if count == 3:
        return 2
    if count <= 6:
        return 3
    return 4


def level_name(count: int) -> str:
    return LEVEL_NAMES[heatmap_level(count)]


def cell_tooltip(cell: HeatmapCell) -> str:
    return f"{cell.date} has {cell.count} submissions"


def counts_from_instants(
    instants: Iterable[Instant], tz: tzinfo | None = None
) -> dict[str, int]:
    """Aggregate raw event instants into a sparse per-day count map."""

    aggregated_counts: dict[str, int] = {}
    for instant in instants:
        day = truncate_to_day(instant, tz)
        aggregated_counts[day] = aggregated_counts.get(day, 0) + 1
    return aggregated_counts


def counts_from_epoch_map(
    calendar: Mapping[str, object], tz: tzinfo | None = None
) -> dict[str, int]:
    """Re-key an epoch-seconds calendar by local ISO day.

    Entries whose key or count cannot be read are skipped.
    """

    aggregated_counts: dict[str, int] = {}
    for raw_timestamp, raw_count in calendar.items():
        try:
            timestamp = int(raw_timestamp)
        except (TypeError, ValueError):
            continue
        if isinstance(raw_count, bool) or not isinstance(raw_count, int):
            continue
        if raw_count < 0:
            continue
        day = truncate_to_day(timestamp, tz)
        aggregated_counts[day] = aggregated_counts.get(day, 0) + raw_count
    return aggregated_counts


def build_heatmap(
    counts_by_date: Mapping[str, int], end: date, days: int = WINDOW_DAYS
) -> list[HeatmapCell]:
    """Expand a sparse count map into a dense calendar ending at `end`.

    Dates outside the window are dropped and missing dates count as zero.
    """

    return [
        HeatmapCell(date=day, count=counts_by_date.get(day, 0))
        for day in rolling_window(end, days)
    ]


def heatmap_total(cells: Iterable[HeatmapCell]) -> int:
    return sum(cell.count for cell in cells)
