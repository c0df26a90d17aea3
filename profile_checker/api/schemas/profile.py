from datetime import tzinfo

from pydantic import BaseModel

from profile_checker.models import Direction
from profile_checker.models import HeatmapCell
from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.models import SeriesPoint
from profile_checker.services.dates import format_short_date
from profile_checker.services.heatmap_service import cell_tooltip
from profile_checker.services.heatmap_service import heatmap_level
from profile_checker.services.heatmap_service import heatmap_total
from profile_checker.services.heatmap_service import level_name


class HeatmapDay(BaseModel):
    """Single day item used in the heatmap response."""

    date: str
    count: int
    level: int
    tier: str
    tooltip: str

    @classmethod
    def from_cell(cls, cell: HeatmapCell) -> "HeatmapDay":
        return cls(
            date=cell.date,
            count=cell.count,
            level=heatmap_level(cell.count),
            tier=level_name(cell.count),
            tooltip=cell_tooltip(cell),
        )


class HeatmapResponse(BaseModel):
    """Dense one-year activity calendar."""

    platform: Platform
    username: str
    start: str | None
    end: str | None
    total: int
    days: list[HeatmapDay]

    @classmethod
    def from_profile(cls, profile: NormalizedProfile) -> "HeatmapResponse":
        cells = profile.heatmap
        return cls(
            platform=profile.platform,
            username=profile.username,
            start=cells[0].date if cells else None,
            end=cells[-1].date if cells else None,
            total=heatmap_total(cells),
            days=[HeatmapDay.from_cell(cell) for cell in cells],
        )


class SummaryPanel(BaseModel):
    """What the summary panel shows for the currently displayed point."""

    rating: int
    direction: Direction
    date_label: str
    title: str
    rank: int | None
    problems_solved: int | None = None
    total_problems: int | None = None

    @classmethod
    def from_point(cls, point: SeriesPoint, tz: tzinfo | None = None) -> "SummaryPanel":
        return cls(
            rating=round(point.rating),
            direction=point.direction,
            date_label=format_short_date(point.timestamp, tz),
            title=point.title,
            rank=point.rank,
            problems_solved=point.problems_solved,
            total_problems=point.total_problems,
        )


class ProfileResponse(BaseModel):
    """Normalized profile plus the chart values derived from it."""

    profile: NormalizedProfile
    axis_ticks: list[str]
    summary_available: bool
    current: SummaryPanel | None
    heatmap: HeatmapResponse
