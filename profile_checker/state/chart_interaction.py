from collections.abc import Sequence
from enum import Enum

from profile_checker.models import SeriesPoint
from profile_checker.services.series_service import axis_ticks


class InteractionPhase(str, Enum):
    IDLE = "idle"
    HOVERING = "hovering"


class ChartInteractionState:
    """Pointer hover over a rating series and the point shown in the summary.

    Idle shows the last point; Hovering(i) shows point i. Loading a new
    series always returns to Idle.
    """

    def __init__(self, series: Sequence[SeriesPoint] = ()) -> None:
        self._series: tuple[SeriesPoint, ...] = tuple(series)
        self._hovered_index: int | None = None

    @property
    def series(self) -> tuple[SeriesPoint, ...]:
        return self._series

    @property
    def phase(self) -> InteractionPhase:
        if self._hovered_index is None:
            return InteractionPhase.IDLE
        return InteractionPhase.HOVERING

    @property
    def hovered_index(self) -> int | None:
        return self._hovered_index

    @property
    def axis_ticks(self) -> list[str]:
        return axis_ticks(self._series)

    @property
    def current_data(self) -> SeriesPoint | None:
        """Hovered point, else the last point, else None for an empty series."""

        if self._hovered_index is not None:
            return self._series[self._hovered_index]
        if not self._series:
            return None
        return self._series[-1]

    def pointer_move(self, index: int) -> bool:
        """Hover `index`. Returns False and keeps the state for invalid indices."""

        if not isinstance(index, int) or isinstance(index, bool):
            return False
        if not 0 <= index < len(self._series):
            return False
        self._hovered_index = index
        return True

    def pointer_leave(self) -> None:
        self._hovered_index = None

    def reset(self, series: Sequence[SeriesPoint] = ()) -> None:
        self._series = tuple(series)
        self._hovered_index = None
