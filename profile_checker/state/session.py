import logging
from collections.abc import Awaitable
from collections.abc import Callable

from profile_checker.models import Platform
from profile_checker.models import SeriesPoint
from profile_checker.services.profile_service import ProfileOutcome
from profile_checker.services.profile_service import load_profile
from profile_checker.state.chart_interaction import ChartInteractionState


logger = logging.getLogger(__name__)

ProfileLoader = Callable[[Platform, str], Awaitable[ProfileOutcome]]


class ProfileSession:
    """Application context for one viewer.

    Holds the current username, the latest applied outcome and the chart
    interaction state. Every load is tagged with a request epoch and only
    applied while that epoch is still the latest.

    This is library API for interactive front ends embedding the package;
    the HTTP routes stay stateless and call `load_profile` directly.
    """

    def __init__(self, loader: ProfileLoader = load_profile) -> None:
        self._loader = loader
        self._epoch = 0
        self.username: str | None = None
        self.outcome: ProfileOutcome | None = None
        self.chart = ChartInteractionState()

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def current_data(self) -> SeriesPoint | None:
        return self.chart.current_data

    def submit_username(self, username: str) -> None:
        cleaned = username.strip()
        if not cleaned:
            raise ValueError("username cannot be empty")
        self.username = cleaned

    def go_home(self) -> None:
        """Clear the username and drop any in-flight result."""

        self._epoch += 1
        self.username = None
        self.outcome = None
        self.chart.reset()

    async def load(self, platform: Platform, username: str | None = None) -> bool:
        """Fetch a profile for the current username.

        Returns True when the outcome was applied, False when a newer load or
        a return home made it stale.
        """

        if username is not None:
            self.submit_username(username)
        if self.username is None:
            raise ValueError("username is not set")

        self._epoch += 1
        epoch = self._epoch
        outcome = await self._loader(platform, self.username)

        if epoch != self._epoch:
            logger.info(
                "Discarding stale %s result for %r (epoch %d, latest %d)",
                platform.value,
                outcome.username,
                epoch,
                self._epoch,
            )
            return False

        self.outcome = outcome
        self.chart.reset(outcome.profile.series if outcome.profile else ())
        return True
