from collections.abc import Mapping
from datetime import date
from typing import Any

from profile_checker.clients.base import NO_AVATAR
from profile_checker.clients.base import NO_NAME
from profile_checker.clients.base import NOT_AVAILABLE
from profile_checker.clients.base import PlatformAdapter
from profile_checker.clients.base import as_number
from profile_checker.clients.base import optional_int
from profile_checker.clients.base import require_list
from profile_checker.clients.base import require_mapping
from profile_checker.clients.base import stat_value
from profile_checker.clients.base import text_or
from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.services.dates import parse_instant
from profile_checker.services.heatmap_service import build_heatmap
from profile_checker.services.series_service import RatingEvent
from profile_checker.services.series_service import normalize_series


def parse_calendar_day(raw_value: Any) -> date | None:
    """Parse heatmap dates such as `2023-1-4`, which are not zero padded."""

    if not isinstance(raw_value, str):
        return None
    try:
        year, month, day = (int(part) for part in raw_value.strip()[:10].split("-"))
        return date(year, month, day)
    except ValueError:
        return None


class CodechefAdapter(PlatformAdapter):
    """Codechef handle lookup, served by a single upstream call.

    When the payload carries no activity entries the heatmap stays
    zero-filled.
    """

    platform = Platform.CODECHEF

    def _is_missing_user(self, payload: Any) -> bool:
        return isinstance(payload, Mapping) and payload.get("success") is False

    async def _fetch(self, username: str) -> NormalizedProfile:
        profile = require_mapping(
            await self._request_json(f"{self.base_url}/{username}", identifies_user=True),
            "Codechef handle",
        )

        raw_ratings = require_list(profile.get("ratingData") or [], "Codechef ratingData")
        events = [
            RatingEvent(
                timestamp=int(parse_instant(item["end_date"], self.tz).timestamp()),
                rating=as_number(item["rating"]),
                title=text_or(item.get("name"), NOT_AVAILABLE),
                rank=optional_int(item.get("rank")),
            )
            for item in raw_ratings
            if isinstance(item, Mapping) and item.get("end_date")
        ]

        activity = profile.get("heatMap")
        activity = activity if isinstance(activity, list) else []

        return NormalizedProfile(
            platform=self.platform,
            username=username,
            display_name=text_or(profile.get("name"), NO_NAME),
            avatar_url=text_or(profile.get("profile"), NO_AVATAR),
            joined_date=self._joined_date(activity),
            bio=(
                f"{text_or(profile.get('stars'), NOT_AVAILABLE)} Coder from "
                f"{text_or(profile.get('countryName'), NOT_AVAILABLE)} || Passionate "
                "about problem-solving and improving competitive programming skills."
            ),
            headline_stats={
                "stars": stat_value(profile.get("stars")),
                "country": stat_value(profile.get("countryName")),
                "current_rating": stat_value(profile.get("currentRating")),
                "highest_rating": stat_value(profile.get("highestRating")),
                "global_rank": stat_value(profile.get("globalRank")),
                "country_rank": stat_value(profile.get("countryRank")),
                "contests_attended": len(raw_ratings),
            },
            series=tuple(normalize_series(events, self.tz)),
            heatmap=tuple(build_heatmap(self._activity_counts(activity), self.clock())),
        )

    def _joined_date(self, activity: list[Any]) -> str:
        if not activity or not isinstance(activity[0], Mapping):
            return NOT_AVAILABLE
        first_day = parse_calendar_day(activity[0].get("date"))
        if first_day is None:
            return NOT_AVAILABLE
        return first_day.strftime("%B %Y")

    @staticmethod
    def _activity_counts(activity: list[Any]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for item in activity:
            if not isinstance(item, Mapping):
                continue
            day = parse_calendar_day(item.get("date"))
            count = optional_int(item.get("value"))
            if day is None or count is None or count < 0:
                continue
            key = day.isoformat()
            counts[key] = counts.get(key, 0) + count
        return counts
