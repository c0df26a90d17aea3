from collections.abc import Mapping
from typing import Any

from profile_checker.clients.base import NO_AVATAR
from profile_checker.clients.base import NO_NAME
from profile_checker.clients.base import NOT_AVAILABLE
from profile_checker.clients.base import NotFoundError
from profile_checker.clients.base import PlatformAdapter
from profile_checker.clients.base import as_number
from profile_checker.clients.base import optional_int
from profile_checker.clients.base import require_list
from profile_checker.clients.base import require_mapping
from profile_checker.clients.base import stat_value
from profile_checker.clients.base import text_or
from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.services.dates import format_month_year
from profile_checker.services.heatmap_service import build_heatmap
from profile_checker.services.heatmap_service import counts_from_instants
from profile_checker.services.series_service import RatingEvent
from profile_checker.services.series_service import normalize_series


def unwrap_result(payload: Any, what: str) -> Any:
    """Return `result` from a Codeforces envelope with status OK."""

    envelope = require_mapping(payload, what)
    if envelope.get("status") != "OK":
        raise ValueError(f"{what} returned status {envelope.get('status')!r}")
    return envelope.get("result")


def capitalize_rank(rank: Any) -> str:
    if not isinstance(rank, str) or not rank:
        return "Unknown"
    return rank[:1].upper() + rank[1:]


class CodeforcesAdapter(PlatformAdapter):
    platform = Platform.CODEFORCES

    def _is_missing_user(self, payload: Any) -> bool:
        if not isinstance(payload, Mapping) or payload.get("status") != "FAILED":
            return False
        return "not found" in str(payload.get("comment", "")).lower()

    async def _fetch(self, username: str) -> NormalizedProfile:
        base = self.base_url
        info_data, rating_data, status_data = await self._fan_out(
            self._request_json(
                f"{base}/user.info", params={"handles": username}, identifies_user=True
            ),
            self._request_json(
                f"{base}/user.rating", params={"handle": username}, identifies_user=True
            ),
            self._request_json(
                f"{base}/user.status", params={"handle": username}, identifies_user=True
            ),
        )

        users = require_list(unwrap_result(info_data, "Codeforces user.info"), "users")
        if not users:
            raise NotFoundError(self.platform, "codeforces user not found")
        user = require_mapping(users[0], "Codeforces user")

        history = require_list(
            unwrap_result(rating_data, "Codeforces user.rating"), "rating history"
        )
        submissions = require_list(
            unwrap_result(status_data, "Codeforces user.status"), "submissions"
        )

        events = [
            RatingEvent(
                timestamp=int(entry["ratingUpdateTimeSeconds"]),
                rating=as_number(entry["newRating"]),
                title=text_or(entry.get("contestName"), NOT_AVAILABLE),
                rank=optional_int(entry.get("rank")),
            )
            for entry in (require_mapping(item, "rating change") for item in history)
        ]
        submission_times = [
            int(item["creationTimeSeconds"])
            for item in submissions
            if isinstance(item, Mapping) and item.get("creationTimeSeconds") is not None
        ]

        registered = user.get("registrationTimeSeconds")
        joined_date = NOT_AVAILABLE
        if isinstance(registered, int):
            joined_date = format_month_year(registered, self.tz)

        max_rank = capitalize_rank(user.get("maxRank"))
        country = text_or(user.get("country"), NOT_AVAILABLE)
        organization = text_or(user.get("organization"), NOT_AVAILABLE)
        series = normalize_series(events, self.tz)

        return NormalizedProfile(
            platform=self.platform,
            username=username,
            display_name=self._display_name(user),
            avatar_url=text_or(user.get("titlePhoto"), NO_AVATAR),
            joined_date=joined_date,
            bio=(
                f"{max_rank} coder from {country} || Studying at {organization} || "
                "Passionate about problem-solving and improving competitive "
                "programming skills."
            ),
            headline_stats={
                "max_rank": max_rank,
                "max_rating": stat_value(user.get("maxRating")),
                "country": country,
                "organization": organization,
                "contests_attended": len(series),
            },
            series=tuple(series),
            heatmap=tuple(
                build_heatmap(counts_from_instants(submission_times, self.tz), self.clock())
            ),
        )

    @staticmethod
    def _display_name(user: Mapping[str, Any]) -> str:
        parts = [
            part.strip()
            for part in (user.get("firstName"), user.get("lastName"))
            if isinstance(part, str) and part.strip()
        ]
        return " ".join(parts) or NO_NAME
