import json
from collections.abc import Mapping
from typing import Any

from profile_checker.clients.base import NO_AVATAR
from profile_checker.clients.base import NO_BIO
from profile_checker.clients.base import NO_NAME
from profile_checker.clients.base import NOT_AVAILABLE
from profile_checker.clients.base import PlatformAdapter
from profile_checker.clients.base import as_number
from profile_checker.clients.base import optional_int
from profile_checker.clients.base import require_list
from profile_checker.clients.base import require_mapping
from profile_checker.clients.base import stat_value
from profile_checker.clients.base import text_or
from profile_checker.models import Badge
from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.services.heatmap_service import build_heatmap
from profile_checker.services.heatmap_service import counts_from_epoch_map
from profile_checker.services.series_service import RatingEvent
from profile_checker.services.series_service import normalize_series


LEETCODE_ORIGIN = "https://leetcode.com"
DIFFICULTY_TOTALS = {"easy": 871, "medium": 1821, "hard": 819}


def parse_submission_calendar(raw_calendar: Any) -> Mapping[str, Any]:
    """Return the submission calendar, decoding it when sent as a JSON string."""

    if raw_calendar is None:
        return {}
    if isinstance(raw_calendar, str):
        raw_calendar = json.loads(raw_calendar) if raw_calendar.strip() else {}
    return require_mapping(raw_calendar, "LeetCode submission calendar")


def badge_icon_url(icon: str) -> str:
    if icon.startswith("/"):
        return f"{LEETCODE_ORIGIN}{icon}"
    return icon


class LeetCodeAdapter(PlatformAdapter):
    platform = Platform.LEETCODE

    def _is_missing_user(self, payload: Any) -> bool:
        if not isinstance(payload, Mapping):
            return False
        errors = payload.get("errors")
        if not isinstance(errors, list):
            return False
        return any(
            isinstance(error, Mapping)
            and "does not exist" in str(error.get("message", "")).lower()
            for error in errors
        )

    async def _fetch(self, username: str) -> NormalizedProfile:
        base = self.base_url
        (
            profile_data,
            problems_data,
            badges_data,
            solved_data,
            contest_data,
            calendar_data,
        ) = await self._fan_out(
            self._request_json(f"{base}/{username}", identifies_user=True),
            self._request_json(f"{base}/problems"),
            self._request_json(f"{base}/{username}/badges", identifies_user=True),
            self._request_json(f"{base}/{username}/solved", identifies_user=True),
            self._request_json(f"{base}/{username}/contest", identifies_user=True),
            self._request_json(f"{base}/{username}/calendar", identifies_user=True),
        )

        profile = require_mapping(profile_data, "LeetCode profile")
        problems = require_mapping(problems_data, "LeetCode problems")
        solved = require_mapping(solved_data, "LeetCode solved")
        contest = require_mapping(contest_data, "LeetCode contest")
        calendar = require_mapping(calendar_data, "LeetCode calendar")
        badges = require_mapping(badges_data, "LeetCode badges")

        participation = require_list(
            contest.get("contestParticipation") or [], "LeetCode contest history"
        )
        events = [self._rating_event(item) for item in participation]
        submissions = parse_submission_calendar(calendar.get("submissionCalendar"))

        return NormalizedProfile(
            platform=self.platform,
            username=username,
            display_name=text_or(profile.get("name"), NO_NAME),
            avatar_url=text_or(profile.get("avatar"), NO_AVATAR),
            joined_date=NOT_AVAILABLE,
            bio=text_or(profile.get("about"), NO_BIO),
            headline_stats=self._headline_stats(profile, problems, solved, contest),
            series=tuple(normalize_series(events, self.tz)),
            heatmap=tuple(
                build_heatmap(counts_from_epoch_map(submissions, self.tz), self.clock())
            ),
            badges=tuple(self._badges(badges)),
        )

    def _rating_event(self, item: Any) -> RatingEvent:
        entry = require_mapping(item, "LeetCode contest entry")
        contest = require_mapping(entry.get("contest"), "LeetCode contest")
        return RatingEvent(
            timestamp=int(contest["startTime"]),
            rating=as_number(entry["rating"]),
            title=text_or(contest.get("title"), NOT_AVAILABLE),
            rank=optional_int(entry.get("ranking")),
            problems_solved=optional_int(entry.get("problemsSolved")),
            total_problems=optional_int(entry.get("totalProblems")),
        )

    @staticmethod
    def _badges(badges: Mapping[str, Any]) -> list[Badge]:
        result: list[Badge] = []
        for item in badges.get("badges") or []:
            if not isinstance(item, Mapping):
                continue
            icon = item.get("icon")
            if not isinstance(icon, str) or not icon:
                continue
            result.append(
                Badge(
                    name=text_or(item.get("displayName"), NOT_AVAILABLE),
                    icon_url=badge_icon_url(icon),
                )
            )
        return result

    @staticmethod
    def _headline_stats(
        profile: Mapping[str, Any],
        problems: Mapping[str, Any],
        solved: Mapping[str, Any],
        contest: Mapping[str, Any],
    ) -> dict[str, str | int | float]:
        stats: dict[str, str | int | float] = {
            "ranking": stat_value(profile.get("ranking")),
            "total_solved": stat_value(solved.get("solvedProblem")),
            "total_questions": stat_value(problems.get("totalQuestions")),
        }
        for difficulty, total in DIFFICULTY_TOTALS.items():
            stats[f"{difficulty}_solved"] = stat_value(solved.get(f"{difficulty}Solved"))
            stats[f"{difficulty}_total"] = total

        stats["contest_attended"] = stat_value(contest.get("contestAttend"))
        stats["contest_rating"] = stat_value(contest.get("contestRating"))
        stats["contest_global_ranking"] = stat_value(contest.get("contestGlobalRanking"))
        stats["total_participants"] = stat_value(contest.get("totalParticipants"))
        stats["contest_top_percentage"] = stat_value(contest.get("contestTopPercentage"))
        return stats
