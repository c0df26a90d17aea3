from collections.abc import Mapping
from typing import Any

from profile_checker.clients.base import NO_AVATAR
from profile_checker.clients.base import NO_BIO
from profile_checker.clients.base import NO_NAME
from profile_checker.clients.base import NOT_AVAILABLE
from profile_checker.clients.base import PlatformAdapter
from profile_checker.clients.base import require_list
from profile_checker.clients.base import require_mapping
from profile_checker.clients.base import text_or
from profile_checker.models import NormalizedProfile
from profile_checker.models import Organization
from profile_checker.models import Platform
from profile_checker.models import Repository
from profile_checker.services.dates import format_month_year
from profile_checker.services.dates import parse_instant
from profile_checker.services.dates import truncate_to_day
from profile_checker.services.heatmap_service import build_heatmap
from profile_checker.services.heatmap_service import counts_from_instants


GITHUB_HEADERS = {"Accept": "application/vnd.github+json"}


class GitHubAdapter(PlatformAdapter):
    """GitHub profile, organizations and repositories.

    The user payload supplies the organizations and repos URLs, so those two
    calls are only issued once it has resolved. GitHub has no rating history:
    the series is always empty and the heatmap counts repository creations.
    """

    platform = Platform.GITHUB

    def _is_missing_user(self, payload: Any) -> bool:
        return isinstance(payload, Mapping) and payload.get("message") == "Not Found"

    async def _fetch(self, username: str) -> NormalizedProfile:
        user = require_mapping(
            await self._request_json(
                f"{self.base_url}/users/{username}",
                headers=GITHUB_HEADERS,
                identifies_user=True,
            ),
            "GitHub user",
        )

        organizations_url = user.get("organizations_url")
        repos_url = user.get("repos_url")
        if not isinstance(organizations_url, str) or not isinstance(repos_url, str):
            raise ValueError("GitHub user response is missing required fields")

        organizations_data, repos_data = await self._fan_out(
            self._request_json(organizations_url, headers=GITHUB_HEADERS),
            self._request_json(repos_url, headers=GITHUB_HEADERS),
        )
        organizations = self._organizations(
            require_list(organizations_data, "GitHub organizations")
        )
        repositories = self._repositories(require_list(repos_data, "GitHub repositories"))

        created_instants = [
            parse_instant(item["created_at"], self.tz)
            for item in repos_data
            if isinstance(item, Mapping) and isinstance(item.get("created_at"), str)
        ]

        raw_created_at = user.get("created_at")
        joined_date = NOT_AVAILABLE
        if isinstance(raw_created_at, str) and raw_created_at:
            joined_date = format_month_year(parse_instant(raw_created_at, self.tz), self.tz)

        return NormalizedProfile(
            platform=self.platform,
            username=username,
            display_name=text_or(user.get("name"), NO_NAME),
            avatar_url=text_or(user.get("avatar_url"), NO_AVATAR),
            joined_date=joined_date,
            bio=text_or(user.get("bio"), NO_BIO),
            headline_stats={
                "followers": self._count(user.get("followers")),
                "following": self._count(user.get("following")),
                "public_repos": self._count(user.get("public_repos")),
            },
            heatmap=tuple(
                build_heatmap(counts_from_instants(created_instants, self.tz), self.clock())
            ),
            organizations=tuple(organizations),
            repositories=tuple(repositories),
        )

    @staticmethod
    def _count(value: Any) -> int | str:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return NOT_AVAILABLE

    @staticmethod
    def _organizations(items: list[Any]) -> list[Organization]:
        organizations: list[Organization] = []
        for item in items:
            if not isinstance(item, Mapping):
                continue
            login = item.get("login")
            if not isinstance(login, str) or not login:
                continue
            organizations.append(
                Organization(login=login, avatar_url=text_or(item.get("avatar_url"), ""))
            )
        return organizations

    def _repositories(self, items: list[Any]) -> list[Repository]:
        repositories: list[Repository] = []
        for item in items:
            if not isinstance(item, Mapping):
                continue
            name = item.get("name")
            if not isinstance(name, str) or not name:
                continue
            raw_created_at = item.get("created_at")
            created_on = NOT_AVAILABLE
            if isinstance(raw_created_at, str) and raw_created_at:
                created_on = truncate_to_day(parse_instant(raw_created_at, self.tz), self.tz)
            repositories.append(
                Repository(
                    name=name,
                    created_on=created_on,
                    html_url=text_or(item.get("html_url"), ""),
                )
            )
        return repositories
