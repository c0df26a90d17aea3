import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from profile_checker.clients.base import NotFoundError
from profile_checker.clients.base import PlatformAdapter
from profile_checker.clients.base import UpstreamError
from profile_checker.clients.codechef_client import CodechefAdapter
from profile_checker.clients.codeforces_client import CodeforcesAdapter
from profile_checker.clients.github_client import GitHubAdapter
from profile_checker.clients.leetcode_client import LeetCodeAdapter
from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.services.dates import resolve_timezone
from profile_checker.settings import Settings


logger = logging.getLogger(__name__)

ADAPTERS: dict[Platform, type[PlatformAdapter]] = {
    Platform.LEETCODE: LeetCodeAdapter,
    Platform.GITHUB: GitHubAdapter,
    Platform.CODEFORCES: CodeforcesAdapter,
    Platform.CODECHEF: CodechefAdapter,
}


class FailureKind(str, Enum):
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"


@dataclass(frozen=True)
class ProfileOutcome:
    """Result of one fetch cycle: either a profile or a typed failure."""

    platform: Platform
    username: str
    profile: NormalizedProfile | None = None
    failure: FailureKind | None = None

    @property
    def ok(self) -> bool:
        return self.profile is not None

    @property
    def is_empty(self) -> bool:
        """True for a successful fetch that produced no data points."""

        if self.profile is None:
            return False
        return not self.profile.series and all(
            cell.count == 0 for cell in self.profile.heatmap
        )


def base_url_for(platform: Platform, settings: Settings) -> str:
    return {
        Platform.LEETCODE: settings.leetcode_api_base_url,
        Platform.GITHUB: settings.github_api_base_url,
        Platform.CODEFORCES: settings.codeforces_api_base_url,
        Platform.CODECHEF: settings.codechef_api_base_url,
    }[platform]


def build_adapter(
    platform: Platform, client: httpx.AsyncClient, settings: Settings
) -> PlatformAdapter:
    adapter_class = ADAPTERS[platform]
    return adapter_class(
        client,
        base_url_for(platform, settings),
        tz=resolve_timezone(settings.display_timezone),
    )


async def load_profile(
    platform: Platform,
    username: str,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> ProfileOutcome:
    """Fetch one platform profile and fold adapter errors into an outcome."""

    settings = settings or Settings()
    if client is None:
        async with httpx.AsyncClient(
            timeout=settings.http_timeout_seconds,
            headers={"User-Agent": "profile-checker"},
            follow_redirects=True,
        ) as owned_client:
            return await load_profile(platform, username, settings, owned_client)

    adapter = build_adapter(platform, client, settings)
    try:
        profile = await adapter.fetch_and_normalize(username)
    except NotFoundError:
        return ProfileOutcome(platform, username, failure=FailureKind.NOT_FOUND)
    except UpstreamError:
        return ProfileOutcome(platform, username, failure=FailureKind.UPSTREAM_ERROR)

    logger.info(
        "Loaded %s profile %r: %d series points", platform.value, username, len(profile.series)
    )
    return ProfileOutcome(platform, username, profile=profile)
