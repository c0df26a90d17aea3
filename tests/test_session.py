import asyncio
from datetime import timezone

import pytest

from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.services.profile_service import FailureKind
from profile_checker.services.profile_service import ProfileOutcome
from profile_checker.services.series_service import RatingEvent
from profile_checker.services.series_service import normalize_series
from profile_checker.state.chart_interaction import InteractionPhase
from profile_checker.state.session import ProfileSession


def make_profile(username: str, ratings: list[int]) -> NormalizedProfile:
    series = normalize_series(
        [
            RatingEvent(timestamp=1590969600 + index * 86400, rating=rating, title=f"R{index}")
            for index, rating in enumerate(ratings)
        ],
        timezone.utc,
    )
    return NormalizedProfile(
        platform=Platform.CODEFORCES,
        username=username,
        display_name=username.title(),
        avatar_url="No User found",
        joined_date="Not Available",
        bio="No Bio Available",
        series=tuple(series),
    )


def test_load_applies_outcome_and_starts_idle() -> None:
    async def loader(platform: Platform, username: str) -> ProfileOutcome:
        return ProfileOutcome(platform, username, profile=make_profile(username, [1500, 1600]))

    session = ProfileSession(loader=loader)

    applied = asyncio.run(session.load(Platform.CODEFORCES, "alice"))

    assert applied is True
    assert session.username == "alice"
    assert session.epoch == 1
    assert session.chart.phase is InteractionPhase.IDLE
    assert session.current_data.rating == 1600


def test_new_load_resets_hover() -> None:
    async def loader(platform: Platform, username: str) -> ProfileOutcome:
        return ProfileOutcome(platform, username, profile=make_profile(username, [1500, 1600, 1700]))

    session = ProfileSession(loader=loader)
    asyncio.run(session.load(Platform.CODEFORCES, "alice"))
    session.chart.pointer_move(0)

    asyncio.run(session.load(Platform.CODEFORCES, "bob"))

    assert session.chart.phase is InteractionPhase.IDLE
    assert session.current_data.rating == 1700


def test_stale_result_is_discarded() -> None:
    async def scenario():
        first_started = asyncio.Event()
        release_first = asyncio.Event()

        async def loader(platform: Platform, username: str) -> ProfileOutcome:
            if username == "alice":
                first_started.set()
                await release_first.wait()
                return ProfileOutcome(platform, username, profile=make_profile(username, [1200]))
            return ProfileOutcome(platform, username, profile=make_profile(username, [1900]))

        session = ProfileSession(loader=loader)
        first = asyncio.create_task(session.load(Platform.CODEFORCES, "alice"))
        await first_started.wait()
        applied_second = await session.load(Platform.CODEFORCES, "bob")
        release_first.set()
        applied_first = await first
        return session, applied_first, applied_second

    session, applied_first, applied_second = asyncio.run(scenario())

    assert applied_first is False
    assert applied_second is True
    assert session.outcome.username == "bob"
    assert session.current_data.rating == 1900


def test_go_home_discards_in_flight_result() -> None:
    async def scenario():
        started = asyncio.Event()
        release = asyncio.Event()

        async def loader(platform: Platform, username: str) -> ProfileOutcome:
            started.set()
            await release.wait()
            return ProfileOutcome(platform, username, profile=make_profile(username, [1500]))

        session = ProfileSession(loader=loader)
        pending = asyncio.create_task(session.load(Platform.CODEFORCES, "alice"))
        await started.wait()
        session.go_home()
        release.set()
        return session, await pending

    session, applied = asyncio.run(scenario())

    assert applied is False
    assert session.username is None
    assert session.outcome is None
    assert session.current_data is None


def test_failure_outcome_leaves_chart_empty() -> None:
    async def loader(platform: Platform, username: str) -> ProfileOutcome:
        return ProfileOutcome(platform, username, failure=FailureKind.NOT_FOUND)

    session = ProfileSession(loader=loader)

    assert asyncio.run(session.load(Platform.CODEFORCES, "doesnotexist123")) is True
    assert session.outcome.failure is FailureKind.NOT_FOUND
    assert session.current_data is None


def test_username_is_required() -> None:
    session = ProfileSession()

    with pytest.raises(ValueError):
        session.submit_username("   ")
    with pytest.raises(ValueError):
        asyncio.run(session.load(Platform.GITHUB))
