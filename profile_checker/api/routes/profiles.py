from fastapi import APIRouter
from fastapi import HTTPException

from profile_checker.api.schemas.profile import HeatmapResponse
from profile_checker.api.schemas.profile import ProfileResponse
from profile_checker.api.schemas.profile import SummaryPanel
from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.services.dates import resolve_timezone
from profile_checker.services.profile_service import FailureKind
from profile_checker.services.profile_service import load_profile
from profile_checker.settings import Settings
from profile_checker.state.chart_interaction import ChartInteractionState


router = APIRouter()
settings = Settings()


async def fetch_profile_or_raise(platform: Platform, username: str) -> NormalizedProfile:
    outcome = await load_profile(platform, username.strip(), settings=settings)

    if outcome.failure is FailureKind.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"{platform.value} user not found")
    if outcome.profile is None:
        raise HTTPException(
            status_code=502, detail=f"{platform.value} API request failed"
        )
    return outcome.profile


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Profile Checker"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/platforms")
def list_platforms() -> list[str]:
    return [platform.value for platform in Platform]


@router.get("/profiles/{platform}/{username}")
async def get_profile(platform: Platform, username: str) -> ProfileResponse:
    """Return the normalized profile with chart state for a fresh load."""

    profile = await fetch_profile_or_raise(platform, username)

    chart = ChartInteractionState(profile.series)
    current = chart.current_data
    return ProfileResponse(
        profile=profile,
        axis_ticks=chart.axis_ticks,
        summary_available=current is not None,
        current=(
            SummaryPanel.from_point(current, resolve_timezone(settings.display_timezone))
            if current is not None
            else None
        ),
        heatmap=HeatmapResponse.from_profile(profile),
    )


@router.get("/profiles/{platform}/{username}/heatmap")
async def get_profile_heatmap(platform: Platform, username: str) -> HeatmapResponse:
    """Return only the one-year activity calendar."""

    profile = await fetch_profile_or_raise(platform, username)
    return HeatmapResponse.from_profile(profile)
