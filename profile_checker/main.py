from fastapi import FastAPI

from profile_checker.api.routes.profiles import router
from profile_checker.core.middleware import ProfileRateLimitMiddleware
from profile_checker.core.observability import init_observability
from profile_checker.settings import Settings


def create_app() -> FastAPI:
    settings = Settings()
    init_observability(settings)

    app = FastAPI(title="Profile Checker")
    app.add_middleware(
        ProfileRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.include_router(router)
    return app


app = create_app()
