import asyncio
import logging
from abc import ABC
from abc import abstractmethod
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Mapping
from datetime import date
from datetime import tzinfo
from typing import Any

import httpx

from profile_checker.models import NormalizedProfile
from profile_checker.models import Platform
from profile_checker.services.dates import local_today


logger = logging.getLogger(__name__)

NO_NAME = "No Name Available"
NO_AVATAR = "No User found"
NO_BIO = "No Bio Available"
NOT_AVAILABLE = "Not Available"


class ProfileError(Exception):
    """Base class for adapter failures."""

    def __init__(self, platform: Platform, message: str | None = None) -> None:
        self.platform = platform
        super().__init__(message or platform.value)


class NotFoundError(ProfileError):
    """Raised when the upstream reports that the username does not exist."""


class UpstreamError(ProfileError):
    """Raised when a required upstream call fails or returns a malformed payload."""


def as_number(value: Any) -> int | float:
    """Coerce an upstream numeric field, which may arrive as a string."""

    if isinstance(value, bool):
        raise TypeError("boolean is not a rating")
    if isinstance(value, (int, float)):
        return value
    number = float(value)
    return int(number) if number.is_integer() else number


def optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(as_number(value))
    except (TypeError, ValueError):
        return None


def stat_value(value: Any) -> str | int | float:
    """Headline stat value, falling back to NOT_AVAILABLE for absent fields."""

    if isinstance(value, bool) or value is None:
        return NOT_AVAILABLE
    if isinstance(value, (int, float, str)):
        return value
    return NOT_AVAILABLE


def require_mapping(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValueError(f"{what} response is invalid")
    return payload


def require_list(payload: Any, what: str) -> list[Any]:
    if not isinstance(payload, list):
        raise ValueError(f"{what} is missing")
    return payload


def text_or(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback


class PlatformAdapter(ABC):
    """Fetches one platform's payloads and maps them to a NormalizedProfile."""

    platform: Platform

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        tz: tzinfo | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.tz = tz
        self.clock = clock or (lambda: local_today(tz))

    async def fetch_and_normalize(self, username: str) -> NormalizedProfile:
        """Fetch and normalize a profile.

        Raises:
            NotFoundError: If the upstream says the user does not exist.
            UpstreamError: If any required call fails or is malformed.
        """

        try:
            return await self._fetch(username)
        except NotFoundError:
            logger.info("%s user %r not found", self.platform.value, username)
            raise
        except ProfileError:
            raise
        except (
            httpx.HTTPError,
            ValueError,
            KeyError,
            TypeError,
            OverflowError,
            OSError,
        ) as exc:
            logger.warning(
                "%s request for %r failed: %s", self.platform.value, username, exc
            )
            raise UpstreamError(
                self.platform, f"{self.platform.value} API request failed"
            ) from exc

    @abstractmethod
    async def _fetch(self, username: str) -> NormalizedProfile:
        raise NotImplementedError

    def _is_missing_user(self, payload: Any) -> bool:
        return False

    async def _fan_out(self, *requests: Awaitable[Any]) -> list[Any]:
        """Await all requests concurrently, cancelling the rest on the first failure.

        A NotFoundError wins over other failures raised in the same round.
        """

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(request) for request in requests]
        except ExceptionGroup as failures:
            for failure in failures.exceptions:
                if isinstance(failure, NotFoundError):
                    raise failure
            raise failures.exceptions[0]

        return [task.result() for task in tasks]

    async def _request_json(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        identifies_user: bool = False,
    ) -> Any:
        """GET a JSON payload.

        Only calls keyed by the username (`identifies_user`) may report a
        missing user; other 404s are upstream failures.
        """

        response = await self.client.get(url, params=params, headers=headers)
        if identifies_user and response.status_code == 404:
            raise NotFoundError(self.platform, f"{self.platform.value} user not found")

        payload = response.json()
        if identifies_user and self._is_missing_user(payload):
            raise NotFoundError(self.platform, f"{self.platform.value} user not found")

        response.raise_for_status()
        return payload
