from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class Platform(str, Enum):
    LEETCODE = "leetcode"
    GITHUB = "github"
    CODEFORCES = "codeforces"
    CODECHEF = "codechef"


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    SAME = "SAME"


class SeriesPoint(BaseModel):
    """One chronological sample of a platform's rating history."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    rating: int | float
    rank: int | None = None
    title: str
    year_label: str
    direction: Direction
    problems_solved: int | None = None
    total_problems: int | None = None


class HeatmapCell(BaseModel):
    """Activity count for one calendar day."""

    model_config = ConfigDict(frozen=True)

    date: str
    count: int = Field(ge=0)


class Badge(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon_url: str


class Organization(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    avatar_url: str


class Repository(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    created_on: str
    html_url: str


class NormalizedProfile(BaseModel):
    """Canonical profile shape shared by every platform adapter.

    Built once per successful fetch and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    platform: Platform
    username: str
    display_name: str
    avatar_url: str
    joined_date: str
    bio: str
    headline_stats: dict[str, str | int | float] = Field(default_factory=dict)
    series: tuple[SeriesPoint, ...] = ()
    heatmap: tuple[HeatmapCell, ...] = ()
    badges: tuple[Badge, ...] = ()
    organizations: tuple[Organization, ...] = ()
    repositories: tuple[Repository, ...] = ()
