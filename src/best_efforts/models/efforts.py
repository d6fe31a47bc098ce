"""Workout, lap and best-effort data models."""

import datetime as dt
from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


WorkoutId = Union[int, str]


class WorkoutLap(BaseModel):
    """One recorded lap/segment of a workout."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    lap_index: int = Field(..., description="Ordering key within the workout")
    distance_meters: Optional[float] = Field(None, description="Lap distance in meters")
    elapsed_time_seconds: Optional[float] = Field(None, description="Lap elapsed time in seconds")


class Workout(BaseModel):
    """The subset of a stored workout the effort engine needs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    id: WorkoutId = Field(..., description="Workout identifier")
    date: dt.date = Field(..., description="Calendar date of the workout")
    distance_meters: Optional[float] = Field(None, description="Total recorded distance")
    name: Optional[str] = Field(None, description="Workout name")


class WorkoutWithLaps(BaseModel):
    """A workout together with its lap splits."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    workout: Workout
    laps: List[WorkoutLap] = Field(default_factory=list)


class BestEffort(BaseModel):
    """Fastest coverage of a standard distance found inside one workout."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    workout_id: WorkoutId = Field(..., description="Workout the effort came from")
    workout_date: date = Field(..., description="Date of that workout")
    distance: str = Field(..., description="Standard distance name, e.g. '5K'")
    distance_meters: float = Field(..., description="Distance actually covered by the lap window")
    time_seconds: float = Field(..., description="Elapsed time over the lap window")
    time_formatted: str = Field(..., description="Time as H:MM:SS or M:SS")
    pace: str = Field(..., description="Pace as M:SS per mile")
    start_lap_index: int = Field(..., description="First lap of the window")
    end_lap_index: int = Field(..., description="Last lap of the window")
    is_pr: bool = Field(
        default=False,
        alias="isPR",
        description="Faster than every earlier effort at this distance",
    )
    rank_all_time: Optional[int] = Field(None, description="1 = fastest retained effort")
    improvement_seconds: Optional[float] = Field(
        None, description="Previous best minus this time (positive = faster)"
    )
    equivalent_vdot: Optional[int] = Field(
        None, alias="equivalentVDOT", description="Pace-derived fitness proxy"
    )


class NearMiss(BaseModel):
    """An effort that came close to, but did not beat, the record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    distance: str
    time_seconds: float
    missed_by_seconds: float
    missed_by_percent: float


class EffortAnalysis(BaseModel):
    """Result of folding a runner's workout history."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    best_efforts: List[BestEffort] = Field(
        default_factory=list,
        description="Ranked efforts per distance, fastest first, capped per distance",
    )
    recent_prs: List[BestEffort] = Field(
        default_factory=list,
        alias="recentPRs",
        description="PRs from the last 30 days, newest first",
    )
    notifications: List[str] = Field(
        default_factory=list,
        description="Human-readable PR announcements",
    )


class WorkoutBestEfforts(BaseModel):
    """Efforts and near misses for a single workout."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    efforts: List[BestEffort] = Field(default_factory=list)
    near_misses: List[NearMiss] = Field(default_factory=list)


class BestEffortsResponse(EffortAnalysis):
    """History analysis plus motivational insights, as served by the API."""

    insights: List[str] = Field(default_factory=list)
