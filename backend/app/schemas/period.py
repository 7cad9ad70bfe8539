from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class PeriodBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    start_time: str
    end_time: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must not be blank")
        return name

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @model_validator(mode="after")
    def validate_order(self):
        if parse_time_to_minutes(self.end_time) <= parse_time_to_minutes(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self

    def overlaps(self, other: "PeriodBase") -> bool:
        start = parse_time_to_minutes(self.start_time)
        end = parse_time_to_minutes(self.end_time)
        other_start = parse_time_to_minutes(other.start_time)
        other_end = parse_time_to_minutes(other.end_time)
        return max(start, other_start) < min(end, other_end)


class PeriodCreate(PeriodBase):
    is_interval: bool = False


class TeachingPeriod(PeriodBase):
    """A period that classes can be scheduled into."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: Literal["teaching"] = "teaching"

    @computed_field
    @property
    def is_interval(self) -> bool:
        return False


class IntervalPeriod(PeriodBase):
    """A break (recess, lunch). Never schedulable."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: Literal["interval"] = "interval"

    @computed_field
    @property
    def is_interval(self) -> bool:
        return True


Period = Annotated[Union[TeachingPeriod, IntervalPeriod], Field(discriminator="kind")]


def build_period(period_id: str, payload: PeriodCreate) -> TeachingPeriod | IntervalPeriod:
    values = payload.model_dump(exclude={"is_interval"})
    if payload.is_interval:
        return IntervalPeriod(id=period_id, **values)
    return TeachingPeriod(id=period_id, **values)
