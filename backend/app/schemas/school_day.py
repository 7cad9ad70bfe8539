from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DAY_ORDER = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DAY_VALUES = set(DAY_ORDER)


def validate_day_name(value: str) -> str:
    day = value.strip()
    if day not in DAY_VALUES:
        raise ValueError("Invalid day value")
    return day


def check_full_week(days) -> None:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for entry in days:
        if entry.name in seen:
            duplicates.add(entry.name)
        else:
            seen.add(entry.name)
    if duplicates:
        raise ValueError(f"Duplicate day entries: {', '.join(sorted(duplicates))}")
    missing = [name for name in DAY_ORDER if name not in seen]
    if missing:
        raise ValueError(f"Missing day entries: {', '.join(missing)}")


class SchoolDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    active: bool

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return validate_day_name(value)


class SchoolDayToggle(BaseModel):
    active: bool


class SchoolDaysUpdate(BaseModel):
    days: list[SchoolDay] = Field(min_length=7, max_length=7)

    @model_validator(mode="after")
    def validate_unique_days(self) -> "SchoolDaysUpdate":
        check_full_week(self.days)
        return self


def default_school_days() -> tuple[SchoolDay, ...]:
    return tuple(SchoolDay(name=name, active=name != "Saturday") for name in DAY_ORDER)
