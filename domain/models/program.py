"""
Program, program day and day-scoped exercise models.

A program is a fixed-length plan (100 days by default). Every day has its own
exercise rows, so exercise ids differ across days even when the name is the
same; the name is the join key across days.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


def coerce_id(value: Any) -> Any:
    """Store ids may be ints or UUIDs; the service handles them as strings."""
    if value is None:
        return value
    return str(value)


class ExerciseUnit(str, Enum):
    """What an exercise target counts."""

    REPS = "reps"
    STEPS = "steps"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ExerciseUnit":
        return cls.STEPS if value == cls.STEPS.value else cls.REPS


class Program(BaseModel):
    """
    A named workout plan, either built-in (no owner) or user-owned.

    Examples:
        >>> Program(id=7, name="100 days v.2").id
        '7'
    """

    id: str
    name: str
    owner_user_id: Optional[str] = None
    is_public: bool = False
    total_days: int = Field(default=100, ge=1)

    @field_validator("id", "owner_user_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)

    @property
    def is_built_in(self) -> bool:
        return self.owner_user_id is None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Program":
        """Build from a ``programs`` row (``days_count`` or ``total_days``)."""
        total_days = row.get("days_count") or row.get("total_days") or 100
        return cls(
            id=row["id"],
            name=row.get("name") or "",
            owner_user_id=row.get("owner_user_id"),
            is_public=bool(row.get("is_public", False)),
            total_days=total_days,
        )


class ProgramDay(BaseModel):
    """One day of a program. ``day_number`` is dense in [1, total_days]."""

    id: str
    program_id: Optional[str] = None
    day_number: int = Field(..., ge=1)

    @field_validator("id", "program_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)


class DayExercise(BaseModel):
    """
    An exercise scheduled on a specific program day.

    Two physical row shapes exist in the store: one carries ``target_reps``,
    the other a generic ``target`` with ``unit`` and ``weight``. ``from_row``
    reads either.
    """

    id: str
    program_day_id: Optional[str] = None
    name: str
    target: int = Field(..., ge=0)
    sort_order: int = 0
    unit: ExerciseUnit = ExerciseUnit.REPS

    @field_validator("id", "program_day_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DayExercise":
        target = row.get("target_reps")
        if target is None:
            target = row.get("target")
        return cls(
            id=row["id"],
            program_day_id=row.get("program_day_id"),
            name=row.get("name") or "",
            target=int(target or 0),
            sort_order=int(row.get("sort_order") or 0),
            unit=ExerciseUnit.parse(row.get("unit")),
        )


class ExerciseDraft(BaseModel):
    """An exercise row about to be inserted for a program day."""

    program_day_id: str
    name: str = Field(..., min_length=1)
    target: int = Field(..., ge=1)
    unit: ExerciseUnit = ExerciseUnit.REPS
    sort_order: int = Field(..., ge=1)

    @field_validator("program_day_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)


class ExercisePlan(BaseModel):
    """A validated exercise submitted for a custom program."""

    name: str = Field(..., min_length=1)
    target: int = Field(..., ge=1)
    unit: ExerciseUnit = ExerciseUnit.REPS
