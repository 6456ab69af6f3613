"""
Per-user state, transient progress and history records.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from backend.core.dates import is_completed_day
from domain.models.program import coerce_id


class UserState(BaseModel):
    """
    One row per user. ``program_id`` is None until a program is chosen and
    ``current_day`` points at the program day being worked on.
    """

    user_id: str
    program_id: Optional[str] = None
    current_day: int = Field(default=1, ge=1)
    updated_at: Optional[datetime] = None

    @field_validator("user_id", "program_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)

    @property
    def has_program(self) -> bool:
        return self.program_id is not None


class ExerciseProgress(BaseModel):
    """Reps done today for one exercise. Never negative."""

    user_id: str
    exercise_id: str
    reps_done: int = Field(default=0, ge=0)

    @field_validator("user_id", "exercise_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)


class DayHistoryEntry(BaseModel):
    """Totals for a closed day, unique per (user, program, day)."""

    user_id: str
    program_id: str
    day_number: int = Field(..., ge=1)
    local_date: str
    total_done: int = 0
    total_target: int = 0
    skipped: bool = False

    @field_validator("user_id", "program_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)

    @property
    def completed(self) -> bool:
        return is_completed_day(self.total_done, self.total_target)

    @property
    def key(self) -> tuple:
        return (self.user_id, self.program_id, self.day_number)

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump()


class DayHistoryExerciseEntry(BaseModel):
    """Per-exercise breakdown of a closed day."""

    user_id: str
    program_id: str
    day_number: int = Field(..., ge=1)
    local_date: str
    exercise_name: str
    reps_done: int = 0
    reps_target: int = 0

    @field_validator("user_id", "program_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)

    @property
    def key(self) -> tuple:
        return (self.user_id, self.program_id, self.day_number, self.exercise_name)

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump()


class Subscriber(BaseModel):
    """A chat-platform user who pressed Start in the bot."""

    user_id: str
    chat_id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("user_id", "chat_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return coerce_id(value)
