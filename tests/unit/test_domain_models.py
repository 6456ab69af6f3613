"""
Unit tests for domain models: programs, progress records and DaySession.
"""
import pytest
from pydantic import ValidationError

from domain.models import (
    DayExercise,
    DayHistoryEntry,
    DaySession,
    ExerciseUnit,
    Program,
    UserState,
)

pytestmark = pytest.mark.unit


def _exercise(exercise_id, target, name=None, sort_order=1):
    return DayExercise(
        id=exercise_id, name=name or f"ex-{exercise_id}", target=target, sort_order=sort_order
    )


def _session(progress, *exercises):
    return DaySession(
        user_id="u1",
        program_id="p1",
        exercises=list(exercises),
        progress=dict(progress),
    )


class TestProgramModels:
    def test_ids_are_stringified(self):
        program = Program(id=7, name="100 days v.2", owner_user_id=None)
        assert program.id == "7"
        assert program.is_built_in is True

    def test_program_from_row_reads_days_count(self):
        program = Program.from_row({"id": 3, "name": "Mine", "owner_user_id": "u1", "days_count": 30})
        assert program.total_days == 30
        assert program.is_built_in is False

    def test_program_from_row_defaults_to_100_days(self):
        assert Program.from_row({"id": 3, "name": "Old"}).total_days == 100

    def test_exercise_from_target_reps_row(self):
        exercise = DayExercise.from_row(
            {"id": 1, "program_day_id": 9, "name": "Push-ups", "target_reps": 40, "sort_order": 2}
        )
        assert exercise.target == 40
        assert exercise.program_day_id == "9"
        assert exercise.unit is ExerciseUnit.REPS

    def test_exercise_from_generic_row(self):
        exercise = DayExercise.from_row(
            {"id": 1, "name": "шаги", "target": 10000, "unit": "steps", "weight": None}
        )
        assert exercise.target == 10000
        assert exercise.unit is ExerciseUnit.STEPS

    def test_unit_parse_defaults_to_reps(self):
        assert ExerciseUnit.parse("Steps") is ExerciseUnit.REPS
        assert ExerciseUnit.parse(None) is ExerciseUnit.REPS

    def test_current_day_starts_at_one(self):
        with pytest.raises(ValidationError):
            UserState(user_id="u1", current_day=0)

    def test_history_entry_completed(self):
        entry = DayHistoryEntry(
            user_id="u1", program_id=1, day_number=1, local_date="2024-03-01",
            total_done=10, total_target=10,
        )
        assert entry.completed is True
        assert entry.key == ("u1", "1", 1)


class TestDaySessionTotals:
    def test_equal_weight_mean(self):
        session = _session({"a": 100, "b": 25}, _exercise("a", 100), _exercise("b", 100))
        totals = session.totals()
        assert totals.pct == 63
        assert totals.total_done == 125
        assert totals.total_target == 200

    def test_overshoot_does_not_compensate(self):
        session = _session({"a": 300, "b": 0}, _exercise("a", 100), _exercise("b", 100))
        assert session.totals().pct == 50

    def test_zero_target_contributes_zero(self):
        session = _session({"a": 10, "b": 10}, _exercise("a", 0), _exercise("b", 10))
        assert session.totals().pct == 50

    def test_empty_session_is_zero(self):
        session = _session({})
        assert session.totals().pct == 0
        assert session.all_completed() is False

    def test_near_complete_never_reports_100(self):
        session = _session({"a": 199}, _exercise("a", 200))
        assert session.totals().pct == 99
        assert session.percent_for(session.exercises[0]) == 99

    def test_all_completed_reports_100(self):
        session = _session({"a": 50, "b": 120}, _exercise("a", 50), _exercise("b", 100))
        assert session.all_completed() is True
        assert session.totals().pct == 100

    def test_pct_bounds_over_many_states(self):
        exercises = [_exercise("a", 7), _exercise("b", 13)]
        for a in range(0, 15):
            for b in range(0, 30, 3):
                session = _session({"a": a, "b": b}, *exercises)
                pct = session.totals().pct
                assert 0 <= pct <= 100
                assert (pct == 100) == session.all_completed()

    def test_remaining_never_negative(self):
        session = _session({"a": 70}, _exercise("a", 50))
        assert session.remaining_for(session.exercises[0]) == 0

    def test_missing_progress_is_zero(self):
        session = _session({}, _exercise("a", 50))
        assert session.done_for("a") == 0
        assert session.exercise("missing") is None
