"""
Unit tests for ProgramAssignmentUseCase.
"""
import pytest

from application.exceptions import NotFoundError, StoreWriteError, ValidationError
from application.use_cases import coerce_target, normalize_exercises
from domain.models import ExerciseUnit
from infrastructure.db.exercise_writer import FallbackExerciseWriter
from tests.fakes import BUILT_IN_NAME, FakeExerciseWriter, FakeStore, create_store

pytestmark = pytest.mark.unit


class TestNormalizeExercises:
    def test_drops_nameless_and_trims(self):
        plans = normalize_exercises([
            {"name": "  Push-ups ", "target": 50},
            {"name": "   ", "target": 10},
            {"target": 10},
        ])
        assert [plan.name for plan in plans] == ["Push-ups"]

    def test_targets_clamped_to_one(self):
        plans = normalize_exercises([
            {"name": "a", "target": 0},
            {"name": "b", "target": -5},
            {"name": "c", "target": "abc"},
            {"name": "d", "target": 12.9},
            {"name": "e"},
        ])
        assert [plan.target for plan in plans] == [1, 1, 1, 12, 1]

    def test_unit_is_steps_only_on_exact_match(self):
        plans = normalize_exercises([
            {"name": "a", "target": 1, "unit": "steps"},
            {"name": "b", "target": 1, "unit": "Steps"},
            {"name": "c", "target": 1},
        ])
        assert [plan.unit for plan in plans] == [
            ExerciseUnit.STEPS, ExerciseUnit.REPS, ExerciseUnit.REPS,
        ]

    def test_coerce_target_handles_nan(self):
        assert coerce_target(float("nan")) == 1
        assert coerce_target("7") == 7


class TestAssignBuiltIn:
    def test_binds_new_user(self):
        store = create_store()
        result = store.assignment().assign_built_in("u1")

        state = store.states.states["u1"]
        assert state.program_id == result.program_id
        assert state.current_day == 1

    def test_prefers_ownerless_newest_with_day_one(self):
        store = FakeStore()
        older = store.programs.seed_program(BUILT_IN_NAME, total_days=2)
        store.programs.seed_program(BUILT_IN_NAME, total_days=2, with_days=False)
        store.programs.seed_program(BUILT_IN_NAME, owner_user_id="other", total_days=2)

        result = store.assignment().assign_built_in("u1")

        assert result.program_id == older.id

    def test_falls_back_to_owned_copy(self):
        store = FakeStore()
        owned = store.programs.seed_program(BUILT_IN_NAME, owner_user_id="admin", total_days=1)

        assert store.assignment().assign_built_in("u1").program_id == owned.id

    def test_candidate_without_day_one_is_not_bound(self):
        store = FakeStore()
        store.programs.seed_program(BUILT_IN_NAME, with_days=False)

        with pytest.raises(NotFoundError):
            store.assignment().assign_built_in("u1")

        assert "u1" not in store.states.states
        assert len(store.programs.programs) == 1

    def test_rebinding_resets_day_and_progress(self):
        store = create_store(user_id="u1", current_day=4)
        store.progress.seed("u1", {"x": 5})

        store.assignment().assign_built_in("u1")

        assert store.states.states["u1"].current_day == 1
        assert store.progress.rows == {}

    def test_empty_user_rejected(self):
        with pytest.raises(ValidationError):
            create_store().assignment().assign_built_in("  ")


class TestCreateCustomProgram:
    def test_round_trip(self):
        store = FakeStore()
        use_case = store.assignment()

        result = use_case.create_custom_program(
            "u1",
            "My plan",
            [
                {"name": "Push-ups", "target": 20},
                {"name": "шаги", "target": 8000, "unit": "steps"},
                {"name": "Plank", "target": 60},
            ],
        )

        program = store.programs.programs[result.program_id]
        assert program.owner_user_id == "u1"
        assert program.total_days == 100
        assert len(store.programs.day_ids(program.id)) == 100
        assert len(store.programs.exercises) == 300
        assert result.exercises_written == 300

        session = store.day_service().open_session("u1")
        assert session.day_number == 1
        assert [ex.name for ex in session.exercises] == ["Push-ups", "шаги", "Plank"]
        assert [ex.sort_order for ex in session.exercises] == [1, 2, 3]
        assert session.exercises[1].unit is ExerciseUnit.STEPS

    def test_validation_errors(self):
        use_case = FakeStore().assignment()
        with pytest.raises(ValidationError, match="userId is required"):
            use_case.create_custom_program("", "plan", [{"name": "a", "target": 1}])
        with pytest.raises(ValidationError, match="name is required"):
            use_case.create_custom_program("u1", "   ", [{"name": "a", "target": 1}])
        with pytest.raises(ValidationError, match="at least one exercise"):
            use_case.create_custom_program("u1", "plan", [{"name": " "}])

    def test_program_insert_failure(self):
        store = FakeStore()
        store.programs.fail("create", "permission denied")

        with pytest.raises(StoreWriteError, match="permission denied"):
            store.assignment().create_custom_program("u1", "plan", [{"name": "a", "target": 1}])
        assert store.states.states == {}

    def test_exercises_fall_back_to_alternate_shape(self):
        store = FakeStore()
        primary = FakeExerciseWriter(store.programs, shape="target_reps", fail=True)
        alternate = FakeExerciseWriter(store.programs, shape="target_unit")
        store.writer = FallbackExerciseWriter(primary, alternate)

        store.assignment(program_days=3).create_custom_program(
            "u1", "plan", [{"name": "a", "target": 5}]
        )

        assert primary.calls == ["insert"]
        assert alternate.calls == ["insert"]
        assert len(store.programs.exercises) == 3

    def test_both_shapes_failing_leaves_program_unbound(self):
        store = FakeStore()
        store.writer = FallbackExerciseWriter(
            FakeExerciseWriter(store.programs, shape="target_reps", fail=True),
            FakeExerciseWriter(store.programs, shape="target_unit", fail=True, message="bad unit"),
        )

        with pytest.raises(StoreWriteError, match="bad unit"):
            store.assignment().create_custom_program("u1", "plan", [{"name": "a", "target": 1}])

        assert len(store.programs.programs) == 1
        assert "u1" not in store.states.states
