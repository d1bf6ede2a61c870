"""Tests for the Workout entity and its duration/structure consistency check."""

from __future__ import annotations

from datetime import datetime

import pytest

from structure_engine.errors import ValidationError, WorkoutValidationError
from structure_engine.math.duration import total_duration
from structure_engine.models.enums import ActivityType
from structure_engine.models.structure import Structure
from structure_engine.models.workout import create_structured_workout, create_workout
from structure_engine.serialization.trainingpeaks import structure_to_dict

_DATE = datetime(2026, 3, 14, 7, 0)


class TestCreateWorkout:
    def test_matching_duration_accepted(self, sample_structure) -> None:
        workout = create_workout("w-1", "Intervals", _DATE, 2460, structure=sample_structure)
        assert workout.duration == 2460
        assert workout.is_structured
        assert workout.created_at is not None

    def test_mismatched_duration_names_both_values(self, sample_structure) -> None:
        with pytest.raises(WorkoutValidationError) as exc:
            create_workout("w-1", "Intervals", _DATE, 2400, structure=sample_structure)
        err = exc.value
        assert str(err) == "Workout duration (2400s) doesn't match structure duration (2460s)"
        assert err.duration == 2400
        assert err.structure_duration == 2460
        assert err.field == "duration"
        assert isinstance(err, ValidationError)

    def test_near_equal_duration_rejected(self, sample_structure) -> None:
        with pytest.raises(WorkoutValidationError):
            create_workout(
                "w-1", "Intervals", _DATE,
                total_duration(sample_structure) + 5e-7,
                structure=sample_structure,
            )

    def test_wire_mapping_stored_as_structure(self, sample_structure) -> None:
        data = structure_to_dict(sample_structure)
        workout = create_workout("w-1", "Intervals", _DATE, 2460, structure=data)
        assert isinstance(workout.structure, Structure)
        assert workout.structure == sample_structure
        data["structure"].clear()
        assert len(workout.structure.structure) == 3

    def test_wire_mapping_duration_checked(self, sample_structure) -> None:
        with pytest.raises(WorkoutValidationError, match=r"\(2400s\).*\(2460s\)"):
            create_workout(
                "w-1", "Intervals", _DATE, 2400, structure=structure_to_dict(sample_structure),
            )

    def test_non_structure_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError) as exc:
            create_workout("w-1", "Intervals", _DATE, 60, structure="warmup, cooldown")
        assert exc.value.field == "structure"

    def test_unstructured_workout_skips_check(self) -> None:
        workout = create_workout("w-2", "Easy run", _DATE, 1800)
        assert not workout.is_structured

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError, match="Workout ID cannot be empty"):
            create_workout("", "Easy", _DATE, 1800)

    def test_long_name_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError, match="255"):
            create_workout("w-3", "x" * 256, _DATE, 1800)

    def test_duration_over_a_day_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError, match="24 hours"):
            create_workout("w-4", "Ultra", _DATE, 90000)

    def test_negative_distance_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError) as exc:
            create_workout("w-5", "Run", _DATE, 1800, distance=-1)
        assert exc.value.field == "distance"

    def test_activity_type_coerced(self) -> None:
        workout = create_workout("w-6", "Ride", _DATE, 3600, activity_type="BIKE")
        assert workout.activity_type == ActivityType.BIKE

    def test_invalid_activity_type_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc:
            create_workout("w-7", "Row", _DATE, 3600, activity_type="ROW")
        assert exc.value.field == "activityType"

    def test_tags_stored_as_tuple(self) -> None:
        workout = create_workout("w-8", "Run", _DATE, 1800, tags=["base", "easy"])
        assert workout.tags == ("base", "easy")


class TestCreateStructuredWorkout:
    def test_duration_derived_from_structure(self, sample_structure) -> None:
        workout = create_structured_workout("w-9", "Intervals", _DATE, sample_structure)
        assert workout.duration == 2460
        assert workout.structure is sample_structure

    def test_empty_structure_gives_zero_duration(self, empty_structure) -> None:
        workout = create_structured_workout("w-10", "Placeholder", _DATE, empty_structure)
        assert workout.duration == 0
