"""Tests for the duration/structure consistency check and scalar validators."""

from __future__ import annotations

import pytest

from structure_engine.errors import ValidationError, WorkoutValidationError
from structure_engine.models.enums import ActivityType
from structure_engine.models.metrics import PlannedMetrics
from structure_engine.serialization.trainingpeaks import structure_to_dict
from structure_engine.validation import (
    validate_activity_type,
    validate_athlete_weight,
    validate_planned_metrics,
    validate_structure,
    validate_workout_distance,
    validate_workout_duration,
)


class TestValidateStructure:
    def test_matching_duration_passes(self, sample_structure) -> None:
        validate_structure(2460, sample_structure)

    @pytest.mark.parametrize("duration", [2460 + 5e-7, 2459.9999999, 2460.5])
    def test_near_equal_duration_raises(self, sample_structure, duration) -> None:
        with pytest.raises(WorkoutValidationError) as exc:
            validate_structure(duration, sample_structure)
        assert exc.value.duration == duration
        assert exc.value.structure_duration == 2460

    def test_float_equal_to_int_passes(self, sample_structure) -> None:
        validate_structure(2460.0, sample_structure)

    def test_mismatch_raises_with_both_values(self, sample_structure) -> None:
        with pytest.raises(WorkoutValidationError) as exc:
            validate_structure(3000, sample_structure)
        assert exc.value.message == (
            "Workout duration (3000s) doesn't match structure duration (2460s)"
        )
        assert (exc.value.duration, exc.value.structure_duration) == (3000, 2460)

    @pytest.mark.parametrize("structure", [None, "not a structure", 42, []])
    def test_absent_structure_is_noop(self, structure) -> None:
        validate_structure(1234, structure)

    def test_wire_dict_is_parsed(self, sample_structure) -> None:
        data = structure_to_dict(sample_structure)
        validate_structure(2460, data)
        with pytest.raises(WorkoutValidationError):
            validate_structure(100, data)

    def test_empty_structure_requires_zero(self, empty_structure) -> None:
        validate_structure(0, empty_structure)
        with pytest.raises(WorkoutValidationError, match=r"\(60s\).*\(0s\)"):
            validate_structure(60, empty_structure)


class TestScalarValidators:
    def test_duration_bounds(self) -> None:
        validate_workout_duration(0)
        validate_workout_duration(86400)
        with pytest.raises(WorkoutValidationError, match="negative"):
            validate_workout_duration(-1)
        with pytest.raises(WorkoutValidationError, match="finite"):
            validate_workout_duration(float("inf"))

    def test_distance_bounds(self) -> None:
        validate_workout_distance(None)
        validate_workout_distance(1_000_000)
        with pytest.raises(WorkoutValidationError, match="1000km"):
            validate_workout_distance(1_000_001)

    def test_activity_type(self) -> None:
        assert validate_activity_type("SWIM") is ActivityType.SWIM
        with pytest.raises(ValidationError, match="Invalid activity type"):
            validate_activity_type("swim")

    def test_athlete_weight(self) -> None:
        assert validate_athlete_weight(62.5) == 62.5
        with pytest.raises(ValidationError, match="positive"):
            validate_athlete_weight(0)


class TestValidatePlannedMetrics:
    def test_valid_metrics_pass(self) -> None:
        validate_planned_metrics(PlannedMetrics(total_time_planned=1.0, tss_planned=100.0))

    def test_problems_collected_in_details(self) -> None:
        metrics = PlannedMetrics(tss_planned=-1.0, calories_planned=-5)
        with pytest.raises(WorkoutValidationError) as exc:
            validate_planned_metrics(metrics)
        assert exc.value.details == (
            "tss_planned must be non-negative",
            "calories_planned must be non-negative",
        )
        assert exc.value.field == "plannedMetrics"

    def test_over_a_day_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError, match="24 hours"):
            validate_planned_metrics(PlannedMetrics(total_time_planned=25.0))

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError, match="finite"):
            validate_planned_metrics(PlannedMetrics(if_planned=float("nan")))

    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(WorkoutValidationError):
            validate_planned_metrics({"tssPlanned": 10})
