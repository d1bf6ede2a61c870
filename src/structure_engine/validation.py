"""Cross-field validators for workouts and their planned metrics.

``validate_structure`` is the consistency check between a workout's declared
duration and the duration implied by its structure; the remaining
validators cover the scalar workout fields checked alongside it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from structure_engine.errors import ValidationError, WorkoutValidationError
from structure_engine.math.duration import total_duration
from structure_engine.models.enums import (
    MAX_WORKOUT_DISTANCE_M,
    MAX_WORKOUT_DURATION_S,
    MAX_WORKOUT_NAME_LENGTH,
    ActivityType,
)
from structure_engine.models.metrics import PlannedMetrics
from structure_engine.models.structure import Structure
from structure_engine.serialization.trainingpeaks import structure_from_dict

logger = logging.getLogger(__name__)


def validate_structure(duration: float, structure: Structure | Mapping | None) -> None:
    """Check that ``duration`` equals the duration implied by ``structure``.

    A no-op when ``structure`` is absent or not a Structure / wire mapping.

    Raises:
        WorkoutValidationError: When the two durations differ. The error
            carries both values as ``duration`` and ``structure_duration``.
    """
    if isinstance(structure, Mapping):
        structure = structure_from_dict(structure)
    if not isinstance(structure, Structure):
        return

    structure_duration = total_duration(structure)
    if duration != structure_duration:
        logger.debug(
            "Duration mismatch: declared %ss, structure %ss", duration, structure_duration,
        )
        raise WorkoutValidationError(
            f"Workout duration ({_fmt(duration)}s) doesn't match "
            f"structure duration ({_fmt(structure_duration)}s)",
            field="duration",
            duration=duration,
            structure_duration=structure_duration,
        )


def validate_workout_id(workout_id: str) -> None:
    if not isinstance(workout_id, str) or not workout_id.strip():
        raise WorkoutValidationError("Workout ID cannot be empty", field="id")


def validate_workout_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise WorkoutValidationError("Workout name cannot be empty", field="name")
    if len(name) > MAX_WORKOUT_NAME_LENGTH:
        raise WorkoutValidationError(
            f"Workout name cannot exceed {MAX_WORKOUT_NAME_LENGTH} characters", field="name",
        )


def validate_workout_duration(duration: float) -> None:
    """Duration in seconds must lie in ``[0, 24h]``."""
    _require_finite(duration, "Workout duration", "duration")
    if duration < 0:
        raise WorkoutValidationError("Workout duration cannot be negative", field="duration")
    if duration > MAX_WORKOUT_DURATION_S:
        raise WorkoutValidationError("Workout duration cannot exceed 24 hours", field="duration")


def validate_workout_distance(distance: float | None) -> None:
    """Distance in meters, when given, must lie in ``[0, 1000 km]``."""
    if distance is None:
        return
    _require_finite(distance, "Workout distance", "distance")
    if distance < 0:
        raise WorkoutValidationError("Workout distance cannot be negative", field="distance")
    if distance > MAX_WORKOUT_DISTANCE_M:
        raise WorkoutValidationError("Workout distance cannot exceed 1000km", field="distance")


def validate_activity_type(activity_type: ActivityType | str) -> ActivityType:
    """Coerce ``activity_type`` to an ActivityType or raise ValidationError."""
    try:
        return ActivityType(activity_type)
    except ValueError:
        raise ValidationError(
            f"Invalid activity type: {activity_type!r}", field="activityType",
        ) from None


def validate_athlete_weight(athlete_weight_kg: float) -> float:
    _require_finite(athlete_weight_kg, "Athlete weight", "athleteWeight")
    if athlete_weight_kg <= 0:
        raise ValidationError("Athlete weight must be positive", field="athleteWeight")
    return athlete_weight_kg


def validate_planned_metrics(metrics: PlannedMetrics) -> None:
    """Reject planned metrics that are negative, non-finite or out of range.

    All problems are collected and reported together in ``details``.
    """
    if not isinstance(metrics, PlannedMetrics):
        raise WorkoutValidationError("Planned metrics must be a PlannedMetrics record")

    problems: list[str] = []
    for name, value in vars(metrics).items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            problems.append(f"{name} must be a finite number")
        elif value < 0:
            problems.append(f"{name} must be non-negative")

    if not problems:
        if metrics.total_time_planned * 3600 > MAX_WORKOUT_DURATION_S:
            problems.append("total_time_planned cannot exceed 24 hours")
        if metrics.distance_planned > MAX_WORKOUT_DISTANCE_M:
            problems.append("distance_planned cannot exceed 1000km")

    if problems:
        raise WorkoutValidationError(
            f"Invalid planned metrics: {'; '.join(problems)}",
            field="plannedMetrics",
            details=tuple(problems),
        )


def _require_finite(value: float, label: str, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise WorkoutValidationError(f"{label} must be a finite number", field=field)


def _fmt(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
