"""Workout entity — a dated workout optionally carrying a Structure.

When both ``duration`` and ``structure`` are present the duration is
redundant data: ``create_workout`` rejects any value that differs from
``total_duration(structure)``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from structure_engine.errors import WorkoutValidationError
from structure_engine.math.duration import total_duration
from structure_engine.models.enums import ActivityType
from structure_engine.models.structure import Structure
from structure_engine.serialization.trainingpeaks import structure_from_dict
from structure_engine.validation import (
    validate_activity_type,
    validate_structure,
    validate_workout_distance,
    validate_workout_duration,
    validate_workout_id,
    validate_workout_name,
)


@dataclass(frozen=True)
class Workout:
    """A planned workout. Duration is in seconds, distance in meters."""

    id: str
    name: str
    date: datetime
    duration: float
    description: str = ""
    distance: float | None = None
    activity_type: ActivityType | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    structure: Structure | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_structured(self) -> bool:
        return self.structure is not None


def create_workout(
    id: str,
    name: str,
    date: datetime,
    duration: float,
    description: str = "",
    distance: float | None = None,
    activity_type: ActivityType | str | None = None,
    tags: Iterable[str] = (),
    structure: Structure | Mapping | None = None,
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
) -> Workout:
    """Validate inputs and build a Workout.

    A wire-format ``structure`` mapping is parsed into a Structure before it
    is checked and stored.

    Raises:
        ValidationError: If the id, name, duration or distance is invalid.
        WorkoutValidationError: If ``duration`` disagrees with ``structure``
            or ``structure`` is neither a Structure nor a wire mapping.
    """
    validate_workout_id(id)
    validate_workout_name(name)
    validate_workout_duration(duration)
    validate_workout_distance(distance)
    if isinstance(structure, Mapping):
        structure = structure_from_dict(structure)
    elif structure is not None and not isinstance(structure, Structure):
        raise WorkoutValidationError("Workout structure must be a Structure", field="structure")
    validate_structure(duration, structure)

    now = datetime.now()
    return Workout(
        id=id,
        name=name,
        date=date,
        duration=duration,
        description=description,
        distance=distance,
        activity_type=(
            validate_activity_type(activity_type) if activity_type is not None else None
        ),
        tags=tuple(tags),
        structure=structure,
        created_at=created_at or now,
        updated_at=updated_at or now,
    )


def create_structured_workout(
    id: str,
    name: str,
    date: datetime,
    structure: Structure,
    description: str = "",
    activity_type: ActivityType | str | None = None,
    tags: Iterable[str] = (),
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
) -> Workout:
    """Build a Workout whose duration is derived from its structure."""
    return create_workout(
        id=id,
        name=name,
        date=date,
        duration=total_duration(structure),
        description=description,
        activity_type=activity_type,
        tags=tags,
        structure=structure,
        created_at=created_at,
        updated_at=updated_at,
    )
