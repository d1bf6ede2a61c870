"""Step generators — canonical named steps used by the workout templates.

Durations are given in minutes and stored as seconds, so the duration
aggregator can sum step lengths directly. Targets are percent of threshold.
"""

from __future__ import annotations

import math

from structure_engine.errors import ValidationError
from structure_engine.models.enums import (
    COOLDOWN_TARGET,
    INTENSITY_WINDOW_HALF_WIDTH,
    MAX_INTENSITY_PCT,
    MIN_INTENSITY_PCT,
    RECOVERY_TARGET,
    WARMUP_TARGET,
    IntensityClass,
    LengthUnit,
)
from structure_engine.models.structure import Step, create_length, create_step, create_target


def compute_intensity_range(intensity_pct: float) -> tuple[float, float]:
    """Target window of ±5 around ``intensity_pct``, clamped to [0, 100].

    Only the offending bound is clamped, so the window narrows to 5 points
    at the edges (0 → (0, 5), 100 → (95, 100)). When clamping collapses the
    window entirely, the free bound is placed 1 point from the clamped one
    (150 → (99, 100)).
    """
    if isinstance(intensity_pct, bool) or not isinstance(intensity_pct, (int, float)) \
            or not math.isfinite(intensity_pct):
        raise ValidationError("intensity must be a finite number", field="intensity")

    min_value = max(MIN_INTENSITY_PCT, intensity_pct - INTENSITY_WINDOW_HALF_WIDTH)
    max_value = min(MAX_INTENSITY_PCT, intensity_pct + INTENSITY_WINDOW_HALF_WIDTH)

    if min_value >= max_value:
        if max_value == MAX_INTENSITY_PCT:
            min_value = max(MIN_INTENSITY_PCT, max_value - 1)
        else:
            max_value = min(MAX_INTENSITY_PCT, min_value + 1)

    return min_value, max_value


def create_warmup_step(duration_min: float) -> Step:
    return _timed_step("Warmup", duration_min, IntensityClass.WARM_UP, WARMUP_TARGET)


def create_cooldown_step(duration_min: float) -> Step:
    return _timed_step("Cooldown", duration_min, IntensityClass.COOL_DOWN, COOLDOWN_TARGET)


def create_interval_step(duration_min: float, intensity_pct: float) -> Step:
    """Hard work interval centred on ``intensity_pct``."""
    return _timed_step(
        "Interval", duration_min, IntensityClass.ACTIVE, compute_intensity_range(intensity_pct),
    )


def create_recovery_step(duration_min: float) -> Step:
    return _timed_step("Recovery", duration_min, IntensityClass.REST, RECOVERY_TARGET)


def create_steady_step(duration_min: float, intensity_pct: float) -> Step:
    """Continuous effort centred on ``intensity_pct``."""
    return _timed_step(
        "Steady", duration_min, IntensityClass.ACTIVE, compute_intensity_range(intensity_pct),
    )


def _timed_step(
    name: str,
    duration_min: float,
    intensity_class: IntensityClass,
    target: tuple[float, float],
) -> Step:
    if isinstance(duration_min, bool) or not isinstance(duration_min, (int, float)):
        raise ValidationError(f"{name} duration must be a number", field="duration")
    length = create_length(duration_min * 60, LengthUnit.SECOND)
    return create_step(
        name=name,
        length=length,
        targets=[create_target(*target)],
        intensity_class=intensity_class,
    )
