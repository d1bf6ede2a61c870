"""Planned training metrics: IF, TSS, velocity, distance, calories, elevation, energy.

Every metric is derived from two structure-level quantities, the total
duration (seconds) and the duration-weighted average intensity (percent of
threshold), plus athlete weight and activity type. Each calculator is
usable on its own; ``calculate_planned_metrics`` bundles them.

Rounding is half-up (away from zero for the non-negative values used
here), matching the arithmetic of the upload API.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Union

import numpy as np

from structure_engine.math.duration import structure_elements, total_duration
from structure_engine.models.enums import (
    BASE_VELOCITY_M_S,
    CALORIE_BASE_FRACTION,
    CALORIE_BURN_RATE,
    CALORIE_IF_FRACTION,
    DEFAULT_ATHLETE_WEIGHT_KG,
    ELEVATION_GAIN_M_PER_HOUR,
    KJ_PER_CALORIE,
    REFERENCE_ATHLETE_WEIGHT_KG,
    VELOCITY_BASE_FRACTION,
    VELOCITY_IF_FRACTION,
    ActivityType,
)
from structure_engine.models.metrics import PlannedMetrics
from structure_engine.models.structure import RepetitionElement, Structure, StructureElement
from structure_engine.validation import validate_activity_type, validate_athlete_weight

logger = logging.getLogger(__name__)

# A Structure or a bare sequence of its elements
StructureLike = Union[Structure, Iterable[StructureElement]]


def average_intensity(structure: StructureLike) -> float:
    """Duration-weighted mean intensity of a structure, in percent.

    Each executed step contributes the midpoint of its primary target,
    weighted by its length; repetition children are weighted by
    ``count × length``. Every intensity class contributes, so recoveries
    pull the average down the way they lower real training load.

    Returns:
        The weighted mean; the plain mean if all lengths are zero; 0.0
        for a structure without steps.
    """
    intensities: list[float] = []
    weights: list[float] = []
    for element in structure_elements(structure):
        repeats = element.count if isinstance(element, RepetitionElement) else 1
        for step in element.steps:
            target = step.primary_target
            intensities.append(target.midpoint if target is not None else 0.0)
            weights.append(step.length.value * repeats)

    if not intensities:
        return 0.0
    values = np.asarray(intensities, dtype=np.float64)
    w = np.asarray(weights, dtype=np.float64)
    if w.sum() <= 0:
        return float(np.mean(values))
    return float(np.average(values, weights=w))


def calculate_intensity_factor(structure: StructureLike) -> float:
    """IF = average intensity / 100, rounded to 2 decimals."""
    return _round_half_up(average_intensity(structure) / 100, 2)


def calculate_tss(
    structure: StructureLike,
    athlete_weight_kg: float = DEFAULT_ATHLETE_WEIGHT_KG,
) -> float:
    """Planned Training Stress Score.

    TSS = hours × IF × 100 × sqrt(weight / 70), rounded to 1 decimal.
    One hour at threshold for a 70 kg athlete scores exactly 100.
    """
    elements = structure_elements(structure)
    weight = validate_athlete_weight(athlete_weight_kg)
    hours = total_duration(elements) / 3600
    intensity_factor = average_intensity(elements) / 100
    weight_adjustment = math.sqrt(weight / REFERENCE_ATHLETE_WEIGHT_KG)
    return _round_half_up(hours * intensity_factor * 100 * weight_adjustment, 1)


def calculate_velocity(
    structure: StructureLike,
    activity_type: ActivityType | str = ActivityType.RUN,
) -> float:
    """Planned velocity in m/s: base × (0.7 + 0.6 × IF), rounded to 3 decimals.

    Never zero: an empty structure still moves at 70% of the base velocity.
    """
    base = BASE_VELOCITY_M_S[validate_activity_type(activity_type)]
    intensity_factor = average_intensity(structure) / 100
    return _round_half_up(
        base * (VELOCITY_BASE_FRACTION + VELOCITY_IF_FRACTION * intensity_factor), 3,
    )


def calculate_distance(
    structure: StructureLike,
    activity_type: ActivityType | str = ActivityType.RUN,
) -> int:
    """Planned distance in meters: velocity × duration, rounded."""
    elements = structure_elements(structure)
    velocity = calculate_velocity(elements, activity_type)
    return int(_round_half_up(velocity * total_duration(elements)))


def calculate_calories(
    structure: StructureLike,
    athlete_weight_kg: float = DEFAULT_ATHLETE_WEIGHT_KG,
    activity_type: ActivityType | str = ActivityType.RUN,
) -> int:
    """Planned calories: hours × weight × burn rate × (0.8 + 0.4 × IF), rounded."""
    elements = structure_elements(structure)
    weight = validate_athlete_weight(athlete_weight_kg)
    burn_rate = CALORIE_BURN_RATE[validate_activity_type(activity_type)]
    hours = total_duration(elements) / 3600
    intensity_factor = average_intensity(elements) / 100
    calories = hours * weight * burn_rate * (
        CALORIE_BASE_FRACTION + CALORIE_IF_FRACTION * intensity_factor
    )
    return int(_round_half_up(calories))


def calculate_elevation_gain(structure: StructureLike) -> int:
    """Estimated elevation gain: 100 m per planned hour, rounded.

    A duration heuristic; the polyline is a visual intensity profile and
    carries no elevation data.
    """
    hours = total_duration(structure) / 3600
    return int(_round_half_up(hours * ELEVATION_GAIN_M_PER_HOUR))


def calculate_energy(
    structure: StructureLike,
    athlete_weight_kg: float = DEFAULT_ATHLETE_WEIGHT_KG,
    activity_type: ActivityType | str = ActivityType.RUN,
) -> int:
    """Planned energy in kJ: calories × 4.184, rounded."""
    calories = calculate_calories(structure, athlete_weight_kg, activity_type)
    return int(_round_half_up(calories * KJ_PER_CALORIE))


def calculate_planned_metrics(
    structure: StructureLike,
    athlete_weight_kg: float = DEFAULT_ATHLETE_WEIGHT_KG,
    activity_type: ActivityType | str = ActivityType.RUN,
) -> PlannedMetrics:
    """Compute every planned metric for a structure in one record.

    Args:
        structure: A Structure, or a bare sequence of its elements.
        athlete_weight_kg: Athlete body mass; must be positive.
        activity_type: Sport used for velocity and calorie baselines.

    Returns:
        A PlannedMetrics snapshot. An empty structure yields zeros for
        everything except ``velocity_planned``.

    Raises:
        ValidationError: For a non-positive weight or unknown activity type.
    """
    elements = structure_elements(structure)
    activity = validate_activity_type(activity_type)
    hours = total_duration(elements) / 3600
    metrics = PlannedMetrics(
        total_time_planned=_round_half_up(hours, 3),
        tss_planned=calculate_tss(elements, athlete_weight_kg),
        if_planned=calculate_intensity_factor(elements),
        velocity_planned=calculate_velocity(elements, activity),
        calories_planned=calculate_calories(elements, athlete_weight_kg, activity),
        distance_planned=calculate_distance(elements, activity),
        elevation_gain_planned=calculate_elevation_gain(elements),
        energy_planned=calculate_energy(elements, athlete_weight_kg, activity),
    )
    logger.info(
        "Planned %s workout: %.3fh, TSS %.1f, IF %.2f",
        activity.value, metrics.total_time_planned, metrics.tss_planned, metrics.if_planned,
    )
    return metrics


def _round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up, unlike Python's round-half-even."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
