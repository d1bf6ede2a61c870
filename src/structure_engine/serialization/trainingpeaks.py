"""TrainingPeaks JSON serialization for Structure and PlannedMetrics.

The wire shape is the one the TrainingPeaks workout API stores verbatim::

    {"structure": [...], "polyline": [[x, y], ...],
     "primaryLengthMetric": ..., "primaryIntensityMetric": ...,
     "primaryIntensityTargetOrRange": ...}

Parsing goes through the validating factories, so a dict accepted by
``structure_from_dict`` always satisfies the model invariants.

All functions are pure (no I/O, no network calls).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from structure_engine.errors import ValidationError
from structure_engine.models.enums import ElementType, IntensityMetric
from structure_engine.models.metrics import PlannedMetrics
from structure_engine.models.structure import (
    Length,
    Step,
    Structure,
    StructureElement,
    Target,
    create_length,
    create_step,
    create_structure,
    create_target,
    repetition_element,
    step_element,
)

# PlannedMetrics field → upload request field.
_METRIC_REQUEST_FIELDS = {
    "total_time_planned": "totalTimePlanned",
    "tss_planned": "tssPlanned",
    "if_planned": "ifPlanned",
    "velocity_planned": "velocityPlanned",
    "calories_planned": "caloriesPlanned",
    "distance_planned": "distancePlanned",
    "elevation_gain_planned": "elevationGainPlanned",
    "energy_planned": "energyPlanned",
}


def structure_to_dict(structure: Structure) -> dict:
    """Convert a Structure to the TrainingPeaks wire dict."""
    return {
        "structure": [_element_to_dict(element) for element in structure.structure],
        "polyline": [[x, y] for x, y in structure.polyline],
        "primaryLengthMetric": structure.primary_length_metric.value,
        "primaryIntensityMetric": structure.primary_intensity_metric.value,
        "primaryIntensityTargetOrRange": structure.primary_intensity_target_or_range.value,
    }


def structure_to_json_string(structure: Structure, indent: int = 2) -> str:
    """Convert a Structure to a TrainingPeaks JSON string."""
    return json.dumps(structure_to_dict(structure), indent=indent)


def structure_from_dict(data: Mapping[str, Any]) -> Structure:
    """Parse and validate a TrainingPeaks wire dict into a Structure.

    Raises:
        ValidationError: If a key is missing, a value has the wrong shape,
            or any model invariant is violated.
    """
    _require_mapping(data, "structure")
    raw_metric = _require(data, "primaryIntensityMetric")
    try:
        metric = IntensityMetric(raw_metric)
    except ValueError:
        raise ValidationError(
            f"Invalid primary intensity metric: {raw_metric!r}",
            field="primaryIntensityMetric",
        ) from None
    elements = [
        _element_from_dict(item, metric)
        for item in _require_list(data, "structure")
    ]
    return create_structure(
        elements,
        polyline=_require_list(data, "polyline"),
        primary_length_metric=_require(data, "primaryLengthMetric"),
        primary_intensity_metric=metric,
        primary_intensity_target_or_range=_require(data, "primaryIntensityTargetOrRange"),
    )


def planned_metrics_to_request_fields(metrics: PlannedMetrics) -> dict:
    """Map PlannedMetrics 1:1 onto the workout upload request fields."""
    return {
        wire: getattr(metrics, attr) for attr, wire in _METRIC_REQUEST_FIELDS.items()
    }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _element_to_dict(element: StructureElement) -> dict:
    return {
        "type": element.type.value,
        "length": _length_to_dict(element.length),
        "steps": [_step_to_dict(step) for step in element.steps],
        "begin": element.begin,
        "end": element.end,
    }


def _step_to_dict(step: Step) -> dict:
    return {
        "name": step.name,
        "length": _length_to_dict(step.length),
        "targets": [_target_to_dict(target) for target in step.targets],
        "intensityClass": step.intensity_class.value,
        "openDuration": step.open_duration,
    }


def _length_to_dict(length: Length) -> dict:
    return {"value": length.value, "unit": length.unit.value}


def _target_to_dict(target: Target) -> dict:
    return {"minValue": target.min_value, "maxValue": target.max_value}


def _element_from_dict(data: Any, metric: IntensityMetric) -> StructureElement:
    _require_mapping(data, "structure element")
    element_type = _require(data, "type")
    steps = [_step_from_dict(item, metric) for item in _require_list(data, "steps")]
    length = _length_from_dict(_require(data, "length"))
    begin = _require(data, "begin")
    end = _require(data, "end")

    if element_type == ElementType.STEP.value:
        if len(steps) != 1:
            raise ValidationError(
                f"step element must contain exactly one step, found {len(steps)}",
                field="steps",
            )
        if length != steps[0].length:
            raise ValidationError(
                f"step element length ({length}) must match its step length ({steps[0].length})",
                field="length",
            )
        return step_element(steps[0], begin, end)
    if element_type == ElementType.REPETITION.value:
        if not length.is_repetition_unit:
            raise ValidationError(
                "repetition element length must use the repetition unit", field="length.unit",
            )
        return repetition_element(int(length.value), steps, begin, end)
    raise ValidationError(f"Invalid structure element type: {element_type!r}", field="type")


def _step_from_dict(data: Any, metric: IntensityMetric) -> Step:
    _require_mapping(data, "step")
    targets = []
    for item in _require_list(data, "targets"):
        _require_mapping(item, "target")
        targets.append(
            create_target(_require(item, "minValue"), _require(item, "maxValue"), metric)
        )
    return create_step(
        name=_require(data, "name"),
        length=_length_from_dict(_require(data, "length")),
        targets=targets,
        intensity_class=_require(data, "intensityClass"),
        open_duration=data.get("openDuration", False),
    )


def _length_from_dict(data: Any) -> Length:
    _require_mapping(data, "length")
    return create_length(_require(data, "value"), _require(data, "unit"))


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValidationError(f"Missing required field: {key}", field=key)
    return data[key]


def _require_list(data: Mapping[str, Any], key: str) -> list:
    value = _require(data, key)
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{key} must be a list", field=key)
    return list(value)


def _require_mapping(data: Any, label: str) -> None:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{label} must be an object", field=label)
