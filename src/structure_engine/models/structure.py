"""Structured workout value objects and their validating factories.

A Structure is an ordered tuple of elements. Each element is one of two
variants: a ``StepElement`` wrapping a single Step, or a ``RepetitionElement``
repeating a short cycle of Steps ``count`` times. Every record is frozen;
build them through the ``create_*`` / ``*_element`` factories, which
validate inputs and copy sequences into tuples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from structure_engine.errors import ValidationError
from structure_engine.models.enums import (
    ACTIVE_TARGET_FLOOR_PCT,
    DISTANCE_UNIT_METERS,
    MAX_INTENSITY_PCT,
    MAX_STEP_NAME_LENGTH,
    TIME_UNIT_SECONDS,
    ElementType,
    IntensityClass,
    IntensityMetric,
    IntensityTargetType,
    LengthMetric,
    LengthUnit,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Length:
    """A measurement of time, distance or repetition count."""

    value: float
    unit: LengthUnit

    @property
    def is_time_unit(self) -> bool:
        return self.unit in TIME_UNIT_SECONDS

    @property
    def is_distance_unit(self) -> bool:
        return self.unit in DISTANCE_UNIT_METERS

    @property
    def is_repetition_unit(self) -> bool:
        return self.unit == LengthUnit.REPETITION

    def to_seconds(self) -> float | None:
        """Value in seconds, or None when the unit is not a time unit."""
        factor = TIME_UNIT_SECONDS.get(self.unit)
        return None if factor is None else self.value * factor

    def to_meters(self) -> float | None:
        """Value in meters, or None when the unit is not a distance unit."""
        factor = DISTANCE_UNIT_METERS.get(self.unit)
        return None if factor is None else self.value * factor

    def __str__(self) -> str:
        suffix = "" if self.value == 1 else "s"
        return f"{_format_number(self.value)} {self.unit.value}{suffix}"


@dataclass(frozen=True)
class Target:
    """Intensity range for a step, in the structure's intensity metric."""

    min_value: float
    max_value: float

    @property
    def midpoint(self) -> float:
        return (self.min_value + self.max_value) / 2

    @property
    def range_width(self) -> float:
        return self.max_value - self.min_value

    def contains(self, value: float) -> bool:
        return self.min_value <= value <= self.max_value

    def __str__(self) -> str:
        return f"{_format_number(self.min_value)}-{_format_number(self.max_value)}"


@dataclass(frozen=True)
class Step:
    """A named leaf segment of a workout.

    Only the first target (``primary_target``) feeds intensity metrics; the
    rest are carried through for display.
    """

    name: str
    length: Length
    targets: tuple[Target, ...]
    intensity_class: IntensityClass
    open_duration: bool = False

    @property
    def primary_target(self) -> Target | None:
        return self.targets[0] if self.targets else None

    @property
    def is_active(self) -> bool:
        return self.intensity_class == IntensityClass.ACTIVE

    @property
    def is_rest(self) -> bool:
        return self.intensity_class == IntensityClass.REST

    @property
    def is_warm_up(self) -> bool:
        return self.intensity_class == IntensityClass.WARM_UP

    @property
    def is_cool_down(self) -> bool:
        return self.intensity_class == IntensityClass.COOL_DOWN

    @property
    def duration_seconds(self) -> float | None:
        return self.length.to_seconds()

    @property
    def distance_meters(self) -> float | None:
        return self.length.to_meters()

    def __str__(self) -> str:
        text = f"{self.name} ({self.intensity_class.value})"
        seconds = self.duration_seconds
        meters = self.distance_meters
        if seconds is not None:
            text += f" - {_format_number(seconds)}s"
        elif meters is not None:
            text += f" - {_format_number(meters)}m"
        else:
            text += f" - {self.length}"
        if self.targets:
            text += " @ " + ", ".join(str(t) for t in self.targets)
        return text


@dataclass(frozen=True)
class StepElement:
    """Structure element holding exactly one Step."""

    step: Step
    begin: float
    end: float

    @property
    def type(self) -> ElementType:
        return ElementType.STEP

    @property
    def length(self) -> Length:
        return self.step.length

    @property
    def steps(self) -> tuple[Step, ...]:
        return (self.step,)

    @property
    def duration(self) -> float:
        return self.end - self.begin


@dataclass(frozen=True)
class RepetitionElement:
    """Structure element repeating ``steps`` in order ``count`` times."""

    count: int
    steps: tuple[Step, ...]
    begin: float
    end: float

    @property
    def type(self) -> ElementType:
        return ElementType.REPETITION

    @property
    def length(self) -> Length:
        return Length(value=self.count, unit=LengthUnit.REPETITION)

    @property
    def duration(self) -> float:
        return self.end - self.begin


StructureElement = Union[StepElement, RepetitionElement]


@dataclass(frozen=True)
class Structure:
    """Complete structured workout: elements, polyline and metric tags."""

    structure: tuple[StructureElement, ...] = ()
    polyline: tuple[tuple[float, float], ...] = ()
    primary_length_metric: LengthMetric = LengthMetric.DURATION
    primary_intensity_metric: IntensityMetric = IntensityMetric.PERCENT_OF_THRESHOLD_POWER
    primary_intensity_target_or_range: IntensityTargetType = IntensityTargetType.RANGE

    @property
    def is_time_based(self) -> bool:
        return self.primary_length_metric == LengthMetric.DURATION

    @property
    def is_distance_based(self) -> bool:
        return self.primary_length_metric == LengthMetric.DISTANCE

    def all_steps(self) -> tuple[Step, ...]:
        """Every distinct step, in order, without expanding repetitions."""
        return tuple(step for element in self.structure for step in element.steps)

    def active_steps(self) -> tuple[Step, ...]:
        return tuple(step for step in self.all_steps() if step.is_active)

    def rest_steps(self) -> tuple[Step, ...]:
        return tuple(step for step in self.all_steps() if step.is_rest)

    def elements_of_type(self, element_type: ElementType | str) -> tuple[StructureElement, ...]:
        element_type = ElementType(element_type)
        return tuple(e for e in self.structure if e.type == element_type)

    def repetitions(self) -> tuple[RepetitionElement, ...]:
        return self.elements_of_type(ElementType.REPETITION)  # type: ignore[return-value]

    def step_elements(self) -> tuple[StepElement, ...]:
        return self.elements_of_type(ElementType.STEP)  # type: ignore[return-value]

    def __str__(self) -> str:
        span = sum(element.duration for element in self.structure)
        return (
            f"Workout Structure ({_format_number(span)}s, "
            f"{len(self.all_steps())} steps, {len(self.active_steps())} active, "
            f"{len(self.repetitions())} repetitions)"
        )


# ---------------------------------------------------------------------------
# Validating factories
# ---------------------------------------------------------------------------


def create_length(value: float, unit: LengthUnit | str) -> Length:
    """Build a Length, rejecting negative, non-finite or fractional-repetition values."""
    unit = _coerce_enum(LengthUnit, unit, "length unit", field="length.unit")
    value = _require_number(value, "length value", field="length.value")
    if value < 0:
        raise ValidationError("length value must be non-negative", field="length.value")
    if unit == LengthUnit.REPETITION and not float(value).is_integer():
        raise ValidationError("repetition count must be an integer", field="length.value")
    return Length(value=value, unit=unit)


def create_target(
    min_value: float,
    max_value: float,
    metric: IntensityMetric | str = IntensityMetric.PERCENT_OF_THRESHOLD_POWER,
) -> Target:
    """Build a Target range; percent-based metrics cap ``max_value`` at 100."""
    metric = _coerce_enum(IntensityMetric, metric, "intensity metric", field="metric")
    min_value = _require_number(min_value, "target minValue", field="minValue")
    max_value = _require_number(max_value, "target maxValue", field="maxValue")
    if min_value < 0:
        raise ValidationError("target minValue must be non-negative", field="minValue")
    if min_value >= max_value:
        raise ValidationError(
            f"target minValue must be less than maxValue "
            f"({_format_number(min_value)} >= {_format_number(max_value)})",
            field="minValue",
        )
    if metric.is_percent_based and max_value > MAX_INTENSITY_PCT:
        raise ValidationError(
            f"target maxValue must not exceed {_format_number(MAX_INTENSITY_PCT)} "
            f"for {metric.value}",
            field="maxValue",
        )
    return Target(min_value=min_value, max_value=max_value)


def create_step(
    name: str,
    length: Length,
    targets: Iterable[Target],
    intensity_class: IntensityClass | str,
    open_duration: bool = False,
) -> Step:
    """Build a Step, copying ``targets`` into a tuple."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("step name must not be empty", field="name")
    if len(name) > MAX_STEP_NAME_LENGTH:
        raise ValidationError(
            f"step name must not exceed {MAX_STEP_NAME_LENGTH} characters", field="name",
        )
    if not isinstance(length, Length):
        raise ValidationError("step length must be a Length", field="length")
    if length.is_repetition_unit:
        raise ValidationError("step length cannot be a repetition count", field="length")
    intensity_class = _coerce_enum(
        IntensityClass, intensity_class, "intensity class", field="intensityClass",
    )
    targets = tuple(targets)
    if not targets:
        raise ValidationError("step targets must not be empty", field="targets")
    if not all(isinstance(t, Target) for t in targets):
        raise ValidationError("step targets must be Target values", field="targets")
    if not isinstance(open_duration, bool):
        raise ValidationError("step openDuration must be a boolean", field="openDuration")

    if (
        intensity_class == IntensityClass.REST
        and targets[0].min_value >= ACTIVE_TARGET_FLOOR_PCT
    ):
        logger.warning(
            "Rest step %r targets %s, inside the active range (>= %s)",
            name, targets[0], ACTIVE_TARGET_FLOOR_PCT,
        )

    return Step(
        name=name,
        length=length,
        targets=targets,
        intensity_class=intensity_class,
        open_duration=open_duration,
    )


def step_element(step: Step, begin: float, end: float) -> StepElement:
    """Wrap a single Step as a structure element spanning ``[begin, end)``."""
    if not isinstance(step, Step):
        raise ValidationError("step element requires a Step", field="steps")
    begin, end = _validate_span(begin, end)
    return StepElement(step=step, begin=begin, end=end)


def repetition_element(
    count: int,
    steps: Sequence[Step],
    begin: float,
    end: float,
) -> RepetitionElement:
    """Repeat ``steps`` ``count`` times as one structure element."""
    length = create_length(count, LengthUnit.REPETITION)
    if length.value < 1:
        raise ValidationError("repetition count must be at least 1", field="length.value")
    steps = tuple(steps)
    if not steps:
        raise ValidationError("repetition must contain at least one step", field="steps")
    if not all(isinstance(s, Step) for s in steps):
        raise ValidationError("repetition steps must be Step values", field="steps")
    begin, end = _validate_span(begin, end)
    return RepetitionElement(count=int(length.value), steps=steps, begin=begin, end=end)


def create_structure(
    elements: Iterable[StructureElement],
    polyline: Iterable[Sequence[float]] = (),
    primary_length_metric: LengthMetric | str = LengthMetric.DURATION,
    primary_intensity_metric: IntensityMetric | str = IntensityMetric.PERCENT_OF_THRESHOLD_POWER,
    primary_intensity_target_or_range: IntensityTargetType | str = IntensityTargetType.RANGE,
) -> Structure:
    """Build a Structure from elements in execution order.

    Elements must not overlap: each one begins at or after the previous end.
    Percent-based structures additionally cap every step target at 100.
    """
    elements = tuple(elements)
    for element in elements:
        if not isinstance(element, (StepElement, RepetitionElement)):
            raise ValidationError(
                "structure elements must be StepElement or RepetitionElement values",
                field="structure",
            )
    for previous, current in zip(elements, elements[1:]):
        if previous.end > current.begin:
            raise ValidationError(
                f"structure elements cannot overlap "
                f"(end {_format_number(previous.end)} > begin {_format_number(current.begin)})",
                field="structure",
            )

    length_metric = _coerce_enum(
        LengthMetric, primary_length_metric, "primary length metric",
        field="primaryLengthMetric",
    )
    intensity_metric = _coerce_enum(
        IntensityMetric, primary_intensity_metric, "primary intensity metric",
        field="primaryIntensityMetric",
    )
    target_type = _coerce_enum(
        IntensityTargetType, primary_intensity_target_or_range, "intensity target type",
        field="primaryIntensityTargetOrRange",
    )

    if intensity_metric.is_percent_based:
        for element in elements:
            for step in element.steps:
                for target in step.targets:
                    if target.max_value > MAX_INTENSITY_PCT:
                        raise ValidationError(
                            f"step {step.name!r} target maxValue exceeds "
                            f"{_format_number(MAX_INTENSITY_PCT)} for {intensity_metric.value}",
                            field="maxValue",
                        )

    return Structure(
        structure=elements,
        polyline=_validate_polyline(polyline),
        primary_length_metric=length_metric,
        primary_intensity_metric=intensity_metric,
        primary_intensity_target_or_range=target_type,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _validate_span(begin: float, end: float) -> tuple[float, float]:
    begin = _require_number(begin, "element begin", field="begin")
    end = _require_number(end, "element end", field="end")
    if begin < 0:
        raise ValidationError("element begin must be non-negative", field="begin")
    if end <= begin:
        raise ValidationError("element end must be greater than begin", field="end")
    return begin, end


def _validate_polyline(polyline: Iterable[Sequence[float]]) -> tuple[tuple[float, float], ...]:
    points: list[tuple[float, float]] = []
    for point in polyline:
        if isinstance(point, (str, bytes)) or len(point) != 2:
            raise ValidationError("polyline entries must be 2-element pairs", field="polyline")
        x = _require_number(point[0], "polyline coordinate", field="polyline")
        y = _require_number(point[1], "polyline coordinate", field="polyline")
        points.append((x, y))
    return tuple(points)


def _require_number(value, label: str, field: str) -> float:
    """Return ``value`` if it is a finite real number (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number", field=field)
    if not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number", field=field)
    return value


def _coerce_enum(enum_cls, value, label: str, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}: {value!r}", field=field) from None


def _format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
