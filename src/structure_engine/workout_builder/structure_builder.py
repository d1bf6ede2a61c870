"""Immutable builder that lays structure elements end to end in time.

Each ``with_*`` call returns a new builder; the receiver is never changed.
Element offsets are in seconds from the start of the workout. Distance
lengths are timed with an assumed average speed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from structure_engine.errors import ValidationError
from structure_engine.models.enums import (
    DEFAULT_AVERAGE_SPEED_KMH,
    IntensityMetric,
    IntensityTargetType,
    LengthMetric,
)
from structure_engine.models.structure import (
    Length,
    Step,
    Structure,
    StructureElement,
    create_structure,
    repetition_element,
    step_element,
)


@dataclass(frozen=True)
class StructureBuilder:
    """Accumulates elements and the running clock used for begin/end.

    Usage::

        structure = (
            StructureBuilder()
            .with_step(create_warmup_step(10))
            .with_repetition(4, [create_interval_step(4, 105), create_recovery_step(2)])
            .with_step(create_cooldown_step(10))
            .build()
        )
    """

    elements: tuple[StructureElement, ...] = ()
    current_time: float = 0.0
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH
    primary_length_metric: LengthMetric = LengthMetric.DURATION
    primary_intensity_metric: IntensityMetric = IntensityMetric.PERCENT_OF_THRESHOLD_POWER
    primary_intensity_target_or_range: IntensityTargetType = IntensityTargetType.RANGE

    def with_average_speed(self, speed_kmh: float) -> StructureBuilder:
        """Speed used to time distance-based lengths; must be positive."""
        if isinstance(speed_kmh, bool) or not isinstance(speed_kmh, (int, float)) \
                or not math.isfinite(speed_kmh) or speed_kmh <= 0:
            raise ValidationError("average speed must be a positive number", field="averageSpeed")
        return replace(self, average_speed_kmh=speed_kmh)

    def with_step(self, step: Step) -> StructureBuilder:
        seconds = self._length_seconds(step.length)
        element = step_element(step, self.current_time, self.current_time + seconds)
        return self._append(element)

    def with_repetition(self, count: int, steps: Sequence[Step]) -> StructureBuilder:
        """Append ``count`` repeats of ``steps`` as a single element."""
        steps = tuple(steps)
        cycle = sum(self._length_seconds(step.length) for step in steps)
        repeats = count if isinstance(count, (int, float)) else 0
        element = repetition_element(
            count, steps, self.current_time, self.current_time + cycle * repeats,
        )
        return self._append(element)

    def with_steps(self, steps: Iterable[Step]) -> StructureBuilder:
        builder = self
        for step in steps:
            builder = builder.with_step(step)
        return builder

    def build(self, polyline: Iterable[Sequence[float]] | None = None) -> Structure:
        return create_structure(
            self.elements,
            polyline=() if polyline is None else polyline,
            primary_length_metric=self.primary_length_metric,
            primary_intensity_metric=self.primary_intensity_metric,
            primary_intensity_target_or_range=self.primary_intensity_target_or_range,
        )

    def _append(self, element: StructureElement) -> StructureBuilder:
        return replace(self, elements=self.elements + (element,), current_time=element.end)

    def _length_seconds(self, length: Length) -> float:
        seconds = length.to_seconds()
        if seconds is None:
            meters = length.to_meters()
            if meters is None:
                raise ValidationError(
                    f"cannot time a length in {length.unit.value}s", field="length.unit",
                )
            seconds = meters / 1000 / self.average_speed_kmh * 3600
        if seconds <= 0:
            raise ValidationError("element length must be positive", field="length.value")
        return seconds
