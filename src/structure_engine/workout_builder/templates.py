"""Workout templates — ready-made structures for common session types.

Every template is warmup → main set → cooldown, laid out as consecutive
step elements. Durations are in minutes, intensities in percent of
threshold. The returned structures carry a normalized intensity polyline.
"""

from __future__ import annotations

import logging
from typing import Callable

from structure_engine.errors import TemplateError, ValidationError
from structure_engine.math.timeline import build_polyline
from structure_engine.models.structure import Structure
from structure_engine.workout_builder.steps import (
    create_cooldown_step,
    create_interval_step,
    create_recovery_step,
    create_steady_step,
    create_warmup_step,
)
from structure_engine.workout_builder.structure_builder import StructureBuilder

logger = logging.getLogger(__name__)


def create_interval_workout(
    warmup_minutes: float = 10,
    interval_minutes: float = 5,
    interval_intensity: float = 120,
    recovery_minutes: float = 3,
    intervals: int = 6,
    cooldown_minutes: float = 10,
) -> Structure:
    """Warmup, ``intervals`` work bouts separated by recoveries, cooldown.

    No recovery follows the last interval, so the structure holds
    ``2 * intervals + 1`` elements (just warmup and cooldown when
    ``intervals`` is 0). Intensities above 100 are clamped to the 99-100
    window.

    Raises:
        ValidationError: If ``intervals`` is not a non-negative integer or
            any duration is not positive.
    """
    if isinstance(intervals, bool) or not isinstance(intervals, int) or intervals < 0:
        raise ValidationError("intervals must be a non-negative integer", field="intervals")

    builder = StructureBuilder().with_step(create_warmup_step(warmup_minutes))
    for i in range(intervals):
        builder = builder.with_step(create_interval_step(interval_minutes, interval_intensity))
        if i < intervals - 1:
            builder = builder.with_step(create_recovery_step(recovery_minutes))
    builder = builder.with_step(create_cooldown_step(cooldown_minutes))

    return _finish("interval", builder)


def create_tempo_workout(
    warmup_minutes: float = 15,
    tempo_minutes: float = 30,
    tempo_intensity: float = 90,
    cooldown_minutes: float = 10,
) -> Structure:
    """Warmup, one sustained tempo block, cooldown."""
    builder = StructureBuilder().with_steps([
        create_warmup_step(warmup_minutes),
        create_steady_step(tempo_minutes, tempo_intensity),
        create_cooldown_step(cooldown_minutes),
    ])
    return _finish("tempo", builder)


def create_long_steady_workout(
    warmup_minutes: float = 10,
    steady_minutes: float = 120,
    steady_intensity: float = 75,
    cooldown_minutes: float = 10,
) -> Structure:
    """Warmup, a long aerobic steady block, cooldown."""
    builder = StructureBuilder().with_steps([
        create_warmup_step(warmup_minutes),
        create_steady_step(steady_minutes, steady_intensity),
        create_cooldown_step(cooldown_minutes),
    ])
    return _finish("long_steady", builder)


TEMPLATE_BUILDERS: dict[str, Callable[..., Structure]] = {
    "interval": create_interval_workout,
    "tempo": create_tempo_workout,
    "long_steady": create_long_steady_workout,
}


def get_template_builder(name: str) -> Callable[..., Structure]:
    """Look up a template builder by name.

    Raises:
        TemplateError: If no template is registered under ``name``. It is
            also a KeyError.
    """
    try:
        return TEMPLATE_BUILDERS[name]
    except KeyError:
        raise TemplateError(name) from None


def _finish(template_name: str, builder: StructureBuilder) -> Structure:
    structure = builder.build(polyline=build_polyline(builder.elements))
    logger.info(
        "Built %s template: %d elements, %.0fs",
        template_name, len(structure.structure), builder.current_time,
    )
    return structure
