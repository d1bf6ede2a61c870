"""Shared test fixtures: steps, structures and a threshold-hour workout."""

from __future__ import annotations

from typing import Callable

import pytest

from structure_engine.models.enums import IntensityClass, IntensityMetric, LengthUnit
from structure_engine.models.structure import (
    Step,
    Structure,
    create_length,
    create_step,
    create_structure,
    create_target,
    repetition_element,
    step_element,
)


def _make_step(
    name: str = "Steady",
    seconds: float = 600,
    target: tuple[float, float] = (70.0, 80.0),
    intensity_class: IntensityClass = IntensityClass.ACTIVE,
) -> Step:
    return create_step(
        name=name,
        length=create_length(seconds, LengthUnit.SECOND),
        targets=[create_target(*target)],
        intensity_class=intensity_class,
    )


@pytest.fixture
def warmup_step() -> Step:
    return _make_step("Warmup", 600, (45.0, 55.0), IntensityClass.WARM_UP)


@pytest.fixture
def interval_step() -> Step:
    return _make_step("Interval", 300, (90.0, 100.0), IntensityClass.ACTIVE)


@pytest.fixture
def recovery_step() -> Step:
    return _make_step("Recovery", 120, (55.0, 65.0), IntensityClass.REST)


@pytest.fixture
def cooldown_step() -> Step:
    return _make_step("Cooldown", 600, (35.0, 45.0), IntensityClass.COOL_DOWN)


@pytest.fixture
def sample_structure(
    warmup_step: Step, interval_step: Step, recovery_step: Step, cooldown_step: Step,
) -> Structure:
    """Warmup 600s, 3 × (300s interval + 120s recovery), cooldown 600s = 2460s."""
    return create_structure([
        step_element(warmup_step, 0, 600),
        repetition_element(3, [interval_step, recovery_step], 600, 1860),
        step_element(cooldown_step, 1860, 2460),
    ])


@pytest.fixture
def threshold_hour() -> Structure:
    """One hour at a 95-105 W target, so average intensity is exactly 100."""
    step = create_step(
        name="Threshold",
        length=create_length(3600, LengthUnit.SECOND),
        targets=[create_target(95, 105, IntensityMetric.POWER)],
        intensity_class=IntensityClass.ACTIVE,
    )
    return create_structure(
        [step_element(step, 0, 3600)],
        primary_intensity_metric=IntensityMetric.POWER,
    )


@pytest.fixture
def empty_structure() -> Structure:
    return create_structure([])


@pytest.fixture
def step_factory() -> Callable[..., Step]:
    """Factory fixture for timed percent-of-threshold steps.

    Usage:
        step = step_factory("Tempo", 1200, (80, 90))
    """
    return _make_step
