"""Data models for the structured-workout core."""

from structure_engine.models.enums import (
    ActivityType,
    ElementType,
    IntensityClass,
    IntensityMetric,
    IntensityTargetType,
    LengthMetric,
    LengthUnit,
)
from structure_engine.models.metrics import PlannedMetrics
from structure_engine.models.structure import (
    Length,
    RepetitionElement,
    Step,
    StepElement,
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

__all__ = [
    "ActivityType",
    "ElementType",
    "IntensityClass",
    "IntensityMetric",
    "IntensityTargetType",
    "Length",
    "LengthMetric",
    "LengthUnit",
    "PlannedMetrics",
    "RepetitionElement",
    "Step",
    "StepElement",
    "Structure",
    "StructureElement",
    "Target",
    "create_length",
    "create_step",
    "create_structure",
    "create_target",
    "repetition_element",
    "step_element",
]
