"""Workout builder — step generators, the structure builder and templates."""

from structure_engine.workout_builder.structure_builder import StructureBuilder
from structure_engine.workout_builder.templates import (
    TEMPLATE_BUILDERS,
    create_interval_workout,
    create_long_steady_workout,
    create_tempo_workout,
    get_template_builder,
)

__all__ = [
    "StructureBuilder",
    "TEMPLATE_BUILDERS",
    "create_interval_workout",
    "create_long_steady_workout",
    "create_tempo_workout",
    "get_template_builder",
]
