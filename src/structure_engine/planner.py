"""WorkoutPlanner — ties templates, metrics and workout creation together."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from structure_engine.config import EngineSettings
from structure_engine.math.metrics import calculate_planned_metrics
from structure_engine.models.metrics import PlannedMetrics
from structure_engine.models.structure import Structure
from structure_engine.models.workout import Workout, create_structured_workout
from structure_engine.serialization.trainingpeaks import (
    planned_metrics_to_request_fields,
    structure_to_dict,
)
from structure_engine.validation import validate_planned_metrics
from structure_engine.workout_builder.structure_builder import StructureBuilder
from structure_engine.workout_builder.templates import get_template_builder

logger = logging.getLogger(__name__)


class WorkoutPlanner:
    """Builds structures and plans them for one athlete.

    Usage::

        planner = WorkoutPlanner(load_settings())
        structure = planner.build("interval", intervals=4)
        metrics = planner.plan(structure)
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    def builder(self) -> StructureBuilder:
        """An empty StructureBuilder timed at the configured average speed."""
        return StructureBuilder().with_average_speed(self.settings.average_speed_kmh)

    def build(self, template_name: str, **params) -> Structure:
        """Build a structure from a registered template.

        Raises:
            TemplateError: If ``template_name`` is not registered.
            ValidationError: If the template rejects ``params``.
        """
        return get_template_builder(template_name)(**params)

    def plan(self, structure: Structure) -> PlannedMetrics:
        """Planned metrics using the configured athlete weight and sport."""
        return calculate_planned_metrics(
            structure,
            athlete_weight_kg=self.settings.athlete_weight_kg,
            activity_type=self.settings.activity_type,
        )

    def create_workout(
        self,
        id: str,
        name: str,
        date: datetime,
        structure: Structure,
        description: str = "",
        tags: Iterable[str] = (),
    ) -> Workout:
        """A Workout for ``structure``, tagged with the configured sport."""
        return create_structured_workout(
            id=id,
            name=name,
            date=date,
            structure=structure,
            description=description,
            activity_type=self.settings.activity_type,
            tags=tags,
        )

    def upload_fields(self, structure: Structure) -> dict:
        """Structure and planned-metric fields for a workout upload request.

        Raises:
            WorkoutValidationError: If the planned metrics fall outside the
                accepted ranges (e.g. more than 24 hours).
        """
        metrics = self.plan(structure)
        validate_planned_metrics(metrics)
        fields = {"structure": structure_to_dict(structure)}
        fields.update(planned_metrics_to_request_fields(metrics))
        logger.debug("Prepared upload fields: %s", sorted(fields))
        return fields
