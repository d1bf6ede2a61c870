"""Serialization module — TrainingPeaks wire format for structures and metrics."""

from structure_engine.serialization.trainingpeaks import (
    planned_metrics_to_request_fields,
    structure_from_dict,
    structure_to_dict,
    structure_to_json_string,
)

__all__ = [
    "planned_metrics_to_request_fields",
    "structure_from_dict",
    "structure_to_dict",
    "structure_to_json_string",
]
