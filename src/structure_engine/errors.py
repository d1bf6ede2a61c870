"""Exception hierarchy for the structured-workout core."""

from __future__ import annotations


class StructureEngineError(Exception):
    """Base exception for all structure_engine errors."""


class ValidationError(StructureEngineError):
    """An input value violated a model invariant.

    ``field`` names the offending field when one can be singled out.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class WorkoutValidationError(ValidationError):
    """A Workout failed validation, e.g. its duration disagrees with its structure."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        duration: float | None = None,
        structure_duration: float | None = None,
        details: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, field=field)
        self.duration = duration
        self.structure_duration = structure_duration
        self.details = tuple(details)


class TemplateError(StructureEngineError, KeyError):
    """No workout template is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown workout template: {name!r}")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])
