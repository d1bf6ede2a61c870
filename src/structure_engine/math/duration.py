"""Duration aggregation over a structure's step / repetition tree.

Step lengths are summed as given: they are expected to already be in
seconds-equivalent units, so no unit conversion happens here.
"""

from __future__ import annotations

import logging
from typing import Iterable

from structure_engine.models.structure import (
    RepetitionElement,
    Step,
    Structure,
    StructureElement,
)

logger = logging.getLogger(__name__)


def structure_elements(
    structure: Structure | Iterable[StructureElement],
) -> tuple[StructureElement, ...]:
    """Elements of a Structure, or a bare element sequence as a tuple."""
    if isinstance(structure, Structure):
        return structure.structure
    return tuple(structure)


def cycle_duration(steps: Iterable[Step]) -> float:
    """Sum of the step lengths in one pass through ``steps``."""
    return sum(step.length.value for step in steps)


def element_duration(element: StructureElement) -> float:
    """Length contributed by one element.

    A step element contributes its step's length; a repetition contributes
    ``count × cycle_duration(children)``.
    """
    if isinstance(element, RepetitionElement):
        return element.count * cycle_duration(element.steps)
    return element.step.length.value


def total_duration(structure: Structure | Iterable[StructureElement]) -> float:
    """Total elapsed length of a structure, expanding repetitions.

    Args:
        structure: A Structure, or a bare sequence of its elements.

    Returns:
        The summed length; 0 for an empty structure.
    """
    elements = structure_elements(structure)
    total = sum(element_duration(element) for element in elements)
    logger.debug("Aggregated %d elements to %s", len(elements), total)
    return total
