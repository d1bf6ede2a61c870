"""Executed-step timeline and intensity-profile polyline for a structure.

The timeline expands repetitions into one row per executed step, laid end
to end from t=0 using step lengths. The polyline is the normalized step
profile drawn by clients: x is the fraction of total time, y the fraction
of the highest target in the workout.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from structure_engine.math.duration import structure_elements
from structure_engine.models.structure import (
    RepetitionElement,
    Structure,
    StructureElement,
)

TIMELINE_COLUMNS = [
    "element_index",
    "iteration",
    "name",
    "intensity_class",
    "begin",
    "end",
    "duration",
    "target_min",
    "target_max",
    "target_mid",
]


def structure_timeline(structure: Structure | Iterable[StructureElement]) -> pd.DataFrame:
    """One row per executed step, with cumulative begin/end offsets.

    Args:
        structure: A Structure or a bare sequence of its elements.

    Returns:
        DataFrame with ``TIMELINE_COLUMNS``; empty (with those columns)
        when there are no steps.
    """
    elements = structure_elements(structure)
    rows = []
    for index, element in enumerate(elements):
        repeats = element.count if isinstance(element, RepetitionElement) else 1
        for iteration in range(repeats):
            for step in element.steps:
                target = step.primary_target
                rows.append({
                    "element_index": index,
                    "iteration": iteration,
                    "name": step.name,
                    "intensity_class": step.intensity_class.value,
                    "duration": float(step.length.value),
                    "target_min": target.min_value if target else 0.0,
                    "target_max": target.max_value if target else 0.0,
                    "target_mid": target.midpoint if target else 0.0,
                })

    frame = pd.DataFrame(rows, columns=[c for c in TIMELINE_COLUMNS if c not in ("begin", "end")])
    frame["end"] = frame["duration"].cumsum()
    frame["begin"] = frame["end"] - frame["duration"]
    return frame[TIMELINE_COLUMNS]


def build_polyline(
    structure: Structure | Iterable[StructureElement],
) -> tuple[tuple[float, float], ...]:
    """Normalized step-profile polyline ``((x, y), ...)`` for a structure.

    Each executed step becomes a flat segment at ``target_mid / peak``
    between its begin and end fractions, joined by vertical edges.
    Returns ``()`` when there is nothing to draw.
    """
    timeline = structure_timeline(structure)
    total = float(timeline["duration"].sum()) if not timeline.empty else 0.0
    peak = float(timeline["target_max"].max()) if not timeline.empty else 0.0
    if total <= 0 or peak <= 0:
        return ()

    x_begin = (timeline["begin"] / total).round(4)
    x_end = (timeline["end"] / total).round(4)
    level = (timeline["target_mid"] / peak).round(4)

    points: list[tuple[float, float]] = [(0.0, 0.0)]
    for start, stop, y in zip(x_begin, x_end, level):
        points.append((float(start), float(y)))
        points.append((float(stop), float(y)))
    points.append((1.0, 0.0))
    return tuple(points)
