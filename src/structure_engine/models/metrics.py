"""Planned metrics record — the output of the metrics engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlannedMetrics:
    """Planned training metrics derived from a Structure.

    A computed snapshot; recompute from a new Structure instead of patching.
    Units: hours, TSS points, IF ratio, m/s, kcal, meters, meters, kJ.
    """

    total_time_planned: float = 0.0
    tss_planned: float = 0.0
    if_planned: float = 0.0
    velocity_planned: float = 0.0
    calories_planned: int = 0
    distance_planned: int = 0
    elevation_gain_planned: int = 0
    energy_planned: int = 0
