"""Environment-variable-based defaults for planning workouts.

Nothing reads the environment at import time; call ``load_settings()``
where the defaults are needed and pass the values on explicitly.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from structure_engine.errors import ValidationError
from structure_engine.models.enums import (
    DEFAULT_ATHLETE_WEIGHT_KG,
    DEFAULT_AVERAGE_SPEED_KMH,
    ActivityType,
)

ATHLETE_WEIGHT_ENV = "STRUCTURE_ENGINE_ATHLETE_WEIGHT_KG"
ACTIVITY_TYPE_ENV = "STRUCTURE_ENGINE_ACTIVITY_TYPE"
AVERAGE_SPEED_ENV = "STRUCTURE_ENGINE_AVERAGE_SPEED_KMH"


@dataclass(frozen=True)
class EngineSettings:
    """Defaults applied when a caller does not supply its own values.

    Attributes:
        athlete_weight_kg: Body mass used for TSS and calorie estimates.
        activity_type: Sport used for velocity and calorie baselines.
        average_speed_kmh: Speed used to time distance-based steps.
    """

    athlete_weight_kg: float = DEFAULT_ATHLETE_WEIGHT_KG
    activity_type: ActivityType = ActivityType.RUN
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH


def load_settings(environ: Mapping[str, str] | None = None) -> EngineSettings:
    """Read EngineSettings from ``environ`` (``os.environ`` by default).

    Unset variables keep their defaults.

    Raises:
        ValidationError: If a variable is set to an unusable value.
    """
    env = os.environ if environ is None else environ
    defaults = EngineSettings()

    activity = env.get(ACTIVITY_TYPE_ENV, defaults.activity_type.value).strip().upper()
    try:
        activity_type = ActivityType(activity)
    except ValueError:
        raise ValidationError(
            f"{ACTIVITY_TYPE_ENV} must be one of "
            f"{', '.join(a.value for a in ActivityType)}, got {activity!r}",
            field="activityType",
        ) from None

    return EngineSettings(
        athlete_weight_kg=_positive_float(env, ATHLETE_WEIGHT_ENV, defaults.athlete_weight_kg),
        activity_type=activity_type,
        average_speed_kmh=_positive_float(env, AVERAGE_SPEED_ENV, defaults.average_speed_kmh),
    )


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number, got {raw!r}", field=name) from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be a positive number, got {raw!r}", field=name)
    return value
