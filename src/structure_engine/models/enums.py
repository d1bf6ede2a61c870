"""Enumerations and numeric constants for the structured-workout core.

Enum values are the exact strings used on the TrainingPeaks wire format, so a
member can be serialized with ``member.value`` and parsed with ``Enum(value)``.
"""

from enum import Enum


class LengthUnit(str, Enum):
    """Unit of a step or element length."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    REPETITION = "repetition"
    METER = "meter"
    KILOMETER = "kilometer"
    MILE = "mile"


class IntensityClass(str, Enum):
    """Training purpose of a step."""

    ACTIVE = "active"
    REST = "rest"
    WARM_UP = "warmUp"
    COOL_DOWN = "coolDown"


class ElementType(str, Enum):
    """Variant tag of a structure element."""

    STEP = "step"
    REPETITION = "repetition"


class LengthMetric(str, Enum):
    """Whether a structure is primarily measured in time or distance."""

    DURATION = "duration"
    DISTANCE = "distance"


class IntensityMetric(str, Enum):
    """Metric in which step targets are expressed."""

    PERCENT_OF_THRESHOLD_PACE = "percentOfThresholdPace"
    PERCENT_OF_THRESHOLD_POWER = "percentOfThresholdPower"
    HEART_RATE = "heartRate"
    POWER = "power"
    PACE = "pace"
    SPEED = "speed"

    @property
    def is_percent_based(self) -> bool:
        return self in _PERCENT_METRICS


_PERCENT_METRICS = frozenset({
    IntensityMetric.PERCENT_OF_THRESHOLD_PACE,
    IntensityMetric.PERCENT_OF_THRESHOLD_POWER,
})


class IntensityTargetType(str, Enum):
    """Whether targets are shown as a single value or a range."""

    TARGET = "target"
    RANGE = "range"


class ActivityType(str, Enum):
    """Sport used to pick velocity and calorie-burn baselines."""

    BIKE = "BIKE"
    RUN = "RUN"
    SWIM = "SWIM"
    OTHER = "OTHER"


# ---------------------------------------------------------------------------
# Length conversion
# ---------------------------------------------------------------------------
TIME_UNIT_SECONDS = {
    LengthUnit.SECOND: 1.0,
    LengthUnit.MINUTE: 60.0,
    LengthUnit.HOUR: 3600.0,
}

DISTANCE_UNIT_METERS = {
    LengthUnit.METER: 1.0,
    LengthUnit.KILOMETER: 1000.0,
    LengthUnit.MILE: 1609.344,
}

# Assumed speed for timing distance-based elements in the structure builder
DEFAULT_AVERAGE_SPEED_KMH = 25.0

# ---------------------------------------------------------------------------
# Validation limits
# ---------------------------------------------------------------------------
MIN_INTENSITY_PCT = 0.0
MAX_INTENSITY_PCT = 100.0
MAX_STEP_NAME_LENGTH = 100
MAX_WORKOUT_NAME_LENGTH = 255
MAX_WORKOUT_DURATION_S = 86400      # 24 hours
MAX_WORKOUT_DISTANCE_M = 1_000_000  # 1000 km

# Advisory only: rest steps whose target floor reaches this are logged
ACTIVE_TARGET_FLOOR_PCT = 75.0

# ---------------------------------------------------------------------------
# Template step targets (% of threshold)
# ---------------------------------------------------------------------------
INTENSITY_WINDOW_HALF_WIDTH = 5.0
WARMUP_TARGET = (45.0, 55.0)
COOLDOWN_TARGET = (35.0, 45.0)
RECOVERY_TARGET = (55.0, 65.0)

# ---------------------------------------------------------------------------
# Planned metrics
# ---------------------------------------------------------------------------
DEFAULT_ATHLETE_WEIGHT_KG = 70.0
REFERENCE_ATHLETE_WEIGHT_KG = 70.0

# Baseline velocity by activity (m/s)
BASE_VELOCITY_M_S = {
    ActivityType.BIKE: 8.33,   # ~30 km/h
    ActivityType.RUN: 3.33,    # ~12 km/h
    ActivityType.SWIM: 1.11,   # ~4 km/h
    ActivityType.OTHER: 2.78,  # ~10 km/h
}

# Calorie burn by activity (cal/kg/hour)
CALORIE_BURN_RATE = {
    ActivityType.BIKE: 400,
    ActivityType.RUN: 600,
    ActivityType.SWIM: 500,
    ActivityType.OTHER: 300,
}

VELOCITY_BASE_FRACTION = 0.7    # velocity spans 70-130% of base
VELOCITY_IF_FRACTION = 0.6
CALORIE_BASE_FRACTION = 0.8     # calories span 80-120% of base
CALORIE_IF_FRACTION = 0.4
ELEVATION_GAIN_M_PER_HOUR = 100.0
KJ_PER_CALORIE = 4.184
