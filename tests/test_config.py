"""Tests for environment-variable settings."""

from __future__ import annotations

import pytest

from structure_engine.config import (
    ACTIVITY_TYPE_ENV,
    ATHLETE_WEIGHT_ENV,
    AVERAGE_SPEED_ENV,
    EngineSettings,
    load_settings,
)
from structure_engine.errors import ValidationError
from structure_engine.models.enums import ActivityType


class TestLoadSettings:
    def test_defaults_when_unset(self) -> None:
        assert load_settings({}) == EngineSettings()
        assert EngineSettings().athlete_weight_kg == 70.0
        assert EngineSettings().activity_type == ActivityType.RUN
        assert EngineSettings().average_speed_kmh == 25.0

    def test_values_read_from_mapping(self) -> None:
        settings = load_settings({
            ATHLETE_WEIGHT_ENV: "62.5",
            ACTIVITY_TYPE_ENV: "bike",
            AVERAGE_SPEED_ENV: "32",
        })
        assert settings == EngineSettings(62.5, ActivityType.BIKE, 32.0)

    def test_reads_os_environ_by_default(self, monkeypatch) -> None:
        monkeypatch.setenv(ATHLETE_WEIGHT_ENV, "80")
        monkeypatch.delenv(ACTIVITY_TYPE_ENV, raising=False)
        monkeypatch.delenv(AVERAGE_SPEED_ENV, raising=False)
        assert load_settings().athlete_weight_kg == 80.0

    def test_blank_value_keeps_default(self) -> None:
        assert load_settings({ATHLETE_WEIGHT_ENV: "  "}).athlete_weight_kg == 70.0

    @pytest.mark.parametrize("raw", ["heavy", "0", "-3", "nan"])
    def test_invalid_weight_rejected(self, raw) -> None:
        with pytest.raises(ValidationError) as exc:
            load_settings({ATHLETE_WEIGHT_ENV: raw})
        assert exc.value.field == ATHLETE_WEIGHT_ENV

    def test_invalid_activity_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must be one of BIKE, RUN, SWIM, OTHER"):
            load_settings({ACTIVITY_TYPE_ENV: "rowing"})
