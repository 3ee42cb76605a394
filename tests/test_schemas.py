"""Tests for workout input validation."""

import pytest
from pydantic import ValidationError

from sport_tracker.database.models import WorkoutType
from sport_tracker.schemas import WorkoutInput, parse_custom_duration


def test_valid_input():
    data = WorkoutInput(type=WorkoutType.TENNIS, duration_minutes=60)
    assert data.type == WorkoutType.TENNIS
    assert data.duration_minutes == 60


def test_type_from_string():
    assert WorkoutInput(type="YOGA", duration_minutes=30).type == WorkoutType.YOGA


@pytest.mark.parametrize("minutes", [0, -5, 1441])
def test_out_of_range_duration_rejected(minutes):
    with pytest.raises(ValidationError):
        WorkoutInput(type=WorkoutType.GYM, duration_minutes=minutes)


def test_unknown_type_rejected():
    with pytest.raises(ValidationError):
        WorkoutInput(type="CHESS", duration_minutes=30)


@pytest.mark.parametrize("text,expected", [("75", 75), (" 1 ", 1), ("1440", 1440)])
def test_parse_custom_duration(text, expected):
    assert parse_custom_duration(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "0", "1441", "-10", "7.5", "45 min"])
def test_parse_custom_duration_rejects(text):
    with pytest.raises(ValueError):
        parse_custom_duration(text)
