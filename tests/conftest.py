import pytest

from telemetry_sampling.synthetic import make_battery_readings


@pytest.fixture
def small_readings() -> list[dict]:
    """50 battery readings, below every default threshold."""
    return make_battery_readings(50)


@pytest.fixture
def large_readings() -> list[dict]:
    """2,000 battery readings, one per minute."""
    return make_battery_readings(2_000)


@pytest.fixture
def huge_readings() -> list[dict]:
    """10,000 battery readings, one per minute."""
    return make_battery_readings(10_000)
