from fastapi.testclient import TestClient

from telemetry_sampling.main import app
from telemetry_sampling.synthetic import make_battery_readings


client = TestClient(app)


def test_constraints_expose_sampling_defaults():
    response = client.get("/api/constraints")

    assert response.status_code == 200
    payload = response.json()
    assert payload["points"]["default"] == 500
    assert payload["adaptive"] == {"threshold": 500, "target_points": 300}
    assert payload["markers"]["max_points"] == 100


def test_sample_reduces_large_series(large_readings):
    """@brief 2,000 readings at threshold 500 come back as 500 readings (75% reduction)."""
    response = client.post("/sample", json={"readings": large_readings, "threshold": 500})

    assert response.status_code == 200
    payload = response.json()
    assert payload["original_points"] == 2_000
    assert payload["returned_points"] == 500
    assert len(payload["readings"]) == 500
    assert payload["reduction_pct"] == 75.0
    assert payload["show_markers"] is False
    assert payload["x_key"] == "timestamp"
    assert payload["y_key"] == "voltage"
    assert payload["method"] == "lttb"
    assert payload["readings"][0] == large_readings[0]
    assert payload["readings"][-1] == large_readings[-1]


def test_sample_small_series_passes_through(small_readings):
    response = client.post("/sample", json={"readings": small_readings})

    assert response.status_code == 200
    payload = response.json()
    assert payload["readings"] == small_readings
    assert payload["reduction_pct"] == 0.0
    assert payload["show_markers"] is True
    assert payload["x_key"] is None


def test_sample_unresolvable_keys_returns_422():
    readings = [{"date": f"2024-01-01T00:00:{i:02d}Z", "label": "idle"} for i in range(20)]

    response = client.post("/sample", json={"readings": readings, "threshold": 5})

    assert response.status_code == 422
    assert "clé x" in response.json()["detail"]


def test_sample_explicit_keys(large_readings):
    response = client.post(
        "/sample",
        json={"readings": large_readings, "threshold": 100, "y_key": "temperature"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["y_key"] == "temperature"
    assert payload["returned_points"] == 100


def test_sample_uniform_method(large_readings):
    response = client.post("/sample", json={"readings": large_readings, "threshold": 400, "method": "uniform"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["returned_points"] == 400
    assert payload["method"] == "uniform"


def test_sample_adaptive_boundary():
    at_threshold = make_battery_readings(500)
    over_threshold = make_battery_readings(501)

    kept = client.post("/sample", json={"readings": at_threshold, "adaptive": True})
    reduced = client.post("/sample", json={"readings": over_threshold, "adaptive": True})

    assert kept.json()["returned_points"] == 500
    assert reduced.json()["returned_points"] == 300
    assert reduced.json()["show_markers"] is False


def test_sample_adaptive_rejects_uniform(large_readings):
    response = client.post("/sample", json={"readings": large_readings, "adaptive": True, "method": "uniform"})

    assert response.status_code == 422


def test_sample_threshold_above_maximum_is_rejected(small_readings):
    response = client.post("/sample", json={"readings": small_readings, "threshold": 1_000_000})

    assert response.status_code == 422


def test_sample_threshold_below_three_is_clamped(large_readings):
    response = client.post("/sample", json={"readings": large_readings, "threshold": 1})

    assert response.status_code == 200
    assert response.json()["returned_points"] == 3


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["sampling"]["marker_limit"] == 100
