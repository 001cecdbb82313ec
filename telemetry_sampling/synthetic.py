import datetime as dt

import numpy as np
import pandas as pd


def make_battery_readings(
    n: int,
    start: dt.datetime = dt.datetime(2024, 1, 1, 0, 0, 0),
    step_seconds: float = 60.0,
    seed: int = 42,
) -> list[dict]:
    """
    Relevés batterie synthétiques {timestamp ISO, voltage, temperature}, triés par temps.

    Décharge lente + ondulation + bruit, température suivant un cycle jour/nuit.
    """
    rng = np.random.default_rng(seed)
    t = np.arange(n, dtype=np.float64)

    timestamps = pd.date_range(start=start, periods=n, freq=pd.Timedelta(seconds=step_seconds))

    # --- signaux
    voltage = 12.6 - 1.2 * t / max(n - 1, 1) + 0.05 * np.sin(2 * np.pi * t / 240) + 0.01 * rng.standard_normal(n)
    day = 86400.0 / step_seconds
    temperature = 25 + 4 * np.sin(2 * np.pi * t / day) + 0.3 * rng.standard_normal(n)

    return [
        {
            "timestamp": ts.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "voltage": round(float(v), 4),
            "temperature": round(float(c), 2),
        }
        for ts, v, c in zip(timestamps, voltage, temperature)
    ]
