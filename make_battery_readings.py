import json
import sys

from telemetry_sampling.synthetic import make_battery_readings

N = int(sys.argv[1]) if len(sys.argv) > 1 else 10_000   # 10 k relevés, 1 par minute

readings = make_battery_readings(N)

# Corps prêt pour POST /sample
with open("battery_readings.json", "w", encoding="utf-8") as f:
    json.dump({"readings": readings, "threshold": 500}, f)

print(f"OK -> battery_readings.json ({N} relevés)")
