"""Print the printer state a few times, reusing the cached snapshot in between."""

import os
import time

from prusa.link.client import PrusaLinkClient, RefreshPolicy

client = PrusaLinkClient(
    os.environ["PRUSALINK_ADDRESS"],
    os.environ["PRUSALINK_API_KEY"],
    refresh_policy=RefreshPolicy.time_to_live(2),
)

with client:
    for _ in range(5):
        snapshot = client.get_snapshot()
        print(f"{snapshot.state_text}: nozzle {snapshot.telemetry.nozzle_temp}°C, bed {snapshot.telemetry.bed_temp}°C")
        time.sleep(1)
