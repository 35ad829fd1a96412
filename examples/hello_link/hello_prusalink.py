"""Hello PrusaLink example."""

import os

from prusa.link.client import PrusaLinkClient

client = PrusaLinkClient(os.environ["PRUSALINK_ADDRESS"], os.environ["PRUSALINK_API_KEY"])

print(f"PrusaLink {client.get_version_info().server}")
print(f"State: {client.get_state_text()} ({client.get_link_state()})")
print(f"  Nozzle: {client.get_nozzle_temp()}°C (target {client.get_target_nozzle_temp()}°C)")
print(f"  Bed: {client.get_bed_temp()}°C (target {client.get_target_bed_temp()}°C)")

local = client.get_local_storage()
if local:
    print(f"  Free space: {local.free_space} of {local.total_space} bytes")
