"""
Refresh sampledata/city_distances.csv from OSRM road distances.

Usage:
    OSRM_BASE_URL=http://router.project-osrm.org python -m scripts.build_distance_table
"""

from itertools import combinations

import pandas as pd

from routing.osrm_client import OSRMClient, OSRMError

# Approximate town-centre coordinates (lat, lon)
CITY_COORDINATES = {
    "Lilongwe": (-13.9626, 33.7741),
    "Blantyre": (-15.7861, 35.0058),
    "Mzuzu": (-11.4656, 34.0207),
    "Zomba": (-15.3860, 35.3188),
    "Kasungu": (-13.0333, 33.4833),
    "Mangochi": (-14.4782, 35.2645),
    "Salima": (-13.7804, 34.4587),
    "Karonga": (-9.9333, 33.9333),
}


def build_distance_table(output_file="sampledata/city_distances.csv"):
    client = OSRMClient()
    rows = []

    for origin, destination in combinations(sorted(CITY_COORDINATES), 2):
        try:
            km = client.road_distance_km(CITY_COORDINATES[origin], CITY_COORDINATES[destination])
        except OSRMError as e:
            print(f"  skipped {origin} -> {destination}: {e}")
            continue
        rows.append({"origin": origin, "destination": destination, "distance_km": round(km)})
        print(f"  {origin} -> {destination}: {round(km)} km")

    pd.DataFrame(rows).to_csv(output_file, index=False)
    print(f"Wrote {len(rows)} city pairs to '{output_file}'")


if __name__ == "__main__":
    build_distance_table()
