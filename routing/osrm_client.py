#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return road distances between cities.
#Used offline by scripts/build_distance_table.py to refresh the city-pair table;
#the matching engine itself never performs I/O.
#It should not contain matching rules or scoring.


from dotenv import load_dotenv
import os
from typing import Dict, List, Tuple
import requests

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=http://router.project-osrm.org
load_dotenv()

# Internal coordinate type: (lat, lon)
LatLon = Tuple[float, float]


class OSRMError(Exception):
    """Custom exception for OSRM client errors."""
    pass


class OSRMClient:
    """
    OSRM Adapter / Client

    - Talk to OSRM via HTTP
    - Convert internal (lat, lon) -> OSRM (lon,lat)
    - Return normalized outputs (km / seconds)
    """
    def __init__(self, base_url: str = None, profile: str = "driving", timeout: int = 5):
        self.base_url = base_url or os.getenv("OSRM_BASE_URL")
        self.timeout = timeout
        self.profile = profile

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    def format_coordinates(self, coords: List[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join([f"{lon},{lat}" for lat, lon in coords])

    def compute_route(self, coordinates: List[LatLon]) -> Dict[str, float]:
        """
        Calls the OSRM /route endpoint and returns
            {
                "distance_km": float,
                "duration_s": float,
            }
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coordinates)}"

        response = requests.get(
            url,
            params={"overview": "false"},  # geometry is not needed
            timeout=self.timeout,
        )

        data = response.json()

        if data.get("code") != "Ok":
            raise OSRMError(f"OSRM error: {data.get('message', 'Unknown error')}")

        route = data["routes"][0]

        return {
            "distance_km": route["distance"] / 1000.0,
            "duration_s": route["duration"],
        }

    def road_distance_km(self, origin: LatLon, destination: LatLon) -> float:
        return self.compute_route([origin, destination])["distance_km"]
