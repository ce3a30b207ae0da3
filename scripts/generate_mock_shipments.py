import pandas as pd
import numpy as np
from datetime import datetime, timedelta

CITIES = ["Lilongwe", "Blantyre", "Mzuzu", "Zomba", "Kasungu", "Mangochi", "Salima", "Karonga"]
CARGO = ["general", "food", "maize", "tobacco", "fertilizer", "cement", "livestock"]


def generate_mock_shipments(num_shipments=200, output_file="sampledata/shipments.csv"):
    """
    Generates a dataset of posted loads for exercising the matching engine.
    The Lilongwe-Blantyre corridor is over-represented, as on the real M1,
    so plenty of return-leg (backhaul) matches show up.
    """
    # Corridor weights: first two cities get most of the traffic
    city_p = np.array([0.3, 0.3, 0.1, 0.08, 0.08, 0.06, 0.04, 0.04])

    data = []
    now = datetime.now()

    for shipment_index in range(num_shipments):
        origin, destination = np.random.choice(CITIES, size=2, replace=False, p=city_p)

        data.append({
            "shipment_id": f"s_{str(shipment_index+1).zfill(5)}",
            "origin": origin,
            "destination": destination,
            "weight_kg": int(np.random.choice([500, 1500, 3000, 5000, 8000, 12000, 18000])),
            "cargo_category": np.random.choice(CARGO),
            "price": int(np.round(np.random.uniform(40_000, 900_000), -3)),
            "pickup_date": (now + timedelta(days=int(np.random.randint(0, 21)))).date().isoformat(),
            "status": "posted",
            "border_crossing_required": bool(np.random.random() < 0.05),
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_shipments} shipments and saved to '{output_file}'")

    # Quick preview of corridor density
    print("\nTop 5 Corridors:")
    counts = (df["origin"] + " -> " + df["destination"]).value_counts().head(5)
    for name, count in counts.items():
        print(f"  {name}: {count} loads")


if __name__ == "__main__":
    generate_mock_shipments()
