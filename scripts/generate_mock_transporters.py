import csv
import random

CITIES = ["Lilongwe", "Blantyre", "Mzuzu", "Zomba", "Kasungu", "Mangochi", "Salima", "Karonga"]

VEHICLES = {
    # vehicle type -> capacity kg
    "canter": 3500,
    "small_truck": 5000,
    "medium_truck": 10000,
    "large_truck": 20000,
    "flatbed": 25000,
    "refrigerated": 15000,
}


def generate_mock_transporters(filename="sampledata/transporters.csv", count=100):
    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow([
            "transporter_id", "name", "verified", "rating_average", "rating_count",
            "vehicle_type", "vehicle_capacity_kg", "vehicle_plate", "current_location",
            "route_experience_count", "return_routes", "is_available",
        ])

        for i in range(count):
            transporter_id = f"TRN-{str(i+1).zfill(3)}"
            vehicle_type = random.choice(list(VEHICLES))

            # Roughly a third have no ratings yet (cold start)
            rating_count = 0 if random.random() < 0.3 else random.randint(1, 60)
            rating_average = round(random.uniform(2.5, 5.0), 1) if rating_count else 0.0

            # Up to two historic legs, stored as "Origin>Destination|Origin>Destination"
            legs = []
            for _ in range(random.randint(0, 2)):
                a, b = random.sample(CITIES, 2)
                legs.append(f"{a}>{b}")

            writer.writerow([
                transporter_id,
                f"Driver {i+1}",
                random.random() < 0.6,
                rating_average,
                rating_count,
                vehicle_type,
                VEHICLES[vehicle_type],
                f"{random.choice(['LL', 'BT', 'MZ', 'ZA'])} {random.randint(1000, 9999)}",
                random.choice(CITIES),
                random.choice([0, 0, 0, 1, 3, 6, 12]),
                "|".join(legs),
                random.random() < 0.85,
            ])

    print(f"Successfully generated {count} mock transporters into '{filename}'.")


if __name__ == "__main__":
    generate_mock_transporters()
