"""
Fake trip generator for local development
Writes the five demo trip event logs into TRIPS_DATA_DIR
"""

import json
import os
import random
import sys
import uuid
from datetime import datetime, timedelta, timezone

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fleet_tracking.config import settings

SIM_START = datetime(2025, 11, 3, 8, 0, tzinfo=timezone.utc)

# filename, trip number, start offset (min), planned km, waypoints, outcome
TRIPS = [
    ("trip_1_cross_country.json", 1, 0, 4500.0, 60, "completed"),
    ("trip_2_urban_dense.json", 2, 30, 85.0, 40, "completed"),
    ("trip_3_mountain_cancelled.json", 3, 60, 620.0, 30, "cancelled"),
    ("trip_4_southern_technical.json", 4, 15, 1300.0, 45, "technical"),
    ("trip_5_regional_logistics.json", 5, 45, 410.0, 35, "in_progress"),
]


def make_event(trip_no, event_type, timestamp, lat, lng, speed, distance, **extra):
    """Build one event record"""
    event = {
        "event_id": str(uuid.uuid4()),
        "event_type": event_type,
        "timestamp": timestamp.isoformat().replace("+00:00", "Z"),
        "vehicle_id": f"VH_{trip_no:03d}",
        "trip_id": f"trip_{trip_no}",
        "device_id": f"DEV_{trip_no:03d}",
        "location": {"lat": round(lat, 6), "lng": round(lng, 6)},
        "movement": {
            "speed_kmh": round(speed, 1),
            "heading_degrees": round(random.uniform(0, 360), 1),
            "moving": speed > 0.5,
        },
        "distance_travelled_km": round(distance, 2),
        "signal_quality": random.choice(["excellent", "good", "fair"]),
        "device": {
            "battery_level": random.randint(20, 100),
            "charging": random.random() < 0.3,
        },
    }
    event.update(extra)
    return event


def generate_trip(trip_no, start_offset, planned_km, waypoints, outcome):
    """Simulate one trip as a list of events"""
    lat = random.uniform(30.0, 45.0)
    lng = random.uniform(-120.0, -75.0)
    timestamp = SIM_START + timedelta(minutes=start_offset)
    step_km = planned_km / waypoints
    distance = 0.0

    events = [make_event(
        trip_no, "trip_started", timestamp, lat, lng, 0.0, 0.0,
        planned_distance_km=planned_km,
    )]

    # Cancelled trips stop about halfway; unfinished ones stop short
    stop_at = waypoints
    if outcome == "cancelled":
        stop_at = waypoints // 2
    elif outcome == "in_progress":
        stop_at = int(waypoints * 0.7)

    for i in range(1, stop_at + 1):
        timestamp += timedelta(minutes=random.randint(5, 15))
        lat += random.uniform(-0.05, 0.05)
        lng += random.uniform(0.02, 0.08)
        speed = random.uniform(40, 110)
        distance = min(planned_km, distance + step_km * random.uniform(0.8, 1.2))
        events.append(make_event(trip_no, "vehicle_telemetry", timestamp, lat, lng, speed, distance))

        roll = random.random()
        if speed > 100:
            events.append(make_event(
                trip_no, "speed_violation", timestamp, lat, lng, speed, distance,
                speed_limit_kmh=90, severity="medium",
            ))
        elif roll < 0.05:
            events.append(make_event(trip_no, "battery_low", timestamp, lat, lng, speed, distance))
        elif roll < 0.08:
            events.append(make_event(trip_no, "signal_lost", timestamp, lat, lng, speed, distance))
            events.append(make_event(
                trip_no, "signal_recovered", timestamp + timedelta(minutes=2), lat, lng, speed, distance,
            ))

        if outcome == "technical" and i % 6 == 0:
            events.append(make_event(
                trip_no, "device_error", timestamp, lat, lng, speed, distance,
                error_message="GPS module timeout",
            ))

    timestamp += timedelta(minutes=5)
    if outcome == "completed":
        completed = make_event(
            trip_no, "trip_completed", timestamp, lat, lng, 0.0, distance,
            total_distance_km=round(distance, 2),
        )
        del completed["distance_travelled_km"]
        events.append(completed)
    elif outcome == "cancelled":
        events.append(make_event(
            trip_no, "trip_cancelled", timestamp, lat, lng, 0.0, distance,
            cancellation_reason="road closure",
        ))

    return events


def generate_all(output_dir):
    """Write every demo trip file to output_dir"""
    os.makedirs(output_dir, exist_ok=True)
    for filename, trip_no, start_offset, planned_km, waypoints, outcome in TRIPS:
        events = generate_trip(trip_no, start_offset, planned_km, waypoints, outcome)
        path = os.path.join(output_dir, filename)
        with open(path, "w") as f:
            json.dump(events, f, indent=2)
        print(f"  {filename}: {len(events)} events ({outcome})")


if __name__ == "__main__":
    output_dir = sys.argv[1] if len(sys.argv) > 1 else settings.TRIPS_DATA_DIR
    random.seed(42)
    print(f"Writing fake trips to {output_dir}...")
    generate_all(output_dir)
    print("Done!")
