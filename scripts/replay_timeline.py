"""
Timeline replay client
Logs in, then steps simTime across the simulation window and prints fleet metrics
"""

import argparse
import time

import requests

API_URL = "http://localhost:5000"  # Change to your deployment
USERNAME = "admin"
PASSWORD = "admin"


def login(session, api_url, username, password):
    """Fetch a bearer token and attach it to the session"""
    response = session.post(
        f"{api_url}/api/auth/login",
        data={"username": username, "password": password},
        timeout=5,
    )
    response.raise_for_status()
    token = response.json()["access_token"]
    session.headers["Authorization"] = f"Bearer {token}"


def replay(api_url, steps, delay, username, password):
    """Walk the simulation window in equal steps"""
    session = requests.Session()
    login(session, api_url, username, password)

    window = session.get(f"{api_url}/api/simulation/window", timeout=5)
    window.raise_for_status()
    bounds = window.json()
    start, end = bounds["startTime"], bounds["endTime"]
    print(f"Replaying {bounds['tripCount']} trips from {start} to {end} in {steps} steps")

    for i in range(steps + 1):
        sim_time = start + (end - start) * i // steps
        response = session.get(f"{api_url}/api/metrics/fleet", params={"simTime": sim_time}, timeout=5)
        response.raise_for_status()
        m = response.json()
        print(
            f"  [{i:>3}] active={m['activeTrips']} completed={m['completedTrips']} "
            f"cancelled={m['cancelledTrips']} technical={m['technicalIssuesTrips']} "
            f"distance={m['totalDistance']:.1f} km avg_speed={m['averageSpeed']:.1f} km/h "
            f"alerts={m['totalAlerts']}"
        )
        time.sleep(delay)

    print("\nReplay complete!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--api-url", default=API_URL)
    parser.add_argument("--steps", type=int, default=20)
    parser.add_argument("--delay", type=float, default=0.5)
    parser.add_argument("--username", default=USERNAME)
    parser.add_argument("--password", default=PASSWORD)
    args = parser.parse_args()

    try:
        replay(args.api_url, args.steps, args.delay, args.username, args.password)
    except requests.exceptions.RequestException as e:
        print(f"Error talking to the API: {e}")
        raise SystemExit(1)
