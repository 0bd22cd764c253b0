#!/usr/bin/env python3
"""
Booking and review flow script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Usage:
    python scripts/flow_book_and_review.py --port-id 1 --timeslot "2026-11-01T14:00:00"
    python scripts/flow_book_and_review.py --port-id 2 --timeslot "2026-11-01T09:30:00" --reject

Flow:
    1. Find the port's station
    2. Show availability for the day
    3. Create booking
    4. Show availability again
    5. Accept (or reject) the booking
    6. Try to change it a second time (expected to fail)
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

import httpx

BASE_URL = "http://localhost:8000"
TOKEN_FILE = Path(__file__).parent.parent / ".token"


def get_token() -> str:
    """Read stored access token."""
    if not TOKEN_FILE.exists():
        print("ERROR: No token found. Run create_user.py first.")
        sys.exit(1)
    return TOKEN_FILE.read_text().strip()


def api_request(token: str | None, method: str, endpoint: str, data: dict | None = None) -> dict:
    """Make an API request, authenticated when a token is given."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    url = f"{BASE_URL}{endpoint}"

    if method == "GET":
        response = httpx.get(url, headers=headers, timeout=10.0, follow_redirects=True)
    elif method == "POST":
        response = httpx.post(url, headers=headers, json=data or {}, timeout=10.0, follow_redirects=True)
    elif method == "PUT":
        response = httpx.put(url, headers=headers, json=data or {}, timeout=10.0, follow_redirects=True)
    else:
        raise ValueError(f"Unknown method: {method}")

    return {"status": response.status_code, "data": response.json() if response.text else {}}


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None):
    """Print result, optionally filtering fields."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['data'], indent=2)}")
        return False

    print(f"Status: {result['status']}")
    if fields:
        filtered = {k: result["data"].get(k) for k in fields if k in result["data"]}
        print(json.dumps(filtered, indent=2))
    else:
        print(json.dumps(result["data"], indent=2))
    return True


def find_station_id(port_id: int) -> int:
    """Look up the station owning a port from the public station list."""
    stations = api_request(None, "GET", "/api/v1/stations")["data"].get("stations", [])
    for station in stations:
        for port in station["ports"]:
            if port["id"] == port_id:
                return station["id"]
    print(f"ERROR: Port {port_id} not found on any active station")
    sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description="Booking and review flow")
    parser.add_argument("--port-id", type=int, required=True, help="Port ID")
    parser.add_argument("--timeslot", required=True, help="Slot start, e.g. 2026-11-01T14:00:00")
    parser.add_argument("--reject", action="store_true", help="Reject instead of accept")
    args = parser.parse_args()

    token = get_token()
    day = datetime.fromisoformat(args.timeslot).date().isoformat()

    # Step 1: Resolve station
    print_step(1, "Resolve station")
    station_id = find_station_id(args.port_id)
    print(f"Port {args.port_id} belongs to station {station_id}")

    # Step 2: Availability before booking
    print_step(2, f"Availability for {day}")
    availability = api_request(None, "GET", f"/api/v1/ports/{args.port_id}/availability?date={day}")
    if not print_result(availability, ["date", "booked_slots"]):
        sys.exit(1)

    # Step 3: Create booking
    print_step(3, "Create booking")
    booking_result = api_request(token, "POST", "/api/v1/bookings", {
        "station_id": station_id,
        "port_id": args.port_id,
        "timeslot": args.timeslot,
    })
    if not print_result(booking_result, ["id", "timeslot", "status"]):
        sys.exit(1)
    booking_id = booking_result["data"]["id"]

    # Step 4: Availability after booking
    print_step(4, f"Availability for {day} after booking")
    availability = api_request(None, "GET", f"/api/v1/ports/{args.port_id}/availability?date={day}")
    if not print_result(availability, ["date", "booked_slots"]):
        sys.exit(1)

    # Step 5: Review
    decision = "Rejected" if args.reject else "Accepted"
    print_step(5, f"Mark booking {decision}")
    review_result = api_request(token, "PUT", f"/api/v1/bookings/{booking_id}/status", {
        "status": decision,
        "admin_notes": "Reviewed by flow script",
    })
    if not print_result(review_result, ["id", "status", "admin_notes"]):
        sys.exit(1)

    # Step 6: Second review must be refused
    print_step(6, "Second review (expected to fail)")
    second = api_request(token, "PUT", f"/api/v1/bookings/{booking_id}/status", {"status": "Rejected"})
    print_result(second)

    print("\n" + "="*60)
    print("FLOW COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
