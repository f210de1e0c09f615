"""
Seed demo citizen reports by POSTing them to the /reports API, then print the clusters.

Run with the API already running (python run_api.py). Optionally set CIVIC_API_URL in env.
Reports are backdated a few hours apart so some fall inside the clustering time window and some don't.
Usage: python seed_demo_reports.py
"""

import os
from datetime import datetime, timedelta, timezone

import httpx

CIVIC_API_URL = (os.environ.get("CIVIC_API_URL") or "http://localhost:8000").rstrip("/")

# (description, lon, lat, hours_ago)
DEMO_REPORTS = [
    # Pothole cluster on one street
    ("Huge pothole on main road near bus stop", 80.2707, 13.0827, 1),
    ("Pothole on main road near the bus stop is getting worse", 80.2709, 13.0829, 3),
    ("Big pothole main road bus stop", 80.2711, 13.0825, 6),
    # Garbage overflow at a market
    ("Garbage overflow at the vegetable market", 80.2500, 13.0600, 2),
    ("Garbage overflow near vegetable market entrance", 80.2503, 13.0602, 5),
    # Fallen tree, reported once
    ("Fallen tree blocking road after storm", 80.2200, 13.0400, 4),
    # Same words as the pothole cluster but far away
    ("Huge pothole on main road near bus stop", 80.9000, 13.9000, 2),
    # Leak reported two days apart (only clusters with CLUSTER_PROFILE=loose)
    ("Water pipe leak flooding the lane", 80.2300, 13.0500, 1),
    ("Water pipe leak flooding the lane again", 80.2301, 13.0501, 31),
    # No coordinates
    ("Streetlight not working", None, None, 2),
]


def main():
    print(f"Seeding {len(DEMO_REPORTS)} demo reports via {CIVIC_API_URL}/reports")
    now = datetime.now(timezone.utc)
    client = httpx.Client(timeout=30.0)
    try:
        for i, (description, lon, lat, hours_ago) in enumerate(DEMO_REPORTS):
            payload = {
                "description": description,
                "author_name": "Demo seed",
                "created_at": (now - timedelta(hours=hours_ago)).isoformat(),
            }
            if lon is not None and lat is not None:
                payload["longitude"] = lon
                payload["latitude"] = lat
            r = client.post(f"{CIVIC_API_URL}/reports", json=payload)
            if r.is_success:
                data = r.json()
                print(f"  [{i+1}/{len(DEMO_REPORTS)}] id={data['id']} priority={data['priority_label']}")
            else:
                print(f"  [{i+1}/{len(DEMO_REPORTS)}] FAILED {r.status_code} {r.text[:200]}")

        r = client.get(f"{CIVIC_API_URL}/clusters")
        r.raise_for_status()
        clusters = r.json()["clusters"]
        print(f"{len(clusters)} clusters:")
        for c in clusters:
            print(f"  {c['cluster_id']} dept={c['recommended_department']} issues={len(c['issues'])} "
                  f"main={c['main_report']['description']!r}")
    finally:
        client.close()


if __name__ == "__main__":
    main()
