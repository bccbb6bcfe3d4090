"""
Student seeding script - registers students from a JSON file via the API.

The file holds a list of objects with name, floor_no and page_no. Each one
is sent to POST /api/students/register. Registration does not check for
duplicates, so running this twice registers everyone twice.

Usage:
    python seed_students.py                                   # sample_students.json, default URL
    python seed_students.py http://localhost:5000             # Custom API URL
    python seed_students.py http://localhost:5000 my.json     # Custom data file
"""

import json
import sys
import os

import httpx

DEFAULT_DATA_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "sample_students.json")


def load_students(client: httpx.Client, students: list) -> dict:
    """
    Register each student through ``client`` and summarise the outcome.

    ``client`` must have its base_url pointing at the API. Failed
    registrations are reported, not raised.
    """
    registered = []
    failed = []
    for student in students:
        resp = client.post("/api/students/register", json=student)
        if resp.status_code == 200:
            registered.append({**student, "student_id": resp.json()["studentId"]})
        else:
            try:
                reason = resp.json().get("message", resp.text)
            except ValueError:
                reason = resp.text
            failed.append({**student, "status_code": resp.status_code, "reason": reason})
    return {"total": len(students), "registered": registered, "failed": failed}


def main():
    api_url = sys.argv[1] if len(sys.argv) > 1 else os.getenv("API_URL", "http://localhost:5000")
    data_file = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_DATA_FILE

    if not os.path.exists(data_file):
        print(f"Error: Could not find {data_file}")
        sys.exit(1)

    print(f"Loading students from: {data_file}")
    with open(data_file, 'r') as f:
        students = json.load(f)

    print(f"Registering {len(students)} students at {api_url}")
    with httpx.Client(base_url=api_url, timeout=30.0) as client:
        summary = load_students(client, students)

    print("=" * 60)
    print(f"  Registered: {len(summary['registered'])}")
    print(f"  Failed:     {len(summary['failed'])}")
    print("=" * 60)
    for s in summary["registered"]:
        print(f"  ✅ {s['name']} (floor {s['floor_no']}, page {s['page_no']}) -> id {s['student_id']}")
    for s in summary["failed"]:
        print(f"  ❌ {s.get('name')}: {s['status_code']} {s['reason']}")

    if summary["failed"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
