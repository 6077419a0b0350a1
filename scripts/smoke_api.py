#!/usr/bin/env python3
"""Smoke test against a running server: quote, booking wizard and admin status change."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"
ADMIN_HEADERS = {"X-Admin-Token": "change-me"}


def test_quote():
    print("=" * 60)
    print("Testing POST /api/v1/quotes")
    print("=" * 60)

    payload = {
        "name": "Smoke Test",
        "email": "smoke@example.com",
        "event_type": "Festival",
        "expected_attendees": 2500,
        "event_duration_hours": 10,
        "service_level": "enhanced",
    }
    try:
        response = httpx.post(f"{BASE_URL}/api/v1/quotes", json=payload, timeout=10.0)
        response.raise_for_status()
        data = response.json()
        print(f"✅ Quote {data['id']} stored, estimate {data['estimated_quote']}")
        return data["id"]
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None


def test_booking():
    print("\n" + "=" * 60)
    print("Testing booking workflow")
    print("=" * 60)

    try:
        workflow = httpx.post(f"{BASE_URL}/api/v1/bookings/workflows", timeout=10.0).json()
        workflow_id = workflow["workflow_id"]
        print(f"Workflow {workflow_id}, {len(workflow['courses'])} courses")

        for course in workflow["courses"]:
            chosen = httpx.post(
                f"{BASE_URL}/api/v1/bookings/workflows/{workflow_id}/course",
                json={"course_id": course["id"]},
                timeout=10.0,
            ).json()
            print(f"  {course['title']}: {chosen['action']} ({len(chosen['sessions'])} dates)")
            if chosen["sessions"]:
                session = chosen["sessions"][0]
                break
        else:
            print("⚠️  No course has open dates")
            return None

        httpx.post(
            f"{BASE_URL}/api/v1/bookings/workflows/{workflow_id}/session",
            json={"session_id": session["id"]},
            timeout=10.0,
        ).raise_for_status()
        booked = httpx.post(
            f"{BASE_URL}/api/v1/bookings/workflows/{workflow_id}/submit",
            json={"name": "Smoke Test", "email": "smoke@example.com", "participants": 1},
            timeout=10.0,
        ).json()
        print(f"✅ {booked['action']}: {booked.get('confirmation')}")
        return booked.get("confirmation", {}).get("booking_id")
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None


def test_admin_status(quote_id: str | None):
    print("\n" + "=" * 60)
    print("Testing PATCH /api/v1/admin/quotes/{id}/status")
    print("=" * 60)

    if not quote_id:
        print("⚠️  No quote to update")
        return False

    response = httpx.patch(
        f"{BASE_URL}/api/v1/admin/quotes/{quote_id}/status",
        json={"status": "reviewed"},
        headers=ADMIN_HEADERS,
        timeout=10.0,
    )
    print(f"{'✅' if response.status_code == 200 else '❌'} {response.status_code} {response.text}")
    return response.status_code == 200


def main():
    print("\n🚀 Smoke testing client services API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except Exception:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload --port 8001")
        sys.exit(1)

    quote_id = test_quote()
    test_booking()
    test_admin_status(quote_id)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
