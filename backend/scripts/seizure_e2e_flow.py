#!/usr/bin/env python3
"""
END-TO-END SEIZURE LIFECYCLE SCRIPT

Runs a complete flow against a live server: ADMIN creates a brigade agent
and a bureau chief, the agent records a seizure, a duplicate chassis is
refused, the chief cancels it and a later edit is refused. Validates the
audit trail at the end.

Requires: backend running (e.g. python manage.py runserver) and an admin
  seeded with `python manage.py seed_admin --password admin123`.
Usage: BASE_URL=http://localhost:8000 python backend/scripts/seizure_e2e_flow.py
"""

import os
import sys
import uuid

import requests

BASE_URL = os.environ.get("BASE_URL", "http://localhost:8000")
API = f"{BASE_URL}/api/v1"
ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@douanes.local")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin123")


def log(msg):
    print(f"\n=== {msg} ===")


def assert_status(resp, expected):
    if resp.status_code != expected:
        print("FAILED:", resp.status_code, resp.text)
        sys.exit(1)


def login(email, password):
    resp = requests.post(
        f"{API}/auth/login",
        json={"email": email, "password": password},
        timeout=10,
    )
    assert_status(resp, 200)
    token = resp.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}


def create_user(headers, role):
    email = f"{role.lower()}_{uuid.uuid4().hex[:6]}@douanes.local"
    resp = requests.post(
        f"{API}/users",
        json={
            "email": email,
            "password": "e2epass123",
            "firstName": "E2E",
            "lastName": role.title(),
            "role": role,
        },
        headers=headers,
        timeout=10,
    )
    assert_status(resp, 201)
    return email


# -----------------------------
# STEP 0: LOGIN AS ADMIN
# -----------------------------
log("Login as ADMIN")
admin_headers = login(ADMIN_EMAIL, ADMIN_PASSWORD)

# -----------------------------
# STEP 1: CREATE USERS
# -----------------------------
log("Create BRIGADE_AGENT and BUREAU_CHIEF")
agent_headers = login(create_user(admin_headers, "BRIGADE_AGENT"), "e2epass123")
chief_headers = login(create_user(admin_headers, "BUREAU_CHIEF"), "e2epass123")

# -----------------------------
# STEP 2: RECORD SEIZURE
# -----------------------------
log("Agent records a seizure")
chassis = "E2E" + uuid.uuid4().hex[:14].upper()
payload = {
    "chassisNumber": chassis,
    "make": "Toyota",
    "model": "Hilux",
    "vehicleType": "Pick-up",
    "driverName": "Conducteur E2E",
    "driverPhone": "+221 77 000 00 00",
    "infractionCode": "T1_DEFAULT",
    "location": "Poste frontière",
}
resp = requests.post(f"{API}/seizures", json=payload, headers=agent_headers, timeout=10)
assert_status(resp, 201)
seizure = resp.json()["data"]
seizure_id = seizure["id"]
print("Seizure:", seizure_id, seizure["deadline"]["alertMessage"])

# -----------------------------
# STEP 3: DUPLICATE CHASSIS
# -----------------------------
log("Duplicate chassis is refused")
resp = requests.post(f"{API}/seizures", json=payload, headers=agent_headers, timeout=10)
assert_status(resp, 409)

# -----------------------------
# STEP 4: AGENT CANNOT VALIDATE
# -----------------------------
log("Agent cannot validate exit")
resp = requests.post(
    f"{API}/seizures/{seizure_id}/validate-exit", headers=agent_headers, timeout=10
)
assert_status(resp, 403)

# -----------------------------
# STEP 5: CHIEF CANCELS
# -----------------------------
log("Bureau chief cancels")
resp = requests.post(
    f"{API}/seizures/{seizure_id}/cancel", headers=chief_headers, timeout=10
)
assert_status(resp, 200)
if resp.json()["data"]["status"] != "EXIT_PERFORMED":
    print("FAILED: unexpected status", resp.json())
    sys.exit(1)

# -----------------------------
# STEP 6: EDIT REFUSED
# -----------------------------
log("Edit after cancel is refused")
resp = requests.patch(
    f"{API}/seizures/{seizure_id}",
    json={"model": "Land Cruiser"},
    headers=agent_headers,
    timeout=10,
)
assert_status(resp, 409)

# -----------------------------
# STEP 7: AUDIT TRAIL
# -----------------------------
log("Audit trail")
resp = requests.get(
    f"{API}/audit", params={"seizureId": seizure_id}, headers=admin_headers, timeout=10
)
assert_status(resp, 200)
actions = sorted(row["action"] for row in resp.json()["results"])
if actions != ["SEIZURE_CANCELLATION", "SEIZURE_CREATION"]:
    print("FAILED: unexpected audit trail", actions)
    sys.exit(1)

print("\nE2E FLOW PASSED")
