#!/usr/bin/env python3
"""
Quick diagnostic script - run this while the Flask server is running
"""
import os
import sys

import requests

BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")

print("=" * 60)
print("DIAGNOSING API")
print("=" * 60)

failures = 0

# Test 1: Health endpoint
print("\n1. Checking /api/health ...")
try:
    response = requests.get(f"{BASE_URL}/api/health", timeout=10)
    print(f"   Status: {response.status_code}")
    if response.ok and response.json().get("status") == "ok":
        print("   ✅ API is up")
    else:
        failures += 1
        print(f"   ❌ Unexpected body: {response.text[:200]}")
except requests.RequestException as e:
    failures += 1
    print(f"   ❌ Error: {e}")

# Test 2: Registered routes
print("\n2. Checking registered routes...")
expected = ["/api/auth/login", "/api/resources", "/api/community/channels", "/api/qa/questions"]
try:
    response = requests.get(f"{BASE_URL}/routes", timeout=10)
    routes = response.text.split("\n")
    print(f"   Found {len(routes)} routes")
    for route in expected:
        if route in routes:
            print(f"     ✅ {route}")
        else:
            failures += 1
            print(f"     ❌ {route} missing - is the blueprint registered in sexed/app.py?")
except requests.RequestException as e:
    failures += 1
    print(f"   ❌ Error: {e}")

# Test 3: Community channels seeded
print("\n3. Checking community channels...")
try:
    response = requests.get(f"{BASE_URL}/api/community/channels", timeout=10)
    channels = response.json().get("channels", [])
    if channels:
        print(f"   ✅ {len(channels)} channels")
    else:
        print("   ⚠️  No channels yet - POST /api/init-data to seed them")
except (requests.RequestException, ValueError) as e:
    failures += 1
    print(f"   ❌ Error: {e}")

print("\n" + "=" * 60)
print("ALL CHECKS PASSED" if not failures else f"{failures} CHECK(S) FAILED")
print("=" * 60)

sys.exit(1 if failures else 0)
