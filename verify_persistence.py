"""
Persistence smoke check.

Starts the API against a SQLite file, registers a parcel, restarts the
server and checks the parcel survived the restart.
"""

import os
import signal
import subprocess
import sys
import tempfile
import time

import httpx

BASE_URL = "http://127.0.0.1:8000"
API_PREFIX = "/v1"


def start_server(env):
    return subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "parcel_tracker.app.main:app", "--host", "127.0.0.1", "--port", "8000"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
    )


def stop_server(proc):
    proc.send_signal(signal.SIGTERM)
    proc.wait()


def wait_for_server(retries=10, delay=2):
    url = f"{BASE_URL}/health"
    print(f"Waiting for server at {url}...")
    for _ in range(retries):
        try:
            resp = httpx.get(url)
            if resp.status_code == 200:
                print("✅ Server is up!")
                return True
        except httpx.ConnectError:
            pass
        time.sleep(delay)
    print("❌ Server failed to start.")
    return False


def run_verification():
    db_file = os.path.join(tempfile.mkdtemp(), "tracker.db")
    env = {**os.environ, "DATABASE_URL": f"sqlite+aiosqlite:///{db_file}"}

    # 1. Start Server (First Run)
    print("\n--- [Step 1] Starting Server (Initial) ---")
    proc = start_server(env)

    try:
        if not wait_for_server():
            server_logs = proc.communicate(timeout=2)
            print("Server Stdout:", server_logs[0].decode())
            print("Server Stderr:", server_logs[1].decode())
            raise Exception("Server start failed")

        # 2. Register Parcel
        print("\n--- [Step 2] Registering Parcel ---")
        resp = httpx.post(f"{BASE_URL}{API_PREFIX}/parcels", json={"client": 1000, "address": "persist test"})
        if resp.status_code != 201:
            print(f"❌ Registration Failed: {resp.status_code} {resp.text}")
            raise Exception("Registration failed")
        parcel = resp.json()
        print("✅ Parcel Registered:", parcel)
    finally:
        print("\n--- [Step 3] Stopping Server ---")
        stop_server(proc)

    time.sleep(2)  # Wait for port release

    # 3. Restart Server
    print("\n--- [Step 4] Restarting Server (Verification) ---")
    proc2 = start_server(env)

    try:
        if not wait_for_server():
            raise Exception("Server restart failed")

        print("\n--- [Step 5] Reading Parcel (Post-Restart) ---")
        resp = httpx.get(f"{BASE_URL}{API_PREFIX}/parcels/{parcel['number']}")
        if resp.status_code == 200 and resp.json() == parcel:
            print("✅ Parcel Persisted:", resp.json())
        else:
            print(f"❌ Parcel Lookup Failed (Persistence Issue?): {resp.status_code} {resp.text}")
            raise Exception("Parcel missing after restart")
    finally:
        print("\n--- [Step 6] Stopping Server ---")
        stop_server(proc2)


if __name__ == "__main__":
    run_verification()
