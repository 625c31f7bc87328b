import time
import subprocess
import httpx
import sys
import os
import signal

HOST = "127.0.0.1"
PORT = "8080"
BASE_URL = f"http://{HOST}:{PORT}"

# Dedicated database file so repeated runs start from a known state
DB_PATH = "verify_persistence.db"
SERVER_ENV = {**os.environ, "DATABASE_URL": f"sqlite+aiosqlite:///./{DB_PATH}"}


def start_server():
    return subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "backend.app.main:app", "--host", HOST, "--port", PORT],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=SERVER_ENV,
    )


def stop_server(proc):
    proc.send_signal(signal.SIGTERM)
    proc.wait()


def wait_for_server(retries=10, delay=2):
    url = f"{BASE_URL}/health"
    print(f"Waiting for server at {url}...")
    for i in range(retries):
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
    if os.path.exists(DB_PATH):
        os.remove(DB_PATH)

    # 1. Start Server (First Run)
    print("\n--- [Step 1] Starting Server (Initial) ---")
    proc = start_server()

    try:
        if not wait_for_server():
            server_logs = proc.communicate(timeout=2)
            print("Server Stdout:", server_logs[0].decode())
            print("Server Stderr:", server_logs[1].decode())
            raise Exception("Server start failed")

        # 2. Register and move a package
        print("\n--- [Step 2] Registering Package (Persistence Test) ---")
        resp = httpx.post(f"{BASE_URL}/register", json={"description": "books"})
        if resp.status_code != 200:
            print(f"❌ Registration Failed: {resp.status_code} {resp.text}")
            raise Exception("Registration failed")
        package_id = resp.json()["id"]
        print(f"✅ Package Registered: {resp.json()}")

        resp = httpx.post(f"{BASE_URL}/update", json={"id": package_id, "status": "in_transit"})
        if resp.status_code != 200:
            print(f"❌ Update Failed: {resp.status_code} {resp.text}")
            raise Exception("Update failed")
        print("✅ Status Updated")

    finally:
        print("\n--- [Step 3] Stopping Server ---")
        stop_server(proc)

    time.sleep(2)  # Wait for port release

    # 3. Restart Server
    print("\n--- [Step 4] Restarting Server (Verification) ---")
    proc2 = start_server()

    try:
        if not wait_for_server():
            raise Exception("Server restart failed")

        # 4. Read back state and history
        print("\n--- [Step 5] Reading History (Post-Restart) ---")
        resp = httpx.get(f"{BASE_URL}/packages/{package_id}/history")
        statuses = [entry["status"] for entry in resp.json()]
        if resp.status_code == 200 and statuses == ["registered", "in_transit"]:
            print("✅ History Persisted")
            print(resp.json())
        else:
            print(f"❌ History Check Failed: {resp.status_code} {resp.text}")
            raise Exception("History lost after restart")

        resp = httpx.get(f"{BASE_URL}/packages/{package_id}")
        if resp.status_code == 200 and resp.json()["status"] == "in_transit":
            print("✅ Current State Persisted")
        else:
            print(f"❌ State Check Failed: {resp.status_code} {resp.text}")
            raise Exception("State lost after restart")

    finally:
        print("\n--- [Step 6] Stopping Server ---")
        stop_server(proc2)


if __name__ == "__main__":
    run_verification()
