"""
Smoke test against a running server. Uses the real Gemini backend, so it
needs GEMINI_API_KEY set for the server process.

    python3 app.py          # in one shell
    python3 smoke_api.py    # in another
"""
import base64
import time

import requests

BASE_URL = "http://localhost:8000"
TIMEOUT = 90
results = []

# 1x1 red PNG
SAMPLE_IMAGE = "data:image/png;base64," + base64.b64encode(bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010802000000907753de"
    "0000000c4944415408d763f8cfc000000301010018dd8db00000000049454e44ae426082"
)).decode("ascii")


def log_check(endpoint: str, method: str, status_code: int, success: bool, details: str = ""):
    results.append({"endpoint": endpoint, "method": method, "status_code": status_code, "success": success})
    status = "✓" if success else "✗"
    print(f"{status} {method:6} {endpoint:45} -> {status_code}")
    if details:
        print(f"   {details}")


def post(endpoint: str, payload=None):
    try:
        response = requests.post(f"{BASE_URL}{endpoint}", json=payload, timeout=TIMEOUT)
        return response.status_code, response.json()
    except Exception as e:
        return 0, {"success": False, "error": str(e)}


def check_healthz():
    print("\n=== Health ===")
    try:
        response = requests.get(f"{BASE_URL}/healthz", timeout=5)
        log_check("/healthz", "GET", response.status_code, response.json().get("status") == "ok")
    except Exception as e:
        log_check("/healthz", "GET", 0, False, f"Error: {e}")


def check_actions():
    print("\n=== Actions ===")
    status, body = post("/api/actions/optimize-prompt", {"prompt": "red car on a beach", "aspect_ratio": "1:1"})
    optimized = body.get("optimized_prompt", "")
    log_check("/api/actions/optimize-prompt", "POST", status, body.get("success") and bool(optimized),
              optimized[:100])

    status, body = post("/api/actions/generate-thumbnail", {
        "prompt": optimized or "red car on a beach", "aspect_ratio": "1:1",
    })
    thumbnail = body.get("thumbnail")
    log_check("/api/actions/generate-thumbnail", "POST", status, body.get("success") and bool(thumbnail),
              body.get("error", ""))

    if thumbnail:
        status, body = post("/api/actions/edit-thumbnail", {
            "base_image": thumbnail, "prompt": "add a sunset sky", "aspect_ratio": "1:1",
        })
        log_check("/api/actions/edit-thumbnail", "POST", status, bool(body.get("success")), body.get("error", ""))

    status, body = post("/api/actions/batch-generate", {
        "prompts": ["episode one", "episode two"],
        "base_prompt": "Cooking show",
        "aspect_ratio": "16:9",
        "consistency_mode": "theme",
    })
    log_check("/api/actions/batch-generate", "POST", status, bool(body.get("success")),
              f"score={body.get('consistency_score')}")

    status, body = post("/api/actions/intelligent-fusion", {
        "images": [SAMPLE_IMAGE, SAMPLE_IMAGE],
        "fusion_prompt": "Blend both into one abstract poster",
        "aspect_ratio": "16:9",
        "fusion_style": "blend",
        "creativity_level": "balanced",
    })
    log_check("/api/actions/intelligent-fusion", "POST", status, bool(body.get("success")),
              body.get("fusion_description") or body.get("error", ""))

    status, body = post("/api/actions/intelligent-fusion", {
        "images": [SAMPLE_IMAGE],
        "fusion_prompt": "x",
        "aspect_ratio": "1:1",
        "fusion_style": "blend",
        "creativity_level": "balanced",
    })
    log_check("/api/actions/intelligent-fusion (1 image)", "POST", status,
              status == 400 and body.get("success") is False, body.get("error", ""))


def check_session():
    print("\n=== Studio session ===")
    status, body = post("/api/sessions")
    session_id = (body.get("session") or {}).get("id")
    log_check("/api/sessions", "POST", status, bool(session_id))
    if not session_id:
        return

    base = f"/api/sessions/{session_id}"
    post(f"{base}/references", {"images": [SAMPLE_IMAGE]})
    requests.patch(f"{BASE_URL}{base}", json={"prompt": "a red square logo", "aspect_ratio": "16:9"}, timeout=TIMEOUT)

    status, body = post(f"{base}/optimize")
    log_check(f"{base}/optimize", "POST", status, bool(body.get("success")))

    status, body = post(f"{base}/generate")
    session = body.get("session") or {}
    log_check(f"{base}/generate", "POST", status, session.get("history_count") == 1, body.get("error", ""))

    response = requests.delete(f"{BASE_URL}{base}", timeout=TIMEOUT)
    log_check(base, "DELETE", response.status_code, response.json().get("success") is True)


def print_summary():
    passed = sum(1 for r in results if r["success"])
    print("\n" + "=" * 60)
    print(f"{passed}/{len(results)} checks passed")
    for r in results:
        if not r["success"]:
            print(f"  ✗ {r['method']} {r['endpoint']} ({r['status_code']})")
    print("=" * 60)


def main():
    print(f"Smoke testing {BASE_URL}")
    for attempt in range(3):
        try:
            requests.get(f"{BASE_URL}/healthz", timeout=2)
            break
        except requests.RequestException:
            if attempt == 2:
                print("Server is not running. Start it with: python3 app.py")
                return
            time.sleep(2)

    check_healthz()
    check_actions()
    check_session()
    print_summary()


if __name__ == "__main__":
    main()
