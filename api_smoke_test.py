#!/usr/bin/env python3
"""
Smoke test for a running patient records server.

Seed the database first (``python manage.py seed_data``), start the
server, then run this script.  Every demo role logs in and the endpoints
it would use are called once.  The exit status is non-zero when any
call returns an unexpected status.

    API_BASE_URL=http://127.0.0.1:8000 python api_smoke_test.py
"""
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000").rstrip("/")

DEMO_USERS = {
    "doctor": {"roleId": "DOC001", "password": "password123"},
    "patient": {"roleId": "PT0001", "password": "password123"},
    "hospital": {"roleId": "HOSP001", "password": "password123"},
}


@dataclass
class SmokeResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    error_message: str = ""
    role: str = ""


class SmokeTester:
    def __init__(self):
        self.session = requests.Session()
        self.headers: Dict[str, str] = {}
        self.role = ""
        self.user: Dict[str, Any] = {}
        self.results: list[SmokeResult] = []

    @property
    def errors(self) -> list[SmokeResult]:
        return [r for r in self.results if not r.success]

    def call(self, method: str, endpoint: str, *, params: Optional[Dict] = None,
             json: Optional[Dict] = None, expected_status: int = 200) -> Optional[requests.Response]:
        start = time.time()
        try:
            response = self.session.request(method, f"{BASE_URL}{endpoint}", params=params, json=json,
                                            headers=self.headers, timeout=30)
        except requests.RequestException as e:
            self.results.append(SmokeResult(False, endpoint, method, 0, time.time() - start, str(e), self.role))
            print(f"❌ {method} {endpoint} - {e}")
            return None
        elapsed = time.time() - start
        ok = response.status_code == expected_status
        self.results.append(SmokeResult(ok, endpoint, method, response.status_code, elapsed,
                                        "" if ok else response.text[:200], self.role))
        mark = "✅" if ok else "❌"
        print(f"{mark} {method} {endpoint} - {response.status_code} ({elapsed:.2f}s)")
        return response

    def login(self, role: str) -> bool:
        self.role = role
        self.headers = {}
        response = self.call("POST", "/api/auth/login", json={**DEMO_USERS[role], "role": role})
        if response is None or response.status_code != 200:
            return False
        self.user = response.json()
        self.headers = {"Authorization": f"Bearer {self.user['accessToken']}"}
        return True

    def run_doctor(self):
        stats = self.call("GET", "/api/doctors/stats")
        if stats is not None and stats.ok:
            print(f"   stats: {stats.json()}")
        found = self.call("GET", "/api/patients/search", params={"q": "PT000", "type": "id"})
        self.call("GET", "/api/patients/all", params={"page": 1, "pageSize": 20})
        self.call("POST", "/api/patients/search", expected_status=405)
        if found is None or not found.ok or not found.json():
            return
        patient = found.json()[0]
        records = patient["healthRecords"]
        if records:
            record = records[0]
            self.call("POST", "/api/notes", json={"healthRecordId": record["id"], "note": "Smoke test note"})
            if record["hospitalId"] and record["doctorId"]:
                created = self.call("POST", "/api/health-records", json={
                    "patientId": patient["id"],
                    "hospitalId": record["hospitalId"],
                    "doctorId": record["doctorId"],
                    "diseaseName": "Common Cold",
                    "diseaseDescription": "Viral upper respiratory infection",
                    "riskLevel": "low",
                })
                if created is not None and created.ok:
                    self.call("PATCH", f"/api/health-records/{created.json()['id']}",
                              json={"treatment": "Symptomatic treatment"})
        if os.getenv("OPENAI_API_KEY"):
            self.call("POST", "/api/ai/summarize", json={"patientId": patient["id"]})

    def run_patient(self):
        self.call("GET", "/api/patients/me", params={"userId": self.user["id"]})
        self.call("PATCH", "/api/patients/me", params={"userId": self.user["id"]},
                  json={"address": "1, MG Road, Chikkamagalur, Karnataka"})

    def run_hospital(self):
        self.call("GET", "/api/doctors/hospital", params={"hospitalId": "HOSP001"})
        self.call("GET", "/api/health-records/recent", params={"hospitalId": "HOSP001"})
        self.call("GET", "/api/doctors/hospital", expected_status=400)

    def run(self) -> bool:
        self.call("GET", "/healthz")
        self.role = "anonymous"
        self.call("POST", "/api/auth/login",
                  json={"roleId": "DOC001", "password": "wrong", "role": "doctor"}, expected_status=401)
        for role in ("doctor", "patient", "hospital"):
            print(f"\n🧪 {role}")
            if self.login(role):
                getattr(self, f"run_{role}")()
        self.report()
        return not self.errors

    def report(self):
        total = len(self.results)
        passed = total - len(self.errors)
        rate = (passed / total * 100) if total else 0.0
        print(f"\n{passed}/{total} calls as expected ({rate:.1f}%)")
        for r in self.errors:
            print(f"   [{r.role}] {r.method} {r.endpoint} -> {r.status_code}: {r.error_message}")


def main():
    if SmokeTester().run():
        print("\n✅ All endpoints responded as expected")
        sys.exit(0)
    print("\n⚠️  Some endpoints failed, see above")
    sys.exit(1)


if __name__ == "__main__":
    main()
