"""
HTTP surface tests: authentication, CRUD routes, booking errors and the
error body format.
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from polyclinic.db import DbManager

PASSWORD = "Clinic#2024"


def register_and_login(client: TestClient, user_name: str = "frontdesk") -> Dict[str, str]:
    registered = client.post(
        "/users/register",
        json={
            "user_name": user_name,
            "email": f"{user_name}@clinic.example",
            "password": PASSWORD,
            "first_name": "Front",
            "last_name": "Desk",
        },
    )
    assert registered.status_code == 201, registered.text

    login = client.post("/users/login", json={"user_name": user_name, "password": PASSWORD})
    assert login.status_code == 200, login.text
    return {"Authorization": f"Bearer {login.json()['token']}"}


@pytest.fixture
def auth(client) -> Dict[str, str]:
    return register_and_login(client)


def add_patient(client, auth, name="Asha Verma", age=30) -> str:
    response = client.post(
        "/patients",
        json={"name": name, "age": age, "gender": "F", "contact_number": "+919876543210"},
        headers=auth,
    )
    assert response.status_code == 201, response.text
    return response.json()["patient_id"]


def add_doctor(client, auth, name="Dr. Mehta", fees=500) -> str:
    response = client.post(
        "/doctors",
        json={"name": name, "specialization": "Cardiology", "fees": fees},
        headers=auth,
    )
    assert response.status_code == 201, response.text
    return response.json()["doctor_id"]


class TestAuthentication:
    def test_protected_route_without_token(self, client):
        response = client.get("/patients")

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    def test_protected_route_with_garbage_token(self, client):
        response = client.get("/doctors", headers={"Authorization": "Bearer not.a.token"})

        assert response.status_code == 401

    def test_login_returns_token_and_expiration(self, client):
        headers = register_and_login(client)

        assert headers["Authorization"].startswith("Bearer ")
        assert client.get("/patients", headers=headers).status_code == 200

    def test_duplicate_registration(self, client):
        register_and_login(client, "asha")

        response = client.post(
            "/users/register",
            json={
                "user_name": "asha",
                "email": "another@clinic.example",
                "password": PASSWORD,
                "first_name": "Asha",
                "last_name": "Verma",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "USER_EXISTS"

    def test_weak_password_rejected(self, client):
        response = client.post(
            "/users/register",
            json={
                "user_name": "asha",
                "email": "asha@clinic.example",
                "password": "password",
                "first_name": "Asha",
                "last_name": "Verma",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_wrong_password(self, client):
        register_and_login(client, "asha")

        response = client.post("/users/login", json={"user_name": "asha", "password": "Wrong#2024"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_CREDENTIALS"


class TestPatientRoutes:
    def test_crud(self, client, auth):
        patient_id = add_patient(client, auth)
        assert patient_id == "P1"

        fetched = client.get(f"/patients/{patient_id}", headers=auth)
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Asha Verma"

        updated = client.put(f"/patients/{patient_id}/age/31", headers=auth)
        assert updated.status_code == 200
        assert client.get(f"/patients/{patient_id}", headers=auth).json()["age"] == 31

        listed = client.get("/patients", headers=auth)
        assert [p["patient_id"] for p in listed.json()] == ["P1"]

        removed = client.delete(f"/patients/{patient_id}", headers=auth)
        assert removed.status_code == 200
        assert client.get(f"/patients/{patient_id}", headers=auth).status_code == 404

    @pytest.mark.parametrize("age", [0, 131])
    def test_age_out_of_range(self, client, auth, age):
        add_patient(client, auth)

        response = client.put(f"/patients/P1/age/{age}", headers=auth)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_update_missing_patient(self, client, auth):
        response = client.put("/patients/P9/age/40", headers=auth)

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Al", "age": 30, "gender": "F", "contact_number": "9876543"},
            {"name": "Asha", "age": 30, "gender": "X", "contact_number": "9876543"},
            {"name": "Asha", "age": 30, "gender": "F", "contact_number": "call me"},
            {"name": "Asha", "age": 200, "gender": "F", "contact_number": "9876543"},
        ],
    )
    def test_invalid_patient_payload(self, client, auth, payload):
        response = client.post("/patients", json=payload, headers=auth)

        body = response.json()
        assert response.status_code == 400
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"]


class TestDoctorRoutes:
    def test_fee_update(self, client, auth):
        doctor_id = add_doctor(client, auth, fees=500)

        assert client.put(f"/doctors/{doctor_id}/fees/650", headers=auth).status_code == 200
        assert float(client.get(f"/doctors/{doctor_id}", headers=auth).json()["fees"]) == 650

    def test_fee_below_minimum(self, client, auth):
        doctor_id = add_doctor(client, auth)

        response = client.put(f"/doctors/{doctor_id}/fees/100", headers=auth)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("fees", ["101.555", "123456789012345"])
    def test_fee_update_enforces_stored_precision(self, client, auth, fees):
        doctor_id = add_doctor(client, auth, fees=500)

        response = client.put(f"/doctors/{doctor_id}/fees/{fees}", headers=auth)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert client.get(f"/doctors/{doctor_id}", headers=auth).status_code == 200
        assert client.get("/doctors", headers=auth).status_code == 200

    def test_create_with_low_fee_rejected(self, client, auth):
        response = client.post(
            "/doctors",
            json={"name": "Dr. Rao", "specialization": "ENT", "fees": 50},
            headers=auth,
        )

        assert response.status_code == 400

    def test_missing_doctor(self, client, auth):
        assert client.get("/doctors/D1", headers=auth).status_code == 404
        assert client.delete("/doctors/D1", headers=auth).status_code == 404


class TestAppointmentRoutes:
    def test_booking_flow(self, client, auth):
        patient_id = add_patient(client, auth)
        doctor_id = add_doctor(client, auth)
        booking = {
            "patient_id": patient_id,
            "doctor_id": doctor_id,
            "date_of_appointment": "2024-01-10",
        }

        created = client.post("/appointments", json=booking, headers=auth)
        assert created.status_code == 201
        assert created.json() == {"appointment_no": 1}

        conflict = client.post("/appointments", json=booking, headers=auth)
        assert conflict.status_code == 400
        assert conflict.json()["error"] == "APPOINTMENT_CONFLICT"

        unknown = client.post(
            "/appointments", json={**booking, "doctor_id": "D2"}, headers=auth
        )
        assert unknown.status_code == 400
        assert unknown.json()["error"] == "INVALID_REFERENCE"

        fetched = client.get("/appointments/1", headers=auth).json()
        assert fetched["doctor_name"] == "Dr. Mehta"
        assert fetched["patient_name"] == "Asha Verma"
        assert fetched["date_of_appointment"] == "2024-01-10"

        assert len(client.get("/appointments", headers=auth).json()) == 1

        assert client.delete("/appointments/1", headers=auth).status_code == 200
        second = client.delete("/appointments/1", headers=auth)
        assert second.status_code == 404
        assert second.json()["error"] == "NOT_FOUND"

    def test_booked_doctor_cannot_be_removed(self, client, auth):
        patient_id = add_patient(client, auth)
        doctor_id = add_doctor(client, auth)
        client.post(
            "/appointments",
            json={"patient_id": patient_id, "doctor_id": doctor_id, "date_of_appointment": "2024-01-10"},
            headers=auth,
        )

        response = client.delete(f"/doctors/{doctor_id}", headers=auth)

        assert response.status_code == 400
        assert response.json() == {
            "error": "STORAGE_ERROR",
            "message": "Some error occurred. Please try again later.",
            "timestamp": response.json()["timestamp"],
        }

    def test_invalid_date(self, client, auth):
        response = client.post(
            "/appointments",
            json={"patient_id": "P1", "doctor_id": "D1", "date_of_appointment": "10/01/2024"},
            headers=auth,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestOperationalRoutes:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "Healthy"
        assert response.json()["database"]["healthy"] is True

    def test_metrics(self, client):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "total_calls" in response.json()["logger"]
        assert response.json()["database"]["healthy"] is True

    def test_metrics_hide_driver_errors(self, client, tmp_path):
        unreachable = DbManager(
            f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'clinic.db'}", pool_size=None
        )
        working = client.app.state.db_manager
        client.app.state.db_manager = unreachable
        try:
            response = client.get("/metrics")
        finally:
            client.app.state.db_manager = working

        assert response.status_code == 200
        assert response.json()["database"] == {"healthy": False, "response_time_ms": None}
        assert "OperationalError" not in response.text
        assert "unable to open" not in response.text

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]
        assert "total;dur=" in response.headers["Server-Timing"]
