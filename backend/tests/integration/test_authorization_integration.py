"""
Integration tests for the role-based access policy.

Directory reads are public, directory writes are admin-only, user
management is admin-only, and appointments require any authenticated role.
"""

import pytest

from models import UserRole
from tests.conftest import auth_headers, create_user


CENTER_BODY = {"name": "Clinica Kennedy", "address": "Av. del Periodista", "city": "Guayaquil"}


@pytest.fixture
def doctor_user(db_session):
    return create_user(db_session, email="doc@example.com", role=UserRole.DOCTOR, name="Dr. Vega")


class TestDirectoryAccess:
    """Test public reads and admin-only writes on the directory."""

    @pytest.mark.parametrize("path", ["/api/medical-centers", "/api/specialties", "/api/doctors"])
    def test_reads_need_no_token(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["data"] == []

    def test_patient_cannot_create_medical_center(self, client, patient_user):
        response = client.post("/api/medical-centers", headers=auth_headers(patient_user), json=CENTER_BODY)

        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "message": "You do not have permission to access this resource",
            "data": None,
        }
        assert client.get("/api/medical-centers").json()["data"] == []

    def test_doctor_cannot_create_specialty(self, client, doctor_user):
        response = client.post(
            "/api/specialties", headers=auth_headers(doctor_user), json={"id": 1, "name": "Cardiology"}
        )
        assert response.status_code == 403

    def test_write_without_token(self, client):
        response = client.post("/api/medical-centers", json=CENTER_BODY)
        assert response.status_code == 401

    def test_admin_can_create(self, client, admin_user):
        response = client.post("/api/medical-centers", headers=auth_headers(admin_user), json=CENTER_BODY)
        assert response.status_code == 201


class TestUserManagementAccess:
    """Test the users endpoints."""

    def test_admin_lists_users(self, client, admin_user, patient_user):
        response = client.get("/api/users", headers=auth_headers(admin_user))

        assert response.status_code == 200
        assert {u["id"] for u in response.json()["data"]} == {admin_user.id, patient_user.id}

    @pytest.mark.parametrize("role", [UserRole.DOCTOR, UserRole.PATIENT])
    def test_non_admin_cannot_list_users(self, client, db_session, role):
        user = create_user(db_session, email=f"{role.value}@example.com", role=role)
        assert client.get("/api/users", headers=auth_headers(user)).status_code == 403

    def test_doctor_listing_open_to_patients(self, client, patient_user, doctor_user):
        response = client.get("/api/users/doctors", headers=auth_headers(patient_user))

        assert response.status_code == 200
        assert [u["id"] for u in response.json()["data"]] == [doctor_user.id]

    def test_patient_listing(self, client, patient_user, doctor_user):
        allowed = client.get("/api/users/patients", headers=auth_headers(doctor_user))
        denied = client.get("/api/users/patients", headers=auth_headers(patient_user))

        assert [u["id"] for u in allowed.json()["data"]] == [patient_user.id]
        assert denied.status_code == 403


class TestAppointmentAccess:
    """Test that appointments require authentication but no particular role."""

    def test_requires_token(self, client):
        response = client.get("/api/appointments")
        assert response.status_code == 401
        assert response.json()["message"] == "Authentication token is required"

    @pytest.mark.parametrize("role", list(UserRole))
    def test_every_role_can_list(self, client, db_session, role):
        user = create_user(db_session, email=f"{role.value}@example.com", role=role)
        assert client.get("/api/appointments", headers=auth_headers(user)).status_code == 200
