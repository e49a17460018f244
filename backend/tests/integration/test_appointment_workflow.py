"""
End-to-end booking workflow through the HTTP API.

An admin sets up the directory, a patient books with a doctor, a second
booking for the same slot is refused, and the appointment moves through
its statuses.
"""

from models import AppointmentStatus, UserRole
from tests.conftest import DEFAULT_PASSWORD, auth_headers, create_appointment, create_user


def _register(client, dni, name, email, role):
    response = client.post("/api/auth/register", json={
        "dni": dni, "name": name, "email": email, "password": DEFAULT_PASSWORD, "role": role,
    })
    assert response.status_code == 201, response.json()
    data = response.json()["data"]
    return data["user"], {"Authorization": f"Bearer {data['token']}"}


class TestBookingWorkflow:
    """Directory setup followed by booking and status changes."""

    def test_full_workflow(self, client, admin_user):
        admin = auth_headers(admin_user)

        center = client.post("/api/medical-centers", headers=admin, json={
            "name": "Hospital Metropolitano", "address": "Av. Mariana de Jesus", "city": "Quito",
        })
        assert center.status_code == 201
        center_id = center.json()["data"]["id"]

        specialty = client.post("/api/specialties", headers=admin, json={"id": 1, "name": "Cardiology"})
        assert specialty.status_code == 201

        doctor_user, doctor_headers = _register(client, "1700000001", "Dr. Vega", "vega@example.com", "doctor")
        doctor = client.post("/api/doctors", headers=admin, json={
            "userId": doctor_user["id"], "medicalCenterId": center_id, "specialtyId": 1,
        })
        assert doctor.status_code == 201
        doctor_data = doctor.json()["data"]
        assert doctor_data["user"]["email"] == "vega@example.com"
        assert doctor_data["medicalCenter"]["city"] == "Quito"
        assert doctor_data["specialty"]["name"] == "Cardiology"
        doctor_id = doctor_data["id"]

        patient, patient_headers = _register(client, "1700000002", "Pat Lopez", "pat@example.com", "patient")

        booking = {
            "patientId": patient["id"],
            "doctorId": doctor_id,
            "appointmentDate": "2030-05-20",
            "appointmentTime": "09:30:00",
        }
        created = client.post("/api/appointments", headers=patient_headers, json=booking)
        assert created.status_code == 201
        appointment = created.json()["data"]
        assert appointment["status"] == "pending"
        assert appointment["appointmentDate"] == "2030-05-20"
        assert appointment["appointmentTime"] == "09:30:00"

        conflict = client.post("/api/appointments", headers=patient_headers, json=booking)
        assert conflict.status_code == 400
        assert conflict.json() == {
            "success": False, "message": "Doctor is not available at that time", "data": None,
        }

        mine = client.get(f"/api/appointments/patient/{patient['id']}", headers=patient_headers)
        assert [a["id"] for a in mine.json()["data"]] == [appointment["id"]]

        schedule = client.get(f"/api/appointments/doctor/{doctor_id}", headers=doctor_headers)
        assert [a["id"] for a in schedule.json()["data"]] == [appointment["id"]]

        completed = client.patch(
            f"/api/appointments/{appointment['id']}/status", headers=doctor_headers, json={"status": "completed"}
        )
        assert completed.status_code == 200
        assert completed.json()["data"]["status"] == "completed"

        reopened = client.patch(
            f"/api/appointments/{appointment['id']}/status", headers=doctor_headers, json={"status": "pending"}
        )
        assert reopened.json()["data"]["status"] == "pending"

        removed = client.delete(f"/api/appointments/{appointment['id']}", headers=admin)
        assert removed.status_code == 200
        gone = client.get(f"/api/appointments/{appointment['id']}", headers=patient_headers)
        assert gone.status_code == 404

    def test_cancelled_slot_stays_blocked(self, client, patient_user, doctor, db_session):
        create_appointment(db_session, patient_user, doctor, status=AppointmentStatus.CANCELLED)

        response = client.post("/api/appointments", headers=auth_headers(patient_user), json={
            "patientId": patient_user.id,
            "doctorId": doctor.id,
            "appointmentDate": "2030-01-15",
            "appointmentTime": "10:00:00",
        })

        assert response.status_code == 400
        assert response.json()["message"] == "Doctor is not available at that time"

    def test_short_time_format_matches_existing_slot(self, client, patient_user, doctor, db_session):
        """HH:MM is read as HH:MM:00 and conflicts with an existing 10:00:00 booking."""
        create_appointment(db_session, patient_user, doctor)

        response = client.post("/api/appointments", headers=auth_headers(patient_user), json={
            "patientId": patient_user.id,
            "doctorId": doctor.id,
            "appointmentDate": "2030-01-15",
            "appointmentTime": "10:00",
        })

        assert response.status_code == 400

    def test_booking_unknown_doctor(self, client, patient_user):
        response = client.post("/api/appointments", headers=auth_headers(patient_user), json={
            "patientId": patient_user.id,
            "doctorId": 999,
            "appointmentDate": "2030-01-15",
            "appointmentTime": "10:00:00",
        })

        assert response.status_code == 404
        assert response.json()["message"] == "Doctor not found"

    def test_malformed_date(self, client, patient_user, doctor):
        response = client.post("/api/appointments", headers=auth_headers(patient_user), json={
            "patientId": patient_user.id,
            "doctorId": doctor.id,
            "appointmentDate": "20-05-2030",
            "appointmentTime": "10:00:00",
        })

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_list_by_date(self, client, patient_user, doctor, db_session):
        appointment = create_appointment(db_session, patient_user, doctor)
        headers = auth_headers(patient_user)

        on_day = client.get("/api/appointments/date/2030-01-15", headers=headers)
        other_day = client.get("/api/appointments/date/2030-01-16", headers=headers)
        bad = client.get("/api/appointments/date/15-01-2030", headers=headers)

        assert [a["id"] for a in on_day.json()["data"]] == [appointment.id]
        assert other_day.json()["data"] == []
        assert bad.status_code == 400

    def test_delete_appointment(self, client, patient_user, doctor, db_session):
        appointment = create_appointment(db_session, patient_user, doctor)
        headers = auth_headers(patient_user)

        deleted = client.delete(f"/api/appointments/{appointment.id}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "message": "Appointment deleted successfully", "data": None}

        missing = client.get(f"/api/appointments/{appointment.id}", headers=headers)
        assert missing.status_code == 404
        assert missing.json()["message"] == "Appointment not found"

    def test_any_role_may_act_on_any_appointment(self, client, patient_user, doctor, db_session):
        """Authorization is role-based only; another patient may read and change this appointment."""
        appointment = create_appointment(db_session, patient_user, doctor)
        stranger = create_user(db_session, email="stranger@example.com", role=UserRole.PATIENT)
        headers = auth_headers(stranger)

        assert client.get(f"/api/appointments/{appointment.id}", headers=headers).status_code == 200
        response = client.patch(
            f"/api/appointments/{appointment.id}/status", headers=headers, json={"status": "cancelled"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "cancelled"
