import asyncio

import pytest
from fastapi import HTTPException

from app import config
from app.domain.appointments.schemas import AppointmentCreate, AppointmentUpdate
from app.domain.appointments.service import AppointmentService
from app.domain.doctors.schemas import DoctorCreate
from app.domain.doctors.service import DoctorService
from app.models import Appointment

CARD = {
    "paymentMethod": "card",
    "cardholderName": "Jane Doe",
    "cardNumber": "4242 4242 4242 4242",
    "expiryDate": "12/28",
    "cvv": "123",
}


def appointment_payload(patient, **overrides):
    appointment = {
        "userId": patient.user_id,
        "patientId": patient.id,
        "primaryPhysician": "Adam Smith",
        "schedule": "2026-11-02T10:30:00Z",
        "reason": "Annual check-up",
        "note": "Prefers mornings",
    }
    appointment.update(overrides)
    return appointment


def checkout(client, patient, payment=None, **overrides):
    return client.post(
        "/appointments/checkout",
        json={"appointment": appointment_payload(patient, **overrides), "payment": payment or CARD},
    )


def add_doctor(db, name="Adam Smith", rate=120):
    data = DoctorCreate(
        name=name,
        email="doctor@carepulse.app",
        phone="+15550001111",
        specialization="Cardiology",
        experience="12 years",
        rate=rate,
    )
    return DoctorService(db).create_doctor(data)


def test_checkout_creates_pending_appointment_charged_at_doctor_rate(client, db, patient):
    add_doctor(db, rate=120)

    response = checkout(client, patient)

    assert response.status_code == 201
    body = response.json()
    appointment = body["appointment"]
    assert appointment["status"] == "pending"
    assert appointment["cancellationReason"] is None
    assert appointment["patientName"] == "Jane Doe"
    assert appointment["schedule"] == "2026-11-02T10:30:00"
    assert body["payment"] == {
        "paymentId": f"PAY-{appointment['id'][:8]}",
        "amount": 120,
        "method": "Credit Card (••••4242)",
        "status": "Paid",
    }
    assert db.query(Appointment).count() == 1


def test_checkout_for_unknown_doctor_uses_default_rate(client, patient):
    body = checkout(client, patient, primaryPhysician="Walk-in Clinic").json()
    assert body["payment"]["amount"] == 50


def test_checkout_with_insurance(client, patient):
    payment = {
        "paymentMethod": "insurance",
        "insuranceProvider": "BlueCross",
        "insurancePolicyNumber": "ABC123456789",
    }

    body = checkout(client, patient, payment=payment).json()

    assert body["payment"]["method"] == "Insurance Copay (BlueCross)"


def test_checkout_rejects_bad_card_without_creating_appointment(client, db, patient):
    response = checkout(client, patient, payment={**CARD, "expiryDate": "13/28"})

    assert response.status_code == 422
    assert db.query(Appointment).count() == 0


def test_checkout_for_another_users_patient_is_not_found(client, db, patient):
    response = checkout(client, patient, userId="someone-else")

    assert response.status_code == 404
    assert db.query(Appointment).count() == 0


def test_create_appointment_directly(db, patient):
    data = AppointmentCreate(**appointment_payload(patient, note=None))

    appointment = AppointmentService(db).create_appointment(data)

    assert appointment.status == "pending"
    assert appointment.note is None
    assert appointment.cancellation_reason is None


def test_schedule_keeps_unpatched_fields(client, patient):
    created = checkout(client, patient).json()["appointment"]

    response = client.patch(f"/appointments/{created['id']}", json={"type": "schedule"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "scheduled"
    assert body["primaryPhysician"] == "Adam Smith"
    assert body["schedule"] == created["schedule"]
    assert body["cancellationReason"] is None


def test_schedule_can_move_appointment(client, patient):
    created = checkout(client, patient).json()["appointment"]

    body = client.patch(
        f"/appointments/{created['id']}",
        json={
            "type": "schedule",
            "appointment": {"primaryPhysician": "Jasmine Lee", "schedule": "2026-11-05T14:00:00"},
        },
    ).json()

    assert body["primaryPhysician"] == "Jasmine Lee"
    assert body["schedule"] == "2026-11-05T14:00:00"


@pytest.mark.parametrize("reason", [None, "", " x "])
def test_cancel_requires_reason(client, patient, reason):
    created = checkout(client, patient).json()["appointment"]

    response = client.patch(
        f"/appointments/{created['id']}",
        json={"type": "cancel", "appointment": {"cancellationReason": reason}},
    )

    assert response.status_code == 422
    assert client.get(f"/appointments/{created['id']}").json()["status"] == "pending"


def test_schedule_then_cancel_preserves_booking_details(client, patient):
    created = checkout(client, patient).json()["appointment"]
    client.patch(f"/appointments/{created['id']}", json={"type": "schedule"})

    body = client.patch(
        f"/appointments/{created['id']}",
        json={"type": "cancel", "appointment": {"cancellationReason": "conflict"}},
    ).json()

    assert body["status"] == "cancelled"
    assert body["cancellationReason"] == "conflict"
    assert body["schedule"] == created["schedule"]
    assert body["primaryPhysician"] == created["primaryPhysician"]
    assert body["reason"] == created["reason"]


def test_rescheduling_cancelled_appointment_clears_reason(client, patient):
    created = checkout(client, patient).json()["appointment"]
    client.patch(
        f"/appointments/{created['id']}",
        json={"type": "cancel", "appointment": {"cancellationReason": "conflict"}},
    )

    body = client.patch(f"/appointments/{created['id']}", json={"type": "schedule"}).json()

    assert body["status"] == "scheduled"
    assert body["cancellationReason"] is None


def test_unknown_appointment(client):
    assert client.get("/appointments/missing").status_code == 404
    assert client.patch("/appointments/missing", json={"type": "schedule"}).status_code == 404
    assert client.get("/appointments/missing/receipt").status_code == 404


def test_update_missing_appointment_raises(db):
    with pytest.raises(HTTPException) as exc_info:
        service = AppointmentService(db)
        asyncio.run(service.update_appointment("missing", AppointmentUpdate(type="schedule")))

    assert exc_info.value.status_code == 404


def test_admin_list_counts_statuses(client, patient, admin_headers):
    ids = [checkout(client, patient).json()["appointment"]["id"] for _ in range(3)]
    client.patch(f"/appointments/{ids[0]}", json={"type": "schedule"})
    client.patch(
        f"/appointments/{ids[1]}",
        json={"type": "cancel", "appointment": {"cancellationReason": "conflict"}},
    )

    body = client.get("/admin/appointments", headers=admin_headers).json()

    assert body["totalCount"] == 3
    assert body["scheduledCount"] == 1
    assert body["pendingCount"] == 1
    assert body["cancelledCount"] == 1
    assert [d["id"] for d in body["documents"]] == list(reversed(ids))


def test_admin_list_requires_passkey(client):
    assert client.get("/admin/appointments").status_code == 401
    assert client.get("/admin/appointments", headers={"X-Admin-Passkey": "000000"}).status_code == 401


def test_receipt_for_active_appointment(client, db, patient):
    add_doctor(db, rate=120)
    created = checkout(client, patient).json()["appointment"]

    response = client.get(f"/appointments/{created['id']}/receipt")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "attachment" in response.headers["content-disposition"]
    text = response.text
    assert text.startswith("CarePulse Receipt")
    assert "Doctor: Adam Smith" in text
    assert "Amount: $120.00" in text
    assert f"Payment ID: PAY-{created['id'][:8]}" in text
    assert "Status: Paid" in text
    assert "Cancellation Reason" not in text


def test_receipt_for_cancelled_appointment(client, patient):
    created = checkout(client, patient).json()["appointment"]
    client.patch(
        f"/appointments/{created['id']}",
        json={"type": "cancel", "appointment": {"cancellationReason": "conflict"}},
    )

    text = client.get(f"/appointments/{created['id']}/receipt").text

    assert "Status: Cancelled" in text
    assert "Cancellation Reason: conflict" in text
    assert "Status: Refunded" in text


def test_status_change_texts_patient_when_enabled(client, patient, sms, monkeypatch):
    monkeypatch.setattr(config, "APPOINTMENT_SMS_NOTIFICATIONS", True)
    created = checkout(client, patient).json()["appointment"]

    client.patch(f"/appointments/{created['id']}", json={"type": "schedule"})
    client.patch(
        f"/appointments/{created['id']}",
        json={"type": "cancel", "appointment": {"cancellationReason": "conflict"}},
    )

    assert [phone for phone, _ in sms.messages] == [patient.phone, patient.phone]
    assert "confirmed" in sms.messages[0][1]
    assert "Dr. Adam Smith" in sms.messages[0][1]
    assert "Reason: conflict" in sms.messages[1][1]


def test_sms_failure_does_not_block_update(client, patient, sms, monkeypatch):
    monkeypatch.setattr(config, "APPOINTMENT_SMS_NOTIFICATIONS", True)
    sms.fail_with = "Twilio down"
    created = checkout(client, patient).json()["appointment"]

    response = client.patch(f"/appointments/{created['id']}", json={"type": "schedule"})

    assert response.json()["status"] == "scheduled"


def test_no_texts_when_notifications_disabled(client, patient, sms):
    created = checkout(client, patient).json()["appointment"]

    client.patch(f"/appointments/{created['id']}", json={"type": "schedule"})

    assert sms.messages == []


def test_one_character_cancellation_reason_is_explained(client, patient):
    created = checkout(client, patient).json()["appointment"]

    response = client.patch(
        f"/appointments/{created['id']}",
        json={"type": "cancel", "appointment": {"cancellationReason": "x"}},
    )

    assert response.status_code == 422
    assert "at least 2 characters" in response.text


def test_texted_schedule_is_labelled_utc(client, patient, sms, monkeypatch):
    monkeypatch.setattr(config, "APPOINTMENT_SMS_NOTIFICATIONS", True)
    created = checkout(client, patient).json()["appointment"]

    client.patch(f"/appointments/{created['id']}", json={"type": "schedule"})

    assert "Nov 02, 2026, 10:30 AM UTC" in sms.messages[0][1]
