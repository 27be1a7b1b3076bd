"""Mock booking backend.

Flask server with the user-facing endpoints the booking views call:
- Doctor directory
- My appointments
- Book / cancel appointment
- Payment order creation

Run with: python mock_api.py
"""
import copy
import time
import uuid
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from medibook import config
from medibook.logging_config import RequestIDMiddleware, get_logger, setup_structured_logging

logger = get_logger(__name__)

app = Flask(__name__)
CORS(app)
app.wsgi_app = RequestIDMiddleware(app.wsgi_app)

PAYMENT_CURRENCY = "INR"

# token -> user id
USERS = {
    "test-token": "user-001",
    "other-token": "user-002",
}

SEED_DOCTORS = [
    {
        "_id": "doc1",
        "name": "Dr. Richard James",
        "image": "/images/doc1.png",
        "speciality": "General physician",
        "degree": "MBBS",
        "experience": "4 Years",
        "about": "Dr. James has a strong commitment to delivering comprehensive medical care.",
        "fees": 50,
        "available": True,
        "address": {"line1": "17th Cross, Richmond", "line2": "Circle, Ring Road, London"},
        "slots_booked": {},
    },
    {
        "_id": "doc2",
        "name": "Dr. Emily Larson",
        "image": "/images/doc2.png",
        "speciality": "Gynecologist",
        "degree": "MBBS",
        "experience": "3 Years",
        "about": "Dr. Larson focuses on preventive care and early diagnosis.",
        "fees": 60,
        "available": True,
        "address": {"line1": "27th Cross, Richmond", "line2": "Circle, Ring Road, London"},
        "slots_booked": {},
    },
    {
        "_id": "doc3",
        "name": "Dr. Sarah Patel",
        "image": "/images/doc3.png",
        "speciality": "General physician",
        "degree": "MBBS",
        "experience": "1 Years",
        "about": "Dr. Patel treats common illnesses and chronic conditions.",
        "fees": 30,
        "available": True,
        "address": {"line1": "37th Cross, Richmond", "line2": "Circle, Ring Road, London"},
        "slots_booked": {},
    },
]

# In-memory storage
doctors = []
appointments = []


def reset_state():
    """Restore the seed doctors and drop all appointments."""
    doctors[:] = copy.deepcopy(SEED_DOCTORS)
    appointments.clear()


reset_state()


def current_user() -> Optional[str]:
    """Resolve the user id from the ``token`` header."""
    return USERS.get(request.headers.get("token", ""))


def not_authorized():
    return jsonify({"success": False, "message": "Not Authorized Login Again"}), 401


def find_doctor(doc_id: str):
    return next((d for d in doctors if d["_id"] == doc_id), None)


def find_appointment(appointment_id: str, user_id: str):
    return next(
        (a for a in appointments if a["_id"] == appointment_id and a["userId"] == user_id),
        None
    )


def public_doctor(doctor: dict) -> dict:
    """Doctor snapshot embedded in appointments (no booking map)."""
    return {k: v for k, v in doctor.items() if k != "slots_booked"}


@app.route("/api/doctor/list", methods=["GET"])
def list_doctors():
    return jsonify({"success": True, "doctors": doctors})


@app.route("/api/user/my-appointments", methods=["GET"])
def my_appointments():
    user_id = current_user()
    if not user_id:
        return not_authorized()
    mine = [a for a in appointments if a["userId"] == user_id]
    return jsonify({"success": True, "appointments": mine})


@app.route("/api/user/book-appointment", methods=["POST"])
def book_appointment():
    user_id = current_user()
    if not user_id:
        return not_authorized()

    data = request.get_json(silent=True) or {}
    doc_id = data.get("docId")
    slot_date = data.get("slotDate")
    slot_time = data.get("slotTime")
    if not doc_id or not slot_date or not slot_time:
        return jsonify({"success": False, "message": "Missing booking details"}), 400

    doctor = find_doctor(doc_id)
    if not doctor:
        return jsonify({"success": False, "message": "Doctor not found"}), 404
    if not doctor["available"]:
        return jsonify({"success": False, "message": "Doctor not available"})

    booked = doctor["slots_booked"].setdefault(slot_date, [])
    if slot_time in booked:
        return jsonify({"success": False, "message": "Slot not available"})
    booked.append(slot_time)

    appointment = {
        "_id": f"appt-{uuid.uuid4().hex[:8]}",
        "userId": user_id,
        "docId": doc_id,
        "slotDate": slot_date,
        "slotTime": slot_time,
        "docData": public_doctor(doctor),
        "amount": doctor["fees"],
        "date": int(time.time() * 1000),
        "cancelled": False,
        "payment": False,
        "isCompleted": False,
    }
    appointments.append(appointment)
    logger.info("appointment_booked", appointment_id=appointment["_id"], doc_id=doc_id)

    return jsonify({"success": True, "message": "Appointment Booked"})


@app.route("/api/user/cancel-appointment", methods=["POST"])
def cancel_appointment():
    user_id = current_user()
    if not user_id:
        return not_authorized()

    data = request.get_json(silent=True) or {}
    appointment = find_appointment(data.get("appointmentId", ""), user_id)
    if not appointment:
        return jsonify({"success": False, "message": "Unauthorized action"})
    if appointment["cancelled"]:
        return jsonify({"success": False, "message": "Appointment already cancelled"})

    appointment["cancelled"] = True
    doctor = find_doctor(appointment["docId"])
    if doctor:
        booked = doctor["slots_booked"].get(appointment["slotDate"], [])
        if appointment["slotTime"] in booked:
            booked.remove(appointment["slotTime"])
    logger.info("appointment_cancelled", appointment_id=appointment["_id"])

    return jsonify({"success": True, "message": "Appointment Cancelled"})


@app.route("/api/user/payment-razorpay", methods=["POST"])
def payment_razorpay():
    user_id = current_user()
    if not user_id:
        return not_authorized()

    data = request.get_json(silent=True) or {}
    appointment = find_appointment(data.get("appointmentId", ""), user_id)
    if not appointment or appointment["cancelled"]:
        return jsonify({"success": False, "message": "Appointment Cancelled or not found"})

    order = {
        "id": f"order_{uuid.uuid4().hex[:14]}",
        "amount": int(round(appointment["amount"] * 100)),
        "currency": PAYMENT_CURRENCY,
        "receipt": appointment["_id"],
    }
    return jsonify({"success": True, "order": order})


if __name__ == "__main__":
    setup_structured_logging(config.LOG_LEVEL)
    print(f"Starting mock booking API on http://localhost:{config.MOCK_API_PORT}")
    app.run(host="0.0.0.0", port=config.MOCK_API_PORT, debug=False)
