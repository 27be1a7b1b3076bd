"""Shared test fixtures."""
from datetime import datetime
from unittest.mock import Mock

import pytest

from medibook.context import AppContext
from medibook.http_client import BackendClient
from medibook.models import Doctor
from medibook.notifications import Navigator, Notifier

# Wednesday, 9 July 2025, 09:00 local time
NOW = datetime(2025, 7, 9, 9, 0)


def make_doctor_payload(doc_id: str = "doc1", **overrides) -> dict:
    """Doctor JSON as the directory endpoint returns it."""
    payload = {
        "_id": doc_id,
        "name": "Dr. Richard James",
        "image": "/images/doc1.png",
        "speciality": "General physician",
        "degree": "MBBS",
        "experience": "4 Years",
        "about": "Committed to comprehensive medical care.",
        "fees": 50,
        "address": {"line1": "17th Cross, Richmond", "line2": "Circle, Ring Road, London"},
        "slots_booked": {"9_7_2025": ["06:00 PM"]},
    }
    payload.update(overrides)
    return payload


def make_appointment_payload(appointment_id: str = "appt-1", **overrides) -> dict:
    """Appointment JSON as my-appointments returns it."""
    payload = {
        "_id": appointment_id,
        "userId": "user-001",
        "docId": "doc1",
        "slotDate": "9_7_2025",
        "slotTime": "06:00 PM",
        "docData": {
            "name": "Dr. Richard James",
            "speciality": "General physician",
            "image": "/images/doc1.png",
            "address": {"line1": "17th Cross, Richmond", "line2": "Circle, Ring Road, London"},
        },
        "amount": 50,
        "date": 1752051600000,
        "cancelled": False,
        "payment": False,
        "isCompleted": False,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def doctors():
    """Three cached doctors, two sharing a speciality."""
    return [
        Doctor.model_validate(make_doctor_payload("doc1")),
        Doctor.model_validate(make_doctor_payload(
            "doc2", name="Dr. Emily Larson", speciality="Gynecologist", slots_booked={}
        )),
        Doctor.model_validate(make_doctor_payload(
            "doc3", name="Dr. Sarah Patel", fees=30, slots_booked={}
        )),
    ]


@pytest.fixture
def client():
    """Backend client double; tests set return values per endpoint."""
    mock_client = Mock(spec=BackendClient)
    mock_client.base_url = "http://api.test"
    return mock_client


@pytest.fixture
def context(client, doctors):
    """Signed-in context with a warm doctor cache."""
    return AppContext(
        client,
        token="test-token",
        doctors=doctors,
        currency_symbol="$",
        notifier=Notifier(),
        navigator=Navigator(),
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def doctor_payload():
    return make_doctor_payload


@pytest.fixture
def appointment_payload():
    return make_appointment_payload
