"""Configuration for the patient booking views.

Business rules are plain constants; deployment values come from the
environment (a local .env file is loaded first).
"""
import os

from dotenv import load_dotenv

# Load environment
load_dotenv()

# Backend
BACKEND_URL = os.getenv("MEDIBOOK_BACKEND_URL", "http://localhost:4000")
AUTH_TOKEN = os.getenv("MEDIBOOK_TOKEN", "")
CURRENCY_SYMBOL = os.getenv("MEDIBOOK_CURRENCY_SYMBOL", "$")
LOG_LEVEL = os.getenv("MEDIBOOK_LOG_LEVEL", "INFO")

# HTTP client
HTTP_TIMEOUT_SECONDS = int(os.getenv("MEDIBOOK_HTTP_TIMEOUT", "15"))
HTTP_POOL_SIZE = 10
CIRCUIT_FAILURE_THRESHOLD = 5
CIRCUIT_TIMEOUT_SECONDS = 60

# Slot window
BOOKING_WINDOW_DAYS = 7
OPENING_HOUR = 10
CLOSING_HOUR = 21
SLOT_DURATION_MINUTES = 30

# Wait before refreshing after a cancellation so the backend can free the slot
CANCEL_PROPAGATION_DELAY_SECONDS = 0.5

# Payments
RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY_ID", "")
PAYMENT_TITLE = "Appointment Payment"

# Routes
HOME_ROUTE = "/"
LOGIN_ROUTE = "/login"
MY_APPOINTMENTS_ROUTE = "/my-appointments"

# Mock backend
MOCK_API_PORT = int(os.getenv("MEDIBOOK_MOCK_PORT", "4000"))
