"""HTTP client for the booking backend.

Pattern: one pooled requests.Session, per-call request ids, circuit breaker
protection and envelope parsing with pydantic. No automatic retries: a
failed action is re-triggered by the user.
"""
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter

from medibook import config
from medibook.circuit_breaker import CircuitBreaker, CircuitBreakerOpen
from medibook.errors import TransportError
from medibook.logging_config import generate_request_id
from medibook.models import (
    ApiEnvelope,
    AppointmentListResponse,
    DoctorListResponse,
    PaymentOrderResponse,
)

logger = logging.getLogger(__name__)

EnvelopeT = TypeVar("EnvelopeT", bound=ApiEnvelope)


def create_http_session(pool_size: int = config.HTTP_POOL_SIZE) -> requests.Session:
    """
    Create a pooled session that never retries on its own.

    Args:
        pool_size: Connections kept per host

    Returns:
        Configured requests.Session
    """
    session = requests.Session()
    adapter = HTTPAdapter(
        max_retries=0,
        pool_connections=pool_size,
        pool_maxsize=pool_size,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/json"})
    return session


class BackendClient:
    """Calls the user-facing booking endpoints."""

    def __init__(
        self,
        base_url: str = config.BACKEND_URL,
        session: Optional[requests.Session] = None,
        timeout: float = config.HTTP_TIMEOUT_SECONDS,
        circuit_breaker: Optional[CircuitBreaker] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or create_http_session()
        self.timeout = timeout
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            "booking-backend",
            failure_threshold=config.CIRCUIT_FAILURE_THRESHOLD,
            timeout=config.CIRCUIT_TIMEOUT_SECONDS,
            failure_types=(requests.exceptions.RequestException,),
        )

    def list_doctors(self) -> DoctorListResponse:
        """GET /api/doctor/list"""
        return self._call("GET", "/api/doctor/list", DoctorListResponse)

    def my_appointments(self, token: str) -> AppointmentListResponse:
        """GET /api/user/my-appointments"""
        return self._call(
            "GET", "/api/user/my-appointments", AppointmentListResponse, token=token
        )

    def book_appointment(
        self,
        token: str,
        doc_id: str,
        slot_date: str,
        slot_time: str
    ) -> ApiEnvelope:
        """POST /api/user/book-appointment"""
        return self._call(
            "POST", "/api/user/book-appointment", ApiEnvelope, token=token,
            json={"docId": doc_id, "slotDate": slot_date, "slotTime": slot_time}
        )

    def cancel_appointment(self, token: str, appointment_id: str) -> ApiEnvelope:
        """POST /api/user/cancel-appointment"""
        return self._call(
            "POST", "/api/user/cancel-appointment", ApiEnvelope, token=token,
            json={"appointmentId": appointment_id}
        )

    def create_payment_order(self, token: str, appointment_id: str) -> PaymentOrderResponse:
        """POST /api/user/payment-razorpay"""
        return self._call(
            "POST", "/api/user/payment-razorpay", PaymentOrderResponse, token=token,
            json={"appointmentId": appointment_id}
        )

    def _call(
        self,
        method: str,
        path: str,
        model: Type[EnvelopeT],
        token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> EnvelopeT:
        """
        Send one request and parse the envelope.

        Raises:
            TransportError: Connection failure, open circuit, or a body that
                is not a valid envelope
        """
        url = f"{self.base_url}{path}"
        headers = {"X-Request-ID": generate_request_id()}
        if token:
            headers["token"] = token

        try:
            response = self.circuit_breaker.call(
                self.session.request,
                method, url, headers=headers, json=json, timeout=self.timeout
            )
        except CircuitBreakerOpen as e:
            logger.warning("Skipping %s %s: %s", method, path, e)
            raise TransportError(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise TransportError(f"Could not reach backend: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error("%s %s returned non-JSON (status %s)", method, path, response.status_code)
            raise TransportError(f"Invalid response from backend (status {response.status_code})") from e

        try:
            envelope = model.model_validate(body)
        except ValidationError as e:
            server_message = body.get("message") if isinstance(body, dict) else None
            logger.error("%s %s returned malformed envelope: %s", method, path, e)
            raise TransportError("Malformed response from backend", server_message) from e

        logger.info(
            "%s %s -> %s success=%s request_id=%s",
            method, path, response.status_code, envelope.success, headers["X-Request-ID"]
        )
        return envelope
