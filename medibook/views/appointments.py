"""My Appointments page: list, cancel and pay online."""
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from medibook import config
from medibook.context import AppContext
from medibook.errors import TransportError
from medibook.formatting import slot_date_format
from medibook.logging_config import get_logger
from medibook.models import Appointment
from medibook.payments import CheckoutOptions, LoggingPaymentGateway, PaymentGateway

logger = get_logger(__name__)

UNKNOWN_DOCTOR = "Unknown Doctor"
UNKNOWN_SPECIALITY = "Speciality Not Available"
NOT_AVAILABLE = "N/A"

ACTION_PAY = "Pay Online"
ACTION_CANCEL = "Cancel Appointment"
STATUS_CANCELLED = "Appointment Cancelled"


@dataclass(frozen=True)
class AppointmentCard:
    """One row of the appointments list."""
    appointment_id: str
    doctor_name: str
    speciality: str
    image: str
    address_line1: str
    address_line2: str
    date_time: str
    actions: Tuple[str, ...]
    status: Optional[str] = None


def build_card(appointment: Appointment) -> AppointmentCard:
    """Render an appointment, substituting placeholders for missing data."""
    doctor = appointment.doc_data
    date_text = slot_date_format(appointment.slot_date) if appointment.slot_date else NOT_AVAILABLE

    if appointment.cancelled:
        actions, status = (), STATUS_CANCELLED
    elif appointment.payment:
        actions, status = (ACTION_CANCEL,), "Paid"
    else:
        actions, status = (ACTION_PAY, ACTION_CANCEL), None

    return AppointmentCard(
        appointment_id=appointment.id,
        doctor_name=doctor.name or UNKNOWN_DOCTOR,
        speciality=doctor.speciality or UNKNOWN_SPECIALITY,
        image=doctor.image or "",
        address_line1=doctor.address.line1 or NOT_AVAILABLE,
        address_line2=doctor.address.line2 or NOT_AVAILABLE,
        date_time=f"{date_text} | {appointment.slot_time or NOT_AVAILABLE}",
        actions=actions,
        status=status,
    )


class AppointmentListView:
    """The signed-in user's appointments, most recent first."""

    def __init__(
        self,
        context: AppContext,
        payment_gateway: Optional[PaymentGateway] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.context = context
        self.payment_gateway = payment_gateway or LoggingPaymentGateway()
        self._sleep = sleep
        self.appointments: List[Appointment] = []

    def load(self) -> List[Appointment]:
        """Fetch appointments when a token is available."""
        if self.context.token:
            self.get_user_appointments()
        return self.appointments

    def get_user_appointments(self) -> List[Appointment]:
        try:
            data = self.context.client.my_appointments(self.context.token)
        except TransportError as e:
            logger.error("appointments_fetch_failed", error=str(e))
            self.context.notifier.error(e.user_message("Failed to fetch appointments"))
            return self.appointments

        if not data.success:
            self.context.notifier.error(data.message or "Failed to fetch appointments")
            return self.appointments

        self.appointments = list(reversed(data.appointments))
        return self.appointments

    def render(self) -> List[AppointmentCard]:
        return [build_card(appointment) for appointment in self.appointments]

    def find(self, appointment_id: str) -> Optional[Appointment]:
        return next((a for a in self.appointments if a.id == appointment_id), None)

    def cancel_appointment(self, appointment_id: str) -> bool:
        """
        Cancel an appointment, then refresh the doctor cache and this list.

        Returns:
            True if the backend cancelled it
        """
        token = self.context.token
        if not token:
            self.context.notifier.warning("Please login to cancel an appointment")
            self.context.navigator.navigate(config.LOGIN_ROUTE)
            return False

        try:
            data = self.context.client.cancel_appointment(token, appointment_id)
        except TransportError as e:
            logger.error("cancellation_failed", appointment_id=appointment_id, error=str(e))
            self.context.notifier.error(e.user_message("Failed to cancel appointment"))
            return False

        if not data.success:
            self.context.notifier.error(data.message or "Failed to cancel appointment")
            return False

        self.context.notifier.success(data.message or "Appointment cancelled")
        self._sleep(config.CANCEL_PROPAGATION_DELAY_SECONDS)
        self.context.refresh_doctors()
        self.get_user_appointments()
        return True

    def pay_online(self, appointment_id: str) -> bool:
        """
        Request a payment order and open the checkout widget for it.

        Returns:
            True if the checkout was opened
        """
        token = self.context.token
        if not token:
            self.context.notifier.warning("Please login to pay for an appointment")
            self.context.navigator.navigate(config.LOGIN_ROUTE)
            return False

        try:
            data = self.context.client.create_payment_order(token, appointment_id)
        except TransportError as e:
            logger.error("payment_order_failed", appointment_id=appointment_id, error=str(e))
            self.context.notifier.error(e.user_message("Payment failed"))
            return False

        if not data.success or data.order is None:
            self.context.notifier.error(data.message or "Payment failed")
            return False

        options = CheckoutOptions.from_order(data.order)
        self.payment_gateway.open_checkout(options, self._on_payment_complete)
        return True

    def _on_payment_complete(self, result: Dict[str, Any]):
        logger.info("payment_completed", result=result)
