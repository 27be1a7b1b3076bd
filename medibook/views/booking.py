"""Doctor detail page with the slot picker and the booking action."""
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from medibook import config
from medibook.context import AppContext
from medibook.errors import TransportError
from medibook.formatting import format_fee, normalize_time_label
from medibook.logging_config import get_logger
from medibook.models import Appointment, Doctor
from medibook.slot_planner import DayBucket, plan_slots

logger = get_logger(__name__)


@dataclass(frozen=True)
class DoctorProfile:
    name: str
    image: str
    qualification: str
    experience: str
    about: str
    fee: str


@dataclass(frozen=True)
class DayTab:
    weekday: str
    day: int
    selected: bool


@dataclass(frozen=True)
class TimeChip:
    time: str
    selected: bool


@dataclass(frozen=True)
class BookingPage:
    """Everything the doctor page shows, ready to draw."""
    doctor: DoctorProfile
    days: List[DayTab]
    times: List[TimeChip]
    can_book: bool
    related: List[Doctor]


class BookingView:
    """
    Booking screen for a single doctor.

    State:
        doc_info: Doctor resolved from the context cache (None until loaded)
        doc_slots: Day buckets from the slot planner
        slot_index: Selected day bucket
        slot_time: Selected time label ("" when none)
        user_appointments: The user's appointments with this doctor
    """

    def __init__(
        self,
        context: AppContext,
        doc_id: str,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.context = context
        self.doc_id = doc_id
        self._clock = clock
        self._sleep = sleep
        self.doc_info: Optional[Doctor] = None
        self.doc_slots: List[DayBucket] = []
        self.slot_index = 0
        self.slot_time = ""
        self.user_appointments: List[Appointment] = []

    def load(self) -> bool:
        """
        Resolve the doctor and prepare the picker.

        Returns:
            False if the doctor is unknown (the user was sent home)
        """
        if self.fetch_doc_info() is None:
            return False
        self.reset_selection()
        self.fetch_user_appointments()
        return True

    def fetch_doc_info(self) -> Optional[Doctor]:
        """Look the doctor up in the cached directory and regenerate slots."""
        doctor = self.context.find_doctor(self.doc_id)
        if doctor is None:
            logger.warning("doctor_not_found", doc_id=self.doc_id)
            self.doc_info = None
            self.doc_slots = []
            self.context.navigator.navigate(config.HOME_ROUTE)
            return None

        self.doc_info = doctor
        self.get_available_slots()
        return doctor

    def get_available_slots(self) -> List[DayBucket]:
        if self.doc_info is None:
            return []
        self.doc_slots = plan_slots(self._clock(), self.doc_info.slots_booked)
        logger.debug(
            "slots_generated",
            doc_id=self.doc_id,
            days=[bucket.date_key for bucket in self.doc_slots],
        )
        return self.doc_slots

    def fetch_user_appointments(self) -> List[Appointment]:
        """Reload the user's appointments and keep this doctor's."""
        token = self.context.token
        if not token:
            return self.user_appointments

        try:
            data = self.context.client.my_appointments(token)
        except TransportError as e:
            logger.error("appointments_fetch_failed", error=str(e))
            self.context.notifier.error(e.user_message("Failed to fetch appointments"))
            return self.user_appointments

        if not data.success:
            self.context.notifier.error(data.message or "Failed to fetch appointments")
            return self.user_appointments

        self.user_appointments = [
            appt for appt in data.appointments if appt.doc_id == self.doc_id
        ]
        return self.user_appointments

    def select_day(self, index: int):
        if not 0 <= index < len(self.doc_slots):
            logger.warning("day_out_of_range", index=index, days=len(self.doc_slots))
            return
        self.slot_index = index

    def select_time(self, label: str):
        self.slot_time = normalize_time_label(label)

    def reset_selection(self):
        self.slot_index = 0
        self.slot_time = ""

    @property
    def selected_day(self) -> Optional[DayBucket]:
        if 0 <= self.slot_index < len(self.doc_slots):
            return self.doc_slots[self.slot_index]
        return None

    @property
    def can_book(self) -> bool:
        return bool(self.slot_time) and bool(self.context.token)

    def book_appointment(self) -> bool:
        """
        Book the selected slot.

        Returns:
            True if the backend accepted the booking
        """
        token = self.context.token
        if not token:
            self.context.notifier.warning("Please login to book an appointment")
            self.context.navigator.navigate(config.LOGIN_ROUTE)
            return False

        day = self.selected_day
        if not self.slot_time or day is None:
            self.context.notifier.warning("Please select a time slot")
            return False

        slot_date = day.slots[0].date_key
        slot_time = normalize_time_label(self.slot_time)
        logger.info("booking_slot", doc_id=self.doc_id, slot_date=slot_date, slot_time=slot_time)

        try:
            data = self.context.client.book_appointment(token, self.doc_id, slot_date, slot_time)
        except TransportError as e:
            logger.error("booking_failed", error=str(e))
            self.context.notifier.error(e.user_message("Failed to book appointment"))
            return False

        if not data.success:
            self.context.notifier.error(data.message or "Failed to book appointment")
            return False

        self.context.notifier.success(data.message or "Appointment booked")
        self.refresh()
        self.reset_selection()
        self.context.navigator.navigate(config.MY_APPOINTMENTS_ROUTE)
        return True

    def cancel_appointment(self, appointment_id: str) -> bool:
        """
        Cancel one of the user's appointments with this doctor.

        Returns:
            True if the backend cancelled it
        """
        token = self.context.token
        if not token:
            self.context.notifier.warning("Please login to cancel an appointment")
            self.context.navigator.navigate(config.LOGIN_ROUTE)
            return False

        logger.info("cancelling_appointment", appointment_id=appointment_id)
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
        self.refresh()
        self.reset_selection()
        return True

    def refresh(self):
        """Doctor directory, then doctor info, then appointments; in that order."""
        self.context.refresh_doctors()
        self.fetch_doc_info()
        self.fetch_user_appointments()

    def related_doctors(self, limit: Optional[int] = None) -> List[Doctor]:
        """Other doctors sharing this doctor's speciality."""
        if self.doc_info is None:
            return []
        related = [
            doc for doc in self.context.doctors
            if doc.speciality == self.doc_info.speciality and doc.id != self.doc_id
        ]
        return related[:limit] if limit is not None else related

    def render(self) -> Optional[BookingPage]:
        """Build the page view model; None while no doctor is resolved."""
        doctor = self.doc_info
        if doctor is None:
            return None

        profile = DoctorProfile(
            name=doctor.name,
            image=doctor.image,
            qualification=f"{doctor.degree} - {doctor.speciality}",
            experience=doctor.experience,
            about=doctor.about,
            fee=f"Appointment fee: {self.context.currency_symbol}{format_fee(doctor.fees)}",
        )
        days = [
            DayTab(weekday=bucket.weekday, day=bucket.date.day, selected=index == self.slot_index)
            for index, bucket in enumerate(self.doc_slots)
        ]
        day = self.selected_day
        times = [
            TimeChip(time=slot.time, selected=slot.time == self.slot_time)
            for slot in (day.slots if day else [])
        ]
        return BookingPage(
            doctor=profile,
            days=days,
            times=times,
            can_book=self.can_book,
            related=self.related_doctors(),
        )
