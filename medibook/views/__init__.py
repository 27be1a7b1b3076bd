"""View controllers for the patient booking screens."""
from medibook.views.appointments import AppointmentListView
from medibook.views.booking import BookingView

__all__ = ["AppointmentListView", "BookingView"]
