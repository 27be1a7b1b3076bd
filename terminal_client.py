#!/usr/bin/env python3
"""Terminal client for the patient booking screens.

Usage:
    python terminal_client.py [TOKEN]

The backend URL comes from MEDIBOOK_BACKEND_URL; TOKEN defaults to MEDIBOOK_TOKEN.

Drives BookingView and AppointmentListView against a running backend
(start ``python mock_api.py`` for a local one).
"""
import shlex
import sys
from typing import Optional

from medibook import config
from medibook.context import AppContext
from medibook.http_client import BackendClient
from medibook.logging_config import setup_structured_logging
from medibook.notifications import NotificationLevel
from medibook.views import AppointmentListView, BookingView


class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


LEVEL_COLORS = {
    NotificationLevel.SUCCESS: Colors.GREEN,
    NotificationLevel.INFO: Colors.BLUE,
    NotificationLevel.WARNING: Colors.YELLOW,
    NotificationLevel.ERROR: Colors.RED,
}

HELP = """
Commands:
  doctors               - List doctors
  open <doctor_id>      - Open a doctor's booking page
  day <n>               - Select day tab n (0-based)
  time <HH:MM AM>       - Select a time slot
  book                  - Book the selected slot
  appointments          - Show my appointments
  pay <appointment_id>  - Pay for an appointment
  cancel <appointment_id> - Cancel an appointment
  help / quit
"""


def print_colored(text: str, color: str = Colors.RESET):
    print(f"{color}{text}{Colors.RESET}")


def flush_notifications(context: AppContext):
    for note in context.notifier.drain():
        print_colored(f"[{note.level.value.upper()}] {note.message}", LEVEL_COLORS[note.level])


def show_doctors(context: AppContext):
    for doctor in context.doctors:
        print(f"  {doctor.id:<8} {doctor.name} - {doctor.speciality}")


def show_booking(view: BookingView):
    page = view.render()
    if page is None:
        return
    print_colored(f"\n{page.doctor.name}", Colors.BOLD)
    print(f"  {page.doctor.qualification} ({page.doctor.experience})")
    print(f"  {page.doctor.about}")
    print(f"  {page.doctor.fee}\n")
    print("  Days:  " + "  ".join(
        f"{'*' if tab.selected else ' '}{i}:{tab.weekday} {tab.day}"
        for i, tab in enumerate(page.days)
    ))
    print("  Times: " + ", ".join(
        f"[{chip.time}]" if chip.selected else chip.time for chip in page.times
    ))
    if page.related:
        print("  Related: " + ", ".join(doc.name for doc in page.related))
    print(f"  Book enabled: {page.can_book}\n")


def show_appointments(view: AppointmentListView):
    cards = view.render()
    if not cards:
        print("  No appointments.")
    for card in cards:
        print_colored(f"\n  {card.appointment_id}  {card.doctor_name}", Colors.BOLD)
        print(f"    {card.speciality}")
        print(f"    Address: {card.address_line1}, {card.address_line2}")
        print(f"    Date & Time: {card.date_time}")
        print(f"    {card.status or ' / '.join(card.actions)}")


def main():
    token = sys.argv[1] if len(sys.argv) > 1 else config.AUTH_TOKEN

    setup_structured_logging("WARNING")
    context = AppContext(BackendClient(config.BACKEND_URL), token=token)
    context.refresh_doctors()
    appointments = AppointmentListView(context)
    booking: Optional[BookingView] = None

    print_colored("MediBook - patient booking", Colors.BOLD)
    print(HELP)
    flush_notifications(context)

    while True:
        try:
            line = input(f"{Colors.BLUE}{context.navigator.current_route}> {Colors.RESET}").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line:
            continue

        command, *params = shlex.split(line)
        command = command.lower()

        if command in ("quit", "exit"):
            break
        elif command == "help":
            print(HELP)
        elif command == "doctors":
            show_doctors(context)
        elif command == "open" and params:
            booking = BookingView(context, params[0])
            if booking.load():
                show_booking(booking)
        elif command == "day" and params and params[0].isdigit() and booking:
            booking.select_day(int(params[0]))
            show_booking(booking)
        elif command == "time" and params and booking:
            booking.select_time(" ".join(params))
            show_booking(booking)
        elif command == "book" and booking:
            if booking.book_appointment():
                appointments.load()
                show_appointments(appointments)
        elif command == "appointments":
            appointments.load()
            show_appointments(appointments)
        elif command == "pay" and params:
            if appointments.pay_online(params[0]):
                options = appointments.payment_gateway.last_options
                print(f"  Checkout opened for order {options.order_id} "
                      f"({options.amount} {options.currency})")
        elif command == "cancel" and params:
            if appointments.cancel_appointment(params[0]):
                show_appointments(appointments)
        else:
            print("Unknown command. Type 'help'.")

        flush_notifications(context)


if __name__ == "__main__":
    main()
