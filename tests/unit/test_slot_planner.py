"""Tests for the rolling 7-day slot planner."""
from datetime import date, datetime

import pytest

from medibook.slot_planner import booked_labels, plan_slots, window_start

ALL_DAY_LABELS = [
    "10:00 AM", "10:30 AM", "11:00 AM", "11:30 AM", "12:00 PM", "12:30 PM",
    "01:00 PM", "01:30 PM", "02:00 PM", "02:30 PM", "03:00 PM", "03:30 PM",
    "04:00 PM", "04:30 PM", "05:00 PM", "05:30 PM", "06:00 PM", "06:30 PM",
    "07:00 PM", "07:30 PM", "08:00 PM", "08:30 PM",
]


class TestWindow:
    """Day windows and the start-of-today rule."""

    def test_morning_starts_at_opening(self):
        buckets = plan_slots(datetime(2025, 7, 9, 9, 0))

        assert len(buckets) == 7
        assert buckets[0].date == date(2025, 7, 9)
        assert buckets[0].times == ALL_DAY_LABELS
        assert len(buckets[0].slots) == 22

    def test_following_days_are_full(self):
        buckets = plan_slots(datetime(2025, 7, 9, 14, 20))

        for bucket in buckets[1:]:
            assert bucket.times == ALL_DAY_LABELS

    def test_afternoon_starts_next_hour(self):
        buckets = plan_slots(datetime(2025, 7, 9, 14, 20))

        assert buckets[0].times[0] == "03:00 PM"
        assert buckets[0].times[-1] == "08:30 PM"
        assert len(buckets[0].slots) == 12

    def test_past_half_hour_starts_at_half_past_next_hour(self):
        buckets = plan_slots(datetime(2025, 7, 9, 14, 45))

        assert buckets[0].times[0] == "03:30 PM"

    def test_ten_forty_five_keeps_opening_hour(self):
        # hour 10 is not past 10, only the minute moves
        buckets = plan_slots(datetime(2025, 7, 9, 10, 45))

        assert buckets[0].times[0] == "10:30 AM"

    def test_seconds_are_ignored(self):
        start = window_start(datetime(2025, 7, 9, 14, 20, 59, 999), 0)

        assert start == datetime(2025, 7, 9, 15, 0)

    def test_late_evening_omits_today(self):
        buckets = plan_slots(datetime(2025, 7, 9, 20, 45))

        assert len(buckets) == 6
        assert buckets[0].date == date(2025, 7, 10)

    def test_start_at_closing_omits_today(self):
        buckets = plan_slots(datetime(2025, 7, 9, 20, 10))

        assert buckets[0].date == date(2025, 7, 10)

    def test_one_slot_left(self):
        buckets = plan_slots(datetime(2025, 7, 9, 19, 59))

        assert buckets[0].date == date(2025, 7, 9)
        assert buckets[0].times == ["08:30 PM"]

    def test_before_midnight_rolls_start_into_next_day(self):
        buckets = plan_slots(datetime(2025, 7, 9, 23, 40))

        assert len(buckets) == 6
        assert all(bucket.date != date(2025, 7, 9) for bucket in buckets)

    def test_no_slot_passes_closing(self):
        for bucket in plan_slots(datetime(2025, 7, 9, 9, 0)):
            for slot in bucket.slots:
                assert slot.datetime.date() == bucket.date
                assert 10 <= slot.datetime.hour < 21


class TestCalendarBoundaries:
    """Calendar-aware day addition."""

    def test_month_boundary(self):
        buckets = plan_slots(datetime(2025, 7, 30, 9, 0))

        assert [b.date_key for b in buckets] == [
            "30_7_2025", "31_7_2025", "1_8_2025", "2_8_2025",
            "3_8_2025", "4_8_2025", "5_8_2025",
        ]

    def test_year_boundary(self):
        buckets = plan_slots(datetime(2025, 12, 29, 9, 0))

        assert buckets[-1].date_key == "4_1_2026"
        assert buckets[3].date_key == "1_1_2026"

    def test_leap_day(self):
        buckets = plan_slots(datetime(2028, 2, 27, 9, 0))

        assert buckets[2].date_key == "29_2_2028"


class TestBookedSlots:
    """Booked labels are skipped, neighbours kept."""

    def test_booked_label_excluded(self):
        booked = {"9_7_2025": ["06:00 PM"]}

        buckets = plan_slots(datetime(2025, 7, 9, 9, 0), booked)
        today = buckets[0].times

        assert "06:00 PM" not in today
        assert "05:30 PM" in today
        assert "06:30 PM" in today
        assert len(today) == 21

    def test_booking_only_affects_its_day(self):
        booked = {"9_7_2025": ["06:00 PM"]}

        buckets = plan_slots(datetime(2025, 7, 9, 9, 0), booked)

        assert "06:00 PM" in buckets[1].times

    def test_booked_labels_never_emitted(self):
        booked = {
            "9_7_2025": ["10:00 AM", "03:30 PM"],
            "11_7_2025": ["08:30 PM", "12:00 PM", "01:00 PM"],
        }

        for bucket in plan_slots(datetime(2025, 7, 9, 9, 0), booked):
            for label in booked.get(bucket.date_key, []):
                assert label not in bucket.times

    def test_non_canonical_booked_labels_are_normalized(self):
        booked = {"9_7_2025": ["6:00 pm", "05:30 pm"]}

        today = plan_slots(datetime(2025, 7, 9, 9, 0), booked)[0].times

        assert "06:00 PM" not in today
        assert "05:30 PM" not in today

    def test_fully_booked_day_is_omitted(self):
        booked = {"10_7_2025": list(ALL_DAY_LABELS)}

        buckets = plan_slots(datetime(2025, 7, 9, 9, 0), booked)

        assert len(buckets) == 6
        assert "10_7_2025" not in [b.date_key for b in buckets]

    @pytest.mark.parametrize("malformed", [
        {"9_7_2025": "06:00 PM"},
        {"9_7_2025": None},
        {"9_7_2025": {"time": "06:00 PM"}},
        {"9_7_2025": [None, 42]},
        None,
        "not a mapping",
    ])
    def test_malformed_bookings_count_as_none(self, malformed):
        today = plan_slots(datetime(2025, 7, 9, 9, 0), malformed)[0]

        assert today.times == ALL_DAY_LABELS

    def test_booked_labels_helper(self):
        assert booked_labels({"9_7_2025": ["6:00 pm"]}, "9_7_2025") == frozenset({"06:00 PM"})
        assert booked_labels({}, "9_7_2025") == frozenset()


class TestSlotValues:
    """Slot contents and purity."""

    def test_slot_formats(self):
        today = plan_slots(datetime(2025, 7, 9, 9, 0))[0]
        slot = next(s for s in today.slots if s.datetime == datetime(2025, 7, 9, 18, 0))

        assert slot.time == "06:00 PM"
        assert slot.date_key == "9_7_2025"

    def test_slots_are_half_hour_apart(self):
        today = plan_slots(datetime(2025, 7, 9, 9, 0))[0]

        gaps = {
            (later.datetime - earlier.datetime).total_seconds()
            for earlier, later in zip(today.slots, today.slots[1:])
        }
        assert gaps == {1800}

    def test_idempotent(self):
        now = datetime(2025, 7, 9, 14, 20)
        booked = {"9_7_2025": ["06:00 PM"]}

        assert plan_slots(now, booked) == plan_slots(now, booked)

    def test_does_not_mutate_bookings(self):
        booked = {"9_7_2025": ["6:00 pm"]}

        plan_slots(datetime(2025, 7, 9, 9, 0), booked)

        assert booked == {"9_7_2025": ["6:00 pm"]}

    def test_weekday_labels(self):
        buckets = plan_slots(datetime(2025, 7, 9, 9, 0))

        assert [b.weekday for b in buckets] == ["WED", "THU", "FRI", "SAT", "SUN", "MON", "TUE"]
