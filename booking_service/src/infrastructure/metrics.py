from prometheus_client import Counter

appointments_booked_total = Counter(
    "appointments_booked_total",
    "Total appointments booked",
)

appointments_cancelled_total = Counter(
    "appointments_cancelled_total",
    "Total appointments cancelled",
)

reminders_scheduled_total = Counter(
    "reminders_scheduled_total",
    "Total reminders scheduled at booking time",
)

reminders_skipped_total = Counter(
    "reminders_skipped_total",
    "Total bookings that received no reminder",
)

reminder_scans_total = Counter(
    "reminder_dispatch_scans_total",
    "Total dispatch loop scan cycles",
)

reminders_dispatched_total = Counter(
    "reminders_dispatched_total",
    "Total reminders dispatched successfully",
)

reminders_dispatch_failed_total = Counter(
    "reminders_dispatch_failed_total",
    "Total reminder dispatches that failed",
)

booking_notifications_failed_total = Counter(
    "booking_notifications_failed_total",
    "Total confirmation and cancellation notifications that failed",
)
