import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("slot_booking_engine")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Completed / no-show transitions for slots that have ended
    "complete-past-bookings": {
        "task": "bookings.complete_past_bookings",
        "schedule": crontab(minute="*/15"),
        "options": {"expires": 600},
    },
}
