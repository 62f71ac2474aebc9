import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("innkeeper")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Overdue arrivals become no-shows and free their nights, daily after midnight
    "mark-no-shows": {
        "task": "reservations.mark_no_shows",
        "schedule": crontab(minute=30, hour=0),
    },
}
