"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from gms.config import get_settings

settings = get_settings()

app = Celery(
    "gms",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["gms.tasks.expiry_sweep"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    task_soft_time_limit=240,  # 4 minutes soft limit
    beat_schedule={
        "sweep-expired-groceries": {
            "task": "gms.tasks.expiry_sweep.sweep_all_users",
            "schedule": crontab(hour=settings.sweep_hour_utc, minute=0),
        },
    },
)
