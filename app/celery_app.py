from celery import Celery

from app.config import settings

# Create Celery app
celery_app = Celery(
    "boletim",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["app.tasks"],  # Auto-discover tasks from this module
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=120,  # Standing evaluation is pure CPU work, never long-running
    task_soft_time_limit=100,
    worker_prefetch_multiplier=4,
)
