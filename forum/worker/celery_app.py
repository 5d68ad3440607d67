"""Celery application for outbound mail.

Run with ``celery -A forum.worker.celery_app worker``.
"""

from celery import Celery

from forum.config import Settings

settings = Settings()

celery_app = Celery(
    "forum",
    broker=settings.mail.broker_url,
    include=["forum.worker.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    task_ignore_result=True,
    task_time_limit=120,
    task_soft_time_limit=60,
    worker_prefetch_multiplier=1,
)
