from celery import Celery

from app.core.config import settings

celery_app = Celery(
    "collection_tasks",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["collection.tasks.images"],
)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_acks_late=True,
)
