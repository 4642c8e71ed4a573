"""
Celery workers module.

Async task processing for post indexing.

Dependencies: celery, blogsearch.configs
System role: Background task processing
"""

from celery import Celery
from celery.signals import setup_logging

from blogsearch.configs import get_settings
from blogsearch.observability import configure_logging

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "blogsearch",
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["blogsearch.workers.tasks.indexing"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
    task_max_retries=celery_config.task_max_retries,
    task_acks_late=True,
)


@setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Use the application log format instead of Celery's."""
    configure_logging(settings.log_level)
