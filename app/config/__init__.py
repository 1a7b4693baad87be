# Django 시작 시 Celery 앱이 로드되어 @shared_task 가 이 앱을 사용하도록 함
from .celery import app as celery_app

__all__ = ("celery_app",)
