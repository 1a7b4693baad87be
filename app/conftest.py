# app/conftest.py
"""
pytest fixtures for Celery testing
"""
import pytest

_EAGER_KEYS = ("task_always_eager", "task_eager_propagates")


@pytest.fixture(scope="session")
def celery_app():
    """
    프로젝트 Celery 앱 인스턴스를 제공합니다.
    """
    from config.celery import app

    return app


@pytest.fixture(autouse=True)
def celery_eager_mode(celery_app):
    """
    모든 테스트에서 Celery 를 Eager 모드(동기 실행)로 설정합니다.

    .delay()/apply_async() 가 브로커(redis)에 연결하지 않고 즉시 실행되도록 합니다.
    namespace="CELERY" 설정에서는 CELERY_ 접두 키가 소문자 키보다 먼저 조회되므로
    두 표기를 함께 덮어씁니다.
    """
    conf = celery_app.conf
    original = {key: conf[key] for key in _EAGER_KEYS}
    conf.update(_eager_overrides(True))
    yield celery_app
    for key, value in original.items():
        conf.update({key: value, f"CELERY_{key.upper()}": value})


def _eager_overrides(enabled: bool) -> dict:
    overrides = {}
    for key in _EAGER_KEYS:
        overrides[key] = enabled
        overrides[f"CELERY_{key.upper()}"] = enabled
    return overrides
