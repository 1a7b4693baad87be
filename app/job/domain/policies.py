"""
채용 공고 비즈니스 규칙 (순수 함수)

시간 창(window) 비교는 모두 호출자가 넘겨주는 now 기준입니다.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from job.domain.job import Job

EDIT_WINDOW = timedelta(days=90)
COMPANY_LOCK_WINDOW = timedelta(hours=24)
DUPLICATE_WINDOW = timedelta(days=7)
DELETE_COOLDOWN = timedelta(minutes=5)
NEW_POSTING_WARNING_WINDOW = timedelta(hours=1)
NEW_POSTING_BADGE_DAYS = 7

DEFAULT_COMPANY_BLACKLIST: tuple[str, ...] = (
    "spam company",
    "fake corp",
    "scam industries",
)

MAX_SEARCH_TERM_LENGTH = 100

_UUID_V4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_SIMPLE_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")
# 문자/숫자/공백/-/./, 이외는 제거 (\w 에 포함된 _ 도 제거)
_UNSAFE_SEARCH_CHARS_RE = re.compile(r"[^\w\s\-.,]|_")


def is_valid_job_id(job_id: str) -> bool:
    # match + "$" 는 끝의 개행을 허용하므로 fullmatch 사용
    return bool(_UUID_V4_RE.fullmatch(job_id) or _SIMPLE_ID_RE.fullmatch(job_id))


def is_company_blacklisted(company: str, blacklist: Iterable[str]) -> bool:
    lowered = company.lower()
    return any(blocked.lower() in lowered for blocked in blacklist if blocked)


def is_within_edit_window(job: Job, now: datetime) -> bool:
    # 정확히 90일째까지는 수정 가능
    return now - job.created_at <= EDIT_WINDOW


def can_change_company(job: Job, now: datetime) -> bool:
    return now - job.created_at <= COMPANY_LOCK_WINDOW


def is_recently_updated(job: Job, now: datetime) -> bool:
    return now - job.updated_at < DELETE_COOLDOWN


def is_brand_new(job: Job, now: datetime) -> bool:
    return now - job.created_at < NEW_POSTING_WARNING_WINDOW


def find_duplicate(
    candidates: Sequence[Job], *, title: str, company: str, now: datetime
) -> Optional[Job]:
    """
    같은 소유자의 최근 공고 중 제목/회사명이 같은(대소문자 무시) 공고를 찾습니다.

    DUPLICATE_WINDOW(7일) 이전에 생성된 공고는 중복으로 보지 않습니다.
    """
    threshold = now - DUPLICATE_WINDOW
    title_key = title.lower()
    company_key = company.lower()
    for job in candidates:
        if (
            job.title.lower() == title_key
            and job.company.lower() == company_key
            and job.created_at > threshold
        ):
            return job
    return None


def sanitize_search_term(term: str) -> str:
    return _UNSAFE_SEARCH_CHARS_RE.sub("", term).strip()[:MAX_SEARCH_TERM_LENGTH]


def days_since(moment: datetime, now: datetime) -> int:
    return max(0, (now - moment).days)
