"""
Job 도메인 엔티티

채용 공고 한 건을 표현하는 순수 도메인 객체입니다. (Django 의존성 없음)

- 생성/변경 시점마다 필드 불변식을 검증합니다.
- id, user_id, created_at 은 생성 이후 변경할 수 없습니다.
- 변경 메서드는 검증이 모두 통과한 뒤에만 값을 반영하고 updated_at 을 갱신합니다.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ValidationKind(str, Enum):
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_ENUM = "invalid_enum"


class JobValidationError(ValueError):
    """엔티티 불변식 위반 (어느 필드가, 어떤 이유로 실패했는지 포함)."""

    def __init__(self, field: str, message: str, kind: ValidationKind):
        super().__init__(message)
        self.field = field
        self.message = message
        self.kind = kind

    def __repr__(self) -> str:
        return f"JobValidationError(field={self.field!r}, kind={self.kind.value!r}, message={self.message!r})"


class JobType(str, Enum):
    FULL_TIME = "Full-Time"
    PART_TIME = "Part-Time"
    CONTRACT = "Contract"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "JobType":
        """
        멤버, 값("Full-Time"), 이름("FULL_TIME") 중 하나를 JobType 으로 변환합니다.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value == member.value or value == member.name:
                    return member
        raise JobValidationError(
            field="job_type",
            message=f"Invalid job type: {value}",
            kind=ValidationKind.INVALID_ENUM,
        )


@dataclass(frozen=True, slots=True)
class TextFieldRule:
    field: str
    label: str
    min_length: int
    max_length: int

    @property
    def required_message(self) -> str:
        return f"{self.label} is required"

    @property
    def too_short_message(self) -> str:
        return f"{self.label} must be at least {self.min_length} characters"

    @property
    def too_long_message(self) -> str:
        return f"{self.label} must be {self.max_length} characters or less"


# 생성/수정 스키마와 엔티티가 같은 경계값을 공유합니다.
TEXT_FIELD_RULES: dict[str, TextFieldRule] = {
    "title": TextFieldRule("title", "Job title", 1, 100),
    "company": TextFieldRule("company", "Company name", 1, 100),
    "description": TextFieldRule("description", "Job description", 10, 5000),
    "location": TextFieldRule("location", "Location", 1, 100),
}


def validate_text_field(field_name: str, value: Any) -> str:
    rule = TEXT_FIELD_RULES[field_name]
    if not isinstance(value, str) or not value.strip():
        raise JobValidationError(field_name, rule.required_message, ValidationKind.REQUIRED)
    if len(value) < rule.min_length:
        raise JobValidationError(field_name, rule.too_short_message, ValidationKind.TOO_SHORT)
    if len(value) > rule.max_length:
        raise JobValidationError(field_name, rule.too_long_message, ValidationKind.TOO_LONG)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class NewJob:
    """생성 요청 데이터 (id/타임스탬프 제외)."""

    title: str
    company: str
    description: str
    location: str
    job_type: JobType
    user_id: str


@dataclass(frozen=True, slots=True)
class JobPatch:
    """
    부분 수정 데이터.

    None 은 "요청에 없음"을 의미합니다. (명시적 삭제 상태는 다루지 않음)
    """

    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None

    def present_fields(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.present_fields()


_IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})


@dataclass(slots=True)
class Job:
    id: str
    title: str
    company: str
    description: str
    location: str
    job_type: JobType
    user_id: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.id:
            raise JobValidationError("id", "Job ID is required", ValidationKind.REQUIRED)
        for name in TEXT_FIELD_RULES:
            validate_text_field(name, getattr(self, name))
        self.job_type = JobType.parse(self.job_type)
        if not self.user_id:
            raise JobValidationError("user_id", "User ID is required", ValidationKind.REQUIRED)
        if not isinstance(self.created_at, datetime):
            raise JobValidationError(
                "created_at", "Created date is required", ValidationKind.REQUIRED
            )
        if not isinstance(self.updated_at, datetime):
            raise JobValidationError(
                "updated_at", "Updated date is required", ValidationKind.REQUIRED
            )

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and hasattr(self, name):
            raise AttributeError(f"Job.{name} is immutable")
        object.__setattr__(self, name, value)

    @classmethod
    def create(cls, new_job: NewJob, *, now: Optional[datetime] = None) -> "Job":
        timestamp = now or utc_now()
        return cls(
            id=str(uuid.uuid4()),
            title=new_job.title,
            company=new_job.company,
            description=new_job.description,
            location=new_job.location,
            job_type=new_job.job_type,
            user_id=new_job.user_id,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return self.user_id == user_id

    def update_title(self, title: str, *, now: Optional[datetime] = None) -> None:
        self._update_field("title", title, now)

    def update_company(self, company: str, *, now: Optional[datetime] = None) -> None:
        self._update_field("company", company, now)

    def update_description(
        self, description: str, *, now: Optional[datetime] = None
    ) -> None:
        self._update_field("description", description, now)

    def update_location(self, location: str, *, now: Optional[datetime] = None) -> None:
        self._update_field("location", location, now)

    def update_job_type(self, job_type: Any, *, now: Optional[datetime] = None) -> None:
        self._update_field("job_type", job_type, now)

    def _update_field(self, name: str, value: Any, now: Optional[datetime]) -> None:
        if name == "job_type":
            value = JobType.parse(value)
        else:
            value = validate_text_field(name, value)
        object.__setattr__(self, name, value)
        self.updated_at = now or utc_now()

    def apply_patch(self, patch: JobPatch, *, now: Optional[datetime] = None) -> None:
        """
        patch 에 포함된 필드를 모두 검증한 뒤 한 번에 반영합니다.

        하나라도 실패하면 JobValidationError 를 던지고 엔티티는 그대로 유지됩니다.
        """
        changes = patch.present_fields()
        validated: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "job_type":
                validated[name] = JobType.parse(value)
            else:
                validated[name] = validate_text_field(name, value)

        for name, value in validated.items():
            object.__setattr__(self, name, value)
        self.updated_at = now or utc_now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "description": self.description,
            "location": self.location,
            "job_type": self.job_type.value,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
