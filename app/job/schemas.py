"""
채용 공고 입력 검증 스키마 (pydantic)

- CreateJobSchema: 생성 요청 (모든 필드 필수)
- UpdateJobSchema: 수정 요청 (모든 필드 선택, 단 명시적 null 은 거부)
- safe_parse(): 예외 대신 검증 결과/이슈 목록을 반환
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from job.domain.job import TEXT_FIELD_RULES, JobPatch, JobType, NewJob
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

NON_FIELD_ERRORS = "non_field_errors"

_TEXT_FIELDS = tuple(TEXT_FIELD_RULES)
_FIELD_LABELS = {name: rule.label for name, rule in TEXT_FIELD_RULES.items()}
_FIELD_LABELS["job_type"] = "Job type"
# camelCase 입력 키도 허용하되, 에러 경로는 snake_case 로 통일
_INPUT_ALIASES = {"jobType": "job_type"}


def _normalize_job_type(value: Any) -> Any:
    # 목록 필터(JobType.parse)와 같은 표기(값 또는 이름)를 허용. 그 외는 pydantic 이 거부
    if isinstance(value, str):
        for member in JobType:
            if value in (member.value, member.name):
                return member
    return value


def _check_text_length(value: str, field_name: str) -> str:
    rule = TEXT_FIELD_RULES[field_name]
    if not value:
        raise PydanticCustomError("string_required", rule.required_message)
    if len(value) < rule.min_length:
        raise PydanticCustomError("string_too_short", rule.too_short_message)
    if len(value) > rule.max_length:
        raise PydanticCustomError("string_too_long", rule.too_long_message)
    return value


class CreateJobSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(description="공고 제목 (1~100자)")
    company: str = Field(description="회사명 (1~100자)")
    description: str = Field(description="공고 본문 (10~5000자)")
    location: str = Field(description="근무지 (1~100자)")
    job_type: JobType = Field(
        validation_alias=AliasChoices("job_type", "jobType"),
        description="고용 형태",
    )

    @field_validator("job_type", mode="before")
    @classmethod
    def accept_job_type_name(cls, value: Any) -> Any:
        return _normalize_job_type(value)

    @field_validator(*_TEXT_FIELDS)
    @classmethod
    def check_length(cls, value: str, info: ValidationInfo) -> str:
        return _check_text_length(value, info.field_name)

    def to_new_job(self, *, user_id: str) -> NewJob:
        return NewJob(
            title=self.title,
            company=self.company,
            description=self.description,
            location=self.location,
            job_type=self.job_type,
            user_id=user_id,
        )


class UpdateJobSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = Field(
        default=None, validation_alias=AliasChoices("job_type", "jobType")
    )

    @field_validator(*_TEXT_FIELDS, "job_type", mode="before")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise PydanticCustomError(
                "null_not_allowed", f"{_FIELD_LABELS[info.field_name]} cannot be null"
            )
        return value

    @field_validator("job_type", mode="before")
    @classmethod
    def accept_job_type_name(cls, value: Any) -> Any:
        return _normalize_job_type(value)

    @field_validator(*_TEXT_FIELDS)
    @classmethod
    def check_length(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is None:
            return None
        return _check_text_length(value, info.field_name)

    def to_patch(self) -> JobPatch:
        return JobPatch(**{name: getattr(self, name) for name in self.model_fields_set})


SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class SchemaIssue:
    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[SchemaT]):
    data: Optional[SchemaT] = None
    issues: tuple[SchemaIssue, ...] = ()

    @property
    def success(self) -> bool:
        return self.data is not None and not self.issues

    @property
    def field_errors(self) -> dict[str, list[str]]:
        return issues_to_field_map(self.issues)


def issues_to_field_map(issues: tuple[SchemaIssue, ...]) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for issue in issues:
        errors.setdefault(issue.path, []).append(issue.message)
    return errors


def _to_issue(error: dict[str, Any]) -> SchemaIssue:
    loc = [str(part) for part in error.get("loc", ())]
    if not loc:
        return SchemaIssue(path=NON_FIELD_ERRORS, message=error["msg"])

    loc[0] = _INPUT_ALIASES.get(loc[0], loc[0])
    path = ".".join(loc)
    message = error["msg"]
    if error.get("type") == "missing" and path in _FIELD_LABELS:
        message = f"{_FIELD_LABELS[path]} is required"
    return SchemaIssue(path=path, message=message)


def safe_parse(schema: type[SchemaT], data: Any) -> ParseResult[SchemaT]:
    try:
        return ParseResult(data=schema.model_validate(data))
    except ValidationError as exc:
        return ParseResult(issues=tuple(_to_issue(e) for e in exc.errors()))
