from __future__ import annotations

from common.application.result import Err
from common.masking import mask_secrets


class JobErrorCode:
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_ID = "INVALID_ID"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    COMPANY_NOT_ALLOWED = "COMPANY_NOT_ALLOWED"
    COMPANY_LOCKED = "COMPANY_LOCKED"
    DUPLICATE_POSTING = "DUPLICATE_POSTING"
    EDIT_WINDOW_EXPIRED = "EDIT_WINDOW_EXPIRED"
    RECENTLY_UPDATED = "RECENTLY_UPDATED"
    INVALID_JOB_TYPE = "INVALID_JOB_TYPE"
    INVALID_ORDER_FIELD = "INVALID_ORDER_FIELD"
    MISSING_USER_ID = "MISSING_USER_ID"
    DELETE_FAILED = "DELETE_FAILED"
    ADMIN_ONLY = "ADMIN_ONLY"
    REPOSITORY_ERROR = "REPOSITORY_ERROR"


def validation_failed(errors: dict[str, list[str]]) -> Err:
    return Err(
        code=JobErrorCode.VALIDATION_FAILED,
        message="Validation failed",
        details={"validation_errors": errors},
    )


def job_not_found(job_id: str) -> Err:
    return Err(code=JobErrorCode.NOT_FOUND, message="Job not found", details={"job_id": job_id})


def repository_error(action: str, exc: Exception) -> Err:
    return Err(
        code=JobErrorCode.REPOSITORY_ERROR,
        message=f"Failed to {action}: {mask_secrets(str(exc))}",
    )
