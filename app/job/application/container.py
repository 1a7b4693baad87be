from __future__ import annotations

from common.adapters.django_job_repo import DjangoJobRepository
from django.conf import settings
from job.adapters.admin_policy import NoRoleAdminPolicy
from job.adapters.celery_deletion_notifier import CeleryDeletionNotifier
from job.adapters.celery_view_tracker import CeleryViewTracker
from job.adapters.django_audit_log import DjangoAuditLog
from job.application.usecases.create_job import CreateJobUseCase
from job.application.usecases.delete_job import DeleteJobUseCase
from job.application.usecases.get_job_by_id import GetJobByIdUseCase
from job.application.usecases.get_jobs import GetJobsUseCase
from job.application.usecases.update_job import UpdateJobUseCase
from job.domain.policies import DEFAULT_COMPANY_BLACKLIST


def _company_blacklist() -> tuple[str, ...]:
    return tuple(getattr(settings, "JOB_COMPANY_BLACKLIST", DEFAULT_COMPANY_BLACKLIST))


def build_create_job_usecase() -> CreateJobUseCase:
    """
    Job 유스케이스 조립(Dependency Injection).
    """
    return CreateJobUseCase(
        job_repo=DjangoJobRepository(),
        audit_log=DjangoAuditLog(),
        company_blacklist=_company_blacklist(),
    )


def build_get_job_by_id_usecase() -> GetJobByIdUseCase:
    return GetJobByIdUseCase(
        job_repo=DjangoJobRepository(),
        view_tracker=CeleryViewTracker(),
    )


def build_get_jobs_usecase() -> GetJobsUseCase:
    return GetJobsUseCase(job_repo=DjangoJobRepository())


def build_update_job_usecase() -> UpdateJobUseCase:
    return UpdateJobUseCase(
        job_repo=DjangoJobRepository(),
        audit_log=DjangoAuditLog(),
        company_blacklist=_company_blacklist(),
    )


def build_delete_job_usecase() -> DeleteJobUseCase:
    return DeleteJobUseCase(
        job_repo=DjangoJobRepository(),
        audit_log=DjangoAuditLog(),
        notifier=CeleryDeletionNotifier(),
        admin_policy=NoRoleAdminPolicy(),
    )
