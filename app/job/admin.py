from django.contrib import admin
from job.models import JobAuditLog, JobPosting


@admin.register(JobPosting)
class JobPostingAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "company", "location", "job_type", "user", "view_count", "created_at"]
    search_fields = ["title", "company", "location"]
    list_filter = ["job_type", "created_at"]
    ordering = ["-created_at"]
    list_per_page = 100
    readonly_fields = ["id", "view_count", "created_at", "updated_at"]


@admin.register(JobAuditLog)
class JobAuditLogAdmin(admin.ModelAdmin):
    """감사 기록은 조회 전용."""

    list_display = ["id", "action", "job_id", "actor_id", "created_at"]
    list_filter = ["action", "created_at"]
    search_fields = ["job_id", "actor_id"]
    ordering = ["-created_at"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
