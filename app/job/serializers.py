"""
채용 공고 응답 serializer

입력 검증은 job.schemas(pydantic)에서 하고, 여기서는 도메인 결과를 JSON 으로 내보내기만 합니다.
"""

from rest_framework import serializers


class JobSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    company = serializers.CharField()
    description = serializers.CharField()
    location = serializers.CharField()
    job_type = serializers.CharField(source="job_type.value")
    user_id = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class JobDetailSerializer(JobSerializer):
    is_owner = serializers.BooleanField()
    can_edit = serializers.BooleanField()
    days_since_posted = serializers.IntegerField()
    is_new = serializers.BooleanField()

    def to_representation(self, instance):
        # instance: JobDetail
        data = dict(JobSerializer(instance.job).data)
        data.update(
            is_owner=instance.is_owner,
            can_edit=instance.can_edit,
            days_since_posted=instance.days_since_posted,
            is_new=instance.is_new,
        )
        return data


class JobPageSerializer(serializers.Serializer):
    data = JobSerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    has_more = serializers.BooleanField()


class JobWithRelatedSerializer(serializers.Serializer):
    job = JobDetailSerializer(source="detail")
    related = JobSerializer(many=True)


class JobPreviewSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    company = serializers.CharField()
    location = serializers.CharField()
    job_type = serializers.CharField(source="job_type.value")
    created_at = serializers.DateTimeField()
    description = serializers.CharField()


class MultipleJobsSerializer(serializers.Serializer):
    jobs = JobSerializer(many=True)
    errors = serializers.DictField(child=serializers.CharField())


class JobIdsRequestSerializer(serializers.Serializer):
    ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
        max_length=100,
        help_text="조회/삭제할 공고 id 목록 (최대 100개)",
    )


class BulkDeleteResultSerializer(serializers.Serializer):
    succeeded = serializers.ListField(child=serializers.CharField())
    failed = serializers.DictField(child=serializers.CharField())


class JobCountSerializer(serializers.Serializer):
    count = serializers.IntegerField()


class ErrorResponseSerializer(serializers.Serializer):
    error_code = serializers.CharField()
    error = serializers.CharField()
    validation_errors = serializers.DictField(
        child=serializers.ListField(child=serializers.CharField()), required=False
    )
