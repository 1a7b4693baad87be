from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    채용 공고 소유자/조회자 계정.

    도메인에서는 str(user.pk) 를 user_id 로 사용합니다.
    """

    def __str__(self):
        return self.username
