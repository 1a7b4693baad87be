from __future__ import annotations


class NoRoleAdminPolicy:
    """
    역할 체계가 없는 동안 사용하는 관리자 정책. 누구도 관리자로 보지 않습니다.
    """

    def is_admin(self, user_id: str) -> bool:
        return False
