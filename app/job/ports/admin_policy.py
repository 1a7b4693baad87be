from __future__ import annotations

from typing import Protocol


class AdminPolicyPort(Protocol):
    def is_admin(self, user_id: str) -> bool: ...
