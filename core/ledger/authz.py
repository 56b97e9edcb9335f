"""
권한 검사

게이트웨이가 주입한 헤더(x-user-id, x-user-role)로 호출자를 식별.
원장 핸들러는 Authorizer를 인자로 받아 정책과 독립적으로 동작.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Protocol

from core.ledger.errors import ForbiddenError
from core.types import LedgerAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Caller:
    """호출자 정보 (게이트웨이 주입 헤더 기반)"""

    user_id: str | None = None
    role: str | None = None

    @classmethod
    def anonymous(cls) -> "Caller":
        """헤더 없는 내부 호출"""
        return cls()


class Authorizer(Protocol):
    """권한 검사 인터페이스"""

    def check(self, caller: Caller, action: LedgerAction) -> None:
        """허용되지 않으면 ForbiddenError 발생"""
        ...


class AllowAllAuthorizer:
    """모든 호출 허용 (역할 검사는 게이트웨이에 위임)"""

    def check(self, caller: Caller, action: LedgerAction) -> None:
        return None


class RoleAuthorizer:
    """작업별 허용 역할 정책

    정책에 없는 작업은 모든 역할 허용.

    Args:
        policy: {작업: 허용 역할 집합}

    사용 예시:
    ```python
    authorizer = RoleAuthorizer({"update": frozenset({"admin"})})
    authorizer.check(Caller(user_id="u1", role="user"), LedgerAction.UPDATE)
    # → ForbiddenError
    ```
    """

    def __init__(self, policy: Mapping[str, frozenset[str]]):
        self.policy = dict(policy)

    def check(self, caller: Caller, action: LedgerAction) -> None:
        allowed = self.policy.get(action.value)
        if allowed is None:
            return

        if caller.role not in allowed:
            logger.warning(
                f"권한 거부: {action.value}",
                extra={"user_id": caller.user_id, "role": caller.role},
            )
            raise ForbiddenError(
                "operación no permitida",
                detail=f"rol requerido: {', '.join(sorted(allowed))}",
            )
