"""
계좌 원장 예외

모든 예외는 기계 판독용 code와 HTTP 상태 코드를 가진다.
라우트에서 HTTPException으로 변환.
"""

from typing import Any


class LedgerError(Exception):
    """원장 예외 기본 클래스

    Args:
        message: 사용자 표시용 메시지
        detail: 원인 상세 (저장소 오류 메시지 등)
    """

    code: str = "ledger_error"
    status_code: int = 400

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """응답 본문 변환"""
        body: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.detail:
            body["detail"] = self.detail
        return body


# =========================================================================
# 입력 검증
# =========================================================================


class LedgerValidationError(LedgerError):
    """필수 값 누락, 잘못된 enum 값 등"""

    code = "validation_error"


class InvalidAmountError(LedgerValidationError):
    """금액이 유한한 양수가 아님"""

    code = "invalid_amount"

    def __init__(self, detail: str | None = None):
        super().__init__("monto inválido", detail)


# =========================================================================
# 조회 실패
# =========================================================================


class AccountNotFoundError(LedgerError):
    """계좌 없음 (형식이 잘못된 ID 포함)"""

    code = "not_found"
    status_code = 404

    def __init__(self, account_id: str):
        super().__init__("cuenta no encontrada")
        self.account_id = account_id


# =========================================================================
# 업무 규칙
# =========================================================================


class AccountNotActiveError(LedgerError):
    """ACTIVA가 아닌 계좌에 입출금 시도"""

    code = "account_not_active"

    def __init__(self, account_id: str, status: str):
        super().__init__("cuenta no activa")
        self.account_id = account_id
        self.status = status


class InsufficientFundsError(LedgerError):
    """출금액이 잔고 초과"""

    code = "insufficient_funds"

    def __init__(self, account_id: str):
        super().__init__("fondos insuficientes")
        self.account_id = account_id


class ForbiddenError(LedgerError):
    """호출자 역할로 허용되지 않는 작업"""

    code = "forbidden"
    status_code = 403


# =========================================================================
# 저장소
# =========================================================================


class LedgerStoreError(LedgerError):
    """제약 조건 위반 (계좌번호 중복 등) 또는 연결 실패"""

    code = "store_error"
