"""
예외 → HTTP 응답 변환

응답 형식: {"detail": {"error": <code>, "message": <text>, "detail"?: <원인>}}
"""

from fastapi import HTTPException

from core.ledger.errors import LedgerError


def to_http_exception(error: LedgerError) -> HTTPException:
    """LedgerError를 HTTPException으로 변환"""
    return HTTPException(status_code=error.status_code, detail=error.to_dict())
