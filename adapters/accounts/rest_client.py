"""
계좌 서비스 REST 클라이언트

결제 서비스가 출금(차감) 단계에서 계좌 서비스를 호출할 때 사용.
재시도/보상 처리 없음: 2xx 외 응답은 모두 실패.
"""

import logging
from decimal import Decimal
from typing import Any

import httpx

from core.constants import Defaults

logger = logging.getLogger(__name__)


class AccountsApiError(Exception):
    """계좌 서비스 호출 실패

    Args:
        message: 계좌 서비스가 반환한 메시지 (또는 전송 오류 메시지)
        status_code: HTTP 상태 코드 (전송 오류 시 None)
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _extract_error_message(response: httpx.Response) -> str:
    """에러 응답에서 사람이 읽을 메시지 추출

    {"detail": {"error": ..., "message": ...}} 형식 우선.
    """
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, dict):
        return str(detail.get("message") or detail.get("error") or detail)
    if isinstance(detail, str):
        return detail
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"HTTP {response.status_code}"


class AccountsRestClient:
    """계좌 서비스 REST 클라이언트

    Args:
        base_url: 계좌 서비스 베이스 URL
        timeout: 요청 타임아웃 (초)
    """

    def __init__(
        self,
        base_url: str = Defaults.ACCOUNTS_URL,
        timeout: float = Defaults.ACCOUNTS_TIMEOUT_SEC,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def withdraw(
        self,
        account_id: str,
        amount: Decimal,
        description: str,
    ) -> dict[str, Any]:
        """출금 요청 (POST /accounts/{id}/withdraw)

        Args:
            account_id: 계좌 ID
            amount: 출금액
            description: 변동 기록 설명

        Returns:
            갱신된 계좌 JSON

        Raises:
            AccountsApiError: 2xx 외 응답 또는 전송 오류/타임아웃
        """
        url = f"{self.base_url}/accounts/{account_id}/withdraw"
        client = await self._get_client()

        logger.info(f"POST {url}", extra={"amount": str(amount)})

        try:
            response = await client.post(
                url,
                json={"amount": str(amount), "description": description},
            )
        except httpx.TimeoutException as e:
            logger.error("계좌 서비스 타임아웃", extra={"url": url})
            raise AccountsApiError(f"timeout: {e}") from e
        except httpx.RequestError as e:
            logger.error("계좌 서비스 요청 실패", extra={"url": url, "error": str(e)})
            raise AccountsApiError(str(e) or "error al debitar cuenta") from e

        if response.status_code < 200 or response.status_code >= 300:
            message = _extract_error_message(response)
            logger.warning(
                f"출금 실패: {message}",
                extra={"status_code": response.status_code, "account_id": account_id},
            )
            raise AccountsApiError(message, status_code=response.status_code)

        return response.json()
