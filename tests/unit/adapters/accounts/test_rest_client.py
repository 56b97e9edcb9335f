"""
계좌 서비스 REST 클라이언트 테스트

AccountsRestClient 출금 요청 테스트 (httpx mock 사용).
"""

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from adapters.accounts.rest_client import (
    AccountsApiError,
    AccountsRestClient,
    _extract_error_message,
)


class TestExtractErrorMessage:
    """에러 메시지 추출 테스트"""

    def test_structured_detail(self) -> None:
        """{"detail": {"error", "message"}} 형식"""
        response = httpx.Response(
            400,
            json={"detail": {"error": "insufficient_funds", "message": "fondos insuficientes"}},
        )

        assert _extract_error_message(response) == "fondos insuficientes"

    def test_detail_error_only(self) -> None:
        response = httpx.Response(404, json={"detail": {"error": "not_found"}})

        assert _extract_error_message(response) == "not_found"

    def test_string_detail(self) -> None:
        response = httpx.Response(422, json={"detail": "Unprocessable"})

        assert _extract_error_message(response) == "Unprocessable"

    def test_top_level_error(self) -> None:
        response = httpx.Response(400, json={"error": "monto inválido"})

        assert _extract_error_message(response) == "monto inválido"

    def test_non_json(self) -> None:
        """JSON이 아닌 응답 → 본문 텍스트"""
        response = httpx.Response(502, text="Bad Gateway")

        assert _extract_error_message(response) == "Bad Gateway"


class TestAccountsRestClientWithdraw:
    """출금 요청 테스트"""

    @pytest.fixture
    def client(self) -> AccountsRestClient:
        return AccountsRestClient(base_url="http://accounts.test/", timeout=4)

    @pytest.mark.asyncio
    async def test_withdraw_success(self, client: AccountsRestClient) -> None:
        """2xx → 계좌 JSON 반환"""
        mock_response = httpx.Response(200, json={"id": "a1", "balance": "50.00"})

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post.return_value = mock_response
            mock_get_client.return_value = mock_http_client

            result = await client.withdraw("a1", Decimal("50.00"), "Pago LUZ ref R1")

            assert result == {"id": "a1", "balance": "50.00"}
            mock_http_client.post.assert_awaited_once_with(
                "http://accounts.test/accounts/a1/withdraw",
                json={"amount": "50.00", "description": "Pago LUZ ref R1"},
            )

    @pytest.mark.asyncio
    async def test_withdraw_rejected(self, client: AccountsRestClient) -> None:
        """4xx → AccountsApiError (계좌 서비스 메시지)"""
        mock_response = httpx.Response(
            400,
            json={"detail": {"error": "insufficient_funds", "message": "fondos insuficientes"}},
        )

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post.return_value = mock_response
            mock_get_client.return_value = mock_http_client

            with pytest.raises(AccountsApiError) as exc_info:
                await client.withdraw("a1", Decimal("150"), "Pago")

            assert exc_info.value.message == "fondos insuficientes"
            assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_withdraw_timeout(self, client: AccountsRestClient) -> None:
        """타임아웃 → AccountsApiError (상태 코드 없음)"""
        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post.side_effect = httpx.ReadTimeout("timed out")
            mock_get_client.return_value = mock_http_client

            with pytest.raises(AccountsApiError) as exc_info:
                await client.withdraw("a1", Decimal("1"), "Pago")

            assert exc_info.value.status_code is None
            assert "timeout" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_withdraw_connection_error(self, client: AccountsRestClient) -> None:
        """연결 실패 → AccountsApiError"""
        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post.side_effect = httpx.ConnectError("connection refused")
            mock_get_client.return_value = mock_http_client

            with pytest.raises(AccountsApiError) as exc_info:
                await client.withdraw("a1", Decimal("1"), "Pago")

            assert exc_info.value.message == "connection refused"


class TestAccountsRestClientLifecycle:
    """HTTP 클라이언트 생성/종료 테스트"""

    @pytest.mark.asyncio
    async def test_lazy_client_and_close(self) -> None:
        client = AccountsRestClient(base_url="http://accounts.test")

        assert client._client is None

        http_client = await client._get_client()
        assert http_client is await client._get_client()

        await client.close()
        assert client._client is None
        assert http_client.is_closed
