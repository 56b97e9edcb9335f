"""
결제 API 통합 테스트

결제 → 계좌 출금 호출은 같은 앱(ASGITransport)으로 라우팅.
"""

import httpx


async def _funded_account(client: httpx.AsyncClient, amount: int = 100) -> str:
    response = await client.post("/accounts", json={"clientId": "c1"})
    account_id = response.json()["id"]
    await client.post(f"/accounts/{account_id}/deposit", json={"amount": amount})
    return account_id


class TestServices:
    """GET /services"""

    async def test_list(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/services")

        assert response.status_code == 200
        codes = [s["code"] for s in response.json()]
        assert codes == ["LUZ", "AGUA", "TELEFONO", "GAS", "OTRO"]


class TestCreatePayment:
    """POST /payments"""

    async def test_pay(self, client: httpx.AsyncClient) -> None:
        """201, 계좌 잔고 차감, RETIRO 기록"""
        account_id = await _funded_account(client)

        response = await client.post(
            "/payments",
            json={"accountId": account_id, "serviceType": "LUZ", "reference": "CRE-1", "amount": 30.5},
        )

        assert response.status_code == 201, response.text
        payment = response.json()
        assert payment["accountId"] == account_id
        assert payment["amount"] == "30.50"
        assert payment["status"] == "CONFIRMADO"

        account = (await client.get(f"/accounts/{account_id}")).json()
        assert account["balance"] == "69.50"

        movements = (await client.get(f"/accounts/{account_id}/movements")).json()
        assert movements[0]["type"] == "RETIRO"
        assert movements[0]["description"] == "Pago LUZ ref CRE-1"

    async def test_insufficient_funds(self, client: httpx.AsyncClient) -> None:
        """출금 거부 → 400, 계좌 서비스 메시지, 기록 없음"""
        account_id = await _funded_account(client, amount=10)

        response = await client.post(
            "/payments",
            json={"accountId": account_id, "serviceType": "AGUA", "reference": "R1", "amount": 50},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "debit_failed",
            "message": "fondos insuficientes",
        }
        payments = (await client.get("/payments", params={"accountId": account_id})).json()
        assert payments == []

    async def test_incomplete(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/payments", json={"serviceType": "LUZ", "amount": 5})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Datos incompletos o inválidos"

    async def test_unknown_service(self, client: httpx.AsyncClient) -> None:
        account_id = await _funded_account(client)

        response = await client.post(
            "/payments",
            json={"accountId": account_id, "serviceType": "CABLE", "reference": "R1", "amount": 5},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Tipo de servicio inválido"


class TestQueryPayments:
    """GET /payments, GET /payments/{id}"""

    async def test_list_and_get(self, client: httpx.AsyncClient) -> None:
        account_id = await _funded_account(client)
        body = {"accountId": account_id, "serviceType": "GAS", "reference": "G1", "amount": 1}
        created = (await client.post("/payments", json=body)).json()

        response = await client.get("/payments", params={"accountId": account_id})
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [created["id"]]

        response = await client.get(f"/payments/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    async def test_get_not_found(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/payments/missing")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"
