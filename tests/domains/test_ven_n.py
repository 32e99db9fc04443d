# tests/domains/test_ven_n.py

"""
'ven' 도메인 (공급업체 관리) API 엔드포인트에 대한 통합 테스트입니다.

- `POST /ven/suppliers` (생성)
- `GET /ven/suppliers` (목록 조회, 검색)
- `GET /ven/suppliers/{id}` (단일 조회)
- `PUT /ven/suppliers/{id}` (수정)
- `DELETE /ven/suppliers/{id}` (삭제, 참조 품목이 있으면 거부)
"""

import pytest
from httpx import AsyncClient

VEN = "/api/v1/ven"


@pytest.mark.asyncio
async def test_supplier_crud(client: AsyncClient):
    print("\n--- Running test_supplier_crud ---")
    response = await client.post(f"{VEN}/suppliers", json={"name": "Bosch", "payment_terms": "Net 30"})
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 201
    supplier = response.json()
    assert supplier["name"] == "Bosch"

    response = await client.put(f"{VEN}/suppliers/{supplier['id']}", json={"phone": "555-0100"})
    assert response.status_code == 200
    assert response.json()["phone"] == "555-0100"
    assert response.json()["payment_terms"] == "Net 30"

    assert (await client.get(f"{VEN}/suppliers/{supplier['id']}")).status_code == 200
    assert (await client.delete(f"{VEN}/suppliers/{supplier['id']}")).status_code == 204
    assert (await client.get(f"{VEN}/suppliers/{supplier['id']}")).status_code == 404
    print("test_supplier_crud passed.")


@pytest.mark.asyncio
async def test_supplier_duplicate_name(client: AsyncClient):
    await client.post(f"{VEN}/suppliers", json={"name": "Denso"})

    response = await client.post(f"{VEN}/suppliers", json={"name": "Denso"})

    assert response.status_code == 409
    assert response.json()["code"] == "duplicate_supplier_name"


@pytest.mark.asyncio
async def test_supplier_search(client: AsyncClient):
    for name in ("NGK", "Aisin", "Brembo"):
        await client.post(f"{VEN}/suppliers", json={"name": name})

    names = [row["name"] for row in (await client.get(f"{VEN}/suppliers")).json()]
    assert names == ["Aisin", "Brembo", "NGK"]

    names = [row["name"] for row in (await client.get(f"{VEN}/suppliers", params={"search": "bre"})).json()]
    assert names == ["Brembo"]


@pytest.mark.asyncio
async def test_supplier_delete_blocked_by_item(client: AsyncClient):
    supplier = (await client.post(f"{VEN}/suppliers", json={"name": "Mann"})).json()
    await client.post(
        "/api/v1/inv/items",
        json={
            "part_number": "OF-1",
            "description": "Oil filter",
            "buy_price": "4.00",
            "sell_price": "9.00",
            "supplier_id": supplier["id"],
        },
    )

    response = await client.delete(f"{VEN}/suppliers/{supplier['id']}")

    assert response.status_code == 409
    assert response.json()["code"] == "supplier_has_items"


@pytest.mark.asyncio
async def test_supplier_invalid_id(client: AsyncClient):
    response = await client.get(f"{VEN}/suppliers/0")

    assert response.status_code == 400
    assert response.json()["kind"] == "invalid_id"
