# tests/domains/test_trx_services.py

"""
'trx' 도메인 SaleService / PurchaseService에 대한 단위 테스트입니다.
"""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

import pytest

from fixparts.core.exceptions import (
    ErrorKind,
    PurchaseError,
    PurchaseErrorCode,
    SaleError,
    SaleErrorCode,
)
from fixparts.domains.trx import schemas as trx_schemas
from fixparts.domains.trx.services import PurchaseService, SaleService, as_utc

from tests.fakes import FakePurchaseStore, FakeSaleStore


@pytest.fixture
def sale_service() -> SaleService:
    return SaleService(None, repo=FakeSaleStore())


@pytest.fixture
def purchase_service() -> PurchaseService:
    return PurchaseService(None, repo=FakePurchaseStore())


def sale_in(**overrides) -> trx_schemas.SaleCreate:
    data = {"item_id": 1, "quantity": 3, "price_per_unit": Decimal("49.99")}
    data.update(overrides)
    return trx_schemas.SaleCreate(**data)


def purchase_in(**overrides) -> trx_schemas.PurchaseCreate:
    data = {"supplier_id": 1, "item_id": 1, "quantity": 10, "cost_per_unit": Decimal("12.50")}
    data.update(overrides)
    return trx_schemas.PurchaseCreate(**data)


# =============================================================================
# 1. 판매
# =============================================================================
@pytest.mark.asyncio
async def test_sale_total_is_recomputed(sale_service: SaleService):
    """
    합계가 생성 시 수량 x 단가로 계산되고, 수량 변경 시 다시 계산되는지 테스트합니다.
    """
    sale = await sale_service.create(sale_in())
    assert sale.total_price == Decimal("149.97")

    updated = await sale_service.update(sale.id, trx_schemas.SaleUpdate(quantity=5))
    assert updated.total_price == Decimal("249.95")

    repriced = await sale_service.update(sale.id, trx_schemas.SaleUpdate(price_per_unit=Decimal("10.00")))
    assert repriced.total_price == Decimal("50.00")


@pytest.mark.asyncio
async def test_sale_date_defaults_to_now(sale_service: SaleService):
    before = datetime.now(UTC)
    sale = await sale_service.create(sale_in())
    after = datetime.now(UTC)

    assert before <= sale.sale_date <= after


@pytest.mark.asyncio
async def test_sale_rejects_future_date(sale_service: SaleService):
    with pytest.raises(SaleError) as exc_info:
        await sale_service.create(sale_in(sale_date=datetime.now(UTC) + timedelta(days=1)))
    assert exc_info.value.code is SaleErrorCode.INVALID_DATE
    assert exc_info.value.kind is ErrorKind.VALIDATION_FAILED


@pytest.mark.asyncio
async def test_sale_naive_date_is_utc(sale_service: SaleService):
    naive = datetime(2024, 5, 1, 9, 30)
    sale = await sale_service.create(sale_in(sale_date=naive))

    assert sale.sale_date == datetime(2024, 5, 1, 9, 30, tzinfo=UTC)
    assert as_utc(naive).tzinfo is UTC


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, code",
    [
        ({"item_id": 0}, SaleErrorCode.INVALID_ITEM_ID),
        ({"quantity": 0}, SaleErrorCode.INVALID_QUANTITY),
        ({"quantity": -2}, SaleErrorCode.INVALID_QUANTITY),
        ({"price_per_unit": Decimal("0")}, SaleErrorCode.INVALID_PRICE_PER_UNIT),
    ],
)
async def test_sale_validation(sale_service: SaleService, overrides, code):
    with pytest.raises(SaleError) as exc_info:
        await sale_service.create(sale_in(**overrides))
    assert exc_info.value.code is code


@pytest.mark.asyncio
async def test_sale_transaction_number_unique(sale_service: SaleService):
    await sale_service.create(sale_in(transaction_number="T-1001"))

    with pytest.raises(SaleError) as exc_info:
        await sale_service.create(sale_in(transaction_number=" T-1001 "))
    assert exc_info.value.code is SaleErrorCode.DUPLICATE_REFERENCE
    assert exc_info.value.kind is ErrorKind.DUPLICATE_CONFLICT

    # 빈 거래 번호는 NULL로 저장되며 서로 충돌하지 않습니다.
    first = await sale_service.create(sale_in(transaction_number=""))
    second = await sale_service.create(sale_in(transaction_number="  "))
    assert first.transaction_number is None and second.transaction_number is None


@pytest.mark.asyncio
async def test_sale_lookups(sale_service: SaleService):
    sale = await sale_service.create(sale_in(transaction_number="T-2001", customer_email="lee@example.com"))
    await sale_service.create(sale_in(item_id=2))

    assert (await sale_service.get_by_reference("T-2001")).id == sale.id
    assert [s.id for s in await sale_service.list_for_customer("lee@example.com")] == [sale.id]
    assert len(await sale_service.list_for_item(1)) == 1

    with pytest.raises(SaleError) as exc_info:
        await sale_service.get_by_reference(" ")
    assert exc_info.value.code is SaleErrorCode.REFERENCE_REQUIRED

    with pytest.raises(SaleError) as exc_info:
        await sale_service.list_for_customer("")
    assert exc_info.value.code is SaleErrorCode.CUSTOMER_EMAIL_REQUIRED

    with pytest.raises(SaleError) as exc_info:
        await sale_service.get_by_reference("T-missing")
    assert exc_info.value.code is SaleErrorCode.SALE_NOT_FOUND


@pytest.mark.asyncio
async def test_sale_delete(sale_service: SaleService):
    sale = await sale_service.create(sale_in())
    await sale_service.delete(sale.id)

    with pytest.raises(SaleError) as exc_info:
        await sale_service.get(sale.id)
    assert exc_info.value.code is SaleErrorCode.SALE_NOT_FOUND
    assert exc_info.value.kind is ErrorKind.NOT_FOUND

    with pytest.raises(SaleError) as exc_info:
        await sale_service.delete(0)
    assert exc_info.value.code is SaleErrorCode.INVALID_SALE_ID


# =============================================================================
# 2. 구매
# =============================================================================
@pytest.mark.asyncio
async def test_purchase_total_and_update(purchase_service: PurchaseService):
    purchase = await purchase_service.create(purchase_in(invoice_number="INV-1"))
    assert purchase.total_cost == Decimal("125.00")

    updated = await purchase_service.update(purchase.id, trx_schemas.PurchaseUpdate(cost_per_unit=Decimal("11.00")))
    assert updated.total_cost == Decimal("110.00")

    with pytest.raises(PurchaseError) as exc_info:
        await purchase_service.update(purchase.id, trx_schemas.PurchaseUpdate(quantity=0))
    assert exc_info.value.code is PurchaseErrorCode.INVALID_QUANTITY


@pytest.mark.asyncio
async def test_purchase_checks_supplier_before_item(purchase_service: PurchaseService):
    with pytest.raises(PurchaseError) as exc_info:
        await purchase_service.create(purchase_in(supplier_id=0, item_id=0))
    assert exc_info.value.code is PurchaseErrorCode.INVALID_SUPPLIER_ID
    assert exc_info.value.kind is ErrorKind.INVALID_ID

    with pytest.raises(PurchaseError) as exc_info:
        await purchase_service.create(purchase_in(item_id=-1))
    assert exc_info.value.code is PurchaseErrorCode.INVALID_ITEM_ID


@pytest.mark.asyncio
async def test_purchase_invoice_number_unique(purchase_service: PurchaseService):
    first = await purchase_service.create(purchase_in(invoice_number="INV-9"))
    other = await purchase_service.create(purchase_in(invoice_number="INV-10"))

    with pytest.raises(PurchaseError) as exc_info:
        await purchase_service.create(purchase_in(invoice_number="INV-9"))
    assert exc_info.value.code is PurchaseErrorCode.DUPLICATE_REFERENCE

    with pytest.raises(PurchaseError) as exc_info:
        await purchase_service.update(other.id, trx_schemas.PurchaseUpdate(invoice_number="INV-9"))
    assert exc_info.value.code is PurchaseErrorCode.DUPLICATE_REFERENCE

    same = await purchase_service.update(first.id, trx_schemas.PurchaseUpdate(invoice_number="INV-9"))
    assert same.id == first.id


@pytest.mark.asyncio
async def test_purchase_lists(purchase_service: PurchaseService):
    await purchase_service.create(purchase_in(supplier_id=1, item_id=1))
    await purchase_service.create(purchase_in(supplier_id=2, item_id=1))

    assert len(await purchase_service.list_for_item(1)) == 2
    assert len(await purchase_service.list_for_supplier(2)) == 1

    with pytest.raises(PurchaseError) as exc_info:
        await purchase_service.list_for_supplier(0)
    assert exc_info.value.code is PurchaseErrorCode.INVALID_SUPPLIER_ID
