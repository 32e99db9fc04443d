# fixparts/domains/trx/routers.py

"""
'trx' 도메인 (판매 / 구매 거래)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, status

from fixparts.core import dependencies as deps
from fixparts.domains.trx import schemas as trx_schemas
from fixparts.domains.trx.services import PurchaseService, SaleService

router = APIRouter(
    tags=["Transaction Management (거래 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 판매 (Sale) API
# =============================================================================
@router.post(
    "/sales",
    response_model=trx_schemas.SaleRead,
    status_code=status.HTTP_201_CREATED,
    summary="판매 기록 생성",
)
async def create_sale(
    sale_in: trx_schemas.SaleCreate,
    service: SaleService = Depends(deps.get_sale_service),
):
    """
    판매를 기록합니다. `total_price`는 수량 x 단가로 계산됩니다.
    - **sale_date**: 생략 시 현재 시각
    - **transaction_number**: 선택, 지정 시 고유
    """
    return await service.create(sale_in)


@router.get("/sales", response_model=List[trx_schemas.SaleRead], summary="판매 목록 조회 (필터)")
async def read_sales(
    item_id: Optional[int] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    customer_name: Optional[str] = None,
    customer_phone: Optional[str] = None,
    customer_email: Optional[str] = None,
    transaction_number: Optional[str] = None,
    sold_by: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    service: SaleService = Depends(deps.get_sale_service),
):
    filters = trx_schemas.SaleFilter(
        item_id=item_id,
        start_date=start_date,
        end_date=end_date,
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_email=customer_email,
        transaction_number=transaction_number,
        sold_by=sold_by,
    )
    return await service.list(filters, skip=skip, limit=limit)


@router.get(
    "/sales/by-transaction-number/{transaction_number}",
    response_model=trx_schemas.SaleRead,
    summary="거래 번호로 판매 조회",
)
async def read_sale_by_transaction_number(
    transaction_number: str, service: SaleService = Depends(deps.get_sale_service)
):
    return await service.get_by_reference(transaction_number)


@router.get("/sales/{sale_id}", response_model=trx_schemas.SaleRead, summary="특정 판매 조회")
async def read_sale(sale_id: int, service: SaleService = Depends(deps.get_sale_service)):
    return await service.get(sale_id)


@router.put("/sales/{sale_id}", response_model=trx_schemas.SaleRead, summary="판매 기록 수정")
async def update_sale(
    sale_id: int,
    sale_in: trx_schemas.SaleUpdate,
    service: SaleService = Depends(deps.get_sale_service),
):
    return await service.update(sale_id, sale_in)


@router.delete("/sales/{sale_id}", status_code=status.HTTP_204_NO_CONTENT, summary="판매 기록 삭제")
async def delete_sale(sale_id: int, service: SaleService = Depends(deps.get_sale_service)):
    await service.delete(sale_id)


@router.get("/items/{item_id}/sales", response_model=List[trx_schemas.SaleRead], summary="품목별 판매 조회")
async def read_item_sales(item_id: int, service: SaleService = Depends(deps.get_sale_service)):
    return await service.list_for_item(item_id)


@router.get(
    "/customers/{customer_email}/sales",
    response_model=List[trx_schemas.SaleRead],
    summary="고객별 판매 조회",
)
async def read_customer_sales(customer_email: str, service: SaleService = Depends(deps.get_sale_service)):
    return await service.list_for_customer(customer_email)


# =============================================================================
# 2. 구매 (Purchase) API
# =============================================================================
@router.post(
    "/purchases",
    response_model=trx_schemas.PurchaseRead,
    status_code=status.HTTP_201_CREATED,
    summary="구매 기록 생성",
)
async def create_purchase(
    purchase_in: trx_schemas.PurchaseCreate,
    service: PurchaseService = Depends(deps.get_purchase_service),
):
    """
    구매를 기록합니다. `total_cost`는 수량 x 단가로 계산됩니다.
    """
    return await service.create(purchase_in)


@router.get("/purchases", response_model=List[trx_schemas.PurchaseRead], summary="구매 목록 조회 (필터)")
async def read_purchases(
    supplier_id: Optional[int] = None,
    item_id: Optional[int] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    invoice_number: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    service: PurchaseService = Depends(deps.get_purchase_service),
):
    filters = trx_schemas.PurchaseFilter(
        supplier_id=supplier_id,
        item_id=item_id,
        start_date=start_date,
        end_date=end_date,
        invoice_number=invoice_number,
    )
    return await service.list(filters, skip=skip, limit=limit)


@router.get(
    "/purchases/by-invoice-number/{invoice_number}",
    response_model=trx_schemas.PurchaseRead,
    summary="송장 번호로 구매 조회",
)
async def read_purchase_by_invoice_number(
    invoice_number: str, service: PurchaseService = Depends(deps.get_purchase_service)
):
    return await service.get_by_reference(invoice_number)


@router.get("/purchases/{purchase_id}", response_model=trx_schemas.PurchaseRead, summary="특정 구매 조회")
async def read_purchase(purchase_id: int, service: PurchaseService = Depends(deps.get_purchase_service)):
    return await service.get(purchase_id)


@router.put("/purchases/{purchase_id}", response_model=trx_schemas.PurchaseRead, summary="구매 기록 수정")
async def update_purchase(
    purchase_id: int,
    purchase_in: trx_schemas.PurchaseUpdate,
    service: PurchaseService = Depends(deps.get_purchase_service),
):
    return await service.update(purchase_id, purchase_in)


@router.delete("/purchases/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT, summary="구매 기록 삭제")
async def delete_purchase(purchase_id: int, service: PurchaseService = Depends(deps.get_purchase_service)):
    await service.delete(purchase_id)


@router.get(
    "/items/{item_id}/purchases",
    response_model=List[trx_schemas.PurchaseRead],
    summary="품목별 구매 조회",
)
async def read_item_purchases(item_id: int, service: PurchaseService = Depends(deps.get_purchase_service)):
    return await service.list_for_item(item_id)


@router.get(
    "/suppliers/{supplier_id}/purchases",
    response_model=List[trx_schemas.PurchaseRead],
    summary="공급업체별 구매 조회",
)
async def read_supplier_purchases(
    supplier_id: int, service: PurchaseService = Depends(deps.get_purchase_service)
):
    return await service.list_for_supplier(supplier_id)
