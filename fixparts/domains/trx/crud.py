# fixparts/domains/trx/crud.py

"""
'trx' 도메인 (PostgreSQL 'trx' 스키마)의 CRUD 작업을 담당하는 모듈입니다.

구매/판매 모두 외부 참조 번호(송장 번호 / 거래 번호)로 조회하는 `get_by_reference`를
공통 이름으로 제공하여, 매니저가 두 거래 종류를 같은 방식으로 다룰 수 있게 합니다.
"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fixparts.core.crud_base import CRUDBase
from fixparts.domains.trx import models as trx_models
from fixparts.domains.trx import schemas as trx_schemas


# =============================================================================
# 1. 구매 (Purchase) CRUD
# =============================================================================
class CRUDPurchase(CRUDBase[trx_models.Purchase, trx_schemas.PurchaseCreate, trx_schemas.PurchaseUpdate]):
    async def get_by_invoice_number(
        self, db: AsyncSession, *, invoice_number: str
    ) -> Optional[trx_models.Purchase]:
        return await self.get_by_attribute(db, attribute="invoice_number", value=invoice_number)

    async def get_by_reference(self, db: AsyncSession, *, reference: str) -> Optional[trx_models.Purchase]:
        return await self.get_by_invoice_number(db, invoice_number=reference)

    async def get_filtered(
        self,
        db: AsyncSession,
        *,
        filters: Optional[trx_schemas.PurchaseFilter] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[trx_models.Purchase]:
        """필터 조건으로 구매 목록을 최신 구매일 순으로 조회합니다."""
        Purchase = trx_models.Purchase
        query = select(Purchase)
        if filters is not None:
            if filters.supplier_id is not None:
                query = query.where(Purchase.supplier_id == filters.supplier_id)
            if filters.item_id is not None:
                query = query.where(Purchase.item_id == filters.item_id)
            if filters.start_date is not None:
                query = query.where(Purchase.purchase_date >= filters.start_date)
            if filters.end_date is not None:
                query = query.where(Purchase.purchase_date <= filters.end_date)
            if filters.invoice_number:
                query = query.where(Purchase.invoice_number == filters.invoice_number)

        query = query.order_by(Purchase.purchase_date.desc(), Purchase.id.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.exec(query)
        return list(result.all())


# =============================================================================
# 2. 판매 (Sale) CRUD
# =============================================================================
class CRUDSale(CRUDBase[trx_models.Sale, trx_schemas.SaleCreate, trx_schemas.SaleUpdate]):
    async def get_by_transaction_number(
        self, db: AsyncSession, *, transaction_number: str
    ) -> Optional[trx_models.Sale]:
        return await self.get_by_attribute(db, attribute="transaction_number", value=transaction_number)

    async def get_by_reference(self, db: AsyncSession, *, reference: str) -> Optional[trx_models.Sale]:
        return await self.get_by_transaction_number(db, transaction_number=reference)

    async def get_filtered(
        self,
        db: AsyncSession,
        *,
        filters: Optional[trx_schemas.SaleFilter] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[trx_models.Sale]:
        """필터 조건으로 판매 목록을 최신 판매일 순으로 조회합니다."""
        Sale = trx_models.Sale
        query = select(Sale)
        if filters is not None:
            if filters.item_id is not None:
                query = query.where(Sale.item_id == filters.item_id)
            if filters.start_date is not None:
                query = query.where(Sale.sale_date >= filters.start_date)
            if filters.end_date is not None:
                query = query.where(Sale.sale_date <= filters.end_date)
            if filters.customer_name:
                query = query.where(Sale.customer_name.ilike(f"%{filters.customer_name}%"))
            if filters.customer_phone:
                query = query.where(Sale.customer_phone.ilike(f"%{filters.customer_phone}%"))
            if filters.customer_email:
                query = query.where(Sale.customer_email == filters.customer_email)
            if filters.transaction_number:
                query = query.where(Sale.transaction_number == filters.transaction_number)
            if filters.sold_by:
                query = query.where(Sale.sold_by.ilike(f"%{filters.sold_by}%"))

        query = query.order_by(Sale.sale_date.desc(), Sale.id.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.exec(query)
        return list(result.all())


purchase = CRUDPurchase(model=trx_models.Purchase)
sale = CRUDSale(model=trx_models.Sale)
