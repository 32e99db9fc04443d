# fixparts/domains/rpt/crud.py

"""
대시보드 집계 쿼리 모듈입니다.

'rpt' 도메인은 자체 테이블이 없으므로 CRUDBase를 상속하지 않고,
'inv' / 'ven' / 'trx' 모델에 대한 읽기 전용 집계만 제공합니다.
"""

from datetime import datetime
from decimal import Decimal
from typing import List

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fixparts.domains.inv import models as inv_models
from fixparts.domains.rpt import schemas as rpt_schemas
from fixparts.domains.trx import models as trx_models
from fixparts.domains.ven import models as ven_models


def low_stock_condition():
    Item = inv_models.Item
    return (Item.is_active == True) & (Item.current_stock <= Item.minimum_stock)  # noqa: E712


class CRUDDashboard:
    # --- 요약 카드 ------------------------------------------------------------
    async def count_low_stock(self, db: AsyncSession) -> int:
        statement = select(func.count(inv_models.Item.id)).where(low_stock_condition())
        result = await db.exec(statement)
        return result.one()

    async def count_active_items(self, db: AsyncSession) -> int:
        Item = inv_models.Item
        statement = select(func.count(Item.id)).where(Item.is_active == True)  # noqa: E712
        result = await db.exec(statement)
        return result.one()

    async def count_compatible_vehicles(self, db: AsyncSession) -> int:
        """호환성이 하나 이상 등록된 서로 다른 서브모델의 수."""
        statement = select(func.count(func.distinct(inv_models.Compatibility.submodel_id)))
        result = await db.exec(statement)
        return result.one()

    async def sum_sales_between(self, db: AsyncSession, *, start: datetime, end: datetime) -> Decimal:
        """[start, end) 구간의 판매 합계. 판매가 없으면 0."""
        Sale = trx_models.Sale
        statement = (
            select(func.coalesce(func.sum(Sale.total_price), 0))
            .where(Sale.sale_date >= start)
            .where(Sale.sale_date < end)
        )
        result = await db.exec(statement)
        return Decimal(str(result.one()))

    # --- 목록 ---------------------------------------------------------------------
    async def get_low_stock_items(self, db: AsyncSession, *, limit: int) -> List[rpt_schemas.LowStockItem]:
        Item = inv_models.Item
        statement = (
            select(
                Item.id.label("item_id"),
                Item.part_number,
                Item.item_name,
                Item.current_stock,
                Item.minimum_stock,
            )
            .where(low_stock_condition())
            .order_by(Item.current_stock, Item.part_number)
            .limit(limit)
        )
        result = await db.exec(statement)
        return [rpt_schemas.LowStockItem(**row._asdict()) for row in result.all()]

    async def get_recent_sales(self, db: AsyncSession, *, limit: int) -> List[rpt_schemas.RecentSale]:
        Sale, Item = trx_models.Sale, inv_models.Item
        statement = (
            select(
                Sale.id.label("sale_id"),
                Sale.sale_date,
                Item.part_number,
                Item.item_name,
                Sale.customer_name,
                Sale.quantity,
                Sale.total_price,
            )
            .join(Item, Item.id == Sale.item_id)
            .order_by(Sale.sale_date.desc(), Sale.id.desc())
            .limit(limit)
        )
        result = await db.exec(statement)
        return [rpt_schemas.RecentSale(**row._asdict()) for row in result.all()]

    async def get_top_sellers(
        self, db: AsyncSession, *, since: datetime, limit: int
    ) -> List[rpt_schemas.TopSeller]:
        """
        `since` 이후 판매를 품목별로 묶어 판매 수량이 많은 순으로 조회합니다.
        수량이 같으면 매출이 큰 순, 그다음 부품 번호 순입니다.
        """
        Sale, Item = trx_models.Sale, inv_models.Item
        units_sold = func.sum(Sale.quantity).label("units_sold")
        revenue = func.sum(Sale.total_price).label("revenue")
        statement = (
            select(Item.id.label("item_id"), Item.part_number, Item.item_name, units_sold, revenue)
            .select_from(Sale)
            .join(Item, Item.id == Sale.item_id)
            .where(Sale.sale_date >= since)
            .group_by(Item.id, Item.part_number, Item.item_name)
            .order_by(units_sold.desc(), revenue.desc(), Item.part_number)
            .limit(limit)
        )
        result = await db.exec(statement)
        return [rpt_schemas.TopSeller(**row._asdict()) for row in result.all()]

    async def get_recent_purchases(self, db: AsyncSession, *, limit: int) -> List[rpt_schemas.RecentPurchase]:
        Purchase, Item, Supplier = trx_models.Purchase, inv_models.Item, ven_models.Supplier
        statement = (
            select(
                Purchase.id.label("purchase_id"),
                Purchase.purchase_date,
                Item.part_number,
                Supplier.name.label("supplier_name"),
                Purchase.quantity,
                Purchase.total_cost,
            )
            .join(Item, Item.id == Purchase.item_id)
            .outerjoin(Supplier, Supplier.id == Purchase.supplier_id)
            .order_by(Purchase.purchase_date.desc(), Purchase.id.desc())
            .limit(limit)
        )
        result = await db.exec(statement)
        return [rpt_schemas.RecentPurchase(**row._asdict()) for row in result.all()]


dashboard = CRUDDashboard()
