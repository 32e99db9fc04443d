# fixparts/domains/rpt/schemas.py

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class CountRead(BaseModel):
    count: int = Field(..., description="집계된 건수")


class AmountRead(BaseModel):
    total: Decimal = Field(..., description="집계된 금액")


class DashboardSummary(BaseModel):
    """
    대시보드 상단의 요약 카드 네 개를 한 번에 응답하기 위한 모델입니다.
    """
    low_stock_count: int = Field(..., description="재고가 최소 재고 이하인 활성 품목 수")
    today_sales: Decimal = Field(..., description="오늘(UTC) 판매 합계")
    inventory_count: int = Field(..., description="활성 품목 수")
    vehicle_count: int = Field(..., description="호환성이 등록된 서로 다른 서브모델 수")


class LowStockItem(BaseModel):
    item_id: int
    part_number: str
    item_name: Optional[str] = None
    current_stock: int
    minimum_stock: int


class RecentSale(BaseModel):
    sale_id: int
    sale_date: datetime
    part_number: str
    item_name: Optional[str] = None
    customer_name: Optional[str] = None
    quantity: int
    total_price: Decimal


class TopSeller(BaseModel):
    """조회 기간 동안의 품목별 판매 수량(units)과 매출 합계."""
    item_id: int
    part_number: str
    item_name: Optional[str] = None
    units_sold: int
    revenue: Decimal


class RecentPurchase(BaseModel):
    purchase_id: int
    purchase_date: datetime
    part_number: str
    supplier_name: Optional[str] = None
    quantity: int
    total_cost: Decimal
