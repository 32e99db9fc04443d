# fixparts/domains/trx/schemas.py

"""
'trx' 도메인 (구매/판매 거래)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.

합계 금액(total_cost / total_price)은 요청 스키마에 존재하지 않습니다.
합계는 항상 매니저가 수량 x 단가로 계산하며, 클라이언트가 보낸 값은 무시됩니다.
거래 일시를 생략하면 저장 시점의 현재 시각이 사용됩니다.
"""

from typing import Optional
from datetime import datetime
from decimal import Decimal
from sqlmodel import SQLModel, Field


# =============================================================================
# 1. 구매 (Purchase) 스키마
# =============================================================================
class PurchaseBase(SQLModel):
    supplier_id: int
    item_id: int
    quantity: int
    cost_per_unit: Decimal
    invoice_number: Optional[str] = Field(None, max_length=50)
    received_by: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class PurchaseCreate(PurchaseBase):
    purchase_date: Optional[datetime] = None


class PurchaseUpdate(SQLModel):
    purchase_date: Optional[datetime] = None
    supplier_id: Optional[int] = None
    item_id: Optional[int] = None
    quantity: Optional[int] = None
    cost_per_unit: Optional[Decimal] = None
    invoice_number: Optional[str] = None
    received_by: Optional[str] = None
    notes: Optional[str] = None


class PurchaseRead(PurchaseBase):
    id: int
    purchase_date: datetime
    total_cost: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PurchaseFilter(SQLModel):
    supplier_id: Optional[int] = None
    item_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    invoice_number: Optional[str] = None


# =============================================================================
# 2. 판매 (Sale) 스키마
# =============================================================================
class SaleBase(SQLModel):
    item_id: int
    quantity: int
    price_per_unit: Decimal
    transaction_number: Optional[str] = Field(None, max_length=50)
    customer_name: Optional[str] = Field(None, max_length=100)
    customer_phone: Optional[str] = Field(None, max_length=50)
    customer_email: Optional[str] = Field(None, max_length=100)
    sold_by: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class SaleCreate(SaleBase):
    sale_date: Optional[datetime] = None


class SaleUpdate(SQLModel):
    sale_date: Optional[datetime] = None
    item_id: Optional[int] = None
    quantity: Optional[int] = None
    price_per_unit: Optional[Decimal] = None
    transaction_number: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    sold_by: Optional[str] = None
    notes: Optional[str] = None


class SaleRead(SaleBase):
    id: int
    sale_date: datetime
    total_price: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SaleFilter(SQLModel):
    item_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    transaction_number: Optional[str] = None
    sold_by: Optional[str] = None
