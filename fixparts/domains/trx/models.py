# fixparts/domains/trx/models.py

"""
'trx' 도메인 (PostgreSQL 'trx' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

구매(purchases)와 판매(sales) 거래 기록. 합계 금액은 항상 수량 x 단가로 계산되어 저장됩니다.
"""

from typing import Optional
from datetime import datetime, UTC
from decimal import Decimal
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Numeric
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. trx.purchases 테이블 모델
# =============================================================================
class PurchaseBase(SQLModel):
    purchase_date: datetime = Field(sa_column=Column(TIMESTAMP(timezone=True), nullable=False, index=True))
    supplier_id: int = Field(foreign_key="ven.suppliers.id", index=True)
    item_id: int = Field(foreign_key="inv.items.id", index=True)
    quantity: int = Field(description="구매 수량")
    cost_per_unit: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    total_cost: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    invoice_number: Optional[str] = Field(default=None, max_length=50, unique=True, index=True, description="송장 번호 (있을 경우 고유)")
    received_by: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None)


class Purchase(PurchaseBase, table=True):
    __tablename__ = "purchases"
    __table_args__ = {'schema': 'trx'}

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


# =============================================================================
# 2. trx.sales 테이블 모델
# =============================================================================
class SaleBase(SQLModel):
    sale_date: datetime = Field(sa_column=Column(TIMESTAMP(timezone=True), nullable=False, index=True))
    item_id: int = Field(foreign_key="inv.items.id", index=True)
    quantity: int = Field(description="판매 수량")
    price_per_unit: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    total_price: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    transaction_number: Optional[str] = Field(default=None, max_length=50, unique=True, index=True, description="거래 번호 (있을 경우 고유)")
    customer_name: Optional[str] = Field(default=None, max_length=100)
    customer_phone: Optional[str] = Field(default=None, max_length=50)
    customer_email: Optional[str] = Field(default=None, max_length=100, index=True)
    sold_by: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None)


class Sale(SaleBase, table=True):
    __tablename__ = "sales"
    __table_args__ = {'schema': 'trx'}

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )
