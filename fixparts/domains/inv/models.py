# fixparts/domains/inv/models.py

"""
'inv' 도메인 (PostgreSQL 'inv' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- categories: 자기 참조(parent_id) 계층 구조를 가지는 품목 카테고리
- items: 부품(품목). 부품 번호와 바코드는 고유합니다.
- compatibility: 품목과 차량 서브모델의 다대다 호환성 연결
"""

from typing import Optional
from datetime import datetime, UTC
from decimal import Decimal
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Numeric, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP, REAL


# =============================================================================
# 1. inv.categories 테이블 모델
# =============================================================================
class CategoryBase(SQLModel):
    name: str = Field(max_length=100, description="카테고리 명칭")
    description: Optional[str] = Field(default=None)
    parent_id: Optional[int] = Field(
        default=None,
        foreign_key="inv.categories.id",
        index=True,
        description="상위 카테고리 ID (없으면 루트)",
    )


class Category(CategoryBase, table=True):
    __tablename__ = "categories"
    __table_args__ = {'schema': 'inv'}

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
# 2. inv.items 테이블 모델
# =============================================================================
class ItemBase(SQLModel):
    part_number: str = Field(max_length=50, unique=True, index=True, description="부품 번호 (고유)")
    item_name: Optional[str] = Field(default=None, max_length=100)
    description: str = Field(description="부품 설명")
    category_id: Optional[int] = Field(default=None, foreign_key="inv.categories.id", index=True)
    buy_price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    sell_price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    current_stock: int = Field(default=0)
    minimum_stock: int = Field(default=0)
    barcode: Optional[str] = Field(default=None, max_length=64, unique=True, index=True, description="바코드 (있을 경우 고유)")
    supplier_id: Optional[int] = Field(default=None, foreign_key="ven.suppliers.id", index=True)
    location_aisle: Optional[str] = Field(default=None, max_length=20)
    location_shelf: Optional[str] = Field(default=None, max_length=20)
    location_bin: Optional[str] = Field(default=None, max_length=20)
    weight_kg: Optional[float] = Field(default=None, sa_column=Column(REAL))
    dimensions_cm: Optional[str] = Field(default=None, max_length=50)
    warranty_period: Optional[str] = Field(default=None, max_length=50)
    image_url: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)
    notes: Optional[str] = Field(default=None)


class Item(ItemBase, table=True):
    __tablename__ = "items"
    __table_args__ = {'schema': 'inv'}

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
# 3. inv.compatibility 테이블 모델 (품목 <-> 차량 서브모델 연결)
# =============================================================================
class Compatibility(SQLModel, table=True):
    """
    품목과 차량 서브모델의 호환성 연결 모델.
    (item_id, submodel_id) 쌍은 고유해야 합니다.
    """
    __tablename__ = "compatibility"
    __table_args__ = (
        UniqueConstraint("item_id", "submodel_id", name="uq_compatibility_item_submodel"),
        {'schema': 'inv'},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    item_id: int = Field(foreign_key="inv.items.id", index=True)
    submodel_id: int = Field(foreign_key="veh.vehicle_submodels.id", index=True)
    notes: Optional[str] = Field(default=None)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
