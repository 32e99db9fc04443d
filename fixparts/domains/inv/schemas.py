# fixparts/domains/inv/schemas.py

"""
'inv' 도메인 (카테고리, 품목, 차량 호환성)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.

값의 업무 규칙(양수 가격, 비어 있지 않은 부품 번호 등)은 스키마가 아니라
매니저(services.py)가 검증합니다. 수정 스키마는 모든 필드가 선택 사항이며,
매니저가 기존 레코드에 병합한 뒤 전체를 다시 검증합니다.
"""

from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from sqlmodel import SQLModel, Field


# =============================================================================
# 1. 카테고리 (Category) 스키마
# =============================================================================
class CategoryBase(SQLModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = None
    parent_id: Optional[int] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(SQLModel):
    name: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None


class CategoryRead(CategoryBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryDetail(CategoryRead):
    """카테고리와 직속 하위 카테고리 목록."""
    subcategories: List[CategoryRead] = []


class CategoryTreeNode(CategoryRead):
    """
    카테고리 트리의 노드. 조회 시마다 평면 목록에서 다시 구성되며 저장되지 않습니다.
    """
    children: List["CategoryTreeNode"] = []


CategoryTreeNode.model_rebuild()


# =============================================================================
# 2. 품목 (Item) 스키마
# =============================================================================
class ItemBase(SQLModel):
    part_number: str = Field(..., max_length=50)
    item_name: Optional[str] = Field(None, max_length=100)
    description: str
    category_id: Optional[int] = None
    buy_price: Decimal
    sell_price: Decimal
    current_stock: int = 0
    minimum_stock: int = 0
    barcode: Optional[str] = Field(None, max_length=64)
    supplier_id: Optional[int] = None
    location_aisle: Optional[str] = Field(None, max_length=20)
    location_shelf: Optional[str] = Field(None, max_length=20)
    location_bin: Optional[str] = Field(None, max_length=20)
    weight_kg: Optional[float] = None
    dimensions_cm: Optional[str] = Field(None, max_length=50)
    warranty_period: Optional[str] = Field(None, max_length=50)
    image_url: Optional[str] = Field(None, max_length=255)
    is_active: bool = True
    notes: Optional[str] = None


class ItemCreate(ItemBase):
    pass


class ItemUpdate(SQLModel):
    part_number: Optional[str] = None
    item_name: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    buy_price: Optional[Decimal] = None
    sell_price: Optional[Decimal] = None
    current_stock: Optional[int] = None
    minimum_stock: Optional[int] = None
    barcode: Optional[str] = None
    supplier_id: Optional[int] = None
    location_aisle: Optional[str] = None
    location_shelf: Optional[str] = None
    location_bin: Optional[str] = None
    weight_kg: Optional[float] = None
    dimensions_cm: Optional[str] = None
    warranty_period: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class ItemRead(ItemBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ItemReadWithNames(ItemRead):
    """목록 조회용 품목 응답. 카테고리/공급업체가 없으면 이름은 None입니다."""
    category_name: Optional[str] = None
    supplier_name: Optional[str] = None


class ItemFilter(SQLModel):
    """품목 목록 조회 필터. 지정된 조건은 모두 AND로 결합됩니다."""
    category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    part_number: Optional[str] = None
    search: Optional[str] = None
    low_stock: Optional[bool] = None
    make_id: Optional[int] = None
    model_id: Optional[int] = None
    submodel_id: Optional[int] = None
    is_active: Optional[bool] = None


# =============================================================================
# 3. 차량 호환성 (Compatibility) 스키마
# =============================================================================
class CompatibilityCreate(SQLModel):
    item_id: int
    submodel_id: int
    notes: Optional[str] = None


class CompatibilityRead(SQLModel):
    id: int
    item_id: int
    submodel_id: int
    notes: Optional[str] = None
    created_at: datetime
    make_name: Optional[str] = None
    model_name: Optional[str] = None
    submodel_name: Optional[str] = None

    class Config:
        from_attributes = True
